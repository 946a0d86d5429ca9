"""Tidy text rendering: readable, word-wrapped prose from a markup subtree."""

import re
from typing import List, Optional

from . import dom
from .constants import (
    BLOCK_START_TAGS,
    DEFINITION_TERM_TAGS,
    LINE_BREAK_TAGS,
    LINK_TAGS,
    LIST_ITEM_TAGS,
    TIDY_TEXT_MAX_WIDTH,
)

_WORD_SEPARATOR = re.compile(r"\s+")


class FormattingVisitor:
    """
    Accumulates tidy text while the tree is walked.

    One instance renders one subtree: create it, hand its head/tail methods
    to dom.traverse, then read text(). Instances are never reused.
    """

    def __init__(self, base_url: Optional[str] = None, max_width: int = TIDY_TEXT_MAX_WIDTH):
        self.base_url = base_url
        self.max_width = max_width
        self.width = 0
        self._accum: List[str] = []
        self._last_char = ""

    # hit when the node is first seen
    def head(self, node, depth: int) -> None:
        if dom.is_text_leaf(node):
            self.append(dom.leaf_text(node))
            return
        name = dom.node_name(node)
        if name in LIST_ITEM_TAGS:
            self.append("\n * ")
        elif name in DEFINITION_TERM_TAGS:
            self.append("  ")
        elif name in BLOCK_START_TAGS:
            self.append("\n")

    # hit when all of the node's children (if any) have been visited
    def tail(self, node, depth: int) -> None:
        name = dom.node_name(node)
        if name in LINE_BREAK_TAGS:
            self.append("\n")
        elif name in LINK_TAGS:
            self.append(f" <{dom.abs_url(node, 'href', base_url=self.base_url)}>")

    def _write(self, text: str) -> None:
        if text:
            self._accum.append(text)
            self._last_char = text[-1]

    def append(self, text: str) -> None:
        """Append a fragment, wrapping on whitespace once the line would pass max_width."""
        if text.startswith("\n"):
            self.width = 0  # only the structural fragments above start with a newline
        if text == " " and (not self._accum or self._last_char in (" ", "\n")):
            return  # don't accumulate runs of separator spaces

        if len(text) + self.width > self.max_width:
            words = _WORD_SEPARATOR.split(text)
            while words and not words[-1]:
                words.pop()
            for i, word in enumerate(words):
                if i < len(words) - 1:
                    word = word + " "
                if len(word) + self.width > self.max_width:
                    self._write("\n")
                    self._write(word)
                    self.width = len(word)
                else:
                    self._write(word)
                    self.width += len(word)
        else:
            self._write(text)
            self.width += len(text)

    def text(self) -> str:
        return "".join(self._accum)

    __str__ = text


def tidy_text(node, base_url: Optional[str] = None) -> str:
    """
    Render a subtree as wrapped, human-readable text.

    List items become " * " bullets, paragraphs and headings start new lines,
    and links are followed by their absolute href in angle brackets.

    Args:
        node: Root of the subtree (bs4 Tag)
        base_url: Base for link resolution; falls back to the document's
            <base href> and then MCP_ELEMENT_OPS_BASE_URL

    Returns:
        str: The rendered text
    """
    formatter = FormattingVisitor(base_url=dom.resolve_base_url(node, base_url))
    dom.traverse(node, formatter.head, formatter.tail)
    return formatter.text()


__all__ = ["FormattingVisitor", "tidy_text"]
