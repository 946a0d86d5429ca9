"""Read-only accessors over a BeautifulSoup tree.

Every operator reaches the tree through these functions, so the rest of the
package never touches bs4 internals directly. Nothing here mutates the tree.
"""

import re
from html import escape
from typing import Callable, List, Optional
from urllib.parse import urljoin, urlparse

from bs4.element import NavigableString, PreformattedString, Script, Stylesheet, Tag

from .config import default_base_url
from .constants import BLOCK_TAGS, WHITESPACE_SENSITIVE

_WHITESPACE_RUN = re.compile(r"\s+")
_DATA_TAGS = {"script", "style"}
_ABS_PREFIX = "abs:"


# ============================================================================
# Node kinds
# ============================================================================

def is_element(node) -> bool:
    return isinstance(node, Tag)


def is_text_leaf(node) -> bool:
    """
    Check if a node carries user-readable character data.

    Comments, CDATA, doctypes and processing instructions are strings in bs4
    but are not text. Neither are the payloads of <script> and <style>.
    """
    if not isinstance(node, NavigableString):
        return False
    if isinstance(node, (PreformattedString, Script, Stylesheet)):
        return False
    parent_name = (getattr(node.parent, "name", "") or "").lower()
    return parent_name not in _DATA_TAGS


def leaf_text(node) -> str:
    """Text of a leaf with every whitespace run collapsed to one space. Not trimmed."""
    return _WHITESPACE_RUN.sub(" ", str(node))


def node_name(node) -> str:
    if isinstance(node, Tag):
        return (node.name or "").lower()
    return ""


def child_nodes(node) -> List:
    if isinstance(node, Tag):
        return list(node.contents)
    return []


# ============================================================================
# Attributes
# ============================================================================

def _lookup(el, name: str) -> Optional[str]:
    attrs = getattr(el, "attrs", None) or {}
    if name in attrs:
        val = attrs[name]
    else:
        lowered = name.lower()
        for key, candidate in attrs.items():
            if key.lower() == lowered:
                val = candidate
                break
        else:
            return None
    # bs4 keeps multi-valued attributes (class, rel, ...) as lists
    if isinstance(val, (list, tuple)):
        return " ".join(map(str, val))
    return str(val)


def attribute(el, name: str, base_url: Optional[str] = None) -> str:
    """
    Get an attribute value from an element.

    Args:
        el: bs4 Tag to read from
        name: Attribute name. An "abs:" prefix returns the absolute URL of the
            attribute instead of its raw value.
        base_url: Base used to resolve "abs:" lookups

    Returns:
        str: The value, or "" when the element does not define the attribute
    """
    if not isinstance(el, Tag):
        return ""
    if name.lower().startswith(_ABS_PREFIX):
        return abs_url(el, name[len(_ABS_PREFIX):], base_url=base_url)
    val = _lookup(el, name)
    return "" if val is None else val


def has_attribute(el, name: str, base_url: Optional[str] = None) -> bool:
    """True when the element defines the attribute, even with an empty value."""
    if not isinstance(el, Tag):
        return False
    if name.lower().startswith(_ABS_PREFIX):
        key = name[len(_ABS_PREFIX):]
        return _lookup(el, key) is not None and bool(abs_url(el, key, base_url=base_url))
    return _lookup(el, name) is not None


def describe_element(el) -> str:
    """Render an element's start tag, used to identify it in error messages."""
    if not isinstance(el, Tag):
        return repr(str(el))
    attrs = "".join(f' {key}="{escape(_lookup(el, key), quote=True)}"' for key in (el.attrs or {}))
    return f"<{el.name}{attrs}>"


# ============================================================================
# URLs
# ============================================================================

def _has_scheme(url: str) -> bool:
    return bool(urlparse(url).scheme)


def document_base_url(node) -> Optional[str]:
    """The href of the first <base> element in the document that holds node."""
    root = node
    while getattr(root, "parent", None) is not None:
        root = root.parent
    if not isinstance(root, Tag):
        return None
    base = root.find("base", href=True)
    if base is None:
        return None
    return _lookup(base, "href") or None


def resolve_base_url(node, base_url: Optional[str] = None) -> Optional[str]:
    """
    Pick the base URL for link resolution.

    Order: the explicit base_url, the document's <base href>, then the
    configured MCP_ELEMENT_OPS_BASE_URL. Candidates without a scheme are skipped.
    """
    for candidate in (base_url, document_base_url(node), default_base_url()):
        if candidate and _has_scheme(candidate.strip()):
            return candidate.strip()
    return None


def abs_url(el, attribute_name: str, base_url: Optional[str] = None) -> str:
    """
    Resolve an URL-valued attribute against the document base.

    Returns:
        str: Absolute URL, or "" if the attribute is empty or no base is known
            for a relative value
    """
    value = (_lookup(el, attribute_name) or "").strip() if isinstance(el, Tag) else ""
    if not value:
        return ""
    if _has_scheme(value):
        return value
    base = resolve_base_url(el, base_url)
    if not base:
        return ""
    return urljoin(base, value)


# ============================================================================
# Serialization
# ============================================================================

def inner_html(el) -> str:
    if isinstance(el, Tag):
        return el.decode_contents()
    return str(el)


def outer_html(el) -> str:
    if isinstance(el, Tag):
        return el.decode()
    return str(el)


# ============================================================================
# Traversal
# ============================================================================

def traverse(root, head: Callable, tail: Callable) -> None:
    """
    Depth-first walk calling head(node, depth) on entry and tail(node, depth)
    once all of the node's children were visited.

    Iterative, so deeply nested documents do not hit the recursion limit.
    The tree must not be modified while it is walked.
    """
    node = root
    depth = 0
    while node is not None:
        head(node, depth)
        contents = node.contents if isinstance(node, Tag) else None
        if contents:
            node = contents[0]
            depth += 1
            continue
        while node.next_sibling is None and depth > 0:
            tail(node, depth)
            node = node.parent
            depth -= 1
        tail(node, depth)
        if node is root:
            break
        node = node.next_sibling


def _preserves_whitespace(node) -> bool:
    parent = getattr(node, "parent", None)
    while parent is not None:
        if node_name(parent) in WHITESPACE_SENSITIVE:
            return True
        parent = parent.parent
    return False


def flattened_text(el) -> str:
    """
    Plain text of a subtree, the way a reader would copy it.

    Whitespace runs collapse to one space, block elements and <br> are
    separated by a space, and the result is trimmed. Text under <pre>,
    <textarea>, <title> and <plaintext> is kept verbatim.
    """
    if not isinstance(el, Tag):
        return leaf_text(el).strip() if is_text_leaf(el) else ""

    parts: List[str] = []

    def ends_with_space() -> bool:
        return bool(parts) and parts[-1][-1:] in (" ", "\n", "\t", "\r", "\f")

    def head(node, depth):
        if is_text_leaf(node):
            text = str(node)
            if not _preserves_whitespace(node):
                text = _WHITESPACE_RUN.sub(" ", text)
                if not parts or ends_with_space():
                    text = text.lstrip(" ")
            if text:
                parts.append(text)
        elif isinstance(node, Tag):
            name = node_name(node)
            if parts and (name in BLOCK_TAGS or name == "br") and not ends_with_space():
                parts.append(" ")

    def tail(node, depth):
        if isinstance(node, Tag) and node_name(node) in BLOCK_TAGS:
            if is_text_leaf(node.next_sibling) and not ends_with_space():
                parts.append(" ")

    traverse(el, head, tail)
    return "".join(parts).strip()


__all__ = [
    "is_element",
    "is_text_leaf",
    "leaf_text",
    "node_name",
    "child_nodes",
    "attribute",
    "has_attribute",
    "describe_element",
    "document_base_url",
    "resolve_base_url",
    "abs_url",
    "inner_html",
    "outer_html",
    "traverse",
    "flattened_text",
]
