"""Element operators: turn a matched element into a string result.

Each operator is an immutable value configured once and applied to any number
of elements. extract() returns "" for data that simply is not there and None
only where "no value" has to be told apart from an empty one (regex misses).
"""

import re
from abc import ABC, abstractmethod
from dataclasses import dataclass, field
from typing import Optional, Pattern, Union

from . import dom
from .errors import InvalidOperatorError, InvalidPatternError, MissingAttributeError
from .formatting import tidy_text

import logging
logger = logging.getLogger(__name__)


class ElementOperator(ABC):
    """Base for the closed set of operators below."""

    @abstractmethod
    def extract(self, element) -> Optional[str]:
        ...

    @abstractmethod
    def describe(self) -> str:
        """Stable, human-readable rendering of the configuration, for diagnostics."""

    def __str__(self) -> str:
        return self.describe()


@dataclass(frozen=True)
class AttributeGetter(ElementOperator):
    attribute: str
    base_url: Optional[str] = field(default=None, compare=False)

    def __post_init__(self):
        if not self.attribute or not self.attribute.strip():
            raise InvalidOperatorError("Attribute name must not be empty.")

    def extract(self, element) -> str:
        return dom.attribute(element, self.attribute, base_url=self.base_url)

    def describe(self) -> str:
        return f"@{self.attribute}"


@dataclass(frozen=True)
class AllText(ElementOperator):

    def extract(self, element) -> str:
        return dom.flattened_text(element)

    def describe(self) -> str:
        return "allText()"


@dataclass(frozen=True)
class Html(ElementOperator):

    def extract(self, element) -> str:
        return dom.inner_html(element)

    def describe(self) -> str:
        return "html()"


@dataclass(frozen=True)
class OuterHtml(ElementOperator):

    def extract(self, element) -> str:
        return dom.outer_html(element)

    def describe(self) -> str:
        return "outerHtml()"


@dataclass(frozen=True)
class TidyText(ElementOperator):
    base_url: Optional[str] = field(default=None, compare=False)

    def extract(self, element) -> str:
        return tidy_text(element, base_url=self.base_url)

    def describe(self) -> str:
        return "tidyText()"


@dataclass(frozen=True)
class GroupedText(ElementOperator):
    """
    Text of the element's own text children, ignoring nested elements.

    group=0 joins all of them; group=N picks the N-th one (1-based) and
    yields "" when there are fewer than N.
    """

    group: int = 0

    def __post_init__(self):
        if self.group < 0:
            raise InvalidOperatorError(f"Text group must be non-negative; got {self.group}.")

    def extract(self, element) -> str:
        index = 0
        accum = []
        for node in dom.child_nodes(element):
            if not dom.is_text_leaf(node):
                continue
            if self.group == 0:
                accum.append(dom.leaf_text(node))
                continue
            index += 1
            if index == self.group:
                return dom.leaf_text(node)
        return "".join(accum)

    def describe(self) -> str:
        return f"text({self.group})"


@dataclass(frozen=True)
class Regex(ElementOperator):
    """
    First regex match in the element's outer HTML, or in one of its attributes.

    usage:
        Regex(r"\\d+")
        Regex(r"(\\d+)px", attribute="style", group=1)
    """

    pattern: Union[str, Pattern[str]]
    attribute: Optional[str] = None
    group: int = 0

    def __post_init__(self):
        if isinstance(self.pattern, str):
            try:
                compiled = re.compile(self.pattern)
            except re.error as e:
                raise InvalidPatternError(self.pattern, f"Invalid regex '{self.pattern}': {e}") from e
            object.__setattr__(self, "pattern", compiled)
        elif not isinstance(self.pattern, re.Pattern) or not isinstance(self.pattern.pattern, str):
            # bytes patterns cannot search the str sources extract() reads
            raise InvalidPatternError(self.pattern, f"Expected a str regex or compiled str pattern; got {self.pattern!r}.")

        if self.group < 0 or self.group > self.pattern.groups:
            raise InvalidPatternError(
                self.pattern.pattern,
                f"Group {self.group} is out of range for '{self.pattern.pattern}' ({self.pattern.groups} group(s)).",
            )
        if self.attribute is not None and not self.attribute.strip():
            raise InvalidOperatorError("Attribute name must not be empty.")

    def source(self, element) -> str:
        if self.attribute is None:
            return dom.outer_html(element)
        if not dom.has_attribute(element, self.attribute):
            raise MissingAttributeError(self.attribute, dom.describe_element(element))
        return dom.attribute(element, self.attribute)

    def extract(self, element) -> Optional[str]:
        match = self.pattern.search(self.source(element))
        if match:
            return match.group(self.group)
        return None

    def describe(self) -> str:
        return "regex({}'{}'{})".format(
            f"@{self.attribute}," if self.attribute is not None else "",
            self.pattern.pattern,
            f",{self.group}" if self.group != 0 else "",
        )


_MODES = {
    "attribute": "attribute",
    "alltext": "allText",
    "all_text": "allText",
    "html": "html",
    "outerhtml": "outerHtml",
    "outer_html": "outerHtml",
    "tidytext": "tidyText",
    "tidy_text": "tidyText",
    "text": "text",
    "regex": "regex",
}

MODES = tuple(sorted(set(_MODES.values())))


def canonical_mode(mode: str) -> str:
    """Canonical spelling of a mode name, e.g. "tidy_text" -> "tidyText"."""
    canonical = _MODES.get((mode or "").strip().lower())
    if canonical is None:
        raise InvalidOperatorError(f"Unknown mode '{mode}'. Expected one of: {', '.join(MODES)}.")
    return canonical


def build_operator(
    mode: str,
    attribute: Optional[str] = None,
    group: int = 0,
    pattern: Optional[str] = None,
    base_url: Optional[str] = None,
) -> ElementOperator:
    """
    Build an operator from already separated configuration values.

    Args:
        mode: One of "attribute", "allText", "html", "outerHtml", "tidyText",
            "text", "regex" (case-insensitive; snake_case spellings accepted)
        attribute: Attribute name for "attribute", optional source attribute for "regex"
        group: Text ordinal for "text", capture group for "regex"
        pattern: Regular expression for "regex"
        base_url: Base for link resolution ("tidyText" and "abs:" attributes)

    Returns:
        ElementOperator: The configured operator

    Raises:
        InvalidOperatorError: Unknown mode or parameters the mode cannot use
    """
    canonical = canonical_mode(mode)

    if canonical == "attribute":
        if not attribute:
            raise InvalidOperatorError("Mode 'attribute' requires an attribute name.")
        op = AttributeGetter(attribute, base_url=base_url)
    elif canonical == "allText":
        op = AllText()
    elif canonical == "html":
        op = Html()
    elif canonical == "outerHtml":
        op = OuterHtml()
    elif canonical == "tidyText":
        op = TidyText(base_url=base_url)
    elif canonical == "text":
        op = GroupedText(group)
    else:
        if pattern is None:
            raise InvalidOperatorError("Mode 'regex' requires a pattern.")
        op = Regex(pattern, attribute=attribute, group=group)

    logger.debug(f"Built operator {op} for mode={mode}")
    return op


__all__ = [
    "ElementOperator",
    "AttributeGetter",
    "AllText",
    "Html",
    "OuterHtml",
    "TidyText",
    "GroupedText",
    "Regex",
    "MODES",
    "canonical_mode",
    "build_operator",
]
