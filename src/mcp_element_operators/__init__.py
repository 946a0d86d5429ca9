"""
Element operators for BeautifulSoup trees.

An operator turns a matched element into a string: an attribute, the
flattened or tidied text, the inner or outer markup, one of the element's own
text nodes, or a regex capture. A query engine decides which operator to
attach to which elements; this package only implements the operators.

    >>> from bs4 import BeautifulSoup
    >>> from mcp_element_operators import Regex
    >>> img = BeautifulSoup('<img src="/a/logo.png">', "html.parser").img
    >>> Regex(r"/(\\w+)\\.png", attribute="src", group=1).extract(img)
    'logo'
"""

from .errors import (
    OperatorError,
    InvalidOperatorError,
    InvalidPatternError,
    MissingAttributeError,
)
from .formatting import FormattingVisitor, tidy_text
from .operators import (
    ElementOperator,
    AttributeGetter,
    AllText,
    Html,
    OuterHtml,
    TidyText,
    GroupedText,
    Regex,
    MODES,
    build_operator,
)

__all__ = [
    "OperatorError",
    "InvalidOperatorError",
    "InvalidPatternError",
    "MissingAttributeError",
    "FormattingVisitor",
    "tidy_text",
    "ElementOperator",
    "AttributeGetter",
    "AllText",
    "Html",
    "OuterHtml",
    "TidyText",
    "GroupedText",
    "Regex",
    "MODES",
    "build_operator",
]
