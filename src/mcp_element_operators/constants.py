"""
Global constants and configuration defaults.
No dependencies - safe to import from anywhere.
"""

# ============================================================================
# Tidy Text Configuration
# ============================================================================

TIDY_TEXT_MAX_WIDTH = 80
"""Column budget used by the tidy-text word wrap."""

LIST_ITEM_TAGS = frozenset({"li"})
"""Tags rendered as a bullet line when entered."""

DEFINITION_TERM_TAGS = frozenset({"dt"})
"""Tags indented by two spaces when entered."""

BLOCK_START_TAGS = frozenset({"p", "h1", "h2", "h3", "h4", "h5", "tr"})
"""Tags that start a new line when entered."""

LINE_BREAK_TAGS = frozenset({"br", "dd", "dt", "p", "h1", "h2", "h3", "h4", "h5"})
"""Tags that emit a newline once all of their children were visited."""

LINK_TAGS = frozenset({"a"})
"""Tags annotated with their absolute href on exit."""


# ============================================================================
# Flattened Text Configuration
# ============================================================================

BLOCK_TAGS = frozenset({
    "address", "article", "aside", "blockquote", "body", "caption", "center",
    "dd", "details", "dialog", "dir", "div", "dl", "dt", "fieldset",
    "figcaption", "figure", "footer", "form", "h1", "h2", "h3", "h4", "h5",
    "h6", "head", "header", "hgroup", "hr", "html", "legend", "li", "main",
    "menu", "nav", "ol", "optgroup", "option", "p", "pre", "section",
    "summary", "table", "tbody", "td", "tfoot", "th", "thead", "title", "tr",
    "ul",
})
"""Elements separated by whitespace in the flattened text view."""

WHITESPACE_SENSITIVE = frozenset({"pre", "textarea", "title", "plaintext"})
"""Text inside these elements keeps its whitespace in the flattened text view."""


# ============================================================================
# MCP Tool Defaults
# ============================================================================

DEFAULT_PARSER = "html.parser"
"""bs4 tree builder used when MCP_ELEMENT_OPS_PARSER is not set."""

SUPPORTED_PARSERS = ("html.parser", "lxml", "html5lib", "xml", "lxml-xml")
"""Tree builder names accepted by the configuration."""

DEFAULT_MAX_ITEMS = 200
"""Maximum number of selected nodes a single tool call processes."""


__all__ = [
    "TIDY_TEXT_MAX_WIDTH",
    "LIST_ITEM_TAGS",
    "DEFINITION_TERM_TAGS",
    "BLOCK_START_TAGS",
    "LINE_BREAK_TAGS",
    "LINK_TAGS",
    "BLOCK_TAGS",
    "WHITESPACE_SENSITIVE",
    "DEFAULT_PARSER",
    "SUPPORTED_PARSERS",
    "DEFAULT_MAX_ITEMS",
]
