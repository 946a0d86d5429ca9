#region Overview
"""
## Element Operators over MCP

Agents hand over an HTML document (or fragment), a CSS selector and an
operator mode; the server returns one string per matched element.

Modes:

* `attribute` - raw attribute value (`@href`); prefix the name with `abs:` for an absolute URL.
* `allText` - whitespace-normalized text of the whole subtree.
* `html` / `outerHtml` - inner / outer markup.
* `tidyText` - readable, 80-column wrapped text with list bullets, paragraph breaks and link targets.
* `text` - the element's own text nodes; `group=N` picks the N-th one, `group=0` joins them.
* `regex` - first match of `pattern` in the outer markup or in `attribute`; `group` selects the capture group.

Results are `null` when a regex does not match, and `""` when an attribute or
text node is simply not there.
"""
#endregion

#region Imports
import logging
from typing import Optional
from mcp.server.fastmcp import FastMCP
#endregion

#region Import from your package __init__.py
import mcp_element_operators as MEO
from mcp_element_operators.decorators import tool_envelope
from mcp_element_operators.tools import extraction
#endregion

#region Logger
logger = logging.getLogger(__name__)
#endregion

#region Logging
logger.warning(f"mcp_element_operators from: {getattr(MEO, '__file__', '<namespace>')}")

#region FastMCP Initialization
mcp = FastMCP("mcp_element_operators")
#endregion

#region Tools -- Extraction
@mcp.tool()
@tool_envelope
async def mcp_element_operators__extract(
    html: str,
    mode: str,
    selector: Optional[str] = None,
    attribute: Optional[str] = None,
    group: int = 0,
    pattern: Optional[str] = None,
    base_url: Optional[str] = None,
    max_items: Optional[int] = None,
) -> str:
    """
    MCP tool: Run an element operator on every element of `html` matching `selector`.

    Args:
        html: HTML document or fragment to read.
        mode: One of "attribute", "allText", "html", "outerHtml", "tidyText", "text", "regex".
        selector: CSS selector for the target elements. Omit to use the whole document.
        attribute: Attribute name for "attribute" mode (e.g. "href", "abs:href");
            optional source attribute for "regex" mode. A regex on an attribute the
            element does not have is reported as an error.
        group: "text" mode: 1-based text node ordinal, 0 joins all direct text nodes.
            "regex" mode: capture group, 0 for the whole match.
        pattern: Python regular expression for "regex" mode.
        base_url: Base for resolving relative links when the document has no <base href>.
        max_items: Maximum number of matched elements to process (0 = no cap).

    Returns:
        JSON: {"ok": true, "operator": "...", "selector": "...", "count": n,
               "truncated": bool, "results": [...]}
    """
    return await extraction.extract_from_html(
        html=html,
        mode=mode,
        selector=selector,
        attribute=attribute,
        group=group,
        pattern=pattern,
        base_url=base_url,
        max_items=max_items,
    )


@mcp.tool()
@tool_envelope
async def mcp_element_operators__describe_operator(
    mode: str,
    attribute: Optional[str] = None,
    group: int = 0,
    pattern: Optional[str] = None,
) -> str:
    """
    MCP tool: Validate an operator configuration and return its canonical rendering.

    Useful to check a regex compiles and its group exists before extracting.

    Returns:
        JSON: {"ok": true, "operator": "regex(@src,'(.*)\\.png',1)", "mode": "regex", "type": "Regex"}
    """
    return await extraction.describe_operator(
        mode=mode,
        attribute=attribute,
        group=group,
        pattern=pattern,
    )
#endregion


if __name__ == "__main__":
    mcp.run()
