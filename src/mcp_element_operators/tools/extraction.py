"""Extraction tool implementations."""

from typing import Optional

from bs4 import BeautifulSoup

from ..config import get_env_config
from ..operators import build_operator, canonical_mode

import logging
logger = logging.getLogger(__name__)


async def extract_from_html(
    html: str,
    mode: str,
    selector: Optional[str] = None,
    attribute: Optional[str] = None,
    group: int = 0,
    pattern: Optional[str] = None,
    base_url: Optional[str] = None,
    max_items: Optional[int] = None,
) -> dict:
    """
    Apply an element operator to every element matching a CSS selector.

    Args:
        html: The HTML document or fragment
        mode: Operator mode ("attribute", "allText", "html", "outerHtml",
            "tidyText", "text", "regex")
        selector: CSS selector choosing the elements. Omit it to run the
            operator on the whole document.
        attribute: Attribute for "attribute" mode; optional source attribute for "regex"
        group: Text ordinal for "text" mode, capture group for "regex"
        pattern: Regular expression for "regex" mode
        base_url: Base for resolving relative links ("tidyText", "abs:" attributes)
        max_items: Cap on processed elements. Defaults to MCP_ELEMENT_OPS_MAX_ITEMS; 0 means no cap.

    Returns:
        dict with keys:
            operator: describe() of the operator that ran
            selector: the selector used, or None
            count: number of results
            truncated: True if more elements matched than were processed
            results: one entry per element; None where the operator produced no value
    """
    config = get_env_config()
    op = build_operator(mode, attribute=attribute, group=group, pattern=pattern, base_url=base_url)

    soup = BeautifulSoup(html or "", config["parser"])
    nodes = soup.select(selector) if selector else [soup]

    limit = config["max_items"] if max_items is None else max_items
    if limit < 0:
        raise ValueError(f"max_items must be non-negative; got {limit}.")
    truncated = bool(limit) and len(nodes) > limit
    if truncated:
        nodes = nodes[:limit]

    results = [op.extract(node) for node in nodes]
    logger.debug(f"{op} on selector={selector!r}: {len(results)} result(s), truncated={truncated}")

    return {
        "operator": str(op),
        "selector": selector,
        "count": len(results),
        "truncated": truncated,
        "results": results,
    }


async def describe_operator(
    mode: str,
    attribute: Optional[str] = None,
    group: int = 0,
    pattern: Optional[str] = None,
) -> dict:
    """
    Validate an operator configuration without running it.

    Returns:
        dict with keys:
            operator: describe() of the configured operator
            mode: canonical mode name ("tidy_text" -> "tidyText")
            type: operator class name
    """
    op = build_operator(mode, attribute=attribute, group=group, pattern=pattern)
    return {
        "operator": str(op),
        "mode": canonical_mode(mode),
        "type": type(op).__name__,
    }


__all__ = ['extract_from_html', 'describe_operator']
