"""Environment configuration and validation."""

import os
from typing import Optional

from dotenv import load_dotenv, find_dotenv

from ..constants import DEFAULT_MAX_ITEMS, DEFAULT_PARSER, SUPPORTED_PARSERS

import logging
logger = logging.getLogger(__name__)

load_dotenv(find_dotenv(filename=".env", usecwd=True))


def get_env_config() -> dict:
    """
    Read environment variables and validate them.

    Optional:   MCP_ELEMENT_OPS_PARSER (default 'html.parser')
                MCP_ELEMENT_OPS_BASE_URL
                MCP_ELEMENT_OPS_MAX_ITEMS (default 200, 0 disables the cap)

    The parser must be one of the bs4 tree builders listed in SUPPORTED_PARSERS.
    The base URL is used to resolve relative links when the document carries
    no <base href> and the caller does not pass one explicitly.
    """
    parser = (os.getenv("MCP_ELEMENT_OPS_PARSER") or "").strip() or DEFAULT_PARSER
    if parser not in SUPPORTED_PARSERS:
        raise EnvironmentError(
            f"MCP_ELEMENT_OPS_PARSER must be one of {', '.join(SUPPORTED_PARSERS)}; got '{parser}'."
        )

    base_url = default_base_url()

    max_items_env = (os.getenv("MCP_ELEMENT_OPS_MAX_ITEMS") or "").strip()
    if not max_items_env:
        max_items = DEFAULT_MAX_ITEMS
    elif max_items_env.isdigit():
        max_items = int(max_items_env)
    else:
        raise EnvironmentError(
            f"MCP_ELEMENT_OPS_MAX_ITEMS must be a non-negative integer; got '{max_items_env}'."
        )

    return {
        "parser": parser,
        "base_url": base_url,
        "max_items": max_items,
    }


def default_base_url() -> Optional[str]:
    """Configured fallback base URL, or None when unset."""
    return (os.getenv("MCP_ELEMENT_OPS_BASE_URL") or "").strip() or None


def include_tracebacks() -> bool:
    """Whether tool error payloads carry a traceback. Set MCP_ELEMENT_OPS_TOOL_ERRORS_TRACEBACK=0 to hide them."""
    return os.getenv("MCP_ELEMENT_OPS_TOOL_ERRORS_TRACEBACK", "1") not in ("0", "false", "False")
