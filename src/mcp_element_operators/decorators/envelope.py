# mcp_element_operators/decorators/envelope.py

import json
import asyncio
import inspect
import datetime
import functools
import traceback
from typing import Any, Callable

from ..config import include_tracebacks
from ..errors import InvalidPatternError, MissingAttributeError, OperatorError

import logging
logger = logging.getLogger(__name__)


__all__ = [
    "tool_envelope",
]


def _normalize(value: Any) -> str:
    if value is None:
        return ""
    if isinstance(value, str):
        return value
    if isinstance(value, dict):
        value = {"ok": True, **value}
    return json.dumps(value, ensure_ascii=False, default=str)


def _error_details(err: Exception) -> dict:
    details = {
        "type": err.__class__.__name__,
        "message": str(err),
    }
    if isinstance(err, MissingAttributeError):
        details["attribute"] = err.attribute
        details["element"] = err.element
    elif isinstance(err, InvalidPatternError):
        details["pattern"] = getattr(err.pattern, "pattern", err.pattern)
    return details


def _error_payload(err: Exception) -> str:
    # Operator errors are caller mistakes; anything else is unexpected.
    if isinstance(err, OperatorError):
        logger.debug(f"Tool rejected request: {err}")
    else:
        logger.warning(f"Tool failed: {err.__class__.__name__}: {err}")

    payload = {
        "ok": False,
        "summary": f"{err.__class__.__name__}: {err}",
        "error": _error_details(err),
        "timestamp": datetime.datetime.now(datetime.timezone.utc).isoformat(),
    }
    if include_tracebacks():
        payload["error"]["traceback"] = traceback.format_exc()
    return json.dumps(payload, ensure_ascii=False)


def tool_envelope(func: Callable):
    """
    Decorator for MCP tool functions:
      - Works with both async and sync callables.
      - On success: strings pass through; dicts get "ok": true and are
        serialized to JSON, other values are serialized as they are.
      - On error: returns a uniform JSON string with a summary, the error
        type and message, operator specifics (missing attribute, bad pattern)
        and an optional traceback.
    Environment:
      - Set MCP_ELEMENT_OPS_TOOL_ERRORS_TRACEBACK=0 to suppress tracebacks.
    """
    if inspect.iscoroutinefunction(func):
        @functools.wraps(func)
        async def wrapper(*args, **kwargs):
            try:
                result = await func(*args, **kwargs)
            except asyncio.CancelledError:
                raise
            except Exception as e:
                return _error_payload(e)
            return _normalize(result)
        return wrapper
    else:
        @functools.wraps(func)
        def wrapper(*args, **kwargs):
            try:
                result = func(*args, **kwargs)
            except Exception as e:
                return _error_payload(e)
            return _normalize(result)
        return wrapper
