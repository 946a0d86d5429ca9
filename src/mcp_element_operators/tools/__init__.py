"""MCP tool implementations.

Plain async functions returning dicts; the server in __main__ wraps them with
tool_envelope and registers them with FastMCP.
"""

from . import extraction

__all__ = ["extraction"]
