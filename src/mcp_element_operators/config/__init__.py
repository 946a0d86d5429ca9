"""Configuration management for element operators."""

from .environment import (
    get_env_config,
    default_base_url,
    include_tracebacks,
)

__all__ = [
    "get_env_config",
    "default_base_url",
    "include_tracebacks",
]
