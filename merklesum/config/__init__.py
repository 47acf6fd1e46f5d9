"""
Runtime Configuration Module

Provides configuration loading and management for merklesum.
"""

from .runtime import (
    RuntimeConfig,
    BuildConfig,
    LoggingConfig,
    get_default_config,
    set_default_config,
)

__all__ = [
    "RuntimeConfig",
    "BuildConfig",
    "LoggingConfig",
    "get_default_config",
    "set_default_config",
]
