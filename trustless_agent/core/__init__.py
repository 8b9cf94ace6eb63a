"""
Core module containing configuration, constants and error types.

This module provides:
    - config: Application settings and environment variable management
    - errors: Exception hierarchy and JSON error rendering
"""

from trustless_agent.core.config import Settings, get_settings

__all__ = ["Settings", "get_settings"]
