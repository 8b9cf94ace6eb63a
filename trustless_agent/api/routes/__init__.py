"""
API routes package.

This package contains the FastAPI route modules organized by domain.
"""

from . import pricing, wallet

__all__ = ["pricing", "wallet"]
