"""
API module containing FastAPI routes and endpoints.

This module provides the main API router that includes the pricing and
wallet sub-routers. Routes are mounted at the root path.
"""

from fastapi import APIRouter

from trustless_agent.api.routes import pricing, wallet

router = APIRouter()

router.include_router(pricing.router, tags=["Pricing"])
router.include_router(wallet.router, tags=["Wallet"])

__all__ = ["router"]
