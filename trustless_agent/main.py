"""
Trustless Agent Pay - priced and settled agent-initiated payments

Main FastAPI application entry point with OpenAPI documentation.
"""

import logging
from contextlib import asynccontextmanager
from typing import Any

from fastapi import FastAPI
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from starlette.exceptions import HTTPException as StarletteHTTPException

from trustless_agent.api import router as api_router
from trustless_agent.core.config import get_settings
from trustless_agent.core.errors import (
    AgentPayError,
    agent_pay_exception_handler,
    general_exception_handler,
    http_exception_handler,
    validation_exception_handler,
)

settings = get_settings()

# Configure logging
logging.basicConfig(
    level=getattr(logging, settings.log_level.upper(), logging.INFO),
    format=settings.log_format,
)
logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    """
    Application lifespan handler for startup and shutdown events.
    """
    logger.info(f"Starting {settings.app_name} v{settings.app_version}")
    logger.info(f"Environment: {settings.environment}")
    logger.info(f"Inference model: {settings.gemini_model}")
    logger.info(f"Wallet blockchain: {settings.circle_blockchain or 'not configured'}")
    yield
    logger.info("Shutting down...")


# Create FastAPI application
app = FastAPI(
    title=settings.app_name,
    description="""
## Agent-initiated payments with server-enforced pricing

A language model classifies each request as LOW, MEDIUM or HIGH complexity.
The server maps the class to a fixed USDC price and, on `/run`, pays the
merchant wallet from the agent's custodial wallet.

- `POST /quote`: price only
- `POST /run`: price and settle
- `GET /balance`, `/wallet`, `/wallets/balances`, `/status/{id}`: wallet reads
    """,
    version=settings.app_version,
    docs_url="/docs",
    redoc_url="/redoc",
    openapi_url="/openapi.json",
    lifespan=lifespan,
)
app.state.settings = settings

# Add CORS middleware
app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.cors_origins,
    allow_methods=["*"],
    allow_headers=["*"],
)

# Global exception handlers
app.add_exception_handler(Exception, general_exception_handler)
app.add_exception_handler(StarletteHTTPException, http_exception_handler)
app.add_exception_handler(RequestValidationError, validation_exception_handler)
app.add_exception_handler(AgentPayError, agent_pay_exception_handler)


# Health check endpoint
@app.get(
    "/health",
    tags=["Health"],
    summary="Health check",
    response_description="Application health status",
)
async def health_check() -> dict[str, Any]:
    """
    Check application health status.

    Returns basic health information including version and environment.
    """
    return {
        "ok": True,
        "status": "healthy",
        "version": settings.app_version,
        "environment": settings.environment,
    }


app.include_router(api_router)


if __name__ == "__main__":
    import uvicorn

    uvicorn.run(
        "trustless_agent.main:app",
        host=settings.host,
        port=settings.port,
        reload=settings.debug,
    )
