"""
Pytest configuration and shared fixtures.

This module provides settings that never read a .env file, fake inference
and wallet collaborators, and an HTTP client wired to them through
``app.dependency_overrides``.
"""

import json
from typing import Any, AsyncGenerator
from unittest.mock import AsyncMock

import pytest
from httpx import ASGITransport, AsyncClient

from trustless_agent.api.deps import get_inference_client, get_wallet_provider
from trustless_agent.core.config import Settings, get_settings
from trustless_agent.main import app
from trustless_agent.schemas.wallet import TokenBalance, TransferResult
from trustless_agent.services.circle_client import WalletProvider
from trustless_agent.services.inference_client import InferenceClient

AGENT_WALLET_ID = "agent-wallet-1"
MERCHANT_WALLET_ID = "merchant-wallet-1"
MERCHANT_ADDRESS = "0x1234567890123456789012345678901234567890"
USDC_TOKEN_ID = "usdc-token-arc"
EXPLORER_TX_BASE = "https://testnet.arcscan.app/tx/"


def make_settings(**overrides: Any) -> Settings:
    """Build Settings from explicit values only."""
    values: dict[str, Any] = {
        "gemini_api_key": "test-gemini-key",
        "circle_api_key": "test-circle-key",
        "circle_entity_secret": "ab" * 32,
        "circle_blockchain": "ARC-TESTNET",
        "circle_agent_wallet_id": AGENT_WALLET_ID,
        "circle_merchant_wallet_id": MERCHANT_WALLET_ID,
        "merchant_wallet_address": MERCHANT_ADDRESS,
        "explorer_tx_base": EXPLORER_TX_BASE,
    }
    values.update(overrides)
    return Settings(_env_file=None, **values)


def model_reply(complexity: str, **extra: Any) -> str:
    """JSON reply in the shape the prompt asks for."""
    body = {
        "complexity": complexity,
        "payment_required": complexity != "LOW",
        "amount_usdc": {"LOW": 0, "MEDIUM": 0.05, "HIGH": 0.1}.get(complexity, 0),
        "reason": f"{complexity} request",
        "analysis": "Short analysis.",
    }
    body.update(extra)
    return json.dumps(body)


def usdc_balance(token_id: str = USDC_TOKEN_ID, blockchain: str = "ARC-TESTNET", symbol: str = "USDC") -> TokenBalance:
    return TokenBalance.model_validate(
        {"token": {"id": token_id, "symbol": symbol, "blockchain": blockchain}, "amount": "5"}
    )


@pytest.fixture
def settings() -> Settings:
    return make_settings()


@pytest.fixture
def mock_inference():
    """Inference client returning a MEDIUM decision by default."""
    client = AsyncMock(spec=InferenceClient)
    client.name = "mock"
    client.generate.return_value = model_reply("MEDIUM")
    return client


@pytest.fixture
def mock_wallet_provider():
    """Wallet provider holding USDC on ARC-TESTNET."""
    provider = AsyncMock(spec=WalletProvider)
    provider.list_balances.return_value = [usdc_balance()]
    provider.transfer.return_value = TransferResult(id="tx-123", state="INITIATED", tx_hash="0xabc")
    provider.get_transaction.return_value = {"id": "tx-123", "state": "COMPLETE"}
    provider.get_wallet.return_value = {"id": AGENT_WALLET_ID, "address": "0xagent"}
    return provider


@pytest.fixture
async def client(settings, mock_inference, mock_wallet_provider) -> AsyncGenerator[AsyncClient, None]:
    """Create an async HTTP test client backed by the mock collaborators."""
    app.dependency_overrides[get_settings] = lambda: settings
    app.dependency_overrides[get_inference_client] = lambda: mock_inference
    app.dependency_overrides[get_wallet_provider] = lambda: mock_wallet_provider
    try:
        async with AsyncClient(transport=ASGITransport(app=app), base_url="http://test") as ac:
            yield ac
    finally:
        app.dependency_overrides.clear()
