"""
Wallet API routes.

This module provides endpoints for reading agent and merchant wallet
balances, agent wallet details and transaction status. Everything is read
live from the wallet provider.
"""

from typing import Any

from fastapi import APIRouter, Depends

from trustless_agent.api.deps import get_wallet_service
from trustless_agent.schemas.wallet import AgentMerchantBalances, WalletBalances
from trustless_agent.services.wallet_service import WalletService

router = APIRouter()


@router.get(
    "/balance",
    response_model=WalletBalances,
    summary="Agent wallet balance",
    description="Token balances of the configured agent wallet.",
)
async def get_agent_balance(
    wallet_service: WalletService = Depends(get_wallet_service),
) -> WalletBalances:
    return await wallet_service.agent_balances()


@router.get(
    "/wallet",
    summary="Agent wallet details",
    description="Wallet record of the configured agent wallet.",
)
async def get_agent_wallet(
    wallet_service: WalletService = Depends(get_wallet_service),
) -> dict[str, Any]:
    return await wallet_service.agent_wallet()


@router.get(
    "/wallets/balances",
    response_model=AgentMerchantBalances,
    summary="Agent and merchant balances",
    description="Token balances of both configured wallets.",
)
async def get_wallets_balances(
    wallet_service: WalletService = Depends(get_wallet_service),
) -> AgentMerchantBalances:
    return await wallet_service.agent_and_merchant_balances()


@router.get(
    "/status/{transaction_id}",
    summary="Transaction status",
    description="Current state of a custodial transaction.",
)
async def get_transaction_status(
    transaction_id: str,
    wallet_service: WalletService = Depends(get_wallet_service),
) -> dict[str, Any]:
    transaction = await wallet_service.get_transaction(transaction_id)
    return {"transaction": transaction}
