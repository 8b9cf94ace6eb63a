"""
Wallet service for agent and merchant wallet operations.

This service resolves the USDC token in the paying wallet, executes
transfers through the WalletProvider and builds explorer links. Balances and
transactions are always fetched fresh from the provider.
"""

import logging
import uuid
from typing import Any

from trustless_agent.core.config import Settings
from trustless_agent.core.constants import USDC_SYMBOL
from trustless_agent.core.errors import TokenNotFoundError
from trustless_agent.schemas.wallet import (
    AgentMerchantBalances,
    TokenBalance,
    TransferRequest,
    TransferResult,
    WalletBalances,
)
from trustless_agent.services.circle_client import WalletProvider

logger = logging.getLogger(__name__)


def find_usdc_token_id(balances: list[TokenBalance], blockchain: str) -> str | None:
    """
    Find the USDC token id on the given blockchain.

    Symbols are matched by substring so USDC, USDC-TESTNET and USDC.e all
    qualify; tokens on other chains are ignored.

    Args:
        balances: Wallet token balances
        blockchain: Chain identifier (case-insensitive)

    Returns:
        Token id, or None if the wallet holds no USDC on that chain
    """
    chain = blockchain.upper()
    for balance in balances:
        token = balance.token
        if (token.blockchain or "").upper() != chain:
            continue
        if USDC_SYMBOL in (token.symbol or "").upper():
            return token.id
    return None


class WalletService:
    """Service for wallet queries and USDC settlement."""

    def __init__(self, provider: WalletProvider, settings: Settings):
        """
        Initialize the wallet service.

        Args:
            provider: Custodial wallet collaborator
            settings: Application settings (wallet ids, chain, explorer)
        """
        self.provider = provider
        self.settings = settings

    async def transfer_usdc(
        self,
        from_wallet_id: str,
        to_address: str,
        amount_usdc: float,
    ) -> TransferResult:
        """
        Transfer USDC from a custodial wallet.

        Args:
            from_wallet_id: Paying wallet id
            to_address: Recipient address
            amount_usdc: Amount in USDC

        Returns:
            TransferResult from the provider

        Raises:
            ConfigurationError: CIRCLE_BLOCKCHAIN is not set
            TokenNotFoundError: the wallet holds no USDC on that chain
        """
        self.settings.require("circle_blockchain")
        blockchain = self.settings.circle_blockchain

        balances = await self.provider.list_balances(from_wallet_id)
        token_id = find_usdc_token_id(balances, blockchain)

        if not token_id:
            symbols = [b.token.symbol for b in balances if b.token.symbol]
            raise TokenNotFoundError(
                f"USDC tokenId not found. Wallet tokens: {symbols}",
                details={"symbols": symbols, "blockchain": blockchain},
            )

        request = TransferRequest(
            wallet_id=from_wallet_id,
            blockchain=blockchain,
            destination_address=to_address,
            token_id=token_id,
            amount=amount_usdc,
            idempotency_key=str(uuid.uuid4()),
        )
        result = await self.provider.transfer(request)
        logger.info(f"Transfer created: {result.id} (state={result.state})")
        return result

    async def pay_merchant(self, amount_usdc: float) -> TransferResult:
        """Pay the configured merchant address from the agent wallet."""
        self.settings.require("circle_agent_wallet_id", "merchant_wallet_address")
        return await self.transfer_usdc(
            from_wallet_id=self.settings.circle_agent_wallet_id,
            to_address=self.settings.merchant_wallet_address,
            amount_usdc=amount_usdc,
        )

    def explorer_link(self, tx_hash: str | None) -> str | None:
        """Block explorer link for a transaction hash, if both are known."""
        base = self.settings.explorer_tx_base
        if base and tx_hash:
            return f"{base}{tx_hash}"
        return None

    async def agent_balances(self) -> WalletBalances:
        self.settings.require("circle_agent_wallet_id")
        wallet_id = self.settings.circle_agent_wallet_id
        return WalletBalances(wallet_id=wallet_id, balances=await self.provider.list_balances(wallet_id))

    async def agent_wallet(self) -> dict[str, Any]:
        self.settings.require("circle_agent_wallet_id")
        return await self.provider.get_wallet(self.settings.circle_agent_wallet_id)

    async def agent_and_merchant_balances(self) -> AgentMerchantBalances:
        """
        Fetch both wallets' balances.

        Calls are made one after the other, agent first.
        """
        self.settings.require("circle_agent_wallet_id", "circle_merchant_wallet_id")
        agent_id = self.settings.circle_agent_wallet_id
        merchant_id = self.settings.circle_merchant_wallet_id

        agent = await self.provider.list_balances(agent_id)
        merchant = await self.provider.list_balances(merchant_id)

        return AgentMerchantBalances(
            agent=WalletBalances(wallet_id=agent_id, balances=agent),
            merchant=WalletBalances(wallet_id=merchant_id, balances=merchant),
        )

    async def get_transaction(self, transaction_id: str) -> dict[str, Any]:
        return await self.provider.get_transaction(transaction_id)
