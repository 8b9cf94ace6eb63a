"""
Payment service for pricing and settling agent requests.

This service chains the decision service, the guardrail enforcer and, for
/run only, the wallet service. At most one transfer is made per run.
"""

import logging

from trustless_agent.schemas.decision import GuardedOutcome, QuoteResponse, RunResponse
from trustless_agent.services.decision_service import DecisionService
from trustless_agent.services.pricing_service import INVALID_COMPLEXITY_REASON, enforce_guardrails
from trustless_agent.services.wallet_service import WalletService

logger = logging.getLogger(__name__)


class PaymentService:
    """Service for quoting and running paid requests."""

    def __init__(self, decision_service: DecisionService, wallet_service: WalletService):
        """
        Initialize the payment service.

        Args:
            decision_service: Produces untrusted decisions
            wallet_service: Executes USDC transfers
        """
        self.decision_service = decision_service
        self.wallet_service = wallet_service

    async def _price(self, text: str, analysis_only: bool) -> GuardedOutcome:
        decision = await self.decision_service.request_decision(text, analysis_only=analysis_only)
        guarded = enforce_guardrails(decision)

        if guarded.reason == INVALID_COMPLEXITY_REASON:
            logger.warning(f"Model complexity {str(decision.complexity)[:40]!r} overridden to LOW")
        logger.info(
            f"Priced request: complexity={guarded.complexity.value} "
            f"amount_usdc={guarded.amount_usdc} payment_required={guarded.payment_required}"
        )
        return guarded

    async def quote(self, text: str) -> QuoteResponse:
        """Price a request without moving funds."""
        guarded = await self._price(text, analysis_only=True)
        return QuoteResponse(
            payment_required=guarded.payment_required,
            amount_usdc=guarded.amount_usdc,
            complexity=guarded.complexity,
            reason=guarded.reason,
        )

    async def run(self, text: str) -> RunResponse:
        """
        Price a request and settle it when payment is required.

        Args:
            text: Free-form user text

        Returns:
            RunResponse with tx_id/tx_link set only when a transfer was made
        """
        guarded = await self._price(text, analysis_only=False)

        tx_id = None
        tx_link = None

        if guarded.payment_required and guarded.amount_usdc > 0:
            transfer = await self.wallet_service.pay_merchant(guarded.amount_usdc)
            tx_id = transfer.id
            tx_link = self.wallet_service.explorer_link(transfer.tx_hash)

        return RunResponse(
            payment_required=guarded.payment_required,
            amount_usdc=guarded.amount_usdc,
            complexity=guarded.complexity,
            reason=guarded.reason,
            analysis=guarded.analysis,
            tx_id=tx_id,
            tx_link=tx_link,
        )
