"""
Business logic services package.

This package contains the service layer: inference and wallet adapters,
decision recovery, guardrail pricing and payment orchestration.

Individual services should be imported directly from their modules:
  from trustless_agent.services.pricing_service import enforce_guardrails
  from trustless_agent.services.payment_service import PaymentService
  etc.
"""

__all__ = [
    "CircleWalletClient",
    "DecisionService",
    "GeminiClient",
    "InferenceClient",
    "PaymentService",
    "WalletProvider",
    "WalletService",
    "enforce_guardrails",
]
