"""
Guardrail enforcement for model decisions.

The model only picks a complexity bucket; the amount charged always comes
from PRICE_TABLE. Model-supplied payment_required and amount_usdc are never
read here. No I/O.
"""

from trustless_agent.core.constants import MAX_AMOUNT_USDC
from trustless_agent.schemas.decision import Complexity, Decision, GuardedOutcome

PRICE_TABLE: dict[Complexity, float] = {
    Complexity.LOW: 0.0,
    Complexity.MEDIUM: 0.05,
    Complexity.HIGH: 0.10,
}

INVALID_COMPLEXITY_REASON = "Invalid complexity from model; forced safe default"


def clamp(value: float, low: float, high: float) -> float:
    return min(max(value, low), high)


def enforce_guardrails(decision: Decision) -> GuardedOutcome:
    """
    Map an untrusted Decision to a bounded payment outcome.

    Args:
        decision: Decision recovered from model output

    Returns:
        GuardedOutcome whose amount is a price table entry and whose
        payment_required is exactly ``amount_usdc > 0``
    """
    label = str(decision.complexity or "").upper()
    analysis = str(decision.analysis or "")
    reason = str(decision.reason or "")

    try:
        complexity = Complexity(label)
    except ValueError:
        return GuardedOutcome(
            complexity=Complexity.LOW,
            payment_required=False,
            amount_usdc=0.0,
            reason=INVALID_COMPLEXITY_REASON,
            analysis=analysis,
        )

    amount = clamp(float(PRICE_TABLE[complexity]), 0.0, MAX_AMOUNT_USDC)

    return GuardedOutcome(
        complexity=complexity,
        payment_required=amount > 0,
        amount_usdc=amount,
        reason=reason or f"Pricing applied for {complexity.value}",
        analysis=analysis,
    )
