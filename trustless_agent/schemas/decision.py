"""
Decision and pricing schemas.

Decision is the untrusted record recovered from model output; GuardedOutcome
is the authoritative, price-table-derived result. The request/response models
describe the /quote and /run payloads.
"""
import json
from enum import Enum
from typing import Any

from pydantic import BaseModel, ConfigDict, Field, field_validator


class Complexity(str, Enum):
    """Complexity buckets, the only model signal that is trusted."""
    LOW = "LOW"
    MEDIUM = "MEDIUM"
    HIGH = "HIGH"


class Decision(BaseModel):
    """Untrusted complexity classification recovered from model output.

    Any field may be missing. Values of the wrong type are coerced or dropped
    rather than rejected.
    """
    model_config = ConfigDict(extra="ignore")

    complexity: str | None = Field(None, description="Expected LOW|MEDIUM|HIGH, may hold anything")
    payment_required: bool | None = Field(None, description="Advisory only, never trusted")
    amount_usdc: float | None = Field(None, description="Advisory only, never trusted")
    reason: str | None = Field(None, description="Human-readable reason")
    analysis: str | None = Field(None, description="Free-text analysis")

    @field_validator("complexity", "reason", "analysis", mode="before")
    @classmethod
    def coerce_text(cls, value: Any) -> str | None:
        if value is None or isinstance(value, str):
            return value
        if isinstance(value, (dict, list)):
            return json.dumps(value)
        return str(value)

    @field_validator("payment_required", mode="before")
    @classmethod
    def coerce_flag(cls, value: Any) -> bool | None:
        return value if isinstance(value, bool) else None

    @field_validator("amount_usdc", mode="before")
    @classmethod
    def coerce_amount(cls, value: Any) -> float | None:
        if isinstance(value, bool):
            return None
        if not isinstance(value, (int, float, str)):
            return None
        try:
            return float(value)
        except (OverflowError, ValueError):
            return None


class GuardedOutcome(BaseModel):
    """Authoritative payment decision produced by the guardrail enforcer."""
    complexity: Complexity = Field(..., description="Always a valid bucket")
    payment_required: bool = Field(..., description="True exactly when amount_usdc > 0")
    amount_usdc: float = Field(..., ge=0, le=1, description="Amount from the fixed price table")
    reason: str = Field(..., description="Model reason or a generated default")
    analysis: str = Field("", description="Display only, no bearing on payment")


class PricingRequest(BaseModel):
    """Request body for /quote and /run."""
    text: str | None = Field(None, description="Free-form text to price")


class QuoteResponse(BaseModel):
    """Pricing-only response."""
    payment_required: bool
    amount_usdc: float
    complexity: Complexity
    reason: str


class RunResponse(BaseModel):
    """Pricing plus conditional settlement response."""
    payment_required: bool
    amount_usdc: float
    complexity: Complexity
    reason: str
    analysis: str
    tx_id: str | None = Field(None, description="Custodial transaction id when a transfer was made")
    tx_link: str | None = Field(None, description="Block explorer link when the tx hash is known")
