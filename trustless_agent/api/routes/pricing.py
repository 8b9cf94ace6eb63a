"""
Pricing API routes.

/quote prices a request; /run prices it and pays the merchant when the
guarded outcome requires payment.
"""

from fastapi import APIRouter, Depends, HTTPException, status

from trustless_agent.api.deps import get_payment_service
from trustless_agent.schemas.decision import PricingRequest, QuoteResponse, RunResponse
from trustless_agent.services.payment_service import PaymentService

router = APIRouter()


def _require_text(request: PricingRequest | None) -> str:
    text = request.text if request else None
    if not text:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail="text is required")
    return text


@router.post(
    "/quote",
    response_model=QuoteResponse,
    summary="Quote a request",
    description="Classify the text and return the enforced price. Never moves funds.",
)
async def quote(
    request: PricingRequest | None = None,
    payment_service: PaymentService = Depends(get_payment_service),
) -> QuoteResponse:
    text = _require_text(request)
    return await payment_service.quote(text)


@router.post(
    "/run",
    response_model=RunResponse,
    summary="Price and settle a request",
    description="Classify the text, enforce the price table and transfer USDC to the merchant if required.",
)
async def run(
    request: PricingRequest | None = None,
    payment_service: PaymentService = Depends(get_payment_service),
) -> RunResponse:
    """
    Price and settle a request.

    The transfer happens only when the enforced amount is above zero, and at
    most once per call.
    """
    text = _require_text(request)
    return await payment_service.run(text)
