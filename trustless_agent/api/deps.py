"""
FastAPI dependency providers.

Each request gets its own service objects built from the single cached
Settings. Tests replace get_inference_client / get_wallet_provider through
``app.dependency_overrides``.
"""

from fastapi import Depends

from trustless_agent.core.config import Settings, get_settings
from trustless_agent.services.circle_client import CircleWalletClient, WalletProvider
from trustless_agent.services.decision_service import DecisionService
from trustless_agent.services.inference_client import GeminiClient, InferenceClient
from trustless_agent.services.payment_service import PaymentService
from trustless_agent.services.wallet_service import WalletService


def get_inference_client(settings: Settings = Depends(get_settings)) -> InferenceClient:
    return GeminiClient(settings)


def get_wallet_provider(settings: Settings = Depends(get_settings)) -> WalletProvider:
    return CircleWalletClient(settings)


def get_decision_service(
    inference_client: InferenceClient = Depends(get_inference_client),
    settings: Settings = Depends(get_settings),
) -> DecisionService:
    return DecisionService(inference_client, settings)


def get_wallet_service(
    provider: WalletProvider = Depends(get_wallet_provider),
    settings: Settings = Depends(get_settings),
) -> WalletService:
    return WalletService(provider, settings)


def get_payment_service(
    decision_service: DecisionService = Depends(get_decision_service),
    wallet_service: WalletService = Depends(get_wallet_service),
) -> PaymentService:
    return PaymentService(decision_service, wallet_service)
