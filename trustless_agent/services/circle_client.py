"""
Wallet collaborator.

WalletProvider is the capability interface the rest of the application uses
for custodial wallets. CircleWalletClient implements it against the Circle
developer-controlled wallets REST API, and also exposes the provisioning
calls used by the setup scripts.
"""

import logging
import uuid
from abc import ABC, abstractmethod
from typing import Any
from urllib.parse import quote

import httpx

from trustless_agent.core.config import Settings
from trustless_agent.core.constants import CIRCLE_ACCOUNT_TYPE, CIRCLE_FEE_LEVEL
from trustless_agent.core.errors import TransportError
from trustless_agent.schemas.wallet import TokenBalance, TransferRequest, TransferResult
from trustless_agent.services.entity_secret import encrypt_entity_secret

logger = logging.getLogger(__name__)


class WalletProvider(ABC):
    """Custodial wallet operations needed for settlement."""

    @abstractmethod
    async def list_balances(self, wallet_id: str) -> list[TokenBalance]:
        raise NotImplementedError

    @abstractmethod
    async def transfer(self, request: TransferRequest) -> TransferResult:
        raise NotImplementedError

    @abstractmethod
    async def get_transaction(self, transaction_id: str) -> dict[str, Any]:
        raise NotImplementedError

    @abstractmethod
    async def get_wallet(self, wallet_id: str) -> dict[str, Any]:
        raise NotImplementedError


class CircleWalletClient(WalletProvider):
    """Circle developer-controlled wallets over httpx."""

    def __init__(self, settings: Settings, http_client: httpx.AsyncClient | None = None):
        """
        Initialize the Circle client.

        Args:
            settings: Application settings (API key, entity secret, base URL)
            http_client: Optional shared client; a short-lived one is used otherwise
        """
        self.settings = settings
        self.base_url = settings.circle_base_url.rstrip("/")
        self.timeout = settings.circle_timeout_seconds
        self.http_client = http_client
        self._public_key_pem: str | None = None

    def _headers(self) -> dict[str, str]:
        return {
            "Authorization": f"Bearer {self.settings.circle_api_key}",
            "Accept": "application/json",
            "Content-Type": "application/json",
        }

    async def _send(self, method: str, url: str, **kwargs: Any) -> httpx.Response:
        if self.http_client is not None:
            return await self.http_client.request(method, url, **kwargs)
        async with httpx.AsyncClient(timeout=self.timeout) as client:
            return await client.request(method, url, **kwargs)

    async def _request(
        self,
        method: str,
        path: str,
        json: dict[str, Any] | None = None,
    ) -> dict[str, Any]:
        """
        Send one request and return the ``data`` object of the reply.

        Raises:
            ConfigurationError: CIRCLE_API_KEY is not set
            TransportError: non-2xx status (status and body attached) or
                network failure (status 502)
        """
        self.settings.require("circle_api_key")

        try:
            response = await self._send(method, f"{self.base_url}{path}", headers=self._headers(), json=json)
        except httpx.RequestError as e:
            logger.error(f"Circle {method} {path} failed: {e}")
            raise TransportError(
                str(e) or "Circle request failed (network error)",
                status_code=502,
                details={"message": str(e) or type(e).__name__},
            ) from e

        body = _safe_json(response)

        if not response.is_success:
            message = None
            if isinstance(body, dict):
                message = body.get("message")
            raise TransportError(
                message or f"Circle API error: {response.status_code}",
                status_code=response.status_code,
                details=body if body is not None else response.text,
            )

        if isinstance(body, dict) and isinstance(body.get("data"), dict):
            return body["data"]
        return {}

    async def get_entity_public_key(self) -> str:
        """Fetch (once per client) the entity RSA public key in PEM format."""
        if self._public_key_pem is None:
            data = await self._request("GET", "/config/entity/publicKey")
            public_key = data.get("publicKey")
            if not public_key:
                raise TransportError(
                    "Could not find publicKey in Circle response.",
                    status_code=502,
                    details=data,
                )
            self._public_key_pem = public_key
        return self._public_key_pem

    async def _entity_secret_ciphertext(self) -> str:
        self.settings.require("circle_api_key", "circle_entity_secret")
        public_key = await self.get_entity_public_key()
        return encrypt_entity_secret(self.settings.circle_entity_secret, public_key)

    async def list_balances(self, wallet_id: str) -> list[TokenBalance]:
        data = await self._request("GET", f"/wallets/{quote(wallet_id, safe='')}/balances")
        return [TokenBalance.model_validate(item) for item in data.get("tokenBalances") or []]

    async def transfer(self, request: TransferRequest) -> TransferResult:
        """
        Create a developer-signed token transfer.

        The token id pins the chain, so ``request.blockchain`` is not sent.

        Args:
            request: Canonical transfer request

        Returns:
            TransferResult with the Circle transaction id
        """
        payload = {
            "idempotencyKey": request.idempotency_key,
            "entitySecretCiphertext": await self._entity_secret_ciphertext(),
            "walletId": request.wallet_id,
            "tokenId": request.token_id,
            "destinationAddress": request.destination_address,
            "amounts": [str(request.amount)],
            "feeLevel": CIRCLE_FEE_LEVEL,
        }
        logger.info(
            f"Submitting transfer of {request.amount} from wallet {request.wallet_id} "
            f"to {request.destination_address} on {request.blockchain}"
        )
        data = await self._request("POST", "/developer/transactions/transfer", json=payload)
        return TransferResult(id=data.get("id"), state=data.get("state"), tx_hash=data.get("txHash"))

    async def get_transaction(self, transaction_id: str) -> dict[str, Any]:
        data = await self._request("GET", f"/transactions/{quote(transaction_id, safe='')}")
        return data.get("transaction") or data

    async def get_wallet(self, wallet_id: str) -> dict[str, Any]:
        data = await self._request("GET", f"/wallets/{quote(wallet_id, safe='')}")
        return data.get("wallet") or data

    async def create_wallet_set(self, name: str) -> str:
        """Create a wallet set and return its id."""
        payload = {
            "idempotencyKey": str(uuid.uuid4()),
            "entitySecretCiphertext": await self._entity_secret_ciphertext(),
            "name": name,
        }
        data = await self._request("POST", "/developer/walletSets", json=payload)
        wallet_set = data.get("walletSet") or data
        wallet_set_id = wallet_set.get("id")
        if not wallet_set_id:
            raise TransportError("Could not read walletSetId from response.", status_code=502, details=data)
        return wallet_set_id

    async def create_wallets(
        self,
        wallet_set_id: str,
        blockchains: list[str],
        count: int,
        account_type: str = CIRCLE_ACCOUNT_TYPE,
    ) -> list[dict[str, Any]]:
        """Create ``count`` wallets in a wallet set."""
        payload = {
            "idempotencyKey": str(uuid.uuid4()),
            "entitySecretCiphertext": await self._entity_secret_ciphertext(),
            "walletSetId": wallet_set_id,
            "blockchains": blockchains,
            "count": count,
            "accountType": account_type,
        }
        data = await self._request("POST", "/developer/wallets", json=payload)
        return data.get("wallets") or []


def _safe_json(response: httpx.Response) -> Any:
    if not response.content:
        return None
    try:
        return response.json()
    except ValueError:
        logger.warning(f"Invalid JSON from Circle (first 200 chars): {response.text[:200]}")
        return None
