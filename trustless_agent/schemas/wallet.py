"""
Wallet collaborator schemas.

Field names are snake_case; the Circle adapter maps them to and from the
camelCase wire format.
"""
from pydantic import BaseModel, ConfigDict, Field


class TokenInfo(BaseModel):
    """Token metadata as reported by the wallet provider."""
    model_config = ConfigDict(extra="allow")

    id: str | None = None
    symbol: str | None = None
    blockchain: str | None = None
    name: str | None = None


class TokenBalance(BaseModel):
    """Balance of one token in a wallet."""
    model_config = ConfigDict(extra="allow")

    token: TokenInfo = Field(default_factory=TokenInfo)
    amount: str = "0"


class TransferRequest(BaseModel):
    """Canonical transfer operation sent to the wallet provider."""
    wallet_id: str = Field(..., description="Paying wallet id")
    blockchain: str = Field(..., description="Chain the token lives on")
    destination_address: str = Field(..., description="Recipient on-chain address")
    token_id: str = Field(..., description="Provider token id")
    amount: float = Field(..., gt=0, description="Amount in token units")
    idempotency_key: str = Field(..., description="Fresh per transfer attempt")


class TransferResult(BaseModel):
    """Provider acknowledgement of a transfer."""
    id: str | None = None
    state: str | None = None
    tx_hash: str | None = None


class WalletBalances(BaseModel):
    """Balances of a single wallet."""
    model_config = ConfigDict(populate_by_name=True)

    wallet_id: str = Field(..., alias="walletId")
    balances: list[TokenBalance]


class AgentMerchantBalances(BaseModel):
    """Balances of both configured wallets."""
    agent: WalletBalances
    merchant: WalletBalances
