"""
Unit tests for the wallet service.
"""

import pytest

from tests.conftest import (
    AGENT_WALLET_ID,
    MERCHANT_ADDRESS,
    MERCHANT_WALLET_ID,
    USDC_TOKEN_ID,
    make_settings,
    usdc_balance,
)
from trustless_agent.core.errors import ConfigurationError, TokenNotFoundError
from trustless_agent.services.wallet_service import WalletService, find_usdc_token_id


class TestFindUsdcTokenId:
    """Test USDC token resolution."""

    def test_matches_usdc_on_chain(self):
        assert find_usdc_token_id([usdc_balance()], "ARC-TESTNET") == USDC_TOKEN_ID

    def test_chain_is_case_insensitive(self):
        assert find_usdc_token_id([usdc_balance()], "arc-testnet") == USDC_TOKEN_ID

    def test_symbol_substring(self):
        balances = [usdc_balance(token_id="t-2", symbol="USDC-TESTNET")]
        assert find_usdc_token_id(balances, "ARC-TESTNET") == "t-2"

    def test_ignores_other_chains(self):
        balances = [
            usdc_balance(token_id="eth-usdc", blockchain="ETH-SEPOLIA"),
            usdc_balance(token_id="arc-native", symbol="ARC"),
        ]
        assert find_usdc_token_id(balances, "ARC-TESTNET") is None

    def test_first_match_wins(self):
        balances = [usdc_balance(token_id="a"), usdc_balance(token_id="b")]
        assert find_usdc_token_id(balances, "ARC-TESTNET") == "a"

    def test_empty(self):
        assert find_usdc_token_id([], "ARC-TESTNET") is None


class TestTransfer:
    """Test USDC transfers through the provider."""

    @pytest.fixture
    def service(self, mock_wallet_provider, settings):
        return WalletService(mock_wallet_provider, settings)

    @pytest.mark.asyncio
    async def test_pay_merchant(self, service, mock_wallet_provider):
        result = await service.pay_merchant(0.05)

        assert result.id == "tx-123"
        mock_wallet_provider.list_balances.assert_awaited_once_with(AGENT_WALLET_ID)
        mock_wallet_provider.transfer.assert_awaited_once()

        request = mock_wallet_provider.transfer.call_args.args[0]
        assert request.wallet_id == AGENT_WALLET_ID
        assert request.destination_address == MERCHANT_ADDRESS
        assert request.token_id == USDC_TOKEN_ID
        assert request.amount == 0.05
        assert request.blockchain == "ARC-TESTNET"

    @pytest.mark.asyncio
    async def test_idempotency_key_is_unique_per_transfer(self, service, mock_wallet_provider):
        await service.pay_merchant(0.05)
        await service.pay_merchant(0.05)

        first, second = (call.args[0] for call in mock_wallet_provider.transfer.call_args_list)
        assert first.idempotency_key != second.idempotency_key

    @pytest.mark.asyncio
    async def test_token_not_found(self, service, mock_wallet_provider):
        mock_wallet_provider.list_balances.return_value = [usdc_balance(symbol="EURC")]

        with pytest.raises(TokenNotFoundError) as exc_info:
            await service.pay_merchant(0.05)

        assert "EURC" in exc_info.value.message
        mock_wallet_provider.transfer.assert_not_awaited()

    @pytest.mark.asyncio
    async def test_missing_configuration_names_every_variable(self, mock_wallet_provider):
        service = WalletService(
            mock_wallet_provider,
            make_settings(circle_agent_wallet_id=None, merchant_wallet_address=None),
        )

        with pytest.raises(ConfigurationError) as exc_info:
            await service.pay_merchant(0.05)

        assert exc_info.value.details["missing"] == ["CIRCLE_AGENT_WALLET_ID", "MERCHANT_WALLET_ADDRESS"]
        mock_wallet_provider.list_balances.assert_not_awaited()

    @pytest.mark.asyncio
    async def test_missing_blockchain(self, mock_wallet_provider):
        service = WalletService(mock_wallet_provider, make_settings(circle_blockchain=None))

        with pytest.raises(ConfigurationError):
            await service.pay_merchant(0.05)

        mock_wallet_provider.transfer.assert_not_awaited()


class TestExplorerLink:
    """Test explorer link construction."""

    def test_link(self, mock_wallet_provider, settings):
        service = WalletService(mock_wallet_provider, settings)
        assert service.explorer_link("0xabc") == "https://testnet.arcscan.app/tx/0xabc"

    def test_no_hash(self, mock_wallet_provider, settings):
        assert WalletService(mock_wallet_provider, settings).explorer_link(None) is None

    def test_no_base(self, mock_wallet_provider):
        service = WalletService(mock_wallet_provider, make_settings(explorer_tx_base=None))
        assert service.explorer_link("0xabc") is None


class TestReads:
    """Test wallet reads."""

    @pytest.mark.asyncio
    async def test_agent_and_merchant_balances_in_order(self, mock_wallet_provider, settings):
        service = WalletService(mock_wallet_provider, settings)

        result = await service.agent_and_merchant_balances()

        assert result.agent.wallet_id == AGENT_WALLET_ID
        assert result.merchant.wallet_id == MERCHANT_WALLET_ID
        assert [c.args[0] for c in mock_wallet_provider.list_balances.await_args_list] == [
            AGENT_WALLET_ID,
            MERCHANT_WALLET_ID,
        ]

    @pytest.mark.asyncio
    async def test_agent_wallet(self, mock_wallet_provider, settings):
        wallet = await WalletService(mock_wallet_provider, settings).agent_wallet()
        assert wallet["id"] == AGENT_WALLET_ID
