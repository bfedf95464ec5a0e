"""
Tests for AptosRestClient.

Tests cover:
- URL normalization
- Resource, table item and view reads
- Error mapping (HTTP status, transport failures)
- Read retries
- Transaction generation and submission
- Waiting for inclusion
"""

from unittest.mock import AsyncMock, MagicMock, patch

import httpx
import pytest
from aptos_sdk.transactions import RawTransaction

from orao_vrf.builders import build_request_payload
from orao_vrf.constants import BCS_SUBMIT_CONTENT_TYPE
from orao_vrf.errors import LedgerApiError, NetworkUnavailableError, WaitTimeoutError
from orao_vrf.ledger.rest_client import AptosRestClient, normalize_node_url
from orao_vrf.models import TransactionOptions

from ..conftest import (
    NODE_URL,
    OWNER,
    SEED,
    STORE_HANDLE,
    TX_HASH,
    create_mock_httpx_client,
    create_mock_response,
    store_resource,
)


# =============================================================================
# Initialization Tests
# =============================================================================


class TestNormalizeNodeUrl:
    """Tests for node URL normalization."""

    @pytest.mark.parametrize(
        "url,expected",
        [
            ("https://node.example.com", "https://node.example.com/v1"),
            ("https://node.example.com/", "https://node.example.com/v1"),
            ("https://node.example.com/v1", "https://node.example.com/v1"),
            ("https://node.example.com/v1/", "https://node.example.com/v1"),
        ],
    )
    def test_normalize(self, url: str, expected: str) -> None:
        assert normalize_node_url(url) == expected

    def test_client_exposes_normalized_url(self) -> None:
        assert AptosRestClient("http://localhost:8080").node_url == "http://localhost:8080/v1"


# =============================================================================
# Read Tests
# =============================================================================


class TestReads:
    """Tests for ledger reads."""

    @pytest.mark.asyncio
    async def test_get_account_resource(self, rest_client: AptosRestClient) -> None:
        """Test resource lookup hits /accounts/{addr}/resource/{type}."""
        mock_http = AsyncMock()
        mock_http.request = AsyncMock(return_value=create_mock_response(200, store_resource()))

        with patch("httpx.AsyncClient", create_mock_httpx_client(mock_http)):
            resource = await rest_client.get_account_resource(OWNER, "0x1::vrf::RandomnessStore")

        assert resource["data"]["data"]["handle"] == STORE_HANDLE
        method, url = mock_http.request.call_args.args
        assert method == "GET"
        assert url == f"{NODE_URL}/accounts/{OWNER}/resource/0x1::vrf::RandomnessStore"

    @pytest.mark.asyncio
    async def test_get_table_item_posts_key(self, rest_client: AptosRestClient) -> None:
        """Test table lookups send key type, value type and key."""
        mock_http = AsyncMock()
        mock_http.request = AsyncMock(return_value=create_mock_response(200, "0xabcd"))

        with patch("httpx.AsyncClient", create_mock_httpx_client(mock_http)):
            value = await rest_client.get_table_item(
                STORE_HANDLE, "vector<u8>", "vector<u8>", "0x" + SEED.hex()
            )

        assert value == "0xabcd"
        call = mock_http.request.call_args
        assert call.args == ("POST", f"{NODE_URL}/tables/{STORE_HANDLE}/item")
        assert call.kwargs["json"] == {
            "key_type": "vector<u8>",
            "value_type": "vector<u8>",
            "key": "0x" + SEED.hex(),
        }

    @pytest.mark.asyncio
    async def test_view(self, rest_client: AptosRestClient) -> None:
        mock_http = AsyncMock()
        mock_http.request = AsyncMock(return_value=create_mock_response(200, ["1500"]))

        with patch("httpx.AsyncClient", create_mock_httpx_client(mock_http)):
            result = await rest_client.view("0x1::m::f", ["0x1::c::C"], [OWNER])

        assert result == ["1500"]
        assert mock_http.request.call_args.kwargs["json"] == {
            "function": "0x1::m::f",
            "type_arguments": ["0x1::c::C"],
            "arguments": [OWNER],
        }

    @pytest.mark.asyncio
    async def test_chain_id_is_cached(self, rest_client: AptosRestClient) -> None:
        """Test the chain id is fetched once."""
        mock_http = AsyncMock()
        mock_http.request = AsyncMock(
            return_value=create_mock_response(200, {"chain_id": 4, "ledger_version": "1"})
        )

        with patch("httpx.AsyncClient", create_mock_httpx_client(mock_http)):
            assert await rest_client.get_chain_id() == 4
            assert await rest_client.get_chain_id() == 4

        assert mock_http.request.call_count == 1

    @pytest.mark.asyncio
    async def test_get_sequence_number(self, rest_client: AptosRestClient) -> None:
        mock_http = AsyncMock()
        mock_http.request = AsyncMock(
            return_value=create_mock_response(
                200, {"sequence_number": "7", "authentication_key": OWNER}
            )
        )

        with patch("httpx.AsyncClient", create_mock_httpx_client(mock_http)):
            assert await rest_client.get_sequence_number(OWNER) == 7


# =============================================================================
# Error Handling Tests
# =============================================================================


class TestErrorHandling:
    """Tests for error mapping and retries."""

    @pytest.mark.asyncio
    async def test_not_found_maps_to_ledger_api_error(self, rest_client: AptosRestClient) -> None:
        """Test 404 responses carry the node's message and error code."""
        mock_http = AsyncMock()
        mock_http.request = AsyncMock(
            return_value=create_mock_response(
                404,
                {"message": "Resource not found", "error_code": "resource_not_found"},
            )
        )

        with patch("httpx.AsyncClient", create_mock_httpx_client(mock_http)):
            with pytest.raises(LedgerApiError) as exc_info:
                await rest_client.get_account_resource(OWNER, "0x1::vrf::RandomnessStore")

        assert exc_info.value.is_not_found
        assert exc_info.value.error_code == "resource_not_found"
        assert "Resource not found" in exc_info.value.message

    @pytest.mark.asyncio
    async def test_server_error_without_json(self, rest_client: AptosRestClient) -> None:
        mock_http = AsyncMock()
        mock_http.request = AsyncMock(return_value=create_mock_response(502, text="bad gateway"))

        with patch("httpx.AsyncClient", create_mock_httpx_client(mock_http)):
            with pytest.raises(LedgerApiError) as exc_info:
                await rest_client.get_ledger_info()

        assert exc_info.value.status_code == 502
        assert not exc_info.value.is_not_found

    @pytest.mark.asyncio
    async def test_transport_error_retried_then_unavailable(
        self, rest_client: AptosRestClient
    ) -> None:
        """Test reads retry transport errors before giving up."""
        mock_http = AsyncMock()
        mock_http.request = AsyncMock(side_effect=httpx.ConnectError("connection refused"))

        with patch("httpx.AsyncClient", create_mock_httpx_client(mock_http)):
            with pytest.raises(NetworkUnavailableError) as exc_info:
                await rest_client.get_ledger_info()

        assert mock_http.request.call_count == 3
        assert exc_info.value.node_url == NODE_URL

    @pytest.mark.asyncio
    async def test_transport_error_recovers(self, rest_client: AptosRestClient) -> None:
        mock_http = AsyncMock()
        mock_http.request = AsyncMock(
            side_effect=[
                httpx.ReadTimeout("timed out"),
                create_mock_response(200, {"chain_id": 2}),
            ]
        )

        with patch("httpx.AsyncClient", create_mock_httpx_client(mock_http)):
            info = await rest_client.get_ledger_info()

        assert info == {"chain_id": 2}
        assert mock_http.request.call_count == 2

    @pytest.mark.asyncio
    async def test_http_errors_not_retried(self, rest_client: AptosRestClient) -> None:
        mock_http = AsyncMock()
        mock_http.request = AsyncMock(return_value=create_mock_response(500, {"message": "boom"}))

        with patch("httpx.AsyncClient", create_mock_httpx_client(mock_http)):
            with pytest.raises(LedgerApiError):
                await rest_client.get_ledger_info()

        assert mock_http.request.call_count == 1


# =============================================================================
# Transaction Tests
# =============================================================================


class TestTransactions:
    """Tests for generation, submission and inclusion waits."""

    @pytest.mark.asyncio
    async def test_generate_transaction(self, rest_client: AptosRestClient) -> None:
        """Test sequence number and chain id are fetched and options applied."""
        rest_client.get_sequence_number = AsyncMock(return_value=3)
        rest_client.get_chain_id = AsyncMock(return_value=4)

        raw = await rest_client.generate_transaction(
            OWNER, build_request_payload(SEED), TransactionOptions(max_gas_amount=9000)
        )

        assert isinstance(raw, RawTransaction)
        assert raw.sequence_number == 3
        assert raw.chain_id == 4
        assert raw.max_gas_amount == 9000
        assert raw.gas_unit_price == 100

    @pytest.mark.asyncio
    async def test_generate_transaction_explicit_sequence(
        self, rest_client: AptosRestClient
    ) -> None:
        rest_client.get_sequence_number = AsyncMock()
        rest_client.get_chain_id = AsyncMock(return_value=4)

        raw = await rest_client.generate_transaction(
            OWNER, build_request_payload(SEED), TransactionOptions(sequence_number=11)
        )

        assert raw.sequence_number == 11
        rest_client.get_sequence_number.assert_not_called()

    @pytest.mark.asyncio
    async def test_submit_transaction_posts_bcs(self, rest_client: AptosRestClient) -> None:
        """Test submissions send BCS bytes with the signed-transaction content type."""
        signed = MagicMock()
        signed.bytes.return_value = b"\x01\x02"
        mock_http = AsyncMock()
        mock_http.request = AsyncMock(return_value=create_mock_response(202, {"hash": TX_HASH}))

        with patch("httpx.AsyncClient", create_mock_httpx_client(mock_http)):
            tx_hash = await rest_client.submit_transaction(signed)

        assert tx_hash == TX_HASH
        call = mock_http.request.call_args
        assert call.args == ("POST", f"{NODE_URL}/transactions")
        assert call.kwargs["content"] == b"\x01\x02"
        assert call.kwargs["headers"] == {"Content-Type": BCS_SUBMIT_CONTENT_TYPE}

    @pytest.mark.asyncio
    async def test_submit_transaction_not_retried(self, rest_client: AptosRestClient) -> None:
        signed = MagicMock()
        signed.bytes.return_value = b"\x01"
        mock_http = AsyncMock()
        mock_http.request = AsyncMock(side_effect=httpx.ConnectError("down"))

        with patch("httpx.AsyncClient", create_mock_httpx_client(mock_http)):
            with pytest.raises(NetworkUnavailableError):
                await rest_client.submit_transaction(signed)

        assert mock_http.request.call_count == 1

    @pytest.mark.asyncio
    async def test_wait_for_transaction(self, rest_client: AptosRestClient) -> None:
        """Test waiting tolerates unknown and pending transactions."""
        not_found = LedgerApiError("Transaction lookup failed", status_code=404)
        rest_client.get_transaction_by_hash = AsyncMock(
            side_effect=[
                not_found,
                {"type": "pending_transaction", "hash": TX_HASH},
                {"type": "user_transaction", "hash": TX_HASH, "success": True},
            ]
        )

        tx = await rest_client.wait_for_transaction(TX_HASH, poll_interval_ms=1)

        assert tx["success"] is True
        assert rest_client.get_transaction_by_hash.call_count == 3

    @pytest.mark.asyncio
    async def test_wait_for_transaction_timeout(self, rest_client: AptosRestClient) -> None:
        rest_client.get_transaction_by_hash = AsyncMock(
            return_value={"type": "pending_transaction", "hash": TX_HASH}
        )

        with pytest.raises(WaitTimeoutError) as exc_info:
            await rest_client.wait_for_transaction(TX_HASH, timeout_ms=30, poll_interval_ms=5)

        assert exc_info.value.tx_hash == TX_HASH
        assert exc_info.value.code == "TIMEOUT"

    @pytest.mark.asyncio
    async def test_wait_for_transaction_propagates_other_errors(
        self, rest_client: AptosRestClient
    ) -> None:
        rest_client.get_transaction_by_hash = AsyncMock(
            side_effect=LedgerApiError("boom", status_code=500)
        )

        with pytest.raises(LedgerApiError):
            await rest_client.wait_for_transaction(TX_HASH, poll_interval_ms=1)
