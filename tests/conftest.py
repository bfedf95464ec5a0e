"""
Shared fixtures for ORAO VRF SDK tests.
"""

from typing import Any
from unittest.mock import AsyncMock, MagicMock

import httpx
import pytest

from orao_vrf.config import OracleConfig, OracleVersion
from orao_vrf.constants import DEFAULT_ORAO_VRF_ADDRESS
from orao_vrf.ledger.rest_client import AptosRestClient
from orao_vrf.utils.retry import RetryConfig


# =============================================================================
# Test Constants
# =============================================================================

NODE_URL = "https://fullnode.devnet.example.com/v1"
FAUCET_URL = "https://faucet.devnet.example.com"

ORACLE_ADDRESS = DEFAULT_ORAO_VRF_ADDRESS
OWNER = "0x" + "1" * 64
RECIPIENT = "0x" + "2" * 64

SEED = bytes(range(32))
SEED_HEX = "0x" + SEED.hex()
RANDOMNESS = bytes([0xAB]) * 64

TX_HASH = "0x" + "c" * 64
STORE_HANDLE = "0x" + "d" * 64
COIN_TYPE = "0x1::aptos_coin::AptosCoin"


# =============================================================================
# Helper Functions
# =============================================================================


def create_mock_response(
    status_code: int = 200,
    json_data: Any = None,
    text: str = "",
) -> MagicMock:
    """Create a mock httpx Response."""
    response = MagicMock(spec=httpx.Response)
    response.status_code = status_code
    response.text = text
    if json_data is not None:
        response.json.return_value = json_data
    else:
        response.json.side_effect = ValueError("No JSON body")
    return response


class MockAsyncContextManager:
    """Mock async context manager for httpx.AsyncClient."""

    def __init__(self, mock_client: AsyncMock):
        self.mock_client = mock_client

    async def __aenter__(self):
        return self.mock_client

    async def __aexit__(self, exc_type, exc_val, exc_tb):
        return None


def create_mock_httpx_client(mock_http: AsyncMock) -> MagicMock:
    """Create a mock httpx.AsyncClient class whose instances yield ``mock_http``."""

    def factory(*args, **kwargs):
        return MockAsyncContextManager(mock_http)

    return MagicMock(side_effect=factory)


def store_resource(handle: str = STORE_HANDLE) -> dict:
    """RandomnessStore resource as returned by the REST API."""
    return {
        "type": f"{ORACLE_ADDRESS}::vrf::RandomnessStore",
        "data": {"data": {"handle": handle}},
    }


# =============================================================================
# Fixtures
# =============================================================================


@pytest.fixture
def oracle_v1() -> OracleConfig:
    return OracleConfig(version=OracleVersion.V1)


@pytest.fixture
def oracle_v2() -> OracleConfig:
    return OracleConfig(version=OracleVersion.V2)


@pytest.fixture
def fast_retry() -> RetryConfig:
    """Retry policy without backoff delays."""
    return RetryConfig(
        max_attempts=3,
        base_delay_ms=0,
        jitter=False,
        retryable_errors=(httpx.TransportError,),
    )


@pytest.fixture
def rest_client(fast_retry: RetryConfig) -> AptosRestClient:
    return AptosRestClient(NODE_URL, retry_config=fast_retry)


@pytest.fixture
def mock_ledger() -> MagicMock:
    """Ledger client double with async methods."""
    ledger = MagicMock(spec=AptosRestClient)
    ledger.get_account_resource = AsyncMock(return_value=store_resource())
    ledger.get_table_item = AsyncMock(return_value="0x")
    ledger.wait_for_transaction = AsyncMock(
        return_value={"type": "user_transaction", "success": True, "version": "42"}
    )
    ledger.view = AsyncMock(return_value=["0"])
    return ledger
