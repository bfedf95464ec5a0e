"""
Aptos REST client for the ORAO VRF SDK.

Thin async client for the node REST API (v1) over httpx. It covers what the
SDK needs from the ledger: resource fetch by type name, table item lookup,
read-only view calls, transaction generation and BCS submission, and waiting
for inclusion.

Idempotent reads retry transport errors with exponential backoff; submission
is never retried. Transport failures surface as NetworkUnavailableError and
unexpected HTTP statuses as LedgerApiError.
"""

from __future__ import annotations

import asyncio
import time
from typing import Any, Dict, List, Optional, Sequence

import httpx
from aptos_sdk.account_address import AccountAddress
from aptos_sdk.transactions import RawTransaction, SignedTransaction, TransactionPayload

from orao_vrf.constants import (
    BCS_SUBMIT_CONTENT_TYPE,
    REQUEST_TIMEOUT_MS,
    TRANSACTION_POLL_INTERVAL_MS,
    TRANSACTION_WAIT_TIMEOUT_MS,
)
from orao_vrf.errors import LedgerApiError, NetworkUnavailableError, WaitTimeoutError
from orao_vrf.models import RequestPayload, TransactionOptions
from orao_vrf.utils.logging import get_logger, short_hex
from orao_vrf.utils.retry import RetryConfig, retry_async
from orao_vrf.utils.validation import validate_address

_logger = get_logger(__name__)


def normalize_node_url(node_url: str) -> str:
    """Strip trailing slashes and make sure the URL points at the v1 API."""
    url = node_url.rstrip("/")
    if not url.endswith("/v1"):
        url += "/v1"
    return url


class AptosRestClient:
    """
    Async client for an Aptos fullnode.

    The client keeps no connection state between calls, so one instance can
    serve any number of concurrent readers.

    Example:
        ```python
        ledger = AptosRestClient("https://fullnode.devnet.aptoslabs.com")
        store = await ledger.get_account_resource(owner, f"{oracle}::vrf::RandomnessStore")
        ```
    """

    def __init__(
        self,
        node_url: str,
        *,
        timeout_ms: int = REQUEST_TIMEOUT_MS,
        retry_config: Optional[RetryConfig] = None,
    ) -> None:
        """
        Initialize the REST client.

        Args:
            node_url: Fullnode URL, with or without the ``/v1`` suffix
            timeout_ms: Per-request timeout in milliseconds
            retry_config: Retry policy for reads
        """
        self._node_url = normalize_node_url(node_url)
        self._timeout_ms = timeout_ms
        self._retry_config = retry_config or RetryConfig(
            max_attempts=3,
            base_delay_ms=250,
            retryable_errors=(httpx.TransportError,),
        )
        self._chain_id: Optional[int] = None

    @property
    def node_url(self) -> str:
        """Get the normalized node URL."""
        return self._node_url

    # ------------------------------------------------------------------
    # HTTP plumbing
    # ------------------------------------------------------------------
    async def _send(
        self,
        method: str,
        path: str,
        *,
        params: Optional[Dict[str, Any]] = None,
        json: Any = None,
        content: Optional[bytes] = None,
        headers: Optional[Dict[str, str]] = None,
    ) -> httpx.Response:
        async with httpx.AsyncClient(
            timeout=httpx.Timeout(self._timeout_ms / 1000)
        ) as client:
            return await client.request(
                method,
                f"{self._node_url}{path}",
                params=params,
                json=json,
                content=content,
                headers=headers,
            )

    async def _read(self, method: str, path: str, **kwargs: Any) -> httpx.Response:
        try:
            return await retry_async(
                lambda: self._send(method, path, **kwargs),
                self._retry_config,
                operation=f"{method} {path}",
            )
        except httpx.TransportError as e:
            raise NetworkUnavailableError(
                f"Node unreachable: {e}", node_url=self._node_url
            ) from e

    async def _write(self, method: str, path: str, **kwargs: Any) -> httpx.Response:
        try:
            return await self._send(method, path, **kwargs)
        except httpx.TransportError as e:
            raise NetworkUnavailableError(
                f"Node unreachable: {e}", node_url=self._node_url
            ) from e

    @staticmethod
    def _json(response: httpx.Response, what: str) -> Any:
        if 200 <= response.status_code < 300:
            return response.json()

        message = f"{what} failed: HTTP {response.status_code}"
        error_code = None
        try:
            body = response.json()
        except ValueError:
            body = None
        if isinstance(body, dict):
            error_code = body.get("error_code")
            if body.get("message"):
                message = f"{what} failed: {body['message']}"
        raise LedgerApiError(message, status_code=response.status_code, error_code=error_code)

    # ------------------------------------------------------------------
    # Reads
    # ------------------------------------------------------------------
    async def get_ledger_info(self) -> Dict[str, Any]:
        response = await self._read("GET", "")
        return self._json(response, "Ledger info")

    async def get_chain_id(self) -> int:
        """Get the chain id, cached after the first call."""
        if self._chain_id is None:
            info = await self.get_ledger_info()
            self._chain_id = int(info["chain_id"])
        return self._chain_id

    async def get_account(self, address: str) -> Dict[str, Any]:
        response = await self._read("GET", f"/accounts/{validate_address(address)}")
        return self._json(response, "Account lookup")

    async def get_sequence_number(self, address: str) -> int:
        account = await self.get_account(address)
        return int(account["sequence_number"])

    async def get_account_resource(self, address: str, resource_type: str) -> Dict[str, Any]:
        """
        Fetch a resource stored under an account.

        Args:
            address: Account address
            resource_type: Fully qualified resource type

        Returns:
            Resource as ``{"type": ..., "data": {...}}``

        Raises:
            LedgerApiError: With status 404 if the account or resource is absent
        """
        response = await self._read(
            "GET", f"/accounts/{validate_address(address)}/resource/{resource_type}"
        )
        return self._json(response, "Resource lookup")

    async def get_table_item(
        self,
        handle: str,
        key_type: str,
        value_type: str,
        key: Any,
    ) -> Any:
        """
        Look up one table item by key.

        Raises:
            LedgerApiError: With status 404 if the key is not in the table
        """
        response = await self._read(
            "POST",
            f"/tables/{handle}/item",
            json={"key_type": key_type, "value_type": value_type, "key": key},
        )
        return self._json(response, "Table item lookup")

    async def view(
        self,
        function: str,
        type_arguments: Sequence[str] = (),
        arguments: Sequence[Any] = (),
    ) -> List[Any]:
        """Execute a read-only view function and return its results."""
        response = await self._read(
            "POST",
            "/view",
            json={
                "function": function,
                "type_arguments": list(type_arguments),
                "arguments": list(arguments),
            },
        )
        return self._json(response, "View call")

    async def get_transaction_by_hash(self, tx_hash: str) -> Dict[str, Any]:
        response = await self._read("GET", f"/transactions/by_hash/{tx_hash}")
        return self._json(response, "Transaction lookup")

    # ------------------------------------------------------------------
    # Transactions
    # ------------------------------------------------------------------
    async def generate_transaction(
        self,
        sender: str,
        payload: RequestPayload,
        options: Optional[TransactionOptions] = None,
    ) -> RawTransaction:
        """
        Generate an unsigned transaction for ``payload``.

        Args:
            sender: Sender address
            payload: Entry-function payload
            options: Gas, expiration and sequence number overrides

        Returns:
            Raw transaction ready to sign
        """
        options = options or TransactionOptions()
        if options.sequence_number is not None:
            sequence_number = options.sequence_number
        else:
            sequence_number = await self.get_sequence_number(sender)

        return RawTransaction(
            AccountAddress.from_str(validate_address(sender, "sender")),
            sequence_number,
            TransactionPayload(payload.to_entry_function()),
            options.max_gas_amount,
            options.gas_unit_price,
            int(time.time()) + options.timeout_secs,
            await self.get_chain_id(),
        )

    async def submit_transaction(self, signed: SignedTransaction) -> str:
        """
        Submit a BCS-encoded signed transaction.

        Returns:
            Transaction hash

        Raises:
            LedgerApiError: If the node rejects the transaction
            NetworkUnavailableError: If the node cannot be reached
        """
        response = await self._write(
            "POST",
            "/transactions",
            content=signed.bytes(),
            headers={"Content-Type": BCS_SUBMIT_CONTENT_TYPE},
        )
        data = self._json(response, "Transaction submission")
        return data["hash"]

    async def wait_for_transaction(
        self,
        tx_hash: str,
        *,
        timeout_ms: int = TRANSACTION_WAIT_TIMEOUT_MS,
        poll_interval_ms: int = TRANSACTION_POLL_INTERVAL_MS,
    ) -> Dict[str, Any]:
        """
        Wait until a transaction leaves the mempool.

        The returned transaction may still have failed; check ``success``.

        Raises:
            WaitTimeoutError: If the transaction is still pending after ``timeout_ms``
        """
        loop = asyncio.get_running_loop()
        deadline = loop.time() + timeout_ms / 1000

        while True:
            try:
                tx = await self.get_transaction_by_hash(tx_hash)
                if tx.get("type") != "pending_transaction":
                    return tx
            except LedgerApiError as e:
                # Freshly submitted transactions can be briefly unknown
                if not e.is_not_found:
                    raise

            if loop.time() >= deadline:
                raise WaitTimeoutError("transaction inclusion", timeout_ms, tx_hash=tx_hash)

            _logger.debug(
                "Transaction pending",
                extra={"tx_hash": short_hex(tx_hash)},
            )
            await asyncio.sleep(poll_interval_ms / 1000)
