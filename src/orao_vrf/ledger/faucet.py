"""
Faucet client for funding test accounts on devnet, testnet and local nodes.
"""

from __future__ import annotations

from typing import List

import httpx

from orao_vrf.constants import REQUEST_TIMEOUT_MS
from orao_vrf.errors import LedgerApiError, NetworkUnavailableError, TransactionFailedError
from orao_vrf.ledger.rest_client import AptosRestClient
from orao_vrf.utils.logging import get_logger
from orao_vrf.utils.validation import validate_address, validate_amount

_logger = get_logger(__name__)


class FaucetClient:
    """
    Mints test coins to an account and waits for the mint transactions.

    Example:
        ```python
        faucet = FaucetClient("https://faucet.devnet.aptoslabs.com", ledger)
        await faucet.fund_account(address, 100_000_000)
        ```
    """

    def __init__(
        self,
        faucet_url: str,
        ledger: AptosRestClient,
        *,
        timeout_ms: int = REQUEST_TIMEOUT_MS,
    ) -> None:
        self._faucet_url = faucet_url.rstrip("/")
        self._ledger = ledger
        self._timeout_ms = timeout_ms

    @property
    def faucet_url(self) -> str:
        return self._faucet_url

    async def fund_account(self, address: str, amount: int) -> List[str]:
        """
        Fund ``address`` with ``amount`` octas.

        Returns:
            Hashes of the mint transactions, all included and successful

        Raises:
            LedgerApiError: If the faucet refuses the request
            NetworkUnavailableError: If the faucet cannot be reached
            TransactionFailedError: If a mint transaction fails on chain
        """
        address = validate_address(address)
        amount = validate_amount(amount)

        try:
            async with httpx.AsyncClient(
                timeout=httpx.Timeout(self._timeout_ms / 1000)
            ) as client:
                response = await client.post(
                    f"{self._faucet_url}/mint",
                    params={"amount": amount, "address": address},
                )
        except httpx.TransportError as e:
            raise NetworkUnavailableError(
                f"Faucet unreachable: {e}", node_url=self._faucet_url
            ) from e

        if response.status_code != 200:
            raise LedgerApiError(
                f"Faucet request failed: {response.text}",
                status_code=response.status_code,
            )

        data = response.json()
        # Older faucets answer with a bare list of hashes
        tx_hashes = data.get("txn_hashes", []) if isinstance(data, dict) else list(data)

        for tx_hash in tx_hashes:
            tx = await self._ledger.wait_for_transaction(tx_hash)
            if not tx.get("success", False):
                raise TransactionFailedError(tx_hash, vm_status=tx.get("vm_status"))

        _logger.info(
            "Account funded",
            extra={"address": address, "amount": amount, "transactions": len(tx_hashes)},
        )
        return tx_hashes
