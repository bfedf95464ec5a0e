"""
Transaction Dispatcher for the ORAO VRF SDK.

Hands a payload to a signer, waits for the transaction to be included and
checks that it executed successfully. All signer variants are reached through
the same ``sign_and_submit`` call.
"""

from __future__ import annotations

from typing import Any, Optional

from orao_vrf.constants import TRANSACTION_POLL_INTERVAL_MS, TRANSACTION_WAIT_TIMEOUT_MS
from orao_vrf.errors import OraoVrfError, SubmissionRejectedError, TransactionFailedError
from orao_vrf.ledger.rest_client import AptosRestClient
from orao_vrf.models import RequestPayload, SubmissionResult
from orao_vrf.utils.logging import get_logger, short_hex
from orao_vrf.wallets import TransactionSigner, as_signer

_logger = get_logger(__name__)


class TransactionDispatcher:
    """
    Submits payloads and waits for their inclusion.

    Example:
        ```python
        dispatcher = TransactionDispatcher(ledger)
        result = await dispatcher.submit(build_request_payload(), signer)
        print(result.seed_hex, result.tx_hash)
        ```
    """

    def __init__(
        self,
        ledger: AptosRestClient,
        *,
        wait_timeout_ms: int = TRANSACTION_WAIT_TIMEOUT_MS,
        poll_interval_ms: int = TRANSACTION_POLL_INTERVAL_MS,
    ) -> None:
        self._ledger = ledger
        self._wait_timeout_ms = wait_timeout_ms
        self._poll_interval_ms = poll_interval_ms

    async def submit(self, payload: RequestPayload, signer: Any) -> SubmissionResult:
        """
        Sign, submit and confirm one payload.

        Args:
            payload: Payload built by the payload builder
            signer: A TransactionSigner, or any wallet ``as_signer`` accepts

        Returns:
            SubmissionResult carrying the seed the chain received

        Raises:
            SubmissionRejectedError: If the signer declines or the node rejects
            TransactionFailedError: If the transaction executes with failure
            NetworkUnavailableError: If the node cannot be reached
            WaitTimeoutError: If inclusion is not observed within wait_timeout_ms
        """
        active: TransactionSigner = as_signer(signer, self._ledger)

        try:
            result = await active.sign_and_submit(payload)
        except OraoVrfError:
            raise
        except Exception as e:
            raise SubmissionRejectedError(
                f"Signer failed: {e}", signer=active.kind
            ) from e

        _logger.info(
            "Transaction dispatched",
            extra={
                "function": payload.function,
                "signer": active.kind,
                "tx_hash": short_hex(result.tx_hash),
            },
        )

        tx = await self._ledger.wait_for_transaction(
            result.tx_hash,
            timeout_ms=self._wait_timeout_ms,
            poll_interval_ms=self._poll_interval_ms,
        )
        if not tx.get("success", False):
            raise TransactionFailedError(
                result.tx_hash,
                vm_status=tx.get("vm_status"),
                details={"function": payload.function},
            )

        _logger.info(
            "Transaction included",
            extra={"tx_hash": short_hex(result.tx_hash), "version": tx.get("version")},
        )
        return result


async def submit(
    payload: RequestPayload,
    signer: Any,
    ledger: AptosRestClient,
    *,
    wait_timeout_ms: Optional[int] = None,
) -> SubmissionResult:
    """Submit ``payload`` through ``signer`` and wait for inclusion."""
    dispatcher = TransactionDispatcher(
        ledger,
        wait_timeout_ms=wait_timeout_ms or TRANSACTION_WAIT_TIMEOUT_MS,
    )
    return await dispatcher.submit(payload, signer)
