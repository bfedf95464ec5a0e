"""
Request/fulfillment exceptions for the ORAO VRF SDK.

These exceptions are raised while building payloads, dispatching
transactions through a signer, and reading or waiting for randomness.
"""

from __future__ import annotations

from typing import Any, Dict, Optional

from orao_vrf.errors.base import OraoVrfError


class InvalidArgumentError(OraoVrfError):
    """
    Raised when a builder or client receives malformed input.

    Example:
        >>> raise InvalidArgumentError("seed must be 32 bytes", field="seed")
    """

    def __init__(
        self,
        message: str,
        *,
        field: Optional[str] = None,
        details: Optional[Dict[str, Any]] = None,
    ) -> None:
        details = details or {}
        if field:
            details["field"] = field

        super().__init__(message, code="INVALID_ARGUMENT", details=details)
        self.field = field


class SubmissionRejectedError(OraoVrfError):
    """
    Raised when a signer declines or fails before the transaction reaches the chain.

    Covers wallet rejections, signing failures and node-side rejection of
    the submitted transaction (bad sequence number, insufficient gas, ...).
    """

    def __init__(
        self,
        message: str,
        *,
        signer: Optional[str] = None,
        details: Optional[Dict[str, Any]] = None,
    ) -> None:
        details = details or {}
        if signer:
            details["signer"] = signer

        super().__init__(message, code="SUBMISSION_REJECTED", details=details)
        self.signer = signer


class TransactionFailedError(OraoVrfError):
    """
    Raised when a transaction was included on chain but reported failure.

    Example:
        >>> raise TransactionFailedError("0xabc...", vm_status="Move abort in 0x1::coin")
    """

    def __init__(
        self,
        tx_hash: str,
        *,
        vm_status: Optional[str] = None,
        details: Optional[Dict[str, Any]] = None,
    ) -> None:
        details = details or {}
        if vm_status:
            details["vm_status"] = vm_status

        message = "Transaction failed on chain"
        if vm_status:
            message += f": {vm_status}"

        super().__init__(
            message,
            code="TRANSACTION_FAILED",
            tx_hash=tx_hash,
            details=details,
        )
        self.vm_status = vm_status


class NetworkUnavailableError(OraoVrfError):
    """Raised when the ledger RPC call itself fails at the transport level."""

    def __init__(
        self,
        message: str,
        *,
        node_url: Optional[str] = None,
        details: Optional[Dict[str, Any]] = None,
    ) -> None:
        details = details or {}
        if node_url:
            details["node_url"] = node_url

        super().__init__(message, code="NETWORK_UNAVAILABLE", details=details)
        self.node_url = node_url


class LedgerApiError(OraoVrfError):
    """
    Raised when the node answers with an unexpected HTTP status.

    Attributes:
        status_code: HTTP status returned by the node.
        error_code: Aptos API ``error_code`` field, when present.
    """

    def __init__(
        self,
        message: str,
        *,
        status_code: int,
        error_code: Optional[str] = None,
        details: Optional[Dict[str, Any]] = None,
    ) -> None:
        details = details or {}
        details["status_code"] = status_code
        if error_code:
            details["error_code"] = error_code

        super().__init__(message, code="LEDGER_API_ERROR", details=details)
        self.status_code = status_code
        self.error_code = error_code

    @property
    def is_not_found(self) -> bool:
        return self.status_code == 404


class RecordNotFoundError(OraoVrfError):
    """
    Raised when the owner's account, randomness store or seed entry does not exist.

    Distinct from "not yet fulfilled", which is not an error.
    """

    def __init__(
        self,
        message: str,
        *,
        owner: Optional[str] = None,
        seed: Optional[str] = None,
        details: Optional[Dict[str, Any]] = None,
    ) -> None:
        details = details or {}
        if owner:
            details["owner"] = owner
        if seed:
            details["seed"] = seed

        super().__init__(message, code="RECORD_NOT_FOUND", details=details)
        self.owner = owner
        self.seed = seed


class WaitTimeoutError(OraoVrfError):
    """
    Raised when a bounded wait runs out of time.

    Example:
        >>> raise WaitTimeoutError("fulfillment", 30000)
    """

    def __init__(
        self,
        operation: str,
        timeout_ms: int,
        *,
        tx_hash: Optional[str] = None,
        details: Optional[Dict[str, Any]] = None,
    ) -> None:
        details = details or {}
        details["operation"] = operation
        details["timeout_ms"] = timeout_ms

        super().__init__(
            f"Waiting for {operation} timed out after {timeout_ms}ms",
            code="TIMEOUT",
            tx_hash=tx_hash,
            details=details,
        )
        self.operation = operation
        self.timeout_ms = timeout_ms


class WaitCancelledError(OraoVrfError):
    """Raised when a caller signals cancellation of an in-progress wait."""

    def __init__(
        self,
        operation: str,
        *,
        polls: int = 0,
        details: Optional[Dict[str, Any]] = None,
    ) -> None:
        details = details or {}
        details["operation"] = operation
        details["polls"] = polls

        super().__init__(
            f"Waiting for {operation} was cancelled",
            code="CANCELLED",
            details=details,
        )
        self.operation = operation
        self.polls = polls
