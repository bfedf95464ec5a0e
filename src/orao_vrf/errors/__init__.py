"""
Exception hierarchy for the ORAO VRF SDK.

All exceptions derive from OraoVrfError and carry a machine-readable
``code`` plus optional ``tx_hash`` and ``details``.
"""

from orao_vrf.errors.base import OraoVrfError
from orao_vrf.errors.vrf import (
    InvalidArgumentError,
    LedgerApiError,
    NetworkUnavailableError,
    RecordNotFoundError,
    SubmissionRejectedError,
    TransactionFailedError,
    WaitCancelledError,
    WaitTimeoutError,
)

__all__ = [
    "OraoVrfError",
    "InvalidArgumentError",
    "SubmissionRejectedError",
    "TransactionFailedError",
    "NetworkUnavailableError",
    "LedgerApiError",
    "RecordNotFoundError",
    "WaitTimeoutError",
    "WaitCancelledError",
]
