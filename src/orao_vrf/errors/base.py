"""
Base exception class for the ORAO VRF SDK.

All SDK exceptions inherit from OraoVrfError, which provides
structured error information including error codes, transaction hashes,
and additional context details.
"""

from __future__ import annotations

from typing import Any, Dict, Optional


class OraoVrfError(Exception):
    """
    Base exception for all ORAO VRF SDK errors.

    Provides structured error information that can be serialized and logged.

    Attributes:
        message: Human-readable error description.
        code: Machine-readable error code (e.g., "RECORD_NOT_FOUND").
        tx_hash: Optional transaction hash related to the error.
        details: Optional dictionary with additional error context.

    Example:
        >>> raise OraoVrfError(
        ...     "Transaction failed",
        ...     code="TRANSACTION_FAILED",
        ...     tx_hash="0x123...",
        ...     details={"vm_status": "Move abort"}
        ... )
    """

    def __init__(
        self,
        message: str,
        *,
        code: str = "ORAO_VRF_ERROR",
        tx_hash: Optional[str] = None,
        details: Optional[Dict[str, Any]] = None,
    ) -> None:
        super().__init__(message)
        self.message = message
        self.code = code
        self.tx_hash = tx_hash
        self.details = details or {}

    def __str__(self) -> str:
        """Return formatted error message."""
        parts = [f"[{self.code}] {self.message}"]
        if self.tx_hash:
            parts.append(f"(tx: {self.tx_hash[:10]}...)")
        return " ".join(parts)

    def __repr__(self) -> str:
        """Return detailed representation for debugging."""
        return (
            f"{self.__class__.__name__}("
            f"message={self.message!r}, "
            f"code={self.code!r}, "
            f"tx_hash={self.tx_hash!r}, "
            f"details={self.details!r})"
        )

    def to_dict(self) -> Dict[str, Any]:
        """
        Convert exception to a dictionary for JSON serialization.

        Returns:
            Dictionary representation of the error.
        """
        return {
            "error": self.__class__.__name__,
            "code": self.code,
            "message": self.message,
            "tx_hash": self.tx_hash,
            "details": self.details,
        }
