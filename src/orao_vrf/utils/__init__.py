"""
ORAO VRF SDK Utilities.

This module provides logging, retry and validation helpers for the SDK.
"""

from orao_vrf.utils.logging import configure_logging, get_logger, set_level
from orao_vrf.utils.retry import RetryConfig, calculate_delay, retry_async
from orao_vrf.utils.validation import (
    decode_byte_vector,
    to_seed,
    validate_address,
    validate_amount,
    validate_identifier,
    validate_type_tag,
)

__all__ = [
    # Logging
    "get_logger",
    "configure_logging",
    "set_level",
    # Retry
    "RetryConfig",
    "calculate_delay",
    "retry_async",
    # Validation
    "to_seed",
    "validate_address",
    "validate_amount",
    "validate_identifier",
    "validate_type_tag",
    "decode_byte_vector",
]
