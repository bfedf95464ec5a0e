"""
Payload builders for the ORAO VRF SDK.
"""

from orao_vrf.builders.payload import (
    SUPPORTED_OPERATIONS,
    PayloadBuilder,
    build_deposit_for_user_payload,
    build_deposit_payload,
    build_request_payload,
    build_request_with_callback_payload,
    build_withdraw_payload,
    generate_seed,
)

__all__ = [
    "SUPPORTED_OPERATIONS",
    "PayloadBuilder",
    "generate_seed",
    "build_request_payload",
    "build_request_with_callback_payload",
    "build_deposit_payload",
    "build_deposit_for_user_payload",
    "build_withdraw_payload",
]
