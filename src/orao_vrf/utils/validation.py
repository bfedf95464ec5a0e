"""
Validation utilities for the ORAO VRF SDK.

Provides input validation and normalization for:
- Seeds (32 bytes, bytes or 0x-hex)
- Aptos account addresses
- u64 amounts
- Move identifiers and type tags
- Byte vectors as returned by the REST API or echoed by wallets

All validation functions raise InvalidArgumentError on failure.
"""

from __future__ import annotations

import re
from typing import Any, Union

from orao_vrf.constants import MAX_U64, SEED_HEX_LENGTH, SEED_LENGTH
from orao_vrf.errors import InvalidArgumentError

ADDRESS_PATTERN = re.compile(r"^0x[0-9a-fA-F]{1,64}$")
IDENTIFIER_PATTERN = re.compile(r"^[A-Za-z_][A-Za-z0-9_]*$")
# 0x1::aptos_coin::AptosCoin, optionally with generic parameters
TYPE_TAG_PATTERN = re.compile(
    r"^0x[0-9a-fA-F]{1,64}::[A-Za-z_][A-Za-z0-9_]*::[A-Za-z_][A-Za-z0-9_]*(<.+>)?$"
)

BytesLike = Union[bytes, bytearray, str]


def strip_hex_prefix(value: str) -> str:
    return value[2:] if value.startswith(("0x", "0X")) else value


def to_seed(value: BytesLike, field_name: str = "seed") -> bytes:
    """
    Normalize a seed to exactly 32 bytes.

    Args:
        value: Raw bytes or hex string (with or without 0x prefix)
        field_name: Field name for error messages

    Returns:
        32-byte seed

    Raises:
        InvalidArgumentError: If the seed is not 32 bytes or not valid hex
    """
    if isinstance(value, str):
        hex_str = strip_hex_prefix(value)
        if len(hex_str) != SEED_HEX_LENGTH:
            raise InvalidArgumentError(
                f"{field_name} must be a {SEED_LENGTH}-byte hex string",
                field=field_name,
            )
        try:
            return bytes.fromhex(hex_str)
        except ValueError:
            raise InvalidArgumentError(
                f"{field_name} is not valid hex", field=field_name
            ) from None

    if isinstance(value, (bytes, bytearray)):
        if len(value) != SEED_LENGTH:
            raise InvalidArgumentError(
                f"{field_name} must be {SEED_LENGTH} bytes, got {len(value)}",
                field=field_name,
            )
        return bytes(value)

    raise InvalidArgumentError(
        f"{field_name} must be bytes or hex string", field=field_name
    )


def validate_address(address: str, field_name: str = "address") -> str:
    """
    Validate an Aptos account address.

    Short forms such as ``0x1`` are accepted.

    Args:
        address: Address to validate
        field_name: Field name for error messages

    Returns:
        Normalized long-form address (0x + 64 lowercase hex chars)

    Raises:
        InvalidArgumentError: If address is invalid
    """
    if not isinstance(address, str) or not ADDRESS_PATTERN.match(address):
        raise InvalidArgumentError(
            f"{field_name} must be 0x followed by 1-64 hex characters",
            field=field_name,
        )
    return "0x" + address[2:].lower().zfill(64)


def validate_amount(amount: Union[int, str], field_name: str = "amount") -> int:
    """
    Validate a u64 amount.

    Args:
        amount: Amount as integer or decimal string
        field_name: Field name for error messages

    Returns:
        Validated amount as integer

    Raises:
        InvalidArgumentError: If the amount is not an integer in u64 range
    """
    if isinstance(amount, bool):
        raise InvalidArgumentError(f"{field_name} must be an integer", field=field_name)
    try:
        value = int(amount) if isinstance(amount, str) else amount
    except ValueError:
        raise InvalidArgumentError(
            f"{field_name} must be a valid integer", field=field_name
        ) from None
    if not isinstance(value, int):
        raise InvalidArgumentError(f"{field_name} must be an integer", field=field_name)

    if value < 0:
        raise InvalidArgumentError(f"{field_name} cannot be negative", field=field_name)
    if value > MAX_U64:
        raise InvalidArgumentError(f"{field_name} exceeds u64 range", field=field_name)
    return value


def validate_identifier(name: str, field_name: str = "identifier") -> str:
    """Validate a Move module or function identifier."""
    if not isinstance(name, str) or not IDENTIFIER_PATTERN.match(name):
        raise InvalidArgumentError(
            f"{field_name} must be a valid Move identifier", field=field_name
        )
    return name


def validate_type_tag(type_tag: str, field_name: str = "type_tag") -> str:
    """Validate a Move struct type tag such as ``0x1::aptos_coin::AptosCoin``."""
    if not isinstance(type_tag, str) or not TYPE_TAG_PATTERN.match(type_tag):
        raise InvalidArgumentError(
            f"{field_name} must look like 0x<addr>::<module>::<struct>",
            field=field_name,
        )
    return type_tag


def decode_byte_vector(value: Any, field_name: str = "value") -> bytes:
    """
    Decode a Move ``vector<u8>`` in any of the shapes it travels in.

    The REST API renders byte vectors as 0x-hex strings; wallets may echo
    them back as hex strings, raw bytes or lists of integers.

    Raises:
        InvalidArgumentError: If the value cannot be decoded
    """
    if isinstance(value, (bytes, bytearray)):
        return bytes(value)
    if isinstance(value, str):
        try:
            return bytes.fromhex(strip_hex_prefix(value))
        except ValueError:
            raise InvalidArgumentError(
                f"{field_name} is not valid hex", field=field_name
            ) from None
    if isinstance(value, (list, tuple)):
        try:
            return bytes(value)
        except (TypeError, ValueError):
            raise InvalidArgumentError(
                f"{field_name} is not a list of byte values", field=field_name
            ) from None
    if isinstance(value, dict) and value:
        # JS Uint8Array serialized through JSON: {"0": 12, "1": 34, ...}
        try:
            return bytes(value[k] for k in sorted(value, key=int))
        except (TypeError, ValueError):
            raise InvalidArgumentError(
                f"{field_name} is not a byte map", field=field_name
            ) from None
    raise InvalidArgumentError(
        f"{field_name} has unsupported type {type(value).__name__}", field=field_name
    )
