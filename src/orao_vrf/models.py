"""
Data model for the ORAO VRF SDK.

Defines entry-function payloads, submission results, transaction options
and the oracle's network state.
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Any, Dict, List, Optional, Tuple

from aptos_sdk.account_address import AccountAddress
from aptos_sdk.bcs import Serializer
from aptos_sdk.transactions import EntryFunction, TransactionArgument
from aptos_sdk.type_tag import StructTag, TypeTag
from pydantic import BaseModel, ConfigDict, Field

from orao_vrf.constants import (
    DEFAULT_EXPIRATION_SECS,
    DEFAULT_GAS_UNIT_PRICE,
    DEFAULT_MAX_GAS_AMOUNT,
)

__all__ = [
    "Operation",
    "MoveType",
    "EntryArgument",
    "RequestPayload",
    "SubmissionResult",
    "TransactionOptions",
    "NetworkState",
]


class Operation(str, Enum):
    """Oracle entry points, by the Move function they call."""

    REQUEST = "request"
    REQUEST_WITH_CALLBACK = "request_with_callback"
    DEPOSIT = "deposit"
    DEPOSIT_FOR_USER = "deposit_for_user"
    WITHDRAW = "withdraw"


class MoveType(str, Enum):
    """Move types of entry-function arguments used by the oracle."""

    BYTES = "vector<u8>"
    U64 = "u64"
    ADDRESS = "address"
    STRING = "0x1::string::String"
    STRING_VECTOR = "vector<0x1::string::String>"


@dataclass(frozen=True)
class EntryArgument:
    """One typed entry-function argument."""

    name: str
    move_type: MoveType
    value: Any

    def to_json(self) -> Any:
        """Render the argument the way the Aptos JSON API expects it."""
        if self.move_type is MoveType.BYTES:
            return "0x" + bytes(self.value).hex()
        if self.move_type is MoveType.U64:
            # u64 travels as a decimal string in JSON
            return str(self.value)
        if self.move_type is MoveType.STRING_VECTOR:
            return list(self.value)
        return self.value

    def to_transaction_argument(self) -> TransactionArgument:
        """Render the argument as a BCS transaction argument."""
        if self.move_type is MoveType.BYTES:
            return TransactionArgument(bytes(self.value), Serializer.to_bytes)
        if self.move_type is MoveType.U64:
            return TransactionArgument(self.value, Serializer.u64)
        if self.move_type is MoveType.ADDRESS:
            return TransactionArgument(AccountAddress.from_str(self.value), Serializer.struct)
        if self.move_type is MoveType.STRING:
            return TransactionArgument(self.value, Serializer.str)
        return TransactionArgument(
            list(self.value), Serializer.sequence_serializer(Serializer.str)
        )


@dataclass(frozen=True)
class RequestPayload:
    """
    Entry-function payload targeting an oracle entry point.

    Constructed fresh per request by the payload builder and never mutated.

    Attributes:
        operation: Oracle operation this payload performs
        module_address: Address the oracle module is published under
        module_name: Oracle module name (``vrf`` or ``vrf_v2``)
        type_arguments: Ordered Move type arguments
        arguments: Ordered typed function arguments
    """

    operation: Operation
    module_address: str
    module_name: str
    type_arguments: Tuple[str, ...] = ()
    arguments: Tuple[EntryArgument, ...] = ()

    @property
    def function_name(self) -> str:
        return self.operation.value

    @property
    def function(self) -> str:
        """Fully qualified entry function id, ``<addr>::<module>::<function>``."""
        return f"{self.module_address}::{self.module_name}::{self.function_name}"

    @property
    def seed(self) -> Optional[bytes]:
        """Seed carried by request payloads, None for treasury operations."""
        for arg in self.arguments:
            if arg.name == "seed":
                return bytes(arg.value)
        return None

    def argument(self, name: str) -> Any:
        for arg in self.arguments:
            if arg.name == name:
                return arg.value
        raise KeyError(name)

    def to_dict(self) -> Dict[str, Any]:
        """Convert to the ``entry_function_payload`` shape wallets sign."""
        return {
            "type": "entry_function_payload",
            "function": self.function,
            "type_arguments": list(self.type_arguments),
            "arguments": [arg.to_json() for arg in self.arguments],
        }

    def to_entry_function(self) -> EntryFunction:
        """Convert to a BCS entry function for local signing."""
        return EntryFunction.natural(
            f"{self.module_address}::{self.module_name}",
            self.function_name,
            [TypeTag(StructTag.from_str(t)) for t in self.type_arguments],
            [arg.to_transaction_argument() for arg in self.arguments],
        )


@dataclass(frozen=True)
class SubmissionResult:
    """
    Outcome of one successful dispatch.

    Attributes:
        seed: Seed the chain actually received (None for treasury operations)
        tx_hash: Hash of the included transaction
        sender: Account that signed the transaction, when known
    """

    seed: Optional[bytes]
    tx_hash: str
    sender: Optional[str] = None

    @property
    def seed_hex(self) -> Optional[str]:
        return "0x" + self.seed.hex() if self.seed is not None else None


class TransactionOptions(BaseModel):
    """
    Options for transactions generated and signed locally.

    Example:
        ```python
        options = TransactionOptions(max_gas_amount=10_000)
        ```
    """

    model_config = ConfigDict(frozen=True)

    max_gas_amount: int = Field(
        default=DEFAULT_MAX_GAS_AMOUNT,
        ge=1,
        description="Maximum gas units the transaction may consume",
    )
    gas_unit_price: int = Field(
        default=DEFAULT_GAS_UNIT_PRICE,
        ge=1,
        description="Price per gas unit in octas",
    )
    timeout_secs: int = Field(
        default=DEFAULT_EXPIRATION_SECS,
        ge=1,
        description="Seconds from now the transaction stays valid for inclusion",
    )
    sequence_number: Optional[int] = Field(
        default=None,
        ge=0,
        description="Explicit sequence number; fetched from the chain when omitted",
    )


class NetworkState(BaseModel):
    """
    Oracle configuration published on chain.

    Every field is optional because the resource shape differs between
    oracle versions.
    """

    model_config = ConfigDict(frozen=True, extra="allow")

    authority: Optional[str] = None
    coin_type: Optional[str] = None
    fee: Optional[int] = None
    treasury: Optional[str] = None
    fulfillment_authorities: List[str] = Field(default_factory=list)
    num_received: Optional[int] = None
