"""
Payload Builder for the ORAO VRF SDK.

Maps an oracle operation plus its arguments to an entry-function payload.
One builder is parameterized by an ``OracleConfig`` (deployment address and
contract version); there is no per-version class hierarchy.

Builders are pure: no network access and no signing. They only fail on
malformed input, with InvalidArgumentError.

Example:
    >>> from orao_vrf.builders import PayloadBuilder
    >>> builder = PayloadBuilder()
    >>> payload = builder.request()           # random seed
    >>> payload.to_dict()["function"]
    '0xab81...::vrf_v2::request'
"""

from __future__ import annotations

import secrets
from typing import Dict, FrozenSet, Optional, Sequence

from orao_vrf.config import OracleConfig, OracleVersion
from orao_vrf.constants import SEED_LENGTH
from orao_vrf.errors import InvalidArgumentError
from orao_vrf.models import EntryArgument, MoveType, Operation, RequestPayload
from orao_vrf.utils.validation import (
    BytesLike,
    to_seed,
    validate_address,
    validate_amount,
    validate_identifier,
    validate_type_tag,
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

SUPPORTED_OPERATIONS: Dict[OracleVersion, FrozenSet[Operation]] = {
    OracleVersion.V1: frozenset({Operation.REQUEST}),
    OracleVersion.V2: frozenset(Operation),
}


def generate_seed() -> bytes:
    """
    Generate a cryptographically secure random seed.

    Returns:
        32 random bytes
    """
    return secrets.token_bytes(SEED_LENGTH)


class PayloadBuilder:
    """
    Builds oracle payloads for one oracle deployment.

    Example:
        >>> builder = PayloadBuilder(OracleConfig(version=OracleVersion.V1))
        >>> builder.request(b"\\x01" * 32).function_name
        'request'
        >>> builder.supports(Operation.DEPOSIT)
        False
    """

    def __init__(self, oracle: Optional[OracleConfig] = None) -> None:
        self.oracle = oracle or OracleConfig()

    def supports(self, operation: Operation) -> bool:
        return operation in SUPPORTED_OPERATIONS[self.oracle.version]

    def build(
        self,
        operation: Operation,
        type_arguments: Sequence[str] = (),
        arguments: Sequence[EntryArgument] = (),
    ) -> RequestPayload:
        """
        Build a payload for any supported operation.

        Args:
            operation: Oracle operation
            type_arguments: Move type arguments (already validated)
            arguments: Typed function arguments (already validated)

        Raises:
            InvalidArgumentError: If the oracle version lacks the operation
        """
        if not self.supports(operation):
            raise InvalidArgumentError(
                f"{operation.value} is not supported by oracle {self.oracle.version.value}",
                field="operation",
            )
        return RequestPayload(
            operation=operation,
            module_address=self.oracle.address,
            module_name=self.oracle.module,
            type_arguments=tuple(type_arguments),
            arguments=tuple(arguments),
        )

    def request(self, seed: Optional[BytesLike] = None) -> RequestPayload:
        """
        Build a randomness request.

        Args:
            seed: 32-byte seed; a random one is generated when omitted

        Raises:
            InvalidArgumentError: If the seed is not 32 bytes
        """
        seed_bytes = generate_seed() if seed is None else to_seed(seed)
        return self.build(
            Operation.REQUEST,
            arguments=[EntryArgument("seed", MoveType.BYTES, seed_bytes)],
        )

    def request_with_callback(
        self,
        seed: Optional[BytesLike],
        callback_module_address: str,
        callback_module_name: str,
        callback_function: str,
        type_args: Sequence[str] = (),
        fee_amount: int = 0,
    ) -> RequestPayload:
        """
        Build a randomness request the oracle answers by calling back into a user module.

        The callback's type arguments travel as a ``vector<String>`` function
        argument so the oracle can instantiate the callback on fulfillment.

        Args:
            seed: 32-byte seed; a random one is generated when omitted
            callback_module_address: Address of the module to call back
            callback_module_name: Name of the module to call back
            callback_function: Entry function invoked with the randomness
            type_args: Type arguments for the callback
            fee_amount: Callback execution fee in octas
        """
        seed_bytes = generate_seed() if seed is None else to_seed(seed)
        return self.build(
            Operation.REQUEST_WITH_CALLBACK,
            arguments=[
                EntryArgument("seed", MoveType.BYTES, seed_bytes),
                EntryArgument(
                    "callback_module_address",
                    MoveType.ADDRESS,
                    validate_address(callback_module_address, "callback_module_address"),
                ),
                EntryArgument(
                    "callback_module_name",
                    MoveType.STRING,
                    validate_identifier(callback_module_name, "callback_module_name"),
                ),
                EntryArgument(
                    "callback_function",
                    MoveType.STRING,
                    validate_identifier(callback_function, "callback_function"),
                ),
                EntryArgument(
                    "callback_type_args",
                    MoveType.STRING_VECTOR,
                    tuple(validate_type_tag(t, "type_args") for t in type_args),
                ),
                EntryArgument("fee_amount", MoveType.U64, validate_amount(fee_amount, "fee_amount")),
            ],
        )

    def deposit(self, coin_type: str, amount: int) -> RequestPayload:
        """Build a treasury deposit for the signer's own balance."""
        return self.build(
            Operation.DEPOSIT,
            type_arguments=[validate_type_tag(coin_type, "coin_type")],
            arguments=[EntryArgument("amount", MoveType.U64, validate_amount(amount))],
        )

    def deposit_for_user(self, coin_type: str, recipient: str, amount: int) -> RequestPayload:
        """Build a treasury deposit credited to another account."""
        return self.build(
            Operation.DEPOSIT_FOR_USER,
            type_arguments=[validate_type_tag(coin_type, "coin_type")],
            arguments=[
                EntryArgument("recipient", MoveType.ADDRESS, validate_address(recipient, "recipient")),
                EntryArgument("amount", MoveType.U64, validate_amount(amount)),
            ],
        )

    def withdraw(self, coin_type: str, amount: int) -> RequestPayload:
        """Build a treasury withdrawal of the signer's balance."""
        return self.build(
            Operation.WITHDRAW,
            type_arguments=[validate_type_tag(coin_type, "coin_type")],
            arguments=[EntryArgument("amount", MoveType.U64, validate_amount(amount))],
        )


def build_request_payload(
    seed: Optional[BytesLike] = None,
    oracle: Optional[OracleConfig] = None,
) -> RequestPayload:
    return PayloadBuilder(oracle).request(seed)


def build_request_with_callback_payload(
    seed: Optional[BytesLike],
    callback_module_address: str,
    callback_module_name: str,
    callback_function: str,
    type_args: Sequence[str] = (),
    fee_amount: int = 0,
    oracle: Optional[OracleConfig] = None,
) -> RequestPayload:
    return PayloadBuilder(oracle).request_with_callback(
        seed,
        callback_module_address,
        callback_module_name,
        callback_function,
        type_args,
        fee_amount,
    )


def build_deposit_payload(
    coin_type: str, amount: int, oracle: Optional[OracleConfig] = None
) -> RequestPayload:
    return PayloadBuilder(oracle).deposit(coin_type, amount)


def build_deposit_for_user_payload(
    coin_type: str, recipient: str, amount: int, oracle: Optional[OracleConfig] = None
) -> RequestPayload:
    return PayloadBuilder(oracle).deposit_for_user(coin_type, recipient, amount)


def build_withdraw_payload(
    coin_type: str, amount: int, oracle: Optional[OracleConfig] = None
) -> RequestPayload:
    return PayloadBuilder(oracle).withdraw(coin_type, amount)
