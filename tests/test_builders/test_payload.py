"""
Tests for the payload builder.

Tests cover:
- Request payloads with caller and generated seeds
- Callback requests and treasury operations
- Oracle version support
- Input validation
- JSON and BCS rendering
"""

import pytest
from aptos_sdk.transactions import EntryFunction

from orao_vrf.builders import (
    PayloadBuilder,
    build_deposit_for_user_payload,
    build_deposit_payload,
    build_request_payload,
    build_request_with_callback_payload,
    build_withdraw_payload,
    generate_seed,
)
from orao_vrf.config import OracleConfig, OracleVersion
from orao_vrf.constants import MAX_U64
from orao_vrf.errors import InvalidArgumentError
from orao_vrf.models import MoveType, Operation

from ..conftest import COIN_TYPE, ORACLE_ADDRESS, OWNER, RECIPIENT, SEED, SEED_HEX


# =============================================================================
# Request Tests
# =============================================================================


class TestRequestPayload:
    """Tests for randomness request payloads."""

    def test_targets_request_entry_function(self) -> None:
        """Test the payload calls <oracle>::vrf_v2::request."""
        payload = build_request_payload(SEED)

        assert payload.function == f"{ORACLE_ADDRESS}::vrf_v2::request"
        assert payload.type_arguments == ()
        assert len(payload.arguments) == 1
        assert payload.seed == SEED

    def test_v1_oracle_uses_vrf_module(self, oracle_v1: OracleConfig) -> None:
        """Test v1 oracles are called through the vrf module."""
        payload = build_request_payload(SEED, oracle_v1)
        assert payload.function == f"{ORACLE_ADDRESS}::vrf::request"

    def test_accepts_hex_seed(self) -> None:
        """Test a 0x-hex seed is decoded to the same bytes."""
        assert build_request_payload(SEED_HEX).seed == SEED

    def test_generates_seed_when_omitted(self) -> None:
        """Test a fresh 32-byte seed is generated per payload."""
        first = build_request_payload()
        second = build_request_payload()

        assert len(first.seed) == 32
        assert first.seed != second.seed

    def test_generate_seed_length(self) -> None:
        assert len(generate_seed()) == 32

    @pytest.mark.parametrize("seed", [b"\x01" * 31, b"\x01" * 33, "0x1234", b""])
    def test_rejects_wrong_seed_length(self, seed) -> None:
        """Test seeds that are not exactly 32 bytes are rejected."""
        with pytest.raises(InvalidArgumentError) as exc_info:
            build_request_payload(seed)
        assert exc_info.value.field == "seed"

    def test_rejects_non_hex_seed(self) -> None:
        with pytest.raises(InvalidArgumentError):
            build_request_payload("zz" * 32)

    def test_to_dict_renders_json_payload(self) -> None:
        """Test the wallet-facing JSON rendering."""
        data = build_request_payload(SEED).to_dict()

        assert data == {
            "type": "entry_function_payload",
            "function": f"{ORACLE_ADDRESS}::vrf_v2::request",
            "type_arguments": [],
            "arguments": [SEED_HEX],
        }

    def test_to_entry_function(self) -> None:
        """Test the BCS rendering used for local signing."""
        entry = build_request_payload(SEED).to_entry_function()

        assert isinstance(entry, EntryFunction)
        assert entry.function == "request"

    def test_payload_is_immutable(self) -> None:
        payload = build_request_payload(SEED)
        with pytest.raises(AttributeError):
            payload.module_name = "other"  # type: ignore[misc]


# =============================================================================
# Callback Request Tests
# =============================================================================


class TestRequestWithCallbackPayload:
    """Tests for randomness requests answered through a callback."""

    def test_argument_order(self) -> None:
        """Test arguments follow the entry function's parameter order."""
        payload = build_request_with_callback_payload(
            SEED, "0x5", "dice", "on_randomness", [COIN_TYPE], 100
        )

        assert payload.function == f"{ORACLE_ADDRESS}::vrf_v2::request_with_callback"
        assert [arg.name for arg in payload.arguments] == [
            "seed",
            "callback_module_address",
            "callback_module_name",
            "callback_function",
            "callback_type_args",
            "fee_amount",
        ]
        assert payload.argument("callback_module_address") == "0x" + "0" * 63 + "5"
        assert payload.argument("callback_type_args") == (COIN_TYPE,)
        assert payload.arguments[4].move_type is MoveType.STRING_VECTOR

    def test_json_fee_is_decimal_string(self) -> None:
        """Test u64 values travel as decimal strings."""
        data = build_request_with_callback_payload(
            SEED, "0x5", "dice", "on_randomness", fee_amount=2500
        ).to_dict()

        assert data["arguments"][-1] == "2500"
        assert data["arguments"][-2] == []

    def test_rejects_bad_callback_identifier(self) -> None:
        with pytest.raises(InvalidArgumentError) as exc_info:
            build_request_with_callback_payload(SEED, "0x5", "dice-game", "cb")
        assert exc_info.value.field == "callback_module_name"

    def test_rejects_bad_callback_address(self) -> None:
        with pytest.raises(InvalidArgumentError):
            build_request_with_callback_payload(SEED, "0xnothex", "dice", "cb")

    def test_not_supported_by_v1(self, oracle_v1: OracleConfig) -> None:
        with pytest.raises(InvalidArgumentError) as exc_info:
            build_request_with_callback_payload(
                SEED, "0x5", "dice", "cb", oracle=oracle_v1
            )
        assert exc_info.value.field == "operation"


# =============================================================================
# Treasury Tests
# =============================================================================


class TestTreasuryPayloads:
    """Tests for deposit, deposit-for-user and withdraw payloads."""

    def test_deposit(self) -> None:
        payload = build_deposit_payload(COIN_TYPE, 1_000)

        assert payload.operation is Operation.DEPOSIT
        assert payload.type_arguments == (COIN_TYPE,)
        assert payload.argument("amount") == 1_000
        assert payload.seed is None

    def test_deposit_for_user(self) -> None:
        payload = build_deposit_for_user_payload(COIN_TYPE, RECIPIENT, 5)

        assert payload.function.endswith("::vrf_v2::deposit_for_user")
        assert payload.to_dict()["arguments"] == [RECIPIENT, "5"]

    def test_withdraw(self) -> None:
        payload = build_withdraw_payload(COIN_TYPE, "42")
        assert payload.argument("amount") == 42

    def test_max_u64_accepted(self) -> None:
        assert build_deposit_payload(COIN_TYPE, MAX_U64).argument("amount") == MAX_U64

    @pytest.mark.parametrize("amount", [-1, MAX_U64 + 1, True, "abc", 1.5])
    def test_rejects_invalid_amount(self, amount) -> None:
        with pytest.raises(InvalidArgumentError):
            build_deposit_payload(COIN_TYPE, amount)

    @pytest.mark.parametrize("coin_type", ["AptosCoin", "0x1::aptos_coin", ""])
    def test_rejects_invalid_coin_type(self, coin_type) -> None:
        with pytest.raises(InvalidArgumentError) as exc_info:
            build_withdraw_payload(coin_type, 1)
        assert exc_info.value.field == "coin_type"

    def test_rejects_invalid_recipient(self) -> None:
        with pytest.raises(InvalidArgumentError):
            build_deposit_for_user_payload(COIN_TYPE, "alice", 1)

    def test_treasury_entry_function_type_args(self) -> None:
        """Test coin types become struct type tags in BCS form."""
        entry = build_deposit_payload(COIN_TYPE, 10).to_entry_function()
        assert len(entry.ty_args) == 1


# =============================================================================
# Builder Tests
# =============================================================================


class TestPayloadBuilder:
    """Tests for the version-parameterized builder."""

    def test_v1_supports_only_request(self, oracle_v1: OracleConfig) -> None:
        builder = PayloadBuilder(oracle_v1)

        assert builder.supports(Operation.REQUEST)
        for op in Operation:
            if op is not Operation.REQUEST:
                assert not builder.supports(op)

    def test_v2_supports_everything(self, oracle_v2: OracleConfig) -> None:
        builder = PayloadBuilder(oracle_v2)
        assert all(builder.supports(op) for op in Operation)

    @pytest.mark.parametrize(
        "build",
        [
            lambda b: b.deposit(COIN_TYPE, 1),
            lambda b: b.deposit_for_user(COIN_TYPE, OWNER, 1),
            lambda b: b.withdraw(COIN_TYPE, 1),
        ],
    )
    def test_v1_rejects_treasury_operations(self, oracle_v1: OracleConfig, build) -> None:
        with pytest.raises(InvalidArgumentError):
            build(PayloadBuilder(oracle_v1))

    def test_custom_oracle_address(self) -> None:
        """Test short oracle addresses are normalized in the payload."""
        builder = PayloadBuilder(OracleConfig(address="0xCAFE", version=OracleVersion.V2))
        payload = builder.request(SEED)

        assert payload.module_address == "0x" + "0" * 60 + "cafe"
