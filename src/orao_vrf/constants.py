"""Constants for the ORAO VRF SDK.

This module defines the constant values used across the SDK,
including the default oracle deployment, Move type names,
transaction defaults, polling intervals and validation bounds.
"""

# Oracle deployment (same address on devnet/testnet/mainnet at time of writing)
DEFAULT_ORAO_VRF_ADDRESS = "0xab81318c79a3b65a1f23354494793fcc6c4fa44a69d0c0e656b7b1454ddd1bbf"

# Move module names per oracle version
VRF_V1_MODULE = "vrf"
VRF_V2_MODULE = "vrf_v2"

# Resource suffixes, appended to the oracle address
RANDOMNESS_STORE_RESOURCE = "vrf::RandomnessStore"
NETWORK_STATE_RESOURCE = "vrf::Vrf"

# Table key/value types of the randomness store
SEED_KEY_TYPE = "vector<u8>"
RANDOMNESS_VALUE_TYPE = "vector<u8>"

# Seed
SEED_LENGTH = 32
SEED_HEX_LENGTH = 64

# Move integer bounds
MAX_U64 = 2**64 - 1

# Transaction defaults
DEFAULT_MAX_GAS_AMOUNT = 5_000
DEFAULT_GAS_UNIT_PRICE = 100
DEFAULT_EXPIRATION_SECS = 10

# Inclusion wait
TRANSACTION_WAIT_TIMEOUT_MS = 20_000
TRANSACTION_POLL_INTERVAL_MS = 500

# Fulfillment wait
DEFAULT_POLL_INTERVAL_MS = 1_000

# Network Constants
REQUEST_TIMEOUT_MS = 30_000
BCS_SUBMIT_CONTENT_TYPE = "application/x.aptos.signed_transaction+bcs"

__all__ = [
    "DEFAULT_ORAO_VRF_ADDRESS",
    "VRF_V1_MODULE",
    "VRF_V2_MODULE",
    "RANDOMNESS_STORE_RESOURCE",
    "NETWORK_STATE_RESOURCE",
    "SEED_KEY_TYPE",
    "RANDOMNESS_VALUE_TYPE",
    "SEED_LENGTH",
    "SEED_HEX_LENGTH",
    "MAX_U64",
    "DEFAULT_MAX_GAS_AMOUNT",
    "DEFAULT_GAS_UNIT_PRICE",
    "DEFAULT_EXPIRATION_SECS",
    "TRANSACTION_WAIT_TIMEOUT_MS",
    "TRANSACTION_POLL_INTERVAL_MS",
    "DEFAULT_POLL_INTERVAL_MS",
    "REQUEST_TIMEOUT_MS",
    "BCS_SUBMIT_CONTENT_TYPE",
]
