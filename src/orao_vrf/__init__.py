"""
ORAO VRF Python SDK - verifiable randomness on Aptos.

This SDK requests random numbers from the ORAO VRF oracle and waits for the
oracle to fulfill them.

Quick Start:
    >>> from orao_vrf import OraoVrfClient, LocalAccountSigner
    >>> import asyncio
    >>>
    >>> async def main():
    ...     client = OraoVrfClient.create("devnet")
    ...     signer = LocalAccountSigner.generate(client.ledger)
    ...     await client.fund_account(signer.address, 100_000_000)
    ...     result = await client.request(signer)
    ...     randomness = await client.wait_fulfilled(signer.address, result.seed)
    ...     print(randomness.hex())
    ...
    >>> asyncio.run(main())

Each step is also available on its own:
- **Builders**: `build_request_payload()` and friends produce entry-function payloads
- **Dispatch**: `submit()` signs through any supported wallet and waits for inclusion
- **Reads**: `read_randomness()` looks a seed up in the requester's randomness store
- **Waiting**: `await_fulfillment()` polls until the randomness appears

Modules:
- `client`: OraoVrfClient facade
- `builders`: Payload builder
- `wallets`: Local, Petra-style and Pontem-style signers
- `ledger`: Aptos REST and faucet clients
- `errors`: Exception hierarchy
- `utils`: Logging, retry and validation helpers
"""

from orao_vrf.version import __version__, __version_info__

# Client
from orao_vrf.client import OraoVrfClient

# Configuration
from orao_vrf.config import (
    NETWORKS,
    Network,
    NetworkConfig,
    NetworkDescriptor,
    OracleConfig,
    OracleVersion,
    config_from_env,
    get_network_config,
    network_from_wallet_info,
)

# Models
from orao_vrf.models import (
    EntryArgument,
    MoveType,
    NetworkState,
    Operation,
    RequestPayload,
    SubmissionResult,
    TransactionOptions,
)

# Builders
from orao_vrf.builders import (
    PayloadBuilder,
    build_deposit_for_user_payload,
    build_deposit_payload,
    build_request_payload,
    build_request_with_callback_payload,
    build_withdraw_payload,
    generate_seed,
)

# Signers
from orao_vrf.wallets import (
    LocalAccountSigner,
    PetraSigner,
    PetraWallet,
    PontemSigner,
    PontemWallet,
    TransactionSigner,
    as_signer,
)

# Dispatch, reads and waiting
from orao_vrf.dispatcher import TransactionDispatcher, submit
from orao_vrf.reader import RandomnessReader, read_randomness
from orao_vrf.waiter import FulfillmentWaiter, WaitState, await_fulfillment

# Ledger
from orao_vrf.ledger import AptosRestClient, FaucetClient

# Errors
from orao_vrf.errors import (
    InvalidArgumentError,
    LedgerApiError,
    NetworkUnavailableError,
    OraoVrfError,
    RecordNotFoundError,
    SubmissionRejectedError,
    TransactionFailedError,
    WaitCancelledError,
    WaitTimeoutError,
)

# Utilities
from orao_vrf.utils import configure_logging, get_logger, set_level

__all__ = [
    # Version
    "__version__",
    "__version_info__",
    # Client
    "OraoVrfClient",
    # Configuration
    "NETWORKS",
    "Network",
    "NetworkConfig",
    "NetworkDescriptor",
    "OracleConfig",
    "OracleVersion",
    "config_from_env",
    "get_network_config",
    "network_from_wallet_info",
    # Models
    "EntryArgument",
    "MoveType",
    "NetworkState",
    "Operation",
    "RequestPayload",
    "SubmissionResult",
    "TransactionOptions",
    # Builders
    "PayloadBuilder",
    "generate_seed",
    "build_request_payload",
    "build_request_with_callback_payload",
    "build_deposit_payload",
    "build_deposit_for_user_payload",
    "build_withdraw_payload",
    # Signers
    "TransactionSigner",
    "PetraWallet",
    "PontemWallet",
    "LocalAccountSigner",
    "PetraSigner",
    "PontemSigner",
    "as_signer",
    # Dispatch, reads and waiting
    "TransactionDispatcher",
    "submit",
    "RandomnessReader",
    "read_randomness",
    "FulfillmentWaiter",
    "WaitState",
    "await_fulfillment",
    # Ledger
    "AptosRestClient",
    "FaucetClient",
    # Errors
    "OraoVrfError",
    "InvalidArgumentError",
    "SubmissionRejectedError",
    "TransactionFailedError",
    "NetworkUnavailableError",
    "LedgerApiError",
    "RecordNotFoundError",
    "WaitTimeoutError",
    "WaitCancelledError",
    # Utilities
    "get_logger",
    "configure_logging",
    "set_level",
]
