"""
ORAO VRF client.

``OraoVrfClient`` wires the payload builder, dispatcher, reader and waiter to
one network and one oracle deployment. Each of those pieces can also be used
on its own.

Example:
    ```python
    client = OraoVrfClient.create("devnet")
    signer = LocalAccountSigner.generate(client.ledger)
    await client.fund_account(signer.address, 100_000_000)

    result = await client.request(signer)
    randomness = await client.wait_fulfilled(signer.address, result.seed, timeout_ms=60_000)
    ```
"""

from __future__ import annotations

import asyncio
from dataclasses import replace
from typing import Any, List, Mapping, Optional, Sequence, Union

from orao_vrf.builders import PayloadBuilder
from orao_vrf.config import (
    NETWORKS,
    Network,
    NetworkConfig,
    OracleConfig,
    OracleVersion,
    config_from_env,
    get_network_config,
)
from orao_vrf.constants import DEFAULT_POLL_INTERVAL_MS
from orao_vrf.dispatcher import TransactionDispatcher
from orao_vrf.errors import InvalidArgumentError, LedgerApiError, RecordNotFoundError
from orao_vrf.ledger import AptosRestClient, FaucetClient
from orao_vrf.models import NetworkState, RequestPayload, SubmissionResult, TransactionOptions
from orao_vrf.reader import RandomnessReader
from orao_vrf.utils.logging import get_logger
from orao_vrf.utils.validation import BytesLike, validate_address, validate_type_tag
from orao_vrf.waiter import await_fulfillment
from orao_vrf.wallets import TransactionSigner, as_signer

_logger = get_logger(__name__)


class OraoVrfClient:
    """
    Main entry point to the ORAO VRF oracle on one network.

    Attributes:
        network: Network configuration in use
        oracle: Oracle deployment in use
        ledger: REST client for the network's fullnode
        builder: Payload builder for the oracle
        dispatcher: Transaction dispatcher
        reader: Randomness store reader
    """

    def __init__(
        self,
        network: NetworkConfig,
        oracle: Optional[OracleConfig] = None,
        *,
        ledger: Optional[AptosRestClient] = None,
        options: Optional[TransactionOptions] = None,
    ) -> None:
        self.network = network
        self.oracle = oracle or OracleConfig()
        self.ledger = ledger or AptosRestClient(network.node_url)
        self.options = options
        self.builder = PayloadBuilder(self.oracle)
        self.dispatcher = TransactionDispatcher(self.ledger)
        self.reader = RandomnessReader(self.ledger, self.oracle)

    @classmethod
    def create(
        cls,
        network: Union[Network, str] = Network.DEVNET,
        *,
        node_url: Optional[str] = None,
        faucet_url: Optional[str] = None,
        oracle: Optional[OracleConfig] = None,
        options: Optional[TransactionOptions] = None,
    ) -> OraoVrfClient:
        """
        Create a client for a named network.

        Args:
            network: Network name
            node_url: Fullnode URL override
            faucet_url: Faucet URL override
            oracle: Oracle deployment, defaults to the public v2 oracle
            options: Transaction options for local signing
        """
        config = get_network_config(network, node_url=node_url, faucet_url=faucet_url)
        return cls(config, oracle, options=options)

    @classmethod
    def from_env(cls, environ: Optional[Mapping[str, str]] = None) -> OraoVrfClient:
        """Create a client from ``APTOS_*`` and ``ORAO_VRF_ADDRESS`` variables."""
        network, oracle = config_from_env(environ)
        return cls(network, oracle)

    @classmethod
    async def from_wallet(
        cls,
        wallet: Any,
        oracle: Optional[OracleConfig] = None,
    ) -> OraoVrfClient:
        """
        Create a client for the network an extension wallet is attached to.

        Raises:
            InvalidArgumentError: If the wallet does not report its network
        """
        descriptor = await as_signer(wallet).get_network()
        if descriptor is None:
            raise InvalidArgumentError("Wallet does not report a network", field="wallet")

        try:
            base = NETWORKS[Network(descriptor.name.strip().lower())]
        except ValueError:
            base = NETWORKS[Network.LOCAL]
        config = replace(base, node_url=descriptor.api, chain_id=descriptor.chain_id)
        _logger.info(
            "Using wallet network",
            extra={"network": descriptor.name, "node_url": descriptor.api},
        )
        return cls(config, oracle)

    def signer(self, wallet: Any) -> TransactionSigner:
        """Wrap a wallet, account or signer for use with this client."""
        return as_signer(wallet, self.ledger, self.options)

    async def submit(self, payload: RequestPayload, wallet: Any) -> SubmissionResult:
        return await self.dispatcher.submit(payload, self.signer(wallet))

    # ------------------------------------------------------------------
    # Requests
    # ------------------------------------------------------------------
    async def request(self, wallet: Any, seed: Optional[BytesLike] = None) -> SubmissionResult:
        """
        Request randomness.

        Args:
            wallet: Signer, ``aptos_sdk`` Account or extension adapter
            seed: 32-byte seed; a random one is generated when omitted

        Returns:
            SubmissionResult with the seed to wait on
        """
        return await self.submit(self.builder.request(seed), wallet)

    async def request_with_callback(
        self,
        wallet: Any,
        seed: Optional[BytesLike],
        callback_module_address: str,
        callback_module_name: str,
        callback_function: str,
        type_args: Sequence[str] = (),
        fee_amount: int = 0,
    ) -> SubmissionResult:
        """Request randomness delivered through a callback into a user module."""
        payload = self.builder.request_with_callback(
            seed,
            callback_module_address,
            callback_module_name,
            callback_function,
            type_args,
            fee_amount,
        )
        return await self.submit(payload, wallet)

    # ------------------------------------------------------------------
    # Treasury
    # ------------------------------------------------------------------
    async def deposit(self, wallet: Any, coin_type: str, amount: int) -> SubmissionResult:
        return await self.submit(self.builder.deposit(coin_type, amount), wallet)

    async def deposit_for_user(
        self, wallet: Any, coin_type: str, recipient: str, amount: int
    ) -> SubmissionResult:
        return await self.submit(
            self.builder.deposit_for_user(coin_type, recipient, amount), wallet
        )

    async def withdraw(self, wallet: Any, coin_type: str, amount: int) -> SubmissionResult:
        return await self.submit(self.builder.withdraw(coin_type, amount), wallet)

    async def get_balance(self, owner: str, coin_type: str) -> int:
        """
        Coin balance ``owner`` holds in the oracle treasury.

        Raises:
            InvalidArgumentError: If the oracle version has no treasury
        """
        if self.oracle.version is OracleVersion.V1:
            raise InvalidArgumentError(
                f"get_balance is not supported by oracle {self.oracle.version.value}",
                field="operation",
            )
        result = await self.ledger.view(
            self.oracle.entry_function("get_balance"),
            [validate_type_tag(coin_type, "coin_type")],
            [validate_address(owner, "owner")],
        )
        return int(result[0])

    # ------------------------------------------------------------------
    # Reads
    # ------------------------------------------------------------------
    async def get_network_state(self) -> NetworkState:
        """
        Read the oracle's published configuration.

        Raises:
            RecordNotFoundError: If the oracle resource is not published
        """
        try:
            resource = await self.ledger.get_account_resource(
                self.oracle.address, self.oracle.network_resource_type
            )
        except LedgerApiError as e:
            if e.is_not_found:
                raise RecordNotFoundError(
                    f"No oracle state at {self.oracle.address}", owner=self.oracle.address
                ) from e
            raise
        return NetworkState.model_validate(resource["data"])

    async def read_randomness(self, owner: str, seed: BytesLike) -> Optional[bytes]:
        return await self.reader.read(owner, seed)

    async def wait_fulfilled(
        self,
        owner: str,
        seed: BytesLike,
        *,
        poll_interval_ms: int = DEFAULT_POLL_INTERVAL_MS,
        timeout_ms: Optional[int] = None,
        cancel_event: Optional[asyncio.Event] = None,
    ) -> bytes:
        """Wait until the oracle fulfills (owner, seed)."""
        return await await_fulfillment(
            self.reader,
            owner,
            seed,
            poll_interval_ms=poll_interval_ms,
            timeout_ms=timeout_ms,
            cancel_event=cancel_event,
        )

    # ------------------------------------------------------------------
    # Test networks
    # ------------------------------------------------------------------
    async def fund_account(self, address: str, amount: int) -> List[str]:
        """
        Mint test coins to ``address`` through the network faucet.

        Raises:
            InvalidArgumentError: If the network has no faucet
        """
        if not self.network.faucet_url:
            raise InvalidArgumentError(
                f"Network {self.network.name} has no faucet", field="network"
            )
        faucet = FaucetClient(self.network.faucet_url, self.ledger)
        return await faucet.fund_account(address, amount)

    def __repr__(self) -> str:
        return (
            f"OraoVrfClient(network={self.network.name!r}, "
            f"oracle={self.oracle.address!r}, version={self.oracle.version.value!r})"
        )
