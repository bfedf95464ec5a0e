"""
Network and oracle configuration for the ORAO VRF SDK.

A ``NetworkConfig`` says which ledger instance to talk to; an
``OracleConfig`` says where the oracle is deployed on it and which
contract version to target. Both may be overridden per network since the
oracle can be redeployed at a different address.
"""

from __future__ import annotations

import os
from dataclasses import dataclass, replace
from enum import Enum
from typing import Any, Dict, Mapping, Optional, Tuple, Union

from pydantic import BaseModel, ConfigDict, Field, field_validator

from orao_vrf.constants import (
    DEFAULT_ORAO_VRF_ADDRESS,
    NETWORK_STATE_RESOURCE,
    RANDOMNESS_STORE_RESOURCE,
    VRF_V1_MODULE,
    VRF_V2_MODULE,
)
from orao_vrf.errors import InvalidArgumentError
from orao_vrf.utils.validation import validate_address

__all__ = [
    "Network",
    "NetworkConfig",
    "NETWORKS",
    "get_network_config",
    "config_from_env",
    "OracleVersion",
    "OracleConfig",
    "NetworkDescriptor",
    "network_from_wallet_info",
]


class Network(str, Enum):
    MAINNET = "mainnet"
    TESTNET = "testnet"
    DEVNET = "devnet"
    LOCAL = "local"


@dataclass(frozen=True)
class NetworkConfig:
    name: Network
    node_url: str
    faucet_url: Optional[str]
    # devnet is reset periodically and its chain id changes with it
    chain_id: Optional[int]


NETWORKS: Dict[Network, NetworkConfig] = {
    Network.MAINNET: NetworkConfig(
        name=Network.MAINNET,
        node_url="https://fullnode.mainnet.aptoslabs.com/v1",
        faucet_url=None,
        chain_id=1,
    ),
    Network.TESTNET: NetworkConfig(
        name=Network.TESTNET,
        node_url="https://fullnode.testnet.aptoslabs.com/v1",
        faucet_url="https://faucet.testnet.aptoslabs.com",
        chain_id=2,
    ),
    Network.DEVNET: NetworkConfig(
        name=Network.DEVNET,
        node_url="https://fullnode.devnet.aptoslabs.com/v1",
        faucet_url="https://faucet.devnet.aptoslabs.com",
        chain_id=None,
    ),
    Network.LOCAL: NetworkConfig(
        name=Network.LOCAL,
        node_url="http://localhost:8080/v1",
        faucet_url="http://localhost:8081",
        chain_id=4,
    ),
}


def get_network_config(
    network: Union[Network, str],
    node_url: Optional[str] = None,
    faucet_url: Optional[str] = None,
) -> NetworkConfig:
    try:
        cfg = NETWORKS[Network(network)]
    except ValueError:
        raise InvalidArgumentError(f"Unknown network: {network}", field="network") from None
    if node_url or faucet_url:
        return replace(
            cfg,
            node_url=node_url or cfg.node_url,
            faucet_url=faucet_url or cfg.faucet_url,
        )
    return cfg


class OracleVersion(str, Enum):
    """Deployed oracle contract generations."""

    V1 = "v1"
    V2 = "v2"

    @property
    def module(self) -> str:
        return VRF_V1_MODULE if self is OracleVersion.V1 else VRF_V2_MODULE


class OracleConfig(BaseModel):
    """
    Where the oracle lives and which contract version to call.

    Example:
        ```python
        oracle = OracleConfig(address="0xab81...", version=OracleVersion.V2)
        oracle.entry_function("request")  # "0xab81...::vrf_v2::request"
        ```
    """

    model_config = ConfigDict(frozen=True)

    address: str = Field(
        default=DEFAULT_ORAO_VRF_ADDRESS,
        description="Account address the oracle modules are published under",
    )
    version: OracleVersion = Field(
        default=OracleVersion.V2,
        description="Oracle contract generation to target",
    )
    store_resource: str = Field(
        default=RANDOMNESS_STORE_RESOURCE,
        description="Resource suffix holding the per-account randomness table",
    )
    network_resource: str = Field(
        default=NETWORK_STATE_RESOURCE,
        description="Resource suffix holding the oracle's network state",
    )

    @field_validator("address")
    @classmethod
    def _normalize_address(cls, value: str) -> str:
        return validate_address(value, "oracle address")

    @property
    def module(self) -> str:
        return self.version.module

    def entry_function(self, function: str) -> str:
        return f"{self.address}::{self.module}::{function}"

    @property
    def store_resource_type(self) -> str:
        return f"{self.address}::{self.store_resource}"

    @property
    def network_resource_type(self) -> str:
        return f"{self.address}::{self.network_resource}"


def config_from_env(
    environ: Optional[Mapping[str, str]] = None,
) -> Tuple[NetworkConfig, OracleConfig]:
    """
    Build network and oracle configuration from environment variables.

    Reads ``APTOS_NETWORK`` (default ``devnet``), ``APTOS_NODE_URL``,
    ``APTOS_FAUCET_URL`` and ``ORAO_VRF_ADDRESS``.

    Returns:
        Tuple of (NetworkConfig, OracleConfig)
    """
    env = os.environ if environ is None else environ
    network = get_network_config(
        env.get("APTOS_NETWORK", Network.DEVNET.value),
        node_url=env.get("APTOS_NODE_URL"),
        faucet_url=env.get("APTOS_FAUCET_URL"),
    )
    oracle_address = env.get("ORAO_VRF_ADDRESS")
    oracle = OracleConfig(address=oracle_address) if oracle_address else OracleConfig()
    return network, oracle


@dataclass(frozen=True)
class NetworkDescriptor:
    """Ledger instance a wallet (or the configuration) points at."""

    api: str
    chain_id: Optional[int]
    name: str

    @classmethod
    def from_config(cls, config: NetworkConfig) -> NetworkDescriptor:
        return cls(api=config.node_url, chain_id=config.chain_id, name=config.name.value)


def network_from_wallet_info(info: Union[str, Dict[str, Any]]) -> NetworkDescriptor:
    """
    Map what a wallet reports about its network to a NetworkDescriptor.

    Petra-style wallets report a bare name ("Mainnet", "Testnet", "Devnet");
    anything unrecognized is treated as a local node. Pontem-style wallets
    report ``{"api", "chainId", "name"}``.
    """
    if isinstance(info, str):
        try:
            config = NETWORKS[Network(info.strip().lower())]
        except ValueError:
            config = NETWORKS[Network.LOCAL]
        return NetworkDescriptor(api=config.node_url, chain_id=config.chain_id, name=info)

    if isinstance(info, dict) and info.get("api"):
        chain_id = info.get("chainId", info.get("chain_id"))
        if chain_id not in (None, ""):
            try:
                chain_id = int(chain_id)
            except (TypeError, ValueError):
                raise InvalidArgumentError(
                    f"Wallet reported a non-numeric chain id: {chain_id!r}", field="chain_id"
                ) from None
        else:
            chain_id = None
        return NetworkDescriptor(
            api=info["api"],
            chain_id=chain_id,
            name=str(info.get("name", "")),
        )

    raise InvalidArgumentError("Unrecognized wallet network info", field="network")
