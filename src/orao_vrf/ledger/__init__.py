"""
Ledger access for the ORAO VRF SDK.

- `rest_client`: Aptos fullnode REST API
- `faucet`: test coin faucet
"""

from orao_vrf.ledger.faucet import FaucetClient
from orao_vrf.ledger.rest_client import AptosRestClient, normalize_node_url

__all__ = [
    "AptosRestClient",
    "FaucetClient",
    "normalize_node_url",
]
