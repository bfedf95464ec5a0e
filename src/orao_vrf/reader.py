"""
Randomness Store Reader for the ORAO VRF SDK.

Fulfilled randomness lives in a ``Table<vector<u8>, vector<u8>>`` inside the
oracle's ``RandomnessStore`` resource under the requesting account. Reading it
takes two lookups: the resource, for the table handle, then the table item
keyed by the seed.
"""

from __future__ import annotations

from typing import Optional

from orao_vrf.config import OracleConfig
from orao_vrf.constants import RANDOMNESS_VALUE_TYPE, SEED_KEY_TYPE
from orao_vrf.errors import LedgerApiError, RecordNotFoundError
from orao_vrf.ledger.rest_client import AptosRestClient
from orao_vrf.utils.logging import get_logger, short_hex
from orao_vrf.utils.validation import BytesLike, decode_byte_vector, to_seed, validate_address

_logger = get_logger(__name__)


class RandomnessReader:
    """
    Reads fulfilled randomness for (owner, seed) pairs.

    The reader never writes; a pair moves from "not yet fulfilled" to a
    single fulfilled value and stays there.
    """

    def __init__(self, ledger: AptosRestClient, oracle: Optional[OracleConfig] = None) -> None:
        self._ledger = ledger
        self.oracle = oracle or OracleConfig()

    async def get_store_handle(self, owner: str) -> str:
        """
        Resolve the table handle of the owner's randomness store.

        Raises:
            RecordNotFoundError: If the account or its store does not exist
        """
        owner = validate_address(owner, "owner")
        try:
            resource = await self._ledger.get_account_resource(
                owner, self.oracle.store_resource_type
            )
        except LedgerApiError as e:
            if e.is_not_found:
                raise RecordNotFoundError(
                    f"No randomness store for {owner}", owner=owner
                ) from e
            raise
        return resource["data"]["data"]["handle"]

    async def read(self, owner: str, seed: BytesLike) -> Optional[bytes]:
        """
        Read the randomness fulfilled for ``seed``.

        Args:
            owner: Account that made the request
            seed: 32-byte request seed

        Returns:
            The randomness bytes, or None while not yet fulfilled

        Raises:
            RecordNotFoundError: If the account, store or seed entry is absent
            NetworkUnavailableError: If the node cannot be reached
        """
        seed_bytes = to_seed(seed)
        handle = await self.get_store_handle(owner)
        key = "0x" + seed_bytes.hex()

        try:
            value = await self._ledger.get_table_item(
                handle, SEED_KEY_TYPE, RANDOMNESS_VALUE_TYPE, key
            )
        except LedgerApiError as e:
            if e.is_not_found:
                raise RecordNotFoundError(
                    f"No randomness entry for seed {short_hex(key)}",
                    owner=validate_address(owner, "owner"),
                    seed=key,
                ) from e
            raise

        randomness = decode_byte_vector(value, "randomness")
        if not randomness:
            return None

        _logger.debug("Randomness read", extra={"seed": short_hex(key)})
        return randomness


async def read_randomness(
    ledger: AptosRestClient,
    owner: str,
    seed: BytesLike,
    oracle: Optional[OracleConfig] = None,
) -> Optional[bytes]:
    """Read randomness for (owner, seed); None while not yet fulfilled."""
    return await RandomnessReader(ledger, oracle).read(owner, seed)
