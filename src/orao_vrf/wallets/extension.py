"""
Browser-extension wallet signers.

Petra-style adapters answer ``sign_and_submit_transaction`` with the pending
transaction itself; Pontem-style adapters answer ``sign_and_submit`` with the
pending transaction wrapped in ``result``. Both are normalized here into a
SubmissionResult whose seed is re-derived from the payload the wallet echoes.
"""

from __future__ import annotations

from typing import Any, Dict, Optional

from orao_vrf.config import NetworkDescriptor, network_from_wallet_info
from orao_vrf.errors import InvalidArgumentError, SubmissionRejectedError
from orao_vrf.models import RequestPayload, SubmissionResult
from orao_vrf.utils.logging import get_logger, short_hex
from orao_vrf.utils.validation import decode_byte_vector, to_seed, validate_address
from orao_vrf.wallets.base import PetraWallet, PontemWallet, TransactionSigner, resolve

_logger = get_logger(__name__)


def echoed_seed(payload: RequestPayload, echoed: Any) -> Optional[bytes]:
    """
    Seed the wallet actually submitted.

    Wallets echo the signed payload back. When the echo carries a readable
    32-byte seed argument it wins over the requested one; otherwise the requested
    seed is kept.
    """
    requested = payload.seed
    if requested is None or not isinstance(echoed, dict):
        return requested

    index = next(i for i, arg in enumerate(payload.arguments) if arg.name == "seed")
    arguments = echoed.get("arguments")
    if not isinstance(arguments, (list, tuple)) or len(arguments) <= index:
        return requested

    try:
        seed = to_seed(decode_byte_vector(arguments[index], "seed"))
    except InvalidArgumentError:
        _logger.warning("Wallet echoed an unreadable seed, keeping the requested one")
        return requested

    if seed != requested:
        _logger.warning(
            "Wallet submitted a different seed than requested",
            extra={"requested": short_hex(requested.hex()), "submitted": short_hex(seed.hex())},
        )
    return seed


class PetraSigner(TransactionSigner):
    """Signer for Petra-style extension wallets."""

    kind = "petra"

    def __init__(self, wallet: PetraWallet) -> None:
        self._wallet = wallet

    async def get_address(self) -> str:
        account = await resolve(self._wallet.account())
        return validate_address(account["address"])

    async def get_network(self) -> Optional[NetworkDescriptor]:
        return network_from_wallet_info(await resolve(self._wallet.network()))

    async def sign_and_submit(self, payload: RequestPayload) -> SubmissionResult:
        try:
            pending = await resolve(self._wallet.sign_and_submit_transaction(payload.to_dict()))
        except Exception as e:
            raise SubmissionRejectedError(
                f"Wallet rejected transaction: {e}", signer=self.kind
            ) from e

        if not isinstance(pending, dict) or not pending.get("hash"):
            raise SubmissionRejectedError(
                "Wallet returned no transaction hash",
                signer=self.kind,
                details={"response": pending},
            )

        return SubmissionResult(
            seed=echoed_seed(payload, pending.get("payload")),
            tx_hash=pending["hash"],
            sender=pending.get("sender"),
        )


class PontemSigner(TransactionSigner):
    """Signer for Pontem-style extension wallets."""

    kind = "pontem"

    def __init__(self, wallet: PontemWallet) -> None:
        self._wallet = wallet

    async def get_address(self) -> str:
        return validate_address(await resolve(self._wallet.account()))

    async def get_network(self) -> Optional[NetworkDescriptor]:
        return network_from_wallet_info(await resolve(self._wallet.network()))

    async def sign_and_submit(self, payload: RequestPayload) -> SubmissionResult:
        try:
            response = await resolve(self._wallet.sign_and_submit(payload.to_dict()))
        except Exception as e:
            raise SubmissionRejectedError(
                f"Wallet rejected transaction: {e}", signer=self.kind
            ) from e

        result: Dict[str, Any] = {}
        if isinstance(response, dict) and isinstance(response.get("result"), dict):
            result = response["result"]
        if not result.get("hash"):
            raise SubmissionRejectedError(
                "Wallet returned no transaction hash",
                signer=self.kind,
                details={"response": response},
            )

        return SubmissionResult(
            seed=echoed_seed(payload, response.get("payload")),
            tx_hash=result["hash"],
            sender=result.get("sender"),
        )
