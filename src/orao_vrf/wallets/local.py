"""
Local keypair signer.

Generates, signs and submits transactions as three explicit steps through
the ledger REST client, using an ``aptos_sdk`` account for ed25519 signing.
"""

from __future__ import annotations

from typing import Optional

from aptos_sdk.account import Account
from aptos_sdk.transactions import SignedTransaction

from orao_vrf.errors import InvalidArgumentError, LedgerApiError, SubmissionRejectedError
from orao_vrf.ledger.rest_client import AptosRestClient
from orao_vrf.models import RequestPayload, SubmissionResult, TransactionOptions
from orao_vrf.utils.logging import get_logger, short_hex
from orao_vrf.utils.validation import validate_address
from orao_vrf.wallets.base import TransactionSigner

_logger = get_logger(__name__)


class LocalAccountSigner(TransactionSigner):
    """
    Signs with a private key held in this process.

    Example:
        ```python
        ledger = AptosRestClient(node_url)
        signer = LocalAccountSigner.from_private_key(os.environ["APTOS_PRIVATE_KEY"], ledger)
        result = await signer.sign_and_submit(build_request_payload())
        ```
    """

    kind = "local"

    def __init__(
        self,
        account: Account,
        ledger: AptosRestClient,
        options: Optional[TransactionOptions] = None,
    ) -> None:
        self._account = account
        self._ledger = ledger
        self._options = options or TransactionOptions()

    @classmethod
    def from_private_key(
        cls,
        private_key: str,
        ledger: AptosRestClient,
        options: Optional[TransactionOptions] = None,
    ) -> LocalAccountSigner:
        """
        Load an ed25519 private key given as hex.

        Raises:
            InvalidArgumentError: If the key cannot be parsed (key not shown)
        """
        try:
            account = Account.load_key(private_key)
        except Exception:
            raise InvalidArgumentError(
                "Invalid private key format (key not shown for security)",
                field="private_key",
            ) from None
        return cls(account, ledger, options)

    @classmethod
    def generate(
        cls,
        ledger: AptosRestClient,
        options: Optional[TransactionOptions] = None,
    ) -> LocalAccountSigner:
        """Create a signer for a fresh random account."""
        return cls(Account.generate(), ledger, options)

    @property
    def account(self) -> Account:
        return self._account

    @property
    def address(self) -> str:
        return validate_address(str(self._account.address()))

    async def get_address(self) -> str:
        return self.address

    async def sign_and_submit(self, payload: RequestPayload) -> SubmissionResult:
        # 1) generate
        try:
            raw = await self._ledger.generate_transaction(self.address, payload, self._options)
        except LedgerApiError as e:
            raise SubmissionRejectedError(
                f"Could not prepare transaction: {e.message}",
                signer=self.kind,
                details={"status_code": e.status_code, "error_code": e.error_code},
            ) from e

        # 2) sign
        try:
            signed = SignedTransaction(raw, self._account.sign_transaction(raw))
        except Exception as e:
            raise SubmissionRejectedError(
                f"Local signing failed: {e}", signer=self.kind
            ) from e

        # 3) submit
        try:
            tx_hash = await self._ledger.submit_transaction(signed)
        except LedgerApiError as e:
            raise SubmissionRejectedError(
                f"Node rejected transaction: {e.message}",
                signer=self.kind,
                details={"status_code": e.status_code, "error_code": e.error_code},
            ) from e

        _logger.debug(
            "Transaction submitted",
            extra={"signer": self.kind, "tx_hash": short_hex(tx_hash), "function": payload.function},
        )
        return SubmissionResult(seed=payload.seed, tx_hash=tx_hash, sender=self.address)
