"""Pick the signer variant for an untyped wallet object."""

from __future__ import annotations

from typing import Any, Optional

from aptos_sdk.account import Account

from orao_vrf.errors import InvalidArgumentError
from orao_vrf.ledger.rest_client import AptosRestClient
from orao_vrf.models import TransactionOptions
from orao_vrf.wallets.base import TransactionSigner
from orao_vrf.wallets.extension import PetraSigner, PontemSigner
from orao_vrf.wallets.local import LocalAccountSigner


def as_signer(
    wallet: Any,
    ledger: Optional[AptosRestClient] = None,
    options: Optional[TransactionOptions] = None,
) -> TransactionSigner:
    """
    Inspect ``wallet`` once and wrap it in the matching signer.

    Args:
        wallet: A TransactionSigner, an ``aptos_sdk`` Account, or an
            extension adapter
        ledger: REST client, required for local accounts
        options: Transaction options for local accounts

    Raises:
        InvalidArgumentError: If no sign-and-submit capability is found
    """
    if isinstance(wallet, TransactionSigner):
        return wallet
    if isinstance(wallet, Account):
        if ledger is None:
            raise InvalidArgumentError("A ledger client is required to sign locally", field="ledger")
        return LocalAccountSigner(wallet, ledger, options)
    if callable(getattr(wallet, "sign_and_submit_transaction", None)):
        return PetraSigner(wallet)
    if callable(getattr(wallet, "sign_and_submit", None)):
        return PontemSigner(wallet)
    raise InvalidArgumentError(
        f"Unsupported wallet {type(wallet).__name__}: no sign-and-submit capability",
        field="wallet",
    )
