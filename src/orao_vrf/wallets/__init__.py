"""Signers the ORAO VRF SDK can dispatch transactions through."""

from orao_vrf.wallets.base import PetraWallet, PontemWallet, TransactionSigner
from orao_vrf.wallets.detect import as_signer
from orao_vrf.wallets.extension import PetraSigner, PontemSigner
from orao_vrf.wallets.local import LocalAccountSigner

__all__ = [
    "TransactionSigner",
    "PetraWallet",
    "PontemWallet",
    "LocalAccountSigner",
    "PetraSigner",
    "PontemSigner",
    "as_signer",
]
