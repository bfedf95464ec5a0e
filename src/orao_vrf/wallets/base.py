"""
Signer interface for the ORAO VRF SDK.

Every supported wallet is one explicit ``TransactionSigner`` variant with a
common ``sign_and_submit(payload) -> SubmissionResult`` capability. The
external wallet adapters the extension variants wrap are described by the
``PetraWallet`` and ``PontemWallet`` protocols.
"""

from __future__ import annotations

import inspect
from abc import ABC, abstractmethod
from typing import Any, ClassVar, Dict, Optional, Protocol, runtime_checkable

from orao_vrf.config import NetworkDescriptor
from orao_vrf.models import RequestPayload, SubmissionResult


@runtime_checkable
class PetraWallet(Protocol):
    """Extension wallet whose sign call returns the pending transaction itself."""

    async def connect(self) -> Dict[str, str]:
        """Returns ``{"address", "publicKey"}``."""
        ...

    async def is_connected(self) -> bool:
        ...

    async def disconnect(self) -> None:
        ...

    async def account(self) -> Dict[str, str]:
        """Returns ``{"address", "publicKey"}``."""
        ...

    async def network(self) -> str:
        """Returns a network name such as ``"Devnet"``."""
        ...

    async def sign_and_submit_transaction(self, payload: Dict[str, Any]) -> Dict[str, Any]:
        """Returns ``{"hash", "sender", "payload", "signature", ...}``."""
        ...


@runtime_checkable
class PontemWallet(Protocol):
    """Extension wallet whose sign call wraps the pending transaction in ``result``."""

    async def connect(self) -> Any:
        ...

    async def is_connected(self) -> Any:
        ...

    async def disconnect(self) -> Any:
        ...

    async def account(self) -> str:
        ...

    async def network(self) -> Dict[str, Any]:
        """Returns ``{"api", "chainId", "name"}``."""
        ...

    async def sign_and_submit(self, payload: Dict[str, Any]) -> Dict[str, Any]:
        """Returns ``{"payload", "result": {"hash", ...}}``."""
        ...


async def resolve(value: Any) -> Any:
    """Await ``value`` if the adapter handed back an awaitable."""
    if inspect.isawaitable(value):
        return await value
    return value


class TransactionSigner(ABC):
    """
    A signer able to get an oracle payload onto the chain.

    Subclasses normalize their backend's response into a SubmissionResult.
    They do not wait for inclusion; the dispatcher does.
    """

    kind: ClassVar[str] = "signer"

    @abstractmethod
    async def get_address(self) -> str:
        """Address of the account that signs."""

    @abstractmethod
    async def sign_and_submit(self, payload: RequestPayload) -> SubmissionResult:
        """
        Sign ``payload`` and hand it to the network.

        Raises:
            SubmissionRejectedError: If signing or submission is refused
            NetworkUnavailableError: If the node cannot be reached
        """

    async def get_network(self) -> Optional[NetworkDescriptor]:
        """Network the signer is attached to, when it knows."""
        return None
