"""
Fulfillment Waiter for the ORAO VRF SDK.

Polls the randomness store until the oracle fulfills a seed. Only "not yet
fulfilled" is retried; every error ends the wait and propagates unchanged.
Between ticks the waiter suspends on its cancel event, bounded by the poll
interval, so a cancel request ends the wait without another read.
"""

from __future__ import annotations

import asyncio
from enum import Enum
from typing import Optional

from orao_vrf.constants import DEFAULT_POLL_INTERVAL_MS
from orao_vrf.errors import InvalidArgumentError, WaitCancelledError, WaitTimeoutError
from orao_vrf.reader import RandomnessReader
from orao_vrf.utils.logging import get_logger, short_hex
from orao_vrf.utils.validation import BytesLike, to_seed, validate_address

_logger = get_logger(__name__)


class WaitState(str, Enum):
    """Lifecycle of one fulfillment wait."""

    POLLING = "polling"
    DONE = "done"
    FAILED = "failed"
    CANCELLED = "cancelled"
    TIMED_OUT = "timed_out"


class FulfillmentWaiter:
    """
    Waits for the randomness of one (owner, seed) pair.

    Waiters are independent of each other; any number can run concurrently
    in one event loop.

    Example:
        ```python
        waiter = FulfillmentWaiter(reader, owner, seed, timeout_ms=60_000)
        task = asyncio.create_task(waiter.wait())
        ...
        waiter.cancel()  # task raises WaitCancelledError
        ```
    """

    def __init__(
        self,
        reader: RandomnessReader,
        owner: str,
        seed: BytesLike,
        *,
        poll_interval_ms: int = DEFAULT_POLL_INTERVAL_MS,
        timeout_ms: Optional[int] = None,
        cancel_event: Optional[asyncio.Event] = None,
    ) -> None:
        if poll_interval_ms <= 0:
            raise InvalidArgumentError(
                "poll_interval_ms must be positive", field="poll_interval_ms"
            )
        if timeout_ms is not None and timeout_ms <= 0:
            raise InvalidArgumentError("timeout_ms must be positive", field="timeout_ms")

        self._reader = reader
        self._owner = validate_address(owner, "owner")
        self._seed = to_seed(seed)
        self._poll_interval_ms = poll_interval_ms
        self._timeout_ms = timeout_ms
        self._cancel_event = cancel_event or asyncio.Event()
        self.state = WaitState.POLLING
        self.polls = 0

    @property
    def seed_hex(self) -> str:
        return "0x" + self._seed.hex()

    def cancel(self) -> None:
        """Ask the wait to stop; takes effect within one poll interval."""
        self._cancel_event.set()

    async def wait(self) -> bytes:
        """
        Poll until the seed is fulfilled.

        Returns:
            The randomness bytes

        Raises:
            WaitCancelledError: If the cancel event is set
            WaitTimeoutError: If ``timeout_ms`` elapses first
            RecordNotFoundError: If the store or seed entry is absent
            NetworkUnavailableError: If the node cannot be reached
        """
        loop = asyncio.get_running_loop()
        deadline = None
        if self._timeout_ms is not None:
            deadline = loop.time() + self._timeout_ms / 1000

        _logger.info(
            "Waiting for fulfillment",
            extra={"owner": short_hex(self._owner), "seed": short_hex(self.seed_hex)},
        )

        try:
            while True:
                if self._cancel_event.is_set():
                    self.state = WaitState.CANCELLED
                    raise WaitCancelledError("fulfillment", polls=self.polls)

                self.polls += 1
                try:
                    randomness = await self._reader.read(self._owner, self._seed)
                except Exception:
                    self.state = WaitState.FAILED
                    raise

                if randomness is not None:
                    self.state = WaitState.DONE
                    _logger.info(
                        "Randomness fulfilled",
                        extra={"seed": short_hex(self.seed_hex), "polls": self.polls},
                    )
                    return randomness

                _logger.debug(
                    "Not yet fulfilled",
                    extra={"seed": short_hex(self.seed_hex), "polls": self.polls},
                )

                interval = self._poll_interval_ms / 1000
                if deadline is not None:
                    remaining = deadline - loop.time()
                    if remaining <= 0:
                        self.state = WaitState.TIMED_OUT
                        raise WaitTimeoutError("fulfillment", self._timeout_ms)
                    interval = min(interval, remaining)

                # Wait for interval or cancel signal
                try:
                    await asyncio.wait_for(self._cancel_event.wait(), timeout=interval)
                except asyncio.TimeoutError:
                    continue
        except asyncio.CancelledError:
            self.state = WaitState.CANCELLED
            raise


async def await_fulfillment(
    reader: RandomnessReader,
    owner: str,
    seed: BytesLike,
    poll_interval_ms: int = DEFAULT_POLL_INTERVAL_MS,
    timeout_ms: Optional[int] = None,
    cancel_event: Optional[asyncio.Event] = None,
) -> bytes:
    """Poll ``reader`` until (owner, seed) is fulfilled and return the randomness."""
    waiter = FulfillmentWaiter(
        reader,
        owner,
        seed,
        poll_interval_ms=poll_interval_ms,
        timeout_ms=timeout_ms,
        cancel_event=cancel_event,
    )
    return await waiter.wait()
