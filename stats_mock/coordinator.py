"""Batch dispatch coordinator.

Coalesces bursts of submitted tokens into batches and fans them back out
with independent, jittered delays:

  submit(token) -> buffered -> quiet period elapses -> batch closes
  -> shuffled, each token scheduled after uniform(min_delay, max_delay)
  -> token published -> matching await_completion(token) resumes

A batch closes only after `quiet_period` seconds without any submission,
so a burst becomes one batch and isolated submissions become singleton
batches. Batches may overlap: a new batch can accumulate and close while
tokens of earlier batches are still waiting for their delay.

All state is mutated from event loop callbacks (`loop.call_later`), so the
coordinator is safe for any number of concurrent request handlers on one
loop. It is not thread-safe.
"""

from __future__ import annotations

import asyncio
import logging
import random
from enum import Enum
from typing import Any, Callable

from .errors import DispatchTimeoutError, DuplicateTokenError


log = logging.getLogger("stats_mock.coordinator")

Listener = Callable[[str], Any]


class DispatchState(str, Enum):
    IDLE = "IDLE"
    ACCUMULATING = "ACCUMULATING"
    DRAINING = "DRAINING"


class BatchDispatchCoordinator:
    """Quiet-period batching with per-token randomized redispatch.

    Timings are in seconds. `rng` may be passed for reproducible shuffles
    and delays.
    """

    def __init__(
        self,
        *,
        quiet_period: float = 1.0,
        min_delay: float = 1.0,
        max_delay: float = 3.0,
        rng: random.Random | None = None,
    ) -> None:
        if quiet_period < 0:
            raise ValueError(f"quiet_period must be >= 0, got {quiet_period!r}")
        if min_delay < 0 or max_delay < 0:
            raise ValueError(f"delays must be >= 0, got {min_delay!r}..{max_delay!r}")
        if min_delay > max_delay:
            raise ValueError(f"min_delay {min_delay!r} is greater than max_delay {max_delay!r}")

        self.quiet_period = float(quiet_period)
        self.min_delay = float(min_delay)
        self.max_delay = float(max_delay)
        self._rng = rng if rng is not None else random.Random()

        # Inbound side: tokens received since the last batch closed.
        self._buffer: list[str] = []
        self._buffered: set[str] = set()
        self._idle_timer: asyncio.TimerHandle | None = None

        # Outbound side: tokens of closed batches waiting for their delay.
        self._pending: dict[str, asyncio.TimerHandle] = {}

        self._waiters: dict[str, asyncio.Future[str]] = {}
        self._listeners: list[Listener] = []

        self.batches_closed = 0
        self.dispatched = 0

    @property
    def state(self) -> DispatchState:
        if self._buffer:
            return DispatchState.ACCUMULATING
        if self._pending:
            return DispatchState.DRAINING
        return DispatchState.IDLE

    def in_flight(self, token: str) -> bool:
        return token in self._buffered or token in self._pending

    def add_listener(self, callback: Listener) -> None:
        """Observe every token published on the outbound stream."""

        self._listeners.append(callback)

    def submit(self, token: str) -> None:
        """Append `token` to the current batch and restart the quiet period.

        Must be called from a coroutine or callback running on the event loop.
        """

        if self.in_flight(token):
            raise DuplicateTokenError(token, "is already in flight")

        loop = asyncio.get_running_loop()
        self._buffer.append(token)
        self._buffered.add(token)

        if self._idle_timer is not None:
            self._idle_timer.cancel()
        self._idle_timer = loop.call_later(self.quiet_period, self._close_batch)
        log.debug("buffered token=%s batch_size=%d", token, len(self._buffer))

    async def await_completion(self, token: str, timeout: float | None = None) -> str:
        """Suspend until `token` is published, then return it.

        Without a timeout this waits forever if the token never shows up.
        With one, DispatchTimeoutError is raised once it elapses; the token
        itself stays scheduled and other waiters are not affected.
        """

        if token in self._waiters:
            raise DuplicateTokenError(token, "is already awaited")

        loop = asyncio.get_running_loop()
        future: asyncio.Future[str] = loop.create_future()
        self._waiters[token] = future
        try:
            if timeout is None:
                return await future
            try:
                return await asyncio.wait_for(future, timeout)
            except asyncio.TimeoutError as exc:
                raise DispatchTimeoutError(token, timeout) from exc
        finally:
            if self._waiters.get(token) is future:
                del self._waiters[token]

    def snapshot(self) -> dict[str, Any]:
        return {
            "state": self.state.value,
            "buffered": len(self._buffer),
            "pending": len(self._pending),
            "waiters": len(self._waiters),
            "batchesClosed": self.batches_closed,
            "dispatched": self.dispatched,
            "quietPeriodMs": round(self.quiet_period * 1000),
            "jitterMs": [round(self.min_delay * 1000), round(self.max_delay * 1000)],
        }

    def _close_batch(self) -> None:
        self._idle_timer = None
        batch = self._buffer
        self._buffer = []
        self._buffered = set()
        if not batch:
            return

        self.batches_closed += 1
        self._rng.shuffle(batch)
        loop = asyncio.get_running_loop()
        for token in batch:
            delay = self._rng.uniform(self.min_delay, self.max_delay)
            self._pending[token] = loop.call_later(delay, self._dispatch, token)
        log.info("closed batch #%d size=%d", self.batches_closed, len(batch))

    def _dispatch(self, token: str) -> None:
        self._pending.pop(token, None)
        self.dispatched += 1

        future = self._waiters.pop(token, None)
        if future is None:
            log.debug("dispatched token=%s with no waiter", token)
        elif not future.done():
            future.set_result(token)
            log.debug("dispatched token=%s", token)

        for listener in list(self._listeners):
            try:
                listener(token)
            except Exception:  # noqa: BLE001
                log.exception("dispatch listener failed for token=%s", token)
