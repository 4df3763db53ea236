"""Debounced stop search.

Bursts of keystrokes collapse into one search for the latest value, and
only the most recently issued search may deliver its result.
"""

import asyncio
import logging
from collections.abc import Awaitable, Callable
from typing import Generic, TypeVar

logger = logging.getLogger(__name__)

T = TypeVar("T")

DEFAULT_QUIET_PERIOD = 0.5


class SearchDebouncer(Generic[T]):
    """Schedules a search no more than once per quiet period.

    Each trigger() restarts the quiet period. When a quiet period passes
    without another trigger, the search is issued with the latest value and
    stamped with the next generation number. Completed searches whose
    generation is no longer the latest are discarded, so a slow response for
    an older query never replaces the result of a newer one. In-flight
    searches are not cancelled.

    Must be used from within a running event loop.
    """

    def __init__(
        self,
        search: Callable[[str], Awaitable[T]],
        on_complete: Callable[[str, T], None],
        quiet_period: float = DEFAULT_QUIET_PERIOD,
    ):
        """Initialize the debouncer.

        Args:
            search: Coroutine function issued with the debounced value.
            on_complete: Called with (value, result) for the latest search only.
            quiet_period: Seconds without a trigger before the search is issued.
        """
        self._search = search
        self._on_complete = on_complete
        self._quiet_period = quiet_period
        self._timer: asyncio.Task | None = None
        self._in_flight: set[asyncio.Task] = set()
        self._generation = 0

    @property
    def generation(self) -> int:
        """Generation number of the most recently issued search (0 if none)."""
        return self._generation

    @property
    def pending(self) -> bool:
        """True while a trigger is waiting out its quiet period."""
        return self._timer is not None and not self._timer.done()

    def trigger(self, value: str) -> None:
        """Restart the quiet period with a new value."""
        self.cancel()
        self._timer = asyncio.create_task(self._wait_then_issue(value))

    def cancel(self) -> None:
        """Drop the pending trigger, if any. Issued searches keep running."""
        if self._timer is not None and not self._timer.done():
            self._timer.cancel()
        self._timer = None

    async def drain(self) -> None:
        """Wait until no trigger is pending and no search is in flight."""
        while True:
            outstanding = [
                task
                for task in (self._timer, *self._in_flight)
                if task is not None and not task.done()
            ]
            if not outstanding:
                return
            await asyncio.gather(*outstanding, return_exceptions=True)

    async def _wait_then_issue(self, value: str) -> None:
        await asyncio.sleep(self._quiet_period)
        self._timer = None
        self._issue(value)

    def _issue(self, value: str) -> None:
        self._generation += 1
        generation = self._generation
        logger.debug(f"Issuing search #{generation} for {value!r}")

        task = asyncio.create_task(self._run(generation, value))
        self._in_flight.add(task)
        task.add_done_callback(self._in_flight.discard)

    async def _run(self, generation: int, value: str) -> None:
        try:
            result = await self._search(value)
        except Exception as e:
            # terminal for this attempt; the next trigger starts over
            logger.warning(f"Search #{generation} for {value!r} failed: {e}")
            return

        if generation != self._generation:
            logger.debug(
                f"Discarding stale search #{generation} for {value!r} "
                f"(latest is #{self._generation})"
            )
            return

        self._on_complete(value, result)
