"""Client-side request pacing for api.weather.gov."""

import asyncio
import logging
import time
from collections.abc import Callable

logger = logging.getLogger(__name__)


class RequestPacer:
    """Spaces consecutive requests at least ``min_interval`` seconds apart.

    A slot is reserved before the first await, so requests scheduled
    concurrently on the same event loop are spaced as well.
    """

    def __init__(
        self,
        min_interval: float,
        clock: Callable[[], float] = time.monotonic,
    ):
        self.min_interval = min_interval
        self._clock = clock
        self._next_slot: float | None = None

    async def wait(self) -> None:
        now = self._clock()
        slot = now if self._next_slot is None else max(now, self._next_slot)
        self._next_slot = slot + self.min_interval
        delay = slot - now
        if delay > 0:
            logger.debug("Pacing request, sleeping %.2fs", delay)
            await asyncio.sleep(delay)
