"""
Debounce timers as explicit state over a pluggable scheduler.

``AsyncioScheduler`` runs on the current asyncio loop; ``ManualScheduler``
keeps a virtual clock that callers advance by hand.
"""
import asyncio
import heapq
import itertools
import logging
from typing import Any, Awaitable, Callable, List, Optional

logger = logging.getLogger(__name__)

IDLE = "idle"
SCHEDULED = "scheduled"
FIRED = "fired"


class AsyncioScheduler:
    def __init__(self, loop: Optional[asyncio.AbstractEventLoop] = None):
        self._loop = loop

    def _get_loop(self):
        return self._loop or asyncio.get_running_loop()

    def call_later(self, delay: float, callback: Callable[[], Any]):
        return self._get_loop().call_later(delay, callback)

    def spawn(self, awaitable: Awaitable):
        return asyncio.ensure_future(awaitable, loop=self._get_loop())


class _ManualTimer:
    def __init__(self, when, seq, callback):
        self.when = when
        self.seq = seq
        self.callback = callback
        self.cancelled = False

    def cancel(self):
        self.cancelled = True

    def __lt__(self, other):
        return (self.when, self.seq) < (other.when, other.seq)


class ManualScheduler:
    """Deterministic scheduler driven by ``advance()`` and ``drain()``."""

    def __init__(self):
        self.now = 0.0
        self._timers: List[_ManualTimer] = []
        self._seq = itertools.count()
        self._spawned: List[Awaitable] = []

    def call_later(self, delay: float, callback: Callable[[], Any]) -> _ManualTimer:
        timer = _ManualTimer(self.now + max(delay, 0.0), next(self._seq), callback)
        heapq.heappush(self._timers, timer)
        return timer

    def spawn(self, awaitable: Awaitable) -> Awaitable:
        self._spawned.append(awaitable)
        return awaitable

    @property
    def pending_timers(self) -> int:
        return sum(1 for timer in self._timers if not timer.cancelled)

    @property
    def pending_tasks(self) -> int:
        return len(self._spawned)

    def advance(self, seconds: float) -> int:
        """Move the clock forward, firing due timers in order. Returns how many fired."""
        deadline = self.now + seconds
        fired = 0
        while self._timers and self._timers[0].when <= deadline:
            timer = heapq.heappop(self._timers)
            if timer.cancelled:
                continue
            self.now = timer.when
            timer.callback()
            fired += 1
        self.now = deadline
        return fired

    async def drain(self) -> None:
        """Await every spawned task, including ones spawned while draining."""
        while self._spawned:
            await self._spawned.pop(0)


class Debouncer:
    """
    Coalesces bursts of ``schedule()`` calls into one callback after
    ``delay`` seconds of quiet. Each reschedule cancels the pending timer.
    """

    def __init__(self, scheduler, delay: float, callback: Callable[[], Any], name: str = "debouncer"):
        self._scheduler = scheduler
        self.delay = delay
        self._callback = callback
        self.name = name
        self.state = IDLE
        self._handle = None

    @property
    def pending(self) -> bool:
        return self.state == SCHEDULED

    def schedule(self) -> None:
        self._cancel_handle()
        self._handle = self._scheduler.call_later(self.delay, self._fire)
        self.state = SCHEDULED

    def cancel(self) -> None:
        if self.pending:
            logger.debug("%s: cancelled pending timer", self.name)
        self._cancel_handle()
        self.state = IDLE

    def flush(self) -> bool:
        """Fire now if a timer is pending."""
        if not self.pending:
            return False
        self._cancel_handle()
        self._fire()
        return True

    def _cancel_handle(self):
        if self._handle is not None:
            self._handle.cancel()
            self._handle = None

    def _fire(self):
        self._handle = None
        self.state = FIRED
        self._callback()
