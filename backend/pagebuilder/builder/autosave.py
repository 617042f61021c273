import inspect
import logging
from datetime import datetime, timezone
from typing import Any, Awaitable, Callable, Optional, Union

from .scheduling import Debouncer

logger = logging.getLogger(__name__)

SaveCallback = Callable[[bool], Union[Any, Awaitable[Any]]]


async def resolve(result):
    """Await ``result`` if it is awaitable, otherwise return it as is."""
    if inspect.isawaitable(result):
        return await result
    return result


class AutoSavePolicy:
    """
    Debounce-then-persist.

    Every dirtying edit reschedules the timer. When it fires, the save
    callback runs unless nothing is dirty or a save is already in flight.
    Silent saves never raise: failures are logged and the dirty flag
    stays set so the next edit or a manual save retries.
    """

    def __init__(
        self,
        save_callback: SaveCallback,
        scheduler,
        *,
        delay: float = 0.8,
        enabled: bool = True,
    ):
        self._save_callback = save_callback
        self._scheduler = scheduler
        self.enabled = enabled
        self.dirty = False
        self.saving = False
        self.last_saved_at: Optional[datetime] = None
        self.last_error: Optional[BaseException] = None
        self._generation = 0
        self._debouncer = Debouncer(scheduler, delay, self._on_fire, name="autosave")

    @property
    def pending(self) -> bool:
        return self._debouncer.pending

    def mark_dirty(self) -> None:
        self.dirty = True
        self._generation += 1
        if self.enabled:
            self._debouncer.schedule()

    def cancel(self) -> None:
        self._debouncer.cancel()

    def reset(self) -> None:
        self.cancel()
        self.dirty = False
        self.last_saved_at = None
        self.last_error = None

    def _on_fire(self) -> None:
        if not self.dirty or self.saving:
            return
        self._scheduler.spawn(self.save(silent=True))

    async def save(self, silent: bool = False) -> bool:
        if self.saving:
            logger.debug("save skipped: another save is in flight")
            return False

        generation = self._generation
        self.saving = True
        try:
            await resolve(self._save_callback(silent))
        except Exception as exc:
            self.last_error = exc
            if not silent:
                raise
            logger.exception("Autosave failed; changes remain unsaved")
            return False
        finally:
            self.saving = False

        self.last_error = None
        self.last_saved_at = datetime.now(timezone.utc)

        if generation == self._generation:
            self.dirty = False
        elif self.enabled:
            # Edited while the save was in flight
            self._debouncer.schedule()

        return True
