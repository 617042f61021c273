import logging
from typing import List, Optional

from pagebuilder.utils.versioning import restore_sections, snapshot_sections

from .scheduling import Debouncer
from .section import Section
from .section_model import SectionModel

logger = logging.getLogger(__name__)

IDLE = "idle"
RECORDING_SCHEDULED = "recording-scheduled"
RESTORING = "restoring"


class HistoryManager:
    """
    Linear undo/redo over full-model snapshots.

    ``stack[cursor]`` always mirrors the live model once settled. Recording
    after an undo discards the redo branch. While a snapshot is being
    restored, ``record()`` is a no-op so the restore never lands in
    history as a new edit.
    """

    def __init__(
        self,
        model: SectionModel,
        scheduler,
        *,
        delay: float = 0.3,
        limit: Optional[int] = None,
    ):
        self._model = model
        self._stack: List[List[Section]] = []
        self._cursor = -1
        self._restoring = False
        self.limit = limit
        self._debouncer = Debouncer(scheduler, delay, self.record, name="history")

    @property
    def state(self) -> str:
        if self._restoring:
            return RESTORING
        if self._debouncer.pending:
            return RECORDING_SCHEDULED
        return IDLE

    @property
    def cursor(self) -> int:
        return self._cursor

    def __len__(self):
        return len(self._stack)

    @property
    def can_undo(self) -> bool:
        return self._cursor > 0

    @property
    def can_redo(self) -> bool:
        return 0 <= self._cursor < len(self._stack) - 1

    def record(self) -> bool:
        if self._restoring:
            return False

        del self._stack[self._cursor + 1:]
        self._stack.append(snapshot_sections(self._model.sections))

        if self.limit is not None and len(self._stack) > self.limit:
            del self._stack[: len(self._stack) - self.limit]

        self._cursor = len(self._stack) - 1
        return True

    def schedule_record(self) -> None:
        if self._restoring:
            return
        self._debouncer.schedule()

    def undo(self) -> bool:
        # A pending edit is settled first so it is the one being undone
        self._debouncer.flush()
        if self._cursor <= 0:
            return False
        self._restore(self._cursor - 1)
        return True

    def redo(self) -> bool:
        self._debouncer.flush()
        if self._cursor >= len(self._stack) - 1:
            return False
        self._restore(self._cursor + 1)
        return True

    def reset(self) -> None:
        """Drop all history and record the current model as the new floor."""
        self._debouncer.cancel()
        self._stack = []
        self._cursor = -1
        self.record()

    def cancel(self) -> None:
        self._debouncer.cancel()

    def _restore(self, index: int) -> None:
        self._restoring = True
        try:
            self._model.replace(restore_sections(self._stack[index]))
            self._model.clear_selection()
            self._cursor = index
        finally:
            self._restoring = False

        logger.debug("history restored snapshot %s of %s", index, len(self._stack))
