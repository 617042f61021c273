"""
Host-facing builder session.

One session edits one page at a time. Every model change goes through
the same listener, which schedules a history snapshot, marks the page
dirty for autosave, re-seeds a bound external editor and notifies the
host. The section list is the source of truth; the external editor's
document is derived from it.
"""
import logging
from typing import Any, Callable, Dict, List, Mapping, Optional

from pagebuilder.domain.invariants import (
    EmptySaveBlocked,
    InvariantViolation,
    PageRules,
    assert_sections,
)
from pagebuilder.utils.versioning import restore_sections

from .adapter import ExternalEditorAdapter
from .autosave import AutoSavePolicy, resolve
from .blocks import BlockCatalogBuilder
from .editor_bridge import EditorBridge
from .history import HistoryManager
from .loader import Canvas, ComponentLoader
from .property_editor import PropertyEditor, PropertyEditorGenerator
from .registry import ComponentRegistry, registry as default_registry
from .scheduling import AsyncioScheduler
from .section import Section
from .section_model import SELECTED, SectionModel

logger = logging.getLogger(__name__)

SectionsListener = Callable[[List[Section]], Any]
SelectionListener = Callable[[Optional[Section]], Any]


class BuilderSession:
    def __init__(
        self,
        page_id: Optional[str] = None,
        *,
        registry: Optional[ComponentRegistry] = None,
        persistence=None,
        scheduler=None,
        rules: Optional[PageRules] = None,
        history_delay: float = 0.3,
        history_limit: Optional[int] = None,
        autosave_delay: float = 0.8,
        autosave_enabled: bool = True,
        editor_delay: float = 0.1,
    ):
        self.page_id = page_id
        self.registry = registry if registry is not None else default_registry
        self.scheduler = scheduler if scheduler is not None else AsyncioScheduler()
        self._persistence = persistence

        self.model = SectionModel(self.registry, rules=rules)
        self.history = HistoryManager(
            self.model, self.scheduler, delay=history_delay, limit=history_limit
        )
        self.autosave = AutoSavePolicy(
            self._persist, self.scheduler, delay=autosave_delay, enabled=autosave_enabled
        )
        self.adapter = ExternalEditorAdapter(self.registry)
        self.loader = ComponentLoader(self.registry)
        self.editors = PropertyEditorGenerator(self.registry, self.model)
        self.catalog = BlockCatalogBuilder(self.registry)
        self.canvas = Canvas()
        self.bridge = EditorBridge(
            self.adapter,
            self.registry,
            self.scheduler,
            on_layout_change=self._apply_editor_layout,
            on_select=self._apply_editor_selection,
            delay=editor_delay,
        )

        self._sections_listeners: List[SectionsListener] = []
        self._selection_listeners: List[SelectionListener] = []
        self._from_editor = False
        self._exporting = False
        self._last_saved_count = 0

        self.model.subscribe(self._on_model_change)
        self.history.reset()

    @classmethod
    def from_config(cls, config: Mapping[str, Any], **kwargs) -> "BuilderSession":
        """Build a session from BUILDER_* configuration keys (milliseconds)."""
        options: Dict[str, Any] = {
            "history_delay": config.get("BUILDER_HISTORY_DEBOUNCE_MS", 300) / 1000.0,
            "autosave_delay": config.get("BUILDER_AUTOSAVE_DEBOUNCE_MS", 800) / 1000.0,
            "editor_delay": config.get("BUILDER_EDITOR_DEBOUNCE_MS", 100) / 1000.0,
            "autosave_enabled": config.get("BUILDER_AUTOSAVE_ENABLED", True),
        }
        max_sections = config.get("BUILDER_MAX_SECTIONS")
        if max_sections is not None and "rules" not in kwargs:
            options["rules"] = PageRules(max_sections=int(max_sections))
        options.update(kwargs)
        return cls(**options)

    # ------------------------
    # State
    # ------------------------

    @property
    def sections(self) -> List[Section]:
        return [section.copy() for section in self.model.sections]

    @property
    def selected_section(self) -> Optional[Section]:
        selected = self.model.selected
        return selected.copy() if selected else None

    @property
    def can_undo(self) -> bool:
        return self.history.can_undo

    @property
    def can_redo(self) -> bool:
        return self.history.can_redo

    @property
    def has_unsaved_changes(self) -> bool:
        return self.autosave.dirty

    @property
    def last_saved_at(self):
        return self.autosave.last_saved_at

    # ------------------------
    # Notifications
    # ------------------------

    def on_sections_changed(self, listener: SectionsListener) -> Callable[[], None]:
        self._sections_listeners.append(listener)
        return lambda: self._sections_listeners.remove(listener)

    def on_selection_changed(self, listener: SelectionListener) -> Callable[[], None]:
        self._selection_listeners.append(listener)
        return lambda: self._selection_listeners.remove(listener)

    def _emit_sections(self):
        sections = self.sections
        for listener in list(self._sections_listeners):
            listener(sections)

    def _emit_selection(self):
        selected = self.selected_section
        for listener in list(self._selection_listeners):
            listener(selected)

    def _on_model_change(self, kind: str, model: SectionModel) -> None:
        if kind == SELECTED:
            self._emit_selection()
            return

        self.history.schedule_record()
        self.autosave.mark_dirty()
        if not self._from_editor:
            self.push_to_editor()
        self._emit_sections()

    # ------------------------
    # Section operations
    # ------------------------

    def add_section(self, component_type: str) -> Section:
        return self.model.add(component_type).copy()

    def remove_section(self, section_id: str) -> bool:
        return self.model.remove(section_id)

    def duplicate_section(self, section_id: str) -> Optional[Section]:
        clone = self.model.duplicate(section_id)
        return clone.copy() if clone else None

    def reorder_section(self, from_index: int, to_index: int) -> bool:
        return self.model.reorder(from_index, to_index)

    def select_section(self, section_id: Optional[str]) -> Optional[Section]:
        self.model.select(section_id)
        return self.selected_section

    def update_section_config(self, section_id: str, patch: Dict[str, Any]) -> Optional[Section]:
        section = self.model.update_config(section_id, patch)
        return section.copy() if section else None

    def update_section_style(self, section_id: str, patch: Dict[str, Any]) -> Optional[Section]:
        section = self.model.update_style(section_id, patch)
        return section.copy() if section else None

    def undo(self) -> bool:
        return self.history.undo()

    def redo(self) -> bool:
        return self.history.redo()

    def reset_history(self) -> None:
        """New undo floor at the current model; dirty and last-saved are cleared."""
        self.history.reset()
        self.autosave.reset()

    def property_editor(self, section_id: Optional[str] = None) -> Optional[PropertyEditor]:
        return self.editors.inspect(section_id or self.model.selected_id)

    # ------------------------
    # Persistence
    # ------------------------

    async def save(self, silent: bool = False) -> bool:
        return await self.autosave.save(silent=silent)

    async def _persist(self, silent: bool) -> None:
        if self._persistence is None:
            raise RuntimeError("BuilderSession has no persistence backend")

        page_id = self.page_id
        payload = {"sections": self.model.to_list()}

        if silent and not payload["sections"] and self._last_saved_count:
            logger.warning("Blocked empty autosave over %s saved sections", self._last_saved_count)
            raise EmptySaveBlocked("Refusing to autosave an empty layout over saved content")

        await resolve(self._persistence.save_layout(page_id, payload))
        self._last_saved_count = len(payload["sections"])

    async def load_page(self, page_id: str) -> List[Section]:
        """
        Replace the whole model with a stored layout. Failures propagate
        and leave the current page untouched.
        """
        if self._persistence is None:
            raise RuntimeError("BuilderSession has no persistence backend")

        payload = await resolve(self._persistence.load_layout(page_id)) or {}
        incoming = restore_sections([Section.from_dict(item) for item in payload.get("sections") or []])
        assert_sections(incoming)

        # Nothing from the previous page may fire against the new one
        self.cancel_pending()

        if payload.get("rules") is not None:
            self.model.rules = PageRules.from_dict(payload["rules"])

        self.page_id = page_id
        self.model.replace(incoming, notify=False)
        self.model.selected_id = None
        self.editors.inspect(None)
        self.reset_history()
        self._last_saved_count = len(incoming)

        self.push_to_editor()
        self._emit_sections()
        self._emit_selection()
        return self.sections

    def cancel_pending(self) -> None:
        self.history.cancel()
        self.autosave.cancel()
        self.bridge.cancel()

    def close(self) -> None:
        self.cancel_pending()

    # ------------------------
    # External editor
    # ------------------------

    def to_external_document(self) -> Dict[str, Any]:
        return self.adapter.to_external_document(self.model.sections)

    def load_from_external_document(self, document: Any) -> List[Section]:
        self.model.replace(self.adapter.to_section_model(document), check_rules=True)
        return self.sections

    def bind_editor(self, editor) -> None:
        self.bridge.bind(editor)
        self.push_to_editor()

    def push_to_editor(self) -> None:
        editor = self.bridge.editor
        if editor is None or self._exporting:
            return

        self._exporting = True
        try:
            editor.load_project_data(self.to_external_document())
        finally:
            # Events raised by the reload describe our own state
            self.bridge.cancel()
            self._exporting = False

    def _apply_editor_layout(self, sections: List[Section]) -> None:
        if self._exporting:
            return
        if self.model.matches(sections):
            logger.debug("Editor document matches the model; nothing to apply")
            return

        self._from_editor = True
        try:
            self.model.replace(sections, check_rules=True)
        except InvariantViolation as exc:
            logger.warning("Editor document rejected (%s); re-seeding from the model", exc)
            rejected = True
        else:
            rejected = False
        finally:
            self._from_editor = False

        if rejected:
            self.push_to_editor()

    def _apply_editor_selection(self, section: Optional[Section]) -> None:
        self.model.select(section.id if section else None)

    # ------------------------
    # Rendering
    # ------------------------

    def render(self, edit_mode: bool = False) -> str:
        self.loader.mount_all(self.canvas, self.model.sections, edit_mode=edit_mode)
        return self.canvas.html()

    def block_catalog(self) -> List[Dict[str, Any]]:
        return self.catalog.build()
