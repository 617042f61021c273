import logging
from typing import Any, Callable, List, Optional

from .adapter import ExternalEditorAdapter, node_parent, node_type
from .registry import ComponentRegistry
from .scheduling import Debouncer
from .section import Section

logger = logging.getLogger(__name__)

CHANGE_EVENTS = ("component:remove", "component:update", "component:drag:end")


class EditorBridge:
    """
    Subscribes to an external editor's event stream.

    The editor is expected to provide ``on(event, handler)``,
    ``get_project_data()`` and ``load_project_data(project)``. Bursts of
    change events are coalesced into a single re-derive of the section
    list, delivered to ``on_layout_change``.
    """

    def __init__(
        self,
        adapter: ExternalEditorAdapter,
        registry: ComponentRegistry,
        scheduler,
        *,
        on_layout_change: Callable[[List[Section]], Any],
        on_select: Callable[[Optional[Section]], Any],
        delay: float = 0.1,
    ):
        self._adapter = adapter
        self._registry = registry
        self._on_layout_change = on_layout_change
        self._on_select = on_select
        self._editor = None
        self._debouncer = Debouncer(scheduler, delay, self._emit_layout, name="editor")

    @property
    def editor(self):
        return self._editor

    @property
    def pending(self) -> bool:
        return self._debouncer.pending

    def bind(self, editor) -> None:
        self._editor = editor
        editor.on("component:add", self.handle_add)
        for event in CHANGE_EVENTS:
            editor.on(event, self.handle_change)
        editor.on("component:selected", self.handle_selected)
        editor.on("component:deselected", self.handle_deselected)

    def cancel(self) -> None:
        self._debouncer.cancel()

    # ------------------------
    # Event handlers
    # ------------------------

    def handle_add(self, node: Any = None, *args: Any) -> None:
        section_type = node_type(node) if node is not None else None
        if section_type and self._registry.has(section_type):
            self._adapter.ensure_section_attributes(node, self._adapter.defaults_for(section_type))
        self._debouncer.schedule()

    def handle_change(self, *args: Any) -> None:
        self._debouncer.schedule()

    def handle_selected(self, node: Any = None, *args: Any) -> None:
        owner = self._adapter.resolve_owning_section(node)
        if owner is None:
            self._on_select(None)
            return

        self._on_select(self._adapter.node_to_section(owner, self._top_level_position(owner)))

    def handle_deselected(self, *args: Any) -> None:
        self._on_select(None)

    # ------------------------
    # Internals
    # ------------------------

    def _top_level_position(self, node) -> int:
        parent = node_parent(node)
        siblings = getattr(parent, "components", None) if parent is not None else None
        if siblings is None:
            return 0
        if callable(siblings):
            siblings = siblings()

        # Position among section-carrying siblings, matching import order
        position = 0
        for sibling in siblings:
            if sibling is node:
                return position
            if self._adapter.node_to_section(sibling, 0) is not None:
                position += 1
        return 0

    def _emit_layout(self) -> None:
        if self._editor is None:
            return
        project = self._editor.get_project_data()
        sections = self._adapter.to_section_model(project)
        logger.debug("editor document re-derived into %s sections", len(sections))
        self._on_layout_change(sections)
