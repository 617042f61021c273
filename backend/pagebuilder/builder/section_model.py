import logging
from typing import Any, Callable, Dict, List, Optional

from pagebuilder.domain.invariants import (
    PageRules,
    assert_can_add,
    assert_can_remove,
    assert_can_replace,
    assert_sections,
)
from pagebuilder.utils.order import resequence, sort_by_order

from .registry import ComponentRegistry
from .section import Section, generate_section_id

logger = logging.getLogger(__name__)

# Change kinds passed to listeners
ADDED = "add"
REMOVED = "remove"
REORDERED = "reorder"
DUPLICATED = "duplicate"
UPDATED = "update"
REPLACED = "replace"
SELECTED = "select"

Listener = Callable[[str, "SectionModel"], Any]


class SectionModel:
    """
    Ordered sections of one page plus the current selection.

    After every structural change the list is resequenced so that
    ``order`` always equals list position.
    """

    def __init__(
        self,
        registry: ComponentRegistry,
        *,
        rules: Optional[PageRules] = None,
        sections: Optional[List[Section]] = None,
    ):
        self._registry = registry
        self.rules = rules
        self._sections: List[Section] = []
        self.selected_id: Optional[str] = None
        self._listeners: List[Listener] = []

        if sections:
            self.replace(sections, notify=False)

    # ------------------------
    # Read access
    # ------------------------

    @property
    def sections(self) -> List[Section]:
        return list(self._sections)

    def __len__(self):
        return len(self._sections)

    def __iter__(self):
        return iter(list(self._sections))

    def get(self, section_id: str) -> Optional[Section]:
        for section in self._sections:
            if section.id == section_id:
                return section
        return None

    def index_of(self, section_id: str) -> int:
        for index, section in enumerate(self._sections):
            if section.id == section_id:
                return index
        return -1

    @property
    def selected(self) -> Optional[Section]:
        if self.selected_id is None:
            return None
        return self.get(self.selected_id)

    def to_list(self) -> List[Dict[str, Any]]:
        return [section.to_dict() for section in self._sections]

    # ------------------------
    # Listeners
    # ------------------------

    def subscribe(self, listener: Listener) -> Callable[[], None]:
        self._listeners.append(listener)

        def unsubscribe():
            if listener in self._listeners:
                self._listeners.remove(listener)

        return unsubscribe

    def _notify(self, kind: str) -> None:
        for listener in list(self._listeners):
            listener(kind, self)

    # ------------------------
    # Structural mutations
    # ------------------------

    def add(self, component_type: str) -> Section:
        assert_can_add(self.rules, len(self._sections))

        metadata = self._registry.get(component_type)
        if metadata is None:
            logger.warning("Adding section of unregistered type '%s'", component_type)
            config, style = {}, {}
        else:
            config, style = metadata.new_config(), metadata.new_style()

        section = Section(
            id=generate_section_id(),
            type=component_type,
            order=len(self._sections),
            config=config,
            style=style,
        )
        self._sections.append(section)
        self._settle()
        self._notify(ADDED)
        return section

    def remove(self, section_id: str) -> bool:
        section = self.get(section_id)
        if section is None:
            return False

        assert_can_remove(self.rules, section, self._sections)

        self._sections.remove(section)
        self._settle()

        if self.selected_id == section_id:
            self.selected_id = None
            self._notify(SELECTED)

        self._notify(REMOVED)
        return True

    def reorder(self, from_index: int, to_index: int) -> bool:
        count = len(self._sections)
        if not (0 <= from_index < count and 0 <= to_index < count):
            logger.debug("Ignoring reorder %s -> %s on %s sections", from_index, to_index, count)
            return False
        if from_index == to_index:
            return False

        section = self._sections.pop(from_index)
        self._sections.insert(to_index, section)
        self._settle()
        self._notify(REORDERED)
        return True

    def duplicate(self, section_id: str) -> Optional[Section]:
        original = self.get(section_id)
        if original is None:
            return None

        assert_can_add(self.rules, len(self._sections))

        clone = original.copy()
        clone.id = generate_section_id()
        clone.order = original.order + 1

        self._sections.insert(self.index_of(original.id) + 1, clone)
        self._settle()
        self._notify(DUPLICATED)
        return clone

    # ------------------------
    # Content mutations
    # ------------------------

    def update_config(self, section_id: str, patch: Dict[str, Any]) -> Optional[Section]:
        section = self.get(section_id)
        if section is None:
            return None

        section.config = {**section.config, **(patch or {})}
        self._notify(UPDATED)
        return section

    def update_style(self, section_id: str, patch: Dict[str, Any]) -> Optional[Section]:
        section = self.get(section_id)
        if section is None:
            return None

        section.style = {**section.style, **(patch or {})}
        self._notify(UPDATED)
        return section

    def select(self, section_id: Optional[str]) -> Optional[Section]:
        if section_id is not None and self.get(section_id) is None:
            section_id = None

        if section_id != self.selected_id:
            self.selected_id = section_id
            self._notify(SELECTED)

        return self.selected

    # ------------------------
    # Wholesale replacement
    # ------------------------

    def replace(
        self, sections: List[Section], *, notify: bool = True, check_rules: bool = False
    ) -> None:
        """
        Install a new section list, sorted by order and resequenced.

        Invariants are checked before anything is touched, so a bad list
        leaves the current model as it was. ``check_rules`` applies the
        page rules relative to the current list; it is meant for edits
        made outside the model, such as in the external editor.
        """
        incoming = sort_by_order([section.copy() for section in sections])
        assert_sections(incoming)
        if check_rules:
            assert_can_replace(self.rules, self._sections, incoming)

        self._sections = incoming
        if self.selected_id is not None and self.get(self.selected_id) is None:
            self.selected_id = None

        if notify:
            self._notify(REPLACED)

    def matches(self, sections: List[Section]) -> bool:
        """True when ``sections`` holds the same content as the model, in order."""
        incoming = sorted(sections, key=lambda section: section.order or 0)
        if len(incoming) != len(self._sections):
            return False
        return all(
            (a.id, a.type, a.config, a.style) == (b.id, b.type, b.config, b.style)
            for a, b in zip(incoming, self._sections)
        )

    def clear_selection(self) -> None:
        self.select(None)

    def _settle(self):
        resequence(self._sections)
        assert_sections(self._sections)
