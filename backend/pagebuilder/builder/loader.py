import copy
import logging
from typing import List, Optional

from .registry import ComponentRegistry
from .section import Section

logger = logging.getLogger(__name__)


class MountedUnit:
    """Handle for one section rendered into a container slot."""

    def __init__(self, section_id: str, section_type: str, unit, edit_mode: bool, container):
        self.section_id = section_id
        self.section_type = section_type
        self.unit = unit
        self.edit_mode = edit_mode
        self.container = container
        self.html = ""
        self.renders = 0

    def __repr__(self):
        return f"<MountedUnit {self.section_type} id={self.section_id}>"


class Canvas:
    """Ordered container of mounted units; the live page output."""

    def __init__(self):
        self.slots: List[MountedUnit] = []

    def attach(self, handle: MountedUnit) -> None:
        self.slots.append(handle)

    def detach(self, handle: MountedUnit) -> None:
        if handle in self.slots:
            self.slots.remove(handle)

    def clear(self) -> None:
        self.slots = []

    def find(self, section_id: str) -> Optional[MountedUnit]:
        for handle in self.slots:
            if handle.section_id == section_id:
                return handle
        return None

    def html(self) -> str:
        return "\n".join(handle.html for handle in self.slots)

    def __len__(self):
        return len(self.slots)


class ComponentLoader:
    def __init__(self, registry: ComponentRegistry):
        self._registry = registry

    def mount(self, container: Canvas, section: Section, edit_mode: bool = False) -> Optional[MountedUnit]:
        unit = self._registry.get_unit(section.type)
        if unit is None:
            logger.warning("Component type '%s' not found in registry", section.type)
            return None

        handle = MountedUnit(section.id, section.type, unit, edit_mode, container)
        if not self._render(handle, section):
            return None

        container.attach(handle)
        return handle

    def mount_all(self, container: Canvas, sections: List[Section], edit_mode: bool = False) -> List[MountedUnit]:
        container.clear()
        handles = []
        for section in sorted(sections, key=lambda s: s.order):
            handle = self.mount(container, section, edit_mode)
            if handle is not None:
                handles.append(handle)
        return handles

    def update(self, handle: Optional[MountedUnit], section: Section) -> bool:
        if handle is None:
            return False
        return self._render(handle, section)

    def unmount(self, handle: Optional[MountedUnit]) -> None:
        if handle is None:
            return
        handle.container.detach(handle)
        handle.html = ""

    def _render(self, handle, section):
        metadata = self._registry.get(section.type)
        if metadata is not None:
            config = metadata.resolve_config(section.config)
            style = metadata.resolve_style(section.style)
        else:
            config = copy.deepcopy(section.config or {})
            style = copy.deepcopy(section.style or {})

        try:
            html = handle.unit(
                config=config,
                style=style,
                edit_mode=handle.edit_mode,
                section_id=section.id,
            )
        except Exception:
            logger.exception("Rendering section %s (%s) failed", section.id, section.type)
            return False

        handle.html = html
        handle.renders += 1
        return True
