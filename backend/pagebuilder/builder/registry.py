from typing import Callable, Dict, List, Optional

from .metadata import ComponentMetadata

# Render units take keyword inputs (config, style, edit_mode, section_id)
RenderUnit = Callable[..., str]


class RegistryEntry:
    def __init__(self, unit: RenderUnit, metadata: ComponentMetadata):
        self.unit = unit
        self.metadata = metadata


class ComponentRegistry:
    """
    Static catalog: section type -> render unit and editable schema.

    Lookups of unregistered types return None; callers decide how to
    degrade.
    """

    def __init__(self):
        self._entries: Dict[str, RegistryEntry] = {}

    def register(self, component_type: str, unit: RenderUnit, metadata: ComponentMetadata) -> None:
        self._entries[component_type] = RegistryEntry(unit, metadata)

    def get(self, component_type: str) -> Optional[ComponentMetadata]:
        entry = self._entries.get(component_type)
        return entry.metadata if entry else None

    def get_unit(self, component_type: str) -> Optional[RenderUnit]:
        entry = self._entries.get(component_type)
        return entry.unit if entry else None

    def has(self, component_type: str) -> bool:
        return component_type in self._entries

    def all_types(self) -> List[str]:
        return list(self._entries)

    def all_metadata(self) -> List[ComponentMetadata]:
        return [entry.metadata for entry in self._entries.values()]

    def by_category(self, category: str) -> List[ComponentMetadata]:
        return [meta for meta in self.all_metadata() if meta.category == category]

    def __len__(self):
        return len(self._entries)

    def __contains__(self, component_type):
        return self.has(component_type)


# Process-wide default registry
registry = ComponentRegistry()


def register(component_type: str, unit: RenderUnit, metadata: ComponentMetadata) -> None:
    registry.register(component_type, unit, metadata)


def get_metadata(component_type: str) -> Optional[ComponentMetadata]:
    return registry.get(component_type)
