"""
Schema-driven property editor.

Reads a section through its metadata schema, presents each field with a
value coerced to the field's kind, and writes edits back through the
section model. Array fields are always replaced wholesale so the model
never shares a list with the form.
"""
import copy
import logging
import re
from typing import Any, Dict, List, Optional

from pagebuilder.utils.style_validation import is_safe_css_value

from . import metadata as kinds
from .metadata import ComponentMetadata, SchemaField
from .registry import ComponentRegistry
from .section_model import SectionModel

logger = logging.getLogger(__name__)

CONTENT_TAB = "content"
STYLE_TAB = "style"
TABS = (CONTENT_TAB, STYLE_TAB)

FALLBACK_COLOR = "#ffffff"
_HEX6 = re.compile(r"^#[0-9a-fA-F]{6}$")
_HEX3 = re.compile(r"^#[0-9a-fA-F]{3}$")
_TRUTHY = {"true", "1", "on", "yes", "checked"}


def normalize_color(value: Any, fallback: str = FALLBACK_COLOR) -> str:
    """
    Colour as a colour input can display it: ``#rrggbb``. Transparent,
    empty and non-hex values fall back.
    """
    if not isinstance(value, str):
        return fallback
    text = value.strip()
    if _HEX6.match(text):
        return text.lower()
    if _HEX3.match(text):
        return "#" + "".join(ch * 2 for ch in text[1:]).lower()
    return fallback


def coerce_value(field: SchemaField, raw: Any) -> Any:
    """Convert a raw form value to the field's kind. Raises ValueError when impossible."""
    if field.kind == kinds.NUMBER:
        if isinstance(raw, bool):
            raise ValueError(f"{field.key}: expected a number")
        number = float(raw)
        if number != number:
            raise ValueError(f"{field.key}: expected a number")
        return number

    if field.kind == kinds.CHECKBOX:
        if isinstance(raw, str):
            return raw.strip().lower() in _TRUTHY
        return bool(raw)

    if field.kind in (kinds.SELECT, kinds.RADIO):
        # Option values may be numbers; match on their string form
        for option in field.options:
            if str(option.get("value")) == str(raw):
                return copy.deepcopy(option.get("value"))
        return raw

    if field.kind in (kinds.ARRAY, kinds.OBJECT):
        return copy.deepcopy(raw)

    if raw is None:
        return ""
    return raw if isinstance(raw, str) else str(raw)


def present_value(field: SchemaField, value: Any) -> Any:
    if field.kind == kinds.COLOR:
        return normalize_color(value)
    if field.kind == kinds.CHECKBOX:
        return bool(value)
    if field.kind == kinds.NUMBER:
        try:
            return float(value)
        except (TypeError, ValueError):
            return field.default
    if field.kind == kinds.ARRAY:
        return copy.deepcopy(value) if isinstance(value, list) else []
    return copy.deepcopy(value)


class EditorField:
    def __init__(self, field: SchemaField, tab: str, value: Any):
        self.field = field
        self.tab = tab
        self.value = value

    @property
    def key(self) -> str:
        return self.field.key

    @property
    def kind(self) -> str:
        return self.field.kind

    def to_dict(self) -> Dict[str, Any]:
        data = self.field.to_dict()
        data["tab"] = self.tab
        data["value"] = copy.deepcopy(self.value)
        return data


class PropertyEditor:
    """Editable form bound to one section."""

    def __init__(self, model: SectionModel, metadata: ComponentMetadata, section_id: str):
        self._model = model
        self.metadata = metadata
        self.section_id = section_id
        self.active_tab = CONTENT_TAB

    @property
    def section(self):
        return self._model.get(self.section_id)

    def set_tab(self, tab: str) -> None:
        if tab not in TABS:
            raise ValueError(f"Unknown tab: {tab}")
        self.active_tab = tab

    def schema_fields(self, tab: str) -> List[SchemaField]:
        schema = self.metadata.schema
        return list(schema.style_fields if tab == STYLE_TAB else schema.fields)

    def read_value(self, field: SchemaField) -> Any:
        section = self.section
        config = section.config if section else {}
        style = section.style if section else {}

        value = config.get(field.key)
        if value is None:
            value = style.get(field.key)
        if value is None:
            value = field.default_value()
        return present_value(field, value)

    def fields(self, tab: Optional[str] = None) -> List[EditorField]:
        tab = tab or self.active_tab
        return [EditorField(field, tab, self.read_value(field)) for field in self.schema_fields(tab)]

    def form(self) -> Dict[str, Any]:
        return {
            "section_id": self.section_id,
            "type": self.metadata.type,
            "label": self.metadata.label,
            "active_tab": self.active_tab,
            "tabs": {tab: [f.to_dict() for f in self.fields(tab)] for tab in TABS},
        }

    def find_field(self, key: str, tab: Optional[str] = None):
        tabs = (tab,) if tab else TABS
        for candidate in tabs:
            for field in self.schema_fields(candidate):
                if field.key == key:
                    return field, candidate
        raise KeyError(f"Field '{key}' is not declared by '{self.metadata.type}'")

    def change(self, key: str, raw_value: Any, tab: Optional[str] = None) -> bool:
        """
        Apply one form edit. Returns False when the value cannot be
        coerced or is unsafe; the model is left untouched in that case.
        """
        field, tab = self.find_field(key, tab)
        try:
            value = coerce_value(field, raw_value)
        except (TypeError, ValueError):
            logger.debug("Ignoring invalid value %r for %s", raw_value, key)
            return False

        return self._write(field, tab, value)

    # ------------------------
    # Array-of-object fields
    # ------------------------

    def add_item(self, key: str) -> bool:
        field, tab = self._array_field(key)
        items = self._items(field)
        items.append({sub_key: "" for sub_key in field.item_schema})
        return self._write(field, tab, items)

    def remove_item(self, key: str, index: int) -> bool:
        field, tab = self._array_field(key)
        items = self._items(field)
        if not 0 <= index < len(items):
            return False
        del items[index]
        return self._write(field, tab, items)

    def update_item(self, key: str, index: int, sub_key: str, value: Any) -> bool:
        field, tab = self._array_field(key)
        items = self._items(field)
        if not 0 <= index < len(items):
            return False

        item = items[index] if isinstance(items[index], dict) else {}
        items[index] = {**item, sub_key: value}
        return self._write(field, tab, items)

    def _array_field(self, key):
        field, tab = self.find_field(key)
        if field.kind != kinds.ARRAY:
            raise ValueError(f"Field '{key}' is not an array field")
        return field, tab

    def _items(self, field) -> List[Any]:
        current = self.read_value(field)
        return [copy.deepcopy(item) for item in current]

    def _write(self, field, tab, value) -> bool:
        if self.section is None:
            return False

        if tab == STYLE_TAB:
            if not is_safe_css_value(value):
                return False
            self._model.update_style(self.section_id, {field.key: value})
        else:
            self._model.update_config(self.section_id, {field.key: value})
        return True


class PropertyEditorGenerator:
    """Produces the property editor for whichever section is inspected."""

    def __init__(self, registry: ComponentRegistry, model: SectionModel):
        self._registry = registry
        self._model = model
        self.current: Optional[PropertyEditor] = None

    def inspect(self, section_id: Optional[str]) -> Optional[PropertyEditor]:
        section = self._model.get(section_id) if section_id else None
        if section is None:
            self.current = None
            return None

        if self.current is not None and self.current.section_id == section_id:
            return self.current

        metadata = self._registry.get(section.type)
        if metadata is None:
            logger.info("No editable schema for section type '%s'", section.type)
            self.current = None
            return None

        # A new editor always opens on the content tab
        self.current = PropertyEditor(self._model, metadata, section_id)
        return self.current
