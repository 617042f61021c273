"""
Component metadata: what a section type looks like to the editor.

Each type declares a content schema (``fields``) and a presentation
schema (``style_fields``). Defaults declared on fields are folded into
``default_config`` / ``default_style`` so every schema key has a value
from the moment a section is created.
"""
import copy
from typing import Any, Dict, List, Optional

TEXT = "text"
TEXTAREA = "textarea"
NUMBER = "number"
COLOR = "color"
SELECT = "select"
CHECKBOX = "checkbox"
RADIO = "radio"
IMAGE_URL = "image-url"
LINK = "link"
ARRAY = "array"
OBJECT = "object"

FIELD_KINDS = {
    TEXT, TEXTAREA, NUMBER, COLOR, SELECT, CHECKBOX,
    RADIO, IMAGE_URL, LINK, ARRAY, OBJECT,
}

CATEGORIES = ("navigation", "content", "properties", "forms", "media", "layout")


class SchemaField:
    def __init__(
        self,
        key: str,
        label: str,
        kind: str = TEXT,
        default: Any = None,
        *,
        options: Optional[List[Dict[str, Any]]] = None,
        placeholder: Optional[str] = None,
        description: Optional[str] = None,
        min: Optional[float] = None,
        max: Optional[float] = None,
        required: bool = False,
        item_fields: Optional[List["SchemaField"]] = None,
    ):
        if kind not in FIELD_KINDS:
            raise ValueError(f"Unknown field kind: {kind}")

        self.key = key
        self.label = label
        self.kind = kind
        self.default = default
        self.options = options or []
        self.placeholder = placeholder
        self.description = description
        self.min = min
        self.max = max
        self.required = required
        self.item_fields = item_fields or []

    @property
    def item_schema(self) -> Dict[str, str]:
        """Shape of one array item: sub-key -> kind."""
        return {field.key: field.kind for field in self.item_fields}

    def default_value(self) -> Any:
        return copy.deepcopy(self.default)

    def to_dict(self) -> Dict[str, Any]:
        data: Dict[str, Any] = {
            "key": self.key,
            "label": self.label,
            "type": self.kind,
            "default": copy.deepcopy(self.default),
            "required": self.required,
        }
        if self.options:
            data["options"] = copy.deepcopy(self.options)
        if self.placeholder is not None:
            data["placeholder"] = self.placeholder
        if self.description is not None:
            data["description"] = self.description
        if self.min is not None:
            data["min"] = self.min
        if self.max is not None:
            data["max"] = self.max
        if self.item_fields:
            data["fields"] = [field.to_dict() for field in self.item_fields]
        return data


class ComponentSchema:
    def __init__(
        self,
        fields: Optional[List[SchemaField]] = None,
        style_fields: Optional[List[SchemaField]] = None,
    ):
        self.fields = fields or []
        self.style_fields = style_fields or []

    def to_dict(self) -> Dict[str, Any]:
        return {
            "fields": [f.to_dict() for f in self.fields],
            "styleFields": [f.to_dict() for f in self.style_fields],
        }


def _merge_defaults(fields: List[SchemaField], explicit: Optional[Dict[str, Any]]) -> Dict[str, Any]:
    merged = {field.key: field.default_value() for field in fields}
    merged.update(copy.deepcopy(explicit or {}))
    return merged


class ComponentMetadata:
    def __init__(
        self,
        type: str,
        label: str,
        *,
        icon: str = "",
        category: str = "content",
        description: str = "",
        schema: Optional[ComponentSchema] = None,
        default_config: Optional[Dict[str, Any]] = None,
        default_style: Optional[Dict[str, Any]] = None,
    ):
        if category not in CATEGORIES:
            raise ValueError(f"Unknown component category: {category}")

        self.type = type
        self.label = label
        self.icon = icon
        self.category = category
        self.description = description
        self.schema = schema or ComponentSchema()
        self.default_config = _merge_defaults(self.schema.fields, default_config)
        self.default_style = _merge_defaults(self.schema.style_fields, default_style)

    def new_config(self) -> Dict[str, Any]:
        return copy.deepcopy(self.default_config)

    def new_style(self) -> Dict[str, Any]:
        return copy.deepcopy(self.default_style)

    def resolve_config(self, config: Optional[Dict[str, Any]]) -> Dict[str, Any]:
        return self._resolve(self.default_config, config)

    def resolve_style(self, style: Optional[Dict[str, Any]]) -> Dict[str, Any]:
        return self._resolve(self.default_style, style)

    @staticmethod
    def _resolve(defaults, values):
        # None counts as absent so it never reaches a renderer
        resolved = copy.deepcopy(defaults)
        for key, value in (values or {}).items():
            if value is not None:
                resolved[key] = copy.deepcopy(value)
        return resolved

    def to_dict(self) -> Dict[str, Any]:
        return {
            "type": self.type,
            "label": self.label,
            "icon": self.icon,
            "category": self.category,
            "description": self.description,
            "schema": self.schema.to_dict(),
            "defaultConfig": copy.deepcopy(self.default_config),
            "defaultStyle": copy.deepcopy(self.default_style),
        }
