"""
Bidirectional translation between the section list and the external
editor's project document.

A section travels through the editor as three string attributes on a
top-level node: its id, its JSON-encoded config and its JSON-encoded
style. Nodes without the id attribute are layout chrome, not sections.

Project envelope::

    {"pages": [{"frames": [{"component": {"type": "wrapper",
                                          "components": [...]}}]}]}
"""
import json
import logging
from typing import Any, Dict, List, Optional

from .document import WRAPPER_TYPE, project_envelope, top_level_components
from .registry import ComponentRegistry
from .section import Section, generate_section_id

logger = logging.getLogger(__name__)

ID_ATTR = "data-section-id"
CONFIG_ATTR = "data-config"
STYLE_ATTR = "data-style"


def safe_parse(value: Any) -> Dict[str, Any]:
    """
    Best-effort decode of an attribute payload. Anything unusable
    becomes an empty dict.
    """
    if not value:
        return {}
    if isinstance(value, dict):
        return dict(value)
    if not isinstance(value, str):
        return {}

    try:
        parsed = json.loads(value)
    except (TypeError, ValueError):
        logger.warning("Malformed section attribute JSON ignored: %.80r", value)
        return {}

    return parsed if isinstance(parsed, dict) else {}


def node_type(node: Any) -> Optional[str]:
    if isinstance(node, dict):
        return node.get("type")
    return getattr(node, "type", None)


def node_attributes(node: Any) -> Dict[str, Any]:
    if node is None:
        return {}
    if isinstance(node, dict):
        return dict(node.get("attributes") or {})
    getter = getattr(node, "get_attributes", None)
    return dict(getter() or {}) if callable(getter) else {}


def set_node_attributes(node: Any, attributes: Dict[str, Any], silent: bool = False) -> None:
    if isinstance(node, dict):
        node["attributes"] = attributes
    else:
        node.set_attributes(attributes, silent=silent)


def node_parent(node: Any) -> Any:
    if isinstance(node, dict):
        return None
    parent = getattr(node, "parent", None)
    return parent() if callable(parent) else parent


class ExternalEditorAdapter:
    def __init__(self, registry: Optional[ComponentRegistry] = None):
        self._registry = registry

    # ------------------------
    # Export
    # ------------------------

    def section_to_node(self, section: Section) -> Dict[str, Any]:
        return {
            "type": section.type,
            "attributes": {
                ID_ATTR: section.id,
                CONFIG_ATTR: json.dumps(section.config or {}),
                STYLE_ATTR: json.dumps(section.style or {}),
            },
        }

    def to_external_document(self, sections: List[Section]) -> Dict[str, Any]:
        ordered = sorted(sections, key=lambda s: s.order)
        return project_envelope([self.section_to_node(s) for s in ordered])

    # ------------------------
    # Import
    # ------------------------

    def to_section_model(self, document: Any) -> List[Section]:
        nodes = [n for n in top_level_components(document) if node_attributes(n).get(ID_ATTR)]
        return [self._section_from(node, order) for order, node in enumerate(nodes)]

    def node_to_section(self, node: Any, order: int) -> Optional[Section]:
        if node is None or node_type(node) == WRAPPER_TYPE:
            return None
        if not node_attributes(node).get(ID_ATTR):
            return None
        return self._section_from(node, order)

    def _section_from(self, node, order):
        attrs = node_attributes(node)
        section_type = node_type(node) or "default"
        if self._registry is not None and not self._registry.has(section_type):
            logger.info("Importing section of unregistered type '%s'", section_type)

        return Section(
            id=str(attrs[ID_ATTR]),
            type=section_type,
            order=order,
            config=safe_parse(attrs.get(CONFIG_ATTR)),
            style=safe_parse(attrs.get(STYLE_ATTR)),
        )

    # ------------------------
    # Live nodes
    # ------------------------

    def resolve_owning_section(self, node: Any) -> Any:
        """Nearest ancestor-or-self carrying a section id, else None."""
        current = node
        while current is not None:
            if node_attributes(current).get(ID_ATTR):
                return current
            current = node_parent(current)
        return None

    def defaults_for(self, section_type: Optional[str]) -> Dict[str, Dict[str, Any]]:
        metadata = self._registry.get(section_type) if self._registry and section_type else None
        if metadata is None:
            return {"config": {}, "style": {}}
        return {"config": metadata.new_config(), "style": metadata.new_style()}

    def ensure_section_attributes(self, node: Any, defaults: Optional[Dict[str, Any]] = None) -> Optional[str]:
        """
        Give a freshly dropped node a section identity. Existing
        attributes are kept; only missing ones are filled.
        """
        if node is None:
            return None

        if defaults is None:
            defaults = self.defaults_for(node_type(node))

        attrs = node_attributes(node)
        section_id = attrs.get(ID_ATTR) or generate_section_id()
        set_node_attributes(
            node,
            {
                **attrs,
                ID_ATTR: section_id,
                CONFIG_ATTR: attrs.get(CONFIG_ATTR) or json.dumps(defaults.get("config") or {}),
                STYLE_ATTR: attrs.get(STYLE_ATTR) or json.dumps(defaults.get("style") or {}),
            },
        )
        return section_id

    def update_node_data(self, node: Any, section: Section, silent: bool = False) -> None:
        if node is None:
            return
        attrs = node_attributes(node)
        set_node_attributes(
            node,
            {
                **attrs,
                ID_ATTR: section.id,
                CONFIG_ATTR: json.dumps(section.config or {}),
                STYLE_ATTR: json.dumps(section.style or {}),
            },
            silent=silent,
        )
