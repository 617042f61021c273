"""
In-memory node tree shaped like the external editor's component model.

Live editor nodes expose ``type``, ``parent``, ``get_attributes()`` and
``set_attributes()``; ``DocumentNode`` provides the same surface for
documents materialised from project JSON.
"""
import copy
from typing import Any, Dict, Iterator, List, Optional

WRAPPER_TYPE = "wrapper"


class DocumentNode:
    def __init__(
        self,
        type: str = "default",
        attributes: Optional[Dict[str, Any]] = None,
        components: Optional[List["DocumentNode"]] = None,
        parent: Optional["DocumentNode"] = None,
        **props: Any,
    ):
        self.type = type
        self._attributes = dict(attributes or {})
        self.parent = parent
        self.props = props
        self.components: List["DocumentNode"] = []
        for child in components or []:
            self.append(child)

    def get_attributes(self) -> Dict[str, Any]:
        return dict(self._attributes)

    def set_attributes(self, attributes: Dict[str, Any], silent: bool = False) -> None:
        self._attributes = dict(attributes)

    def append(self, child: "DocumentNode") -> "DocumentNode":
        child.parent = self
        self.components.append(child)
        return child

    def remove(self, child: "DocumentNode") -> None:
        self.components.remove(child)
        child.parent = None

    def index(self, child: "DocumentNode") -> int:
        for position, node in enumerate(self.components):
            if node is child:
                return position
        return -1

    def walk(self) -> Iterator["DocumentNode"]:
        yield self
        for child in self.components:
            yield from child.walk()

    def to_dict(self) -> Dict[str, Any]:
        data: Dict[str, Any] = {"type": self.type}
        if self._attributes:
            data["attributes"] = dict(self._attributes)
        if self.components:
            data["components"] = [child.to_dict() for child in self.components]
        data.update(copy.deepcopy(self.props))
        return data

    @classmethod
    def from_dict(cls, data: Dict[str, Any], parent: Optional["DocumentNode"] = None) -> "DocumentNode":
        extra = {
            key: copy.deepcopy(value)
            for key, value in data.items()
            if key not in ("type", "attributes", "components")
        }
        node = cls(data.get("type") or "default", data.get("attributes"), parent=parent, **extra)

        children = data.get("components")
        if isinstance(children, list):
            for child in children:
                if isinstance(child, dict):
                    node.append(cls.from_dict(child))
        return node

    def __repr__(self):
        return f"<DocumentNode {self.type} children={len(self.components)}>"


def top_level_components(project: Any) -> List[Any]:
    try:
        components = project["pages"][0]["frames"][0]["component"]["components"]
    except (KeyError, IndexError, TypeError):
        return []
    return components if isinstance(components, list) else []


def project_envelope(components: List[Dict[str, Any]]) -> Dict[str, Any]:
    return {
        "pages": [
            {
                "frames": [
                    {
                        "component": {
                            "type": WRAPPER_TYPE,
                            "components": components,
                        }
                    }
                ]
            }
        ]
    }


def wrapper_from_project(project: Dict[str, Any]) -> DocumentNode:
    """Build the live root wrapper of a serialized project."""
    return DocumentNode(
        WRAPPER_TYPE,
        components=[DocumentNode.from_dict(c) for c in top_level_components(project) if isinstance(c, dict)],
    )
