import copy
import random
import string
import time
from typing import Any, Dict, Optional

_ID_ALPHABET = string.ascii_lowercase + string.digits
_last_stamp = 0


def generate_section_id(prefix: str = "section") -> str:
    """
    Session-unique section id: monotonic nanosecond stamp plus a short
    random suffix. Not suitable where unguessable ids are needed.
    """
    global _last_stamp

    stamp = max(time.time_ns(), _last_stamp + 1)
    _last_stamp = stamp
    suffix = "".join(random.choices(_ID_ALPHABET, k=7))
    return f"{prefix}-{stamp:x}-{suffix}"


def _as_dict(value: Any) -> Dict[str, Any]:
    return dict(value) if isinstance(value, dict) else {}


class Section:
    """One placed, ordered, typed instance of a component on a page."""

    def __init__(
        self,
        id: str,
        type: str,
        order: int = 0,
        config: Optional[Dict[str, Any]] = None,
        style: Optional[Dict[str, Any]] = None,
    ):
        self.id = id
        self.type = type
        self.order = order
        self.config = _as_dict(config)
        self.style = _as_dict(style)

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "Section":
        if not isinstance(data, dict) or not data.get("id") or not data.get("type"):
            raise ValueError("Section requires both id and type")

        order = data.get("order")
        try:
            order = int(order) if order is not None else 0
        except (TypeError, ValueError):
            raise ValueError(f"Section order must be an integer, got {order!r}") from None

        return cls(
            id=str(data["id"]),
            type=str(data["type"]),
            order=order,
            config=copy.deepcopy(_as_dict(data.get("config"))),
            style=copy.deepcopy(_as_dict(data.get("style"))),
        )

    def to_dict(self) -> Dict[str, Any]:
        return {
            "id": self.id,
            "type": self.type,
            "order": self.order,
            "config": copy.deepcopy(self.config),
            "style": copy.deepcopy(self.style),
        }

    def copy(self) -> "Section":
        return Section(
            id=self.id,
            type=self.type,
            order=self.order,
            config=copy.deepcopy(self.config),
            style=copy.deepcopy(self.style),
        )

    def __eq__(self, other):
        if not isinstance(other, Section):
            return NotImplemented
        return self.to_dict() == other.to_dict()

    def __repr__(self):
        return f"<Section {self.type} id={self.id} order={self.order}>"
