from typing import Any, Dict
from pagebuilder.models.layout import Layout
from pagebuilder.normalizers.section import normalize_section
from .exceptions import LayoutNotFound


def get_layout(layout_id: str) -> Layout:
    layout = Layout.query.filter_by(id=layout_id).first()
    if layout is None:
        raise LayoutNotFound(layout_id)
    return layout


def load_layout(*, layout_id: str) -> Dict[str, Any]:
    """
    Persisted shape of a layout: ``{"sections": [...], "rules": {...}}``.
    """
    layout = get_layout(layout_id)
    sections = sorted(layout.sections, key=lambda s: s.order)

    return {
        "sections": [normalize_section(s) for s in sections],
        "rules": layout.rules or {},
    }
