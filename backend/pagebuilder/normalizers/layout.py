from typing import Any, Dict

from .section import normalize_section


def normalize_layout(layout, include_sections=True) -> Dict[str, Any]:
    data = {
        "id": layout.id,
        "name": layout.name,
        "slug": layout.slug,
        "page_type": layout.page_type,
        "rules": layout.rules or {},
        "updated_at": layout.updated_at.isoformat() if layout.updated_at else None,
    }

    if include_sections:
        sections = sorted(layout.sections, key=lambda s: s.order)
        data["sections"] = [normalize_section(s) for s in sections]

    return data


def normalize_draft(draft) -> Dict[str, Any]:
    return {
        "layout_id": draft.layout_id,
        "snapshot": draft.snapshot or {"sections": []},
        "updated_at": draft.updated_at.isoformat() if draft.updated_at else None,
    }
