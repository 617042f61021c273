from typing import Any, Dict, Optional
from pagebuilder.extensions import db
from pagebuilder.models.base import utc_now
from pagebuilder.models.layout_draft import LayoutDraft
from pagebuilder.utils.optimistic_lock import normalize_ts
from pagebuilder.utils.transaction import transactional
from .load_layout import get_layout


def autosave_layout(*, layout_id: str, payload: Dict[str, Any]) -> LayoutDraft:
    """
    Autosave a draft of a layout.

    Responsibilities:
    - Create or update the single LayoutDraft for the layout
    - Record the draft timestamp
    """
    layout = get_layout(layout_id)
    sections = (payload or {}).get("sections")
    if sections is None:
        raise ValueError("Payload must contain 'sections'")

    draft = LayoutDraft.query.filter_by(layout_id=layout.id).first()

    with transactional():
        if not draft:
            draft = LayoutDraft()
            draft.layout_id = layout.id

        draft.snapshot = {"sections": sections}
        draft.updated_at = utc_now()

        db.session.add(draft)

    return draft


def load_draft(*, layout_id: str) -> Optional[LayoutDraft]:
    layout = get_layout(layout_id)
    return LayoutDraft.query.filter_by(layout_id=layout.id).first()


def should_restore_draft(layout, draft) -> bool:
    """A draft is worth offering only when it is newer than the stored layout."""
    if draft is None or draft.updated_at is None:
        return False
    if layout.updated_at is None:
        return True
    return normalize_ts(draft.updated_at) > normalize_ts(layout.updated_at)
