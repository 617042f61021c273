import logging
from typing import Any, Dict, List
from pagebuilder.builder.section import Section
from pagebuilder.domain.invariants import PageRules, PageRuleViolation, assert_sections
from pagebuilder.models.base import utc_now
from pagebuilder.models.layout import Layout
from pagebuilder.models.layout_section import LayoutSection
from pagebuilder.utils.transaction import transactional
from pagebuilder.utils.versioning import restore_sections
from .load_layout import get_layout

logger = logging.getLogger(__name__)


def apply_sections(layout: Layout, items: List[Dict[str, Any]]) -> List[Section]:
    """
    Replace the layout's sections with ``items``.

    Rows are matched on section id so a re-save updates in place instead
    of deleting and re-inserting the same id.
    """
    sections = restore_sections([Section.from_dict(item) for item in items])
    assert_sections(sections)

    rules = PageRules.from_dict(layout.rules)
    if rules.max_sections is not None and len(sections) > rules.max_sections:
        raise PageRuleViolation(
            f"Layout cannot hold more than {rules.max_sections} sections."
        )

    # Rows left out of the new list are removed by the delete-orphan cascade
    existing = {row.section_id: row for row in layout.sections}
    rows = []
    for section in sections:
        row = existing.pop(section.id, None)
        if row is None:
            row = LayoutSection()
            row.section_id = section.id
        row.type = section.type
        row.order = section.order
        row.config = section.config
        row.style = section.style
        rows.append(row)

    layout.sections = rows
    layout.updated_at = utc_now()
    return sections


def save_layout(*, layout_id: str, payload: Dict[str, Any]) -> Layout:
    """
    Persist a full section list for a layout.

    Responsibilities:
    - Validate ids and ordering before touching stored rows
    - Enforce the layout's max_sections rule
    - Replace sections wholesale, resequenced
    """
    layout = get_layout(layout_id)
    items = (payload or {}).get("sections")
    if items is None:
        raise ValueError("Payload must contain 'sections'")

    with transactional():
        sections = apply_sections(layout, items)

    logger.info("layout %s saved with %s sections", layout.id, len(sections))
    return layout
