from typing import Any, Dict, List, Optional
from pagebuilder.extensions import db
from pagebuilder.models.layout import Layout
from pagebuilder.domain.invariants import PageRules
from pagebuilder.utils.transaction import transactional
from .save_layout import apply_sections


def create_layout(
    *,
    name: str,
    slug: str,
    page_type: str = "home",
    rules: Optional[Dict[str, Any]] = None,
    sections: Optional[List[Dict[str, Any]]] = None,
) -> Layout:
    """
    Create a layout record.

    Responsibilities:
    - Reject duplicate slugs
    - Store page rules in their canonical form
    - Seed initial sections (validated and resequenced)
    """
    if not name or not slug:
        raise ValueError("Name and slug are required")

    if Layout.query.filter_by(slug=slug).first():
        raise ValueError("Slug already exists")

    with transactional():
        layout = Layout()
        layout.name = name
        layout.slug = slug
        layout.page_type = page_type
        layout.rules = PageRules.from_dict(rules).to_dict()

        db.session.add(layout)
        db.session.flush()  # ensures layout.id exists

        if sections:
            apply_sections(layout, sections)

    return layout
