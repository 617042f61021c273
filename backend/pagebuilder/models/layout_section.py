from pagebuilder.extensions import db
from .base import BaseModel


class LayoutSection(BaseModel):
    __tablename__ = "layout_sections"

    layout_id = db.Column(db.String(36), db.ForeignKey("layouts.id"), nullable=False, index=True)
    section_id = db.Column(db.String(64), nullable=False)  # engine-generated id
    type = db.Column(db.String(100), nullable=False)  # hero, footer, property-grid
    order = db.Column(db.Integer, default=0)
    config = db.Column(db.JSON, default=dict)
    style = db.Column(db.JSON, default=dict)

    layout = db.relationship("Layout", back_populates="sections")

    __table_args__ = (
        db.UniqueConstraint("layout_id", "section_id", name="uq_section_id_per_layout"),
    )
