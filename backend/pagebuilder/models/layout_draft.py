from pagebuilder.extensions import db
from .base import BaseModel


class LayoutDraft(BaseModel):
    __tablename__ = "layout_drafts"

    layout_id = db.Column(db.String(36), db.ForeignKey("layouts.id"), nullable=False, unique=True)
    snapshot = db.Column(db.JSON, nullable=False)

    layout = db.relationship("Layout", back_populates="draft")
