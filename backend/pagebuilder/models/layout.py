from pagebuilder.extensions import db
from .base import BaseModel


class Layout(BaseModel):
    __tablename__ = "layouts"

    name = db.Column(db.String(200), nullable=False)
    slug = db.Column(db.String(200), nullable=False, unique=True, index=True)
    page_type = db.Column(db.String(50), default="home", index=True)
    rules = db.Column(db.JSON(none_as_null=True), default=dict)

    # Relationship to sections (ordered, cascade deletes)
    sections = db.relationship(
        "LayoutSection",
        back_populates="layout",
        order_by="LayoutSection.order",
        cascade="all, delete-orphan"
    )

    draft = db.relationship(
        "LayoutDraft",
        back_populates="layout",
        uselist=False,
        cascade="all, delete-orphan"
    )
