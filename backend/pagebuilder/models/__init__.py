from .layout import Layout
from .layout_draft import LayoutDraft
from .layout_section import LayoutSection

__all__ = ["Layout", "LayoutDraft", "LayoutSection"]
