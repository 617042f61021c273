from .autosave_layout import autosave_layout, load_draft, should_restore_draft
from .create_layout import create_layout
from .exceptions import LayoutNotFound
from .load_layout import get_layout, load_layout
from .save_layout import save_layout
from .store import LayoutStore

__all__ = [
    "LayoutNotFound",
    "LayoutStore",
    "autosave_layout",
    "create_layout",
    "get_layout",
    "load_draft",
    "load_layout",
    "save_layout",
    "should_restore_draft",
]
