from contextlib import nullcontext
from typing import Any, Dict
from .load_layout import load_layout
from .save_layout import save_layout


class LayoutStore:
    """
    Persistence backend for ``BuilderSession``.

    Calls run inside ``app``'s application context when one is given;
    otherwise the caller must already be inside one.
    """

    def __init__(self, app=None):
        self.app = app

    def load_layout(self, page_id: str) -> Dict[str, Any]:
        with self._context():
            return load_layout(layout_id=page_id)

    def save_layout(self, page_id: str, payload: Dict[str, Any]) -> None:
        with self._context():
            save_layout(layout_id=page_id, payload=payload)

    def _context(self):
        return self.app.app_context() if self.app is not None else nullcontext()
