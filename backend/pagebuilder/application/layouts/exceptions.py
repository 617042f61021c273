class LayoutNotFound(LookupError):
    """Raised when a layout id does not resolve to a stored layout."""

    def __init__(self, layout_id):
        super().__init__(f"Layout '{layout_id}' not found")
        self.layout_id = layout_id
