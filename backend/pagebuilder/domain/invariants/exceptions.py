class InvariantViolation(Exception):
    """Raised when a layout breaks one of its structural invariants."""


class PageRuleViolation(InvariantViolation):
    """Raised when an edit would break a layout's page rules."""


class EmptySaveBlocked(InvariantViolation):
    """Raised when an automatic save would wipe a non-empty stored layout."""
