from .exceptions import EmptySaveBlocked, InvariantViolation, PageRuleViolation
from .section import assert_sections, assert_section_order, assert_unique_ids
from .layout import PageRules, assert_can_add, assert_can_remove, assert_can_replace

__all__ = [
    "EmptySaveBlocked",
    "InvariantViolation",
    "PageRuleViolation",
    "PageRules",
    "assert_sections",
    "assert_section_order",
    "assert_unique_ids",
    "assert_can_add",
    "assert_can_remove",
    "assert_can_replace",
]
