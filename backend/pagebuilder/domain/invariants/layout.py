from typing import Any, Dict, Iterable, Optional, Set

from .exceptions import PageRuleViolation


class PageRules:
    """
    Structural rules a layout may declare.

    - locked_types: sections of these types are never removable
    - required_types: the last section of such a type is not removable
    - max_sections: upper bound on the number of sections
    """

    def __init__(
        self,
        *,
        locked_types: Optional[Iterable[str]] = None,
        required_types: Optional[Iterable[str]] = None,
        max_sections: Optional[int] = None,
    ):
        self.locked_types: Set[str] = set(locked_types or ())
        self.required_types: Set[str] = set(required_types or ())
        self.max_sections = max_sections

    @classmethod
    def from_dict(cls, data: Optional[Dict[str, Any]]) -> "PageRules":
        data = data or {}
        return cls(
            locked_types=data.get("locked_types") or data.get("lockedTypes"),
            required_types=data.get("required_types") or data.get("requiredTypes"),
            max_sections=data.get("max_sections", data.get("maxSections")),
        )

    def to_dict(self) -> Dict[str, Any]:
        return {
            "locked_types": sorted(self.locked_types),
            "required_types": sorted(self.required_types),
            "max_sections": self.max_sections,
        }


def assert_can_add(rules: Optional[PageRules], current_count: int) -> None:
    if rules is None or rules.max_sections is None:
        return

    if current_count + 1 > rules.max_sections:
        raise PageRuleViolation(
            f"Layout cannot hold more than {rules.max_sections} sections."
        )


def assert_can_remove(rules: Optional[PageRules], section, sections) -> None:
    if rules is None:
        return

    if section.type in rules.locked_types:
        raise PageRuleViolation(f"Sections of type '{section.type}' are locked.")

    if section.type in rules.required_types:
        remaining = [s for s in sections if s.type == section.type and s.id != section.id]
        if not remaining:
            raise PageRuleViolation(
                f"Layout requires at least one '{section.type}' section."
            )


def assert_can_replace(rules: Optional[PageRules], current, incoming) -> None:
    """
    Rules for a wholesale change coming from outside the model: the list
    may not grow past the cap, and no locked section or last required
    type may disappear.
    """
    if rules is None:
        return

    if (
        rules.max_sections is not None
        and len(incoming) > rules.max_sections
        and len(incoming) > len(current)
    ):
        raise PageRuleViolation(
            f"Layout cannot hold more than {rules.max_sections} sections."
        )

    incoming_ids = {s.id for s in incoming}
    incoming_types = {s.type for s in incoming}

    for section in current:
        if section.type in rules.locked_types and section.id not in incoming_ids:
            raise PageRuleViolation(f"Sections of type '{section.type}' are locked.")
        if section.type in rules.required_types and section.type not in incoming_types:
            raise PageRuleViolation(
                f"Layout requires at least one '{section.type}' section."
            )
