"""Recurrence pattern helpers for the command line."""

from taskboard_cli.models import Recurrence

# Maps human-friendly names to recurrence rules.
RECURRENCE_PATTERNS: dict[str, Recurrence] = {
    "daily": Recurrence(type="daily"),
    "weekly": Recurrence(type="weekly"),
    "bi-weekly": Recurrence(type="weekly", interval=2),
    "monthly": Recurrence(type="monthly"),
    "quarterly": Recurrence(type="monthly", interval=3),
    "annually": Recurrence(type="annually"),
    "yearly": Recurrence(type="annually"),
}

VALID_PATTERNS = list(RECURRENCE_PATTERNS.keys())


def resolve_recurrence(pattern: str, day_of_month: int | None = None) -> Recurrence | None:
    """Convert a pattern name to a recurrence rule.

    Args:
        pattern: Pattern name (e.g., "daily", "bi-weekly")
        day_of_month: Optional target day, only kept for monthly rules

    Returns:
        Recurrence rule, or None if pattern is not recognized
    """
    rule = RECURRENCE_PATTERNS.get(pattern.lower())
    if rule is None:
        return None
    if day_of_month is not None and rule.type == "monthly":
        return rule.model_copy(update={"day_of_month": day_of_month})
    return rule


def describe_recurrence(rule: Recurrence) -> str:
    """Convert a recurrence rule back to a human-readable description."""
    unit = {"daily": "day", "weekly": "week", "monthly": "month", "annually": "year"}[rule.type]
    text = f"every {unit}" if rule.interval == 1 else f"every {rule.interval} {unit}s"
    if rule.day_of_month is not None and rule.type == "monthly":
        text += f" on day {rule.day_of_month}"
    return text
