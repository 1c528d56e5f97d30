"""Task identifier derivation."""

import re

_CAMEL_BOUNDARY = re.compile(r"([a-z0-9])([A-Z])")
_NON_ALNUM = re.compile(r"[^a-z0-9]+")


def task_id_from_name(name: str) -> str:
    """Derive a param-case task id from a task name.

    ``"Write report"`` and ``"WriteReport"`` both become ``"write-report"``.
    The id is computed once at creation and never recomputed on rename.

    Args:
        name: Task name

    Returns:
        Lower-case, hyphen separated identifier
    """
    spaced = _CAMEL_BOUNDARY.sub(r"\1 \2", name)
    return _NON_ALNUM.sub("-", spaced.lower()).strip("-")


def unique_task_id(base: str, taken: set[str] | dict) -> str:
    """Return *base*, or *base* with the lowest free ``-N`` suffix (N >= 2).

    Recurring tasks share their name with the predecessor, so the successor
    needs a distinct id derived from the same name.
    """
    if base not in taken:
        return base
    suffix = 2
    while f"{base}-{suffix}" in taken:
        suffix += 1
    return f"{base}-{suffix}"
