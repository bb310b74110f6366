"""Default ordering for searches without relevance ranking."""

from typing import Any

# Tie-break chain, all descending.
SORT_FIELDS = ("batch_starts_at", "weight", "added_to_batch_at")


def sorting_criteria() -> list[dict[str, Any]]:
    """Return the sort clause: newest batch first, then weight, then join time."""
    return [{field: {"order": "desc"}} for field in SORT_FIELDS]
