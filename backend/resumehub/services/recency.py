"""Recently-used list helpers.

Lists are most-recent-first, de-duplicated and bounded. Both helpers return a
new list so JSON columns see the assignment as a change.
"""


def push_front(items: list[str] | None, item_id: str, cap: int) -> list[str]:
    """Move (or insert) item_id to the front and trim to cap."""
    rest = [i for i in (items or []) if i != item_id]
    deduped = list(dict.fromkeys(rest))
    return ([item_id] + deduped)[:cap]


def remove(items: list[str] | None, item_id: str) -> list[str]:
    return [i for i in (items or []) if i != item_id]
