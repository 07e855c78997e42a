# ABOUTME: Normalization of Weathercloud device lists (nearby, rankings, own and favorite stations).
# ABOUTME: Wraps each entry in a DeviceSummary and optionally sorts the list on one of its keys.

from typing import Any

from weathercloud.errors import FetchFailed
from weathercloud.models import DeviceSummary


def normalize(raw_devices: list[dict[str, Any]], sort_key: str | None = None) -> list[DeviceSummary]:
    """Convert raw device entries into DeviceSummary objects.

    When sort_key is given, the result is sorted ascending on that key. The sort is stable,
    numeric strings compare as numbers, and entries without the key go last. Without a
    sort_key the remote order is kept.
    """
    summaries = []
    for entry in raw_devices:
        if not isinstance(entry, dict):
            raise FetchFailed(f"Device entry is not an object: {entry!r}")
        value = entry.get(sort_key) if sort_key else None
        summaries.append(DeviceSummary(**{**entry, "sort_key": sort_key, "sort_value": value}))

    if sort_key is None:
        return summaries
    return sorted(summaries, key=lambda d: _sort_rank(d.sort_value))


def _sort_rank(value: Any) -> tuple:
    """Order numbers first, then other strings, then missing values."""
    if value is None:
        return (2, 0)
    if isinstance(value, (int, float)):
        return (0, value)
    try:
        return (0, float(value))
    except (TypeError, ValueError):
        return (1, str(value))
