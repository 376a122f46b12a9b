"""Merging of Task and Event rows into one recent-activity timeline."""

from datetime import datetime, timezone
from typing import Any, Dict, Iterable, List

_OLDEST = datetime.min.replace(tzinfo=timezone.utc)

_TIMESTAMP_FORMATS = (
    "%Y-%m-%dT%H:%M:%S.%f%z",
    "%Y-%m-%dT%H:%M:%S%z",
)


def parse_timestamp(value: Any) -> datetime:
    """
    Parse a Salesforce datetime such as ``2024-01-15T10:30:00.000+0000``.

    Missing or unparseable values sort as the oldest possible instant.
    """
    if not isinstance(value, str) or not value:
        return _OLDEST

    for fmt in _TIMESTAMP_FORMATS:
        try:
            return datetime.strptime(value, fmt)
        except ValueError:
            continue
    try:
        parsed = datetime.fromisoformat(value)
    except ValueError:
        return _OLDEST
    if parsed.tzinfo is None:
        parsed = parsed.replace(tzinfo=timezone.utc)
    return parsed


def merge_recent_activities(
    tasks: Iterable[Dict[str, Any]],
    events: Iterable[Dict[str, Any]],
    limit: int,
) -> List[Dict[str, Any]]:
    """
    Tag rows with their ActivityType, merge them newest first, and truncate.

    Tasks come before events in the merged input, and the sort is stable, so
    rows with equal CreatedDate keep that relative order.
    """
    activities = [{**task, "ActivityType": "Task"} for task in tasks]
    activities.extend({**event, "ActivityType": "Event"} for event in events)
    activities.sort(key=lambda row: parse_timestamp(row.get("CreatedDate")), reverse=True)
    return activities[:limit]
