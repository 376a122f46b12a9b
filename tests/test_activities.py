"""Tests for merging Task and Event rows into the activity timeline."""

from datetime import datetime, timezone

from salesforce_mcp.adapters.activities import merge_recent_activities, parse_timestamp


def test_parse_salesforce_timestamp():
    parsed = parse_timestamp("2024-01-15T10:30:00.000+0000")
    assert parsed == datetime(2024, 1, 15, 10, 30, tzinfo=timezone.utc)


def test_parse_iso_timestamp_without_offset():
    """Naive timestamps are treated as UTC."""
    assert parse_timestamp("2024-01-15T10:30:00") == datetime(
        2024, 1, 15, 10, 30, tzinfo=timezone.utc
    )


def test_unparseable_timestamps_sort_oldest():
    oldest = parse_timestamp(None)
    assert parse_timestamp("yesterday") == oldest
    assert parse_timestamp("") == oldest
    assert oldest < parse_timestamp("1970-01-01T00:00:00.000+0000")


def test_merge_sorts_newest_first_and_tags():
    tasks = [
        {"Id": "T1", "CreatedDate": "2024-01-01T00:00:00.000+0000"},
        {"Id": "T2", "CreatedDate": "2024-01-03T00:00:00.000+0000"},
    ]
    events = [{"Id": "E1", "CreatedDate": "2024-01-02T00:00:00.000+0000"}]

    merged = merge_recent_activities(tasks, events, 10)

    assert [row["Id"] for row in merged] == ["T2", "E1", "T1"]
    assert [row["ActivityType"] for row in merged] == ["Task", "Event", "Task"]


def test_merge_truncates_to_limit():
    """3 tasks + 4 events with limit 5 keeps the five newest."""
    tasks = [
        {"Id": f"T{day}", "CreatedDate": f"2024-01-{day:02d}T00:00:00.000+0000"}
        for day in (1, 3, 5)
    ]
    events = [
        {"Id": f"E{day}", "CreatedDate": f"2024-01-{day:02d}T00:00:00.000+0000"}
        for day in (2, 4, 6, 7)
    ]

    merged = merge_recent_activities(tasks, events, 5)

    assert [row["Id"] for row in merged] == ["E7", "E6", "T5", "E4", "T3"]


def test_merge_ties_keep_tasks_first():
    stamp = "2024-01-01T00:00:00.000+0000"
    merged = merge_recent_activities(
        [{"Id": "T1", "CreatedDate": stamp}],
        [{"Id": "E1", "CreatedDate": stamp}],
        10,
    )
    assert [row["Id"] for row in merged] == ["T1", "E1"]


def test_merge_missing_created_date_sorts_last():
    merged = merge_recent_activities(
        [{"Id": "T1"}],
        [{"Id": "E1", "CreatedDate": "2024-01-01T00:00:00.000+0000"}],
        10,
    )
    assert [row["Id"] for row in merged] == ["E1", "T1"]


def test_merge_does_not_mutate_inputs():
    task = {"Id": "T1", "CreatedDate": "2024-01-01T00:00:00.000+0000"}
    merge_recent_activities([task], [], 10)
    assert "ActivityType" not in task


def test_merge_empty():
    assert merge_recent_activities([], [], 10) == []
