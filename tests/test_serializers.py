from datetime import datetime, timezone

import pytest

from core import Project, ProjectContainer, Task
from interface.serializers import (
    container_from_dict,
    container_to_dict,
    parse_timestamp,
    task_from_dict,
    task_to_dict,
)


def _container() -> ProjectContainer:
    stamp = datetime(2024, 3, 1, 9, 30, tzinfo=timezone.utc)
    project = Project(title="Дом ☕")
    project.tasks.append(Task(title="Уборка", content="пол\nокна", created_at=stamp, modified_at=stamp, done=True))
    container = ProjectContainer([project, Project(title="Work")])
    container.selected = 1
    return container


def test_container_roundtrip_keeps_non_ascii_and_selection():
    """Round trip keeps titles, content, timestamps and selection."""
    data = container_to_dict(_container())
    assert set(data) == {"projects", "selected", "focused"}

    restored = container_from_dict(data)
    assert [p.title for p in restored.projects] == ["Дом ☕", "Work"]
    assert restored.selected == 1
    task = restored.projects[0].tasks[0]
    assert task.content == "пол\nокна"
    assert task.done is True
    assert task.created_at == datetime(2024, 3, 1, 9, 30, tzinfo=timezone.utc)


def test_parse_timestamp_truncates_nanoseconds():
    """Nanosecond fractions are cut to microseconds."""
    parsed = parse_timestamp("2023-11-05T18:04:12.123456789+01:00")
    assert parsed.microsecond == 123456
    assert parsed.utcoffset().total_seconds() == 3600


def test_parse_timestamp_accepts_zulu_and_naive():
    """Z suffix and naive values become aware datetimes."""
    assert parse_timestamp("2024-01-01T00:00:00Z").tzinfo is not None
    assert parse_timestamp("2024-01-01T00:00:00").tzinfo is not None


@pytest.mark.parametrize("value", ["", None, 42, "yesterday"])
def test_parse_timestamp_rejects_garbage(value):
    """Non-timestamps raise ValueError."""
    with pytest.raises(ValueError):
        parse_timestamp(value)


def test_task_to_dict_uses_iso_strings():
    """Timestamps are stored as ISO strings."""
    task = Task(title="t")
    data = task_to_dict(task)
    assert data["title"] == "t"
    assert isinstance(data["created_at"], str)
    assert task_from_dict(data).created_at == task.created_at


def test_container_from_dict_clamps_selected():
    """An out-of-range selection is clamped."""
    data = container_to_dict(_container())
    data["selected"] = 99
    assert container_from_dict(data).selected == 1
    data["projects"] = []
    assert container_from_dict(data).selected == 0


def test_container_from_dict_rejects_bad_shape():
    """Wrong shapes raise ValueError."""
    with pytest.raises(ValueError):
        container_from_dict([])
    with pytest.raises(ValueError):
        container_from_dict({"projects": "nope"})
    with pytest.raises(ValueError):
        container_from_dict({"projects": ["x"]})
    with pytest.raises(ValueError):
        task_from_dict(None)
