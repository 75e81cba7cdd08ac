import json
from pathlib import Path

import pytest

from core import ProjectContainer
from infrastructure.file_repository import JsonProjectRepository
from interface.data_dir_resolver import DataPaths


def _repo(tmp_path: Path) -> JsonProjectRepository:
    return JsonProjectRepository(DataPaths(tmp_path / ".weeklyplaner"))


def test_load_missing_file_returns_none(tmp_path: Path):
    """No data file yet means no projects."""
    assert _repo(tmp_path).load() is None


def test_load_malformed_file_returns_none(tmp_path: Path):
    """Broken JSON and missing fields are absorbed."""
    repo = _repo(tmp_path)
    repo.data_file.parent.mkdir(parents=True)
    repo.data_file.write_text("{not json", encoding="utf-8")
    assert repo.load() is None

    repo.data_file.write_text(json.dumps({"projects": [{"no_title": 1}]}), encoding="utf-8")
    assert repo.load() is None


@pytest.mark.parametrize(
    "payload",
    [
        {"projects": ["x"]},
        {"projects": [None]},
        {"projects": [1]},
        {"projects": [{"title": "Home", "tasks": ["t"]}]},
        {"projects": [{"title": "Home", "tasks": [None]}]},
        ["not", "an", "object"],
        None,
    ],
)
def test_load_wrong_shapes_returns_none(tmp_path: Path, payload):
    """Entries that are not objects never escape load() as exceptions."""
    repo = _repo(tmp_path)
    repo.data_file.parent.mkdir(parents=True)
    repo.data_file.write_text(json.dumps(payload), encoding="utf-8")
    assert repo.load() is None


def test_save_creates_directory_and_roundtrips(tmp_path: Path):
    """Save creates the data dir, keeps non-ASCII text and leaves no temp files."""
    repo = _repo(tmp_path)
    container = ProjectContainer()
    container.add_project("Home")
    container.current_project().add_task("Ölwechsel")

    repo.save(container)

    raw = repo.data_file.read_text(encoding="utf-8")
    assert "Ölwechsel" in raw
    loaded = repo.load()
    assert loaded is not None
    assert loaded.projects[0].title == "Home"
    assert loaded.projects[0].tasks[0].title == "Ölwechsel"
    assert not list(repo.data_file.parent.glob(".data.*.tmp"))


def test_save_overwrites_previous_file(tmp_path: Path):
    """A second save replaces the first."""
    repo = _repo(tmp_path)
    first = ProjectContainer()
    first.add_project("A")
    repo.save(first)
    second = ProjectContainer()
    second.add_project("B")
    repo.save(second)
    assert [p.title for p in repo.load().projects] == ["B"]


def test_save_error_propagates(tmp_path: Path):
    """I/O errors on save reach the caller."""
    blocker = tmp_path / "blocker"
    blocker.write_text("file, not a directory", encoding="utf-8")
    repo = JsonProjectRepository(DataPaths(blocker / "data"))
    with pytest.raises(OSError):
        repo.save(ProjectContainer())
