from pathlib import Path

import config
from interface.data_dir_resolver import get_data_dir, resolve_data_paths


def test_data_dir_priority(tmp_path: Path, monkeypatch):
    """Explicit dir beats WEEKLYPLANER_HOME, which beats the home dir."""
    monkeypatch.setenv("WEEKLYPLANER_HOME", str(tmp_path / "env"))
    assert get_data_dir() == (tmp_path / "env").resolve()
    assert get_data_dir(tmp_path / "explicit") == (tmp_path / "explicit").resolve()

    monkeypatch.delenv("WEEKLYPLANER_HOME")
    monkeypatch.setenv("HOME", str(tmp_path / "home"))
    assert get_data_dir() == (tmp_path / "home" / ".weeklyplaner").resolve()


def test_data_paths_layout(tmp_path: Path):
    """All files live in the data directory."""
    paths = resolve_data_paths(tmp_path)
    assert paths.data_file.name == "data.json"
    assert paths.scratch_file.name == "task.edit"
    assert paths.config_file.parent == paths.data_dir


def test_defaults_without_config(tmp_path: Path, monkeypatch):
    """Without config.yaml every getter returns its default."""
    monkeypatch.setenv("WEEKLYPLANER_HOME", str(tmp_path))
    assert config.get_editor() == ""
    assert config.get_tick_interval() == 1.0
    assert config.get_status_ttl_ticks() == 3
    assert config.get_key_overrides() == {}


def test_editor_roundtrip(tmp_path: Path, monkeypatch):
    """set_editor stores, trims and clears the editor."""
    monkeypatch.setenv("WEEKLYPLANER_HOME", str(tmp_path))
    config.set_editor("  nano -w ")
    assert config.get_editor() == "nano -w"
    config.set_editor("")
    assert config.get_editor() == ""
    assert not config.config_path().exists()


def test_invalid_values_fall_back(tmp_path: Path):
    """Bad values fall back; key overrides keep valid entries."""
    (tmp_path / "config.yaml").write_text(
        "tick_interval: -2\nstatus_ttl_ticks: soon\nkeys:\n  quit: x\n  edit: [o, 'f2']\n  up: 5\n",
        encoding="utf-8",
    )
    assert config.get_tick_interval(tmp_path) == 1.0
    assert config.get_status_ttl_ticks(tmp_path) == 3
    assert config.get_key_overrides(tmp_path) == {"quit": ["x"], "edit": ["o", "f2"]}


def test_unreadable_config_is_ignored(tmp_path: Path):
    """Broken YAML or a non-mapping is ignored."""
    (tmp_path / "config.yaml").write_text("editor: [unclosed", encoding="utf-8")
    assert config.get_editor(tmp_path) == ""
    (tmp_path / "config.yaml").write_text("- just\n- a list\n", encoding="utf-8")
    assert config.get_editor(tmp_path) == ""
