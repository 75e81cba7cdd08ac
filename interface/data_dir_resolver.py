from dataclasses import dataclass
from pathlib import Path
from typing import Optional
import os

DATA_DIR_NAME = ".weeklyplaner"
DATA_FILE_NAME = "data.json"
SCRATCH_FILE_NAME = "task.edit"
CONFIG_FILE_NAME = "config.yaml"
LOG_FILE_NAME = "planer.log"


@dataclass(frozen=True)
class DataPaths:
    """Every on-disk location the planer touches, derived from one directory."""

    data_dir: Path

    @property
    def data_file(self) -> Path:
        return self.data_dir / DATA_FILE_NAME

    @property
    def scratch_file(self) -> Path:
        return self.data_dir / SCRATCH_FILE_NAME

    @property
    def config_file(self) -> Path:
        return self.data_dir / CONFIG_FILE_NAME

    @property
    def log_file(self) -> Path:
        return self.data_dir / LOG_FILE_NAME


def get_data_dir(data_dir: Optional[Path] = None) -> Path:
    """Unified resolver for the data directory.

    Priority:
    1. Explicit data_dir if provided (``--data-dir``).
    2. WEEKLYPLANER_HOME env variable (for tests).
    3. ``~/.weeklyplaner``.

    The directory is not created here; writers create it on demand.
    """
    if data_dir:
        return Path(data_dir).expanduser().resolve()
    env_dir = os.environ.get("WEEKLYPLANER_HOME")
    if env_dir:
        return Path(env_dir).expanduser().resolve()
    return (Path.home() / DATA_DIR_NAME).resolve()


def resolve_data_paths(data_dir: Optional[Path] = None) -> DataPaths:
    return DataPaths(get_data_dir(data_dir))


__all__ = ["DataPaths", "get_data_dir", "resolve_data_paths"]
