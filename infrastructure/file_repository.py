import json
import logging
import os
import tempfile
from pathlib import Path
from typing import Optional

from application.ports import ProjectRepository
from core import ProjectContainer
from interface.data_dir_resolver import DataPaths
from interface.serializers import container_from_dict, container_to_dict

logger = logging.getLogger("weeklyplaner.storage")


class JsonProjectRepository(ProjectRepository):
    def __init__(self, paths: DataPaths):
        self.paths = paths

    @property
    def data_file(self) -> Path:
        return self.paths.data_file

    def load(self) -> Optional[ProjectContainer]:
        """Read the project list; ``None`` when the file is missing or unusable."""
        path = self.data_file
        if not path.exists():
            logger.debug("No data file at %s", path)
            return None
        try:
            payload = json.loads(path.read_text(encoding="utf-8"))
            return container_from_dict(payload)
        except (OSError, ValueError, KeyError, TypeError) as exc:
            logger.warning("Ignoring unreadable data file %s: %s", path, exc)
            return None

    def save(self, container: ProjectContainer) -> None:
        """Write the project list atomically. I/O errors propagate to the caller."""
        root = self.data_file.parent
        root.mkdir(parents=True, exist_ok=True)
        text = json.dumps(container_to_dict(container), ensure_ascii=False, indent=2)
        tmp_path: Optional[Path] = None
        try:
            with tempfile.NamedTemporaryFile(
                mode="w",
                encoding="utf-8",
                delete=False,
                dir=str(root),
                prefix=".data.",
                suffix=".tmp",
            ) as tmp:
                tmp.write(text)
                tmp.flush()
                os.fsync(tmp.fileno())
                tmp_path = Path(tmp.name)
            os.replace(str(tmp_path), str(self.data_file))
        finally:
            if tmp_path and tmp_path.exists():
                try:
                    tmp_path.unlink()
                except OSError:
                    logger.debug("Could not remove temporary file %s", tmp_path)
        logger.info("Saved %d projects to %s", len(container), self.data_file)


__all__ = ["JsonProjectRepository"]
