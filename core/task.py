from dataclasses import dataclass, field, replace
from datetime import datetime
from typing import TYPE_CHECKING, List, Optional

from .selection import SelectionModel

if TYPE_CHECKING:
    from .project import Project


def local_now() -> datetime:
    return datetime.now().astimezone()


@dataclass
class Task:
    title: str
    content: str = ""
    created_at: datetime = field(default_factory=local_now)
    modified_at: datetime = field(default_factory=local_now)
    done: bool = False

    def toggle_done(self) -> None:
        self.done = not self.done

    def set_content(self, content: str) -> bool:
        """Replace the content; returns True when it actually changed."""
        if content == self.content:
            return False
        self.content = content
        self.modified_at = local_now()
        return True


class TaskContainer(SelectionModel[Task]):
    """Snapshot of the selected project's tasks.

    Not a live view: callers re-sync with ``set_project`` after every change to
    the underlying project.
    """

    def __init__(self, focused: bool = False):
        super().__init__(focused=focused)

    @property
    def tasks(self) -> List[Task]:
        return self.items

    def set_project(self, project: Optional["Project"]) -> None:
        self.items = [replace(task) for task in project.tasks] if project is not None else []
        self.clamp()


__all__ = ["Task", "TaskContainer", "local_now"]
