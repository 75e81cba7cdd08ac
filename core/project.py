from dataclasses import dataclass, field
from typing import List, Optional

from .selection import SelectionModel
from .task import Task


@dataclass
class Project:
    title: str
    tasks: List[Task] = field(default_factory=list)
    done: bool = False

    def add_task(self, title: str) -> Task:
        task = Task(title=title)
        self.tasks.append(task)
        return task

    def remove_task(self, index: int) -> Optional[Task]:
        if not self.tasks or not 0 <= index < len(self.tasks):
            return None
        return self.tasks.pop(index)

    def toggle_task_done(self, index: int) -> None:
        if 0 <= index < len(self.tasks):
            self.tasks[index].toggle_done()

    def set_task_content(self, index: int, content: str) -> bool:
        if not 0 <= index < len(self.tasks):
            return False
        return self.tasks[index].set_content(content)


class ProjectContainer(SelectionModel[Project]):
    def __init__(self, projects: Optional[List[Project]] = None, focused: bool = True):
        super().__init__(projects, focused=focused)

    @property
    def projects(self) -> List[Project]:
        return self.items

    def add_project(self, title: str) -> Optional[Project]:
        if not title:
            return None
        project = Project(title=title)
        self.items.append(project)
        self.selected = len(self.items) - 1
        return project

    def remove_selected_project(self) -> Optional[Project]:
        return self.remove_selected()

    def current_project(self) -> Optional[Project]:
        return self.current()


__all__ = ["Project", "ProjectContainer"]
