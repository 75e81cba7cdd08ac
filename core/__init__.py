from .selection import SelectionModel
from .task import Task, TaskContainer, local_now
from .project import Project, ProjectContainer

__all__ = [
    "SelectionModel",
    "Task",
    "TaskContainer",
    "local_now",
    "Project",
    "ProjectContainer",
]
