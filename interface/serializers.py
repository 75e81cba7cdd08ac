"""Serializers for the persisted project list.

The JSON contract of ``data.json``:

- container: ``{"projects": [...], "selected": int, "focused": bool}``
- project: ``{"title": str, "tasks": [...], "done": bool}``
- task: ``{"title": str, "content": str, "created_at": iso8601,
  "modified_at": iso8601, "done": bool}``

Timestamps carry their UTC offset. Files written by older builds may hold
nanosecond fractions; those are cut to microseconds on the way in.
"""

import re
from datetime import datetime
from typing import Any, Dict

from core import Project, ProjectContainer, Task

_FRACTION = re.compile(r"(\.\d{6})\d+")


def parse_timestamp(value: Any) -> datetime:
    if not isinstance(value, str) or not value.strip():
        raise ValueError(f"Invalid timestamp: {value!r}")
    raw = value.strip()
    if raw.endswith("Z"):
        raw = raw[:-1] + "+00:00"
    raw = _FRACTION.sub(r"\1", raw)
    parsed = datetime.fromisoformat(raw)
    if parsed.tzinfo is None:
        parsed = parsed.astimezone()
    return parsed


def task_to_dict(task: Task) -> Dict[str, Any]:
    return {
        "title": task.title,
        "content": task.content,
        "created_at": task.created_at.isoformat(),
        "modified_at": task.modified_at.isoformat(),
        "done": task.done,
    }


def task_from_dict(data: Dict[str, Any]) -> Task:
    if not isinstance(data, dict):
        raise ValueError(f"task must be an object, got {type(data).__name__}")
    return Task(
        title=str(data["title"]),
        content=str(data.get("content", "") or ""),
        created_at=parse_timestamp(data["created_at"]),
        modified_at=parse_timestamp(data["modified_at"]),
        done=bool(data.get("done", False)),
    )


def project_to_dict(project: Project) -> Dict[str, Any]:
    return {
        "title": project.title,
        "tasks": [task_to_dict(t) for t in project.tasks],
        "done": project.done,
    }


def project_from_dict(data: Dict[str, Any]) -> Project:
    if not isinstance(data, dict):
        raise ValueError(f"project must be an object, got {type(data).__name__}")
    tasks = data.get("tasks") or []
    if not isinstance(tasks, list):
        raise ValueError("'tasks' must be a list")
    return Project(
        title=str(data["title"]),
        tasks=[task_from_dict(t) for t in tasks],
        done=bool(data.get("done", False)),
    )


def container_to_dict(container: ProjectContainer) -> Dict[str, Any]:
    return {
        "projects": [project_to_dict(p) for p in container.projects],
        "selected": container.selected,
        "focused": container.focused,
    }


def container_from_dict(data: Dict[str, Any]) -> ProjectContainer:
    if not isinstance(data, dict):
        raise ValueError("data file must hold an object")
    projects = data.get("projects")
    if not isinstance(projects, list):
        raise ValueError("'projects' must be a list")
    container = ProjectContainer([project_from_dict(p) for p in projects])
    try:
        container.selected = int(data.get("selected", 0) or 0)
    except (TypeError, ValueError):
        container.selected = 0
    container.clamp()
    return container


__all__ = [
    "parse_timestamp",
    "task_to_dict",
    "task_from_dict",
    "project_to_dict",
    "project_from_dict",
    "container_to_dict",
    "container_from_dict",
]
