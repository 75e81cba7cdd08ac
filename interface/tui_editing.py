"""Editor hand-off for PlanerTUI.

Suspends the event source and the raw terminal, lets an external editor own
the terminal while it edits the task content, then brings both back.
"""

import logging
import os
import shlex
import subprocess
from dataclasses import dataclass
from typing import Callable, List, Optional, Tuple

from core import Project
from interface.data_dir_resolver import DataPaths
from interface.errors import EditorLaunchError, EditorNotFoundError
from interface.tui_events import EventSource
from interface.tui_terminal import Terminal

logger = logging.getLogger("weeklyplaner.edit")

DEFAULT_EDITOR = "vim"


def resolve_editor_command(configured: str = "") -> List[str]:
    """Configured editor, then $VISUAL, then $EDITOR, then vim."""
    for candidate in (configured, os.environ.get("VISUAL", ""), os.environ.get("EDITOR", "")):
        parts = shlex.split(candidate or "")
        if parts:
            return parts
    return [DEFAULT_EDITOR]


@dataclass
class EditResult:
    events: EventSource
    edited: bool = False
    changed: bool = False
    message: Optional[str] = None


class EditSession:
    def __init__(
        self,
        terminal: Terminal,
        paths: DataPaths,
        start_events: Callable[[], EventSource],
        editor: str = "",
        runner: Callable[..., subprocess.CompletedProcess] = subprocess.run,
    ):
        self.terminal = terminal
        self.paths = paths
        self.start_events = start_events
        self.editor = editor
        self.runner = runner

    def editor_command(self) -> List[str]:
        return resolve_editor_command(self.editor)

    async def edit_task(self, events: EventSource, project: Optional[Project], task_index: int) -> EditResult:
        """Edit ``project.tasks[task_index]`` in the external editor.

        Returns the event source the caller must use from now on: the same one
        when nothing was done, a freshly started one otherwise.
        """
        if project is None or not 0 <= task_index < len(project.tasks):
            return EditResult(events=events)

        events.stop()
        leftovers = await events.drain()
        if leftovers:
            logger.debug("Dropped %d events queued before the editor hand-off", len(leftovers))
        self.terminal.restore()

        message, changed = self._run_editor(project, task_index)

        self.terminal.prepare()
        return EditResult(events=self.start_events(), edited=True, changed=changed, message=message)

    def _run_editor(self, project: Project, task_index: int) -> Tuple[Optional[str], bool]:
        scratch = self.paths.scratch_file
        task = project.tasks[task_index]
        try:
            scratch.parent.mkdir(parents=True, exist_ok=True)
            scratch.unlink(missing_ok=True)
            if task.content:
                scratch.write_text(task.content, encoding="utf-8")
        except OSError as exc:
            logger.error("Could not prepare %s: %s", scratch, exc)
            return f"Could not prepare {scratch}: {exc}", False

        command = self.editor_command() + [str(scratch)]
        logger.info("Running editor: %s", shlex.join(command))
        try:
            try:
                result = self.runner(command)
            except FileNotFoundError as exc:
                raise EditorNotFoundError(
                    f"Could not find editor {command[0]!r}! Please install it or set $EDITOR."
                ) from exc
            except OSError as exc:
                raise EditorLaunchError(f"Could not start editor {command[0]!r}: {exc}") from exc
            if result.returncode != 0:
                logger.warning("Editor exited with code %s; keeping previous content", result.returncode)
                return f"Editor exited with code {result.returncode}", False
            if not scratch.exists():
                return None, False
            try:
                content = scratch.read_text(encoding="utf-8")
            except (OSError, UnicodeDecodeError) as exc:
                logger.error("Could not read %s: %s", scratch, exc)
                return f"Could not read {scratch}: {exc}", False
            return None, project.set_task_content(task_index, content)
        finally:
            try:
                scratch.unlink(missing_ok=True)
            except OSError as exc:
                logger.warning("Could not remove %s: %s", scratch, exc)


__all__ = ["EditSession", "EditResult", "resolve_editor_command", "DEFAULT_EDITOR"]
