#!/usr/bin/env python3
"""TUI application - PlanerTUI, the input-mode state machine and main loop."""

import logging
from typing import Optional

from prompt_toolkit import print_formatted_text
from prompt_toolkit.key_binding import KeyPress

from application.ports import KeySource, ProjectRepository
from core import ProjectContainer, TaskContainer
from interface.tui_editing import EditSession
from interface.tui_events import DEFAULT_TICK_INTERVAL, Event, EventSource, Input, Tick
from interface.tui_input import KeyMap
from interface.tui_models import (
    CONFIRM_MODES,
    DELETE_QUESTION,
    InputMode,
    QUIT_QUESTION,
    SAVE_QUESTION,
    SAVED_MESSAGE,
)
from interface.tui_popups import ConfirmPopup, LineInputPopup
from interface.tui_render import STYLE, render_screen
from interface.tui_status import DEFAULT_STATUS_TTL_TICKS, StatusLine
from interface.tui_terminal import Terminal

logger = logging.getLogger("weeklyplaner.tui")


class PlanerTUI:
    def __init__(
        self,
        repository: ProjectRepository,
        key_source: Optional[KeySource] = None,
        terminal: Optional[Terminal] = None,
        edit_session: Optional[EditSession] = None,
        key_map: Optional[KeyMap] = None,
        tick_interval: float = DEFAULT_TICK_INTERVAL,
        status_ttl: int = DEFAULT_STATUS_TTL_TICKS,
    ):
        self.repository = repository
        self.key_source = key_source
        self.terminal = terminal
        self.edit_session = edit_session
        self.key_map = key_map or KeyMap.with_overrides()
        self.tick_interval = tick_interval

        self.input_mode = InputMode.NORMAL
        self.projects = ProjectContainer(focused=True)
        self.tasks = TaskContainer(focused=False)
        self.quit = False
        self.dirty = False
        self.status = StatusLine(status_ttl)
        self.confirm_popup = ConfirmPopup()
        self.line_input = LineInputPopup()
        self.events: Optional[EventSource] = None

    # =====================
    # Lifecycle
    # =====================

    def start_events(self) -> EventSource:
        if self.key_source is None:
            raise RuntimeError("PlanerTUI needs a key source to start the event loop")
        return EventSource.start(self.key_source, self.tick_interval)

    def import_projects(self) -> None:
        loaded = self.repository.load()
        if loaded is None:
            return
        self.projects = loaded
        self.projects.set_focus(True)
        self.tasks.set_focus(False)
        self.update_tasks()
        logger.info("Loaded %d projects", len(self.projects))

    async def run(self) -> None:
        self.events = self.start_events()
        try:
            while True:
                event = await self.events.next_event()
                if event is None:
                    logger.warning("Event channel closed; leaving main loop")
                    break
                await self.handle_event(event)
                self.render()
                if self.quit:
                    break
        finally:
            if self.events is not None and not self.events.closed:
                self.events.stop()
                await self.events.drain()

    async def handle_event(self, event: Event) -> None:
        if isinstance(event, Tick):
            self.status.tick()
        elif isinstance(event, Input) and isinstance(event.payload, KeyPress):
            await self.handle_key(event.payload)

    # =====================
    # Key dispatch
    # =====================

    async def handle_key(self, key_press: KeyPress) -> None:
        action = self.key_map.action_for(key_press)
        if self.input_mode is InputMode.NORMAL and action == "save-request" and self.dirty:
            self.input_mode = InputMode.SAVING
            self.confirm_popup.set_question(SAVE_QUESTION)

        if self.input_mode is InputMode.NORMAL:
            await self._handle_normal(action)
        elif self.input_mode is InputMode.INSERT:
            await self._handle_insert(action)
        elif self.input_mode is InputMode.DELETING:
            self._handle_deleting(action)
        elif self.input_mode is InputMode.SAVING:
            self._handle_saving(action)
        elif self.input_mode is InputMode.QUITTING:
            self._handle_quitting(action)

        # The popup of the (possibly new) mode sees the same key; the key that
        # opened the mode only makes the popup visible.
        if self.input_mode in CONFIRM_MODES:
            self.confirm_popup.process_input(action, key_press)
        elif self.input_mode is InputMode.INSERT:
            self.line_input.process_input(action, key_press)

    async def _handle_normal(self, action: Optional[str]) -> None:
        if action == "quit":
            if self.dirty:
                self.input_mode = InputMode.QUITTING
                self.confirm_popup.set_question(QUIT_QUESTION)
            else:
                self.quit = True
        elif action == "insert":
            self.input_mode = InputMode.INSERT
        elif action == "up":
            if self.projects.is_focused():
                self.projects.move_up()
                self.update_tasks()
            else:
                self.tasks.move_up()
        elif action == "down":
            if self.projects.is_focused():
                self.projects.move_down()
                self.update_tasks()
            else:
                self.tasks.move_down()
        elif action == "confirm":
            if self.projects.is_focused() and self.projects.current_project() is not None:
                self.projects.set_focus(False)
                self.tasks.set_focus(True)
        elif action == "back":
            if self.tasks.is_focused():
                self.projects.set_focus(True)
                self.tasks.set_focus(False)
        elif action == "edit":
            if self.tasks.is_focused() and len(self.tasks):
                self.dirty = True
                await self.edit_task(self.tasks.selected)
        elif action == "delete-request":
            self.input_mode = InputMode.DELETING
            self.confirm_popup.set_question(DELETE_QUESTION)
        elif action == "toggle-done":
            project = self.projects.current_project()
            if self.tasks.is_focused() and project is not None and len(self.tasks):
                self.dirty = True
                project.toggle_task_done(self.tasks.selected)
                self.update_tasks()

    async def _handle_insert(self, action: Optional[str]) -> None:
        if action == "back":
            self.input_mode = InputMode.NORMAL
            self.line_input.close()
        elif action == "confirm":
            title = self.line_input.value
            # Any non-empty title is accepted, including titles shorter than four characters.
            if not title:
                return
            self.input_mode = InputMode.NORMAL
            self.dirty = True
            if self.projects.is_focused():
                self.projects.add_project(title)
            else:
                project = self.projects.current_project()
                if project is not None:
                    project.add_task(title)
                    await self.edit_task(len(project.tasks) - 1)
            self.update_tasks()
            self.line_input.close()

    def _handle_deleting(self, action: Optional[str]) -> None:
        if action not in ("back", "confirm"):
            return
        self.input_mode = InputMode.NORMAL
        if action == "confirm" and self.confirm_popup.accepted():
            if self.projects.is_focused():
                removed = self.projects.remove_selected_project()
            else:
                project = self.projects.current_project()
                removed = project.remove_task(self.tasks.selected) if project is not None else None
            if removed is not None:
                self.dirty = True
            self.update_tasks()
        self.confirm_popup.close()

    def _handle_saving(self, action: Optional[str]) -> None:
        if action not in ("back", "confirm"):
            return
        self.input_mode = InputMode.NORMAL
        if action == "confirm" and self.confirm_popup.accepted():
            self.save()
        self.confirm_popup.close()

    def _handle_quitting(self, action: Optional[str]) -> None:
        if action == "back":
            self.input_mode = InputMode.NORMAL
            self.confirm_popup.close()
        elif action == "confirm":
            if self.confirm_popup.accepted():
                self.save()
            self.quit = True

    # =====================
    # Side trips
    # =====================

    async def edit_task(self, task_index: int) -> None:
        if self.edit_session is None or self.events is None:
            logger.warning("No edit session configured; skipping edit of task %d", task_index)
            return
        result = await self.edit_session.edit_task(self.events, self.projects.current_project(), task_index)
        self.events = result.events
        if result.message:
            self.set_status_message(result.message)
        self.update_tasks()

    def update_tasks(self) -> None:
        self.tasks.set_project(self.projects.current_project())

    def save(self) -> bool:
        try:
            self.repository.save(self.projects)
        except OSError as exc:
            logger.error("Save failed: %s", exc)
            self.set_status_message(str(exc))
            return False
        self.dirty = False
        self.set_status_message(SAVED_MESSAGE)
        return True

    def set_status_message(self, message: str, ttl: Optional[int] = None) -> None:
        self.status.set(message, ttl=ttl)

    # =====================
    # Rendering
    # =====================

    def render(self) -> None:
        if self.terminal is None or not self.terminal.active:
            return
        size = self.terminal.size()
        canvas = render_screen(self, size.columns, size.rows)
        output = self.terminal.output
        output.cursor_goto(0, 0)
        print_formatted_text(canvas.to_formatted_text(), style=STYLE, output=output, end="")
        output.flush()


__all__ = ["PlanerTUI"]
