"""Rendering helpers for PlanerTUI: a cell canvas plus one drawer per widget."""
from typing import List, Sequence, Tuple

from prompt_toolkit.formatted_text import FormattedText
from prompt_toolkit.styles import Style
from wcwidth import wcwidth

from core import ProjectContainer, TaskContainer
from interface.tui_models import CONFIRM_MODES, InputMode, LINE_INPUT_TITLE
from interface.tui_popups import ConfirmPopup, LineInputPopup
from interface.tui_status import build_mode_bar, build_status_text
from util.responsive import Rect, ResponsiveLayoutManager, popup_rect, screen_layout

STYLE = Style.from_dict(
    {
        "border": "#ffffff",
        "border.focused": "#ffff00",
        "title": "bold",
        "header": "bold",
        "selected": "bg:#ffffff #000000",
        "question": "#ffff00",
        "button": "bg:#ffffff",
        "button.selected": "bg:#ffffff #000000 bold",
        "mode.normal": "bg:ansicyan #000000",
        "mode.insert": "bg:ansigreen #000000",
        "mode.saving": "bg:ansimagenta #000000",
        "mode.quitting": "bg:ansigray #000000",
        "mode.deleting": "bg:ansigray #000000",
        "status": "#ffffff",
    }
)

CONFIRM_SIZE = (100, 7)
LINE_INPUT_SIZE = (120, 3)
CREATED_AT_FORMAT = "%d.%m.%Y %H:%M:%S"

Cell = Tuple[str, str]


def display_width(text: str) -> int:
    return sum(max(0, wcwidth(ch)) for ch in text)


def trim_display(text: str, width: int) -> str:
    if width <= 0:
        return ""
    out: List[str] = []
    used = 0
    for ch in text:
        w = max(0, wcwidth(ch))
        if used + w > width:
            break
        out.append(ch)
        used += w
    return "".join(out)


def pad_display(text: str, width: int) -> str:
    trimmed = trim_display(text, width)
    return trimmed + " " * max(0, width - display_width(trimmed))


def tail_display(text: str, width: int) -> str:
    """Rightmost part of ``text`` that fits into ``width`` cells."""
    out: List[str] = []
    used = 0
    for ch in reversed(text):
        w = max(0, wcwidth(ch))
        if used + w > width:
            break
        out.append(ch)
        used += w
    return "".join(reversed(out))


def hard_wrap(text: str, width: int) -> List[str]:
    """Split each line into chunks of ``width`` cells without looking at words."""
    if width <= 0:
        return []
    rows: List[str] = []
    for line in text.expandtabs(4).splitlines():
        rest = line
        while rest:
            chunk = trim_display(rest, width) or rest[0]
            rows.append(chunk)
            rest = rest[len(chunk):]
    return rows


class Canvas:
    def __init__(self, width: int, height: int):
        self.width = width
        self.height = height
        self.cells: List[List[Cell]] = [[("", " ") for _ in range(width)] for _ in range(height)]

    def put(self, x: int, y: int, text: str, style: str = "", max_width: int = -1) -> int:
        """Write ``text`` at (x, y), clipped to the canvas; returns the cells used."""
        if not 0 <= y < self.height:
            return 0
        limit = self.width if max_width < 0 else min(self.width, x + max_width)
        row = self.cells[y]
        col = x
        for ch in text:
            w = wcwidth(ch)
            if w <= 0:
                continue
            if col + w > limit:
                break
            if col >= 0:
                row[col] = (style, ch)
                if w == 2:
                    row[col + 1] = (style, "")
            col += w
        return col - x

    def put_fragments(self, x: int, y: int, fragments: Sequence[Tuple[str, str]], max_width: int = -1) -> int:
        used = 0
        for style, text, *_ in fragments:
            remaining = -1 if max_width < 0 else max_width - used
            if remaining == 0:
                break
            used += self.put(x + used, y, text, style, remaining)
        return used

    def fill(self, rect: Rect, style: str = "") -> None:
        for y in range(rect.y, rect.y + rect.height):
            self.put(rect.x, y, " " * rect.width, style)

    def to_formatted_text(self) -> FormattedText:
        fragments: List[Tuple[str, str]] = []
        for index, row in enumerate(self.cells):
            current_style = None
            chunk: List[str] = []
            for style, ch in row:
                if style != current_style and chunk:
                    fragments.append((current_style or "", "".join(chunk)))
                    chunk = []
                current_style = style
                chunk.append(ch)
            if chunk:
                fragments.append((current_style or "", "".join(chunk)))
            if index < self.height - 1:
                fragments.append(("", "\n"))
        return FormattedText(fragments)

    def text(self) -> List[str]:
        return ["".join(ch for _, ch in row) for row in self.cells]


def draw_box(canvas: Canvas, rect: Rect, title: str = "", focused: bool = False) -> None:
    if rect.width < 2 or rect.height < 2:
        return
    style = "class:border.focused" if focused else "class:border"
    inner = rect.width - 2
    canvas.put(rect.x, rect.y, "┌" + "─" * inner + "┐", style)
    for y in range(rect.y + 1, rect.bottom):
        canvas.put(rect.x, y, "│", style)
        canvas.put(rect.right, y, "│", style)
    canvas.put(rect.x, rect.bottom, "└" + "─" * inner + "┘", style)
    if title:
        canvas.put(rect.x + 1, rect.y, title, "class:title", inner)


def _visible_window(selected: int, total: int, rows: int) -> int:
    if rows <= 0 or total <= rows:
        return 0
    return max(0, min(selected - rows + 1, total - rows)) if selected >= rows else 0


def draw_projects(canvas: Canvas, rect: Rect, projects: ProjectContainer) -> None:
    draw_box(canvas, rect, "Projects", projects.is_focused())
    inner = rect.width - 2
    rows = rect.height - 2
    start = _visible_window(projects.selected, len(projects), rows)
    for offset, index in enumerate(range(start, min(len(projects), start + rows))):
        label = pad_display(f"{index}: {projects.projects[index].title}", inner)
        style = "class:selected" if index == projects.selected else ""
        canvas.put(rect.x + 1, rect.y + 1 + offset, label, style, inner)


def task_row(layout, widths, title: str, done: str, created: str) -> str:
    row = pad_display(title, widths["title"])
    if layout.has_column("done"):
        row += pad_display(done, widths["done"])
    if layout.has_column("created"):
        row += pad_display(created, widths["created"])
    return row


def draw_tasks(canvas: Canvas, list_rect: Rect, content_rect: Rect, tasks: TaskContainer) -> None:
    draw_box(canvas, list_rect, "Tasks", tasks.is_focused())
    inner = list_rect.width - 2
    layout = ResponsiveLayoutManager.select_layout(inner)
    widths = layout.calculate_widths(inner)
    canvas.put(list_rect.x + 1, list_rect.y + 1, task_row(layout, widths, "Title", "Done", "Created At"), "class:header", inner)
    rows = list_rect.height - 3
    start = _visible_window(tasks.selected, len(tasks), rows)
    for offset, index in enumerate(range(start, min(len(tasks), start + max(0, rows)))):
        task = tasks.tasks[index]
        text = pad_display(
            task_row(layout, widths, task.title, str(task.done).lower(), task.created_at.strftime(CREATED_AT_FORMAT)),
            inner,
        )
        style = "class:selected" if index == tasks.selected else ""
        canvas.put(list_rect.x + 1, list_rect.y + 2 + offset, text, style, inner)

    draw_box(canvas, content_rect, "Content", False)
    current = tasks.current()
    if current is None:
        return
    content_inner = content_rect.width - 2
    for offset, line in enumerate(hard_wrap(current.content, content_inner)[: max(0, content_rect.height - 2)]):
        canvas.put(content_rect.x + 1, content_rect.y + 1 + offset, line, "", content_inner)


def draw_confirm(canvas: Canvas, screen: Rect, popup: ConfirmPopup) -> None:
    rect = popup_rect(screen, *CONFIRM_SIZE)
    canvas.fill(rect)
    draw_box(canvas, rect, "", True)
    question_x = rect.x + max(1, rect.width // 2 - display_width(popup.question) // 2)
    canvas.put(question_x, rect.y + rect.height // 3, popup.question, "class:question", rect.right - question_x)
    buttons_y = rect.y + rect.height * 80 // 100
    yes_style = "class:button.selected" if popup.accepted() else "class:button"
    no_style = "class:button" if popup.accepted() else "class:button.selected"
    canvas.put(rect.x + min(10, rect.width // 4), buttons_y, "Yes", yes_style)
    canvas.put(rect.x + rect.width - min(10, rect.width // 4) - 2, buttons_y, "No", no_style)


def draw_line_input(canvas: Canvas, screen: Rect, popup: LineInputPopup) -> None:
    rect = popup_rect(screen, *LINE_INPUT_SIZE)
    canvas.fill(rect)
    draw_box(canvas, rect, LINE_INPUT_TITLE, True)
    inner = rect.width - 2
    canvas.put(rect.x + 1, rect.y + rect.height - 2, tail_display(popup.value, inner), "", inner)


def render_screen(tui, width: int, height: int) -> Canvas:
    layout = screen_layout(width, height)
    canvas = Canvas(layout.screen.width, layout.screen.height)
    draw_box(canvas, layout.screen)
    draw_projects(canvas, layout.projects, tui.projects)
    draw_tasks(canvas, layout.task_list, layout.task_content, tui.tasks)
    canvas.put_fragments(2, layout.mode_row, build_mode_bar(tui, layout.bar_width), layout.bar_width)
    canvas.put_fragments(2, layout.status_row, build_status_text(tui), layout.bar_width)
    if tui.input_mode in CONFIRM_MODES and tui.confirm_popup.visible:
        draw_confirm(canvas, layout.screen, tui.confirm_popup)
    elif tui.input_mode is InputMode.INSERT and tui.line_input.visible:
        draw_line_input(canvas, layout.screen, tui.line_input)
    return canvas


__all__ = [
    "STYLE",
    "Canvas",
    "display_width",
    "trim_display",
    "pad_display",
    "tail_display",
    "hard_wrap",
    "draw_box",
    "draw_projects",
    "draw_tasks",
    "draw_confirm",
    "draw_line_input",
    "render_screen",
]
