from dataclasses import dataclass
from typing import Dict, List, Tuple


@dataclass(frozen=True)
class Rect:
    """Screen area: top-left corner plus size, in terminal cells."""
    x: int
    y: int
    width: int
    height: int

    @property
    def right(self) -> int:
        return self.x + self.width - 1

    @property
    def bottom(self) -> int:
        return self.y + self.height - 1


def split_rect_by_height(rect: Rect) -> Tuple[Rect, Rect]:
    """Upper and lower halves with one spare row between them."""
    half = rect.height // 2
    upper = Rect(rect.x, rect.y, rect.width, half)
    lower = Rect(rect.x, rect.y + half + 1, rect.width, max(0, half - 1))
    return upper, lower


@dataclass(frozen=True)
class ScreenLayout:
    screen: Rect
    projects: Rect
    tasks: Rect
    task_list: Rect
    task_content: Rect
    mode_row: int
    status_row: int
    bar_width: int


def screen_layout(width: int, height: int) -> ScreenLayout:
    """Projects column on the left (a fifth of the width), tasks on the right.

    The last four rows hold the mode bar and the status line.
    """
    width = max(20, width)
    height = max(10, height)
    screen = Rect(0, 0, width, height)
    projects = Rect(2, 1, int(width * 0.20), height - 5)
    tasks = Rect(projects.width + 3, projects.y, width - projects.width - 5, projects.height)
    task_list, task_content = split_rect_by_height(tasks)
    return ScreenLayout(
        screen=screen,
        projects=projects,
        tasks=tasks,
        task_list=task_list,
        task_content=task_content,
        mode_row=height - 3,
        status_row=height - 2,
        bar_width=projects.width + tasks.width,
    )


def popup_rect(screen: Rect, width: int, height: int) -> Rect:
    """Popup anchored at a quarter of the screen, shrunk to stay on it."""
    x = screen.width // 4
    y = screen.height // 4
    return Rect(x, y, max(4, min(width, screen.width - x - 1)), max(3, min(height, screen.height - y - 1)))


@dataclass
class ColumnLayout:
    """Task table layout definition."""
    min_width: int
    columns: List[str]
    done_w: int = 10
    created_w: int = 19
    title_min: int = 8

    def has_column(self, name: str) -> bool:
        return name in self.columns

    def calculate_widths(self, inner_width: int) -> Dict[str, int]:
        """Fixed-width done/created columns; the title takes 95% of the rest."""
        widths: Dict[str, int] = {}
        fixed = 0
        if self.has_column('done'):
            widths['done'] = self.done_w
            fixed += self.done_w
        if self.has_column('created'):
            widths['created'] = self.created_w
            fixed += self.created_w
        widths['title'] = max(self.title_min, int(inner_width * 0.95) - fixed)
        return widths


class ResponsiveLayoutManager:
    """Responsive layout selector for the task table."""

    LAYOUTS = [
        ColumnLayout(min_width=52, columns=['title', 'done', 'created']),
        ColumnLayout(min_width=26, columns=['title', 'done'], done_w=6),
        ColumnLayout(min_width=0, columns=['title'], title_min=1),
    ]

    @classmethod
    def select_layout(cls, inner_width: int) -> ColumnLayout:
        for layout in cls.LAYOUTS:
            if inner_width >= layout.min_width:
                return layout
        return cls.LAYOUTS[-1]
