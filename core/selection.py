"""Cursor/focus model shared by the project list and the task list."""

from typing import Generic, List, Optional, TypeVar

T = TypeVar("T")


class SelectionModel(Generic[T]):
    """Ordered list with a wrapping cursor and a focus flag.

    The list may be empty; in that case ``selected`` stays at 0 and every
    cursor operation is a no-op.
    """

    def __init__(self, items: Optional[List[T]] = None, focused: bool = False):
        self.items: List[T] = list(items) if items else []
        self.selected: int = 0
        self.focused: bool = focused

    def __len__(self) -> int:
        return len(self.items)

    def move_up(self) -> None:
        if not self.items:
            return
        if self.selected != 0:
            self.selected -= 1
        else:
            self.selected = len(self.items) - 1

    def move_down(self) -> None:
        if not self.items:
            return
        if self.selected != len(self.items) - 1:
            self.selected += 1
        else:
            self.selected = 0

    def is_focused(self) -> bool:
        return self.focused

    def set_focus(self, focus: bool) -> None:
        self.focused = focus

    def current(self) -> Optional[T]:
        if 0 <= self.selected < len(self.items):
            return self.items[self.selected]
        return None

    def clamp(self) -> None:
        if not self.items:
            self.selected = 0
        else:
            self.selected = max(0, min(self.selected, len(self.items) - 1))

    def remove_selected(self) -> Optional[T]:
        """Drop the selected item; the cursor lands on 0 when it was at 0 or 1, else moves up one."""
        if not self.items:
            return None
        removed_index = self.selected
        if self.selected <= 1:
            self.selected = 0
        else:
            self.selected -= 1
        return self.items.pop(removed_index)


__all__ = ["SelectionModel"]
