"""Modal popups: confirmation box and line input.

A popup only becomes visible on the first key it receives; that key is
consumed without further effect. PlanerTUI forwards the key that opened the
popup's mode, so the popup is visible by the time the user sees it.
"""

from abc import ABC, abstractmethod
from enum import Enum
from typing import Optional

from prompt_toolkit.key_binding import KeyPress

from interface.tui_input import is_printable


class Choice(Enum):
    YES = "Yes"
    NO = "No"


class Popup(ABC):
    def __init__(self):
        self.visible = False

    def process_input(self, action: Optional[str], key_press: KeyPress) -> None:
        if not self.visible:
            self.visible = True
            return
        self.handle_input(action, key_press)

    @abstractmethod
    def handle_input(self, action: Optional[str], key_press: KeyPress) -> None:
        ...

    @abstractmethod
    def close(self) -> None:
        ...


class ConfirmPopup(Popup):
    def __init__(self):
        super().__init__()
        self.question = ""
        self.choice = Choice.NO

    def set_question(self, text: str) -> None:
        self.question = text

    def accepted(self) -> bool:
        return self.choice is Choice.YES

    def handle_input(self, action: Optional[str], key_press: KeyPress) -> None:
        if action == "toggle-selection":
            self.choice = Choice.NO if self.choice is Choice.YES else Choice.YES

    def close(self) -> None:
        self.visible = False
        self.choice = Choice.NO
        self.question = ""


class LineInputPopup(Popup):
    def __init__(self):
        super().__init__()
        self.value = ""

    def handle_input(self, action: Optional[str], key_press: KeyPress) -> None:
        if action == "backspace":
            self.value = self.value[:-1]
        elif action == "back":
            self.close()
        elif is_printable(key_press):
            self.value += key_press.data or key_press.key

    def close(self) -> None:
        self.visible = False
        self.value = ""


__all__ = ["Choice", "Popup", "ConfirmPopup", "LineInputPopup"]
