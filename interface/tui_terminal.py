"""Raw/cooked terminal transitions for PlanerTUI."""

import logging
from typing import Optional

from prompt_toolkit.data_structures import Size
from prompt_toolkit.input import Input, create_input
from prompt_toolkit.output import Output, create_output

from interface.errors import TerminalStateError

logger = logging.getLogger("weeklyplaner.terminal")


class Terminal:
    """Owns the prompt_toolkit input/output pair and the raw-mode context."""

    def __init__(self, input: Optional[Input] = None, output: Optional[Output] = None):
        self.input = input if input is not None else create_input()
        self.output = output if output is not None else create_output()
        self._raw_mode = None

    @property
    def active(self) -> bool:
        return self._raw_mode is not None

    def prepare(self) -> None:
        """Raw mode, alternate screen, hidden cursor."""
        if self.active:
            return
        try:
            raw_mode = self.input.raw_mode()
            raw_mode.__enter__()
            self._raw_mode = raw_mode
            self.output.enter_alternate_screen()
            self.output.hide_cursor()
            self.output.flush()
        except Exception as exc:
            raise TerminalStateError(
                f"Error occurred when trying to prepare the terminal for the application: {exc}"
            ) from exc
        logger.debug("Terminal prepared")

    def restore(self) -> None:
        """Back to cooked mode on the primary screen with a visible cursor."""
        if not self.active:
            return
        raw_mode, self._raw_mode = self._raw_mode, None
        try:
            self.output.reset_attributes()
            self.output.quit_alternate_screen()
            self.output.show_cursor()
            self.output.flush()
            raw_mode.__exit__(None, None, None)
        except Exception as exc:
            raise TerminalStateError(
                f"Error occurred when trying to restore the previous state of the terminal: {exc}"
            ) from exc
        logger.debug("Terminal restored")

    def size(self) -> Size:
        return self.output.get_size()


__all__ = ["Terminal"]
