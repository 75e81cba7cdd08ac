"""Terminal key source and logical key map for PlanerTUI."""

import asyncio
import logging
import signal
from dataclasses import dataclass
from typing import Dict, Iterable, List, Optional, Union

from prompt_toolkit.input import Input
from prompt_toolkit.key_binding import KeyPress
from prompt_toolkit.keys import KEY_ALIASES, Keys

logger = logging.getLogger("weeklyplaner.input")

# Delay before a lone ESC is flushed out of the vt100 parser as the Escape key.
ESCAPE_FLUSH_DELAY = 0.05

ACTIONS = (
    "quit",
    "insert",
    "up",
    "down",
    "confirm",
    "back",
    "edit",
    "delete-request",
    "toggle-done",
    "save-request",
    "toggle-selection",
    "backspace",
)


def default_keys() -> Dict[str, List[str]]:
    return {
        "quit": ["q"],
        "insert": ["i"],
        "up": ["up"],
        "down": ["down"],
        "confirm": ["enter"],
        "back": ["escape"],
        "edit": ["e"],
        "delete-request": ["delete"],
        "toggle-done": ["d"],
        "save-request": ["c-s"],
        "toggle-selection": ["tab"],
        "backspace": ["backspace"],
    }


@dataclass(frozen=True)
class Resize:
    """Terminal size changed (SIGWINCH)."""


@dataclass(frozen=True)
class EndOfInput:
    """The input stream is closed; no more keys will arrive."""


RawInput = Union[KeyPress, Resize, EndOfInput]


def key_name(key: Union[Keys, str]) -> str:
    if isinstance(key, Keys):
        return key.value
    return KEY_ALIASES.get(key, key)


def is_printable(key_press: KeyPress) -> bool:
    key = key_press.key
    if isinstance(key, Keys):
        return False
    return len(key) == 1 and key.isprintable()


class KeyMap:
    """Maps prompt_toolkit key presses to logical action names."""

    def __init__(self, bindings: Dict[str, Iterable[str]]):
        self.bindings: Dict[str, List[str]] = {action: list(keys) for action, keys in bindings.items()}
        self._lookup: Dict[str, str] = {}
        for action, keys in self.bindings.items():
            for name in keys:
                self._lookup[key_name(name)] = action

    @classmethod
    def with_overrides(cls, overrides: Optional[Dict[str, List[str]]] = None) -> "KeyMap":
        bindings = default_keys()
        for action, keys in (overrides or {}).items():
            if action not in ACTIONS:
                logger.warning("Ignoring key binding for unknown action %r", action)
                continue
            bindings[action] = list(keys)
        return cls(bindings)

    def action_for(self, key_press: KeyPress) -> Optional[str]:
        return self._lookup.get(key_name(key_press.key))


class TerminalKeySource:
    """Feeds key presses from a prompt_toolkit ``Input`` into an asyncio queue.

    Mirrors what prompt_toolkit's Application does with its input: attach a
    ready-callback to the event loop, read the parsed keys, and flush a pending
    escape sequence after a short delay.
    """

    def __init__(self, input: Input, escape_delay: float = ESCAPE_FLUSH_DELAY):
        self.input = input
        self.escape_delay = escape_delay
        self._queue: Optional["asyncio.Queue[RawInput]"] = None
        self._attached = None
        self._flush_handle: Optional[asyncio.TimerHandle] = None
        self._loop: Optional[asyncio.AbstractEventLoop] = None
        self._resize_hooked = False

    def attach(self) -> None:
        self._loop = asyncio.get_running_loop()
        self._queue = asyncio.Queue()
        self._attached = self.input.attach(self._on_input_ready)
        self._attached.__enter__()
        sigwinch = getattr(signal, "SIGWINCH", None)
        if sigwinch is not None:
            try:
                self._loop.add_signal_handler(sigwinch, self._on_resize)
                self._resize_hooked = True
            except (NotImplementedError, RuntimeError, ValueError):
                logger.debug("SIGWINCH handler not available")

    def detach(self) -> None:
        if self._flush_handle is not None:
            self._flush_handle.cancel()
            self._flush_handle = None
        if self._resize_hooked and self._loop is not None:
            self._loop.remove_signal_handler(signal.SIGWINCH)
            self._resize_hooked = False
        if self._attached is not None:
            attached, self._attached = self._attached, None
            attached.__exit__(None, None, None)

    async def read(self) -> RawInput:
        if self._queue is None:
            raise RuntimeError("TerminalKeySource.read() called before attach()")
        return await self._queue.get()

    def _push(self, item: RawInput) -> None:
        if self._queue is not None:
            self._queue.put_nowait(item)

    def _on_input_ready(self) -> None:
        for key_press in self.input.read_keys():
            self._push(key_press)
        if self.input.closed:
            self._push(EndOfInput())
            return
        if self._flush_handle is not None:
            self._flush_handle.cancel()
        if self._loop is not None:
            self._flush_handle = self._loop.call_later(self.escape_delay, self._flush)

    def _flush(self) -> None:
        self._flush_handle = None
        for key_press in self.input.flush_keys():
            self._push(key_press)

    def _on_resize(self) -> None:
        self._push(Resize())


__all__ = [
    "ACTIONS",
    "default_keys",
    "Resize",
    "EndOfInput",
    "RawInput",
    "key_name",
    "is_printable",
    "KeyMap",
    "TerminalKeySource",
]
