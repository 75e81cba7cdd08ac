"""Status line and mode bar for PlanerTUI."""

from typing import List, Optional, Tuple

from prompt_toolkit.formatted_text import FormattedText

DEFAULT_STATUS_TTL_TICKS = 3


class StatusLine:
    """Transient message cleared after a number of redraw ticks."""

    def __init__(self, ttl_ticks: int = DEFAULT_STATUS_TTL_TICKS):
        self.ttl_ticks = ttl_ticks
        self.message = ""
        self.age = 0
        self._ttl = ttl_ticks

    def set(self, message: str, ttl: Optional[int] = None) -> None:
        self.message = message
        self.age = 0
        self._ttl = ttl if ttl and ttl > 0 else self.ttl_ticks

    def tick(self) -> None:
        if self.age >= self._ttl:
            self.message = ""
        if self.message:
            self.age += 1


MODE_LABELS = {
    "NORMAL": ("NORMAL", "class:mode.normal"),
    "INSERT": ("INSERT", "class:mode.insert"),
    "SAVING": ("SAVING", "class:mode.saving"),
    "QUITTING": ("QUITTING", "class:mode.quitting"),
    "DELETING": ("DELETING", "class:mode.deleting"),
}


def build_mode_bar(tui, width: int) -> FormattedText:
    label, style = MODE_LABELS.get(tui.input_mode.value, (tui.input_mode.value, "class:mode.normal"))
    parts: List[Tuple[str, str]] = [(style, label)]
    marker = " [+]" if tui.dirty else ""
    filler = max(0, width - len(label) - len(marker))
    parts.append((style, marker + " " * filler))
    return FormattedText(parts)


def build_status_text(tui) -> FormattedText:
    message = tui.status.message
    if not message:
        return FormattedText([])
    return FormattedText([("class:status", message)])


__all__ = ["StatusLine", "MODE_LABELS", "build_mode_bar", "build_status_text", "DEFAULT_STATUS_TTL_TICKS"]
