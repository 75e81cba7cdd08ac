"""Event source merging redraw ticks with terminal input.

One producer task per ``EventSource`` instance writes into an unbounded queue;
the PlanerTUI main loop is the only consumer. Closing the channel is signalled
by a ``None`` entry, after which ``next_event`` keeps returning ``None``.
"""

import asyncio
import logging
from dataclasses import dataclass
from typing import Any, List, Optional, Union

from application.ports import KeySource
from interface.tui_input import EndOfInput

logger = logging.getLogger("weeklyplaner.events")

DEFAULT_TICK_INTERVAL = 1.0


@dataclass(frozen=True)
class Tick:
    pass


@dataclass(frozen=True)
class Input:
    payload: Any


Event = Union[Tick, Input]


class EventSource:
    def __init__(self, keys: KeySource, interval: float = DEFAULT_TICK_INTERVAL):
        self.keys = keys
        self.interval = interval
        self._queue: "asyncio.Queue[Optional[Event]]" = asyncio.Queue()
        self._stop = asyncio.Event()
        self._task: Optional[asyncio.Task] = None
        self._closed = False

    @classmethod
    def start(cls, keys: KeySource, interval: float = DEFAULT_TICK_INTERVAL) -> "EventSource":
        """Create a running source. Its first event is always an immediate Tick."""
        source = cls(keys, interval)
        source._queue.put_nowait(Tick())
        source._task = asyncio.get_running_loop().create_task(source._produce())
        return source

    @property
    def stopped(self) -> bool:
        return self._stop.is_set()

    @property
    def closed(self) -> bool:
        return self._closed

    def stop(self) -> None:
        if self._stop.is_set():
            logger.debug("EventSource already stopped")
            return
        self._stop.set()

    async def next_event(self) -> Optional[Event]:
        if self._closed:
            return None
        event = await self._queue.get()
        if event is None:
            self._closed = True
        return event

    async def drain(self) -> List[Event]:
        """Read until the producer closes the channel; returns what was left unread."""
        leftovers: List[Event] = []
        while True:
            event = await self.next_event()
            if event is None:
                return leftovers
            leftovers.append(event)

    async def _produce(self) -> None:
        stop_wait = asyncio.ensure_future(self._stop.wait())
        timer = asyncio.ensure_future(asyncio.sleep(self.interval))
        next_key: Optional[asyncio.Future] = None
        try:
            try:
                self.keys.attach()
            except Exception as exc:
                logger.error("Could not attach to terminal input: %s", exc)
                return
            while True:
                if next_key is None:
                    next_key = asyncio.ensure_future(self.keys.read())
                done, _ = await asyncio.wait(
                    {stop_wait, timer, next_key},
                    return_when=asyncio.FIRST_COMPLETED,
                )
                if next_key in done:
                    finished, next_key = next_key, None
                    error = finished.exception()
                    if error is not None:
                        logger.error("Input stream failed: %s", error)
                        break
                    payload = finished.result()
                    if isinstance(payload, EndOfInput):
                        logger.info("Input stream closed")
                        break
                    self._queue.put_nowait(Input(payload))
                if stop_wait in done:
                    break
                if timer in done:
                    self._queue.put_nowait(Tick())
                    timer = asyncio.ensure_future(asyncio.sleep(self.interval))
        finally:
            for pending in (stop_wait, timer, next_key):
                if pending is not None and not pending.done():
                    pending.cancel()
            self.keys.detach()
            self._queue.put_nowait(None)


__all__ = ["Tick", "Input", "Event", "EventSource", "DEFAULT_TICK_INTERVAL"]
