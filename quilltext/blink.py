"""Cursor blinking driven by a timer."""

from __future__ import annotations

import threading
from typing import Callable, Optional

Scheduler = Callable[[float, Callable[[], None]], object]

BLINK_INTERVAL = 0.5


def _thread_scheduler(delay: float, callback: Callable[[], None]) -> threading.Timer:
    timer = threading.Timer(delay, callback)
    timer.daemon = True
    timer.start()
    return timer


class BlinkManager:
    """Toggles cursor visibility at a fixed interval.

    Every scheduled callback carries the epoch it was scheduled in; a callback
    whose epoch is no longer current does nothing, so pausing or re-enabling
    cancels blinks that are already pending.
    """

    def __init__(
        self,
        schedule: Optional[Scheduler] = None,
        on_change: Optional[Callable[[], None]] = None,
        interval: float = BLINK_INTERVAL,
    ) -> None:
        self._schedule = schedule if schedule is not None else _thread_scheduler
        self._on_change = on_change
        self.interval = interval
        self.enabled = False
        self.paused = False
        self._show = False
        self.epoch = 0
        self._lock = threading.RLock()

    @property
    def show(self) -> bool:
        """Whether the cursor is currently visible."""
        return self._show

    def _notify(self) -> None:
        if self._on_change is not None:
            self._on_change()

    def _next_epoch(self) -> int:
        self.epoch += 1
        return self.epoch

    def blink(self, epoch: int) -> None:
        """Toggle visibility and schedule the next blink, if ``epoch`` is current."""
        with self._lock:
            if epoch != self.epoch or not self.enabled or self.paused:
                return
            self._show = not self._show
            self._notify()
            next_epoch = self._next_epoch()
        self._schedule(self.interval, lambda: self.blink(next_epoch))

    def enable(self) -> None:
        with self._lock:
            if self.enabled:
                return
            self.enabled = True
            self._show = False
            epoch = self.epoch
        self.blink(epoch)

    def disable(self) -> None:
        with self._lock:
            self._show = False
            self.enabled = False

    def pause(self) -> None:
        """Show the cursor and hold it steady for one interval."""
        with self._lock:
            if not self._show:
                self._show = True
                self._notify()
            self.paused = True
            epoch = self._next_epoch()
        self._schedule(self.interval, lambda: self.resume(epoch))

    def resume(self, epoch: int) -> None:
        with self._lock:
            if self.epoch != epoch:
                return
            self.paused = False
        self.blink(epoch)