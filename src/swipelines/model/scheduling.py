"""
Deferred callbacks on the UI loop.

The gesture resolver and the notice channel only need "call this later" and
"cancel that". Production code backs this with QTimer
(see swipelines.controller.scheduler); tests drive a manual clock.
"""
from __future__ import annotations

from typing import Callable, Protocol


class ScheduledTask(Protocol):
    def cancel(self) -> None: ...


class Scheduler(Protocol):
    def call_later(self, delay_ms: int, callback: Callable[[], None]) -> ScheduledTask: ...
