"""Scrolls headlines through a fixed-width window on a text stream."""

from __future__ import annotations

import asyncio
import sys
from typing import Awaitable, Callable, Optional, TextIO

from .base import display_duration_ms

SleepFn = Callable[[float], Awaitable[None]]


class TerminalPresenter:
    """Terminal stand-in for a scrolling ticker element.

    The text enters from the right edge and leaves at the left edge, so one
    pass moves ``width + len(text)`` columns over ``len(text) * speed`` ms.
    """

    def __init__(
        self,
        width: int = 60,
        stream: Optional[TextIO] = None,
        *,
        sleep: SleepFn = asyncio.sleep,
    ):
        if width <= 0:
            raise ValueError("width must be positive")
        self.width = width
        self._stream = stream or sys.stdout
        self._sleep = sleep

    def frames(self, text: str):
        padded = " " * self.width + text
        for offset in range(len(padded) + 1):
            yield padded[offset : offset + self.width].ljust(self.width)

    async def present(self, text: str, speed: int) -> None:
        steps = self.width + len(text) + 1
        interval = display_duration_ms(text, speed) / 1000.0 / steps
        for frame in self.frames(text):
            self._stream.write("\r" + frame)
            self._stream.flush()
            await self._sleep(interval)
        self._stream.write("\r" + " " * self.width + "\r")
        self._stream.flush()
