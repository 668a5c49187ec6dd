"""Presentation protocol consumed by the rotation controller."""

from __future__ import annotations

from typing import Protocol


class Presenter(Protocol):
    async def present(self, text: str, speed: int) -> None:
        """Show ``text`` for one full display pass; return when it ends."""
        ...


def display_duration_ms(text: str, speed: int) -> int:
    """Display pass length: ``speed`` milliseconds per character."""
    return len(text) * speed
