from __future__ import annotations

import io
from typing import List

import pytest

from marquee.presenters.base import display_duration_ms
from marquee.presenters.terminal import TerminalPresenter


def test_display_duration_is_per_character():
    assert display_duration_ms("abcd", 110) == 440
    assert display_duration_ms("", 110) == 0


def test_frames_scroll_text_across_window():
    presenter = TerminalPresenter(width=4, stream=io.StringIO())
    frames = list(presenter.frames("ab"))

    assert frames[0] == "    "
    assert frames[2] == "  ab"
    assert frames[3] == " ab "
    assert frames[-1] == "    "
    assert len(frames) == 4 + 2 + 1


def test_width_must_be_positive():
    with pytest.raises(ValueError):
        TerminalPresenter(width=0)


@pytest.mark.asyncio
async def test_present_spreads_duration_over_frames():
    waits: List[float] = []

    async def fake_sleep(seconds: float) -> None:
        waits.append(seconds)

    out = io.StringIO()
    presenter = TerminalPresenter(width=6, stream=out, sleep=fake_sleep)

    await presenter.present("news", 150)

    assert len(waits) == 6 + 4 + 1
    assert sum(waits) == pytest.approx(0.6)
    assert "\r  news" in out.getvalue()
    assert out.getvalue().endswith("\r" + " " * 6 + "\r")
