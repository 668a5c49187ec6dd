from __future__ import annotations

import sys
from pathlib import Path

import pytest

ROOT = Path(__file__).resolve().parents[1]

if str(ROOT) not in sys.path:
    sys.path.insert(0, str(ROOT))

from marquee.settings import MarqueeSettings, reset_settings_cache  # noqa: E402


@pytest.fixture
def marquee_settings(monkeypatch: pytest.MonkeyPatch) -> MarqueeSettings:
    """Settings with default timings, isolated from the caller's environment."""
    for key in (
        "MARQUEE_FEED_URLS",
        "MARQUEE_SPEED",
        "MARQUEE_MAX_ITEMS",
        "MARQUEE_GRACE_WINDOW_MS",
        "MARQUEE_RETRY_DELAY_MS",
        "MARQUEE_FETCH_TIMEOUT_SECONDS",
        "MARQUEE_USER_AGENT",
    ):
        monkeypatch.delenv(key, raising=False)
    reset_settings_cache()
    yield MarqueeSettings(_env_file=None)
    reset_settings_cache()
