"""Marquee 애플리케이션 부트스트랩."""

from __future__ import annotations

from typing import Callable, Optional

from .connectors.feed import FeedFetcher
from .controller import RotationController
from .presenters.base import Presenter
from .settings import MarqueeSettings, get_settings
from .utils.logging import configure_logging


def create_controller(
    presenter: Presenter,
    settings: MarqueeSettings | None = None,
    *,
    fetcher: Optional[FeedFetcher] = None,
    on_hostname: Optional[Callable[[str], None]] = None,
) -> RotationController:
    """설정을 기반으로 RotationController 인스턴스를 생성한다."""
    config = settings or get_settings()
    configure_logging(config.log_level, json_enabled=config.log_json)

    options = dict(
        speed=config.speed,
        max_items=config.max_items,
        on_hostname=on_hostname,
    )
    return RotationController(
        config.feed_urls,
        presenter,
        options,
        fetcher=fetcher or FeedFetcher(settings=config),
        grace_window_ms=config.grace_window_ms,
        retry_delay_ms=config.retry_delay_ms,
    )
