"""Rotation controller: cycles feed sources and applies the failure policy.

One step runs a single Loading phase to completion::

    fetch -> parse -> present -> advance           (success)
    fetch -> backoff -> skip | replay | delay      (failure or empty feed)

Failure policy, with ``elapsed`` measured from the last successful display:

- ``elapsed`` beyond the grace window: skip to the next source immediately and
  restart the grace window.
- otherwise, if something was shown before: replay the cached text and
  restart the grace window (a replay is a display too), then advance.
- otherwise (cold start): wait the retry delay, then advance.

Nothing raised by the fetcher, parser, hostname hook or presenter escapes a
step; it is logged and folded into the policy above.
"""

from __future__ import annotations

import asyncio
import dataclasses
import time
from dataclasses import dataclass
from enum import Enum
from typing import Any, Awaitable, Callable, Mapping, Optional, Sequence, Tuple, Union

from pydantic import ValidationError

from marquee.connectors.feed import FeedFetcher
from marquee.models.domain import (
    ConstructionError,
    MarqueeOptions,
    SourceList,
    coerce_speed,
    get_hostname,
)
from marquee.presenters.base import Presenter
from marquee.services.parser import ParsedFeed, parse_feed
from marquee.utils.logging import get_logger

DEFAULT_GRACE_WINDOW_MS = 5000
DEFAULT_RETRY_DELAY_MS = 5000

ClockFn = Callable[[], float]
SleepFn = Callable[[float], Awaitable[None]]
ParserFn = Callable[[str, Optional[int]], ParsedFeed]

logger = get_logger(__name__)


class Phase(str, Enum):
    LOADING = "loading"
    PRESENTING = "presenting"
    BACKOFF = "backoff"


class Outcome(str, Enum):
    """How a rotation step ended."""

    PRESENTED = "presented"
    SKIPPED = "skipped"
    REPLAYED = "replayed"
    DELAYED = "delayed"


@dataclass
class RotationState:
    current_index: int = 0
    last_success_text: str = ""
    # clock() seconds
    last_success_at: float = 0.0


def advance(state: RotationState, source_count: int) -> int:
    state.current_index = (state.current_index + 1) % source_count
    return state.current_index


def record_success(state: RotationState, text: str, now: float) -> None:
    state.last_success_text = text
    state.last_success_at = now


def decide_backoff(state: RotationState, now: float, grace_window_ms: int) -> Outcome:
    elapsed_ms = (now - state.last_success_at) * 1000.0
    if elapsed_ms > grace_window_ms:
        return Outcome.SKIPPED
    if state.last_success_text:
        return Outcome.REPLAYED
    return Outcome.DELAYED


class RotationController:
    """Drives a marquee across a fixed list of feed URLs.

    Construction only validates inputs; rotation begins at source 0 when
    :meth:`start` or :meth:`run` is called.
    """

    def __init__(
        self,
        feed_urls: Union[str, Sequence[str]],
        presenter: Presenter,
        options: Union[MarqueeOptions, Mapping[str, Any], None] = None,
        *,
        fetcher: Optional[FeedFetcher] = None,
        parser: ParserFn = parse_feed,
        grace_window_ms: int = DEFAULT_GRACE_WINDOW_MS,
        retry_delay_ms: int = DEFAULT_RETRY_DELAY_MS,
        clock: ClockFn = time.monotonic,
        sleep: SleepFn = asyncio.sleep,
    ):
        if presenter is None:
            raise ConstructionError("Invalid presenter")
        try:
            self._sources = SourceList(urls=feed_urls)
        except ValidationError as exc:
            raise ConstructionError(f"Invalid feed URL list: {exc}") from exc
        try:
            if options is None:
                options = MarqueeOptions()
            elif not isinstance(options, MarqueeOptions):
                options = MarqueeOptions.model_validate(options)
        except ValidationError as exc:
            raise ConstructionError(f"Invalid options: {exc}") from exc

        self._options = options
        self._speed = options.speed
        self._presenter = presenter
        self._fetcher = fetcher or FeedFetcher()
        self._parser = parser
        self._grace_window_ms = int(grace_window_ms)
        self._retry_delay_ms = int(retry_delay_ms)
        self._clock = clock
        self._sleep = sleep
        self._state = RotationState(last_success_at=clock())
        self._phase = Phase.LOADING
        self._in_step = False

    # ------------------------------------------------------------------
    # Accessors
    # ------------------------------------------------------------------

    @property
    def sources(self) -> Tuple[str, ...]:
        return self._sources.urls

    @property
    def options(self) -> MarqueeOptions:
        return self._options

    @property
    def speed(self) -> int:
        return self._speed

    @speed.setter
    def speed(self, value: Any) -> None:
        self._speed = coerce_speed(value)

    @property
    def phase(self) -> Phase:
        return self._phase

    @property
    def state(self) -> RotationState:
        """Snapshot of the rotation state; mutating it has no effect."""
        return dataclasses.replace(self._state)

    @property
    def current_url(self) -> str:
        return self._sources[self._state.current_index]

    # ------------------------------------------------------------------
    # Driving
    # ------------------------------------------------------------------

    def start(self) -> "asyncio.Task[None]":
        """Schedule :meth:`run` on the running event loop."""
        return asyncio.get_running_loop().create_task(self.run())

    async def run(self, cycles: Optional[int] = None) -> None:
        """Rotate forever, or for ``cycles`` steps when given."""
        done = 0
        while cycles is None or done < cycles:
            await self.step()
            done += 1

    async def step(self) -> Outcome:
        if self._in_step:
            raise RuntimeError("a rotation step is already in progress")
        self._in_step = True
        try:
            return await self._step()
        finally:
            self._in_step = False

    async def _step(self) -> Outcome:
        state = self._state
        index = state.current_index
        url = self._sources[index]

        self._phase = Phase.LOADING
        text = await self._load(url)
        if text:
            record_success(state, text, self._clock())
            self._report_hostname(url)
            await self._present(text, url)
            advance(state, len(self._sources))
            self._phase = Phase.LOADING
            return Outcome.PRESENTED

        self._phase = Phase.BACKOFF
        now = self._clock()
        outcome = decide_backoff(state, now, self._grace_window_ms)
        if outcome is Outcome.SKIPPED:
            logger.info(
                "rotation.skip",
                extra={"url": url, "index": index, "elapsed_ms": int((now - state.last_success_at) * 1000)},
            )
            advance(state, len(self._sources))
            state.last_success_at = now
        elif outcome is Outcome.REPLAYED:
            logger.info("rotation.replay", extra={"url": url, "index": index})
            state.last_success_at = now
            await self._present(state.last_success_text, url)
            advance(state, len(self._sources))
        else:
            logger.info("rotation.delay", extra={"url": url, "index": index, "delay_ms": self._retry_delay_ms})
            await self._sleep(self._retry_delay_ms / 1000.0)
            advance(state, len(self._sources))
        self._phase = Phase.LOADING
        return outcome

    async def _load(self, url: str) -> str:
        """Fetch and parse ``url``; an empty string means nothing to show."""
        try:
            result = await self._fetcher.fetch_raw(url)
        except Exception:
            logger.exception("rotation.fetch_crashed", extra={"url": url})
            return ""
        if not result.ok or result.text is None:
            return ""

        try:
            parsed = self._parser(result.text, self._options.max_items)
        except Exception:
            logger.exception("rotation.parse_crashed", extra={"url": url})
            return ""
        text = parsed.text
        if not text.strip():
            logger.info("rotation.empty", extra={"url": url, "parse_error": not parsed.ok})
            return ""
        return text

    async def _present(self, text: str, url: str) -> None:
        self._phase = Phase.PRESENTING
        logger.info("rotation.present", extra={"url": url, "chars": len(text), "speed": self._speed})
        try:
            await self._presenter.present(text, self._speed)
        except Exception:
            # a broken display pass still counts as finished
            logger.exception("rotation.present_failed", extra={"url": url})

    def _report_hostname(self, url: str) -> None:
        hook = self._options.on_hostname
        if hook is None:
            return
        try:
            hook(get_hostname(url))
        except Exception:
            logger.exception("rotation.hostname_hook_failed", extra={"url": url})
