"""Terminal marquee smoke run.

Usage:
  uv run -- python scripts/run_marquee.py https://feeds.bbci.co.uk/news/rss.xml -n 3 --speed 60

Without URLs, feeds come from MARQUEE_FEED_URLS (.env via pydantic settings).
Runs N rotation steps (0 = forever) and prints the outcome of each step.
"""

from __future__ import annotations

import argparse
import asyncio
import sys
from typing import List

from marquee.app import create_controller
from marquee.models.domain import ConstructionError
from marquee.presenters.terminal import TerminalPresenter
from marquee.settings import get_settings


async def _rotate(controller, steps: int) -> None:
    done = 0
    while steps == 0 or done < steps:
        index = controller.state.current_index
        outcome = await controller.step()
        print(f"\n[{index}] {controller.sources[index]} -> {outcome.value}")
        done += 1


def main(argv: List[str] | None = None) -> int:
    parser = argparse.ArgumentParser(description="Feed marquee smoke run")
    parser.add_argument("urls", nargs="*", help="Feed URLs (default: MARQUEE_FEED_URLS)")
    parser.add_argument("-n", "--steps", type=int, default=0, help="Rotation steps to run (default: 0, forever)")
    parser.add_argument("--speed", type=int, default=None, help="ms per character, 50-300")
    parser.add_argument("--max-items", type=int, default=None, help="Max headlines per feed")
    parser.add_argument("--width", type=int, default=60, help="Ticker width in columns (default: 60)")
    args = parser.parse_args(argv)

    cfg = get_settings()
    overrides = {}
    if args.urls:
        overrides["feed_urls"] = args.urls
    if args.speed is not None:
        overrides["speed"] = args.speed
    if args.max_items is not None:
        overrides["max_items"] = args.max_items
    if overrides:
        cfg = cfg.model_copy(update=overrides)

    try:
        controller = create_controller(
            TerminalPresenter(width=args.width),
            cfg,
            on_hostname=lambda host: print(f"\nsource: {host}"),
        )
    except ConstructionError as exc:
        print(f"Invalid setup: {exc}")
        return 2

    try:
        asyncio.run(_rotate(controller, args.steps))
    except KeyboardInterrupt:
        return 130
    return 0


if __name__ == "__main__":
    sys.exit(main())
