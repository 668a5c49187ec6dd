"""Feed marquee: rotates RSS sources into a single scrolling headline line."""

from .app import create_controller  # noqa: F401
from .controller import Outcome, Phase, RotationController, RotationState  # noqa: F401
from .models.domain import ConstructionError, MarqueeOptions, SourceList  # noqa: F401
from .services.parser import SEPARATOR, ParseError, extract_headlines, parse_feed  # noqa: F401
from .services.sanitizer import sanitize  # noqa: F401
from .settings import MarqueeSettings, get_settings, reset_settings_cache  # noqa: F401

__all__ = [
    "ConstructionError",
    "MarqueeOptions",
    "MarqueeSettings",
    "Outcome",
    "ParseError",
    "Phase",
    "RotationController",
    "RotationState",
    "SEPARATOR",
    "SourceList",
    "create_controller",
    "extract_headlines",
    "get_settings",
    "parse_feed",
    "reset_settings_cache",
    "sanitize",
]
