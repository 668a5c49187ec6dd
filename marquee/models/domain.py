"""Domain models for marquee construction inputs."""

from __future__ import annotations

from typing import Any, Callable, Optional, Tuple

from pydantic import (
    AnyUrl,
    BaseModel,
    ConfigDict,
    Field,
    PositiveInt,
    TypeAdapter,
    ValidationError,
    field_validator,
)

DEFAULT_SPEED = 110
MIN_SPEED = 50
MAX_SPEED = 300

_URL_ADAPTER: TypeAdapter[AnyUrl] = TypeAdapter(AnyUrl)


class ConstructionError(ValueError):
    """Invalid marquee setup (sources, options or presenter)."""


def coerce_speed(value: Any) -> int:
    """Return ``value`` as a speed in [50, 300], or the default when invalid."""
    if value is None or isinstance(value, bool):
        return DEFAULT_SPEED
    try:
        speed = int(float(value)) if isinstance(value, str) else int(value)
    except (TypeError, ValueError, OverflowError):
        return DEFAULT_SPEED
    if speed < MIN_SPEED or speed > MAX_SPEED:
        return DEFAULT_SPEED
    return speed


def validate_url(url: Any) -> bool:
    """True if ``url`` parses as an absolute URL."""
    try:
        _URL_ADAPTER.validate_python(url)
    except ValidationError:
        return False
    return True


def get_hostname(url: str) -> str:
    """Hostname of ``url``; empty string when it cannot be parsed.

    >>> get_hostname("http://www.dnoticias.pt/rss/desporto.xml")
    'www.dnoticias.pt'
    """
    try:
        parsed = _URL_ADAPTER.validate_python(url)
    except ValidationError:
        return ""
    return parsed.host or ""


class SourceList(BaseModel):
    """Ordered, immutable list of feed URLs."""

    model_config = ConfigDict(frozen=True)

    urls: Tuple[str, ...] = Field(..., description="Feed URLs in rotation order")

    @field_validator("urls", mode="before")
    @classmethod
    def _wrap_single_url(cls, value: Any) -> Any:
        if isinstance(value, str):
            return (value,)
        return value

    @field_validator("urls")
    @classmethod
    def _validate_urls(cls, value: Tuple[str, ...]) -> Tuple[str, ...]:
        if not value:
            raise ValueError("at least one feed URL is required")
        invalid = [url for url in value if not validate_url(url)]
        if invalid:
            raise ValueError(f"Invalid URL on list: {invalid[0]!r}")
        return value

    def __len__(self) -> int:
        return len(self.urls)

    def __getitem__(self, index: int) -> str:
        return self.urls[index]


class MarqueeOptions(BaseModel):
    """Per-marquee options.

    ``speed`` is the display duration per character in milliseconds; it is
    only validated here and consumed by the presenter. Out-of-range or
    non-numeric speeds silently fall back to the default.
    """

    model_config = ConfigDict(frozen=True)

    speed: int = Field(DEFAULT_SPEED, description="ms per character, 50-300")
    max_items: Optional[PositiveInt] = Field(None, description="Max headlines per feed")
    on_hostname: Optional[Callable[[str], None]] = Field(
        None,
        description="Called with the hostname of each successfully shown feed",
    )

    @field_validator("speed", mode="before")
    @classmethod
    def _clamp_speed(cls, value: Any) -> int:
        return coerce_speed(value)
