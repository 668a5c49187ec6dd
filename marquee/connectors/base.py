"""Fetch errors and the fetch result type."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Optional


class FetchError(Exception):
    """Base fetch error."""


class TransientFetchError(FetchError):
    """Likely to clear up on its own (e.g., rate limit, network hiccup)."""


class PermanentFetchError(FetchError):
    """Not expected to clear up (e.g., 4xx semantics, undecodable body)."""


@dataclass(frozen=True)
class FetchResult:
    """Outcome of one fetch: either ``text`` or ``error`` is set."""

    url: str
    text: Optional[str] = None
    error: Optional[FetchError] = None

    @property
    def ok(self) -> bool:
        return self.error is None and self.text is not None

    @classmethod
    def success(cls, url: str, text: str) -> "FetchResult":
        return cls(url=url, text=text)

    @classmethod
    def failure(cls, url: str, error: FetchError) -> "FetchResult":
        return cls(url=url, error=error)
