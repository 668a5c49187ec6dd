"""Feed parser: raw RSS/RDF markup to a single line of headlines.

The marquee scrolls a whole feed as one line, so the parser does not return
per-item records. It keeps titles in document order, sanitizes them and joins
them with a bullet separator.
"""

from __future__ import annotations

import xml.etree.ElementTree as ET
from dataclasses import dataclass
from typing import Iterator, Optional, Tuple

from marquee.services.sanitizer import sanitize
from marquee.utils.logging import get_logger

SEPARATOR = "\xa0•\xa0"
# Returned instead of raising when the document is not XML at all.
PARSE_FAILURE_PLACEHOLDER = "   "

logger = get_logger(__name__)


class ParseError(Exception):
    """Raw feed text could not be parsed as XML."""


@dataclass(frozen=True)
class ParsedFeed:
    titles: Tuple[str, ...] = ()
    error: Optional[ParseError] = None

    @property
    def ok(self) -> bool:
        return self.error is None

    @property
    def count(self) -> int:
        return len(self.titles)

    @property
    def text(self) -> str:
        if self.error is not None:
            return PARSE_FAILURE_PLACEHOLDER
        return SEPARATOR.join(self.titles)


def _iter_raw_titles(root: ET.Element) -> Iterator[str]:
    for item in root.iterfind(".//{*}item"):
        title = item.find("{*}title")
        if title is None or not title.text:
            continue
        yield title.text


def parse_feed(raw_document: str, max_items: Optional[int] = None) -> ParsedFeed:
    """Parse ``raw_document`` into sanitized titles.

    Items without a title (or with an empty one) are skipped and do not count
    toward ``max_items``. ``max_items=None`` means no limit.
    """
    try:
        root = ET.fromstring(raw_document.lstrip("\ufeff \t\r\n"))
    except ET.ParseError as exc:
        logger.warning("parse.failed", extra={"reason": str(exc)})
        return ParsedFeed(error=ParseError(str(exc)))

    titles = []
    for raw_title in _iter_raw_titles(root):
        titles.append(sanitize(raw_title))
        if max_items is not None and len(titles) >= max_items:
            logger.info("parse.max_items", extra={"max_items": max_items})
            break

    logger.info("parse.done", extra={"titles": len(titles)})
    return ParsedFeed(titles=tuple(titles))


def extract_headlines(raw_document: str, max_items: Optional[int] = None) -> str:
    """Return the feed's titles joined by :data:`SEPARATOR`.

    Never raises: an unparseable document yields
    :data:`PARSE_FAILURE_PLACEHOLDER` and a feed without titled items yields
    an empty string.
    """
    return parse_feed(raw_document, max_items).text
