"""Headline text cleanup."""

from __future__ import annotations

import re

CDATA_PREFIX = "<![CDATA["
CDATA_SUFFIX = "]]>"

_TAG_RE = re.compile(r"<.*?>", re.DOTALL)


def strip_cdata(text: str) -> str:
    # first occurrence of each marker only
    return text.replace(CDATA_PREFIX, "", 1).replace(CDATA_SUFFIX, "", 1)


def strip_tags(text: str) -> str:
    return _TAG_RE.sub("", text)


def sanitize(raw: str) -> str:
    """Remove a CDATA wrapper and any markup tags from a title."""
    return strip_tags(strip_cdata(raw))
