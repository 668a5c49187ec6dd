"""Feed fetcher (provider-injected for tests/offline)."""

from __future__ import annotations

from typing import Awaitable, Callable, Optional

import httpx

from marquee.settings import MarqueeSettings, get_settings
from marquee.utils.logging import get_logger

from .base import FetchError, FetchResult, PermanentFetchError, TransientFetchError

ProviderFn = Callable[[str], Awaitable[str]]

logger = get_logger(__name__)


class FeedFetcher:
    """Retrieve one feed document as text.

    - provider 주입 시: 오프라인 모드 (provider가 텍스트를 반환)
    - provider 미주입 시: 실제 HTTP 호출 (리다이렉트 추적)

    There is no retry here; the rotation controller decides what a failure
    means.
    """

    def __init__(
        self,
        provider: Optional[ProviderFn] = None,
        *,
        settings: Optional[MarqueeSettings] = None,
    ):
        self._provider = provider
        self._settings = settings

    async def fetch_raw(self, url: str) -> FetchResult:
        logger.info("fetch.start", extra={"url": url})
        try:
            text = await self._fetch_text(url)
        except FetchError as exc:
            logger.warning("fetch.failed", extra={"url": url, "reason": str(exc)})
            return FetchResult.failure(url, exc)
        return FetchResult.success(url, text)

    async def _fetch_text(self, url: str) -> str:
        if self._provider is not None:
            try:
                return await self._provider(url)
            except FetchError:
                raise
            except Exception as exc:
                raise TransientFetchError(f"provider failed: {exc}") from exc

        cfg = self._settings or get_settings()
        headers = {"User-Agent": cfg.user_agent}
        timeout = httpx.Timeout(cfg.fetch_timeout_seconds)
        try:
            async with httpx.AsyncClient(headers=headers, timeout=timeout, follow_redirects=True) as client:
                resp = await client.get(url)
        except httpx.TimeoutException as exc:
            raise TransientFetchError("피드 요청 타임아웃") from exc
        except (httpx.HTTPError, httpx.InvalidURL) as exc:
            raise TransientFetchError(f"피드 요청 오류: {exc}") from exc

        if resp.status_code == 429 or resp.status_code >= 500:
            raise TransientFetchError(f"피드 일시 오류: {resp.status_code}")
        if resp.status_code >= 400:
            raise PermanentFetchError(f"피드 오류: {resp.status_code}")

        try:
            return resp.text
        except (UnicodeDecodeError, LookupError) as exc:
            raise PermanentFetchError("피드 본문 디코딩 실패") from exc
