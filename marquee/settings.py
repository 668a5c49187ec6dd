"""Configuration models for the feed marquee."""

from __future__ import annotations

import json
from functools import lru_cache
from typing import Annotated, Any, List, Optional

from pydantic import (
    Field,
    PositiveFloat,
    PositiveInt,
    ValidationError,
    field_validator,
)
from pydantic_settings import BaseSettings, NoDecode, SettingsConfigDict

from marquee.models.domain import DEFAULT_SPEED, coerce_speed


class MarqueeSettings(BaseSettings):
    """Marquee용 환경 설정."""

    model_config = SettingsConfigDict(
        case_sensitive=False,
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
        frozen=True,
        populate_by_name=True,
    )

    feed_urls: Annotated[List[str], NoDecode] = Field(
        default_factory=list,
        alias="MARQUEE_FEED_URLS",
        description="순환할 피드 URL 목록 (JSON 배열 혹은 쉼표 구분 문자열).",
    )
    speed: int = Field(DEFAULT_SPEED, alias="MARQUEE_SPEED", description="글자당 표시 시간(ms), 50~300.")
    max_items: Optional[PositiveInt] = Field(None, alias="MARQUEE_MAX_ITEMS", description="피드당 최대 헤드라인 수.")
    grace_window_ms: PositiveInt = Field(
        5000,
        alias="MARQUEE_GRACE_WINDOW_MS",
        description="마지막 성공 이후 실패를 관대하게 처리하는 시간(ms).",
    )
    retry_delay_ms: PositiveInt = Field(
        5000,
        alias="MARQUEE_RETRY_DELAY_MS",
        description="캐시가 없을 때 다음 소스로 넘어가기 전 대기 시간(ms).",
    )
    fetch_timeout_seconds: Optional[PositiveFloat] = Field(
        None,
        alias="MARQUEE_FETCH_TIMEOUT_SECONDS",
        description="피드 요청 타임아웃(초). 미설정 시 타임아웃 없음.",
    )
    user_agent: str = Field("feed-marquee/0.1", alias="MARQUEE_USER_AGENT", description="HTTP User-Agent 헤더.")
    log_level: str = Field("INFO", alias="MARQUEE_LOG_LEVEL", description="로그 레벨.")
    log_json: bool = Field(False, alias="LOG_JSON", description="로그를 JSON 형식으로 출력할지 여부.")

    @field_validator("feed_urls", mode="before")
    @classmethod
    def _parse_feed_urls(cls, value: Any) -> List[Any]:
        if value in (None, "", []):
            return []
        if isinstance(value, str):
            text = value.strip()
            if text.startswith("["):
                try:
                    parsed = json.loads(text)
                except json.JSONDecodeError as exc:
                    raise ValueError("MARQUEE_FEED_URLS는 JSON 배열이어야 합니다.") from exc
                return parsed
            return [part.strip() for part in text.split(",") if part.strip()]
        if isinstance(value, (list, tuple)):
            return list(value)
        raise ValueError("MARQUEE_FEED_URLS는 리스트 형태여야 합니다.")

    @field_validator("speed", mode="before")
    @classmethod
    def _clamp_speed(cls, value: Any) -> int:
        return coerce_speed(value)

    @field_validator("user_agent")
    @classmethod
    def _non_empty_user_agent(cls, value: str) -> str:
        agent = value.strip()
        if not agent:
            raise ValueError("MARQUEE_USER_AGENT는 공백일 수 없습니다.")
        return agent


@lru_cache()
def get_settings() -> MarqueeSettings:
    """환경 변수를 기준으로 MarqueeSettings 인스턴스를 반환한다."""
    try:
        return MarqueeSettings()
    except ValidationError as exc:
        raise RuntimeError(f"환경 변수 검증에 실패했습니다: {exc}") from exc


def reset_settings_cache() -> None:
    """Settings LRU 캐시를 초기화한다 (테스트 용도)."""
    get_settings.cache_clear()  # type: ignore[attr-defined]
