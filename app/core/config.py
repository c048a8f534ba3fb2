"""애플리케이션 전역 설정을 관리하는 모듈."""

from functools import lru_cache

from pydantic import field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """환경 변수 기반 설정 모델."""

    GOOGLE_MAPS_API_KEY: str | None = None
    GOOGLE_PLACES_BASE_URL: str = "https://places.googleapis.com"
    GOOGLE_PLACES_LANGUAGE_CODE: str = ""
    GOOGLE_PLACES_TIMEOUT_SECONDS: int = 10
    EXTERNAL_API_TIMEOUT_SECONDS: int = 15
    REVIEWS_CACHE_MAX_AGE_SECONDS: int = 3600
    REVIEWS_CACHE_STALE_SECONDS: int = 86400
    APP_ENV: str = "development"
    DOCS_MODE: str = "disabled"
    SECURITY_HEADERS_ENABLED: bool = True
    ENABLE_HSTS: bool = False
    HSTS_MAX_AGE_SECONDS: int = 31536000
    LOG_LEVEL: str = "INFO"

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
    )

    @field_validator("GOOGLE_MAPS_API_KEY", mode="before")
    @classmethod
    def _strip_api_key(cls, value: object) -> str | None:
        if value is None:
            return None
        stripped = str(value).strip()
        return stripped or None

    @field_validator("GOOGLE_PLACES_BASE_URL", mode="before")
    @classmethod
    def _strip_base_url(cls, value: object) -> str:
        return str(value or "https://places.googleapis.com").strip().rstrip("/")

    @field_validator("REVIEWS_CACHE_MAX_AGE_SECONDS", "REVIEWS_CACHE_STALE_SECONDS", mode="before")
    @classmethod
    def _clamp_cache_seconds(cls, value: object) -> int:
        try:
            numeric = int(value) if value is not None else 0
        except (TypeError, ValueError):
            numeric = 0
        return max(0, numeric)


@lru_cache
def get_settings() -> Settings:
    """Settings 인스턴스를 반환한다. 최초 호출 시에만 생성되고 이후 캐싱된다."""
    return Settings()
