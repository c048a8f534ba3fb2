"""응답 헤더(CORS, 보안, 캐시) 정의."""

from __future__ import annotations

from app.core.config import Settings

CORS_HEADERS: dict[str, str] = {
    "Access-Control-Allow-Origin": "*",
    "Access-Control-Allow-Methods": "GET, OPTIONS",
}

PREFLIGHT_HEADERS: dict[str, str] = {
    **CORS_HEADERS,
    "Access-Control-Allow-Headers": "Content-Type",
}

SECURITY_HEADERS: dict[str, str] = {
    "Content-Security-Policy": "default-src 'none'",
    "X-Content-Type-Options": "nosniff",
    "X-Frame-Options": "DENY",
    "X-XSS-Protection": "0",
    "Referrer-Policy": "no-referrer",
    "X-Robots-Tag": "noindex",
    "Vary": "Origin",
    "Timing-Allow-Origin": "*",
    "X-Accel-Buffering": "no",
    "Permissions-Policy": "geolocation=(), microphone=(), camera=()",
}

DEFAULT_CACHE_CONTROL = "no-store"


def build_cache_control(settings: Settings) -> str:
    """리뷰 응답용 공유 캐시 지시어를 생성합니다."""
    return (
        f"s-maxage={settings.REVIEWS_CACHE_MAX_AGE_SECONDS}, "
        f"stale-while-revalidate={settings.REVIEWS_CACHE_STALE_SECONDS}"
    )
