"""애플리케이션 준비성(readiness) 체크 유틸."""

from __future__ import annotations

import asyncio
import socket
from urllib.parse import urlparse

from app.core.config import Settings, get_settings
from app.core.timeout_policy import TimeoutPolicy, get_timeout_policy

ReadinessCheck = dict[str, str | bool]


def _ok(detail: str, *, required: bool = True) -> ReadinessCheck:
    return {"status": "ok", "ok": True, "required": required, "detail": detail}


def _fail(detail: str, *, required: bool = True) -> ReadinessCheck:
    return {"status": "fail", "ok": False, "required": required, "detail": detail}


def _resolve_host_port(base_url: str) -> tuple[str, int] | None:
    parsed = urlparse(base_url)
    host = parsed.hostname
    if not host:
        return None

    default_port = 80 if parsed.scheme == "http" else 443
    return host, int(parsed.port or default_port)


async def _check_tcp_connectivity(host: str, port: int, timeout_seconds: int, label: str) -> ReadinessCheck:
    def _connect() -> None:
        with socket.create_connection((host, port), timeout=timeout_seconds):
            return None

    try:
        await asyncio.to_thread(_connect)
        return _ok(f"{label} 연결 가능 ({host}:{port})")
    except OSError as exc:
        return _fail(f"{label} 연결 실패 ({host}:{port}): {exc}")


def _check_api_key(settings: Settings) -> ReadinessCheck:
    if not settings.GOOGLE_MAPS_API_KEY:
        return _fail("GOOGLE_MAPS_API_KEY가 설정되지 않았습니다.")
    return _ok("GOOGLE_MAPS_API_KEY 설정 확인 완료")


async def _check_google_places_readiness(settings: Settings, timeout_policy: TimeoutPolicy) -> ReadinessCheck:
    host_port = _resolve_host_port(settings.GOOGLE_PLACES_BASE_URL)
    if host_port is None:
        return _fail("GOOGLE_PLACES_BASE_URL에서 호스트를 파싱할 수 없습니다.")

    host, port = host_port
    return await _check_tcp_connectivity(
        host=host,
        port=port,
        timeout_seconds=timeout_policy.external_api_timeout_seconds,
        label="Google Places API",
    )


async def collect_readiness_status(settings: Settings | None = None) -> dict[str, object]:
    """API 키 설정과 Google Places 연결 가능 여부를 점검합니다."""
    resolved_settings = settings or get_settings()
    timeout_policy = get_timeout_policy(resolved_settings)

    checks: dict[str, ReadinessCheck] = {
        "api_key": _check_api_key(resolved_settings),
        "google_places": await _check_google_places_readiness(resolved_settings, timeout_policy),
    }
    required_checks_ok = all(bool(check["ok"]) for check in checks.values() if bool(check.get("required", True)))

    return {
        "status": "ready" if required_checks_ok else "not_ready",
        "checks": checks,
    }
