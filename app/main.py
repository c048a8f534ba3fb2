"""FastAPI 애플리케이션 진입점."""

from __future__ import annotations

from fastapi import FastAPI, Request
from fastapi.exception_handlers import http_exception_handler
from fastapi.responses import JSONResponse, Response
from starlette.exceptions import HTTPException as StarletteHTTPException

from app.api import reviews
from app.core.config import get_settings
from app.core.http_headers import DEFAULT_CACHE_CONTROL, SECURITY_HEADERS
from app.core.logger import get_logger
from app.core.logging_config import configure_logging
from app.core.readiness import collect_readiness_status

settings = get_settings()
configure_logging(settings.LOG_LEVEL)
logger = get_logger(__name__)


def _resolve_docs_mode(mode: str) -> str:
    normalized = (mode or "").strip().lower()
    if normalized in {"disabled", "public"}:
        return normalized
    logger.warning("유효하지 않은 DOCS_MODE 값입니다. disabled로 대체합니다: %s", mode)
    return "disabled"


docs_mode = _resolve_docs_mode(settings.DOCS_MODE)

app = FastAPI(
    title="Google Reviews Proxy",
    docs_url="/docs" if docs_mode == "public" else None,
    redoc_url="/redoc" if docs_mode == "public" else None,
    openapi_url="/openapi.json" if docs_mode == "public" else None,
)

app.include_router(reviews.router)

# Swagger UI, ReDoc은 CDN 리소스를 불러오므로 CSP를 적용하지 않는다.
_DOCS_PATHS = {path for path in (app.docs_url, app.redoc_url, app.swagger_ui_oauth2_redirect_url) if path}


@app.middleware("http")
async def add_security_headers(request: Request, call_next) -> Response:
    """기본 보안 헤더를 응답에 추가합니다."""
    response = await call_next(request)
    if not settings.SECURITY_HEADERS_ENABLED:
        return response

    is_docs_path = request.url.path in _DOCS_PATHS
    for name, value in SECURITY_HEADERS.items():
        if is_docs_path and name == "Content-Security-Policy":
            continue
        response.headers.setdefault(name, value)
    response.headers.setdefault("Cache-Control", DEFAULT_CACHE_CONTROL)
    if settings.ENABLE_HSTS and request.url.scheme == "https":
        response.headers.setdefault("Strict-Transport-Security", f"max-age={settings.HSTS_MAX_AGE_SECONDS}")
    return response


@app.exception_handler(StarletteHTTPException)
async def reviews_http_exception_handler(request: Request, exc: StarletteHTTPException) -> Response:
    """리뷰 경로의 405는 CORS 헤더가 붙은 표준 에러 형식으로 응답합니다."""
    if exc.status_code == 405 and request.url.path == reviews.REVIEWS_PATH:
        return reviews.method_not_allowed_response()
    return await http_exception_handler(request, exc)


@app.exception_handler(Exception)
async def unhandled_exception_handler(request: Request, exc: Exception) -> JSONResponse:
    """예상하지 못한 예외를 표준 형식으로 처리합니다."""
    logger.exception("Unhandled exception on %s %s", request.method, request.url.path, exc_info=exc)
    return JSONResponse(status_code=500, content={"error": "Unhandled error", "detail": str(exc)})


@app.get("/")
def health_check() -> dict:
    """헬스 체크 엔드포인트."""
    return {"status": "ok", "message": "Google Reviews Proxy is running"}


@app.get("/health/ready")
async def readiness_check() -> JSONResponse:
    """API 키와 Google Places 연결 상태를 점검합니다."""
    result = await collect_readiness_status(settings)
    status_code = 200 if result["status"] == "ready" else 503
    return JSONResponse(status_code=status_code, content=result)
