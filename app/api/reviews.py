"""리뷰 임베드용 Google Places 프록시 API."""

from __future__ import annotations

from fastapi import APIRouter, Depends, Request
from fastapi.responses import JSONResponse, Response

from app.api.dependencies import PlacesServiceFactory, get_api_key, get_places_service_factory
from app.core.config import Settings, get_settings
from app.core.http_headers import CORS_HEADERS, PREFLIGHT_HEADERS, build_cache_control
from app.core.logger import get_logger
from app.schemas.reviews import ErrorResponse, ReviewsResponse
from app.services.google_places_service import InvalidPlaceIdError, PlacesDetailsError
from app.services.reviews_service import PlaceNotFoundError, get_place_reviews

router = APIRouter(prefix="/api", tags=["reviews"])
logger = get_logger(__name__)

REVIEWS_PATH = "/api/google-reviews"
NON_GET_METHODS = ["OPTIONS", "HEAD", "POST", "PUT", "PATCH", "DELETE"]


class Utf8JSONResponse(JSONResponse):
    """charset을 명시하는 JSON 응답."""

    media_type = "application/json; charset=utf-8"


def _error(status_code: int, error: str, detail: str | None = None) -> Utf8JSONResponse:
    body = ErrorResponse(error=error, detail=detail).model_dump(exclude_none=True)
    return Utf8JSONResponse(status_code=status_code, content=body, headers=CORS_HEADERS)


def method_not_allowed_response() -> Utf8JSONResponse:
    """리뷰 경로에서 허용되지 않은 메서드에 대한 405 응답."""
    return _error(405, "Method not allowed")


@router.api_route("/google-reviews", methods=NON_GET_METHODS, include_in_schema=False)
@router.get(
    "/google-reviews",
    response_model=ReviewsResponse,
    responses={
        400: {"model": ErrorResponse, "description": "place_id 누락"},
        404: {"model": ErrorResponse, "description": "장소를 찾을 수 없음"},
        405: {"model": ErrorResponse, "description": "허용되지 않은 메서드"},
        500: {"model": ErrorResponse, "description": "설정 누락 또는 처리되지 않은 오류"},
    },
)
async def google_reviews(
    request: Request,
    api_key: str | None = Depends(get_api_key),  # noqa: B008
    places_service_factory: PlacesServiceFactory = Depends(get_places_service_factory),  # noqa: B008
    settings: Settings = Depends(get_settings),  # noqa: B008
) -> Response:
    """장소 식별자 또는 텍스트 쿼리로 리뷰를 조회해 축약된 JSON으로 반환합니다.

    `place_id`가 `places/`로 시작하면 바로 상세 조회하고,
    그렇지 않으면 텍스트 검색으로 식별자를 먼저 찾습니다.
    """
    if request.method == "OPTIONS":
        return Response(status_code=200, headers=PREFLIGHT_HEADERS)
    if request.method != "GET":
        return method_not_allowed_response()

    if not api_key:
        logger.error("GOOGLE_MAPS_API_KEY is not configured.")
        return _error(500, "Missing GOOGLE_MAPS_API_KEY")

    query = (request.query_params.get("place_id") or "").strip()
    if not query:
        return _error(400, "Missing place_id (use places/<id> or a text query)")

    logger.info("Google reviews request received: place_id=%s", query)
    try:
        places_service = places_service_factory(api_key)
        result = await get_place_reviews(query, places_service)
    except PlaceNotFoundError:
        return _error(404, "Place not found")
    except InvalidPlaceIdError:
        return _error(400, "Invalid place_id (expected places/<id>)")
    except PlacesDetailsError as exc:
        return _error(exc.status_code, "Places Details error", exc.detail)
    except Exception as exc:
        logger.exception("Google reviews request failed: place_id=%s", query)
        return _error(500, "Unhandled error", str(exc))

    headers = {**CORS_HEADERS, "Cache-Control": build_cache_control(settings)}
    return Utf8JSONResponse(status_code=200, content=result.to_payload(), headers=headers)
