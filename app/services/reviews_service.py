"""장소 리뷰 조회 및 응답 변환 서비스."""

from __future__ import annotations

from typing import Any

from app.core.logger import get_logger
from app.schemas.reviews import PlaceSummary, Review, ReviewAuthor, ReviewsResponse
from app.services.google_places_service import GooglePlacesError
from app.services.places_service import CANONICAL_PLACE_PREFIX, PlacesServiceProtocol

logger = get_logger(__name__)

DEFAULT_AUTHOR_NAME = "Google user"


class PlaceNotFoundError(GooglePlacesError):
    """텍스트 쿼리에 해당하는 장소를 찾지 못한 경우."""


def is_canonical_place_id(value: str) -> bool:
    """이미 `places/` 접두사가 붙은 정규 식별자인지 확인합니다."""
    return value.startswith(CANONICAL_PLACE_PREFIX)


def _as_dict(value: Any) -> dict[str, Any]:
    return value if isinstance(value, dict) else {}


def _map_review(raw: dict[str, Any]) -> Review:
    text = _as_dict(raw.get("text"))
    attribution = _as_dict(raw.get("authorAttribution"))
    author_name = attribution.get("displayName")
    return Review(
        rating=raw.get("rating"),
        text=text.get("text") or "",
        relative_time=raw.get("relativePublishTimeDescription"),
        author=ReviewAuthor(
            name=DEFAULT_AUTHOR_NAME if author_name is None else author_name,
            url=attribution.get("uri"),
            photo=attribution.get("photoUri"),
        ),
    )


def transform_place_details(data: dict[str, Any]) -> ReviewsResponse:
    """Places Details 원본 응답을 임베드용 축약 응답으로 변환합니다."""
    data = _as_dict(data)
    display_name = _as_dict(data.get("displayName"))
    raw_reviews = data.get("reviews")
    reviews = [_map_review(_as_dict(item)) for item in raw_reviews] if isinstance(raw_reviews, list) else []
    return ReviewsResponse(
        place=PlaceSummary(
            id=data.get("id"),
            name=display_name.get("text"),
            rating=data.get("rating"),
            total=data.get("userRatingCount"),
        ),
        reviews=reviews,
    )


async def get_place_reviews(query: str, places_service: PlacesServiceProtocol) -> ReviewsResponse:
    """장소 식별자(또는 텍스트 쿼리)로 리뷰를 조회해 변환된 응답을 반환합니다.

    텍스트 쿼리인 경우 검색 호출이 끝난 뒤에 상세 조회를 시작합니다.

    Raises:
        PlaceNotFoundError: 텍스트 쿼리로 장소를 찾지 못한 경우
        PlacesDetailsError: 상세 조회가 실패 상태로 응답한 경우
    """
    if is_canonical_place_id(query):
        place_id: str | None = query
    else:
        place_id = await places_service.resolve_place_id(query)
        if not place_id:
            raise PlaceNotFoundError(f"No place matched query: {query}")

    data = await places_service.fetch_place_details(place_id)
    response = transform_place_details(data)
    logger.info("Place reviews fetched: place_id=%s review_count=%d", place_id, len(response.reviews))
    return response
