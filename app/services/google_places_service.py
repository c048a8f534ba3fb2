"""Google Places API(v1) 서비스 구현."""

from __future__ import annotations

import asyncio
from typing import Any
from urllib.parse import quote

import requests

from app.core.config import Settings, get_settings
from app.core.logger import get_logger
from app.core.timeout_policy import get_timeout_policy, to_requests_timeout
from app.services.places_service import PlacesServiceProtocol

logger = get_logger(__name__)


class GooglePlacesError(RuntimeError):
    """Google Places 호출 실패 시 발생하는 예외."""


class PlacesDetailsError(GooglePlacesError):
    """Places Details 호출이 2xx가 아닌 상태로 응답한 경우."""

    def __init__(self, status_code: int, detail: str) -> None:
        super().__init__(f"Places Details error: status={status_code}")
        self.status_code = status_code
        self.detail = detail


class InvalidPlaceIdError(GooglePlacesError):
    """정규 식별자 형식(places/<id>)이 아닌 경우."""


def _is_success(response: requests.Response) -> bool:
    return 200 <= response.status_code < 300


def build_place_resource_path(place_id: str) -> str:
    """`places/<id>` 식별자를 단일 경로 세그먼트로 인코딩한 리소스 경로로 변환합니다."""
    prefix, _, suffix = place_id.partition("/")
    if prefix != "places" or suffix in {"", ".", ".."} or "/" in suffix:
        raise InvalidPlaceIdError(f"Invalid place resource name: {place_id}")
    return f"places/{quote(suffix, safe='')}"


class GooglePlacesService(PlacesServiceProtocol):
    """Google Places API 기반 Places 서비스."""

    _DEFAULT_BASE_URL = "https://places.googleapis.com"
    _SEARCH_PATH = "/v1/places:searchText"

    _SEARCH_FIELD_MASK = "places.id,places.displayName"
    _DETAILS_FIELD_MASK = "id,displayName,rating,userRatingCount,reviews"

    def __init__(
        self,
        api_key: str,
        base_url: str = _DEFAULT_BASE_URL,
        timeout_seconds: int = 10,
        language_code: str = "",
    ) -> None:
        if not api_key:
            raise GooglePlacesError("GOOGLE_MAPS_API_KEY is not configured.")
        self._api_key = api_key
        self._base_url = (base_url or self._DEFAULT_BASE_URL).rstrip("/")
        self._timeout_seconds = timeout_seconds
        self._language_code = language_code.strip() if language_code else ""

    @classmethod
    def from_settings(cls, api_key: str, settings: Settings | None = None) -> GooglePlacesService:
        """주입된 API 키와 애플리케이션 설정으로 서비스 인스턴스를 생성합니다."""
        resolved_settings = settings or get_settings()
        timeout_policy = get_timeout_policy(resolved_settings)
        return cls(
            api_key=api_key,
            base_url=resolved_settings.GOOGLE_PLACES_BASE_URL,
            timeout_seconds=timeout_policy.google_places_timeout_seconds,
            language_code=resolved_settings.GOOGLE_PLACES_LANGUAGE_CODE,
        )

    async def resolve_place_id(self, text_query: str) -> str | None:
        """텍스트 검색으로 첫 번째 장소의 식별자를 찾습니다."""
        payload: dict[str, Any] = {"textQuery": text_query}
        if self._language_code:
            payload["languageCode"] = self._language_code

        response = await self._request(
            method="POST",
            url=f"{self._base_url}{self._SEARCH_PATH}",
            payload=payload,
            params=None,
            field_mask=self._SEARCH_FIELD_MASK,
        )
        if not _is_success(response):
            logger.warning(
                "Google Places searchText failed: status=%s body=%s",
                response.status_code,
                (response.text or "")[:200],
            )
            return None

        places = (response.json() or {}).get("places") or []
        if not places:
            logger.info("Google Places searchText returned no candidates")
            return None

        place_id = (places[0] or {}).get("id")
        logger.info("Google Places searchText resolved: place_id=%s", place_id)
        return place_id or None

    async def fetch_place_details(self, place_id: str) -> dict[str, Any]:
        """리뷰를 포함한 장소 상세 정보를 조회합니다."""
        resource = build_place_resource_path(place_id)
        params = {"languageCode": self._language_code} if self._language_code else None

        response = await self._request(
            method="GET",
            url=f"{self._base_url}/v1/{resource}",
            payload=None,
            params=params,
            field_mask=self._DETAILS_FIELD_MASK,
        )
        if not _is_success(response):
            body = response.text or ""
            logger.error("Google Places details error: status=%s body=%s", response.status_code, body[:200])
            raise PlacesDetailsError(response.status_code, body)

        return response.json() or {}

    async def _request(
        self,
        method: str,
        url: str,
        payload: dict[str, Any] | None,
        params: dict[str, Any] | None,
        field_mask: str,
    ) -> requests.Response:
        headers = {
            "X-Goog-Api-Key": self._api_key,
            "X-Goog-FieldMask": field_mask,
        }
        if payload is not None:
            headers["Content-Type"] = "application/json; charset=utf-8"
        request_timeout = to_requests_timeout(self._timeout_seconds)

        def _send() -> requests.Response:
            return requests.request(
                method=method,
                url=url,
                json=payload,
                params=params,
                headers=headers,
                timeout=request_timeout,
            )

        return await asyncio.to_thread(_send)
