"""Google Places API 클라이언트 테스트."""

from __future__ import annotations

import asyncio
from typing import Any

import pytest
import requests

from app.core.config import Settings
from app.services.google_places_service import (
    GooglePlacesError,
    GooglePlacesService,
    InvalidPlaceIdError,
    PlacesDetailsError,
    build_place_resource_path,
)


class _FakeResponse:
    def __init__(self, status_code: int = 200, json_body: Any = None, text: str = "") -> None:
        self.status_code = status_code
        self._json_body = json_body
        self.text = text

    def json(self) -> Any:
        if self._json_body is None:
            raise ValueError("No JSON object could be decoded")
        return self._json_body


def _install_fake_request(monkeypatch, *responses: _FakeResponse) -> list[dict[str, Any]]:
    calls: list[dict[str, Any]] = []
    queue = list(responses)

    def _fake_request(**kwargs):
        calls.append(kwargs)
        return queue.pop(0)

    monkeypatch.setattr("app.services.google_places_service.requests.request", _fake_request)
    return calls


def _service(**kwargs) -> GooglePlacesService:
    return GooglePlacesService(api_key="test-maps-key", **kwargs)


def test_requires_api_key() -> None:
    with pytest.raises(GooglePlacesError):
        GooglePlacesService(api_key="")


def test_resolve_place_id_posts_text_query_with_field_mask(monkeypatch) -> None:
    calls = _install_fake_request(
        monkeypatch,
        _FakeResponse(json_body={"places": [{"id": "places/FIRST"}, {"id": "places/SECOND"}]}),
    )

    result = asyncio.run(_service().resolve_place_id("Lens2Listing Jacksonville, FL"))

    assert result == "places/FIRST"
    assert len(calls) == 1
    call = calls[0]
    assert call["method"] == "POST"
    assert call["url"] == "https://places.googleapis.com/v1/places:searchText"
    assert call["json"] == {"textQuery": "Lens2Listing Jacksonville, FL"}
    assert call["headers"]["X-Goog-Api-Key"] == "test-maps-key"
    assert call["headers"]["X-Goog-FieldMask"] == "places.id,places.displayName"
    assert call["headers"]["Content-Type"] == "application/json; charset=utf-8"


@pytest.mark.parametrize("body", [{"places": []}, {}])
def test_resolve_place_id_returns_none_without_candidates(monkeypatch, body) -> None:
    _install_fake_request(monkeypatch, _FakeResponse(json_body=body))

    assert asyncio.run(_service().resolve_place_id("Nowhere Cafe")) is None


@pytest.mark.parametrize("status_code", [300, 404, 500])
def test_resolve_place_id_returns_none_on_non_2xx_status(monkeypatch, status_code) -> None:
    _install_fake_request(monkeypatch, _FakeResponse(status_code=status_code, text="upstream said no"))

    assert asyncio.run(_service().resolve_place_id("Some Business Name")) is None


def test_resolve_place_id_propagates_transport_errors(monkeypatch) -> None:
    def _fake_request(**kwargs):
        raise requests.ConnectionError("network down")

    monkeypatch.setattr("app.services.google_places_service.requests.request", _fake_request)

    with pytest.raises(requests.ConnectionError):
        asyncio.run(_service().resolve_place_id("Some Business Name"))


def test_fetch_place_details_uses_details_field_mask(monkeypatch) -> None:
    calls = _install_fake_request(monkeypatch, _FakeResponse(json_body={"id": "places/ABC123"}))

    result = asyncio.run(_service().fetch_place_details("places/ABC123"))

    assert result == {"id": "places/ABC123"}
    call = calls[0]
    assert call["method"] == "GET"
    assert call["url"] == "https://places.googleapis.com/v1/places/ABC123"
    assert call["json"] is None
    assert call["params"] is None
    assert call["headers"]["X-Goog-Api-Key"] == "test-maps-key"
    assert call["headers"]["X-Goog-FieldMask"] == "id,displayName,rating,userRatingCount,reviews"


def test_fetch_place_details_raises_with_upstream_status(monkeypatch) -> None:
    _install_fake_request(monkeypatch, _FakeResponse(status_code=403, text="quota exceeded"))

    with pytest.raises(PlacesDetailsError) as exc_info:
        asyncio.run(_service().fetch_place_details("places/ABC123"))

    assert exc_info.value.status_code == 403
    assert exc_info.value.detail == "quota exceeded"


def test_language_code_is_forwarded(monkeypatch) -> None:
    calls = _install_fake_request(
        monkeypatch,
        _FakeResponse(json_body={"places": [{"id": "places/KO"}]}),
        _FakeResponse(json_body={"id": "places/KO"}),
    )
    service = _service(language_code="ko")

    asyncio.run(service.resolve_place_id("카페"))
    asyncio.run(service.fetch_place_details("places/KO"))

    assert calls[0]["json"] == {"textQuery": "카페", "languageCode": "ko"}
    assert calls[1]["params"] == {"languageCode": "ko"}


def test_from_settings_applies_base_url_and_timeout(monkeypatch) -> None:
    calls = _install_fake_request(monkeypatch, _FakeResponse(json_body={}))
    settings = Settings(
        GOOGLE_MAPS_API_KEY="ignored",
        GOOGLE_PLACES_BASE_URL="http://places.local:8080/",
        GOOGLE_PLACES_TIMEOUT_SECONDS=10,
    )

    service = GooglePlacesService.from_settings("injected-key", settings)
    asyncio.run(service.fetch_place_details("places/ABC123"))

    assert calls[0]["url"] == "http://places.local:8080/v1/places/ABC123"
    assert calls[0]["headers"]["X-Goog-Api-Key"] == "injected-key"
    assert calls[0]["timeout"] == (3.0, 7.0)


def test_fetch_place_details_treats_3xx_as_error(monkeypatch) -> None:
    _install_fake_request(monkeypatch, _FakeResponse(status_code=300, text="multiple choices"))

    with pytest.raises(PlacesDetailsError) as exc_info:
        asyncio.run(_service().fetch_place_details("places/ABC123"))

    assert exc_info.value.status_code == 300
    assert exc_info.value.detail == "multiple choices"


@pytest.mark.parametrize(
    "place_id",
    [
        "places/X/photos/Y/media",
        "places/../v1/places:searchText",
        "places/..",
        "places/",
        "photos/X",
    ],
)
def test_fetch_place_details_rejects_non_place_resources_before_network(monkeypatch, place_id) -> None:
    calls = _install_fake_request(monkeypatch)

    with pytest.raises(InvalidPlaceIdError):
        asyncio.run(_service().fetch_place_details(place_id))

    assert calls == []


def test_build_place_resource_path_encodes_id_as_single_segment() -> None:
    assert build_place_resource_path("places/ChIJ8T1GpMGOGGARDYGSgpooDWw") == "places/ChIJ8T1GpMGOGGARDYGSgpooDWw"
    assert build_place_resource_path("places/a b:c") == "places/a%20b%3Ac"
