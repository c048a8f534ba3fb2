"""API 의존성 모음."""

from collections.abc import Callable

from fastapi import Depends

from app.core.config import Settings, get_settings
from app.services.google_places_service import GooglePlacesService
from app.services.places_service import PlacesServiceProtocol

PlacesServiceFactory = Callable[[str], PlacesServiceProtocol]


def get_api_key(settings: Settings = Depends(get_settings)) -> str | None:  # noqa: B008
    """요청 처리 시점의 Google Maps API 키를 제공합니다. 미설정이면 None."""
    return settings.GOOGLE_MAPS_API_KEY


def get_places_service_factory(settings: Settings = Depends(get_settings)) -> PlacesServiceFactory:  # noqa: B008
    """API 키를 받아 Places 서비스를 생성하는 팩토리를 제공합니다."""

    def _factory(api_key: str) -> PlacesServiceProtocol:
        return GooglePlacesService.from_settings(api_key, settings)

    return _factory
