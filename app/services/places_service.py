"""Places 서비스 추상 프로토콜 정의."""

from abc import ABC, abstractmethod
from typing import Any

CANONICAL_PLACE_PREFIX = "places/"


class PlacesServiceProtocol(ABC):
    """리뷰 프록시가 사용하는 Places API 호출 인터페이스를 정의합니다."""

    @abstractmethod
    async def resolve_place_id(self, text_query: str) -> str | None:
        """텍스트 쿼리를 정규 장소 식별자로 변환합니다.

        Args:
            text_query: 장소를 지칭하는 자유 텍스트

        Returns:
            첫 번째 검색 결과의 식별자(places/...) 또는 None
        """
        raise NotImplementedError

    @abstractmethod
    async def fetch_place_details(self, place_id: str) -> dict[str, Any]:
        """장소 상세 정보(리뷰 포함) 원본 JSON을 조회합니다.

        Args:
            place_id: 정규 장소 식별자 (places/...)

        Returns:
            Places Details 응답 본문

        Raises:
            PlacesDetailsError: 상세 조회가 2xx가 아닌 상태로 응답한 경우
        """
        raise NotImplementedError
