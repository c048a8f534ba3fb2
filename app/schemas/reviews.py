"""리뷰 임베드용 응답 스키마."""

from pydantic import BaseModel, ConfigDict, Field


class ReviewAuthor(BaseModel):
    """리뷰 작성자 정보."""

    name: str = Field(default="Google user", description="작성자 표시 이름")
    url: str | None = Field(default=None, description="작성자 프로필 URL")
    photo: str | None = Field(default=None, description="작성자 프로필 사진 URL")


class Review(BaseModel):
    """단순화된 리뷰 한 건."""

    model_config = ConfigDict(populate_by_name=True)

    rating: int | float | None = Field(default=None, description="리뷰 평점")
    text: str = Field(default="", description="리뷰 본문")
    relative_time: str | None = Field(default=None, alias="relativeTime", description="상대 작성 시각")
    author: ReviewAuthor = Field(default_factory=ReviewAuthor, description="작성자 정보")


class PlaceSummary(BaseModel):
    """장소 요약 정보."""

    id: str | None = Field(default=None, description="Google Places 리소스 이름 (places/...)")
    name: str | None = Field(default=None, description="장소 표시 이름")
    rating: int | float | None = Field(default=None, description="평균 평점")
    total: int | None = Field(default=None, description="전체 평점 수")


class ReviewsResponse(BaseModel):
    """`/api/google-reviews` 성공 응답."""

    place: PlaceSummary
    reviews: list[Review] = Field(default_factory=list)

    def to_payload(self) -> dict:
        """클라이언트로 내려보낼 JSON 직렬화 형태(alias 기준)를 반환합니다."""
        return self.model_dump(by_alias=True)


class ErrorResponse(BaseModel):
    """에러 응답."""

    error: str
    detail: str | None = None
