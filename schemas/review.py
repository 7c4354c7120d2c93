"""리뷰 스키마"""
from pydantic import BaseModel, ConfigDict, Field
from typing import Any, Optional
from datetime import datetime


class ReviewPayload(BaseModel):
    """리뷰 생성/수정 요청 스키마

    요청 형식만 확인합니다. 값 검증은 services.review_service.validate_review 에서 합니다.
    userId, userName 등 클라이언트가 보낸 사용자 필드는 무시됩니다.
    """
    model_config = ConfigDict(
        extra="ignore",
        json_schema_extra={
            "example": {
                "movieId": "tt0133093",
                "movieTitle": "The Matrix",
                "rating": 5,
                "comment": "Still holds up."
            }
        }
    )

    movieId: Optional[str] = Field(None, description="IMDb ID")
    movieTitle: Optional[str] = Field(None, description="영화 제목 (movieId 가 없을 때 필수)")
    rating: Any = Field(None, description="별점 (1-5)")
    comment: Optional[str] = Field(None, description="리뷰 내용")


class CleanedReview(BaseModel):
    """검증을 통과한 리뷰 입력"""
    movieId: Optional[str] = None
    movieTitle: str
    rating: int = Field(..., ge=1, le=5)
    comment: str


class Review(BaseModel):
    """저장된 리뷰"""
    id: str
    movieId: Optional[str] = None
    movieTitle: str
    rating: int
    comment: str
    userId: str
    userEmail: Optional[str] = None
    userName: str
    createdAt: datetime
    updatedAt: datetime
