"""리뷰 서비스

리뷰 입력 검증, 작성자 바인딩, 소유자 확인을 담당합니다.
리뷰 저장소에 접근하는 유일한 경로입니다.
"""
import re
from datetime import datetime, timezone
from typing import Any, Callable, Dict, List, Optional

from config.settings import DEFAULT_MOVIE_TITLE
from core.exceptions import AuthorizationError, NotFoundError, ValidationError
from schemas.auth import Identity
from schemas.review import CleanedReview, Review

# ASCII 숫자만 (str.isdigit 은 '²' 같은 문자도 허용함)
RATING_PATTERN = re.compile(r"[+-]?[0-9]+")


def _clean_text(value: Any) -> Optional[str]:
    """문자열이면 공백을 제거해서 반환, 비어있으면 None"""
    if not isinstance(value, str):
        return None
    value = value.strip()
    return value or None


def _parse_rating(value: Any) -> Optional[int]:
    """정수 또는 정수 문자열만 허용 (bool, 소수는 거부)"""
    if isinstance(value, bool):
        return None
    if isinstance(value, int):
        return value
    if isinstance(value, str) and RATING_PATTERN.fullmatch(value.strip()):
        return int(value.strip())
    return None


def validate_review(payload: Dict[str, Any]) -> CleanedReview:
    """
    리뷰 입력 검증 (I/O 없음)

    Args:
        payload: movieId, movieTitle, rating, comment 를 담은 딕셔너리

    Returns:
        CleanedReview: 공백이 제거되고 정규화된 리뷰 입력

    Raises:
        ValidationError: 영화 식별자 누락, 별점 범위 초과, 내용 누락
    """
    movie_id = _clean_text(payload.get("movieId"))
    movie_title = _clean_text(payload.get("movieTitle"))
    if movie_id is None and movie_title is None:
        raise ValidationError("movie identifier required")

    rating = _parse_rating(payload.get("rating"))
    if rating is None or not 1 <= rating <= 5:
        raise ValidationError("rating out of range")

    comment = _clean_text(payload.get("comment"))
    if comment is None:
        raise ValidationError("comment required")

    return CleanedReview(
        movieId=movie_id,
        movieTitle=movie_title or DEFAULT_MOVIE_TITLE,
        rating=rating,
        comment=comment
    )


def _utcnow() -> datetime:
    return datetime.now(timezone.utc)


class ReviewService:
    """
    리뷰 생성/수정/삭제/조회

    수정과 삭제는 존재 여부 -> 소유자 순서로 확인한 뒤에만 저장소를 변경합니다.
    """

    def __init__(self, store, clock: Callable[[], datetime] = _utcnow):
        """
        Args:
            store: 리뷰 저장소 (services.review_store.ReviewStore 와 같은 메서드를 제공)
            clock: 현재 시각 함수 (테스트에서 교체)
        """
        self.store = store
        self.clock = clock

    def create(self, cleaned: CleanedReview, identity: Identity) -> Review:
        """검증된 입력에 작성자 정보를 붙여 저장"""
        now = self.clock()
        record = {
            "movieId": cleaned.movieId,
            "movieTitle": cleaned.movieTitle,
            "rating": cleaned.rating,
            "comment": cleaned.comment,
            "userId": identity.uid,
            "userEmail": identity.email,
            "userName": identity.name or "User",
            "createdAt": now,
            "updatedAt": now,
        }
        review = self.store.insert(record)
        print(f"[ReviewService] 리뷰 생성: {review.id} (user={identity.uid})")
        return review

    def get(self, review_id: str) -> Review:
        review = self.store.get(review_id)
        if review is None:
            raise NotFoundError("Review not found")
        return review

    def _get_owned(self, review_id: str, identity: Identity, action: str) -> Review:
        review = self.get(review_id)
        if review.userId != identity.uid:
            print(f"[ReviewService] 소유자 불일치: {review_id} (owner={review.userId}, caller={identity.uid})")
            raise AuthorizationError(f"Not authorized to {action} this review")
        return review

    def update(self, review_id: str, cleaned: CleanedReview, identity: Identity) -> Review:
        """
        리뷰 수정

        영화/별점/내용만 덮어쓰고 updatedAt 을 갱신합니다.
        createdAt 과 userId 는 유지됩니다.

        Raises:
            NotFoundError: 리뷰가 없음
            AuthorizationError: 호출자가 작성자가 아님
        """
        self._get_owned(review_id, identity, "update")
        fields = {
            "movieId": cleaned.movieId,
            "movieTitle": cleaned.movieTitle,
            "rating": cleaned.rating,
            "comment": cleaned.comment,
            "updatedAt": self.clock(),
        }
        updated = self.store.update(review_id, identity.uid, fields)
        if updated is None:
            # 조회와 수정 사이에 삭제된 경우
            raise NotFoundError("Review not found")
        print(f"[ReviewService] 리뷰 수정: {review_id}")
        return updated

    def delete(self, review_id: str, identity: Identity) -> None:
        """
        리뷰 삭제

        Raises:
            NotFoundError: 리뷰가 없음 (이미 삭제된 경우 포함)
            AuthorizationError: 호출자가 작성자가 아님
        """
        self._get_owned(review_id, identity, "delete")
        if not self.store.delete(review_id, identity.uid):
            raise NotFoundError("Review not found")
        print(f"[ReviewService] 리뷰 삭제: {review_id}")

    def list_all(self) -> List[Review]:
        """전체 리뷰 (createdAt 내림차순)"""
        return self.store.list()

    def list_by_user(self, identity: Identity) -> List[Review]:
        """호출자의 리뷰 (createdAt 내림차순)"""
        return self.store.list(user_id=identity.uid)

    def list_by_movie(self, movie_id: str) -> List[Review]:
        """특정 영화의 리뷰 (createdAt 내림차순)"""
        return self.store.list(movie_id=movie_id)
