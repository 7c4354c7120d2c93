"""화면에 표시할 리뷰 목록 (낙관적 업데이트)"""
import uuid
from typing import Any, Dict, List, Optional

from client.api_client import MovieReviewClient

PENDING_PREFIX = "pending-"


class ReviewBoard:
    """
    로컬 리뷰 목록

    변경 내용을 먼저 목록에 반영한 뒤 API 를 호출하고,
    실패하면 원래 상태로 되돌린 다음 ApiError 를 다시 발생시킵니다.
    """

    def __init__(self, client: MovieReviewClient, mine_only: bool = False):
        self.client = client
        self.mine_only = mine_only
        self.reviews: List[Dict[str, Any]] = []

    def refresh(self) -> List[Dict[str, Any]]:
        """서버에서 목록을 다시 가져옴"""
        self.reviews = self.client.get_my_reviews() if self.mine_only else self.client.get_reviews()
        return self.reviews

    def _index(self, review_id: str) -> Optional[int]:
        for index, review in enumerate(self.reviews):
            if review.get("id") == review_id:
                return index
        return None

    def add(self, review: Dict[str, Any]) -> Dict[str, Any]:
        """새 리뷰를 맨 앞에 임시로 추가한 뒤 서버 응답으로 교체"""
        placeholder = dict(review, id=f"{PENDING_PREFIX}{uuid.uuid4().hex}")
        self.reviews.insert(0, placeholder)
        try:
            created = self.client.create_review(review)
        except Exception:
            self.reviews.remove(placeholder)
            raise
        self.reviews[self.reviews.index(placeholder)] = created
        return created

    def edit(self, review_id: str, changes: Dict[str, Any]) -> Dict[str, Any]:
        index = self._index(review_id)
        if index is None:
            raise KeyError(review_id)
        original = self.reviews[index]
        payload = {
            key: changes.get(key, original.get(key))
            for key in ("movieId", "movieTitle", "rating", "comment")
        }
        self.reviews[index] = dict(original, **payload)
        try:
            updated = self.client.update_review(review_id, payload)
        except Exception:
            self.reviews[index] = original
            raise
        self.reviews[index] = updated
        return updated

    def remove(self, review_id: str) -> None:
        index = self._index(review_id)
        if index is None:
            raise KeyError(review_id)
        removed = self.reviews.pop(index)
        try:
            self.client.delete_review(review_id)
        except Exception:
            self.reviews.insert(index, removed)
            raise

    def average_rating(self) -> Optional[float]:
        """목록의 평균 별점 (리뷰가 없으면 None)"""
        ratings = [r["rating"] for r in self.reviews if isinstance(r.get("rating"), int)]
        if not ratings:
            return None
        return round(sum(ratings) / len(ratings), 2)
