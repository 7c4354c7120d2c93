"""리뷰 저장소 (MySQL)"""
import uuid
from datetime import datetime, timezone
from typing import Any, Dict, List, Optional

import pymysql

from config.database import REVIEWS_TABLE
from core.exceptions import UpstreamError
from schemas.review import Review
from services.database import get_db_connection

# Review 필드 -> 컬럼
COLUMNS = {
    "id": "id",
    "movieId": "movie_id",
    "movieTitle": "movie_title",
    "rating": "rating",
    "comment": "comment",
    "userId": "user_id",
    "userEmail": "user_email",
    "userName": "user_name",
    "createdAt": "created_at",
    "updatedAt": "updated_at",
}

SELECT_COLUMNS = ", ".join(COLUMNS.values())


def _to_db_datetime(value: datetime) -> datetime:
    """UTC naive datetime 으로 변환 (DATETIME 컬럼에는 타임존이 없음)"""
    if value.tzinfo is not None:
        value = value.astimezone(timezone.utc).replace(tzinfo=None)
    return value


def _row_to_review(row: Dict[str, Any]) -> Review:
    data = {field: row.get(column) for field, column in COLUMNS.items()}
    for key in ("createdAt", "updatedAt"):
        if isinstance(data[key], datetime) and data[key].tzinfo is None:
            data[key] = data[key].replace(tzinfo=timezone.utc)
    return Review(**data)


class ReviewStore:
    """
    reviews 테이블에 대한 단건 삽입/조회/수정/삭제와 정렬된 목록 조회

    작업마다 새 연결을 열고 닫습니다.
    수정/삭제는 user_id 조건을 함께 걸어 소유자의 행만 변경합니다.
    """

    def __init__(self, connection_factory=get_db_connection):
        self.connection_factory = connection_factory

    def _connect(self):
        connection = self.connection_factory()
        if not connection:
            raise UpstreamError("Database connection failed")
        return connection

    def insert(self, record: Dict[str, Any]) -> Review:
        """새 id 를 발급하고 리뷰를 저장"""
        review_id = uuid.uuid4().hex
        values = dict(record, id=review_id)
        fields = list(COLUMNS.keys())
        params = [
            _to_db_datetime(values[f]) if isinstance(values.get(f), datetime) else values.get(f)
            for f in fields
        ]
        query = (
            f"INSERT INTO {REVIEWS_TABLE} ({SELECT_COLUMNS}) "
            f"VALUES ({', '.join(['%s'] * len(fields))})"
        )

        connection = self._connect()
        try:
            with connection.cursor() as cursor:
                cursor.execute(query, params)
            connection.commit()
        except pymysql.Error as e:
            connection.rollback()
            print(f"[DB] 리뷰 저장 오류: {e}")
            raise UpstreamError("Failed to create review")
        finally:
            connection.close()
        return Review(**values)

    def get(self, review_id: str) -> Optional[Review]:
        connection = self._connect()
        try:
            with connection.cursor() as cursor:
                cursor.execute(
                    f"SELECT {SELECT_COLUMNS} FROM {REVIEWS_TABLE} WHERE id = %s",
                    (review_id,)
                )
                row = cursor.fetchone()
        except pymysql.Error as e:
            print(f"[DB] 리뷰 조회 오류: {e}")
            raise UpstreamError("Failed to fetch review")
        finally:
            connection.close()
        return _row_to_review(row) if row else None

    def list(self, user_id: Optional[str] = None, movie_id: Optional[str] = None) -> List[Review]:
        """
        리뷰 목록 조회 (created_at 내림차순)

        Args:
            user_id: 작성자 필터 (선택사항)
            movie_id: 영화 필터 (선택사항)
        """
        conditions = []
        params: List[Any] = []
        if user_id is not None:
            conditions.append("user_id = %s")
            params.append(user_id)
        if movie_id is not None:
            conditions.append("movie_id = %s")
            params.append(movie_id)

        query = f"SELECT {SELECT_COLUMNS} FROM {REVIEWS_TABLE}"
        if conditions:
            query += " WHERE " + " AND ".join(conditions)
        query += " ORDER BY created_at DESC, id DESC"

        connection = self._connect()
        try:
            with connection.cursor() as cursor:
                cursor.execute(query, params)
                rows = cursor.fetchall()
        except pymysql.Error as e:
            print(f"[DB] 리뷰 목록 조회 오류: {e}")
            raise UpstreamError("Failed to fetch reviews")
        finally:
            connection.close()
        return [_row_to_review(row) for row in rows]

    def update(self, review_id: str, user_id: str, fields: Dict[str, Any]) -> Optional[Review]:
        """
        소유자의 리뷰 필드 갱신

        Returns:
            갱신된 리뷰, 해당 행이 없으면 None
        """
        assignments = ", ".join(f"{COLUMNS[f]} = %s" for f in fields)
        params = [
            _to_db_datetime(v) if isinstance(v, datetime) else v
            for v in fields.values()
        ]
        params.extend([review_id, user_id])

        connection = self._connect()
        try:
            with connection.cursor() as cursor:
                cursor.execute(
                    f"UPDATE {REVIEWS_TABLE} SET {assignments} WHERE id = %s AND user_id = %s",
                    params
                )
                cursor.execute(
                    f"SELECT {SELECT_COLUMNS} FROM {REVIEWS_TABLE} WHERE id = %s AND user_id = %s",
                    (review_id, user_id)
                )
                row = cursor.fetchone()
            connection.commit()
        except pymysql.Error as e:
            connection.rollback()
            print(f"[DB] 리뷰 수정 오류: {e}")
            raise UpstreamError("Failed to update review")
        finally:
            connection.close()
        return _row_to_review(row) if row else None

    def delete(self, review_id: str, user_id: str) -> bool:
        """소유자의 리뷰 삭제 (삭제된 행이 있으면 True)"""
        connection = self._connect()
        try:
            with connection.cursor() as cursor:
                deleted = cursor.execute(
                    f"DELETE FROM {REVIEWS_TABLE} WHERE id = %s AND user_id = %s",
                    (review_id, user_id)
                )
            connection.commit()
        except pymysql.Error as e:
            connection.rollback()
            print(f"[DB] 리뷰 삭제 오류: {e}")
            raise UpstreamError("Failed to delete review")
        finally:
            connection.close()
        return deleted > 0
