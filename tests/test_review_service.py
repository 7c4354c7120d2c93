"""리뷰 서비스 테스트 (메모리 저장소)"""
import pytest

from core.exceptions import AuthorizationError, NotFoundError
from schemas.auth import Identity
from services.review_service import validate_review


def cleaned(**overrides):
    data = {"movieId": "tt0133093", "movieTitle": "The Matrix", "rating": 5, "comment": "Classic"}
    data.update(overrides)
    return validate_review(data)


def test_create_binds_identity(review_service, alice):
    review = review_service.create(cleaned(), alice)

    assert review.id
    assert review.userId == "alice-uid"
    assert review.userEmail == "alice@example.com"
    assert review.userName == "Alice"
    assert review.rating == 5


def test_create_then_fetch_has_equal_timestamps(review_service, alice):
    created = review_service.create(cleaned(), alice)
    fetched = review_service.get(created.id)

    assert fetched.createdAt == fetched.updatedAt
    assert fetched == created


def test_create_without_name_uses_default(review_service):
    review = review_service.create(cleaned(), Identity(uid="anon-uid"))
    assert review.userName == "User"
    assert review.userEmail is None


def test_ids_are_unique(review_service, alice):
    ids = {review_service.create(cleaned(), alice).id for _ in range(20)}
    assert len(ids) == 20


def test_update_by_owner(review_service, alice):
    original = review_service.create(cleaned(), alice)

    updated = review_service.update(original.id, cleaned(rating=2, comment="Aged badly", movieId=None), alice)

    assert updated.rating == 2
    assert updated.comment == "Aged badly"
    assert updated.movieId is None
    assert updated.createdAt == original.createdAt
    assert updated.updatedAt > original.updatedAt
    assert updated.userId == original.userId


def test_update_by_other_user_is_forbidden(review_service, alice, bob):
    original = review_service.create(cleaned(), alice)

    with pytest.raises(AuthorizationError):
        review_service.update(original.id, cleaned(rating=1), bob)

    assert review_service.get(original.id) == original


def test_update_missing_review(review_service, alice):
    with pytest.raises(NotFoundError):
        review_service.update("missing", cleaned(), alice)


def test_not_found_is_checked_before_ownership(review_service, bob):
    with pytest.raises(NotFoundError):
        review_service.delete("missing", bob)


def test_delete_by_owner_then_twice(review_service, alice):
    review = review_service.create(cleaned(), alice)

    review_service.delete(review.id, alice)

    with pytest.raises(NotFoundError):
        review_service.get(review.id)
    with pytest.raises(NotFoundError):
        review_service.delete(review.id, alice)


def test_delete_by_other_user_is_forbidden(review_service, alice, bob):
    review = review_service.create(cleaned(), alice)

    with pytest.raises(AuthorizationError):
        review_service.delete(review.id, bob)

    assert review_service.get(review.id) == review


def test_update_after_concurrent_delete_reports_not_found(review_service, store, alice):
    """조회 후 수정 전에 행이 사라진 경우"""
    review = review_service.create(cleaned(), alice)
    original_update = store.update

    def delete_then_update(review_id, user_id, fields):
        store.rows.pop(review_id)
        return original_update(review_id, user_id, fields)

    store.update = delete_then_update
    with pytest.raises(NotFoundError):
        review_service.update(review.id, cleaned(), alice)


def test_list_all_newest_first(review_service, alice, bob):
    first = review_service.create(cleaned(comment="one"), alice)
    second = review_service.create(cleaned(comment="two"), bob)
    third = review_service.create(cleaned(comment="three"), alice)

    assert [r.id for r in review_service.list_all()] == [third.id, second.id, first.id]


def test_list_by_user_is_ordered_subset(review_service, alice, bob):
    review_service.create(cleaned(comment="one"), alice)
    review_service.create(cleaned(comment="two"), bob)
    review_service.create(cleaned(comment="three"), alice)

    everything = review_service.list_all()
    mine = review_service.list_by_user(alice)

    assert [r.comment for r in mine] == ["three", "one"]
    assert mine == [r for r in everything if r.userId == "alice-uid"]


def test_list_by_movie(review_service, alice):
    review_service.create(cleaned(movieId="tt0133093"), alice)
    review_service.create(cleaned(movieId="tt0111161"), alice)

    reviews = review_service.list_by_movie("tt0111161")
    assert [r.movieId for r in reviews] == ["tt0111161"]
