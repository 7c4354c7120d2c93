"""Python API 클라이언트와 ReviewBoard 테스트"""
import json

import httpx
import pytest

from client.api_client import ApiError, MovieReviewClient, friendly_error_message
from client.review_board import PENDING_PREFIX, ReviewBoard


class FakeApi:
    """리뷰 API 흉내 (MockTransport 핸들러)"""

    def __init__(self):
        self.requests = []
        self.reviews = [
            {"id": "r2", "movieId": "tt2", "movieTitle": "B", "rating": 2, "comment": "meh"},
            {"id": "r1", "movieId": "tt1", "movieTitle": "A", "rating": 5, "comment": "wow"},
        ]
        self.fail_next = None

    def __call__(self, request: httpx.Request) -> httpx.Response:
        self.requests.append(request)
        if self.fail_next:
            status, error = self.fail_next
            self.fail_next = None
            return httpx.Response(status, json={"success": False, "error": error})

        path = request.url.path
        if request.method == "GET" and path == "/api/reviews":
            return httpx.Response(200, json={"success": True, "reviews": self.reviews})
        if request.method == "POST" and path == "/api/reviews":
            body = json.loads(request.content)
            review = dict(body, id="r3", userId="u1")
            return httpx.Response(201, json={"success": True, "review": review})
        if request.method == "PUT" and path.startswith("/api/reviews/"):
            body = json.loads(request.content)
            review = dict(body, id=path.rsplit("/", 1)[1], userId="u1")
            return httpx.Response(200, json={"success": True, "review": review})
        if request.method == "DELETE":
            return httpx.Response(200, json={"success": True})
        if path == "/api/movies/search":
            return httpx.Response(200, json={"success": True, "movies": [{"id": "tt0133093"}]})
        return httpx.Response(404, json={"success": False, "error": f"Route {path} not found"})


@pytest.fixture
def api():
    return FakeApi()


@pytest.fixture
def client(api):
    with MovieReviewClient(token_provider=lambda: "token-123", transport=httpx.MockTransport(api)) as c:
        yield c


def test_bearer_token_is_attached(client, api):
    client.get_reviews()
    assert api.requests[0].headers["Authorization"] == "Bearer token-123"


def test_anonymous_requests_have_no_token(api):
    with MovieReviewClient(transport=httpx.MockTransport(api)) as anonymous:
        anonymous.get_reviews()
    assert "Authorization" not in api.requests[0].headers


def test_search_sends_query(client, api):
    assert client.search_movies("the matrix") == [{"id": "tt0133093"}]
    assert api.requests[0].url.params["query"] == "the matrix"


def test_error_envelope_raises(client, api):
    api.fail_next = (403, "Not authorized to update this review")

    with pytest.raises(ApiError) as exc_info:
        client.update_review("r1", {"rating": 1})

    assert exc_info.value.status_code == 403
    assert exc_info.value.friendly_message == "You are not authorized to perform this action."


def test_network_error():
    def down(request):
        raise httpx.ConnectError("refused", request=request)

    with MovieReviewClient(transport=httpx.MockTransport(down)) as c:
        with pytest.raises(ApiError) as exc_info:
            c.get_reviews()

    assert exc_info.value.status_code is None
    assert exc_info.value.friendly_message.startswith("Unable to connect to server")


@pytest.mark.parametrize("message, status_code, expected", [
    ("rating out of range", 400, "Please select a rating between 1 and 5 stars."),
    ("movie identifier required", 400, "Please select a movie first."),
    ("comment required", 400, "Please write a comment for your review."),
    ("Authentication token required", 401, "Your session has expired. Please log in again."),
    ("Review not found", 404, "The requested resource was not found."),
    ("Something odd", 401, "Your session has expired. Please log in again."),
    ("Something odd", 500, "Something odd"),
])
def test_friendly_error_message(message, status_code, expected):
    assert friendly_error_message(message, status_code) == expected


def test_board_refresh(client):
    board = ReviewBoard(client)
    assert [r["id"] for r in board.refresh()] == ["r2", "r1"]
    assert board.average_rating() == 3.5


def test_board_add_replaces_placeholder(client):
    board = ReviewBoard(client)
    board.refresh()

    created = board.add({"movieId": "tt3", "rating": 4, "comment": "nice"})

    assert created["id"] == "r3"
    assert [r["id"] for r in board.reviews] == ["r3", "r2", "r1"]


def test_board_add_rolls_back_on_failure(client, api):
    board = ReviewBoard(client)
    board.refresh()
    api.fail_next = (400, "comment required")

    with pytest.raises(ApiError):
        board.add({"movieId": "tt3", "rating": 4, "comment": " "})

    assert [r["id"] for r in board.reviews] == ["r2", "r1"]
    assert not any(r["id"].startswith(PENDING_PREFIX) for r in board.reviews)


def test_board_edit_and_rollback(client, api):
    board = ReviewBoard(client)
    board.refresh()

    updated = board.edit("r1", {"rating": 3})
    assert updated["rating"] == 3
    assert json.loads(api.requests[-1].content) == {"movieId": "tt1", "movieTitle": "A", "rating": 3, "comment": "wow"}

    api.fail_next = (403, "Not authorized to update this review")
    with pytest.raises(ApiError):
        board.edit("r1", {"rating": 1})
    assert board.reviews[1]["rating"] == 3


def test_board_remove_and_rollback(client, api):
    board = ReviewBoard(client)
    board.refresh()

    api.fail_next = (404, "Review not found")
    with pytest.raises(ApiError):
        board.remove("r2")
    assert [r["id"] for r in board.reviews] == ["r2", "r1"]

    board.remove("r2")
    assert [r["id"] for r in board.reviews] == ["r1"]


def test_board_unknown_review(client):
    board = ReviewBoard(client)
    with pytest.raises(KeyError):
        board.remove("nope")
    assert board.average_rating() is None
