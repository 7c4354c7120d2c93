"""
공통 테스트 픽스처

MySQL/Supabase/OMDb 대신 메모리 저장소, 테스트용 JWT 비밀키, httpx.MockTransport 를 사용합니다.
"""
import time
import uuid
from datetime import datetime, timedelta, timezone
from unittest.mock import Mock

import httpx
import jwt
import pytest
from fastapi.testclient import TestClient

from main import create_app
from schemas.auth import Identity
from schemas.review import Review
from services.identity_service import IdentityService
from services.movie_service import MovieCatalogGateway
from services.review_service import ReviewService

JWT_SECRET = "test-secret-for-movie-review-api-0123456789"


class InMemoryReviewStore:
    """ReviewStore 와 같은 메서드를 가진 메모리 저장소"""

    def __init__(self):
        self.rows = {}

    def insert(self, record):
        review = Review(id=uuid.uuid4().hex, **record)
        self.rows[review.id] = review
        return review

    def get(self, review_id):
        return self.rows.get(review_id)

    def list(self, user_id=None, movie_id=None):
        reviews = [
            r for r in self.rows.values()
            if (user_id is None or r.userId == user_id)
            and (movie_id is None or r.movieId == movie_id)
        ]
        return sorted(reviews, key=lambda r: (r.createdAt, r.id), reverse=True)

    def update(self, review_id, user_id, fields):
        review = self.rows.get(review_id)
        if review is None or review.userId != user_id:
            return None
        updated = review.model_copy(update=fields)
        self.rows[review_id] = updated
        return updated

    def delete(self, review_id, user_id):
        review = self.rows.get(review_id)
        if review is None or review.userId != user_id:
            return False
        del self.rows[review_id]
        return True


class StepClock:
    """호출할 때마다 1초씩 증가하는 시계"""

    def __init__(self, start=datetime(2024, 6, 1, 12, 0, tzinfo=timezone.utc)):
        self.current = start

    def __call__(self):
        value = self.current
        self.current += timedelta(seconds=1)
        return value


def make_token(uid, email=None, name=None, secret=JWT_SECRET, **claims):
    payload = {
        "sub": uid,
        "email": email,
        "aud": "authenticated",
        "exp": int(time.time()) + 3600,
        "user_metadata": {"full_name": name} if name else {},
    }
    payload.update(claims)
    return jwt.encode(payload, secret, algorithm="HS256")


OMDB_MOVIES = {
    "tt0133093": {
        "imdbID": "tt0133093", "Title": "The Matrix", "Year": "1999",
        "Released": "31 Mar 1999", "Runtime": "136 min", "Genre": "Action, Sci-Fi",
        "Director": "Lana Wachowski, Lilly Wachowski",
        "Actors": "Keanu Reeves, Laurence Fishburne, Carrie-Anne Moss",
        "Plot": "A computer hacker learns the true nature of reality.",
        "Poster": "https://example.com/matrix.jpg", "imdbRating": "8.7",
        "BoxOffice": "$172,076,928", "Country": "United States",
        "Language": "English", "Awards": "Won 4 Oscars", "Response": "True",
    },
    "tt0234215": {
        "imdbID": "tt0234215", "Title": "The Matrix Reloaded", "Year": "2003",
        "Released": "15 May 2003", "Runtime": "N/A", "Genre": "Action, Sci-Fi",
        "Director": "Lana Wachowski, Lilly Wachowski", "Actors": "Keanu Reeves",
        "Plot": "Neo and the rebels fight on.", "Poster": "N/A",
        "imdbRating": "7.2", "Response": "True",
    },
}


def omdb_handler(movies=None, search=None, failing=()):
    """
    OMDb 흉내 핸들러

    Args:
        movies: imdbID -> 상세 응답
        search: 검색어 -> Search 항목 리스트
        failing: 500 을 반환할 imdbID 목록
    """
    movies = OMDB_MOVIES if movies is None else movies
    search = search or {}

    def handler(request: httpx.Request) -> httpx.Response:
        params = request.url.params
        if "i" in params:
            imdb_id = params["i"]
            if imdb_id in failing:
                return httpx.Response(500, text="upstream down")
            if imdb_id in movies:
                return httpx.Response(200, json=movies[imdb_id])
            return httpx.Response(200, json={"Response": "False", "Error": "Incorrect IMDb ID."})
        if "s" in params:
            items = search.get(params["s"])
            if items is None:
                return httpx.Response(200, json={"Response": "False", "Error": "Movie not found!"})
            return httpx.Response(200, json={"Search": items, "totalResults": str(len(items)), "Response": "True"})
        return httpx.Response(400, json={"Response": "False", "Error": "Something went wrong."})

    return handler


def make_gateway(handler=None, featured_ids=None):
    transport = httpx.MockTransport(handler or omdb_handler())
    return MovieCatalogGateway(
        api_key="test-key",
        base_url="http://omdb.test/",
        featured_ids=featured_ids,
        transport=transport
    )


@pytest.fixture
def store():
    return InMemoryReviewStore()


@pytest.fixture
def clock():
    return StepClock()


@pytest.fixture
def review_service(store, clock):
    return ReviewService(store, clock=clock)


@pytest.fixture
def alice():
    return Identity(uid="alice-uid", email="alice@example.com", name="Alice")


@pytest.fixture
def bob():
    return Identity(uid="bob-uid", email="bob@example.com", name="Bob")


@pytest.fixture
def identity_service():
    return IdentityService(jwt_secret=JWT_SECRET)


@pytest.fixture
def profile_service():
    return Mock()


@pytest.fixture
def app(store, clock, identity_service, profile_service):
    application = create_app(
        review_store=store,
        identity_service=identity_service,
        movie_gateway=make_gateway(featured_ids=["tt0133093", "tt0234215", "tt9999999"]),
        profile_service=profile_service
    )
    application.state.review_service.clock = clock
    return application


@pytest.fixture
def client(app):
    return TestClient(app)


@pytest.fixture
def alice_headers():
    return {"Authorization": f"Bearer {make_token('alice-uid', 'alice@example.com', 'Alice')}"}


@pytest.fixture
def bob_headers():
    return {"Authorization": f"Bearer {make_token('bob-uid', 'bob@example.com', 'Bob')}"}
