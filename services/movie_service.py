"""영화 카탈로그 서비스 (OMDb)"""
import asyncio
import re
from typing import Any, Dict, List, Optional

import httpx
from pydantic import ValidationError as PydanticValidationError

from config.settings import (
    FEATURED_MOVIE_IDS, OMDB_API_KEY, OMDB_BASE_URL,
    POSTER_PLACEHOLDER_URL, SEARCH_DETAIL_LIMIT
)
from core.exceptions import ValidationError
from core.omdb_client import OMDbClient, create_http_client
from schemas.movie import FeaturedMovies, Movie, MovieDetail

# OMDb 를 사용할 수 없을 때 반환하는 추천 영화
FALLBACK_MOVIES = [
    Movie(
        id="tt1375666",
        title="Inception",
        overview="A thief who steals corporate secrets through dream-sharing technology is given the inverse task of planting an idea into the mind of a C.E.O.",
        releaseDate="2010-07-16",
        runtime=148,
        genres=["Action", "Sci-Fi", "Thriller"],
        posterPath="https://image.tmdb.org/t/p/w500/9gk7adHYeDvHkCSEqAvQNLV5Uge.jpg",
        imdbRating="8.8",
        director="Christopher Nolan",
        actors="Leonardo DiCaprio, Joseph Gordon-Levitt, Ellen Page",
        year="2010"
    ),
    Movie(
        id="tt0111161",
        title="The Shawshank Redemption",
        overview="Two imprisoned men bond over a number of years, finding solace and eventual redemption through acts of common decency.",
        releaseDate="1994-09-23",
        runtime=142,
        genres=["Drama"],
        posterPath="https://image.tmdb.org/t/p/w500/q6y0Go1tsGEsmtFryDOJo3dEmqu.jpg",
        imdbRating="9.3",
        director="Frank Darabont",
        actors="Tim Robbins, Morgan Freeman, Bob Gunton",
        year="1994"
    ),
    Movie(
        id="tt0468569",
        title="The Dark Knight",
        overview="When the menace known as the Joker wreaks havoc and chaos on the people of Gotham, Batman must accept one of the greatest psychological and physical tests.",
        releaseDate="2008-07-18",
        runtime=152,
        genres=["Action", "Crime", "Drama"],
        posterPath="https://image.tmdb.org/t/p/w500/qJ2tW6WMUDux911r6m7haRef0WH.jpg",
        imdbRating="9.0",
        director="Christopher Nolan",
        actors="Christian Bale, Heath Ledger, Aaron Eckhart",
        year="2008"
    ),
]


def _parse_runtime(value: Any) -> int:
    """'148 min' -> 148, 해석할 수 없으면 0"""
    if isinstance(value, int):
        return value
    match = re.match(r"\s*(\d+)", value or "")
    return int(match.group(1)) if match else 0


def map_movie(data: Dict[str, Any], detail: bool = False) -> Movie:
    """
    OMDb 응답을 Movie 로 변환

    Args:
        data: OMDb 상세 조회 응답
        detail: True 면 boxOffice/country/language/awards 포함
    """
    poster = data.get("Poster")
    genre = data.get("Genre")
    fields = {
        "id": data.get("imdbID"),
        "title": data.get("Title"),
        "overview": data.get("Plot"),
        "releaseDate": data.get("Released"),
        "runtime": _parse_runtime(data.get("Runtime")),
        "genres": genre.split(", ") if genre and genre != "N/A" else [],
        "posterPath": poster if poster and poster != "N/A" else POSTER_PLACEHOLDER_URL,
        "imdbRating": data.get("imdbRating"),
        "director": data.get("Director"),
        "actors": data.get("Actors"),
        "year": data.get("Year"),
    }
    if detail:
        return MovieDetail(
            **fields,
            boxOffice=data.get("BoxOffice"),
            country=data.get("Country"),
            language=data.get("Language"),
            awards=data.get("Awards")
        )
    return Movie(**fields)


class MovieCatalogGateway:
    """
    영화 목록/검색/상세 조회

    여러 영화를 조회할 때는 동시에 요청하고, 실패한 항목은 결과에서 제외합니다.
    호출마다 AsyncClient 를 새로 열고 닫으며 캐시는 두지 않습니다.
    """

    def __init__(
        self,
        api_key: str = OMDB_API_KEY,
        base_url: str = OMDB_BASE_URL,
        featured_ids: Optional[List[str]] = None,
        transport: Optional[httpx.AsyncBaseTransport] = None
    ):
        self.api_key = api_key
        self.base_url = base_url
        self.featured_ids = list(featured_ids) if featured_ids is not None else list(FEATURED_MOVIE_IDS)
        self.transport = transport

    async def _fetch_many(self, omdb: OMDbClient, imdb_ids: List[str]) -> List[Movie]:
        results = await asyncio.gather(
            *(omdb.fetch_movie(imdb_id) for imdb_id in imdb_ids),
            return_exceptions=True
        )
        movies = []
        for imdb_id, result in zip(imdb_ids, results):
            if isinstance(result, Exception):
                print(f"[MovieCatalog] 조회 실패 제외: {imdb_id} ({result})")
                continue
            try:
                movies.append(map_movie(result))
            except PydanticValidationError as e:
                print(f"[MovieCatalog] 응답 형식 오류 제외: {imdb_id} ({e.error_count()}개 필드)")
        return movies

    async def list_featured(self) -> FeaturedMovies:
        """
        추천 영화 목록

        일부 실패는 제외하고 반환하며,
        전부 실패하면 내장 데이터를 fallback=True 로 반환합니다.
        """
        async with create_http_client(self.transport) as http:
            omdb = OMDbClient(http, self.api_key, self.base_url)
            movies = await self._fetch_many(omdb, self.featured_ids)

        if not movies:
            print("[MovieCatalog] 모든 추천 영화 조회 실패 - 내장 데이터 사용")
            return FeaturedMovies(movies=list(FALLBACK_MOVIES), fallback=True)
        return FeaturedMovies(movies=movies, fallback=False)

    async def search(self, query: str) -> List[Movie]:
        """
        제목 검색 후 상위 SEARCH_DETAIL_LIMIT 개의 상세 정보 조회

        Raises:
            ValidationError: 검색어가 비어있음
            UpstreamError: 검색 요청 자체가 실패
        """
        if not query or not query.strip():
            raise ValidationError("Search query is required")

        async with create_http_client(self.transport) as http:
            omdb = OMDbClient(http, self.api_key, self.base_url)
            results = await omdb.search_movies(query.strip())
            imdb_ids = [item.get("imdbID") for item in results[:SEARCH_DETAIL_LIMIT] if item.get("imdbID")]
            return await self._fetch_many(omdb, imdb_ids)

    async def get_details(self, movie_id: str) -> MovieDetail:
        """
        영화 상세 정보

        Raises:
            NotFoundError: 일치하는 영화 없음
            UpstreamError: OMDb 호출 실패
        """
        async with create_http_client(self.transport) as http:
            omdb = OMDbClient(http, self.api_key, self.base_url)
            data = await omdb.fetch_movie(movie_id)
        return map_movie(data, detail=True)
