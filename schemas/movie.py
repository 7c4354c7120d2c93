"""영화 스키마"""
from pydantic import BaseModel
from typing import List, Optional


class Movie(BaseModel):
    """OMDb 응답을 정규화한 영화 정보"""
    id: str
    title: str
    overview: Optional[str] = None
    releaseDate: Optional[str] = None
    runtime: int = 0
    genres: List[str] = []
    posterPath: str
    imdbRating: Optional[str] = None
    director: Optional[str] = None
    actors: Optional[str] = None
    year: Optional[str] = None


class MovieDetail(Movie):
    """상세 조회 전용 필드를 포함한 영화 정보"""
    boxOffice: Optional[str] = None
    country: Optional[str] = None
    language: Optional[str] = None
    awards: Optional[str] = None


class FeaturedMovies(BaseModel):
    """추천 영화 목록 (fallback=True 이면 내장 데이터)"""
    movies: List[Movie]
    fallback: bool = False
