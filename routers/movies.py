"""영화 라우터"""
from fastapi import APIRouter, Depends
from fastapi.responses import JSONResponse

from core.dependencies import get_movie_gateway, get_review_service
from services.movie_service import MovieCatalogGateway
from services.review_service import ReviewService

router = APIRouter(prefix="/api/movies", tags=["영화"])


@router.get("")
async def list_movies(gateway: MovieCatalogGateway = Depends(get_movie_gateway)):
    """
    추천 영화 목록

    OMDb 조회가 모두 실패해도 내장 데이터로 성공 응답을 반환합니다.
    """
    featured = await gateway.list_featured()
    return JSONResponse({
        "success": True,
        "count": len(featured.movies),
        "movies": [movie.model_dump() for movie in featured.movies],
        "fallback": featured.fallback,
        "note": "Using fallback data due to OMDb API issues" if featured.fallback else "Data provided by OMDb API"
    })


@router.get("/search")
async def search_movies(query: str = "", gateway: MovieCatalogGateway = Depends(get_movie_gateway)):
    """
    영화 검색

    Args:
        query: 검색어 (비어있으면 400)
    """
    movies = await gateway.search(query)
    return JSONResponse({
        "success": True,
        "count": len(movies),
        "query": query,
        "movies": [movie.model_dump() for movie in movies]
    })


@router.get("/{movie_id}")
async def get_movie(movie_id: str, gateway: MovieCatalogGateway = Depends(get_movie_gateway)):
    """영화 상세 정보"""
    movie = await gateway.get_details(movie_id)
    return JSONResponse({"success": True, "movie": movie.model_dump()})


@router.get("/{movie_id}/reviews")
def list_movie_reviews(movie_id: str, service: ReviewService = Depends(get_review_service)):
    """특정 영화의 리뷰 목록 (최신순)"""
    reviews = service.list_by_movie(movie_id)
    return JSONResponse({
        "success": True,
        "count": len(reviews),
        "movieId": movie_id,
        "reviews": [review.model_dump(mode="json") for review in reviews]
    })
