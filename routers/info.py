"""정보 엔드포인트 라우터"""
import time
from datetime import datetime, timezone

from fastapi import APIRouter

from config.settings import APP_ENV

router = APIRouter()

SERVER_START_TIME = time.time()

# 404 응답과 루트 응답에 표시하는 엔드포인트 목록
AVAILABLE_ENDPOINTS = {
    "health": "GET /api/health",
    "movies": "GET /api/movies",
    "movieSearch": "GET /api/movies/search?query=matrix",
    "movieDetails": "GET /api/movies/:id",
    "movieReviews": "GET /api/movies/:id/reviews",
    "reviews": "GET /api/reviews",
    "reviewDetails": "GET /api/reviews/:id",
    "createReview": "POST /api/reviews",
    "updateReview": "PUT /api/reviews/:id",
    "deleteReview": "DELETE /api/reviews/:id",
    "myReviews": "GET /api/my-reviews",
    "session": "POST /api/auth/session",
    "verify": "GET /api/auth/verify",
}


def _now_iso() -> str:
    return datetime.now(timezone.utc).isoformat()


@router.get("/", tags=["정보"])
async def root():
    """API 안내"""
    return {
        "success": True,
        "message": "Movie Review API Server with OMDb Integration",
        "version": "1.0.0",
        "timestamp": _now_iso(),
        "endpoints": AVAILABLE_ENDPOINTS,
        "instructions": {
            "authentication": "Use a Supabase access token in the Authorization header as a Bearer token",
            "reviewCreation": "Send { movieId, movieTitle, rating, comment } in the request body"
        }
    }


@router.get("/api/health", tags=["정보"])
async def health_check():
    """
    서버 상태 확인

    Returns:
        dict: 실행 환경, 현재 시각, 가동 시간(초)
    """
    return {
        "success": True,
        "message": "Server is running",
        "environment": APP_ENV,
        "timestamp": _now_iso(),
        "uptime": round(time.time() - SERVER_START_TIME, 3)
    }
