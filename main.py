"""FastAPI 메인 애플리케이션"""
from typing import Optional

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException as StarletteHTTPException

from config.cors import CORS_ORIGINS, CORS_CREDENTIALS, CORS_METHODS, CORS_HEADERS
from config.settings import PORT, is_production
from core.exceptions import AppError
from routers import auth, info, movies, review
from routers.info import AVAILABLE_ENDPOINTS
from schemas.common import ErrorResponse
from services.database import init_database
from services.identity_service import IdentityService
from services.movie_service import MovieCatalogGateway
from services.profile_service import ProfileService
from services.review_service import ReviewService
from services.review_store import ReviewStore


def _error(status_code: int, error: str, message: Optional[str] = None, **extra) -> JSONResponse:
    body = ErrorResponse(error=error, message=message).model_dump(exclude_none=True)
    body.update(extra)
    return JSONResponse(body, status_code=status_code)


def _format_validation_error(exc: RequestValidationError) -> str:
    errors = exc.errors()
    if not errors:
        return "Invalid request"
    first = errors[0]
    location = ".".join(str(part) for part in first.get("loc", ()) if part != "body")
    message = first.get("msg", "")
    return f"Invalid request: {location} {message}" if location else f"Invalid request: {message}"


def register_exception_handlers(app: FastAPI) -> None:
    """모든 오류를 {"success": False, "error": ...} 형태로 응답"""

    @app.exception_handler(AppError)
    async def app_error_handler(request: Request, exc: AppError):
        return _error(exc.status_code, exc.message)

    @app.exception_handler(RequestValidationError)
    async def request_validation_handler(request: Request, exc: RequestValidationError):
        return _error(400, _format_validation_error(exc))

    @app.exception_handler(StarletteHTTPException)
    async def http_exception_handler(request: Request, exc: StarletteHTTPException):
        if exc.status_code == 404:
            return _error(
                404,
                f"Route {request.url.path} not found",
                availableEndpoints=AVAILABLE_ENDPOINTS
            )
        return _error(exc.status_code, str(exc.detail))

    @app.exception_handler(Exception)
    async def unhandled_exception_handler(request: Request, exc: Exception):
        print(f"[App] 처리되지 않은 오류 ({request.method} {request.url.path}): {exc!r}")
        return _error(
            500,
            "Internal server error",
            "Something went wrong" if is_production() else str(exc)
        )


def create_app(
    review_store=None,
    identity_service: Optional[IdentityService] = None,
    movie_gateway: Optional[MovieCatalogGateway] = None,
    profile_service: Optional[ProfileService] = None
) -> FastAPI:
    """
    애플리케이션 생성

    서비스 객체를 만들어 app.state 에 보관합니다.
    인자로 전달된 객체가 있으면 그것을 사용합니다 (테스트용).
    """
    init_db = review_store is None
    review_store = review_store if review_store is not None else ReviewStore()
    identity_service = identity_service or IdentityService()
    profile_service = profile_service or ProfileService()

    app = FastAPI(
        title="Movie Review API",
        description="OMDb 영화 검색과 Supabase 인증 기반의 영화 리뷰 API",
        version="1.0.0",
    )

    # CORS 설정
    app.add_middleware(
        CORSMiddleware,
        allow_origins=CORS_ORIGINS,
        allow_credentials=CORS_CREDENTIALS,
        allow_methods=CORS_METHODS,
        allow_headers=CORS_HEADERS,
    )

    app.state.review_service = ReviewService(review_store)
    app.state.identity_service = identity_service
    app.state.profile_service = profile_service
    app.state.movie_gateway = movie_gateway or MovieCatalogGateway()

    register_exception_handlers(app)

    # 라우터 등록
    app.include_router(info.router)
    app.include_router(auth.router)
    app.include_router(movies.router)
    app.include_router(review.router)

    @app.on_event("startup")
    async def startup_event():
        """DB 테이블 준비 및 인증 서비스 시작"""
        if init_db:
            init_database()
        identity_service.start()
        identity_service.subscribe(profile_service.sync_profile)
        print("[App] 서버 시작")

    @app.on_event("shutdown")
    async def shutdown_event():
        identity_service.stop()
        print("[App] 서버 종료")

    return app


app = create_app()


if __name__ == "__main__":
    import uvicorn
    uvicorn.run(app, host="0.0.0.0", port=PORT)
