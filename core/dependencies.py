"""라우터에서 사용하는 서비스 의존성

서비스 객체는 main.create_app 에서 만들어 app.state 에 보관합니다.
"""
from fastapi import Request

from services.identity_service import IdentityService
from services.movie_service import MovieCatalogGateway
from services.profile_service import ProfileService
from services.review_service import ReviewService


def get_identity_service(request: Request) -> IdentityService:
    return request.app.state.identity_service


def get_review_service(request: Request) -> ReviewService:
    return request.app.state.review_service


def get_movie_gateway(request: Request) -> MovieCatalogGateway:
    return request.app.state.movie_gateway


def get_profile_service(request: Request) -> ProfileService:
    return request.app.state.profile_service
