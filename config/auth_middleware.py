"""인증 미들웨어"""
from typing import Optional

from fastapi import Depends, Request

from core.dependencies import get_identity_service
from core.exceptions import AuthenticationError
from schemas.auth import Identity
from services.identity_service import IdentityService


def extract_bearer_token(request: Request) -> Optional[str]:
    """
    Authorization 헤더에서 토큰 추출

    Returns:
        "Bearer <token>" 형식이면 토큰, 아니면 None
    """
    authorization = request.headers.get("Authorization")
    if not authorization:
        return None

    try:
        scheme, token = authorization.split()
    except ValueError:
        return None
    if scheme.lower() != "bearer":
        return None
    return token


def require_user(
    request: Request,
    identity_service: IdentityService = Depends(get_identity_service)
) -> Identity:
    """
    로그인이 필요한 엔드포인트에서 사용

    Raises:
        AuthenticationError: 토큰이 없거나 검증에 실패 (401)
    """
    token = extract_bearer_token(request)
    if not token:
        raise AuthenticationError("Authentication token required")
    return identity_service.verify_token(token)
