"""인증 라우터"""
from fastapi import APIRouter, Depends, Request
from fastapi.responses import JSONResponse

from config.auth_middleware import extract_bearer_token, require_user
from core.dependencies import get_identity_service, get_profile_service
from core.exceptions import AuthenticationError
from schemas.auth import Identity
from services.identity_service import IdentityService
from services.profile_service import ProfileService

router = APIRouter(prefix="/api/auth", tags=["인증"])


@router.post("/session")
def start_session(
    request: Request,
    identity_service: IdentityService = Depends(get_identity_service),
    profile_service: ProfileService = Depends(get_profile_service)
):
    """
    로그인 직후 호출

    토큰을 검증하고 로그인 리스너(프로필 동기화)를 실행한 뒤
    사용자 정보와 저장된 프로필을 반환합니다.
    """
    token = extract_bearer_token(request)
    if not token:
        raise AuthenticationError("Authentication token required")

    identity = identity_service.sign_in(token)
    try:
        profile = profile_service.get_profile(identity.uid)
    except Exception as e:
        print(f"[Auth] 프로필 조회 실패: {e}")
        profile = None

    return JSONResponse({
        "success": True,
        "message": "Signed in",
        "user": identity.model_dump(),
        "profile": profile.model_dump(mode="json") if profile else None
    })


@router.get("/verify")
def verify_token(user: Identity = Depends(require_user)):
    """현재 요청의 토큰이 유효한지 확인"""
    return JSONResponse({"success": True, "user": user.model_dump()})
