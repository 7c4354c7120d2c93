"""인증 서비스

Supabase Auth 가 발급한 토큰을 검증하고 로그인 리스너에게 알립니다.
main.create_app 에서 생성되며 앱 시작/종료와 함께 start/stop 됩니다.
"""
from typing import Any, Callable, Dict, List, Optional

import jwt

from config.settings import SUPABASE_JWT_SECRET
from core.exceptions import AuthenticationError, UpstreamError
from core.supabase_client import get_supabase_client
from schemas.auth import Identity

SignInListener = Callable[[Identity], Any]

# Supabase 가 로그인 사용자 토큰에 넣는 audience
TOKEN_AUDIENCE = "authenticated"


def _identity_from_claims(uid: Optional[str], email: Optional[str], metadata: Optional[Dict[str, Any]]) -> Identity:
    if not uid:
        raise AuthenticationError("Invalid authentication token")
    metadata = metadata or {}
    return Identity(
        uid=uid,
        email=email,
        name=metadata.get("full_name") or metadata.get("name"),
        picture=metadata.get("avatar_url") or metadata.get("picture")
    )


class IdentityService:
    """
    토큰 검증과 로그인 리스너 관리

    jwt_secret 이 있으면 PyJWT 로 서명을 직접 검증하고,
    없으면 Supabase Auth 의 get_user 로 검증합니다.
    """

    def __init__(self, jwt_secret: str = SUPABASE_JWT_SECRET, client_factory=get_supabase_client):
        self.jwt_secret = jwt_secret
        self.client_factory = client_factory
        self._listeners: List[SignInListener] = []
        self.started = False

    def start(self) -> None:
        self.started = True
        mode = "JWT secret" if self.jwt_secret else "Supabase get_user"
        print(f"[Auth] IdentityService 시작 (검증 방식: {mode})")

    def stop(self) -> None:
        self._listeners.clear()
        self.started = False
        print("[Auth] IdentityService 종료")

    def subscribe(self, listener: SignInListener) -> Callable[[], None]:
        """
        로그인 리스너 등록

        Returns:
            등록을 해제하는 함수
        """
        self._listeners.append(listener)
        return lambda: self.unsubscribe(listener)

    def unsubscribe(self, listener: SignInListener) -> None:
        if listener in self._listeners:
            self._listeners.remove(listener)

    @property
    def listeners(self) -> List[SignInListener]:
        return list(self._listeners)

    def verify_token(self, token: str) -> Identity:
        """
        토큰을 검증하고 사용자 정보를 반환

        Raises:
            AuthenticationError: 토큰이 없거나 유효하지 않음
            UpstreamError: 검증 수단이 설정되지 않음
        """
        if not token:
            raise AuthenticationError("Authentication token required")

        if self.jwt_secret:
            try:
                claims = jwt.decode(
                    token,
                    self.jwt_secret,
                    algorithms=["HS256"],
                    audience=TOKEN_AUDIENCE
                )
            except jwt.InvalidTokenError as e:
                print(f"[Auth] 토큰 검증 실패: {e}")
                raise AuthenticationError("Invalid authentication token") from e
            return _identity_from_claims(
                claims.get("sub"),
                claims.get("email"),
                claims.get("user_metadata")
            )

        client = self.client_factory()
        if client is None:
            raise UpstreamError("Identity provider is not configured")
        try:
            response = client.auth.get_user(token)
        except Exception as e:
            print(f"[Auth] Supabase 토큰 검증 실패: {e}")
            raise AuthenticationError("Invalid authentication token") from e
        if not response or not response.user:
            raise AuthenticationError("Invalid authentication token")
        user = response.user
        return _identity_from_claims(user.id, user.email, user.user_metadata)

    def sign_in(self, token: str) -> Identity:
        """
        토큰 검증 후 로그인 리스너 호출

        리스너 오류는 기록만 하고 로그인 자체는 성공으로 처리합니다.
        """
        identity = self.verify_token(token)
        for listener in list(self._listeners):
            try:
                listener(identity)
            except Exception as e:
                print(f"[Auth] 로그인 리스너 오류 ({getattr(listener, '__name__', listener)}): {e}")
        return identity
