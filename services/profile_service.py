"""사용자 프로필 서비스 (Supabase profiles 테이블)"""
from datetime import datetime, timezone
from typing import Any, Dict, Optional

from core.exceptions import UpstreamError
from core.supabase_client import get_supabase_client
from schemas.auth import Identity, Profile

PROFILES_TABLE = "profiles"


def _default_display_name(identity: Identity) -> str:
    if identity.name:
        return identity.name
    if identity.email:
        return identity.email.split("@")[0]
    return "User"


class ProfileService:
    """
    로그인할 때마다 profiles 행을 생성/갱신합니다.
    IdentityService 의 로그인 리스너로 등록됩니다.
    """

    def __init__(self, client_factory=get_supabase_client):
        self.client_factory = client_factory

    def _client(self):
        client = self.client_factory(admin=True)
        if client is None:
            raise UpstreamError("Profile store is not configured")
        return client

    def get_profile(self, uid: str) -> Optional[Profile]:
        response = self._client().table(PROFILES_TABLE).select("*").eq("id", uid).execute()
        if response.data:
            return Profile(**response.data[0])
        return None

    def sync_profile(self, identity: Identity) -> Profile:
        """
        로그인 사용자 프로필 갱신

        기존 행이 있으면 토큰에 값이 없는 항목은 저장된 값을 유지합니다.
        """
        existing = self.get_profile(identity.uid)
        row: Dict[str, Any] = {
            "id": identity.uid,
            "email": identity.email,
            "display_name": identity.name or (existing.display_name if existing else _default_display_name(identity)),
            "photo_url": identity.picture or (existing.photo_url if existing else ""),
            "last_login_at": datetime.now(timezone.utc).isoformat(),
        }
        response = self._client().table(PROFILES_TABLE).upsert(row).execute()
        print(f"[Profile] 프로필 {'갱신' if existing else '생성'}: {identity.uid}")
        return Profile(**(response.data[0] if response.data else row))