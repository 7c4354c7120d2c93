"""Supabase 클라이언트 초기화"""
from typing import Dict, Optional

from supabase import create_client, Client

from config.settings import SUPABASE_URL, SUPABASE_ANON_KEY, SUPABASE_SERVICE_ROLE_KEY

# 키 종류별 클라이언트 ("anon", "service_role")
_clients: Dict[str, Client] = {}


def get_supabase_client(admin: bool = False) -> Optional[Client]:
    """
    Supabase 클라이언트 반환

    Args:
        admin: True 면 서비스 역할 키 클라이언트 (profiles 테이블 쓰기용),
               False 면 anon 키 클라이언트 (토큰 검증용)

    Returns:
        Client 또는 None (URL/키가 설정되지 않은 경우)
    """
    role = "service_role" if admin else "anon"
    key = SUPABASE_SERVICE_ROLE_KEY if admin else SUPABASE_ANON_KEY
    if role not in _clients:
        if not SUPABASE_URL or not key:
            return None
        _clients[role] = create_client(SUPABASE_URL, key)
    return _clients[role]
