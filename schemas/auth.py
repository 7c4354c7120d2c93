"""인증 스키마"""
from pydantic import BaseModel
from typing import Optional
from datetime import datetime


class Identity(BaseModel):
    """검증된 토큰에서 얻은 사용자 정보"""
    uid: str
    email: Optional[str] = None
    name: Optional[str] = None
    picture: Optional[str] = None


class Profile(BaseModel):
    """profiles 테이블의 사용자 프로필"""
    id: str
    email: Optional[str] = None
    display_name: str
    photo_url: Optional[str] = ""
    last_login_at: Optional[datetime] = None
