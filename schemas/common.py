"""공통 스키마"""
from pydantic import BaseModel
from typing import Optional


class ErrorResponse(BaseModel):
    """오류 응답 스키마"""
    success: bool = False
    error: str
    message: Optional[str] = None
