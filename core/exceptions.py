"""애플리케이션 예외 정의

모든 예외는 HTTP 상태 코드를 가지고 있으며,
main.py 의 예외 핸들러가 {"success": False, "error": message} 형태로 응답합니다.
"""


class AppError(Exception):
    """애플리케이션 예외의 기본 클래스"""
    status_code = 500

    def __init__(self, message: str):
        super().__init__(message)
        self.message = message


class ValidationError(AppError):
    """잘못된 입력 (400)"""
    status_code = 400


class AuthenticationError(AppError):
    """토큰이 없거나 유효하지 않음 (401)"""
    status_code = 401


class AuthorizationError(AppError):
    """인증은 되었지만 리소스의 소유자가 아님 (403)"""
    status_code = 403


class NotFoundError(AppError):
    """존재하지 않는 리소스 (404)"""
    status_code = 404


class UpstreamError(AppError):
    """외부 API 또는 데이터베이스 오류 (500)"""
    status_code = 500
