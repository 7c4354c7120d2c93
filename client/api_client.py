"""영화 리뷰 API 클라이언트

모든 리뷰 변경은 이 클라이언트를 통해 API 로만 요청합니다.
"""
from typing import Any, Callable, Dict, List, Optional

import httpx

DEFAULT_BASE_URL = "http://localhost:5000/api"

# 서버 오류 메시지 -> 사용자 안내 문구
FRIENDLY_MESSAGES = [
    ("movie identifier required", "Please select a movie first."),
    ("rating out of range", "Please select a rating between 1 and 5 stars."),
    ("comment required", "Please write a comment for your review."),
    ("Network error", "Unable to connect to server. Please check your connection and try again."),
    ("Authentication token required", "Your session has expired. Please log in again."),
    ("Invalid authentication token", "Your session has expired. Please log in again."),
    ("Not authorized", "You are not authorized to perform this action."),
    ("not found", "The requested resource was not found."),
]


class ApiError(Exception):
    """API 호출 실패 (status_code 가 None 이면 네트워크 오류)"""

    def __init__(self, message: str, status_code: Optional[int] = None):
        super().__init__(message)
        self.message = message
        self.status_code = status_code

    @property
    def friendly_message(self) -> str:
        return friendly_error_message(self.message, self.status_code)


def friendly_error_message(message: str, status_code: Optional[int] = None) -> str:
    """서버 오류 메시지를 화면에 보여줄 문구로 변환"""
    for needle, friendly in FRIENDLY_MESSAGES:
        if needle.lower() in message.lower():
            return friendly
    if status_code == 401:
        return "Your session has expired. Please log in again."
    if status_code == 403:
        return "You are not authorized to perform this action."
    if status_code == 404:
        return "The requested resource was not found."
    return message


class MovieReviewClient:
    """
    API 호출 래퍼

    Args:
        base_url: API 기본 주소 (/api 까지 포함)
        token_provider: 현재 로그인 사용자의 토큰을 반환하는 함수 (없으면 익명 요청)
        transport: httpx 전송 계층 (테스트용)
    """

    def __init__(
        self,
        base_url: str = DEFAULT_BASE_URL,
        token_provider: Optional[Callable[[], Optional[str]]] = None,
        transport: Optional[httpx.BaseTransport] = None,
        timeout: float = 10.0
    ):
        self.token_provider = token_provider
        self.http = httpx.Client(base_url=base_url.rstrip("/"), transport=transport, timeout=timeout)

    def close(self) -> None:
        self.http.close()

    def __enter__(self):
        return self

    def __exit__(self, *exc_info):
        self.close()

    def _request(self, method: str, path: str, **kwargs) -> Dict[str, Any]:
        headers = {"Content-Type": "application/json"}
        token = self.token_provider() if self.token_provider else None
        if token:
            headers["Authorization"] = f"Bearer {token}"

        try:
            response = self.http.request(method, path, headers=headers, **kwargs)
        except httpx.TransportError as e:
            raise ApiError(f"Network error: {e}") from e

        try:
            data = response.json() if response.content else {}
        except ValueError:
            raise ApiError(f"Server returned invalid JSON: {response.status_code}", response.status_code)

        if response.is_error or data.get("success") is False:
            message = data.get("error") or data.get("message") or f"HTTP error! status: {response.status_code}"
            raise ApiError(message, response.status_code)
        return data

    # 영화
    def get_movies(self) -> Dict[str, Any]:
        return self._request("GET", "/movies")

    def search_movies(self, query: str) -> List[Dict[str, Any]]:
        return self._request("GET", "/movies/search", params={"query": query})["movies"]

    def get_movie(self, movie_id: str) -> Dict[str, Any]:
        return self._request("GET", f"/movies/{movie_id}")["movie"]

    # 리뷰
    def get_reviews(self) -> List[Dict[str, Any]]:
        return self._request("GET", "/reviews")["reviews"]

    def get_my_reviews(self) -> List[Dict[str, Any]]:
        return self._request("GET", "/my-reviews")["reviews"]

    def create_review(self, review: Dict[str, Any]) -> Dict[str, Any]:
        return self._request("POST", "/reviews", json=review)["review"]

    def update_review(self, review_id: str, review: Dict[str, Any]) -> Dict[str, Any]:
        return self._request("PUT", f"/reviews/{review_id}", json=review)["review"]

    def delete_review(self, review_id: str) -> None:
        self._request("DELETE", f"/reviews/{review_id}")

    # 인증
    def start_session(self) -> Dict[str, Any]:
        return self._request("POST", "/auth/session")
