"""OMDb API 클라이언트"""
from typing import Any, Dict, List, Optional

import httpx

from config.settings import OMDB_API_KEY, OMDB_BASE_URL, OMDB_TIMEOUT
from core.exceptions import NotFoundError, UpstreamError

# OMDb 가 검색 결과 없음에 사용하는 메시지
NO_MATCH_ERRORS = ("Movie not found!", "Incorrect IMDb ID.")


class OMDbClient:
    """
    OMDb 조회/검색 호출

    하나의 httpx.AsyncClient 를 받아 요청을 보냅니다.
    클라이언트 수명은 호출하는 쪽(MovieCatalogGateway)이 관리합니다.
    """

    def __init__(self, http: httpx.AsyncClient, api_key: str = OMDB_API_KEY, base_url: str = OMDB_BASE_URL):
        self.http = http
        self.api_key = api_key
        self.base_url = base_url

    async def _get(self, params: Dict[str, str]) -> Dict[str, Any]:
        try:
            response = await self.http.get(self.base_url, params={**params, "apikey": self.api_key})
        except httpx.TimeoutException:
            print(f"[OMDb] 타임아웃: {params}")
            raise UpstreamError("OMDb API timeout")
        except httpx.HTTPError as e:
            print(f"[OMDb] 요청 오류: {e}")
            raise UpstreamError("OMDb API request failed")

        if response.status_code != 200:
            print(f"[OMDb] 응답 상태 코드: {response.status_code}")
            raise UpstreamError(f"OMDb API error: {response.status_code}")

        try:
            return response.json()
        except ValueError:
            raise UpstreamError("OMDb API returned invalid JSON")

    async def fetch_movie(self, imdb_id: str) -> Dict[str, Any]:
        """
        IMDb ID 로 영화 상세 정보 조회

        Raises:
            NotFoundError: OMDb 가 일치하는 영화가 없다고 응답
            UpstreamError: 네트워크/응답 오류
        """
        data = await self._get({"i": imdb_id, "plot": "short"})
        if data.get("Response") == "False":
            error = data.get("Error") or "Movie not found"
            if error in NO_MATCH_ERRORS or "not found" in error.lower():
                raise NotFoundError("Movie not found")
            print(f"[OMDb] 조회 실패 ({imdb_id}): {error}")
            raise UpstreamError(error)
        return data

    async def search_movies(self, query: str) -> List[Dict[str, Any]]:
        """
        제목으로 영화 검색

        Returns:
            OMDb Search 항목 리스트 (결과가 없으면 빈 리스트)
        """
        data = await self._get({"s": query})
        if data.get("Response") == "False":
            error: Optional[str] = data.get("Error")
            if error in NO_MATCH_ERRORS:
                return []
            print(f"[OMDb] 검색 실패 ({query}): {error}")
            raise UpstreamError(error or "OMDb search failed")
        return data.get("Search") or []


def create_http_client(transport: Optional[httpx.AsyncBaseTransport] = None) -> httpx.AsyncClient:
    """OMDb 호출용 AsyncClient 생성"""
    return httpx.AsyncClient(timeout=OMDB_TIMEOUT, transport=transport)
