"""환경변수 및 설정값 관리"""
import os
from dotenv import load_dotenv

# .env 파일 로드
load_dotenv()

# 실행 환경 (production 이면 500 응답에 오류 상세를 숨김)
APP_ENV = os.getenv("APP_ENV", "development")
PORT = int(os.getenv("PORT", 5000))

# OMDb API 설정
OMDB_API_KEY = os.getenv("OMDB_API_KEY", "")
OMDB_BASE_URL = os.getenv("OMDB_BASE_URL", "http://www.omdbapi.com/")
OMDB_TIMEOUT = float(os.getenv("OMDB_TIMEOUT", 10))

# Supabase 설정
SUPABASE_URL = os.getenv("SUPABASE_URL", "")
SUPABASE_ANON_KEY = os.getenv("SUPABASE_ANON_KEY", "")
SUPABASE_SERVICE_ROLE_KEY = os.getenv("SUPABASE_SERVICE_ROLE_KEY", "")
SUPABASE_JWT_SECRET = os.getenv("SUPABASE_JWT_SECRET", "")

# 포스터가 없는 영화에 사용할 이미지
POSTER_PLACEHOLDER_URL = "https://via.placeholder.com/300x450?text=No+Poster"

# 제목이 없는 리뷰의 기본 영화 제목
DEFAULT_MOVIE_TITLE = "Unknown Movie"

# 검색 시 상세 정보를 가져올 최대 영화 수
SEARCH_DETAIL_LIMIT = 5

# 메인 화면 추천 영화 (IMDb ID)
FEATURED_MOVIE_IDS = [
    "tt1375666",  # Inception
    "tt0111161",  # The Shawshank Redemption
    "tt0468569",  # The Dark Knight
    "tt0137523",  # Fight Club
    "tt0109830",  # Forrest Gump
    "tt0167260",  # The Lord of the Rings: The Return of the King
    "tt0133093",  # The Matrix
    "tt0088763",  # Back to the Future
    "tt0076759",  # Star Wars: Episode IV
    "tt0110912",  # Pulp Fiction
]


def is_production() -> bool:
    """production 환경 여부"""
    return APP_ENV.lower() == "production"
