"""데이터베이스 연결 및 초기화"""
import pymysql
from config.database import (
    MYSQL_HOST, MYSQL_PORT, MYSQL_USER,
    MYSQL_PASSWORD, MYSQL_DATABASE, REVIEWS_TABLE
)


def get_db_connection():
    """MySQL 데이터베이스 연결 반환 (실패 시 None)"""
    try:
        connection = pymysql.connect(
            host=MYSQL_HOST,
            port=MYSQL_PORT,
            user=MYSQL_USER,
            password=MYSQL_PASSWORD,
            database=MYSQL_DATABASE,
            charset='utf8mb4',
            cursorclass=pymysql.cursors.DictCursor
        )
        return connection
    except pymysql.Error as e:
        error_msg = str(e)
        print(f"[DB] 연결 오류: {error_msg}")
        if "Access denied" in error_msg or "1045" in error_msg:
            print("[DB] 인증 실패. .env 파일의 MYSQL_USER와 MYSQL_PASSWORD를 확인하세요.")
        elif "Unknown database" in error_msg or "1049" in error_msg:
            print(f"[DB] 데이터베이스가 존재하지 않습니다. '{MYSQL_DATABASE}' 데이터베이스를 생성하세요.")
        elif "Can't connect" in error_msg or "2003" in error_msg:
            print("[DB] MySQL 서버에 연결할 수 없습니다. MySQL 서비스가 실행 중인지 확인하세요.")
        return None


CREATE_REVIEWS_TABLE = f"""
CREATE TABLE IF NOT EXISTS {REVIEWS_TABLE} (
    id CHAR(32) PRIMARY KEY,
    movie_id TEXT NULL,
    movie_title TEXT NOT NULL,
    rating TINYINT NOT NULL CHECK (rating BETWEEN 1 AND 5),
    comment MEDIUMTEXT NOT NULL,
    user_id TEXT NOT NULL,
    user_email TEXT NULL,
    user_name TEXT NOT NULL,
    created_at DATETIME(6) NOT NULL,
    updated_at DATETIME(6) NOT NULL,
    INDEX idx_user_id (user_id(191)),
    INDEX idx_movie_id (movie_id(191)),
    INDEX idx_created_at (created_at, id)
) ENGINE=InnoDB DEFAULT CHARSET=utf8mb4 COLLATE=utf8mb4_unicode_ci;
"""


def init_database(connection_factory=get_db_connection) -> bool:
    """리뷰 테이블 생성 (이미 있으면 그대로 둠)"""
    connection = connection_factory()
    if not connection:
        print("[DB] 연결 실패 - 테이블 생성 건너뜀")
        return False

    try:
        with connection.cursor() as cursor:
            cursor.execute(CREATE_REVIEWS_TABLE)
        connection.commit()
        print(f"[DB] 테이블 준비 완료: {REVIEWS_TABLE}")
        return True
    except pymysql.Error as e:
        print(f"[DB] 테이블 생성 오류: {e}")
        return False
    finally:
        connection.close()
