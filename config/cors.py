"""CORS 설정"""
import os

CORS_ORIGINS = [
    "http://localhost:3000",
    "http://localhost:5173",
] + [origin.strip() for origin in os.getenv("CORS_EXTRA_ORIGINS", "").split(",") if origin.strip()]
CORS_CREDENTIALS = True
CORS_METHODS = ["*"]
CORS_HEADERS = ["*"]
