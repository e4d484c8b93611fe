from pydantic import Field
from pydantic_settings import BaseSettings
from typing import List, Optional
from functools import lru_cache
from pathlib import Path

# 기본 디렉토리 설정
BASE_DIR = Path(__file__).resolve().parent.parent.parent

class Settings(BaseSettings):
    # 기본 경로 설정
    BASE_DIR: Path = BASE_DIR

    # 디버그/로깅 설정
    DEBUG: bool = True
    LOG_LEVEL: str = "INFO"

    # CORS 설정
    CORS_ORIGINS: List[str] = ["*"]

    # Database
    POSTGRES_SERVER: str = "localhost"
    POSTGRES_USER: str = "reviews_user"
    POSTGRES_PASSWORD: str = "reviews_password"
    POSTGRES_DB: str = "reviews_db"
    POSTGRES_PORT: str = "5432"
    DATABASE_URL_OVERRIDE: Optional[str] = Field(default=None, alias="DATABASE_URL")

    # 커넥션 풀 설정 (SQLite 제외)
    DB_POOL_SIZE: int = 30
    DB_MAX_OVERFLOW: int = 30
    DB_POOL_TIMEOUT: int = 30
    DB_POOL_RECYCLE: int = 1800

    # 평점 설정
    RATING_DEDUP_ENABLED: bool = True

    # 집계 클라이언트 설정
    REVIEWS_API_BASE_URL: str = "http://localhost:8000/api"
    AGGREGATION_TIMEOUT_SECONDS: float = 10.0

    @property
    def DATABASE_URL(self) -> str:
        if self.DATABASE_URL_OVERRIDE:
            return self.DATABASE_URL_OVERRIDE
        return f"postgresql+asyncpg://{self.POSTGRES_USER}:{self.POSTGRES_PASSWORD}@{self.POSTGRES_SERVER}:{self.POSTGRES_PORT}/{self.POSTGRES_DB}"

    class Config:
        env_file = ".env"
        case_sensitive = True
        extra = "ignore"
        populate_by_name = True

@lru_cache()
def get_settings():
    return Settings()

settings = get_settings()
