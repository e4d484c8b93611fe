from sqlalchemy.ext.asyncio import create_async_engine, AsyncSession, async_sessionmaker
from sqlalchemy.orm import declarative_base
from sqlalchemy.pool import StaticPool
from app.core.config import settings
import logging
from typing import AsyncGenerator

logger = logging.getLogger(__name__)


def build_engine(database_url: str):
    """DB URL에 맞는 비동기 엔진 생성"""
    if database_url.startswith("sqlite"):
        # 메모리 DB는 커넥션 하나를 공유해야 테이블이 유지된다
        return create_async_engine(
            database_url,
            connect_args={"check_same_thread": False},
            poolclass=StaticPool,
            echo=False
        )
    return create_async_engine(
        database_url,
        pool_size=settings.DB_POOL_SIZE,
        max_overflow=settings.DB_MAX_OVERFLOW,
        pool_timeout=settings.DB_POOL_TIMEOUT,
        pool_pre_ping=True,
        pool_recycle=settings.DB_POOL_RECYCLE,
        echo=False
    )


engine = build_engine(settings.DATABASE_URL)

async_session_maker = async_sessionmaker(
    engine,
    class_=AsyncSession,
    expire_on_commit=False,
    autocommit=False,
    autoflush=False
)

Base = declarative_base()

async def init_db():
    """데이터베이스 초기화"""
    # 모델 등록
    from app import models  # noqa: F401

    try:
        async with engine.begin() as conn:
            await conn.run_sync(Base.metadata.create_all)
            logger.info("데이터베이스 테이블 생성 완료")
    except Exception as e:
        logger.error(f"데이터베이스 초기화 중 오류: {str(e)}")
        raise

async def drop_db():
    """모든 테이블 삭제 (테스트용)"""
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.drop_all)

async def get_session() -> AsyncGenerator[AsyncSession, None]:
    """비동기 세션 생성"""
    async with async_session_maker() as session:
        try:
            yield session
        finally:
            await session.close()

# FastAPI dependency
get_db = get_session
