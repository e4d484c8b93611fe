import os

# 앱 import 전에 테스트용 DB 설정
os.environ["DATABASE_URL"] = "sqlite+aiosqlite:///:memory:"
os.environ["RATING_DEDUP_ENABLED"] = "true"

from typing import AsyncIterator

import httpx
import pytest

from main import app
from app.database import async_session_maker, drop_db, init_db


@pytest.fixture
def anyio_backend():
    return "asyncio"


@pytest.fixture
async def setup_db() -> AsyncIterator[None]:
    """테스트마다 테이블 생성 후 삭제"""
    await init_db()
    yield
    await drop_db()


@pytest.fixture
async def client(setup_db) -> AsyncIterator[httpx.AsyncClient]:
    """HTTPX 클라이언트 (ASGI 직접 호출)"""
    transport = httpx.ASGITransport(app=app)
    async with httpx.AsyncClient(transport=transport, base_url="http://test") as ac:
        yield ac
    app.dependency_overrides.clear()


@pytest.fixture
async def db(setup_db):
    async with async_session_maker() as session:
        yield session
