"""
pytest配置文件，定义全局fixtures和测试配置
"""
from typing import AsyncGenerator, Generator

import pytest
from fastapi.testclient import TestClient
from sqlalchemy.ext.asyncio import AsyncEngine, AsyncSession

from bookmanager.database import Base, create_engine_for, create_session_factory
from bookmanager.main import create_app
from bookmanager.models import book, member  # noqa: F401
from bookmanager.repositories.book_repository import BookRepository
from bookmanager.repositories.member_repository import MemberRepository

IN_MEMORY_DATABASE_URL = "sqlite+aiosqlite://"


@pytest.fixture
async def test_engine() -> AsyncGenerator[AsyncEngine, None]:
    """内存数据库引擎，每个测试一份新的表结构"""
    engine = create_engine_for(IN_MEMORY_DATABASE_URL)
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)
    yield engine
    await engine.dispose()


@pytest.fixture
async def test_session(test_engine: AsyncEngine) -> AsyncGenerator[AsyncSession, None]:
    """测试数据库会话"""
    session_factory = create_session_factory(test_engine)
    async with session_factory() as session:
        yield session


@pytest.fixture
def book_repository(test_session: AsyncSession) -> BookRepository:
    return BookRepository(test_session)


@pytest.fixture
def member_repository(test_session: AsyncSession) -> MemberRepository:
    return MemberRepository(test_session)


@pytest.fixture
def client() -> Generator[TestClient, None, None]:
    """创建FastAPI测试客户端（内存数据库）"""
    app = create_app(database_url=IN_MEMORY_DATABASE_URL)
    with TestClient(app) as test_client:
        yield test_client


def pytest_configure(config):
    """配置pytest标记"""
    config.addinivalue_line(
        "markers", "unit: 单元测试"
    )
    config.addinivalue_line(
        "markers", "integration: 集成测试"
    )
    config.addinivalue_line(
        "markers", "e2e: 端到端测试"
    )
    config.addinivalue_line(
        "markers", "slow: 慢速测试"
    )
