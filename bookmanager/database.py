"""
数据库配置
"""
import logging
from typing import AsyncGenerator, Optional

from sqlalchemy.ext.asyncio import (
    AsyncEngine,
    AsyncSession,
    async_sessionmaker,
    create_async_engine,
)
from sqlalchemy.orm import declarative_base
from sqlalchemy.pool import StaticPool

from bookmanager.config import get_settings

logger = logging.getLogger(__name__)

# 创建基础模型类
Base = declarative_base()

# 数据库引擎和会话工厂（init_database 之后可用）
engine: Optional[AsyncEngine] = None
SessionLocal: Optional[async_sessionmaker] = None


def get_database_url() -> str:
    """获取数据库URL"""
    return get_settings().database_url


def create_engine_for(database_url: str, echo: bool = False) -> AsyncEngine:
    """根据URL创建异步引擎，内存SQLite共享同一连接"""
    if database_url.startswith("sqlite") and (":memory:" in database_url or database_url.endswith("://")):
        return create_async_engine(
            database_url,
            echo=echo,
            connect_args={"check_same_thread": False},
            poolclass=StaticPool,
        )
    if database_url.startswith("sqlite"):
        return create_async_engine(
            database_url, echo=echo, connect_args={"check_same_thread": False}
        )
    return create_async_engine(database_url, echo=echo, pool_pre_ping=True)


def create_session_factory(bind: AsyncEngine) -> async_sessionmaker:
    """创建会话工厂"""
    return async_sessionmaker(bind, class_=AsyncSession, expire_on_commit=False, autoflush=False)


async def init_database(database_url: Optional[str] = None) -> AsyncEngine:
    """初始化数据库"""
    global engine, SessionLocal
    settings = get_settings()
    database_url = database_url or get_database_url()
    engine = create_engine_for(database_url, echo=settings.database_echo)
    SessionLocal = create_session_factory(engine)

    # 确保模型已注册到 Base.metadata
    from bookmanager.models import book, member  # noqa: F401

    # 创建所有表
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)

    logger.info(f"数据库初始化完成: {database_url}")
    return engine


async def close_database() -> None:
    """关闭数据库连接"""
    global engine, SessionLocal
    if engine is not None:
        await engine.dispose()
        logger.info("数据库连接已关闭")
    engine = None
    SessionLocal = None


async def get_session() -> AsyncGenerator[AsyncSession, None]:
    """
    每个请求一个会话
    处理函数正常返回时提交，抛出异常时回滚
    """
    if SessionLocal is None:
        raise RuntimeError("Database is not initialized, call init_database() first")

    async with SessionLocal() as session:
        try:
            yield session
            await session.commit()
        except Exception:
            await session.rollback()
            raise
