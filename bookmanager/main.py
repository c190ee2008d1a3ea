#!/usr/bin/env python3
"""
主应用入口
"""
import logging
from contextlib import asynccontextmanager
from datetime import datetime, timezone
from typing import Optional

import uvicorn
from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from bookmanager.config import get_settings
from bookmanager.database import close_database, init_database
from bookmanager.routes.book_routes import book_router
from bookmanager.routes.error_handlers import register_error_handlers
from bookmanager.routes.member_routes import member_router

logger = logging.getLogger(__name__)


def configure_logging(level: Optional[str] = None) -> None:
    """配置日志"""
    logging.basicConfig(
        level=level or get_settings().log_level,
        format='%(asctime)s - %(name)s - %(levelname)s - %(message)s'
    )
    logging.getLogger("uvicorn.access").setLevel(logging.WARNING)


def create_app(database_url: Optional[str] = None) -> FastAPI:
    """创建FastAPI应用"""
    settings = get_settings()

    @asynccontextmanager
    async def lifespan(app: FastAPI):
        logger.info("应用启动中...")
        await init_database(database_url)
        logger.info("数据库连接就绪")
        yield
        logger.info("应用关闭中...")
        await close_database()

    app = FastAPI(
        title=settings.app_name,
        description="图书与会员管理 REST API",
        version=settings.version,
        lifespan=lifespan,
    )

    # 配置CORS
    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.cors_origins,
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    # 注册路由
    app.include_router(book_router)
    app.include_router(member_router)
    register_error_handlers(app)

    @app.get("/health")
    async def health_check():
        """健康检查"""
        return {
            "status": "healthy",
            "service": settings.app_name,
            "version": settings.version,
            "timestamp": datetime.now(timezone.utc).isoformat(),
        }

    return app


configure_logging()
app = create_app()


def run_server(host: Optional[str] = None, port: Optional[int] = None, reload: bool = False):
    """运行服务器"""
    settings = get_settings()
    uvicorn.run(
        "bookmanager.main:app",
        host=host or settings.host,
        port=port or settings.port,
        reload=reload,
        log_level=settings.log_level.lower(),
    )


if __name__ == "__main__":
    run_server(reload=True)
