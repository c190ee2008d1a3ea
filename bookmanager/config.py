"""
应用配置
通过环境变量（前缀 BOOKMANAGER_）或 .env 文件覆盖默认值
"""
from functools import lru_cache
from typing import List

from pydantic import field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """应用配置项"""

    model_config = SettingsConfigDict(
        env_prefix="BOOKMANAGER_",
        env_file=".env",
        case_sensitive=False,
        extra="ignore",
    )

    app_name: str = "图书会员管理系统"
    version: str = "1.0.0"

    # 数据库
    database_url: str = "sqlite+aiosqlite:///./bookmanager.db"
    database_echo: bool = False

    # 日志
    log_level: str = "INFO"

    # 分页
    default_page_size: int = 10
    max_page_size: int = 100

    # 库存
    low_stock_threshold: int = 10

    # 服务
    host: str = "127.0.0.1"
    port: int = 8000
    cors_origins: List[str] = ["*"]

    @field_validator("database_url", mode="before")
    @classmethod
    def convert_postgres_url(cls, v):
        """postgresql:// 转换为异步驱动 postgresql+asyncpg://"""
        if isinstance(v, str) and v.startswith("postgresql://"):
            return v.replace("postgresql://", "postgresql+asyncpg://", 1)
        return v

    @field_validator("log_level")
    @classmethod
    def normalize_log_level(cls, v: str) -> str:
        return v.upper()


@lru_cache
def get_settings() -> Settings:
    """获取配置（进程内单例）"""
    return Settings()
