"""
配置单元测试
"""
from bookmanager.config import Settings


class TestSettings:
    """Settings测试类"""

    def test_defaults(self, monkeypatch):
        monkeypatch.delenv("BOOKMANAGER_DATABASE_URL", raising=False)
        settings = Settings(_env_file=None)

        assert settings.database_url == "sqlite+aiosqlite:///./bookmanager.db"
        assert settings.default_page_size == 10
        assert settings.max_page_size == 100
        assert settings.low_stock_threshold == 10

    def test_environment_override(self, monkeypatch):
        monkeypatch.setenv("BOOKMANAGER_LOW_STOCK_THRESHOLD", "3")
        monkeypatch.setenv("BOOKMANAGER_LOG_LEVEL", "debug")

        settings = Settings(_env_file=None)

        assert settings.low_stock_threshold == 3
        assert settings.log_level == "DEBUG"

    def test_postgres_url_uses_async_driver(self):
        settings = Settings(_env_file=None, database_url="postgresql://user:pw@localhost/books")
        assert settings.database_url == "postgresql+asyncpg://user:pw@localhost/books"
