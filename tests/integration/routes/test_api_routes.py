"""
API路由集成测试：健康检查、统一响应结构、错误处理
"""
from unittest.mock import AsyncMock, patch

import pytest
from fastapi.testclient import TestClient
from sqlalchemy.ext.asyncio import AsyncSession

from bookmanager.main import create_app
from tests.fixtures.sample_data import book_payload


@pytest.mark.integration
class TestAPIRoutes:
    """API路由集成测试类"""

    def test_health_check(self, client):
        """测试健康检查接口"""
        response = client.get("/health")

        assert response.status_code == 200
        data = response.json()
        assert data["status"] == "healthy"
        assert "timestamp" in data

    def test_api_docs_accessible(self, client):
        """测试API文档可访问"""
        response = client.get("/openapi.json")
        assert response.status_code == 200
        paths = response.json()["paths"]
        assert "/api/books" in paths
        assert "/api/members" in paths

    def test_cors_headers(self, client):
        """测试CORS头部设置"""
        response = client.options("/api/books", headers={
            "Origin": "http://localhost:3000",
            "Access-Control-Request-Method": "GET"
        })

        assert "access-control-allow-origin" in response.headers
        assert "access-control-allow-methods" in response.headers

    def test_invalid_route_404(self, client):
        """测试无效路由返回统一的失败结构"""
        response = client.get("/nonexistent-route")

        assert response.status_code == 404
        data = response.json()
        assert data["success"] is False
        assert data["errorCode"] == "HTTP_404"
        assert "timestamp" in data

    def test_success_envelope(self, client):
        """测试成功响应结构：不输出值为null的顶层字段"""
        response = client.post("/api/books", json=book_payload())

        data = response.json()
        assert data["success"] is True
        assert data["message"] == "图书登记成功"
        assert "errorCode" not in data
        assert data["timestamp"].endswith(("Z", "+00:00"))

    def test_delete_envelope_has_no_data(self, client):
        book_id = client.post("/api/books", json=book_payload()).json()["data"]["bookId"]

        response = client.delete(f"/api/books/{book_id}")

        assert response.status_code == 200
        assert "data" not in response.json()

    def test_default_success_message(self, client):
        response = client.get("/api/books")
        assert response.json()["message"] == "请求处理成功"

    def test_validation_error_envelope(self, client):
        """测试请求体校验失败返回字段错误映射"""
        response = client.post("/api/books", json=book_payload(price=0, title="  "))

        assert response.status_code == 400
        data = response.json()
        assert data["success"] is False
        assert data["errorCode"] == "VALIDATION_FAILED"
        assert data["message"] == "输入值校验失败"
        assert set(data["data"]) == {"price", "title"}

    def test_missing_query_parameter(self, client):
        response = client.patch("/api/books/some-id/stock/add")

        assert response.status_code == 400
        assert "quantity" in response.json()["data"]

    def test_unknown_sort_field(self, client):
        response = client.get("/api/books", params={"sort": "password"})

        assert response.status_code == 400
        assert response.json()["errorCode"] == "ILLEGAL_ARGUMENT"

    def test_page_size_is_capped(self, client):
        response = client.get("/api/books", params={"size": 1000})

        assert response.status_code == 200
        assert response.json()["data"]["size"] == 100

    def test_invalid_page_number(self, client):
        response = client.get("/api/members", params={"page": 0})
        assert response.status_code == 400


@pytest.mark.integration
class TestTransactionBoundary:
    """请求事务测试类"""

    def test_commit_failure_is_reported_before_response(self):
        """测试提交失败时返回500，且数据未写入"""
        app = create_app(database_url="sqlite+aiosqlite://")
        with TestClient(app, raise_server_exceptions=False) as client:
            with patch.object(AsyncSession, "commit", AsyncMock(side_effect=RuntimeError("commit failed"))):
                response = client.post("/api/books", json=book_payload())

            assert response.status_code == 500
            data = response.json()
            assert data["success"] is False
            assert data["errorCode"] == "INTERNAL_SERVER_ERROR"

            lookup = client.get("/api/books/isbn/978-0134685991")
            assert lookup.status_code == 404
