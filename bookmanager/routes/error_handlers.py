"""
全局异常处理：所有错误都以 ApiResponse 信封返回
"""
import logging
from typing import Dict

from fastapi import FastAPI, Request, status
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException as StarletteHTTPException

from bookmanager.exceptions import BookManagerException
from bookmanager.schemas.common import ApiResponse

logger = logging.getLogger(__name__)

VALIDATION_FAILED = "VALIDATION_FAILED"
INTERNAL_SERVER_ERROR = "INTERNAL_SERVER_ERROR"


def register_error_handlers(app: FastAPI) -> None:
    """注册全局异常处理器"""

    @app.exception_handler(BookManagerException)
    async def domain_error_handler(request: Request, exc: BookManagerException):
        if exc.http_status >= 500:
            logger.error(f"业务异常 {exc.error_code} - {request.url.path}: {exc.message}")
        else:
            logger.warning(f"业务异常 {exc.error_code} - {request.url.path}: {exc.message}")
        return JSONResponse(
            status_code=exc.http_status,
            content=ApiResponse.fail(exc.message, exc.error_code).to_dict(),
        )

    @app.exception_handler(RequestValidationError)
    async def validation_error_handler(request: Request, exc: RequestValidationError):
        logger.warning(f"输入校验失败 - {request.url.path}: {exc.errors()}")
        return JSONResponse(
            status_code=status.HTTP_400_BAD_REQUEST,
            content=ApiResponse.fail("输入值校验失败", VALIDATION_FAILED, _field_errors(exc)).to_dict(),
        )

    @app.exception_handler(StarletteHTTPException)
    async def http_error_handler(request: Request, exc: StarletteHTTPException):
        return JSONResponse(
            status_code=exc.status_code,
            content=ApiResponse.fail(str(exc.detail), f"HTTP_{exc.status_code}").to_dict(),
            headers=getattr(exc, "headers", None),
        )

    @app.exception_handler(Exception)
    async def generic_error_handler(request: Request, exc: Exception):
        logger.error(f"未处理异常 - {request.url.path}: {exc}", exc_info=True)
        return JSONResponse(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            content=ApiResponse.fail("服务器内部错误", INTERNAL_SERVER_ERROR).to_dict(),
        )


def _field_errors(exc: RequestValidationError) -> Dict[str, str]:
    """把 pydantic 错误列表转换为 {字段: 信息}，同一字段只保留第一条"""
    errors: Dict[str, str] = {}
    for error in exc.errors():
        location = [str(part) for part in error.get("loc", ()) if part not in ("body", "query", "path")]
        field = ".".join(location) or "request"
        errors.setdefault(field, error.get("msg", "invalid value"))
    return errors
