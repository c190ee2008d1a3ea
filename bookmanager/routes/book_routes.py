"""
书籍管理路由
"""
import logging
from typing import Optional

from fastapi import APIRouter, Depends, Query, status

from bookmanager.config import get_settings
from bookmanager.dependencies import get_book_service, get_page_request
from bookmanager.models.enums import BookStatus
from bookmanager.models.page import PageRequest
from bookmanager.schemas.book import BookCreateRequest, BookUpdateRequest
from bookmanager.schemas.common import ApiResponse
from bookmanager.services.book_service import BookService

logger = logging.getLogger(__name__)

# 创建路由
book_router = APIRouter(prefix="/api/books", tags=["books"])


@book_router.post("", status_code=status.HTTP_201_CREATED)
async def create_book(request: BookCreateRequest, service: BookService = Depends(get_book_service)):
    """创建书籍"""
    logger.info(f"创建书籍API - Title: {request.title}")
    book = await service.create_book(request)
    return ApiResponse.ok(book, "图书登记成功").to_dict()


@book_router.get("")
async def get_books(
    page_request: PageRequest = Depends(get_page_request),
    service: BookService = Depends(get_book_service),
):
    """分页获取书籍列表"""
    return ApiResponse.ok(await service.get_all_books(page_request)).to_dict()


@book_router.get("/search")
async def search_books(
    keyword: str = Query(..., min_length=1),
    page_request: PageRequest = Depends(get_page_request),
    service: BookService = Depends(get_book_service),
):
    """按标题或作者搜索书籍"""
    return ApiResponse.ok(await service.search_books(keyword, page_request)).to_dict()


@book_router.get("/search/title")
async def search_books_by_title(
    keyword: str = Query(..., min_length=1),
    page_request: PageRequest = Depends(get_page_request),
    service: BookService = Depends(get_book_service),
):
    """按标题搜索书籍"""
    return ApiResponse.ok(await service.search_books_by_title(keyword, page_request)).to_dict()


@book_router.get("/search/author")
async def search_books_by_author(
    keyword: str = Query(..., min_length=1),
    page_request: PageRequest = Depends(get_page_request),
    service: BookService = Depends(get_book_service),
):
    """按作者搜索书籍"""
    return ApiResponse.ok(await service.search_books_by_author(keyword, page_request)).to_dict()


@book_router.get("/low-stock")
async def get_low_stock_books(
    threshold: Optional[int] = Query(None, ge=0),
    service: BookService = Depends(get_book_service),
):
    """获取低库存书籍（仅 AVAILABLE 状态）"""
    if threshold is None:
        threshold = get_settings().low_stock_threshold
    return ApiResponse.ok(await service.get_low_stock_books(threshold)).to_dict()


@book_router.get("/price")
async def get_books_by_price_range(
    min_price: int = Query(..., alias="min", ge=0),
    max_price: int = Query(..., alias="max", ge=0),
    page_request: PageRequest = Depends(get_page_request),
    service: BookService = Depends(get_book_service),
):
    """按价格区间获取书籍"""
    page = await service.get_books_by_price_range(min_price, max_price, page_request)
    return ApiResponse.ok(page).to_dict()


@book_router.get("/stats/category")
async def count_books_by_category(service: BookService = Depends(get_book_service)):
    """按分类统计书籍数量"""
    return ApiResponse.ok(await service.count_books_by_category()).to_dict()


@book_router.get("/isbn/{isbn}")
async def get_book_by_isbn(isbn: str, service: BookService = Depends(get_book_service)):
    """根据ISBN获取书籍"""
    return ApiResponse.ok(await service.get_book_by_isbn(isbn)).to_dict()


@book_router.get("/category/{category}")
async def get_books_by_category(
    category: str,
    book_status: Optional[BookStatus] = Query(None, alias="status"),
    page_request: PageRequest = Depends(get_page_request),
    service: BookService = Depends(get_book_service),
):
    """按分类获取书籍，可附加状态条件"""
    page = await service.get_books_by_category(category, page_request, book_status)
    return ApiResponse.ok(page).to_dict()


@book_router.get("/status/{book_status}")
async def get_books_by_status(
    book_status: BookStatus,
    page_request: PageRequest = Depends(get_page_request),
    service: BookService = Depends(get_book_service),
):
    """按状态获取书籍"""
    return ApiResponse.ok(await service.get_books_by_status(book_status, page_request)).to_dict()


@book_router.get("/{book_id}")
async def get_book(book_id: str, service: BookService = Depends(get_book_service)):
    """获取单本书籍详情"""
    return ApiResponse.ok(await service.get_book_by_id(book_id)).to_dict()


@book_router.patch("/{book_id}")
async def update_book(
    book_id: str,
    request: BookUpdateRequest,
    service: BookService = Depends(get_book_service),
):
    """更新书籍信息"""
    book = await service.update_book(book_id, request)
    return ApiResponse.ok(book, "书籍信息已更新").to_dict()


@book_router.patch("/{book_id}/stock/add")
async def add_stock(
    book_id: str,
    quantity: int = Query(...),
    service: BookService = Depends(get_book_service),
):
    """增加库存"""
    book = await service.add_stock(book_id, quantity)
    return ApiResponse.ok(book, "库存已增加").to_dict()


@book_router.patch("/{book_id}/stock/remove")
async def remove_stock(
    book_id: str,
    quantity: int = Query(...),
    service: BookService = Depends(get_book_service),
):
    """减少库存"""
    book = await service.remove_stock(book_id, quantity)
    return ApiResponse.ok(book, "库存已减少").to_dict()


@book_router.patch("/{book_id}/status")
async def change_book_status(
    book_id: str,
    book_status: BookStatus = Query(..., alias="status"),
    service: BookService = Depends(get_book_service),
):
    """修改书籍状态"""
    book = await service.change_book_status(book_id, book_status)
    return ApiResponse.ok(book, "书籍状态已修改").to_dict()


@book_router.delete("/{book_id}")
async def delete_book(book_id: str, service: BookService = Depends(get_book_service)):
    """删除书籍"""
    await service.delete_book(book_id)
    return ApiResponse.ok(message="书籍删除成功").to_dict()
