#!/usr/bin/env python3
"""
启动脚本 - 图书会员管理系统
使用方法: python run.py
"""

import logging

import uvicorn

from bookmanager.config import get_settings

# 设置特定模块的日志级别
logging.getLogger("uvicorn.access").setLevel(logging.WARNING)

if __name__ == "__main__":
    settings = get_settings()
    logging.basicConfig(
        level=settings.log_level,
        format='%(asctime)s - %(name)s - %(levelname)s - [%(filename)s:%(lineno)d] - %(message)s',
    )
    logging.info("=" * 60)
    logging.info(f"启动{settings.app_name} - http://{settings.host}:{settings.port}")
    logging.info("=" * 60)

    uvicorn.run(
        "bookmanager.main:app",
        host=settings.host,
        port=settings.port,
        reload=True,
        reload_dirs=["bookmanager"],
        log_level=settings.log_level.lower(),
    )
