#!/usr/bin/env python3
"""Khởi chạy ShopIt Dispatch server, host/port lấy từ settings (SERVER_HOST, SERVER_PORT)"""

import uvicorn

from shopit_dispatch.config import settings


def main():
    """Chạy uvicorn, bật reload khi DEBUG=true"""
    print(f"ShopIt Dispatch at http://{settings.server_host}:{settings.server_port} (docs: /docs)")

    uvicorn.run(
        "shopit_dispatch.main:app",
        host=settings.server_host,
        port=settings.server_port,
        reload=settings.debug,
        log_level="debug" if settings.debug else "info"
    )


if __name__ == "__main__":
    main()
