"""Pytest fixtures chung"""

import os

# Tắt Redis và routing API thật trước khi import settings
os.environ["REDIS_URL"] = ""
os.environ["OPENROUTE_API_KEY"] = ""

import httpx
import pytest


class FakeRedis:
    """Redis giả lưu trong memory, chỉ có các method service dùng"""

    def __init__(self):
        self.store = {}
        self.ttls = {}

    async def get(self, key):
        return self.store.get(key)

    async def setex(self, key, ttl, value):
        self.store[key] = value
        self.ttls[key] = ttl

    async def ping(self):
        return True

    async def close(self):
        pass


def make_route_response(duration_seconds: float, distance_meters: float) -> dict:
    """Body giống OpenRouteService GeoJSON response"""
    return {
        "features": [
            {"properties": {"summary": {"duration": duration_seconds, "distance": distance_meters}}}
        ]
    }


@pytest.fixture
def fake_redis():
    return FakeRedis()


@pytest.fixture
def route_calls():
    """Danh sách request đã gửi tới routing API giả"""
    return []


@pytest.fixture
def routing_client(route_calls):
    """httpx client trả về route 605s / 4321m"""

    def handler(request: httpx.Request) -> httpx.Response:
        route_calls.append(request)
        return httpx.Response(200, json=make_route_response(605, 4321))

    return httpx.AsyncClient(transport=httpx.MockTransport(handler))
