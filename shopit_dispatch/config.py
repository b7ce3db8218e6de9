"""Configuration settings cho ShopIt Dispatch service"""

import os
from typing import Optional

from pydantic import BaseModel, Field
from pydantic_settings import BaseSettings


class VehicleShippingConfig(BaseModel):
    """Cấu hình giá giao hàng cho 1 loại xe"""
    rate_per_minute: float = Field(..., gt=0, description="Giá theo phút lái xe (GEL/phút)")
    minimum_fee: float = Field(..., ge=0, description="Phí tối thiểu (GEL)")


class Settings(BaseSettings):
    # OpenRouteService settings
    openroute_api_key: Optional[str] = os.getenv("OPENROUTE_API_KEY")
    openroute_base_url: str = "https://api.openrouteservice.org/v2"
    http_timeout_seconds: float = 10.0

    # Cache settings
    redis_url: Optional[str] = os.getenv("REDIS_URL", "redis://localhost:6379")
    route_cache_ttl_seconds: int = 86400  # 1 ngày cho route summary
    route_cache_coord_precision: int = 4  # ~11m

    # Delivery fee theo loại xe
    bike_shipping: VehicleShippingConfig = VehicleShippingConfig(rate_per_minute=0.5, minimum_fee=3)
    car_shipping: VehicleShippingConfig = VehicleShippingConfig(rate_per_minute=0.75, minimum_fee=5)
    suv_shipping: VehicleShippingConfig = VehicleShippingConfig(rate_per_minute=1.0, minimum_fee=8)
    van_shipping: VehicleShippingConfig = VehicleShippingConfig(rate_per_minute=2.0, minimum_fee=15)
    delivery_fee_precision: float = 0.5

    # Fallback khi không gọi được routing API
    fallback_duration_minutes: int = 15
    fallback_distance_km: float = 5.0
    fallback_fee_buffer: float = 2.0

    # Courier order queue
    available_orders_limit: int = 100

    # Server
    server_host: str = "0.0.0.0"
    server_port: int = 8000

    # Debug mode
    debug: bool = os.getenv("DEBUG", "false").lower() == "true"

    class Config:
        env_file = ".env"


settings = Settings()
