"""Service tính phí giao hàng theo thời gian lái xe (OpenRouteService)"""

import json
from dataclasses import dataclass, asdict
from decimal import Decimal, ROUND_CEILING
from typing import Optional, Tuple, Dict, Union
import logging

import redis.asyncio as aioredis
import httpx

from ..config import settings, VehicleShippingConfig
from ..schemas.common import Location, ShippingSize
from ..schemas.fees import FeeTier, DeliveryFeeResult
from ..utils.time_utils import TimeUtils
from .capacity import coerce_shipping_size

logger = logging.getLogger(__name__)

# Bậc giá theo kích thước lớn nhất của đơn
SIZE_FEE_TIERS: Dict[ShippingSize, FeeTier] = {
    ShippingSize.SMALL: FeeTier.BIKE,
    ShippingSize.MEDIUM: FeeTier.CAR,
    ShippingSize.LARGE: FeeTier.SUV,
    ShippingSize.EXTRA_LARGE: FeeTier.VAN,
}


@dataclass
class RouteSummary:
    """Tóm tắt route từ routing API"""
    duration_seconds: float
    distance_meters: float

    @property
    def duration_minutes(self) -> int:
        return TimeUtils.seconds_to_minutes_ceil(self.duration_seconds)

    @property
    def distance_km(self) -> float:
        return TimeUtils.meters_to_km(self.distance_meters)


def get_shipping_config(tier: FeeTier) -> VehicleShippingConfig:
    """Lấy cấu hình giá cho bậc xe"""
    return {
        FeeTier.BIKE: settings.bike_shipping,
        FeeTier.CAR: settings.car_shipping,
        FeeTier.SUV: settings.suv_shipping,
        FeeTier.VAN: settings.van_shipping,
    }[tier]


def ceil_to_precision(value: float, precision: float) -> float:
    """Làm tròn lên theo bước precision (VD: 0.5 GEL)"""
    step = Decimal(str(precision))
    steps = (Decimal(str(value)) / step).to_integral_value(rounding=ROUND_CEILING)
    return float(steps * step)


def calculate_fee(duration_minutes: int,
                  shipping_size: Union[ShippingSize, str] = ShippingSize.SMALL) -> Tuple[float, FeeTier]:
    """
    Tính phí từ thời gian lái xe theo kích thước đơn

    Args:
        duration_minutes: Thời gian lái xe (phút)
        shipping_size: Kích thước lớn nhất của đơn

    Returns:
        Tuple (fee, tier)
    """
    tier = SIZE_FEE_TIERS[coerce_shipping_size(shipping_size)]
    config = get_shipping_config(tier)

    raw_fee = duration_minutes * config.rate_per_minute
    fee = max(config.minimum_fee, raw_fee)

    return ceil_to_precision(fee, settings.delivery_fee_precision), tier


class DeliveryFeeService:
    """Service tính phí giao hàng với OpenRouteService + caching"""

    def __init__(self, client: Optional[httpx.AsyncClient] = None, api_key: Optional[str] = None):
        self.client = client or httpx.AsyncClient(timeout=settings.http_timeout_seconds)
        self.api_key = api_key if api_key is not None else (settings.openroute_api_key or "")
        self.redis_client: Optional[aioredis.Redis] = None

        if not self.api_key:
            logger.warning("OPENROUTE_API_KEY not configured. Delivery fee calculation will use fallback.")

    async def __aenter__(self):
        """Async context manager entry"""
        await self._init_redis()
        return self

    async def __aexit__(self, exc_type, exc_val, exc_tb):
        """Async context manager exit"""
        await self.client.aclose()
        if self.redis_client:
            await self.redis_client.close()

    async def _init_redis(self):
        """Khởi tạo Redis connection"""
        try:
            if settings.redis_url:
                self.redis_client = aioredis.from_url(
                    settings.redis_url,
                    encoding="utf-8",
                    decode_responses=True
                )
                await self.redis_client.ping()
                logger.info("Redis connected successfully")
        except Exception as e:
            logger.warning(f"Redis connection failed: {e}, caching disabled")
            self.redis_client = None

    def is_configured(self) -> bool:
        return bool(self.api_key)

    def _get_cache_key(self, origin: Location, destination: Location) -> str:
        """Cache key từ tọa độ đã làm tròn"""
        p = settings.route_cache_coord_precision
        return (
            f"route:{round(origin.lat, p)},{round(origin.lng, p)}"
            f"|{round(destination.lat, p)},{round(destination.lng, p)}"
        )

    async def _get_from_cache(self, cache_key: str) -> Optional[RouteSummary]:
        """Lấy route summary từ cache"""
        if not self.redis_client:
            return None

        try:
            cached_data = await self.redis_client.get(cache_key)
            if cached_data:
                return RouteSummary(**json.loads(cached_data))
        except Exception as e:
            logger.warning(f"Cache get failed: {e}")

        return None

    async def _save_to_cache(self, cache_key: str, summary: RouteSummary):
        """Lưu route summary vào cache"""
        if not self.redis_client:
            return

        try:
            await self.redis_client.setex(
                cache_key,
                settings.route_cache_ttl_seconds,
                json.dumps(asdict(summary))
            )
        except Exception as e:
            logger.warning(f"Cache save failed: {e}")

    async def _call_openroute_api(self, origin: Location, destination: Location) -> Optional[RouteSummary]:
        """Gọi OpenRouteService Directions API"""
        url = f"{settings.openroute_base_url}/directions/driving-car"
        params = {
            "start": f"{origin.lng},{origin.lat}",
            "end": f"{destination.lng},{destination.lat}",
        }
        headers = {
            "Authorization": self.api_key,
            "Accept": "application/json, application/geo+json",
        }

        try:
            response = await self.client.get(url, params=params, headers=headers)
        except httpx.HTTPError as e:
            logger.error(f"OpenRouteService request failed: {e}")
            return None

        if response.status_code != 200:
            logger.error(f"OpenRouteService API error: {response.status_code}. Body: {response.text}")
            return None

        try:
            data = response.json()
            summary = data["features"][0]["properties"]["summary"]
            return RouteSummary(
                duration_seconds=float(summary["duration"]),
                distance_meters=float(summary["distance"])
            )
        except (ValueError, KeyError, IndexError, TypeError) as e:
            logger.error(f"Invalid response from OpenRouteService: {e}")
            return None

    async def get_route_summary(self, origin: Location, destination: Location) -> Optional[RouteSummary]:
        """Route summary có cache, None nếu không gọi được API"""
        if not self.api_key:
            return None

        cache_key = self._get_cache_key(origin, destination)
        cached = await self._get_from_cache(cache_key)
        if cached:
            logger.debug(f"Cache hit for {cache_key}")
            return cached

        summary = await self._call_openroute_api(origin, destination)
        if summary is not None:
            await self._save_to_cache(cache_key, summary)
        return summary

    def get_fallback_fee(self, shipping_size: Union[ShippingSize, str] = ShippingSize.SMALL) -> DeliveryFeeResult:
        """Phí ước tính khi routing API không dùng được"""
        fee, tier = calculate_fee(settings.fallback_duration_minutes, shipping_size)
        return DeliveryFeeResult(
            fee=fee + settings.fallback_fee_buffer,
            duration_minutes=settings.fallback_duration_minutes,
            distance_km=settings.fallback_distance_km,
            vehicle_type=tier,
            is_estimate=True
        )

    async def calculate_delivery_fee(self,
                                     origin: Location,
                                     destination: Location,
                                     shipping_size: Union[ShippingSize, str] = ShippingSize.SMALL) -> DeliveryFeeResult:
        """
        Tính phí giao hàng theo thời gian lái xe giữa 2 địa điểm

        Args:
            origin: Vị trí cửa hàng
            destination: Vị trí khách hàng
            shipping_size: Kích thước lớn nhất của đơn

        Returns:
            DeliveryFeeResult, fallback nếu routing API lỗi
        """
        shipping_size = coerce_shipping_size(shipping_size)

        summary = await self.get_route_summary(origin, destination)
        if summary is None:
            logger.info(f"Using fallback delivery fee for size {shipping_size.value}")
            return self.get_fallback_fee(shipping_size)

        duration_minutes = summary.duration_minutes
        fee, tier = calculate_fee(duration_minutes, shipping_size)

        logger.debug(
            f"Delivery fee calculated: {fee} GEL for {duration_minutes} min "
            f"({summary.distance_km} km) - {tier.value}"
        )

        return DeliveryFeeResult(
            fee=fee,
            duration_minutes=duration_minutes,
            distance_km=summary.distance_km,
            vehicle_type=tier
        )
