"""Pydantic schemas cho validation dữ liệu đầu vào/ra"""

from .common import VehicleType, ShippingSize, VEHICLE_TYPES, SHIPPING_SIZES, Location
from .orders import (
    OrderItem, AvailableOrder,
    CapacityCheckRequest, CapacityCheckResponse,
    AvailableOrdersRequest, AvailableOrderView, AvailableOrdersResponse,
)
from .fees import FeeTier, DeliveryFeeRequest, DeliveryFeeResult

__all__ = [
    "VehicleType", "ShippingSize", "VEHICLE_TYPES", "SHIPPING_SIZES", "Location",
    "OrderItem", "AvailableOrder",
    "CapacityCheckRequest", "CapacityCheckResponse",
    "AvailableOrdersRequest", "AvailableOrderView", "AvailableOrdersResponse",
    "FeeTier", "DeliveryFeeRequest", "DeliveryFeeResult",
]
