"""Common schemas cho các model chung"""

from enum import Enum
from typing import Tuple

from pydantic import BaseModel, Field


class VehicleType(str, Enum):
    """Phương tiện của courier, sắp xếp theo sức chở (nhỏ -> lớn)"""
    WALKING = "walking"
    BICYCLE = "bicycle"
    MOTORCYCLE = "motorcycle"
    CAR = "car"
    SUV = "suv"
    VAN = "van"


class ShippingSize(str, Enum):
    """Kích thước vận chuyển của sản phẩm"""
    SMALL = "small"
    MEDIUM = "medium"
    LARGE = "large"
    EXTRA_LARGE = "extra_large"


# Thứ tự cố định, dùng để so sánh và duyệt
VEHICLE_TYPES: Tuple[VehicleType, ...] = (
    VehicleType.WALKING,
    VehicleType.BICYCLE,
    VehicleType.MOTORCYCLE,
    VehicleType.CAR,
    VehicleType.SUV,
    VehicleType.VAN,
)

SHIPPING_SIZES: Tuple[ShippingSize, ...] = (
    ShippingSize.SMALL,
    ShippingSize.MEDIUM,
    ShippingSize.LARGE,
    ShippingSize.EXTRA_LARGE,
)


class Location(BaseModel):
    """Tọa độ địa lý"""
    lat: float = Field(..., ge=-90, le=90, description="Vĩ độ")
    lng: float = Field(..., ge=-180, le=180, description="Kinh độ")
