"""Schema cho tính phí giao hàng"""

from enum import Enum
from typing import Optional

from pydantic import BaseModel, Field, validator

from .common import Location, ShippingSize


class FeeTier(str, Enum):
    """Bậc giá giao hàng theo loại xe"""
    BIKE = "bike"
    CAR = "car"
    SUV = "suv"
    VAN = "van"


class DeliveryFeeRequest(BaseModel):
    """Request tính phí giao hàng"""
    origin: Location = Field(..., description="Vị trí cửa hàng")
    destination: Location = Field(..., description="Vị trí khách hàng")
    shipping_size: ShippingSize = Field(ShippingSize.SMALL, description="Kích thước lớn nhất của đơn")

    # Thời gian chuẩn bị hàng của cửa hàng (ngày), dùng để ước tính ngày giao
    prep_time_min_days: Optional[int] = Field(None, ge=0, description="Số ngày chuẩn bị tối thiểu")
    prep_time_max_days: Optional[int] = Field(None, ge=0, description="Số ngày chuẩn bị tối đa")

    @validator("prep_time_max_days")
    def validate_prep_time_range(cls, v, values):
        min_days = values.get("prep_time_min_days")
        if v is not None and min_days is not None and v < min_days:
            raise ValueError("Số ngày chuẩn bị tối đa phải >= tối thiểu")
        return v


class DeliveryFeeResult(BaseModel):
    """Kết quả tính phí giao hàng"""
    fee: float = Field(..., ge=0, description="Phí giao hàng (GEL)")
    duration_minutes: int = Field(..., ge=0, description="Thời gian lái xe (phút)")
    distance_km: float = Field(..., ge=0, description="Khoảng cách (km)")
    vehicle_type: FeeTier = Field(..., description="Bậc giá đã dùng")
    is_estimate: bool = Field(False, description="True nếu dùng fallback")
    min_days: Optional[int] = Field(None, ge=0, description="Số ngày giao sớm nhất")
    max_days: Optional[int] = Field(None, ge=0, description="Số ngày giao muộn nhất")
