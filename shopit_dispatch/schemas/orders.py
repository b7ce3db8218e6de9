"""Schema cho đơn hàng và kiểm tra capacity"""

from datetime import datetime
from typing import Optional, List, Dict

from pydantic import BaseModel, Field, validator

from .common import VehicleType, ShippingSize, SHIPPING_SIZES


class OrderItem(BaseModel):
    """Dòng hàng trong đơn: kích thước + số lượng"""
    shipping_size: ShippingSize = Field(..., description="Kích thước vận chuyển")
    qty: int = Field(..., ge=0, description="Số lượng")


class AvailableOrder(BaseModel):
    """Đơn hàng đang chờ courier nhận"""
    order_id: str = Field(..., description="Mã đơn hàng")
    delivery_deadline: Optional[datetime] = Field(None, description="Hạn giao hàng")
    created_at: Optional[datetime] = Field(None, description="Thời điểm tạo đơn")

    items: List[OrderItem] = Field(default_factory=list, description="Các dòng hàng")

    # Kích thước: seller xác nhận > ước tính > giá trị hiện tại
    shipping_size: Optional[ShippingSize] = Field(None, description="Kích thước hiện tại")
    estimated_shipping_size: Optional[ShippingSize] = Field(None, description="Kích thước ước tính khi tạo đơn")
    confirmed_shipping_size: Optional[ShippingSize] = Field(None, description="Kích thước seller xác nhận")

    @validator('order_id')
    def validate_order_id(cls, v):
        if not v or len(v.strip()) == 0:
            raise ValueError("Mã đơn hàng không được rỗng")
        return v.strip()

    @validator('estimated_shipping_size', always=True)
    def estimate_from_items(cls, v, values):
        """Chưa có ước tính thì lấy kích thước lớn nhất trong items"""
        items = values.get('items') or []
        if v is not None or not items:
            return v
        return max((item.shipping_size for item in items), key=SHIPPING_SIZES.index)

    def get_effective_shipping_size(self) -> ShippingSize:
        """Kích thước hiệu lực, fallback về small"""
        return (
            self.confirmed_shipping_size
            or self.estimated_shipping_size
            or self.shipping_size
            or ShippingSize.SMALL
        )


class CapacityCheckRequest(BaseModel):
    """Request kiểm tra xe có chở được đơn không"""
    vehicle_type: VehicleType = Field(..., description="Loại xe của courier")
    items: List[OrderItem] = Field(default_factory=list, description="Các dòng hàng")


class CapacityCheckResponse(BaseModel):
    """Kết quả kiểm tra capacity"""
    vehicle_type: VehicleType
    can_carry: bool = Field(..., description="Xe có chở được toàn bộ đơn không")
    demand: Dict[ShippingSize, int] = Field(..., description="Tổng số lượng theo kích thước")
    largest_shipping_size: ShippingSize = Field(..., description="Kích thước lớn nhất trong đơn")


class AvailableOrdersRequest(BaseModel):
    """Request sắp xếp đơn cho courier"""
    vehicle_type: Optional[VehicleType] = Field(None, description="Loại xe của courier")
    orders: List[AvailableOrder] = Field(default_factory=list, description="Danh sách đơn chờ")
    limit: Optional[int] = Field(None, ge=1, le=500, description="Số đơn tối đa")


class AvailableOrderView(BaseModel):
    """Đơn hàng sau khi sắp xếp, kèm thông tin tương thích"""
    order_id: str
    delivery_deadline: Optional[datetime] = None
    effective_shipping_size: ShippingSize
    is_compatible: Optional[bool] = Field(None, description="Xe chở được kích thước này (None nếu không có xe)")


class AvailableOrdersResponse(BaseModel):
    """Danh sách đơn đã sắp xếp"""
    vehicle_type: Optional[VehicleType] = None
    orders: List[AvailableOrderView] = Field(default_factory=list)
