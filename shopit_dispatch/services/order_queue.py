"""Sắp xếp đơn hàng chờ giao cho courier theo loại xe"""

from datetime import datetime, timezone
from typing import List, Optional, Union
import logging

from ..config import settings
from ..schemas.common import VehicleType, SHIPPING_SIZES
from ..schemas.orders import AvailableOrder, AvailableOrderView
from .capacity import coerce_vehicle_type, get_compatible_shipping_sizes

logger = logging.getLogger(__name__)

_FAR_FUTURE = datetime.max.replace(tzinfo=timezone.utc)


def _as_sort_time(value: Optional[datetime]) -> datetime:
    """Đơn không có thời gian xếp cuối; datetime naive coi như UTC"""
    if value is None:
        return _FAR_FUTURE
    if value.tzinfo is None:
        return value.replace(tzinfo=timezone.utc)
    return value


def sort_orders_for_vehicle(orders: List[AvailableOrder],
                            vehicle_type: Optional[Union[VehicleType, str]] = None,
                            limit: Optional[int] = None) -> List[AvailableOrder]:
    """
    Sắp xếp đơn chờ giao cho courier

    Thứ tự ưu tiên:
    1. Hạn giao hàng (gấp nhất trước)
    2. Đơn mà xe chở được
    3. Kích thước nhỏ trước

    Args:
        orders: Danh sách đơn chờ
        vehicle_type: Loại xe của courier (None = chỉ sắp theo deadline)
        limit: Số đơn tối đa, mặc định settings.available_orders_limit

    Returns:
        Danh sách đơn đã sắp xếp
    """
    if limit is None:
        limit = settings.available_orders_limit

    # Deadline rồi tới thời điểm tạo đơn, giống truy vấn ban đầu
    base = sorted(
        orders,
        key=lambda o: (_as_sort_time(o.delivery_deadline), _as_sort_time(o.created_at))
    )[:limit]

    if vehicle_type is None:
        return base

    vehicle = coerce_vehicle_type(vehicle_type)
    compatible_sizes = set(get_compatible_shipping_sizes(vehicle))

    def sort_key(order: AvailableOrder):
        size = order.get_effective_shipping_size()
        can_carry = size in compatible_sizes
        return (
            _as_sort_time(order.delivery_deadline),
            0 if can_carry else 1,
            SHIPPING_SIZES.index(size),
        )

    result = sorted(base, key=sort_key)
    logger.debug(f"Sorted {len(result)} orders for vehicle {vehicle.value}")
    return result


def build_order_views(orders: List[AvailableOrder],
                      vehicle_type: Optional[Union[VehicleType, str]] = None) -> List[AvailableOrderView]:
    """Tạo view cho response, kèm cờ tương thích với xe"""
    compatible_sizes = None
    if vehicle_type is not None:
        compatible_sizes = set(get_compatible_shipping_sizes(vehicle_type))

    views = []
    for order in orders:
        size = order.get_effective_shipping_size()
        views.append(AvailableOrderView(
            order_id=order.order_id,
            delivery_deadline=order.delivery_deadline,
            effective_shipping_size=size,
            is_compatible=None if compatible_sizes is None else size in compatible_sizes
        ))
    return views
