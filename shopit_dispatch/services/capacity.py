"""Vehicle capacity - kiểm tra xe của courier có chở được đơn hàng không"""

from types import MappingProxyType
from typing import Any, Dict, Iterable, List, Mapping, Tuple, Union
import logging

from ..errors import InvalidCategoryError, NegativeQuantityError, CapacityConfigError
from ..schemas.common import VehicleType, ShippingSize, VEHICLE_TYPES, SHIPPING_SIZES
from ..schemas.orders import OrderItem

logger = logging.getLogger(__name__)

UNLIMITED = -1

# Số item tối đa mỗi kích thước mà 1 loại xe chở được (-1 = không giới hạn)
VEHICLE_CAPACITIES: Mapping[VehicleType, Mapping[ShippingSize, int]] = MappingProxyType({
    VehicleType.WALKING: MappingProxyType({
        ShippingSize.SMALL: 5,
        ShippingSize.MEDIUM: 0,
        ShippingSize.LARGE: 0,
        ShippingSize.EXTRA_LARGE: 0,
    }),
    VehicleType.BICYCLE: MappingProxyType({
        ShippingSize.SMALL: 5,
        ShippingSize.MEDIUM: 0,
        ShippingSize.LARGE: 0,
        ShippingSize.EXTRA_LARGE: 0,
    }),
    VehicleType.MOTORCYCLE: MappingProxyType({
        ShippingSize.SMALL: 5,
        ShippingSize.MEDIUM: 0,
        ShippingSize.LARGE: 0,
        ShippingSize.EXTRA_LARGE: 0,
    }),
    VehicleType.CAR: MappingProxyType({
        ShippingSize.SMALL: UNLIMITED,
        ShippingSize.MEDIUM: 3,
        ShippingSize.LARGE: 0,
        ShippingSize.EXTRA_LARGE: 0,
    }),
    VehicleType.SUV: MappingProxyType({
        ShippingSize.SMALL: UNLIMITED,
        ShippingSize.MEDIUM: UNLIMITED,
        ShippingSize.LARGE: 2,
        ShippingSize.EXTRA_LARGE: 0,
    }),
    VehicleType.VAN: MappingProxyType({
        ShippingSize.SMALL: UNLIMITED,
        ShippingSize.MEDIUM: UNLIMITED,
        ShippingSize.LARGE: UNLIMITED,
        ShippingSize.EXTRA_LARGE: 2,
    }),
})

# Xe nhỏ nhất chở được 1 item của mỗi kích thước.
# Giữ riêng với VEHICLE_CAPACITIES; validate_capacity_tables() kiểm tra 2 bảng khớp nhau.
MINIMUM_VEHICLE_FOR_SIZE: Mapping[ShippingSize, VehicleType] = MappingProxyType({
    ShippingSize.SMALL: VehicleType.WALKING,
    ShippingSize.MEDIUM: VehicleType.CAR,
    ShippingSize.LARGE: VehicleType.SUV,
    ShippingSize.EXTRA_LARGE: VehicleType.VAN,
})

VEHICLE_EMOJIS: Mapping[VehicleType, str] = MappingProxyType({
    VehicleType.WALKING: "🚶",
    VehicleType.BICYCLE: "🚲",
    VehicleType.MOTORCYCLE: "🏍️",
    VehicleType.CAR: "🚗",
    VehicleType.SUV: "🚙",
    VehicleType.VAN: "🚐",
})

ItemLike = Union[OrderItem, Mapping[str, Any], Tuple[Any, int]]


def coerce_vehicle_type(value: Union[VehicleType, str]) -> VehicleType:
    """Chuyển value thành VehicleType, raise InvalidCategoryError nếu không hợp lệ"""
    if isinstance(value, VehicleType):
        return value
    try:
        return VehicleType(value)
    except ValueError:
        raise InvalidCategoryError("vehicle type", value) from None


def coerce_shipping_size(value: Union[ShippingSize, str]) -> ShippingSize:
    """Chuyển value thành ShippingSize, raise InvalidCategoryError nếu không hợp lệ"""
    if isinstance(value, ShippingSize):
        return value
    try:
        return ShippingSize(value)
    except ValueError:
        raise InvalidCategoryError("shipping size", value) from None


def is_valid_vehicle_type(value: Any) -> bool:
    """Kiểm tra value có phải vehicle type hợp lệ không"""
    try:
        coerce_vehicle_type(value)
    except InvalidCategoryError:
        return False
    return True


def get_capacity_limit(vehicle_type: Union[VehicleType, str], shipping_size: Union[ShippingSize, str]) -> int:
    """Giới hạn số item của size trên xe (-1 = không giới hạn, 0 = không chở được)"""
    return VEHICLE_CAPACITIES[coerce_vehicle_type(vehicle_type)][coerce_shipping_size(shipping_size)]


def get_minimum_vehicle_for_size(shipping_size: Union[ShippingSize, str]) -> VehicleType:
    """Xe nhỏ nhất chở được 1 item của size này"""
    return MINIMUM_VEHICLE_FOR_SIZE[coerce_shipping_size(shipping_size)]


def get_compatible_vehicles(shipping_size: Union[ShippingSize, str]) -> List[VehicleType]:
    """Tất cả loại xe từ xe tối thiểu trở lên, theo thứ tự tăng dần"""
    min_index = VEHICLE_TYPES.index(get_minimum_vehicle_for_size(shipping_size))
    return list(VEHICLE_TYPES[min_index:])


def get_compatible_shipping_sizes(vehicle_type: Union[VehicleType, str]) -> List[ShippingSize]:
    """Các size mà xe chở được ít nhất 1 item (capacity -1 hoặc > 0)"""
    capacity = VEHICLE_CAPACITIES[coerce_vehicle_type(vehicle_type)]
    return [size for size in SHIPPING_SIZES if capacity[size] != 0]


def get_vehicle_emoji(vehicle_type: Union[VehicleType, str]) -> str:
    return VEHICLE_EMOJIS[coerce_vehicle_type(vehicle_type)]


def _unpack_item(item: ItemLike) -> Tuple[ShippingSize, int]:
    """Lấy (size, qty) từ OrderItem, dict hoặc tuple"""
    if isinstance(item, OrderItem):
        size, qty = item.shipping_size, item.qty
    elif isinstance(item, Mapping):
        size = item.get("shipping_size", item.get("shippingSize"))
        qty = item.get("qty")
    elif isinstance(item, (tuple, list)) and len(item) == 2:
        size, qty = item
    else:
        raise TypeError(f"Order item must be an OrderItem, a mapping or a (size, qty) pair, got {item!r}")

    size = coerce_shipping_size(size)
    if isinstance(qty, bool) or not isinstance(qty, int):
        raise TypeError(f"Quantity must be an integer, got {qty!r}")
    if qty < 0:
        raise NegativeQuantityError(size, qty)
    return size, qty


def aggregate_demand(items: Iterable[ItemLike]) -> Dict[ShippingSize, int]:
    """
    Cộng dồn số lượng theo size

    Args:
        items: Các dòng hàng (OrderItem, dict có shipping_size/qty, hoặc tuple (size, qty))

    Returns:
        Dict đủ 4 size, size không có trong đơn = 0
    """
    demand = {size: 0 for size in SHIPPING_SIZES}
    for item in items:
        size, qty = _unpack_item(item)
        demand[size] += qty
    return demand


def can_vehicle_handle_order(vehicle_type: Union[VehicleType, str], items: Iterable[ItemLike]) -> bool:
    """
    Kiểm tra xe có chở được toàn bộ đơn hàng không

    Args:
        vehicle_type: Loại xe của courier
        items: Các dòng hàng của đơn

    Returns:
        True nếu không size nào vượt giới hạn (đơn rỗng luôn True)
    """
    capacity = VEHICLE_CAPACITIES[coerce_vehicle_type(vehicle_type)]
    demand = aggregate_demand(items)

    for size in SHIPPING_SIZES:
        max_capacity = capacity[size]
        required = demand[size]

        if max_capacity == 0 and required > 0:
            # Xe không chở được size này
            return False

        if max_capacity > 0 and required > max_capacity:
            return False

    return True


def get_largest_shipping_size(items: Iterable[ItemLike]) -> ShippingSize:
    """Size lớn nhất có trong đơn, đơn rỗng = small"""
    max_index = 0
    for item in items:
        size, _ = _unpack_item(item)
        max_index = max(max_index, SHIPPING_SIZES.index(size))
    return SHIPPING_SIZES[max_index]


def validate_capacity_tables() -> None:
    """
    Kiểm tra bảng capacity đủ 24 ô, giá trị hợp lệ và khớp với MINIMUM_VEHICLE_FOR_SIZE

    Raises:
        CapacityConfigError: nếu bảng bị cấu hình sai
    """
    for vehicle in VEHICLE_TYPES:
        row = VEHICLE_CAPACITIES.get(vehicle)
        if row is None:
            raise CapacityConfigError(f"Missing capacity row for {vehicle.value}")
        for size in SHIPPING_SIZES:
            limit = row.get(size)
            if limit is None:
                raise CapacityConfigError(f"Missing capacity for {vehicle.value}/{size.value}")
            if isinstance(limit, bool) or not isinstance(limit, int) or limit < UNLIMITED:
                raise CapacityConfigError(f"Invalid capacity {limit!r} for {vehicle.value}/{size.value}")

    for size in SHIPPING_SIZES:
        vehicle = MINIMUM_VEHICLE_FOR_SIZE.get(size)
        if vehicle is None:
            raise CapacityConfigError(f"Missing minimum vehicle for {size.value}")
        if VEHICLE_CAPACITIES[vehicle][size] == 0:
            raise CapacityConfigError(
                f"Minimum vehicle {vehicle.value} cannot carry {size.value}"
            )

    logger.debug("Capacity tables validated")


validate_capacity_tables()
