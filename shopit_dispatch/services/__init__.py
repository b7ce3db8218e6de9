"""Services cho business logic"""

from .capacity import (
    VEHICLE_CAPACITIES, MINIMUM_VEHICLE_FOR_SIZE,
    can_vehicle_handle_order, aggregate_demand,
    get_minimum_vehicle_for_size, get_compatible_vehicles,
)
from .order_queue import sort_orders_for_vehicle
from .delivery_fee import DeliveryFeeService, calculate_fee

__all__ = [
    "VEHICLE_CAPACITIES", "MINIMUM_VEHICLE_FOR_SIZE",
    "can_vehicle_handle_order", "aggregate_demand",
    "get_minimum_vehicle_for_size", "get_compatible_vehicles",
    "sort_orders_for_vehicle",
    "DeliveryFeeService", "calculate_fee",
]
