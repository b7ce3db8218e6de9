"""Tests cho vehicle capacity"""

import pytest

from shopit_dispatch.errors import InvalidCategoryError, NegativeQuantityError, CapacityConfigError
from shopit_dispatch.schemas.common import VehicleType, ShippingSize, VEHICLE_TYPES, SHIPPING_SIZES
from shopit_dispatch.schemas.orders import OrderItem
from shopit_dispatch.services import capacity
from shopit_dispatch.services.capacity import (
    VEHICLE_CAPACITIES,
    aggregate_demand,
    can_vehicle_handle_order,
    coerce_vehicle_type,
    get_capacity_limit,
    get_compatible_shipping_sizes,
    get_compatible_vehicles,
    get_largest_shipping_size,
    get_minimum_vehicle_for_size,
    get_vehicle_emoji,
    is_valid_vehicle_type,
    validate_capacity_tables,
)


def item(size: str, qty: int) -> dict:
    return {"shipping_size": size, "qty": qty}


class TestCapacityTable:

    def test_every_cell_defined(self):
        for vehicle in VEHICLE_TYPES:
            for size in SHIPPING_SIZES:
                limit = VEHICLE_CAPACITIES[vehicle][size]
                assert isinstance(limit, int)
                assert limit >= -1

    def test_capacity_never_decreases_with_bigger_vehicle(self):
        for smaller, bigger in zip(VEHICLE_TYPES, VEHICLE_TYPES[1:]):
            for size in SHIPPING_SIZES:
                low = VEHICLE_CAPACITIES[smaller][size]
                high = VEHICLE_CAPACITIES[bigger][size]
                assert high == -1 or (low != -1 and high >= low), (smaller, bigger, size)

    def test_table_is_read_only(self):
        with pytest.raises(TypeError):
            VEHICLE_CAPACITIES[VehicleType.CAR][ShippingSize.LARGE] = 5

    def test_get_capacity_limit_accepts_strings(self):
        assert get_capacity_limit("car", "medium") == 3
        assert get_capacity_limit(VehicleType.VAN, ShippingSize.LARGE) == -1

    def test_tables_are_consistent(self):
        validate_capacity_tables()

    def test_inconsistent_minimum_vehicle_detected(self, monkeypatch):
        monkeypatch.setattr(capacity, "MINIMUM_VEHICLE_FOR_SIZE", {
            ShippingSize.SMALL: VehicleType.WALKING,
            ShippingSize.MEDIUM: VehicleType.MOTORCYCLE,
            ShippingSize.LARGE: VehicleType.SUV,
            ShippingSize.EXTRA_LARGE: VehicleType.VAN,
        })
        with pytest.raises(CapacityConfigError, match="motorcycle"):
            validate_capacity_tables()

    def test_missing_cell_detected(self, monkeypatch):
        broken = {vehicle: dict(row) for vehicle, row in VEHICLE_CAPACITIES.items()}
        del broken[VehicleType.SUV][ShippingSize.LARGE]
        monkeypatch.setattr(capacity, "VEHICLE_CAPACITIES", broken)
        with pytest.raises(CapacityConfigError, match="suv/large"):
            validate_capacity_tables()


class TestSizeClassifier:

    @pytest.mark.parametrize("size,expected", [
        ("small", VehicleType.WALKING),
        ("medium", VehicleType.CAR),
        ("large", VehicleType.SUV),
        ("extra_large", VehicleType.VAN),
    ])
    def test_minimum_vehicle(self, size, expected):
        assert get_minimum_vehicle_for_size(size) == expected

    def test_compatible_vehicles_bounds(self):
        for size in SHIPPING_SIZES:
            vehicles = get_compatible_vehicles(size)
            assert vehicles[0] == get_minimum_vehicle_for_size(size)
            assert vehicles[-1] == VehicleType.VAN

    def test_compatible_vehicles_for_medium(self):
        assert get_compatible_vehicles(ShippingSize.MEDIUM) == [
            VehicleType.CAR, VehicleType.SUV, VehicleType.VAN
        ]

    def test_compatible_vehicles_for_small_is_everything(self):
        assert get_compatible_vehicles("small") == list(VEHICLE_TYPES)

    def test_compatible_shipping_sizes(self):
        assert get_compatible_shipping_sizes("bicycle") == [ShippingSize.SMALL]
        assert get_compatible_shipping_sizes("suv") == [
            ShippingSize.SMALL, ShippingSize.MEDIUM, ShippingSize.LARGE
        ]
        assert get_compatible_shipping_sizes("van") == list(SHIPPING_SIZES)

    def test_vehicle_emoji(self):
        assert get_vehicle_emoji("van") == "🚐"
        assert get_vehicle_emoji(VehicleType.WALKING) == "🚶"


class TestAggregateDemand:

    def test_all_sizes_present(self):
        assert aggregate_demand([]) == {size: 0 for size in SHIPPING_SIZES}

    def test_duplicates_are_summed(self):
        demand = aggregate_demand([item("small", 2), item("medium", 1), item("small", 3)])
        assert demand[ShippingSize.SMALL] == 5
        assert demand[ShippingSize.MEDIUM] == 1
        assert demand[ShippingSize.LARGE] == 0

    def test_accepts_models_tuples_and_camel_case(self):
        demand = aggregate_demand([
            OrderItem(shipping_size="large", qty=1),
            ("large", 2),
            {"shippingSize": "extra_large", "qty": 1},
        ])
        assert demand[ShippingSize.LARGE] == 3
        assert demand[ShippingSize.EXTRA_LARGE] == 1

    def test_negative_quantity_rejected(self):
        with pytest.raises(NegativeQuantityError) as exc_info:
            aggregate_demand([item("small", 1), item("medium", -1)])
        assert exc_info.value.qty == -1
        assert exc_info.value.shipping_size == ShippingSize.MEDIUM

    def test_unknown_size_rejected(self):
        with pytest.raises(InvalidCategoryError) as exc_info:
            aggregate_demand([item("huge", 1)])
        assert exc_info.value.kind == "shipping size"

    def test_non_integer_quantity_rejected(self):
        with pytest.raises(TypeError):
            aggregate_demand([item("small", 1.5)])

    @pytest.mark.parametrize("bad_item", ["small", ("small",), ("small", 1, 2), 42])
    def test_malformed_item_rejected(self, bad_item):
        with pytest.raises(TypeError, match="size, qty"):
            aggregate_demand([bad_item])


class TestCanVehicleHandleOrder:

    def test_walking_small_limit(self):
        assert can_vehicle_handle_order("walking", [item("small", 5)]) is True
        assert can_vehicle_handle_order("walking", [item("small", 6)]) is False

    def test_car_unlimited_small_and_medium_at_limit(self):
        assert can_vehicle_handle_order("car", [item("small", 100), item("medium", 3)]) is True

    def test_car_cannot_carry_large(self):
        assert can_vehicle_handle_order("car", [item("large", 1)]) is False

    def test_van_extra_large_limit(self):
        assert can_vehicle_handle_order("van", [item("extra_large", 2)]) is True
        assert can_vehicle_handle_order("van", [item("extra_large", 3)]) is False

    def test_split_lines_count_against_limit(self):
        assert can_vehicle_handle_order("walking", [item("small", 3), item("small", 3)]) is False

    def test_zero_quantity_of_uncarriable_size(self):
        assert can_vehicle_handle_order("walking", [item("large", 0)]) is True

    def test_empty_order_fits_every_vehicle(self):
        for vehicle in VEHICLE_TYPES:
            assert can_vehicle_handle_order(vehicle, []) is True

    def test_same_result_on_repeat(self):
        items = [item("small", 4), item("medium", 2)]
        first = can_vehicle_handle_order("suv", items)
        assert can_vehicle_handle_order("suv", items) == first

    def test_invalid_vehicle_rejected(self):
        with pytest.raises(InvalidCategoryError) as exc_info:
            can_vehicle_handle_order("truck", [])
        assert exc_info.value.value == "truck"

    def test_negative_quantity_not_clamped(self):
        with pytest.raises(NegativeQuantityError):
            can_vehicle_handle_order("van", [item("small", -3)])


class TestHelpers:

    def test_is_valid_vehicle_type(self):
        assert is_valid_vehicle_type("motorcycle")
        assert is_valid_vehicle_type(VehicleType.SUV)
        assert not is_valid_vehicle_type("bike")
        assert not is_valid_vehicle_type(None)

    def test_coerce_vehicle_type(self):
        assert coerce_vehicle_type("van") is VehicleType.VAN

    def test_largest_shipping_size(self):
        assert get_largest_shipping_size([]) == ShippingSize.SMALL
        assert get_largest_shipping_size([item("medium", 1), item("large", 1), item("small", 9)]) == ShippingSize.LARGE
