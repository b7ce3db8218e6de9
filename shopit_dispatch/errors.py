"""Domain errors cho vehicle capacity và dispatch"""

from typing import Any


class DispatchError(Exception):
    """Base error của ShopIt Dispatch"""


class InvalidCategoryError(DispatchError, ValueError):
    """Giá trị vehicle type hoặc shipping size nằm ngoài enum"""

    def __init__(self, kind: str, value: Any):
        self.kind = kind
        self.value = value
        super().__init__(f"Invalid {kind}: {value!r}")


class NegativeQuantityError(DispatchError, ValueError):
    """Số lượng item âm"""

    def __init__(self, shipping_size: Any, qty: int):
        self.shipping_size = shipping_size
        self.qty = qty
        size_label = getattr(shipping_size, "value", shipping_size)
        super().__init__(f"Quantity must be non-negative, got {qty} for size {size_label}")


class CapacityConfigError(DispatchError, RuntimeError):
    """Bảng capacity bị cấu hình sai"""
