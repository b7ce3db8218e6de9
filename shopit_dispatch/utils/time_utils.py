"""Time utilities cho ước tính thời gian giao hàng"""

import math
from typing import Dict


class TimeUtils:
    """Helper functions cho time calculations"""

    WORKING_MINUTES_PER_DAY = 8 * 60

    @staticmethod
    def seconds_to_minutes_ceil(seconds: float) -> int:
        """Đổi giây sang phút, làm tròn lên"""
        if seconds <= 0:
            return 0
        return math.ceil(seconds / 60)

    @staticmethod
    def meters_to_km(meters: float) -> float:
        """Đổi mét sang km, làm tròn 1 chữ số"""
        # Làm tròn half-up
        return math.floor((meters / 1000) * 10 + 0.5) / 10

    @staticmethod
    def driving_minutes_to_days(duration_minutes: int) -> int:
        """Số ngày giao hàng (8 giờ lái/ngày, làm tròn lên)"""
        if duration_minutes <= 0:
            return 0
        return math.ceil(duration_minutes / TimeUtils.WORKING_MINUTES_PER_DAY)

    @staticmethod
    def get_delivery_time_estimate(duration_minutes: int,
                                   prep_time_min_days: int,
                                   prep_time_max_days: int) -> Dict[str, int]:
        """Khoảng ngày giao hàng = thời gian chuẩn bị + thời gian lái xe"""
        delivery_days = TimeUtils.driving_minutes_to_days(duration_minutes)
        return {
            "min_days": prep_time_min_days + delivery_days,
            "max_days": prep_time_max_days + delivery_days,
        }
