"""Vehicle Type Enum"""

from enum import StrEnum
from typing import Optional


class VehicleType(StrEnum):
    """Vehicle geometries a seat map can be rendered for"""

    BUS_48 = 'bus-48'
    BUS_50 = 'bus-50'
    MINIBUS_28 = 'minibus-28'
    VAN_14 = 'van-14'

    @classmethod
    def parse(cls, value: object) -> Optional['VehicleType']:
        """Known vehicle type for a raw value, None for anything else"""
        try:
            return cls(str(value).strip().lower())
        except ValueError:
            return None
