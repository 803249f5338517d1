"""
Fleet Packer

Turns a requested passenger count into the vehicles that carry it.

Greedy with fixed thresholds: as many 48-seat buses as fit, then one more
vehicle sized by the remainder (bus-48 above 28, minibus-28 above 14, else
van-14). Over-provisioning is accepted, e.g. 30 seats -> one bus-48.
"""

import math
import re
from typing import Any, Iterable, Optional

from src.platform.logging.loguru_io import Logger
from src.service.seat_allocation.domain.enum import VehicleType
from src.service.seat_allocation.domain.layout_generator import LayoutGenerator
from src.service.seat_allocation.domain.value_object import FleetEntry, VehicleUnit


BUS_CAPACITY = 48
MINIBUS_CAPACITY = 28
VAN_CAPACITY = 14

_LEADING_INT = re.compile(r'^[+-]?\d+')

# Longer digit runs are clamped instead of parsed
_MAX_DIGITS = 18
SEAT_COUNT_CEILING = 10**_MAX_DIGITS


class FleetPacker:
    @staticmethod
    def coerce_seat_count(value: Any) -> int:
        """
        Normalize a requested seat count.

        Negative, NaN, non-numeric and missing values become 0. Strings are
        read by their leading integer ('30 seats' -> 30) and clamped to
        SEAT_COUNT_CEILING when longer than any real count. Floats are floored.
        """
        if value is None or isinstance(value, bool):
            return 0
        if isinstance(value, int):
            count = value
        elif isinstance(value, float):
            count = math.floor(value) if math.isfinite(value) else 0
        elif isinstance(value, str):
            match = _LEADING_INT.match(value.strip())
            if match is None:
                return 0
            digits = match.group()
            if len(digits.lstrip('+-')) > _MAX_DIGITS:
                count = 0 if digits.startswith('-') else SEAT_COUNT_CEILING
            else:
                count = int(digits)
        else:
            return 0
        return max(count, 0)

    @Logger.io
    def pack(self, total_seats: Any) -> list[FleetEntry]:
        """
        Pack a passenger count into vehicle units.

        Examples:
            0  -> []
            48 -> [bus-48 x1]
            50 -> [bus-48 x1, van-14 x1]
            70 -> [bus-48 x1, minibus-28 x1]
            96 -> [bus-48 x2]
        """
        total = self.coerce_seat_count(total_seats)
        entries: list[FleetEntry] = []

        big_buses = total // BUS_CAPACITY
        if big_buses > 0:
            entries.append(FleetEntry(type=VehicleType.BUS_48, capacity=BUS_CAPACITY, count=big_buses))
            remaining = total % BUS_CAPACITY
        else:
            remaining = total

        if remaining > 0:
            if remaining > MINIBUS_CAPACITY:
                entries.append(FleetEntry(type=VehicleType.BUS_48, capacity=BUS_CAPACITY, count=1))
            elif remaining > VAN_CAPACITY:
                entries.append(
                    FleetEntry(type=VehicleType.MINIBUS_28, capacity=MINIBUS_CAPACITY, count=1)
                )
            else:
                entries.append(FleetEntry(type=VehicleType.VAN_14, capacity=VAN_CAPACITY, count=1))

        Logger.base.info(
            f'[FLEET] Packed {total} seats into {sum(e.count for e in entries)} vehicles'
        )
        return entries

    @staticmethod
    def total_capacity(entries: Iterable[FleetEntry]) -> int:
        return sum(entry.capacity * entry.unit_count for entry in entries)

    @staticmethod
    def flatten(
        entries: Iterable[FleetEntry], *, fallback_type: Optional[str] = None
    ) -> list[VehicleUnit]:
        """
        Expand fleet entries into one VehicleUnit per physical vehicle.

        An empty fleet yields a single unit of fallback_type (bus-48 when not
        given), so a trip without a fleet definition still has a seat map.
        """
        units: list[VehicleUnit] = []
        for entry in entries:
            for _ in range(entry.unit_count):
                units.append(
                    VehicleUnit(
                        type=entry.type,
                        capacity=entry.capacity,
                        count=entry.count,
                        unit_index=len(units),
                    )
                )

        if not units:
            vehicle_type = fallback_type or VehicleType.BUS_48
            units.append(
                VehicleUnit(
                    type=vehicle_type,
                    capacity=LayoutGenerator.capacity_of(vehicle_type),
                    count=1,
                    unit_index=0,
                )
            )
        return units
