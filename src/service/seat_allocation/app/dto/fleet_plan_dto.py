"""Fleet plan DTOs"""

import attrs

from src.service.seat_allocation.domain.value_object import FleetEntry, VehicleUnit


@attrs.define
class FleetPlan:
    """Vehicles chosen for a passenger count"""

    total_seats: int
    entries: list[FleetEntry]
    units: list[VehicleUnit]
    total_capacity: int
