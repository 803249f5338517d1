"""Fleet value objects."""

import attrs


@attrs.define(frozen=True)
class FleetEntry:
    """A group of identical vehicles as packed or declared for a trip"""

    type: str
    capacity: int
    count: int = 1

    @property
    def unit_count(self) -> int:
        # Declared entries without a usable count still stand for one vehicle
        return self.count if self.count and self.count > 0 else 1


@attrs.define(frozen=True)
class VehicleUnit:
    """
    One physical vehicle in a trip's flattened fleet.

    unit_index is the busIndex that tags this vehicle's seat bookings.
    """

    type: str
    capacity: int
    count: int
    unit_index: int
