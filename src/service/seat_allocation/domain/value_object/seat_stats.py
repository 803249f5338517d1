"""Seat statistics value object."""

import attrs


@attrs.define(frozen=True)
class SeatStats:
    """Occupancy of one vehicle unit"""

    total: int
    booked: int
    available: int

    @classmethod
    def compute(cls, *, capacity: int, booked: int) -> 'SeatStats':
        return cls(total=capacity, booked=booked, available=max(capacity - booked, 0))
