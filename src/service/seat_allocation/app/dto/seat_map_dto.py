"""Seat map DTOs"""

import attrs

from src.service.seat_allocation.domain.layout_generator import SeatRows
from src.service.seat_allocation.domain.value_object import SeatStats


@attrs.define
class SeatMapView:
    """Rendered seat map of one vehicle unit"""

    vehicle_type: str
    rows: SeatRows
    stats: SeatStats

    @property
    def seat_count(self) -> int:
        return sum(1 for row in self.rows for cell in row if cell.is_seat)
