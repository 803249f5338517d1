"""Seat Allocation Value Objects"""

from src.service.seat_allocation.domain.value_object.seat_booking import SeatBooking, SeatKey
from src.service.seat_allocation.domain.value_object.seat_cell import SeatCell
from src.service.seat_allocation.domain.value_object.seat_stats import SeatStats
from src.service.seat_allocation.domain.value_object.vehicle_unit import FleetEntry, VehicleUnit

__all__ = ['FleetEntry', 'SeatBooking', 'SeatCell', 'SeatKey', 'SeatStats', 'VehicleUnit']
