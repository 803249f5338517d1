"""Seat Allocation Enums"""

from src.service.seat_allocation.domain.enum.operating_mode import OperatingMode
from src.service.seat_allocation.domain.enum.seat_kind import SeatKind
from src.service.seat_allocation.domain.enum.selection_phase import SelectionPhase
from src.service.seat_allocation.domain.enum.vehicle_type import VehicleType

__all__ = ['OperatingMode', 'SeatKind', 'SelectionPhase', 'VehicleType']
