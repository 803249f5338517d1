"""Seat Allocation Application DTOs"""

from src.service.seat_allocation.app.dto.fleet_plan_dto import FleetPlan
from src.service.seat_allocation.app.dto.seat_map_dto import SeatMapView


__all__ = [
    'FleetPlan',
    'SeatMapView',
]
