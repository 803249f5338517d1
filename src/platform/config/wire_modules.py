"""
Wire Modules Configuration

Defines the modules that need dependency injection wiring.
Shared between production and test environments.
"""

from types import ModuleType

from src.service.seat_allocation.app.command import assign_seats_use_case
from src.service.seat_allocation.app.query import plan_fleet_use_case, render_seat_map_use_case


WIRE_MODULES: list[ModuleType] = [
    assign_seats_use_case,
    plan_fleet_use_case,
    render_seat_map_use_case,
]
