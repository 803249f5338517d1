"""Validation of the seat count a trip offers."""

from typing import Any

from src.platform.exception.exceptions import DomainError
from src.service.seat_allocation.domain.fleet_packer import FleetPacker


def validate_seat_count(value: Any, *, min_booked: int = 0) -> int:
    """
    Return the seat count, or raise when it cannot hold the trip.

    The count must be greater than zero and never lower than the seats
    already booked.
    """
    count = FleetPacker.coerce_seat_count(value)
    if count <= 0:
        raise DomainError('Seat count must be greater than zero')
    if count < min_booked:
        raise DomainError(f'Seat count cannot be lower than the booked seats ({min_booked})')
    return count


def validate_fleet_size(value: Any, *, max_seats: int) -> int:
    """Return the seat count to plan a fleet for, refusing counts above max_seats"""
    count = FleetPacker.coerce_seat_count(value)
    if count > max_seats:
        raise DomainError(f'Seat count cannot exceed {max_seats} for one trip')
    return count
