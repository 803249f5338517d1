"""Seat cell value object."""

from typing import Optional

import attrs

from src.service.seat_allocation.domain.enum import SeatKind


@attrs.define(frozen=True)
class SeatCell:
    """
    One rendered position in a vehicle (Value Object).

    Numeric seats carry a string-encoded sequential id ('1', '2', ...),
    structural cells carry a fixed id ('driver', 'guide', 'wc', 'door-mid',
    'aisle-N'). Only seats can hold a booking.
    """

    id: str
    kind: SeatKind
    label: str = ''
    booking: Optional[str] = None  # passenger name

    @property
    def is_seat(self) -> bool:
        return self.kind == SeatKind.SEAT

    @property
    def is_booked(self) -> bool:
        return self.is_seat and self.booking is not None

    def with_booking(self, passenger_name: Optional[str]) -> 'SeatCell':
        if not self.is_seat:
            return self
        return attrs.evolve(self, booking=passenger_name)
