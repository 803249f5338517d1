"""
Seat Booking Value Objects

A seat booking associates a passenger name with one seat of one vehicle unit.
(bus_index, seat_number) is the identity of a booking within a trip.
"""

from typing import Any, Mapping, Optional

import attrs

from src.platform.exception.exceptions import DomainError


@attrs.define(frozen=True)
class SeatKey:
    """Seat reference across a fleet: '<busIndex>-<seatNumber>' or bare '<seatNumber>'"""

    bus_index: int
    seat_number: str

    @property
    def key(self) -> str:
        return f'{self.bus_index}-{self.seat_number}'

    @classmethod
    def parse(cls, raw: str) -> 'SeatKey':
        """
        Parse a seat key.

        Examples:
            '2-15' -> SeatKey(2, '15')
            '15'   -> SeatKey(0, '15')
            'x-15' -> SeatKey(0, '15')
        """
        text = str(raw).strip()
        if '-' not in text:
            return cls(bus_index=0, seat_number=text)

        prefix, seat_number = text.split('-', 1)
        try:
            bus_index = int(prefix)
        except ValueError:
            bus_index = 0
        return cls(bus_index=max(bus_index, 0), seat_number=seat_number)


@attrs.define(frozen=True)
class SeatBooking:
    """Seat Booking (Value Object)"""

    seat_number: str = attrs.field(converter=str)
    passenger_name: str
    bus_index: int = 0
    user_id: Optional[str] = None
    booking_id: Optional[str] = None

    @property
    def key(self) -> tuple[int, str]:
        return (self.bus_index, self.seat_number)

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> 'SeatBooking':
        """Build from a stored record, accepting camelCase or snake_case keys"""
        seat_number = data.get('seat_number', data.get('seatNumber'))
        passenger_name = data.get('passenger_name', data.get('passengerName'))
        if seat_number is None or not passenger_name:
            raise DomainError(f'Invalid seat booking record: {dict(data)}')

        bus_index = data.get('bus_index', data.get('busIndex')) or 0
        user_id = data.get('user_id', data.get('userId'))
        booking_id = data.get('booking_id', data.get('bookingId'))
        return cls(
            seat_number=str(seat_number),
            passenger_name=str(passenger_name),
            bus_index=int(bus_index),
            user_id=str(user_id) if user_id else None,
            booking_id=str(booking_id) if booking_id else None,
        )

    def to_dict(self) -> dict[str, Any]:
        data: dict[str, Any] = {
            'seat_number': self.seat_number,
            'passenger_name': self.passenger_name,
            'bus_index': self.bus_index,
        }
        if self.user_id is not None:
            data['user_id'] = self.user_id
        if self.booking_id is not None:
            data['booking_id'] = self.booking_id
        return data
