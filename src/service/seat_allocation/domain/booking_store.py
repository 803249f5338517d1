"""
Booking Store

The trip's seat bookings across all vehicle units.

Every operation is a pure transformation returning a new store. Mutations are
scoped to one bus_index and never drop or reorder the bookings of any other
unit. After any operation there is at most one booking per
(bus_index, seat_number).
"""

from typing import Any, Iterable, Iterator, Mapping, Optional, Union

import attrs

from src.platform.exception.exceptions import DomainError
from src.platform.logging.loguru_io import Logger
from src.service.seat_allocation.domain.value_object import SeatBooking, SeatKey


BookingRecord = Union[SeatBooking, Mapping[str, Any]]


def _dedupe(bookings: Iterable[SeatBooking]) -> tuple[SeatBooking, ...]:
    """Last write wins, kept at the position of the first occurrence"""
    records: list[SeatBooking] = []
    positions: dict[tuple[int, str], int] = {}
    for booking in bookings:
        idx = positions.get(booking.key)
        if idx is None:
            positions[booking.key] = len(records)
            records.append(booking)
        else:
            records[idx] = booking
    return tuple(records)


@attrs.define(frozen=True)
class BookingStore:
    bookings: tuple[SeatBooking, ...] = attrs.field(default=(), converter=_dedupe)

    @classmethod
    def from_records(
        cls, records: Iterable[BookingRecord], *, bus_index: Optional[int] = None
    ) -> 'BookingStore':
        """
        Build a store from stored records.

        When bus_index is given every record is tagged with it, for booking
        lists already scoped to one unit.
        """
        bookings = []
        for record in records:
            booking = record if isinstance(record, SeatBooking) else SeatBooking.from_dict(record)
            if bus_index is not None and booking.bus_index != bus_index:
                booking = attrs.evolve(booking, bus_index=bus_index)
            bookings.append(booking)
        return cls(tuple(bookings))

    def __iter__(self) -> Iterator[SeatBooking]:
        return iter(self.bookings)

    def __len__(self) -> int:
        return len(self.bookings)

    # ========== Queries ==========

    def for_unit(self, bus_index: int) -> list[SeatBooking]:
        return [booking for booking in self.bookings if booking.bus_index == bus_index]

    def names_for_unit(self, bus_index: int) -> dict[str, str]:
        """seat_number -> passenger_name for one unit"""
        return {b.seat_number: b.passenger_name for b in self.for_unit(bus_index)}

    def passenger_at(self, bus_index: int, seat_number: str) -> Optional[str]:
        for booking in self.bookings:
            if booking.key == (bus_index, str(seat_number)):
                return booking.passenger_name
        return None

    def is_booked(self, bus_index: int, seat_number: str) -> bool:
        return self.passenger_at(bus_index, seat_number) is not None

    def seat_of(self, bus_index: int, passenger_name: str) -> Optional[str]:
        """First seat held by a passenger in a unit"""
        for booking in self.for_unit(bus_index):
            if booking.passenger_name == passenger_name:
                return booking.seat_number
        return None

    def find_conflicts(self, seat_keys: Iterable[str]) -> list[str]:
        """Requested seat keys that are already booked"""
        taken = {booking.key for booking in self.bookings}
        conflicts = []
        for raw in seat_keys:
            seat_key = SeatKey.parse(raw)
            if (seat_key.bus_index, seat_key.seat_number) in taken:
                conflicts.append(raw)
        return conflicts

    # ========== Unit-scoped mutations ==========

    @Logger.io(truncate_content=True)
    def upsert_many(
        self, bus_index: int, seat_ids: Iterable[str], passenger_name: str
    ) -> 'BookingStore':
        """Book every seat to passenger_name, replacing any previous occupant in place"""
        name = self._require_name(passenger_name)
        records = list(self.bookings)
        positions = {booking.key: idx for idx, booking in enumerate(records)}

        for seat_id in seat_ids:
            booking = SeatBooking(seat_number=str(seat_id), passenger_name=name, bus_index=bus_index)
            idx = positions.get(booking.key)
            if idx is None:
                positions[booking.key] = len(records)
                records.append(booking)
            else:
                records[idx] = booking

        return BookingStore(tuple(records))

    def upsert_one(self, bus_index: int, seat_id: str, passenger_name: str) -> 'BookingStore':
        """Single seat assignment, last write wins"""
        return self.upsert_many(bus_index, [seat_id], passenger_name)

    @Logger.io(truncate_content=True)
    def clear_many(self, bus_index: int, seat_ids: Iterable[str]) -> 'BookingStore':
        cleared = {(bus_index, str(seat_id)) for seat_id in seat_ids}
        return BookingStore(tuple(b for b in self.bookings if b.key not in cleared))

    @Logger.io(truncate_content=True)
    def save(self, bus_index: int, unit_bookings: Iterable[BookingRecord]) -> 'BookingStore':
        """
        Replace one unit's bookings.

        The other units' bookings keep their relative order and come first,
        followed by the new unit bookings re-tagged with bus_index.
        """
        others = [booking for booking in self.bookings if booking.bus_index != bus_index]
        replaced = BookingStore.from_records(unit_bookings, bus_index=bus_index)
        return BookingStore(tuple(others) + replaced.bookings)

    # ========== Reservation-driven mutations ==========

    @Logger.io(truncate_content=True)
    def apply_selected_seats(
        self,
        seat_keys: Iterable[str],
        *,
        passenger_name: str,
        user_id: Optional[str] = None,
        booking_id: Optional[str] = None,
    ) -> 'BookingStore':
        """
        Book the seats chosen in an accepted reservation.

        Keys use the '<busIndex>-<seatNumber>' form (bare seat numbers mean
        unit 0). Seats that are already booked are skipped.
        """
        name = self._require_name(passenger_name)
        records = list(self.bookings)
        taken = {booking.key for booking in records}

        for raw in seat_keys:
            seat_key = SeatKey.parse(raw)
            key = (seat_key.bus_index, seat_key.seat_number)
            if key in taken:
                Logger.base.info(f'[BOOKING-STORE] Seat {seat_key.key} already booked, skipped')
                continue
            taken.add(key)
            records.append(
                SeatBooking(
                    seat_number=seat_key.seat_number,
                    passenger_name=name,
                    bus_index=seat_key.bus_index,
                    user_id=user_id,
                    booking_id=booking_id,
                )
            )

        return BookingStore(tuple(records))

    @Logger.io(truncate_content=True)
    def release_booking(self, booking_id: str) -> 'BookingStore':
        """Free every seat held by a cancelled or rejected reservation"""
        return BookingStore(tuple(b for b in self.bookings if b.booking_id != str(booking_id)))

    @staticmethod
    def _require_name(passenger_name: str) -> str:
        name = (passenger_name or '').strip()
        if not name:
            raise DomainError('Passenger name is required to book a seat')
        return name
