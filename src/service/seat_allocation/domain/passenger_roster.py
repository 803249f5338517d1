"""Passenger roster lookups for the seat assignment view."""

from typing import Iterable, Optional

import attrs

from src.service.seat_allocation.domain.booking_store import BookingStore


@attrs.define(frozen=True)
class RosterEntry:
    passenger_name: str
    assigned_seat: Optional[str] = None

    @property
    def is_assigned(self) -> bool:
        return self.assigned_seat is not None


def build_roster(
    passenger_names: Iterable[str], store: BookingStore, *, bus_index: int, query: str = ''
) -> list[RosterEntry]:
    """
    Passengers of the trip matching a search query, with their seat on the active unit.

    Matching is a case-insensitive substring test; an empty query matches everyone.
    """
    needle = query.strip().lower()
    return [
        RosterEntry(passenger_name=name, assigned_seat=store.seat_of(bus_index, name))
        for name in passenger_names
        if needle in name.lower()
    ]
