"""
Assignment Protocol

Two-phase drag/confirm assignment of a named passenger to one seat:
pick up a passenger token, drop it on a seat, then confirm or cancel.
Nothing is written before confirmation. Independent of the selection state.
"""

from typing import Optional

import attrs

from src.platform.logging.loguru_io import Logger
from src.service.seat_allocation.domain.booking_store import BookingStore


@attrs.define(frozen=True)
class AssignmentState:
    held_passenger: Optional[str] = None
    target_seat_id: Optional[str] = None

    @property
    def awaiting_confirmation(self) -> bool:
        return self.held_passenger is not None and self.target_seat_id is not None


@attrs.define(frozen=True)
class AssignmentOutcome:
    state: AssignmentState
    store: BookingStore
    assigned: Optional[tuple[str, str]] = None  # (seat_id, passenger_name)


class AssignmentProtocol:
    def pick_up(self, state: AssignmentState, passenger_name: str) -> AssignmentState:
        name = (passenger_name or '').strip()
        if not name:
            return state
        return AssignmentState(held_passenger=name)

    def drop_on_seat(
        self, state: AssignmentState, seat_id: str, payload: Optional[str] = None
    ) -> AssignmentState:
        """
        Record the drop target and wait for confirmation.

        The name carried by the drop payload wins over the picked-up one; a
        drop carrying no name at all is ignored.
        """
        name = (payload or '').strip() or state.held_passenger
        if not name:
            return state
        return AssignmentState(held_passenger=name, target_seat_id=str(seat_id))

    @Logger.io
    def confirm(
        self, state: AssignmentState, store: BookingStore, *, bus_index: int
    ) -> AssignmentOutcome:
        """Write the pending assignment, overwriting any previous occupant of the seat"""
        if not state.awaiting_confirmation:
            return AssignmentOutcome(state=state, store=store)

        seat_id = state.target_seat_id or ''
        passenger_name = state.held_passenger or ''
        previous = store.passenger_at(bus_index, seat_id)
        if previous is not None and previous != passenger_name:
            Logger.base.info(
                f'[ASSIGNMENT] Seat {seat_id} on unit {bus_index} reassigned '
                f'from {previous!r} to {passenger_name!r}'
            )

        return AssignmentOutcome(
            state=AssignmentState(),
            store=store.upsert_one(bus_index, seat_id, passenger_name),
            assigned=(seat_id, passenger_name),
        )

    def cancel(self, state: AssignmentState) -> AssignmentState:
        return AssignmentState()
