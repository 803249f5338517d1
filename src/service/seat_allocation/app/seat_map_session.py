"""
Seat Map Session

The caller-facing view of one vehicle unit: renders its seat map, mirrors its
bookings, and drives the selection state machine and the drag/confirm
assignment protocol.

Callback contract:
    on_save_seats(unit_bookings)   after every committed booking change
                                   (naming prompt save/delete, assignment confirm)
    on_select_seats(seat_ids)      on every selection change in Passenger mode,
                                   on cap truncation and on explicit confirm
"""

from typing import Callable, Iterable, Optional

from src.platform.logging.loguru_io import Logger
from src.platform.metrics.seat_allocation_metrics import metrics
from src.service.seat_allocation.domain.assignment_protocol import (
    AssignmentProtocol,
    AssignmentState,
)
from src.service.seat_allocation.domain.booking_store import BookingRecord, BookingStore
from src.service.seat_allocation.domain.enum import OperatingMode
from src.service.seat_allocation.domain.layout_generator import LayoutGenerator, SeatRows
from src.service.seat_allocation.domain.passenger_roster import RosterEntry, build_roster
from src.service.seat_allocation.domain.selection_controller import (
    NamingPrompt,
    PromptOutcome,
    SelectionController,
    SelectionState,
)
from src.service.seat_allocation.domain.value_object import SeatBooking, SeatStats


SaveSeatsCallback = Callable[[list[SeatBooking]], None]
SelectSeatsCallback = Callable[[list[str]], None]


class SeatMapSession:
    def __init__(
        self,
        *,
        vehicle_type: str,
        booked_seats: Iterable[BookingRecord] = (),
        mode: OperatingMode = OperatingMode.PASSENGER,
        bus_index: int = 0,
        max_selection: Optional[int] = None,
        initial_selected_seats: Iterable[str] = (),
        on_save_seats: Optional[SaveSeatsCallback] = None,
        on_select_seats: Optional[SelectSeatsCallback] = None,
        layout_generator: Optional[LayoutGenerator] = None,
        selection_controller: Optional[SelectionController] = None,
        assignment_protocol: Optional[AssignmentProtocol] = None,
    ) -> None:
        self.vehicle_type = vehicle_type
        self.bus_index = bus_index
        self.on_save_seats = on_save_seats
        self.on_select_seats = on_select_seats

        self._layout = layout_generator or LayoutGenerator()
        self._selection_controller = selection_controller or SelectionController()
        self._assignment_protocol = assignment_protocol or AssignmentProtocol()

        self._seat_ids = frozenset(self._layout.seat_ids(vehicle_type))
        self._store = BookingStore.from_records(booked_seats, bus_index=bus_index)
        self.selection: SelectionState = self._selection_controller.new_state(
            OperatingMode(mode),
            max_selection=max_selection,
            initial_selection=initial_selected_seats,
        )
        self.assignment = AssignmentState()

    # ========== Read side ==========

    @property
    def mode(self) -> OperatingMode:
        return self.selection.mode

    @property
    def selected_seats(self) -> list[str]:
        return list(self.selection.selected_seat_ids)

    @property
    def prompt(self) -> Optional[NamingPrompt]:
        return self.selection.prompt

    @property
    def bookings(self) -> list[SeatBooking]:
        return self._store.for_unit(self.bus_index)

    def render(self) -> SeatRows:
        metrics.record_render(vehicle_type=self.vehicle_type)
        return self._layout.render(self.vehicle_type, self._booked())

    def stats(self) -> SeatStats:
        return self._layout.stats(self.vehicle_type, self._booked())

    def roster(self, passenger_names: Iterable[str], query: str = '') -> list[RosterEntry]:
        return build_roster(passenger_names, self._store, bus_index=self.bus_index, query=query)

    # ========== Caller-driven refresh ==========

    def update_booked_seats(self, booked_seats: Iterable[BookingRecord]) -> None:
        """The caller's booking list replaces the local mirror wholesale"""
        self._store = BookingStore.from_records(booked_seats, bus_index=self.bus_index)

    def update_max_selection(self, max_selection: Optional[int]) -> None:
        before = self.selection.selected_seat_ids
        self.selection = self._selection_controller.update_max_selection(
            self.selection, max_selection
        )
        if self.selection.selected_seat_ids != before:
            Logger.base.info(
                f'[SESSION] Selection truncated to {len(self.selection.selected_seat_ids)} seats'
            )
            self._publish_selection()

    def update_initial_selection(self, initial_selected_seats: Iterable[str]) -> None:
        self._set_selection(
            self._selection_controller.apply_initial_selection(
                self.selection, initial_selected_seats
            )
        )

    # ========== Seat clicks and the naming prompt ==========

    def click_seat(self, seat_id: str) -> bool:
        """Returns whether the click changed anything"""
        seat_id = str(seat_id)
        if seat_id not in self._seat_ids:
            return False

        outcome = self._selection_controller.click_seat(self.selection, seat_id, self._booked())
        if not outcome.accepted:
            metrics.record_rejected_click(mode=self.mode, reason=outcome.rejected_reason or '')
            return False

        self._set_selection(outcome.state)
        return True

    def confirm_selection(self) -> list[str]:
        """
        Administrator: open the naming prompt for the selected seats.
        Passenger: hand the selection to the caller.
        """
        if self.mode == OperatingMode.ADMINISTRATOR:
            self.selection = self._selection_controller.open_naming_prompt(
                self.selection, self._booked()
            )
            return self.selected_seats

        confirmed = list(self._selection_controller.confirm_passenger_selection(self.selection))
        if self.on_select_seats is not None and self.mode == OperatingMode.PASSENGER:
            self.on_select_seats(confirmed)
        return confirmed

    def clear_selection(self) -> None:
        self._set_selection(self._selection_controller.clear_selection(self.selection))

    def save_prompt(self, passenger_name: str) -> None:
        self._apply_prompt_outcome(
            self._selection_controller.save_prompt(
                self.selection, self._store, bus_index=self.bus_index, passenger_name=passenger_name
            )
        )

    def delete_from_prompt(self) -> None:
        self._apply_prompt_outcome(
            self._selection_controller.delete_from_prompt(
                self.selection, self._store, bus_index=self.bus_index
            )
        )

    def cancel_prompt(self, *, deselect: bool = False) -> None:
        self._set_selection(
            self._selection_controller.cancel_prompt(self.selection, deselect=deselect)
        )

    # ========== Drag / confirm assignment ==========

    def pick_up_passenger(self, passenger_name: str) -> None:
        if self.mode != OperatingMode.ADMINISTRATOR:
            return
        self.assignment = self._assignment_protocol.pick_up(self.assignment, passenger_name)

    def drop_on_seat(self, seat_id: str, payload: Optional[str] = None) -> bool:
        """Returns whether a confirmation is now pending"""
        if self.mode != OperatingMode.ADMINISTRATOR or str(seat_id) not in self._seat_ids:
            return False
        self.assignment = self._assignment_protocol.drop_on_seat(
            self.assignment, str(seat_id), payload
        )
        return self.assignment.awaiting_confirmation

    def confirm_assignment(self) -> bool:
        outcome = self._assignment_protocol.confirm(
            self.assignment, self._store, bus_index=self.bus_index
        )
        self.assignment = outcome.state
        if outcome.assigned is None:
            return False
        self._commit(outcome.store, action='assign')
        return True

    def cancel_assignment(self) -> None:
        self.assignment = self._assignment_protocol.cancel(self.assignment)

    # ========== Internals ==========

    def _booked(self) -> dict[str, str]:
        return self._store.names_for_unit(self.bus_index)

    def _apply_prompt_outcome(self, outcome: PromptOutcome) -> None:
        self._set_selection(outcome.state)
        if outcome.action is not None:
            self._commit(outcome.store, action=outcome.action)

    def _commit(self, store: BookingStore, *, action: str) -> None:
        self._store = store
        metrics.record_mutation(action=action)
        if self.on_save_seats is not None:
            self.on_save_seats(self.bookings)

    def _set_selection(self, state: SelectionState) -> None:
        changed = state.selected_seat_ids != self.selection.selected_seat_ids
        self.selection = state
        if changed:
            self._publish_selection()

    def _publish_selection(self) -> None:
        if self.mode == OperatingMode.PASSENGER and self.on_select_seats is not None:
            self.on_select_seats(self.selected_seats)
