"""
Selection Controller

State machine over the seats a user is interacting with on one vehicle unit.

SelectionState is an immutable value owned by the caller; every transition
returns a new state. Seat-click handling is a strategy per operating mode:

- Administrator: clicking a booked seat with nothing selected opens it for
  rename/clear, any other click toggles the seat (booked seats included, to
  allow bulk rename/clear).
- Passenger: booked seats are ignored, free seats toggle, adding is capped by
  max_selection while removing is always allowed.
- Viewer: read-only.

While a naming prompt is open seat clicks are ignored.
"""

from abc import ABC, abstractmethod
from typing import Iterable, Mapping, Optional

import attrs

from src.platform.logging.loguru_io import Logger
from src.service.seat_allocation.domain.booking_store import BookingStore
from src.service.seat_allocation.domain.enum import OperatingMode, SelectionPhase


@attrs.define(frozen=True)
class NamingPrompt:
    """Open passenger-name dialog for the selected seats"""

    seat_ids: tuple[str, ...]
    passenger_name: str = ''
    editing_existing: bool = False


def _cap(value: Optional[int]) -> Optional[int]:
    return None if value is None else max(int(value), 0)


@attrs.define(frozen=True)
class SelectionState:
    mode: OperatingMode = OperatingMode.PASSENGER
    selected_seat_ids: tuple[str, ...] = attrs.field(default=(), converter=tuple)
    max_selection: Optional[int] = attrs.field(default=None, converter=_cap)
    prompt: Optional[NamingPrompt] = None

    @property
    def phase(self) -> SelectionPhase:
        if self.prompt is not None and self.prompt.editing_existing:
            return SelectionPhase.EDITING_EXISTING
        if self.selected_seat_ids:
            return SelectionPhase.SELECTING
        return SelectionPhase.EMPTY

    @property
    def is_capped(self) -> bool:
        return self.mode == OperatingMode.PASSENGER and self.max_selection is not None

    def is_selected(self, seat_id: str) -> bool:
        return seat_id in self.selected_seat_ids

    def toggled(self, seat_id: str) -> 'SelectionState':
        if self.is_selected(seat_id):
            remaining = tuple(s for s in self.selected_seat_ids if s != seat_id)
            return attrs.evolve(self, selected_seat_ids=remaining)
        return attrs.evolve(self, selected_seat_ids=self.selected_seat_ids + (seat_id,))


@attrs.define(frozen=True)
class ClickOutcome:
    """Result of a seat click: the next state and why the click was ignored, if it was"""

    state: SelectionState
    rejected_reason: Optional[str] = None

    @property
    def accepted(self) -> bool:
        return self.rejected_reason is None


@attrs.define(frozen=True)
class PromptOutcome:
    """Result of closing the naming prompt with a commit"""

    state: SelectionState
    store: BookingStore
    action: Optional[str] = None  # 'upsert', 'clear' or None when nothing was committed


class SeatClickStrategy(ABC):
    @abstractmethod
    def on_click(
        self, state: SelectionState, seat_id: str, booked: Mapping[str, str]
    ) -> ClickOutcome:
        pass


class AdministratorClick(SeatClickStrategy):
    def on_click(
        self, state: SelectionState, seat_id: str, booked: Mapping[str, str]
    ) -> ClickOutcome:
        existing = booked.get(seat_id)
        if existing is not None and not state.selected_seat_ids:
            prompt = NamingPrompt(seat_ids=(seat_id,), passenger_name=existing, editing_existing=True)
            return ClickOutcome(
                state=attrs.evolve(state, selected_seat_ids=(seat_id,), prompt=prompt)
            )
        return ClickOutcome(state=state.toggled(seat_id))


class PassengerClick(SeatClickStrategy):
    def on_click(
        self, state: SelectionState, seat_id: str, booked: Mapping[str, str]
    ) -> ClickOutcome:
        if seat_id in booked:
            return ClickOutcome(state=state, rejected_reason='booked')

        adding = not state.is_selected(seat_id)
        if (
            adding
            and state.max_selection is not None
            and len(state.selected_seat_ids) >= state.max_selection
        ):
            return ClickOutcome(state=state, rejected_reason='cap')

        return ClickOutcome(state=state.toggled(seat_id))


class ViewerClick(SeatClickStrategy):
    def on_click(
        self, state: SelectionState, seat_id: str, booked: Mapping[str, str]
    ) -> ClickOutcome:
        return ClickOutcome(state=state, rejected_reason='read_only')


class SelectionController:
    """
    Selection domain service

    Stateless: holds only the per-mode click strategies.
    """

    def __init__(self) -> None:
        self.strategies: dict[OperatingMode, SeatClickStrategy] = {
            OperatingMode.ADMINISTRATOR: AdministratorClick(),
            OperatingMode.PASSENGER: PassengerClick(),
            OperatingMode.VIEWER: ViewerClick(),
        }

    def new_state(
        self,
        mode: OperatingMode,
        *,
        max_selection: Optional[int] = None,
        initial_selection: Iterable[str] = (),
    ) -> SelectionState:
        state = SelectionState(mode=mode, max_selection=max_selection)
        return self.apply_initial_selection(state, initial_selection)

    def click_seat(
        self, state: SelectionState, seat_id: str, booked: Mapping[str, str]
    ) -> ClickOutcome:
        """
        Handle a click on a seat of the active unit.

        Args:
            state: Current selection
            seat_id: Clicked seat
            booked: seat_number -> passenger_name for the active unit
        """
        if state.prompt is not None:
            return ClickOutcome(state=state, rejected_reason='prompt_open')

        outcome = self.strategies[state.mode].on_click(state, str(seat_id), booked)
        if not outcome.accepted:
            Logger.base.debug(
                f'[SELECTION] {state.mode} click on seat {seat_id} ignored: {outcome.rejected_reason}'
            )
        return outcome

    def update_max_selection(
        self, state: SelectionState, max_selection: Optional[int]
    ) -> SelectionState:
        """Apply a new cap, keeping the earliest picks when the selection no longer fits"""
        state = attrs.evolve(state, max_selection=max_selection)
        return self._truncate_to_cap(state)

    def apply_initial_selection(
        self, state: SelectionState, initial_selection: Iterable[str]
    ) -> SelectionState:
        """A preset selection never clobbers seats the user already picked"""
        initial = tuple(dict.fromkeys(str(seat_id) for seat_id in initial_selection))
        if not initial or state.selected_seat_ids:
            return state
        return self._truncate_to_cap(attrs.evolve(state, selected_seat_ids=initial))

    def clear_selection(self, state: SelectionState) -> SelectionState:
        return attrs.evolve(state, selected_seat_ids=(), prompt=None)

    # ========== Administrator naming prompt ==========

    def open_naming_prompt(self, state: SelectionState, booked: Mapping[str, str]) -> SelectionState:
        """
        "Confirm N seats": ask for the passenger name of the whole selection.

        Pre-filled with the current passenger when exactly one booked seat is
        selected.
        """
        if state.mode != OperatingMode.ADMINISTRATOR or not state.selected_seat_ids:
            return state

        name = ''
        if len(state.selected_seat_ids) == 1:
            name = booked.get(state.selected_seat_ids[0], '')
        prompt = NamingPrompt(seat_ids=state.selected_seat_ids, passenger_name=name)
        return attrs.evolve(state, prompt=prompt)

    @Logger.io(truncate_content=True)
    def save_prompt(
        self, state: SelectionState, store: BookingStore, *, bus_index: int, passenger_name: str
    ) -> PromptOutcome:
        """
        Commit the naming prompt.

        A non-empty name books every selected seat to it, an empty name
        clears them. Either way the selection is cleared and the prompt closed.
        """
        if state.prompt is None or not state.selected_seat_ids:
            return PromptOutcome(state=state, store=store)

        seat_ids = state.selected_seat_ids
        if (passenger_name or '').strip():
            store = store.upsert_many(bus_index, seat_ids, passenger_name)
            action = 'upsert'
        else:
            store = store.clear_many(bus_index, seat_ids)
            action = 'clear'

        Logger.base.info(f'[SELECTION] {action} {len(seat_ids)} seats on unit {bus_index}')
        return PromptOutcome(state=self.clear_selection(state), store=store, action=action)

    def delete_from_prompt(
        self, state: SelectionState, store: BookingStore, *, bus_index: int
    ) -> PromptOutcome:
        """Explicit "remove booking" from the naming prompt"""
        return self.save_prompt(state, store, bus_index=bus_index, passenger_name='')

    def cancel_prompt(self, state: SelectionState, *, deselect: bool = False) -> SelectionState:
        """Close the prompt without touching bookings, optionally dropping the selection"""
        if deselect:
            return self.clear_selection(state)
        return attrs.evolve(state, prompt=None)

    # ========== Passenger confirmation ==========

    def confirm_passenger_selection(self, state: SelectionState) -> tuple[str, ...]:
        return state.selected_seat_ids if state.mode == OperatingMode.PASSENGER else ()

    @staticmethod
    def _truncate_to_cap(state: SelectionState) -> SelectionState:
        if not state.is_capped or len(state.selected_seat_ids) <= (state.max_selection or 0):
            return state
        return attrs.evolve(state, selected_seat_ids=state.selected_seat_ids[: state.max_selection])
