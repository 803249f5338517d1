"""
Unit tests for SelectionController

Click handling per operating mode, the selection cap and the Administrator
naming prompt.
"""

import pytest

from src.service.seat_allocation.domain.booking_store import BookingStore
from src.service.seat_allocation.domain.enum import OperatingMode, SelectionPhase
from src.service.seat_allocation.domain.selection_controller import (
    SelectionController,
    SelectionState,
)


@pytest.fixture
def controller() -> SelectionController:
    return SelectionController()


def _click_all(
    controller: SelectionController, state: SelectionState, seat_ids: list[str], booked=None
) -> SelectionState:
    for seat_id in seat_ids:
        state = controller.click_seat(state, seat_id, booked or {}).state
    return state


class TestPassengerClicks:
    @pytest.mark.unit
    def test_toggle_free_seat(self, controller: SelectionController) -> None:
        state = controller.new_state(OperatingMode.PASSENGER)
        state = _click_all(controller, state, ['3', '5'])
        assert state.selected_seat_ids == ('3', '5')

        state = _click_all(controller, state, ['3'])
        assert state.selected_seat_ids == ('5',)

    @pytest.mark.unit
    def test_booked_seat_is_ignored(self, controller: SelectionController) -> None:
        state = controller.new_state(OperatingMode.PASSENGER)
        outcome = controller.click_seat(state, '3', {'3': 'Ayse'})

        assert not outcome.accepted
        assert outcome.rejected_reason == 'booked'
        assert outcome.state == state

    @pytest.mark.unit
    def test_cap_blocks_adding_but_not_removing(self, controller: SelectionController) -> None:
        state = controller.new_state(OperatingMode.PASSENGER, max_selection=2)
        state = _click_all(controller, state, ['1', '2'])

        outcome = controller.click_seat(state, '3', {})
        assert outcome.rejected_reason == 'cap'
        assert outcome.state.selected_seat_ids == ('1', '2')

        state = _click_all(controller, state, ['1', '3'])
        assert state.selected_seat_ids == ('2', '3')

    @pytest.mark.unit
    def test_cap_idempotence(self, controller: SelectionController) -> None:
        state = controller.new_state(OperatingMode.PASSENGER, max_selection=1)
        state = _click_all(controller, state, ['1'])
        for seat_id in ['2', '3', '4']:
            assert controller.click_seat(state, seat_id, {}).state == state

    @pytest.mark.unit
    def test_zero_cap_blocks_everything(self, controller: SelectionController) -> None:
        state = controller.new_state(OperatingMode.PASSENGER, max_selection=0)
        assert controller.click_seat(state, '1', {}).rejected_reason == 'cap'


class TestAdministratorClicks:
    @pytest.mark.unit
    def test_booked_seat_with_empty_selection_opens_editor(
        self, controller: SelectionController
    ) -> None:
        state = controller.new_state(OperatingMode.ADMINISTRATOR)
        state = controller.click_seat(state, '7', {'7': 'Ayse'}).state

        assert state.selected_seat_ids == ('7',)
        assert state.prompt is not None
        assert state.prompt.passenger_name == 'Ayse'
        assert state.phase == SelectionPhase.EDITING_EXISTING

    @pytest.mark.unit
    def test_booked_seat_joins_existing_selection(self, controller: SelectionController) -> None:
        state = controller.new_state(OperatingMode.ADMINISTRATOR)
        state = _click_all(controller, state, ['1', '7'], booked={'7': 'Ayse'})

        assert state.selected_seat_ids == ('1', '7')
        assert state.prompt is None
        assert state.phase == SelectionPhase.SELECTING

    @pytest.mark.unit
    def test_cap_does_not_apply(self, controller: SelectionController) -> None:
        state = controller.new_state(OperatingMode.ADMINISTRATOR, max_selection=1)
        state = _click_all(controller, state, ['1', '2', '3'])
        assert state.selected_seat_ids == ('1', '2', '3')

    @pytest.mark.unit
    def test_clicks_ignored_while_prompt_open(self, controller: SelectionController) -> None:
        state = controller.new_state(OperatingMode.ADMINISTRATOR)
        state = controller.click_seat(state, '7', {'7': 'Ayse'}).state

        outcome = controller.click_seat(state, '8', {'7': 'Ayse'})
        assert outcome.rejected_reason == 'prompt_open'
        assert outcome.state.selected_seat_ids == ('7',)


class TestViewerClicks:
    @pytest.mark.unit
    def test_read_only(self, controller: SelectionController) -> None:
        state = controller.new_state(OperatingMode.VIEWER)
        outcome = controller.click_seat(state, '1', {})
        assert outcome.rejected_reason == 'read_only'
        assert outcome.state.selected_seat_ids == ()


class TestCapAndInitialSelection:
    @pytest.mark.unit
    def test_truncation_keeps_earliest_picks(self, controller: SelectionController) -> None:
        state = controller.new_state(OperatingMode.PASSENGER, max_selection=3)
        state = _click_all(controller, state, ['3', '5', '9'])

        state = controller.update_max_selection(state, 1)
        assert state.selected_seat_ids == ('3',)

    @pytest.mark.unit
    def test_raising_cap_keeps_selection(self, controller: SelectionController) -> None:
        state = controller.new_state(OperatingMode.PASSENGER, max_selection=2)
        state = _click_all(controller, state, ['3', '5'])
        assert controller.update_max_selection(state, 5).selected_seat_ids == ('3', '5')

    @pytest.mark.unit
    def test_initial_selection_is_deduplicated_and_capped(
        self, controller: SelectionController
    ) -> None:
        state = controller.new_state(
            OperatingMode.PASSENGER, max_selection=2, initial_selection=['4', '4', '6', '8']
        )
        assert state.selected_seat_ids == ('4', '6')

    @pytest.mark.unit
    def test_initial_selection_never_clobbers_picks(self, controller: SelectionController) -> None:
        state = _click_all(controller, controller.new_state(OperatingMode.PASSENGER), ['1'])
        assert controller.apply_initial_selection(state, ['5', '6']).selected_seat_ids == ('1',)


class TestNamingPrompt:
    @pytest.mark.unit
    def test_prompt_prefilled_for_single_booked_seat(
        self, controller: SelectionController
    ) -> None:
        state = controller.new_state(OperatingMode.ADMINISTRATOR, initial_selection=['7'])
        state = controller.open_naming_prompt(state, {'7': 'Ayse'})
        assert state.prompt is not None
        assert state.prompt.passenger_name == 'Ayse'
        assert not state.prompt.editing_existing

    @pytest.mark.unit
    def test_prompt_empty_for_several_seats(self, controller: SelectionController) -> None:
        state = controller.new_state(OperatingMode.ADMINISTRATOR, initial_selection=['7', '8'])
        state = controller.open_naming_prompt(state, {'7': 'Ayse'})
        assert state.prompt is not None
        assert state.prompt.passenger_name == ''

    @pytest.mark.unit
    def test_prompt_needs_selection_and_administrator(
        self, controller: SelectionController
    ) -> None:
        empty = controller.new_state(OperatingMode.ADMINISTRATOR)
        assert controller.open_naming_prompt(empty, {}).prompt is None

        passenger = controller.new_state(OperatingMode.PASSENGER, initial_selection=['1'])
        assert controller.open_naming_prompt(passenger, {}).prompt is None

    @pytest.mark.unit
    def test_save_books_every_selected_seat(self, controller: SelectionController) -> None:
        state = controller.new_state(OperatingMode.ADMINISTRATOR, initial_selection=['1', '2'])
        state = controller.open_naming_prompt(state, {})

        outcome = controller.save_prompt(state, BookingStore(), bus_index=1, passenger_name='Can')

        assert outcome.action == 'upsert'
        assert outcome.store.names_for_unit(1) == {'1': 'Can', '2': 'Can'}
        assert outcome.state.selected_seat_ids == ()
        assert outcome.state.prompt is None

    @pytest.mark.unit
    def test_save_with_empty_name_clears(self, controller: SelectionController) -> None:
        store = BookingStore().upsert_many(0, ['1', '2'], 'Ayse')
        state = controller.new_state(OperatingMode.ADMINISTRATOR, initial_selection=['1'])
        state = controller.open_naming_prompt(state, store.names_for_unit(0))

        outcome = controller.save_prompt(state, store, bus_index=0, passenger_name='  ')

        assert outcome.action == 'clear'
        assert outcome.store.names_for_unit(0) == {'2': 'Ayse'}

    @pytest.mark.unit
    def test_delete_from_prompt(self, controller: SelectionController) -> None:
        store = BookingStore().upsert_one(0, '7', 'Ayse')
        state = controller.click_seat(
            controller.new_state(OperatingMode.ADMINISTRATOR), '7', store.names_for_unit(0)
        ).state

        outcome = controller.delete_from_prompt(state, store, bus_index=0)
        assert len(outcome.store) == 0

    @pytest.mark.unit
    def test_save_without_prompt_is_noop(self, controller: SelectionController) -> None:
        state = controller.new_state(OperatingMode.ADMINISTRATOR, initial_selection=['1'])
        store = BookingStore()

        outcome = controller.save_prompt(state, store, bus_index=0, passenger_name='Can')
        assert outcome.action is None
        assert outcome.store is store

    @pytest.mark.unit
    def test_cancel_keeps_or_drops_selection(self, controller: SelectionController) -> None:
        state = controller.new_state(OperatingMode.ADMINISTRATOR, initial_selection=['1'])
        state = controller.open_naming_prompt(state, {})

        kept = controller.cancel_prompt(state)
        assert kept.prompt is None
        assert kept.selected_seat_ids == ('1',)

        dropped = controller.cancel_prompt(state, deselect=True)
        assert dropped.selected_seat_ids == ()
