"""
Unit tests for SeatMapSession

Caller contract: bookings mirrored from the caller, on_save_seats after
committed changes, on_select_seats for Passenger selections.
"""

from unittest.mock import MagicMock

import pytest

from src.service.seat_allocation.app.seat_map_session import SeatMapSession
from src.service.seat_allocation.domain.enum import OperatingMode
from src.service.seat_allocation.domain.value_object import SeatBooking


def _booked_cells(session: SeatMapSession) -> dict[str, str]:
    return {cell.id: cell.booking for row in session.render() for cell in row if cell.is_booked}


class TestAdministratorSession:
    @pytest.mark.unit
    def test_render_commit_rerender_round_trip(self) -> None:
        on_save = MagicMock()
        session = SeatMapSession(
            vehicle_type='minibus-28',
            booked_seats=[{'seatNumber': '1', 'passengerName': 'Ayse'}],
            mode=OperatingMode.ADMINISTRATOR,
            bus_index=1,
            on_save_seats=on_save,
        )
        assert _booked_cells(session) == {'1': 'Ayse'}

        assert session.click_seat('5')
        assert session.click_seat('6')
        session.confirm_selection()
        session.save_prompt('Can')

        assert _booked_cells(session) == {'1': 'Ayse', '5': 'Can', '6': 'Can'}
        assert session.selected_seats == []
        assert session.stats().booked == 3

        on_save.assert_called_once()
        saved = on_save.call_args.args[0]
        assert [(b.seat_number, b.passenger_name, b.bus_index) for b in saved] == [
            ('1', 'Ayse', 1),
            ('5', 'Can', 1),
            ('6', 'Can', 1),
        ]

    @pytest.mark.unit
    def test_edit_existing_booking(self) -> None:
        on_save = MagicMock()
        session = SeatMapSession(
            vehicle_type='van-14',
            booked_seats=[SeatBooking(seat_number='3', passenger_name='Ayse')],
            mode=OperatingMode.ADMINISTRATOR,
            on_save_seats=on_save,
        )

        session.click_seat('3')
        assert session.prompt is not None
        assert session.prompt.passenger_name == 'Ayse'

        session.delete_from_prompt()
        assert session.bookings == []
        on_save.assert_called_once_with([])

    @pytest.mark.unit
    def test_structural_cells_are_not_clickable(self) -> None:
        session = SeatMapSession(vehicle_type='bus-48', mode=OperatingMode.ADMINISTRATOR)
        for cell_id in ('driver', 'guide', 'wc', 'door-mid', 'aisle-3', '50'):
            assert not session.click_seat(cell_id)
        assert session.selected_seats == []

    @pytest.mark.unit
    def test_cancel_prompt_does_not_save(self) -> None:
        on_save = MagicMock()
        session = SeatMapSession(
            vehicle_type='van-14', mode=OperatingMode.ADMINISTRATOR, on_save_seats=on_save
        )
        session.click_seat('2')
        session.confirm_selection()
        session.cancel_prompt(deselect=True)

        assert session.prompt is None
        assert session.selected_seats == []
        on_save.assert_not_called()

    @pytest.mark.unit
    def test_drag_and_confirm_assignment(self) -> None:
        on_save = MagicMock()
        session = SeatMapSession(
            vehicle_type='van-14', mode=OperatingMode.ADMINISTRATOR, on_save_seats=on_save
        )

        session.pick_up_passenger('Zeynep')
        assert session.drop_on_seat('4')
        assert not session.bookings

        assert session.confirm_assignment()
        assert session.bookings == [SeatBooking(seat_number='4', passenger_name='Zeynep')]
        on_save.assert_called_once()

    @pytest.mark.unit
    def test_cancelled_assignment_writes_nothing(self) -> None:
        on_save = MagicMock()
        session = SeatMapSession(
            vehicle_type='van-14', mode=OperatingMode.ADMINISTRATOR, on_save_seats=on_save
        )
        session.drop_on_seat('4', payload='Zeynep')
        session.cancel_assignment()

        assert not session.confirm_assignment()
        on_save.assert_not_called()

    @pytest.mark.unit
    def test_drop_on_structural_cell_is_ignored(self) -> None:
        session = SeatMapSession(vehicle_type='van-14', mode=OperatingMode.ADMINISTRATOR)
        assert not session.drop_on_seat('driver', payload='Zeynep')
        assert not session.assignment.awaiting_confirmation

    @pytest.mark.unit
    def test_roster_reports_assigned_seats(self) -> None:
        session = SeatMapSession(
            vehicle_type='van-14',
            booked_seats=[SeatBooking(seat_number='2', passenger_name='Ayse Kaya')],
            mode=OperatingMode.ADMINISTRATOR,
        )
        roster = session.roster(['Ayse Kaya', 'Can Demir', 'Zeynep Ay'], query='ay')

        assert [(entry.passenger_name, entry.assigned_seat) for entry in roster] == [
            ('Ayse Kaya', '2'),
            ('Zeynep Ay', None),
        ]


class TestPassengerSession:
    @pytest.mark.unit
    def test_selection_changes_are_published(self) -> None:
        on_select = MagicMock()
        session = SeatMapSession(
            vehicle_type='minibus-28',
            booked_seats=[{'seat_number': '1', 'passenger_name': 'Ayse'}],
            max_selection=2,
            on_select_seats=on_select,
        )

        assert not session.click_seat('1')
        session.click_seat('2')
        session.click_seat('3')
        assert not session.click_seat('4')

        assert [c.args[0] for c in on_select.call_args_list] == [['2'], ['2', '3']]

    @pytest.mark.unit
    def test_cap_shrink_truncates_and_publishes(self) -> None:
        on_select = MagicMock()
        session = SeatMapSession(
            vehicle_type='bus-48', max_selection=3, on_select_seats=on_select
        )
        for seat_id in ('3', '5', '9'):
            session.click_seat(seat_id)
        on_select.reset_mock()

        session.update_max_selection(1)

        assert session.selected_seats == ['3']
        on_select.assert_called_once_with(['3'])

    @pytest.mark.unit
    def test_confirm_hands_selection_to_caller(self) -> None:
        on_select = MagicMock()
        session = SeatMapSession(
            vehicle_type='van-14', initial_selected_seats=['5', '6'], on_select_seats=on_select
        )
        assert session.confirm_selection() == ['5', '6']
        on_select.assert_called_once_with(['5', '6'])

    @pytest.mark.unit
    def test_booked_seats_are_mirrored_wholesale(self) -> None:
        session = SeatMapSession(
            vehicle_type='van-14', booked_seats=[{'seat_number': '1', 'passenger_name': 'A'}]
        )
        session.update_booked_seats([{'seat_number': '2', 'passenger_name': 'B'}])
        assert _booked_cells(session) == {'2': 'B'}

    @pytest.mark.unit
    def test_initial_selection_applies_only_when_empty(self) -> None:
        session = SeatMapSession(vehicle_type='van-14')
        session.update_initial_selection(['7'])
        assert session.selected_seats == ['7']

        session.update_initial_selection(['8'])
        assert session.selected_seats == ['7']


class TestViewerSession:
    @pytest.mark.unit
    def test_everything_is_read_only(self) -> None:
        on_save = MagicMock()
        on_select = MagicMock()
        session = SeatMapSession(
            vehicle_type='van-14',
            mode=OperatingMode.VIEWER,
            on_save_seats=on_save,
            on_select_seats=on_select,
        )

        assert not session.click_seat('1')
        session.pick_up_passenger('Ayse')
        assert not session.drop_on_seat('1', payload='Ayse')
        assert not session.confirm_assignment()

        on_save.assert_not_called()
        on_select.assert_not_called()
