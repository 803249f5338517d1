"""
Unit tests for the seat allocation use cases

Use cases are built directly with their collaborators, without DI wiring.
"""

from unittest.mock import MagicMock, patch

import pytest

from src.platform.config.core_setting import settings
from src.platform.config.di import Container
from src.platform.exception.exceptions import ConflictError, DomainError
from src.service.seat_allocation.app.command import reservation_seats_use_case
from src.service.seat_allocation.app.command.assign_seats_use_case import AssignSeatsUseCase
from src.service.seat_allocation.app.command.reservation_seats_use_case import (
    ReservationSeatsUseCase,
)
from src.service.seat_allocation.app.query.plan_fleet_use_case import PlanFleetUseCase
from src.service.seat_allocation.app.query.render_seat_map_use_case import RenderSeatMapUseCase
from src.service.seat_allocation.domain.fleet_packer import FleetPacker
from src.service.seat_allocation.domain.layout_generator import LayoutGenerator
from src.service.seat_allocation.domain.selection_controller import SelectionController


_MODULE = reservation_seats_use_case.__name__

RECORDS = [
    {'seat_number': '1', 'passenger_name': 'Ayse', 'bus_index': 0},
    {'seat_number': '4', 'passenger_name': 'Can', 'bus_index': 1, 'booking_id': 'bk-1'},
]


class TestRenderSeatMapUseCase:
    @pytest.mark.unit
    def test_render_annotates_and_counts(self) -> None:
        use_case = RenderSeatMapUseCase(layout_generator=LayoutGenerator())
        view = use_case.render(vehicle_type='van-14', bookings=[RECORDS[0]])

        assert view.seat_count == 14
        assert (view.stats.total, view.stats.booked, view.stats.available) == (14, 1, 13)

    @pytest.mark.unit
    def test_layout_is_empty(self) -> None:
        view = RenderSeatMapUseCase(layout_generator=LayoutGenerator()).get_layout(
            vehicle_type='bus-48'
        )
        assert view.stats.booked == 0
        assert view.seat_count == 49


class TestPlanFleetUseCase:
    @pytest.mark.unit
    def test_plan_uses_packer(self) -> None:
        packer = MagicMock(wraps=FleetPacker())
        plan = PlanFleetUseCase(fleet_packer=packer).plan(total_seats=50)

        packer.pack.assert_called_once_with(50)
        assert [u.type for u in plan.units] == ['bus-48', 'van-14']
        assert plan.total_capacity == 62

    @pytest.mark.unit
    def test_plan_refuses_counts_above_the_limit(self) -> None:
        packer = MagicMock(wraps=FleetPacker())
        use_case = PlanFleetUseCase(fleet_packer=packer)

        with pytest.raises(DomainError, match='cannot exceed'):
            use_case.plan(total_seats=48 * 2_000_000)
        with pytest.raises(DomainError, match='cannot exceed'):
            use_case.plan(total_seats='9' * 5000)

        packer.pack.assert_not_called()
        packer.flatten.assert_not_called()

    @pytest.mark.unit
    def test_plan_accepts_the_limit_itself(self) -> None:
        with patch.object(settings, 'MAX_FLEET_SEATS', 96):
            plan = PlanFleetUseCase(fleet_packer=FleetPacker()).plan(total_seats=96)
            with pytest.raises(DomainError):
                PlanFleetUseCase(fleet_packer=FleetPacker()).plan(total_seats=97)

        assert plan.total_seats == 96
        assert len(plan.units) == 2


class TestAssignSeatsUseCase:
    @pytest.mark.unit
    def test_assign_then_clear(self) -> None:
        use_case = AssignSeatsUseCase(selection_controller=SelectionController())

        assigned = use_case.assign(
            bookings=RECORDS, bus_index=1, seat_ids=['4', '5'], passenger_name='Elif'
        )
        assert [(b.bus_index, b.seat_number, b.passenger_name) for b in assigned] == [
            (0, '1', 'Ayse'),
            (1, '4', 'Elif'),
            (1, '5', 'Elif'),
        ]

        cleared = use_case.assign(
            bookings=[b.to_dict() for b in assigned],
            bus_index=1,
            seat_ids=['4', '5'],
            passenger_name='',
        )
        assert [b.seat_number for b in cleared] == ['1']

    @pytest.mark.unit
    def test_no_seats_changes_nothing(self) -> None:
        use_case = AssignSeatsUseCase(selection_controller=SelectionController())
        result = use_case.assign(bookings=RECORDS, bus_index=0, seat_ids=[], passenger_name='X')
        assert len(result) == 2


class TestReservationSeatsUseCase:
    @pytest.mark.unit
    def test_apply_records_mutation_metric(self) -> None:
        with patch(f'{_MODULE}.metrics') as mock_metrics:
            result = ReservationSeatsUseCase().apply_selection(
                bookings=RECORDS, seat_keys=['1-5'], passenger_name='Elif', booking_id='bk-2'
            )

        assert result[-1].key == (1, '5')
        mock_metrics.record_mutation.assert_called_once_with(action='apply')

    @pytest.mark.unit
    def test_check_selection_raises_on_conflict(self) -> None:
        with pytest.raises(ConflictError) as exc_info:
            ReservationSeatsUseCase().check_selection(bookings=RECORDS, seat_keys=['0-1', '0-2'])

        assert exc_info.value.status_code == 409
        assert '0-1' in exc_info.value.message

    @pytest.mark.unit
    def test_release_frees_booking_seats(self) -> None:
        result = ReservationSeatsUseCase().release(bookings=RECORDS, booking_id='bk-1')
        assert [b.passenger_name for b in result] == ['Ayse']


class TestContainer:
    @pytest.mark.unit
    def test_registers_only_injected_services(self) -> None:
        assert set(Container.providers) == {
            'config_service',
            'layout_generator',
            'fleet_packer',
            'selection_controller',
        }
