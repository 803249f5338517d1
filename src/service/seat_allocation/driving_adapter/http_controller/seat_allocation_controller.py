from fastapi import APIRouter, Depends

from src.platform.logging.loguru_io import Logger
from src.service.seat_allocation.app.command.assign_seats_use_case import AssignSeatsUseCase
from src.service.seat_allocation.app.command.reservation_seats_use_case import (
    ReservationSeatsUseCase,
)
from src.service.seat_allocation.app.query.plan_fleet_use_case import PlanFleetUseCase
from src.service.seat_allocation.app.query.render_seat_map_use_case import RenderSeatMapUseCase
from src.service.seat_allocation.driving_adapter.http_controller.schema.seat_allocation_schema import (
    ApplySelectionRequest,
    AssignSeatsRequest,
    BookingListResponse,
    CheckSelectionRequest,
    CheckSelectionResponse,
    FleetEntryResponse,
    FleetPlanRequest,
    FleetPlanResponse,
    ReleaseBookingRequest,
    SeatBookingSchema,
    SeatCountValidateRequest,
    SeatCountValidateResponse,
    SeatLayoutResponse,
    SeatMapRequest,
    SeatMapResponse,
    SeatStatsResponse,
    VehicleUnitResponse,
    bookings_to_records,
    rows_to_response,
)


router = APIRouter()


# ========== Layouts ==========


@router.get('/layouts/{vehicle_type}')
@Logger.io
async def get_layout(
    vehicle_type: str,
    use_case: RenderSeatMapUseCase = Depends(RenderSeatMapUseCase.depends),
) -> SeatLayoutResponse:
    """Empty seat map of a vehicle type; unknown types get the van layout"""
    view = use_case.get_layout(vehicle_type=vehicle_type)
    return SeatLayoutResponse(
        vehicle_type=vehicle_type,
        seat_count=view.seat_count,
        capacity=view.stats.total,
        rows=rows_to_response(view.rows),
    )


@router.post('/seat-map')
@Logger.io
async def render_seat_map(
    request: SeatMapRequest,
    use_case: RenderSeatMapUseCase = Depends(RenderSeatMapUseCase.depends),
) -> SeatMapResponse:
    view = use_case.render(
        vehicle_type=request.vehicle_type, bookings=bookings_to_records(request.bookings)
    )
    return SeatMapResponse(
        vehicle_type=view.vehicle_type,
        stats=SeatStatsResponse.from_domain(view.stats),
        rows=rows_to_response(view.rows),
    )


# ========== Fleet ==========


@router.post('/fleet/plan')
@Logger.io
async def plan_fleet(
    request: FleetPlanRequest,
    use_case: PlanFleetUseCase = Depends(PlanFleetUseCase.depends),
) -> FleetPlanResponse:
    plan = use_case.plan(total_seats=request.total_seats)
    return FleetPlanResponse(
        total_seats=plan.total_seats,
        total_capacity=plan.total_capacity,
        entries=[
            FleetEntryResponse(type=str(entry.type), capacity=entry.capacity, count=entry.count)
            for entry in plan.entries
        ],
        units=[
            VehicleUnitResponse(
                type=str(unit.type),
                capacity=unit.capacity,
                count=unit.count,
                unit_index=unit.unit_index,
            )
            for unit in plan.units
        ],
    )


@router.post('/seats/validate')
@Logger.io
async def validate_seat_count(
    request: SeatCountValidateRequest,
    use_case: PlanFleetUseCase = Depends(PlanFleetUseCase.depends),
) -> SeatCountValidateResponse:
    seat_count = use_case.validate_seat_count(value=request.value, min_booked=request.min_booked)
    return SeatCountValidateResponse(seat_count=seat_count)


# ========== Bookings ==========


@router.post('/bookings/assign')
@Logger.io
async def assign_seats(
    request: AssignSeatsRequest,
    use_case: AssignSeatsUseCase = Depends(AssignSeatsUseCase.depends),
) -> BookingListResponse:
    """Name a set of seats on one unit; an empty passenger name clears them"""
    bookings = use_case.assign(
        bookings=bookings_to_records(request.bookings),
        bus_index=request.bus_index,
        seat_ids=request.seat_ids,
        passenger_name=request.passenger_name,
    )
    return BookingListResponse(bookings=[SeatBookingSchema.from_domain(b) for b in bookings])


@router.post('/bookings/apply-selection')
@Logger.io
async def apply_selection(
    request: ApplySelectionRequest,
    use_case: ReservationSeatsUseCase = Depends(ReservationSeatsUseCase),
) -> BookingListResponse:
    bookings = use_case.apply_selection(
        bookings=bookings_to_records(request.bookings),
        seat_keys=request.seat_keys,
        passenger_name=request.passenger_name,
        user_id=request.user_id,
        booking_id=request.booking_id,
    )
    return BookingListResponse(bookings=[SeatBookingSchema.from_domain(b) for b in bookings])


@router.post('/bookings/check-selection')
@Logger.io
async def check_selection(
    request: CheckSelectionRequest,
    use_case: ReservationSeatsUseCase = Depends(ReservationSeatsUseCase),
) -> CheckSelectionResponse:
    use_case.check_selection(
        bookings=bookings_to_records(request.bookings), seat_keys=request.seat_keys
    )
    return CheckSelectionResponse(available=True, seat_keys=request.seat_keys)


@router.post('/bookings/release')
@Logger.io
async def release_booking(
    request: ReleaseBookingRequest,
    use_case: ReservationSeatsUseCase = Depends(ReservationSeatsUseCase),
) -> BookingListResponse:
    bookings = use_case.release(
        bookings=bookings_to_records(request.bookings), booking_id=request.booking_id
    )
    return BookingListResponse(bookings=[SeatBookingSchema.from_domain(b) for b in bookings])
