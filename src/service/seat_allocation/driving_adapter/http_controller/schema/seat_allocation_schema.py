from typing import Any, List, Optional, Union

from pydantic import BaseModel

from src.service.seat_allocation.domain.layout_generator import SeatRows
from src.service.seat_allocation.domain.value_object import SeatBooking, SeatStats


SeatCountInput = Union[int, float, str, None]


class SeatBookingSchema(BaseModel):
    seat_number: str
    passenger_name: str
    bus_index: int = 0
    user_id: Optional[str] = None
    booking_id: Optional[str] = None

    class Config:
        json_schema_extra = {
            'example': {'seat_number': '12', 'passenger_name': 'Ayse Yilmaz', 'bus_index': 0}
        }

    @classmethod
    def from_domain(cls, booking: SeatBooking) -> 'SeatBookingSchema':
        return cls(**booking.to_dict())


def bookings_to_records(bookings: List[SeatBookingSchema]) -> list[dict[str, Any]]:
    return [booking.model_dump() for booking in bookings]


class SeatCellResponse(BaseModel):
    id: str
    kind: str
    label: str = ''
    booking: Optional[str] = None


class SeatStatsResponse(BaseModel):
    total: int
    booked: int
    available: int

    @classmethod
    def from_domain(cls, stats: SeatStats) -> 'SeatStatsResponse':
        return cls(total=stats.total, booked=stats.booked, available=stats.available)


def rows_to_response(rows: SeatRows) -> List[List[SeatCellResponse]]:
    return [
        [
            SeatCellResponse(
                id=cell.id, kind=str(cell.kind), label=cell.label, booking=cell.booking
            )
            for cell in row
        ]
        for row in rows
    ]


class SeatLayoutResponse(BaseModel):
    vehicle_type: str
    seat_count: int
    capacity: int
    rows: List[List[SeatCellResponse]]


class SeatMapRequest(BaseModel):
    vehicle_type: str
    bookings: List[SeatBookingSchema] = []

    class Config:
        json_schema_extra = {
            'example': {
                'vehicle_type': 'minibus-28',
                'bookings': [{'seat_number': '3', 'passenger_name': 'Mehmet Kaya'}],
            }
        }


class SeatMapResponse(BaseModel):
    vehicle_type: str
    stats: SeatStatsResponse
    rows: List[List[SeatCellResponse]]


class FleetPlanRequest(BaseModel):
    total_seats: SeatCountInput = None

    class Config:
        json_schema_extra = {'example': {'total_seats': 70}}


class FleetEntryResponse(BaseModel):
    type: str
    capacity: int
    count: int


class VehicleUnitResponse(BaseModel):
    type: str
    capacity: int
    count: int
    unit_index: int


class FleetPlanResponse(BaseModel):
    total_seats: int
    total_capacity: int
    entries: List[FleetEntryResponse]
    units: List[VehicleUnitResponse]


class AssignSeatsRequest(BaseModel):
    bookings: List[SeatBookingSchema] = []
    bus_index: int = 0
    seat_ids: List[str]
    passenger_name: str = ''  # empty name clears the seats

    class Config:
        json_schema_extra = {
            'example': {
                'bookings': [],
                'bus_index': 1,
                'seat_ids': ['5', '6'],
                'passenger_name': 'Ayse Yilmaz',
            }
        }


class ApplySelectionRequest(BaseModel):
    bookings: List[SeatBookingSchema] = []
    seat_keys: List[str]  # '<busIndex>-<seatNumber>', bare seat numbers mean unit 0
    passenger_name: str
    user_id: Optional[str] = None
    booking_id: Optional[str] = None

    class Config:
        json_schema_extra = {
            'example': {
                'bookings': [],
                'seat_keys': ['0-12', '1-3'],
                'passenger_name': 'Ayse Yilmaz',
                'user_id': 'user-1',
                'booking_id': 'booking-1',
            }
        }


class CheckSelectionRequest(BaseModel):
    bookings: List[SeatBookingSchema] = []
    seat_keys: List[str]


class CheckSelectionResponse(BaseModel):
    available: bool
    seat_keys: List[str]


class ReleaseBookingRequest(BaseModel):
    bookings: List[SeatBookingSchema] = []
    booking_id: str


class BookingListResponse(BaseModel):
    bookings: List[SeatBookingSchema]


class SeatCountValidateRequest(BaseModel):
    value: SeatCountInput = None
    min_booked: int = 0

    class Config:
        json_schema_extra = {'example': {'value': '30', 'min_booked': 12}}


class SeatCountValidateResponse(BaseModel):
    seat_count: int
