"""
Layout Generator

Renders the seat map of a vehicle type as ordered rows of typed cells.

Seat numbering is the join key for stored bookings: for a given vehicle type
it is sequential from 1, never skips and never repeats, and must stay
identical across releases.

Layouts:
    bus-48 / bus-50   front row [driver, aisle, guide] + 13 rows,
                      restroom in row 6, middle door in row 7,
                      rear row closes with 5 seats      -> 49 seats
    minibus-28        7 rows of [2 seats, aisle, 2 seats] -> 28 seats
    van-14 / other    front row [driver, aisle, 2 seats]
                      + 4 rows of [seat, aisle, 2 seats] -> 14 seats
"""

from functools import lru_cache
from typing import Iterable, Mapping, Optional, Union

from src.platform.logging.loguru_io import Logger
from src.service.seat_allocation.domain.enum import SeatKind, VehicleType
from src.service.seat_allocation.domain.value_object import SeatBooking, SeatCell, SeatStats


SeatRow = tuple[SeatCell, ...]
SeatRows = tuple[SeatRow, ...]
BookingSource = Union[Iterable[SeatBooking], Mapping[str, str]]

DRIVER_LABEL = 'Driver'
GUIDE_LABEL = 'Guide'
DOOR_LABEL = 'Door'
RESTROOM_LABEL = 'WC'

BUS_ROWS = 13
BUS_RESTROOM_ROW = 6
BUS_DOOR_ROW = 7
MINIBUS_ROWS = 7
VAN_ROWS = 4

_CAPACITY = {
    VehicleType.BUS_48: 48,
    VehicleType.BUS_50: 48,
    VehicleType.MINIBUS_28: 28,
    VehicleType.VAN_14: 14,
}


def _seat(number: int) -> SeatCell:
    return SeatCell(id=str(number), kind=SeatKind.SEAT, label=str(number))


def _aisle(index: int) -> SeatCell:
    return SeatCell(id=f'aisle-{index}', kind=SeatKind.AISLE)


def _driver() -> SeatCell:
    return SeatCell(id='driver', kind=SeatKind.DRIVER, label=DRIVER_LABEL)


class _SeatCounter:
    """Running seat number shared by all rows of one layout"""

    def __init__(self) -> None:
        self._next = 1

    def take(self) -> SeatCell:
        cell = _seat(self._next)
        self._next += 1
        return cell


def _bus_rows() -> SeatRows:
    rows: list[SeatRow] = [
        (_driver(), _aisle(0), SeatCell(id='guide', kind=SeatKind.GUIDE, label=GUIDE_LABEL))
    ]
    counter = _SeatCounter()

    for row in range(1, BUS_ROWS + 1):
        cells = [counter.take(), counter.take()]

        # The rear row has no aisle: a fifth seat closes it
        cells.append(counter.take() if row == BUS_ROWS else _aisle(row))

        if row == BUS_RESTROOM_ROW:
            cells.append(SeatCell(id='wc', kind=SeatKind.RESTROOM, label=RESTROOM_LABEL))
        elif row == BUS_DOOR_ROW:
            cells.append(SeatCell(id='door-mid', kind=SeatKind.DOOR, label=DOOR_LABEL))
        else:
            cells.extend((counter.take(), counter.take()))

        rows.append(tuple(cells))

    return tuple(rows)


def _minibus_rows() -> SeatRows:
    rows: list[SeatRow] = []
    for row in range(MINIBUS_ROWS):
        base = row * 4 + 1
        rows.append((_seat(base), _seat(base + 1), _aisle(row), _seat(base + 2), _seat(base + 3)))
    return tuple(rows)


def _van_rows() -> SeatRows:
    rows: list[SeatRow] = [(_driver(), _aisle(0), _seat(1), _seat(2))]
    for row in range(1, VAN_ROWS + 1):
        base = (row - 1) * 3 + 3
        rows.append((_seat(base), _aisle(row), _seat(base + 1), _seat(base + 2)))
    return tuple(rows)


@lru_cache(maxsize=4)
def _layout_for(vehicle_type: Optional[VehicleType]) -> SeatRows:
    if vehicle_type in (VehicleType.BUS_48, VehicleType.BUS_50):
        return _bus_rows()
    if vehicle_type == VehicleType.MINIBUS_28:
        return _minibus_rows()
    return _van_rows()


class LayoutGenerator:
    """
    Deterministic seat map rendering.

    Responsibility: vehicle type -> rows of cells, optionally annotated with
    the bookings of one vehicle unit. Unknown vehicle types fall through to
    the van-shaped layout but keep the 48-seat nominal capacity.
    """

    @staticmethod
    def resolve_type(vehicle_type: str) -> Optional[VehicleType]:
        return VehicleType.parse(vehicle_type)

    @staticmethod
    def capacity_of(vehicle_type: str) -> int:
        """Nominal capacity used for fleet sizing and occupancy stats; 48 when unknown"""
        resolved = VehicleType.parse(vehicle_type)
        return _CAPACITY[resolved] if resolved else _CAPACITY[VehicleType.BUS_48]

    def generate(self, vehicle_type: str) -> SeatRows:
        resolved = self.resolve_type(vehicle_type)
        if resolved is None:
            Logger.base.debug(f'[LAYOUT] Unknown vehicle type {vehicle_type!r}, using van layout')
        return _layout_for(resolved)

    def seat_ids(self, vehicle_type: str) -> list[str]:
        return [cell.id for row in self.generate(vehicle_type) for cell in row if cell.is_seat]

    @Logger.io(truncate_content=True)
    def render(self, vehicle_type: str, bookings: BookingSource = ()) -> SeatRows:
        """
        Render the seat map with booking state.

        Args:
            vehicle_type: Vehicle type of the unit
            bookings: Bookings of this unit only, as SeatBooking records or a
                seat_number -> passenger_name mapping

        Returns:
            Rows of cells, seats carrying the booked passenger name
        """
        names = self.booked_names(bookings)
        layout = self.generate(vehicle_type)
        if not names:
            return layout

        return tuple(
            tuple(cell.with_booking(names.get(cell.id)) if cell.is_seat else cell for cell in row)
            for row in layout
        )

    def stats(self, vehicle_type: str, bookings: BookingSource = ()) -> SeatStats:
        return SeatStats.compute(
            capacity=self.capacity_of(vehicle_type), booked=len(self.booked_names(bookings))
        )

    @staticmethod
    def booked_names(bookings: BookingSource) -> dict[str, str]:
        if isinstance(bookings, Mapping):
            return {str(seat): name for seat, name in bookings.items()}
        return {booking.seat_number: booking.passenger_name for booking in bookings}
