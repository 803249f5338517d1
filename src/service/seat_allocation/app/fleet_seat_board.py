"""
Fleet Seat Board

Seat allocation across every vehicle of a trip. Holds the trip-wide booking
list, splits it per unit for the seat map sessions and merges each unit's
saves back into it.
"""

from typing import Any, Callable, Iterable, Optional

from src.platform.config.core_setting import settings
from src.platform.logging.loguru_io import Logger
from src.platform.metrics.seat_allocation_metrics import metrics
from src.service.seat_allocation.app.seat_map_session import SeatMapSession, SelectSeatsCallback
from src.service.seat_allocation.domain.booking_store import BookingRecord, BookingStore
from src.service.seat_allocation.domain.enum import OperatingMode
from src.service.seat_allocation.domain.fleet_packer import FleetPacker
from src.service.seat_allocation.domain.layout_generator import LayoutGenerator
from src.service.seat_allocation.domain.seat_count_validator import validate_fleet_size
from src.service.seat_allocation.domain.value_object import FleetEntry, SeatBooking, VehicleUnit
from src.service.seat_allocation.driven_adapter.booking_snapshot_codec import (
    dumps_bookings,
    loads_bookings,
)


PublishCallback = Callable[[list[SeatBooking]], None]


class FleetSeatBoard:
    def __init__(
        self,
        *,
        fleet: Iterable[FleetEntry] = (),
        bookings: Iterable[BookingRecord] = (),
        transportation_type: Optional[str] = None,
        on_publish: Optional[PublishCallback] = None,
        layout_generator: Optional[LayoutGenerator] = None,
    ) -> None:
        """
        Args:
            fleet: Vehicle groups of the trip, in unit order
            bookings: Trip-wide seat bookings tagged with their bus_index
            transportation_type: Legacy single-vehicle type, used when no fleet is defined
            on_publish: Receives the full booking list after every unit save
        """
        self.fleet = list(fleet)
        self.on_publish = on_publish
        self._layout = layout_generator or LayoutGenerator()
        self._store = BookingStore.from_records(bookings)
        self._units = FleetPacker.flatten(
            self.fleet, fallback_type=transportation_type or settings.DEFAULT_VEHICLE_TYPE
        )

    @classmethod
    def for_seat_count(cls, total_seats: Any, **kwargs: Any) -> 'FleetSeatBoard':
        """Board for a trip sized by passenger count"""
        total = validate_fleet_size(total_seats, max_seats=settings.MAX_FLEET_SEATS)
        fleet = FleetPacker().pack(total)
        metrics.record_fleet_plan(unit_count=len(fleet))
        return cls(fleet=fleet, **kwargs)

    @classmethod
    def from_snapshot(cls, payload: bytes | str, **kwargs: Any) -> 'FleetSeatBoard':
        return cls(bookings=loads_bookings(payload), **kwargs)

    # ========== Units ==========

    def units(self) -> list[VehicleUnit]:
        return list(self._units)

    def unit(self, bus_index: int) -> VehicleUnit:
        """The unit at bus_index, or the first unit when out of range"""
        if 0 <= bus_index < len(self._units):
            return self._units[bus_index]
        Logger.base.warning(f'[FLEET] Unit {bus_index} out of range, falling back to unit 0')
        return self._units[0]

    def total_capacity(self) -> int:
        return sum(unit.capacity for unit in self._units)

    # ========== Bookings ==========

    @property
    def bookings(self) -> list[SeatBooking]:
        return list(self._store)

    def unit_bookings(self, bus_index: int) -> list[SeatBooking]:
        return self._store.for_unit(self.unit(bus_index).unit_index)

    def save_unit(self, bus_index: int, unit_bookings: Iterable[BookingRecord]) -> list[SeatBooking]:
        """Replace one unit's bookings and publish the merged trip-wide list"""
        unit_index = self.unit(bus_index).unit_index
        self._store = self._store.save(unit_index, unit_bookings)

        merged = self.bookings
        if self.on_publish is not None:
            self.on_publish(merged)
        return merged

    def snapshot(self) -> bytes:
        return dumps_bookings(self._store)

    # ========== Sessions ==========

    def open_session(
        self,
        bus_index: int = 0,
        *,
        mode: OperatingMode = OperatingMode.ADMINISTRATOR,
        max_selection: Optional[int] = None,
        initial_selected_seats: Iterable[str] = (),
        on_select_seats: Optional[SelectSeatsCallback] = None,
    ) -> SeatMapSession:
        """Seat map session of one unit whose saves flow back into this board"""
        unit = self.unit(bus_index)
        return SeatMapSession(
            vehicle_type=unit.type,
            booked_seats=self.unit_bookings(unit.unit_index),
            mode=mode,
            bus_index=unit.unit_index,
            max_selection=max_selection,
            initial_selected_seats=initial_selected_seats,
            on_save_seats=lambda bookings: self.save_unit(unit.unit_index, bookings),
            on_select_seats=on_select_seats,
            layout_generator=self._layout,
        )
