from typing import Self

from dependency_injector.wiring import Provide, inject
from fastapi import Depends

from src.platform.config.di import Container
from src.platform.logging.loguru_io import Logger
from src.platform.metrics.seat_allocation_metrics import metrics
from src.service.seat_allocation.app.dto import SeatMapView
from src.service.seat_allocation.domain.booking_store import BookingRecord, BookingStore
from src.service.seat_allocation.domain.layout_generator import LayoutGenerator


class RenderSeatMapUseCase:
    def __init__(self, layout_generator: LayoutGenerator) -> None:
        self.layout_generator = layout_generator

    @classmethod
    @inject
    def depends(
        cls,
        layout_generator: LayoutGenerator = Depends(Provide[Container.layout_generator]),
    ) -> Self:
        return cls(layout_generator=layout_generator)

    @Logger.io(truncate_content=True)
    def get_layout(self, *, vehicle_type: str) -> SeatMapView:
        """Empty seat map of a vehicle type"""
        return self.render(vehicle_type=vehicle_type, bookings=[])

    @Logger.io(truncate_content=True)
    def render(self, *, vehicle_type: str, bookings: list[BookingRecord]) -> SeatMapView:
        """Seat map of one unit annotated with that unit's bookings"""
        unit_bookings = list(BookingStore.from_records(bookings))
        rows = self.layout_generator.render(vehicle_type, unit_bookings)
        metrics.record_render(vehicle_type=vehicle_type)

        Logger.base.info(
            f'[SEAT_MAP] Rendered {vehicle_type} with {len(unit_bookings)} booked seats'
        )
        return SeatMapView(
            vehicle_type=vehicle_type,
            rows=rows,
            stats=self.layout_generator.stats(vehicle_type, unit_bookings),
        )
