from typing import Self

from dependency_injector.wiring import Provide, inject
from fastapi import Depends

from src.platform.config.di import Container
from src.platform.logging.loguru_io import Logger
from src.platform.metrics.seat_allocation_metrics import metrics
from src.service.seat_allocation.domain.booking_store import BookingRecord, BookingStore
from src.service.seat_allocation.domain.enum import OperatingMode
from src.service.seat_allocation.domain.selection_controller import SelectionController
from src.service.seat_allocation.domain.value_object import SeatBooking


class AssignSeatsUseCase:
    """
    Administrator seat naming without an interactive session.

    Runs the same select -> confirm -> save path as the seat map, so an empty
    passenger name clears the seats.
    """

    def __init__(self, selection_controller: SelectionController) -> None:
        self.selection_controller = selection_controller

    @classmethod
    @inject
    def depends(
        cls,
        selection_controller: SelectionController = Depends(
            Provide[Container.selection_controller]
        ),
    ) -> Self:
        return cls(selection_controller=selection_controller)

    @Logger.io(truncate_content=True)
    def assign(
        self,
        *,
        bookings: list[BookingRecord],
        bus_index: int,
        seat_ids: list[str],
        passenger_name: str,
    ) -> list[SeatBooking]:
        store = BookingStore.from_records(bookings)
        state = self.selection_controller.new_state(
            OperatingMode.ADMINISTRATOR, initial_selection=seat_ids
        )
        state = self.selection_controller.open_naming_prompt(state, store.names_for_unit(bus_index))

        outcome = self.selection_controller.save_prompt(
            state, store, bus_index=bus_index, passenger_name=passenger_name
        )
        if outcome.action is not None:
            metrics.record_mutation(action=outcome.action)
        return list(outcome.store)
