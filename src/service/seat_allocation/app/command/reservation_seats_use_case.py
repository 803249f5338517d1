"""
Reservation Seats Use Case

Keeps a trip's seat bookings in step with the reservations made against it:
seats chosen in an accepted reservation are booked, seats of a cancelled or
rejected reservation are freed.
"""

from typing import Optional

from src.platform.exception.exceptions import ConflictError
from src.platform.logging.loguru_io import Logger
from src.platform.metrics.seat_allocation_metrics import metrics
from src.service.seat_allocation.domain.booking_store import BookingRecord, BookingStore
from src.service.seat_allocation.domain.value_object import SeatBooking


class ReservationSeatsUseCase:
    @Logger.io(truncate_content=True)
    def apply_selection(
        self,
        *,
        bookings: list[BookingRecord],
        seat_keys: list[str],
        passenger_name: str,
        user_id: Optional[str] = None,
        booking_id: Optional[str] = None,
    ) -> list[SeatBooking]:
        store = BookingStore.from_records(bookings)
        updated = store.apply_selected_seats(
            seat_keys, passenger_name=passenger_name, user_id=user_id, booking_id=booking_id
        )

        Logger.base.info(
            f'[RESERVATION] Booked {len(updated) - len(store)} of {len(seat_keys)} '
            f'requested seats for booking {booking_id}'
        )
        metrics.record_mutation(action='apply')
        return list(updated)

    @Logger.io
    def check_selection(self, *, bookings: list[BookingRecord], seat_keys: list[str]) -> None:
        """Raise when any requested seat is already booked"""
        conflicts = BookingStore.from_records(bookings).find_conflicts(seat_keys)
        if conflicts:
            raise ConflictError(f'Seats already booked: {", ".join(conflicts)}')

    @Logger.io(truncate_content=True)
    def release(self, *, bookings: list[BookingRecord], booking_id: str) -> list[SeatBooking]:
        store = BookingStore.from_records(bookings)
        updated = store.release_booking(booking_id)

        Logger.base.info(
            f'[RESERVATION] Released {len(store) - len(updated)} seats of booking {booking_id}'
        )
        metrics.record_mutation(action='release')
        return list(updated)
