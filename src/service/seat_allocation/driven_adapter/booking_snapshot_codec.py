"""
Booking Snapshot Codec

JSON encoding of a trip's seat bookings, the form the hosting application
stores and republishes.
"""

import orjson

from src.platform.exception.exceptions import DomainError
from src.service.seat_allocation.domain.booking_store import BookingStore


def dumps_bookings(store: BookingStore) -> bytes:
    return orjson.dumps([booking.to_dict() for booking in store])


def loads_bookings(payload: bytes | str) -> BookingStore:
    try:
        records = orjson.loads(payload)
    except orjson.JSONDecodeError as e:
        raise DomainError(f'Invalid booking snapshot: {e}')

    if not isinstance(records, list):
        raise DomainError('Booking snapshot must be a JSON array')
    return BookingStore.from_records(records)
