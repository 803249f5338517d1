"""
Test Configuration and Fixtures

Environment setup MUST happen before any application import: the logging
config reads TEST_LOG_DIR at import time.
"""

import os
from pathlib import Path


def _early_setup_test_environment() -> None:
    """Set test environment variables before any module imports."""
    test_log_dir = Path(__file__).parent / 'test_log'
    test_log_dir.mkdir(exist_ok=True)
    os.environ['TEST_LOG_DIR'] = str(test_log_dir)


# Call immediately to set env vars before any imports
_early_setup_test_environment()

from collections.abc import Generator  # noqa: E402

from fastapi.testclient import TestClient  # noqa: E402
import pytest  # noqa: E402

from src.service.seat_allocation.domain.booking_store import BookingStore  # noqa: E402
from src.service.seat_allocation.domain.value_object import SeatBooking  # noqa: E402


@pytest.fixture
def client() -> Generator[TestClient, None, None]:
    """FastAPI client with the lifespan (DI wiring) running"""
    from src.main import app

    with TestClient(app) as test_client:
        yield test_client


@pytest.fixture
def two_unit_store() -> BookingStore:
    """Bookings spread over two vehicle units"""
    return BookingStore(
        (
            SeatBooking(seat_number='1', passenger_name='Ayse', bus_index=0),
            SeatBooking(seat_number='2', passenger_name='Mehmet', bus_index=0),
            SeatBooking(seat_number='1', passenger_name='Zeynep', bus_index=1),
            SeatBooking(seat_number='5', passenger_name='Can', bus_index=1, booking_id='bk-1'),
        )
    )
