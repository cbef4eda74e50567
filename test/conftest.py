"""
Test Configuration and Fixtures

The booking API is always a mock here: unit tests drive SeatMapSession through
AsyncMock(spec=IBookingApi), and the httpx adapter is exercised against
httpx.MockTransport in its own module.
"""

# =============================================================================
# Environment setup MUST happen before importing cinema_booking: settings and
# the loguru sinks are configured at import time
# =============================================================================
import os
from pathlib import Path


def _early_setup_test_environment() -> None:
    test_log_dir = Path(__file__).parent / 'test_log'
    test_log_dir.mkdir(exist_ok=True)
    os.environ['TEST_LOG_DIR'] = str(test_log_dir)
    os.environ.setdefault('DEBUG', 'false')
    os.environ.setdefault('BOOKING_API_BASE_URL', 'http://booking-api.test')


_early_setup_test_environment()

from unittest.mock import AsyncMock  # noqa: E402

import pytest  # noqa: E402

from cinema_booking.service.seat_map.app.interface import IBookingApi  # noqa: E402
from cinema_booking.service.seat_map.app.seat_map_session import SeatMapSession  # noqa: E402
from cinema_booking.service.seat_map.domain.enum import (  # noqa: E402
    PaymentMethod,
    SeatCategory,
)
from cinema_booking.service.seat_map.domain.value_object import (  # noqa: E402
    BookingRecord,
    CustomerInfo,
    PaymentInfo,
    PriceTable,
    RoomLayout,
)


SHOWTIME_ID = 'showtime-1'
STANDARD_PRICE = 400
PREMIUM_PRICE = 700


@pytest.fixture
def price_table() -> PriceTable:
    return PriceTable(standard=STANDARD_PRICE, premium=PREMIUM_PRICE)


@pytest.fixture
def standard_room() -> RoomLayout:
    """5x5, all Standard"""
    return RoomLayout(rows=5, columns=5, room_id='room-1')


@pytest.fixture
def mixed_room() -> RoomLayout:
    """5x5 with a Premium seat at 1,2 and a Disabled seat at 2,2"""
    return RoomLayout(
        rows=5,
        columns=5,
        seat_types={(1, 2): SeatCategory.PREMIUM, (2, 2): SeatCategory.DISABLED},
        room_id='room-1',
    )


@pytest.fixture
def booking_api() -> AsyncMock:
    return AsyncMock(spec=IBookingApi)


@pytest.fixture
def customer() -> CustomerInfo:
    return CustomerInfo(name='Ayesha Khan', phone='0300-1234567')


@pytest.fixture
def cash() -> PaymentInfo:
    return PaymentInfo(method=PaymentMethod.CASH)


@pytest.fixture
def make_session(booking_api, mixed_room, price_table):
    def _make(*, room_layout: RoomLayout | None = None, bookings=()) -> SeatMapSession:
        return SeatMapSession(
            api=booking_api,
            showtime_id=SHOWTIME_ID,
            room_layout=room_layout or mixed_room,
            price_table=price_table,
            initial_bookings=bookings,
        )

    return _make


def booked(seat_id: str, booking_id: str | None = None) -> BookingRecord:
    return BookingRecord(
        booking_id=booking_id or f'bk-{seat_id}',
        seat_id=seat_id,
        showtime_id=SHOWTIME_ID,
    )


@pytest.fixture
def record():
    """Factory for BookingRecords of the test showtime"""
    return booked
