"""
Booking API Interface

The remote booking service the seat map consumes. Implementations own the wire
format and transport; the seat map only relies on each call being atomic.
"""

from abc import ABC, abstractmethod
from typing import Iterable, List, Optional

from cinema_booking.service.seat_map.domain.value_object import (
    BookingRecord,
    CustomerInfo,
    PaymentInfo,
    PriceQuote,
    RoomLayout,
)


class IBookingApi(ABC):
    """
    Every method either fully succeeds with the documented shape or raises
    BookingApiError with a BookingFailureReason. create_booking and cancel_booking
    must not be retried by the transport.
    """

    @abstractmethod
    async def fetch_room_layout(self, *, room_id: str) -> RoomLayout:
        pass

    @abstractmethod
    async def fetch_booked_seats(
        self, *, showtime_id: str, room_layout: Optional[RoomLayout] = None
    ) -> List[BookingRecord]:
        """Current bookings; seat ids are resolved against `room_layout` when given."""
        pass

    @abstractmethod
    async def create_booking(
        self,
        *,
        showtime_id: str,
        room_layout: RoomLayout,
        seat_ids: Iterable[str],
        customer_info: CustomerInfo,
        payment_info: PaymentInfo,
        price_quote: PriceQuote,
    ) -> List[BookingRecord]:
        """
        Book all seats of `room_layout` in one request.

        Returns:
            One BookingRecord per booked seat
        """
        pass

    @abstractmethod
    async def cancel_booking(self, *, booking_id: str, cancelled_by: str) -> None:
        pass
