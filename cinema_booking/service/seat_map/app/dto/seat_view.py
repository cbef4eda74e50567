"""Seat view DTO."""

from typing import Optional

import attrs

from cinema_booking.service.seat_map.domain.enum import SeatCategory, SeatStatus


@attrs.define(frozen=True)
class SeatView:
    """
    One cell of the seat map as a consumer draws it.

    booking_id is set only for booked seats, so a click on a booked seat can go
    straight to cancellation.
    """

    seat_id: str
    label: str
    row: int
    column: int
    category: SeatCategory
    status: SeatStatus
    unit_price: Optional[int] = None
    booking_id: Optional[str] = None
