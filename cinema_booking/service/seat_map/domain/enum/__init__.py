"""Seat Map Domain Enums"""

from cinema_booking.service.seat_map.domain.enum.booking_failure_reason import (
    BookingFailureReason,
)
from cinema_booking.service.seat_map.domain.enum.payment_method import PaymentMethod
from cinema_booking.service.seat_map.domain.enum.seat_category import SeatCategory
from cinema_booking.service.seat_map.domain.enum.seat_status import SeatStatus
from cinema_booking.service.seat_map.domain.enum.session_state import SessionState

__all__ = [
    'BookingFailureReason',
    'PaymentMethod',
    'SeatCategory',
    'SeatStatus',
    'SessionState',
]
