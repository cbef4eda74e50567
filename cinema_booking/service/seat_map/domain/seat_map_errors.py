"""
Seat map error taxonomy.

Every error carries a `kind` so a caller can render feedback without matching on
message text. Local errors (layout, toggle, discount, validation, busy) never reach
the network; remote failures wrap the API's `BookingFailureReason`.
"""

from enum import StrEnum

from cinema_booking.platform.exception.exceptions import (
    ConflictError,
    DomainError,
    NotFoundError,
    UpstreamError,
)
from cinema_booking.service.seat_map.domain.enum import BookingFailureReason


class ErrorKind(StrEnum):
    LAYOUT = 'layout_error'
    SEAT_NOT_SELECTABLE = 'seat_not_selectable'
    SEAT_UNAVAILABLE = 'seat_unavailable'
    INVALID_DISCOUNT = 'invalid_discount'
    VALIDATION = 'validation_error'
    SESSION_BUSY = 'session_busy'
    BOOKING_NOT_FOUND = 'booking_not_found'
    BOOKING_FAILED = 'booking_failed'
    CANCELLATION_FAILED = 'cancellation_failed'
    BOOKING_API = 'booking_api_error'


class LayoutError(DomainError):
    kind = ErrorKind.LAYOUT

    def __init__(self, message: str) -> None:
        super().__init__(message, 422)


class SeatNotFound(LayoutError):
    def __init__(self, seat_id: str) -> None:
        self.seat_id = seat_id
        super().__init__(f'Seat {seat_id} does not exist in this room')


class SeatNotSelectable(DomainError):
    kind = ErrorKind.SEAT_NOT_SELECTABLE

    def __init__(self, seat_id: str) -> None:
        self.seat_id = seat_id
        super().__init__(f'Seat {seat_id} is disabled and cannot be selected')


class SeatUnavailable(ConflictError):
    kind = ErrorKind.SEAT_UNAVAILABLE

    def __init__(self, seat_id: str) -> None:
        self.seat_id = seat_id
        super().__init__(f'Seat {seat_id} is already booked')


class InvalidDiscount(DomainError):
    kind = ErrorKind.INVALID_DISCOUNT


class ValidationError(DomainError):
    kind = ErrorKind.VALIDATION


class SessionBusy(ConflictError):
    kind = ErrorKind.SESSION_BUSY


class BookingNotFound(NotFoundError):
    kind = ErrorKind.BOOKING_NOT_FOUND

    def __init__(self, booking_id: str) -> None:
        self.booking_id = booking_id
        super().__init__(f'Booking {booking_id} is not part of the current snapshot')


class BookingApiError(UpstreamError):
    """Raised by IBookingApi implementations; the reason is machine-readable."""

    kind = ErrorKind.BOOKING_API

    def __init__(
        self, message: str, *, reason: BookingFailureReason, status_code: int = 502
    ) -> None:
        self.reason = reason
        super().__init__(message, status_code)


class BookingFailed(UpstreamError):
    kind = ErrorKind.BOOKING_FAILED

    def __init__(self, message: str, *, reason: BookingFailureReason) -> None:
        self.reason = reason
        super().__init__(message)


class CancellationFailed(UpstreamError):
    kind = ErrorKind.CANCELLATION_FAILED

    def __init__(
        self, message: str, *, booking_id: str, reason: BookingFailureReason
    ) -> None:
        self.booking_id = booking_id
        self.reason = reason
        super().__init__(message)
