from enum import StrEnum


class BookingFailureReason(StrEnum):
    """Machine-readable reason attached to a failed booking API call"""

    SEAT_ALREADY_BOOKED = 'seat_already_booked'
    VALIDATION_FAILED = 'validation_failed'
    NOT_FOUND = 'not_found'
    SERVER_ERROR = 'server_error'
    NETWORK_ERROR = 'network_error'
    TIMEOUT = 'timeout'
