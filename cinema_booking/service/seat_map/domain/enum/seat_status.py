"""
Seat Status Enum - Domain Value Object

Derived per seat from the booking snapshot and the active selection, never stored.
"""

from enum import StrEnum


class SeatStatus(StrEnum):
    AVAILABLE = 'available'
    SELECTED = 'selected'
    BOOKED = 'booked'
    DISABLED = 'disabled'
