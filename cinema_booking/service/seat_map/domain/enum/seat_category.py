from enum import StrEnum


class SeatCategory(StrEnum):
    """Static seat class assigned by the room layout"""

    STANDARD = 'standard'
    PREMIUM = 'premium'
    DISABLED = 'disabled'
