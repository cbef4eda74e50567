import attrs

from cinema_booking.platform.config.core_setting import settings
from cinema_booking.platform.exception.exceptions import DomainError
from cinema_booking.service.seat_map.domain.enum import SeatCategory


def _non_negative(instance: 'PriceTable', attribute: attrs.Attribute, value: int) -> None:
    if value < 0:
        raise DomainError(f'{attribute.name} price must be non-negative, got {value}')


@attrs.define(frozen=True)
class PriceTable:
    """Per-showtime unit prices by seat category"""

    standard: int = attrs.field(validator=_non_negative)
    premium: int = attrs.field(validator=_non_negative)

    @classmethod
    def default(cls) -> 'PriceTable':
        return cls(
            standard=settings.DEFAULT_STANDARD_PRICE,
            premium=settings.DEFAULT_PREMIUM_PRICE,
        )

    def unit_price(self, category: SeatCategory) -> int:
        if category == SeatCategory.PREMIUM:
            return self.premium
        if category == SeatCategory.STANDARD:
            return self.standard
        raise DomainError(f'{category} seats have no price')
