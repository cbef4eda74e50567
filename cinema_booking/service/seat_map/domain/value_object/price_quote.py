from typing import Optional

import attrs


@attrs.define(frozen=True)
class Discount:
    amount: int
    reference: str = ''


@attrs.define(frozen=True)
class PriceQuote:
    """Subtotal, validated discount and total of the current selection"""

    subtotal: int
    discount: int = 0
    discount_reference: Optional[str] = None

    @property
    def total(self) -> int:
        return self.subtotal - self.discount
