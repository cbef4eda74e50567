from typing import Optional

import attrs

from cinema_booking.service.seat_map.domain.enum import PaymentMethod


@attrs.define(frozen=True)
class CustomerInfo:
    name: str
    phone: str
    email: Optional[str] = None


@attrs.define(frozen=True)
class PaymentInfo:
    method: PaymentMethod = attrs.field(converter=PaymentMethod)
    transaction_reference: Optional[str] = None
    bank_name: Optional[str] = None
