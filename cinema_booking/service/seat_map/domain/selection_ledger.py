"""
Selection Ledger

The seats the current user has picked but not yet booked, with their unit prices.
Immutable: every operation returns a new ledger.
"""

from typing import Iterable, Iterator, Mapping, Optional

import attrs

from cinema_booking.platform.logging.loguru_io import Logger
from cinema_booking.service.seat_map.domain.enum import SeatCategory
from cinema_booking.service.seat_map.domain.seat_grid import SeatGrid
from cinema_booking.service.seat_map.domain.seat_map_errors import (
    InvalidDiscount,
    SeatNotSelectable,
    SeatUnavailable,
)
from cinema_booking.service.seat_map.domain.value_object import (
    Discount,
    PriceQuote,
    PriceTable,
    Seat,
)


@attrs.define(frozen=True)
class LedgerEntry:
    seat_id: str
    category: SeatCategory
    unit_price: int


@attrs.define(frozen=True)
class SelectionLedger:
    price_table: PriceTable
    _entries: Mapping[str, LedgerEntry] = attrs.field(factory=dict)

    @Logger.io
    def toggle(self, seat: Seat, grid: SeatGrid) -> 'SelectionLedger':
        """
        Select the seat if absent, deselect it if present.

        Raises:
            SeatNotSelectable: Seat category is Disabled
            SeatUnavailable: Seat is booked in the grid's snapshot
        """
        if not seat.is_selectable:
            raise SeatNotSelectable(seat.id)
        if grid.is_booked(seat.id):
            raise SeatUnavailable(seat.id)

        entries = dict(self._entries)
        if seat.id in entries:
            del entries[seat.id]
        else:
            entries[seat.id] = LedgerEntry(
                seat_id=seat.id,
                category=seat.category,
                unit_price=self.price_table.unit_price(seat.category),
            )
        return attrs.evolve(self, entries=entries)

    @Logger.io
    def quote(
        self, price_table: Optional[PriceTable] = None, discount: Optional[Discount] = None
    ) -> PriceQuote:
        """
        Price the selection against `price_table` (the ledger's own table by default).

        A discount must be non-negative, must not exceed the subtotal, and needs a
        non-blank reference whenever it is greater than zero.

        Raises:
            InvalidDiscount: The discount breaks one of the rules above
        """
        table = price_table or self.price_table
        subtotal = sum(table.unit_price(entry.category) for entry in self._entries.values())

        if discount is None or discount.amount == 0:
            return PriceQuote(subtotal=subtotal)

        if discount.amount < 0:
            raise InvalidDiscount(f'Discount must be non-negative, got {discount.amount}')
        if discount.amount > subtotal:
            raise InvalidDiscount(
                f'Discount {discount.amount} exceeds the subtotal of {subtotal}'
            )
        reference = (discount.reference or '').strip()
        if not reference:
            raise InvalidDiscount('A discount needs a reference')

        return PriceQuote(subtotal=subtotal, discount=discount.amount, discount_reference=reference)

    def clear(self) -> 'SelectionLedger':
        return attrs.evolve(self, entries={})

    def without(self, seat_ids: Iterable[str]) -> 'SelectionLedger':
        dropped = set(seat_ids)
        if not dropped & self._entries.keys():
            return self
        return attrs.evolve(
            self,
            entries={k: v for k, v in self._entries.items() if k not in dropped},
        )

    @property
    def seat_ids(self) -> frozenset[str]:
        return frozenset(self._entries)

    @property
    def entries(self) -> tuple[LedgerEntry, ...]:
        return tuple(self._entries.values())

    def __contains__(self, seat_id: object) -> bool:
        return seat_id in self._entries

    def __iter__(self) -> Iterator[LedgerEntry]:
        return iter(self._entries.values())

    def __len__(self) -> int:
        return len(self._entries)

    def __bool__(self) -> bool:
        return bool(self._entries)
