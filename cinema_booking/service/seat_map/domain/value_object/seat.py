"""
Seat Value Object

One position of a room's row/column grid. Identity is the canonical
`"<row>,<column>"` string so booking snapshots from the API can be matched
without a lookup table.
"""

import attrs

from cinema_booking.platform.exception.exceptions import DomainError
from cinema_booking.service.seat_map.domain.enum import SeatCategory


def seat_id_for(row: int, column: int) -> str:
    return f'{row},{column}'


def row_label(row: int) -> str:
    """1 -> 'A', 26 -> 'Z', 27 -> 'AA' (spreadsheet style)"""
    if row <= 0:
        raise DomainError(f'Row must be positive, got {row}')
    letters = ''
    while row:
        row, remainder = divmod(row - 1, 26)
        letters = chr(ord('A') + remainder) + letters
    return letters


@attrs.define(frozen=True)
class Seat:
    id: str
    label: str
    row: int
    column: int
    category: SeatCategory = SeatCategory.STANDARD

    @classmethod
    def at(cls, *, row: int, column: int, category: SeatCategory = SeatCategory.STANDARD) -> 'Seat':
        return cls(
            id=seat_id_for(row, column),
            label=f'{row_label(row)}{column}',
            row=row,
            column=column,
            category=category,
        )

    @property
    def is_selectable(self) -> bool:
        return self.category != SeatCategory.DISABLED
