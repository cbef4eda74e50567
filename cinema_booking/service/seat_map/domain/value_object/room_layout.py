from typing import Dict, Optional, Tuple

import attrs

from cinema_booking.service.seat_map.domain.enum import SeatCategory
from cinema_booking.service.seat_map.domain.value_object.seat import seat_id_for


Coordinate = Tuple[int, int]


@attrs.define(frozen=True)
class RoomLayout:
    """
    Room grid definition (Value Object).

    seat_types only lists the coordinates that differ from Standard.
    seat_refs holds the booking API's own seat ids, where the API names seats
    by something other than their coordinate. They belong to this room only.
    """

    rows: int
    columns: int
    seat_types: Dict[Coordinate, SeatCategory] = attrs.field(factory=dict)
    room_id: str | None = None
    seat_refs: Dict[Coordinate, str] = attrs.field(factory=dict)

    def category_at(self, row: int, column: int) -> SeatCategory:
        return self.seat_types.get((row, column), SeatCategory.STANDARD)

    def seat_ref(self, seat_id: str) -> str:
        """API seat id for a `"<row>,<column>"` seat id; unchanged when unknown."""
        for (row, column), ref in self.seat_refs.items():
            if seat_id_for(row, column) == seat_id:
                return ref
        return seat_id

    def seat_id_of(self, seat_ref: str) -> Optional[str]:
        for (row, column), ref in self.seat_refs.items():
            if ref == seat_ref:
                return seat_id_for(row, column)
        return None
