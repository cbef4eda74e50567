"""
Seat Grid

Canonical, side-effect-free view of a room layout plus the booking snapshot of
one showtime. Every operation returns a new grid; nothing here performs I/O.
"""

from collections import Counter
from typing import Container, Dict, Iterable, Iterator, List, Mapping, Optional

import attrs

from cinema_booking.platform.logging.loguru_io import Logger
from cinema_booking.service.seat_map.domain.enum import SeatCategory, SeatStatus
from cinema_booking.service.seat_map.domain.seat_map_errors import LayoutError, SeatNotFound
from cinema_booking.service.seat_map.domain.value_object import (
    BookingRecord,
    RoomLayout,
    Seat,
    seat_id_for,
)


def _index_bookings(
    seats: Mapping[str, Seat], snapshot: Iterable[BookingRecord]
) -> Dict[str, BookingRecord]:
    bookings: Dict[str, BookingRecord] = {}
    for record in snapshot:
        if record.seat_id not in seats:
            raise LayoutError(
                f'Booking {record.booking_id} references unknown seat {record.seat_id}'
            )
        existing = bookings.get(record.seat_id)
        if existing is not None and existing.booking_id != record.booking_id:
            raise LayoutError(
                f'Seat {record.seat_id} is claimed by bookings '
                f'{existing.booking_id} and {record.booking_id}'
            )
        bookings[record.seat_id] = record
    return bookings


@attrs.define(frozen=True)
class SeatGrid:
    rows_count: int
    columns_count: int
    _seats: Mapping[str, Seat]
    _bookings: Mapping[str, BookingRecord] = attrs.field(factory=dict)

    @classmethod
    @Logger.io
    def build(
        cls, room_layout: RoomLayout, booking_snapshot: Iterable[BookingRecord] = ()
    ) -> 'SeatGrid':
        """
        Build the grid from `rows x columns` and mark the snapshot's seats booked.

        Raises:
            LayoutError: Non-positive dimensions, a seat type outside the grid, or a
                snapshot record for an unknown (or doubly booked) seat
        """
        rows, columns = room_layout.rows, room_layout.columns
        if rows <= 0 or columns <= 0:
            raise LayoutError(f'Room must have positive rows and columns, got {rows}x{columns}')

        for row, column in room_layout.seat_types:
            if not (1 <= row <= rows and 1 <= column <= columns):
                raise LayoutError(f'Seat type given for ({row}, {column}) outside {rows}x{columns}')

        seats = {
            seat_id_for(row, column): Seat.at(
                row=row, column=column, category=room_layout.category_at(row, column)
            )
            for row in range(1, rows + 1)
            for column in range(1, columns + 1)
        }

        return cls(
            rows_count=rows,
            columns_count=columns,
            seats=seats,
            bookings=_index_bookings(seats, booking_snapshot),
        )

    @Logger.io
    def with_bookings_applied(self, new_snapshot: Iterable[BookingRecord]) -> 'SeatGrid':
        """Replace the whole snapshot; seats missing from it revert to Available."""
        return attrs.evolve(self, bookings=_index_bookings(self._seats, new_snapshot))

    def seat(self, seat_id: str) -> Seat:
        try:
            return self._seats[seat_id]
        except KeyError:
            raise SeatNotFound(seat_id) from None

    def has_seat(self, seat_id: str) -> bool:
        return seat_id in self._seats

    def seat_at(self, row: int, column: int) -> Seat:
        return self.seat(seat_id_for(row, column))

    def status_of(self, seat_id: str, selection: Container[str] = ()) -> SeatStatus:
        seat = self.seat(seat_id)
        if seat_id in self._bookings:
            return SeatStatus.BOOKED
        if not seat.is_selectable:
            return SeatStatus.DISABLED
        if seat_id in selection:
            return SeatStatus.SELECTED
        return SeatStatus.AVAILABLE

    def is_booked(self, seat_id: str) -> bool:
        return seat_id in self._bookings

    def is_exhausted(self) -> bool:
        return all(
            seat.id in self._bookings
            for seat in self._seats.values()
            if seat.category != SeatCategory.DISABLED
        )

    def booking_for(self, seat_id: str) -> Optional[BookingRecord]:
        return self._bookings.get(seat_id)

    def find_booking(self, booking_id: str) -> Optional[BookingRecord]:
        return next(
            (record for record in self._bookings.values() if record.booking_id == booking_id),
            None,
        )

    @property
    def bookings(self) -> tuple[BookingRecord, ...]:
        return tuple(self._bookings.values())

    def booked_seat_ids(self) -> frozenset[str]:
        return frozenset(self._bookings)

    @property
    def seats(self) -> Iterator[Seat]:
        return iter(self._seats.values())

    def __len__(self) -> int:
        return len(self._seats)

    def rows(self) -> List[List[Seat]]:
        """Seats grouped by row, each row in column order."""
        return [
            [self._seats[seat_id_for(row, column)] for column in range(1, self.columns_count + 1)]
            for row in range(1, self.rows_count + 1)
        ]

    def summary(self, selection: Container[str] = ()) -> Dict[SeatStatus, int]:
        counts = Counter(self.status_of(seat_id, selection) for seat_id in self._seats)
        return {status: counts.get(status, 0) for status in SeatStatus}
