"""
Unit tests for SeatGrid

測試重點：
1. Grid completeness: rows x columns seats, one per coordinate
2. Status derivation: Booked > Disabled > Selected > Available
3. Snapshot replacement and LayoutError fail-fast cases
"""

import pytest

from cinema_booking.service.seat_map.domain.enum import SeatCategory, SeatStatus
from cinema_booking.service.seat_map.domain.seat_grid import SeatGrid
from cinema_booking.service.seat_map.domain.seat_map_errors import LayoutError, SeatNotFound
from cinema_booking.service.seat_map.domain.value_object import RoomLayout


@pytest.mark.unit
class TestBuild:
    @pytest.mark.parametrize('rows,columns', [(1, 1), (5, 5), (3, 8), (27, 2)])
    def test_one_seat_per_coordinate(self, rows, columns):
        grid = SeatGrid.build(RoomLayout(rows=rows, columns=columns))

        coordinates = [(seat.row, seat.column) for seat in grid.seats]
        assert len(grid) == rows * columns
        assert len(set(coordinates)) == rows * columns
        assert all(1 <= r <= rows and 1 <= c <= columns for r, c in coordinates)

    def test_seat_ids_and_labels(self, standard_room):
        grid = SeatGrid.build(standard_room)

        seat = grid.seat_at(3, 3)
        assert seat.id == '3,3'
        assert seat.label == 'C3'
        assert grid.seat('1,5').label == 'A5'

    def test_categories_default_to_standard(self, mixed_room):
        grid = SeatGrid.build(mixed_room)

        assert grid.seat('1,2').category == SeatCategory.PREMIUM
        assert grid.seat('2,2').category == SeatCategory.DISABLED
        assert grid.seat('4,4').category == SeatCategory.STANDARD

    def test_snapshot_marks_seats_booked(self, standard_room, record):
        grid = SeatGrid.build(standard_room, [record('1,1'), record('2,3')])

        assert grid.status_of('1,1') == SeatStatus.BOOKED
        assert grid.status_of('2,3') == SeatStatus.BOOKED
        assert grid.status_of('2,4') == SeatStatus.AVAILABLE
        assert grid.booked_seat_ids() == {'1,1', '2,3'}

    @pytest.mark.parametrize('rows,columns', [(0, 5), (5, 0), (-1, 3)])
    def test_fail_on_non_positive_dimensions(self, rows, columns):
        with pytest.raises(LayoutError, match='positive rows and columns'):
            SeatGrid.build(RoomLayout(rows=rows, columns=columns))

    def test_fail_on_seat_type_outside_grid(self):
        layout = RoomLayout(rows=2, columns=2, seat_types={(3, 1): SeatCategory.PREMIUM})

        with pytest.raises(LayoutError, match='outside 2x2'):
            SeatGrid.build(layout)

    def test_fail_on_snapshot_with_unknown_seat(self, standard_room, record):
        with pytest.raises(LayoutError, match='unknown seat 9,9'):
            SeatGrid.build(standard_room, [record('9,9')])

    def test_fail_on_seat_claimed_twice(self, standard_room, record):
        with pytest.raises(LayoutError, match='claimed by bookings'):
            SeatGrid.build(standard_room, [record('1,1', 'bk-a'), record('1,1', 'bk-b')])

    def test_repeated_record_is_collapsed(self, standard_room, record):
        grid = SeatGrid.build(standard_room, [record('1,1'), record('1,1')])

        assert len(grid.bookings) == 1


@pytest.mark.unit
class TestStatusOf:
    def test_selection_only_affects_free_seats(self, mixed_room, record):
        grid = SeatGrid.build(mixed_room, [record('1,1')])
        selection = {'1,1', '2,2', '3,3'}

        assert grid.status_of('1,1', selection) == SeatStatus.BOOKED
        assert grid.status_of('2,2', selection) == SeatStatus.DISABLED
        assert grid.status_of('3,3', selection) == SeatStatus.SELECTED
        assert grid.status_of('4,4', selection) == SeatStatus.AVAILABLE

    def test_exactly_one_status_per_seat(self, mixed_room, record):
        grid = SeatGrid.build(mixed_room, [record('1,1'), record('5,5')])
        selection = {'1,2', '3,3', '5,5'}

        summary = grid.summary(selection)

        assert sum(summary.values()) == len(grid)
        assert summary[SeatStatus.BOOKED] == 2
        assert summary[SeatStatus.DISABLED] == 1
        assert summary[SeatStatus.SELECTED] == 2
        assert summary[SeatStatus.AVAILABLE] == 25 - 5

    def test_unknown_seat(self, standard_room):
        grid = SeatGrid.build(standard_room)

        with pytest.raises(SeatNotFound):
            grid.status_of('0,1')


@pytest.mark.unit
class TestWithBookingsApplied:
    def test_returns_new_grid(self, standard_room, record):
        grid = SeatGrid.build(standard_room)

        updated = grid.with_bookings_applied([record('1,1')])

        assert grid.status_of('1,1') == SeatStatus.AVAILABLE
        assert updated.status_of('1,1') == SeatStatus.BOOKED

    def test_dropped_seat_reverts_to_available(self, standard_room, record):
        grid = SeatGrid.build(standard_room, [record('1,1'), record('1,2')])

        updated = grid.with_bookings_applied([record('1,2')])

        assert updated.status_of('1,1') == SeatStatus.AVAILABLE
        assert updated.booking_for('1,1') is None
        assert updated.booking_for('1,2') == record('1,2')

    def test_fail_on_unknown_seat(self, standard_room, record):
        grid = SeatGrid.build(standard_room)

        with pytest.raises(LayoutError):
            grid.with_bookings_applied([record('6,1')])

    def test_find_booking_by_id(self, standard_room, record):
        grid = SeatGrid.build(standard_room, [record('2,2', 'bk-22')])

        assert grid.find_booking('bk-22').seat_id == '2,2'
        assert grid.find_booking('missing') is None


@pytest.mark.unit
class TestGridQueries:
    def test_exhausted_ignores_disabled_seats(self, record):
        layout = RoomLayout(rows=1, columns=3, seat_types={(1, 3): SeatCategory.DISABLED})
        grid = SeatGrid.build(layout, [record('1,1')])

        assert not grid.is_exhausted()
        assert grid.with_bookings_applied([record('1,1'), record('1,2')]).is_exhausted()

    def test_rows_in_column_order(self, standard_room):
        rows = SeatGrid.build(standard_room).rows()

        assert len(rows) == 5
        assert [seat.id for seat in rows[1]] == ['2,1', '2,2', '2,3', '2,4', '2,5']
