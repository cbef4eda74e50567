"""
Unit tests for SelectionLedger

測試重點：
1. Toggle: Disabled / Booked seats rejected, toggle twice is the identity
2. Quote: subtotal by category, discount rules
"""

import pytest

from cinema_booking.service.seat_map.domain.seat_grid import SeatGrid
from cinema_booking.service.seat_map.domain.seat_map_errors import (
    InvalidDiscount,
    SeatNotSelectable,
    SeatUnavailable,
)
from cinema_booking.service.seat_map.domain.selection_ledger import SelectionLedger
from cinema_booking.service.seat_map.domain.value_object import Discount, PriceTable


@pytest.fixture
def grid(mixed_room, record):
    return SeatGrid.build(mixed_room, [record('5,5')])


@pytest.fixture
def ledger(price_table):
    return SelectionLedger(price_table=price_table)


@pytest.mark.unit
class TestToggle:
    def test_select_adds_seat_at_category_price(self, ledger, grid):
        selected = ledger.toggle(grid.seat('1,1'), grid).toggle(grid.seat('1,2'), grid)

        assert selected.seat_ids == {'1,1', '1,2'}
        assert {entry.seat_id: entry.unit_price for entry in selected} == {'1,1': 400, '1,2': 700}
        assert len(ledger) == 0

    def test_toggle_twice_restores_prior_ledger(self, ledger, grid):
        seat = grid.seat('3,3')
        base = ledger.toggle(grid.seat('1,1'), grid)

        assert base.toggle(seat, grid).toggle(seat, grid) == base

    def test_select_deselect_select(self, ledger, grid):
        seat = grid.seat('3,3')

        result = ledger.toggle(seat, grid).toggle(seat, grid).toggle(seat, grid)

        assert '3,3' in result

    def test_disabled_seat_rejected(self, ledger, grid):
        with pytest.raises(SeatNotSelectable, match='2,2'):
            ledger.toggle(grid.seat('2,2'), grid)

    def test_booked_seat_rejected(self, ledger, grid):
        with pytest.raises(SeatUnavailable, match='5,5'):
            ledger.toggle(grid.seat('5,5'), grid)

    def test_clear_and_without(self, ledger, grid):
        selected = ledger.toggle(grid.seat('1,1'), grid).toggle(grid.seat('3,3'), grid)

        assert not selected.clear()
        assert selected.without(['3,3', '4,4']).seat_ids == {'1,1'}
        assert selected.without(['4,4']) is selected


@pytest.mark.unit
class TestQuote:
    @pytest.fixture
    def selected(self, ledger, grid):
        return ledger.toggle(grid.seat('1,1'), grid).toggle(grid.seat('1,2'), grid)

    def test_subtotal_without_discount(self, selected):
        quote = selected.quote()

        assert quote.subtotal == 1100
        assert quote.discount == 0
        assert quote.total == 1100

    def test_discount_with_reference(self, selected):
        quote = selected.quote(discount=Discount(amount=200, reference='PROMO1'))

        assert quote.total == 900
        assert quote.discount_reference == 'PROMO1'

    def test_discount_equal_to_subtotal_gives_zero_total(self, selected):
        assert selected.quote(discount=Discount(amount=1100, reference='COMP')).total == 0

    def test_discount_above_subtotal_rejected(self, selected):
        with pytest.raises(InvalidDiscount, match='exceeds the subtotal of 1100'):
            selected.quote(discount=Discount(amount=1200, reference='PROMO1'))

    @pytest.mark.parametrize('reference', ['', '   '])
    def test_discount_without_reference_rejected(self, selected, reference):
        with pytest.raises(InvalidDiscount, match='reference'):
            selected.quote(discount=Discount(amount=100, reference=reference))

    def test_negative_discount_rejected(self, selected):
        with pytest.raises(InvalidDiscount):
            selected.quote(discount=Discount(amount=-1, reference='X'))

    def test_zero_discount_needs_no_reference(self, selected):
        assert selected.quote(discount=Discount(amount=0)).total == 1100

    def test_priced_against_given_table(self, selected):
        quote = selected.quote(PriceTable(standard=300, premium=500))

        assert quote.subtotal == 800

    @pytest.mark.parametrize(
        'seat_ids,discount',
        [
            (['1,1'], 0),
            (['1,1', '1,2', '3,3'], 250),
            (['1,2', '4,1', '4,2', '4,3'], 1900),
        ],
    )
    def test_total_is_sum_minus_discount(self, ledger, grid, seat_ids, discount):
        for seat_id in seat_ids:
            ledger = ledger.toggle(grid.seat(seat_id), grid)

        quote = ledger.quote(discount=Discount(amount=discount, reference='REF'))

        assert quote.total == sum(entry.unit_price for entry in ledger) - discount
        assert quote.total >= 0
