"""Seat Map Value Objects"""

from cinema_booking.service.seat_map.domain.value_object.booking_record import BookingRecord
from cinema_booking.service.seat_map.domain.value_object.customer_info import (
    CustomerInfo,
    PaymentInfo,
)
from cinema_booking.service.seat_map.domain.value_object.price_quote import Discount, PriceQuote
from cinema_booking.service.seat_map.domain.value_object.price_table import PriceTable
from cinema_booking.service.seat_map.domain.value_object.room_layout import Coordinate, RoomLayout
from cinema_booking.service.seat_map.domain.value_object.seat import Seat, row_label, seat_id_for

__all__ = [
    'BookingRecord',
    'Coordinate',
    'CustomerInfo',
    'Discount',
    'PaymentInfo',
    'PriceQuote',
    'PriceTable',
    'RoomLayout',
    'Seat',
    'row_label',
    'seat_id_for',
]
