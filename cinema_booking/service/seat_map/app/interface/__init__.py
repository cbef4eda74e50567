from cinema_booking.service.seat_map.app.interface.i_booking_api import IBookingApi

__all__ = ['IBookingApi']
