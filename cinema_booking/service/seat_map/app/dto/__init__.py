from cinema_booking.service.seat_map.app.dto.seat_view import SeatView

__all__ = ['SeatView']
