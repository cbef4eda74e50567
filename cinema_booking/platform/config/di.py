"""
https://python-dependency-injector.ets-labs.org/index.html
"""

from dependency_injector import containers, providers

from cinema_booking.platform.config.core_setting import Settings
from cinema_booking.service.seat_map.app.seat_map_session import SeatMapSession
from cinema_booking.service.seat_map.driven_adapter.booking_api_httpx_impl import (
    BookingApiHttpxImpl,
    build_http_client,
)


class Container(containers.DeclarativeContainer):
    # Configuration
    config_service = providers.Singleton(Settings)

    # Booking API (one pooled client per process)
    http_client = providers.Singleton(build_http_client, settings=config_service)
    booking_api = providers.Singleton(BookingApiHttpxImpl, client=http_client)

    # Sessions are per showtime view; callers pass room_id / showtime_id
    seat_map_session_loader = providers.Callable(SeatMapSession.load, api=booking_api)


container = Container()
