"""
Booking API over HTTP (httpx).

Endpoints:
- GET    /api/rooms/{room_id}
- GET    /api/showtimes/{showtime_id}/booked-seats
- POST   /api/bookings
- DELETE /api/bookings/cancel/{booking_id}?cancelledBy=<role>

The API names seats by its own ids. They are kept on the RoomLayout they came
with and translated to the seat map's `"<row>,<column>"` ids against the
caller's layout, so the adapter holds no per-room state and can be shared.
Ids without a known translation are passed through unchanged.
"""

from typing import Any, Iterable, List, Optional, Type, TypeVar

import httpx
import orjson
from pydantic import BaseModel, ValidationError as SchemaValidationError

from cinema_booking.platform.config.core_setting import Settings, settings as default_settings
from cinema_booking.platform.logging.loguru_io import Logger
from cinema_booking.service.seat_map.app.interface import IBookingApi
from cinema_booking.service.seat_map.domain.enum import BookingFailureReason, SeatCategory
from cinema_booking.service.seat_map.domain.seat_map_errors import BookingApiError
from cinema_booking.service.seat_map.domain.value_object import (
    BookingRecord,
    CustomerInfo,
    PaymentInfo,
    PriceQuote,
    RoomLayout,
    seat_id_for,
)
from cinema_booking.service.seat_map.driven_adapter.schema.booking_api_schema import (
    BookedSeatsResponse,
    CreateBookingRequest,
    CreateBookingResponse,
    ErrorResponse,
    RoomLayoutResponse,
)


_SchemaT = TypeVar('_SchemaT', bound=BaseModel)

_SEAT_TYPE_CATEGORIES = {
    'normal': SeatCategory.STANDARD,
    'standard': SeatCategory.STANDARD,
    'vip': SeatCategory.PREMIUM,
    'premium': SeatCategory.PREMIUM,
    'disabled': SeatCategory.DISABLED,
}


def _reason_for_status(status_code: int) -> BookingFailureReason:
    if status_code == 409:
        return BookingFailureReason.SEAT_ALREADY_BOOKED
    if status_code in (400, 422):
        return BookingFailureReason.VALIDATION_FAILED
    if status_code == 404:
        return BookingFailureReason.NOT_FOUND
    return BookingFailureReason.SERVER_ERROR


def build_http_client(settings: Settings = default_settings) -> httpx.AsyncClient:
    """AsyncClient for the booking API; the transport never retries."""
    headers = {'Accept': 'application/json'}
    if token := settings.BOOKING_API_TOKEN.get_secret_value():
        headers['Authorization'] = f'Bearer {token}'
    return httpx.AsyncClient(
        base_url=settings.BOOKING_API_BASE_URL,
        headers=headers,
        timeout=settings.BOOKING_API_TIMEOUT_SECONDS,
        transport=httpx.AsyncHTTPTransport(retries=0),
    )


class BookingApiHttpxImpl(IBookingApi):
    def __init__(self, *, client: httpx.AsyncClient) -> None:
        self.client = client

    async def aclose(self) -> None:
        await self.client.aclose()

    async def __aenter__(self) -> 'BookingApiHttpxImpl':
        return self

    async def __aexit__(self, *exc_info: Any) -> None:
        await self.aclose()

    async def _send(self, method: str, url: str, **kwargs: Any) -> httpx.Response:
        try:
            response = await self.client.request(method, url, **kwargs)
        except httpx.TimeoutException as e:
            raise BookingApiError(
                f'{method} {url} timed out', reason=BookingFailureReason.TIMEOUT, status_code=504
            ) from e
        except httpx.HTTPError as e:
            raise BookingApiError(
                f'{method} {url} failed: {e}', reason=BookingFailureReason.NETWORK_ERROR
            ) from e

        if response.is_error:
            raise self._error_from_response(response)
        return response

    @staticmethod
    def _error_from_response(response: httpx.Response) -> BookingApiError:
        reason = _reason_for_status(response.status_code)
        message = response.reason_phrase or f'HTTP {response.status_code}'
        try:
            body = ErrorResponse.model_validate(orjson.loads(response.content))
        except (orjson.JSONDecodeError, SchemaValidationError):
            body = None

        if body is not None:
            message = body.message or body.error or message
            if body.reason in BookingFailureReason.__members__.values():
                reason = BookingFailureReason(body.reason)

        return BookingApiError(message, reason=reason, status_code=response.status_code)

    @staticmethod
    def _parse(response: httpx.Response, schema: Type[_SchemaT]) -> _SchemaT:
        try:
            return schema.model_validate(orjson.loads(response.content))
        except (orjson.JSONDecodeError, SchemaValidationError) as e:
            raise BookingApiError(
                f'Unexpected {schema.__name__} payload from {response.request.url}',
                reason=BookingFailureReason.SERVER_ERROR,
            ) from e

    @staticmethod
    def _to_seat_id(api_seat_id: str, room_layout: Optional[RoomLayout]) -> str:
        if room_layout is None:
            return api_seat_id
        return room_layout.seat_id_of(api_seat_id) or api_seat_id

    @Logger.io
    async def fetch_room_layout(self, *, room_id: str) -> RoomLayout:
        response = await self._send('GET', f'/api/rooms/{room_id}')
        room = self._parse(response, RoomLayoutResponse)

        seat_types = {}
        seat_refs = {}
        for seat in room.seats:
            category = _SEAT_TYPE_CATEGORIES.get(seat.type.lower(), SeatCategory.STANDARD)
            if category != SeatCategory.STANDARD:
                seat_types[(seat.row, seat.column)] = category
            if seat.id and seat.id != seat_id_for(seat.row, seat.column):
                seat_refs[(seat.row, seat.column)] = seat.id

        return RoomLayout(
            rows=room.rows,
            columns=room.columns,
            seat_types=seat_types,
            room_id=room.id or room_id,
            seat_refs=seat_refs,
        )

    @Logger.io
    async def fetch_booked_seats(
        self, *, showtime_id: str, room_layout: Optional[RoomLayout] = None
    ) -> List[BookingRecord]:
        response = await self._send('GET', f'/api/showtimes/{showtime_id}/booked-seats')
        booked = self._parse(response, BookedSeatsResponse)
        return [
            BookingRecord(
                booking_id=booking.id,
                seat_id=self._to_seat_id(booking.seat, room_layout),
                showtime_id=showtime_id,
            )
            for booking in booked.bookings
        ]

    @Logger.io
    async def create_booking(
        self,
        *,
        showtime_id: str,
        room_layout: RoomLayout,
        seat_ids: Iterable[str],
        customer_info: CustomerInfo,
        payment_info: PaymentInfo,
        price_quote: PriceQuote,
    ) -> List[BookingRecord]:
        seat_ids = list(seat_ids)
        api_seat_ids = [room_layout.seat_ref(seat_id) for seat_id in seat_ids]
        request = CreateBookingRequest(
            showtime_id=showtime_id,
            room_id=room_layout.room_id,
            seat=api_seat_ids,
            customer_name=customer_info.name,
            customer_phone=customer_info.phone,
            customer_email=customer_info.email,
            payment_method=payment_info.method.value,
            transaction_id=payment_info.transaction_reference,
            bank_name=payment_info.bank_name,
            subtotal=price_quote.subtotal,
            discount=price_quote.discount,
            discount_reference=price_quote.discount_reference,
            ticket_price=price_quote.total,
        )
        response = await self._send(
            'POST',
            '/api/bookings',
            content=orjson.dumps(request.model_dump(by_alias=True, exclude_none=True)),
            headers={'Content-Type': 'application/json'},
        )
        created = self._parse(response, CreateBookingResponse)

        if created.bookings:
            records = [
                BookingRecord(
                    booking_id=booking.id,
                    seat_id=self._to_seat_id(booking.seat, room_layout),
                    showtime_id=showtime_id,
                )
                for booking in created.bookings
            ]
        elif len(created.booking_ids) == len(seat_ids):
            # Booking ids come back in the order the seats were sent
            records = [
                BookingRecord(booking_id=booking_id, seat_id=seat_id, showtime_id=showtime_id)
                for seat_id, booking_id in zip(seat_ids, created.booking_ids, strict=True)
            ]
        else:
            raise BookingApiError(
                f'Booking response has {len(created.booking_ids)} ids for {len(seat_ids)} seats',
                reason=BookingFailureReason.SERVER_ERROR,
            )

        Logger.base.info(
            f'[BOOKING_API] Created {len(records)} bookings for showtime {showtime_id}'
        )
        return records

    @Logger.io
    async def cancel_booking(self, *, booking_id: str, cancelled_by: str) -> None:
        await self._send(
            'DELETE',
            f'/api/bookings/cancel/{booking_id}',
            params={'cancelledBy': cancelled_by},
        )
        Logger.base.info(f'[BOOKING_API] Cancelled booking {booking_id} by {cancelled_by}')
