from typing import Iterable, List, Optional, Self

from opentelemetry import trace

from cinema_booking.platform.config.core_setting import settings
from cinema_booking.platform.logging.loguru_io import Logger
from cinema_booking.service.seat_map.app.dto import SeatView
from cinema_booking.service.seat_map.app.interface import IBookingApi
from cinema_booking.service.seat_map.domain.enum import PaymentMethod, SeatStatus, SessionState
from cinema_booking.service.seat_map.domain.seat_grid import SeatGrid
from cinema_booking.service.seat_map.domain.seat_map_errors import (
    BookingApiError,
    BookingFailed,
    BookingNotFound,
    CancellationFailed,
    SessionBusy,
    ValidationError,
)
from cinema_booking.service.seat_map.domain.selection_ledger import SelectionLedger
from cinema_booking.service.seat_map.domain.value_object import (
    BookingRecord,
    CustomerInfo,
    Discount,
    PaymentInfo,
    PriceQuote,
    PriceTable,
    RoomLayout,
)


class SeatMapSession:
    """
    Seat map of one showtime, kept consistent with the booking API.

    Owns one SeatGrid and one SelectionLedger and is the only component that calls
    the API. State changes follow confirmed responses only:

    - submit_booking: Idle -> Submitting -> Idle. Success books the seats and
      empties the selection; failure leaves both untouched.
    - cancel_booking: the booking is Cancelling while its request is in flight.
      Success frees the seat; failure leaves it booked.
    - refresh / reload: replace the snapshot and drop selected seats that are now
      booked. This is the only mutation of the selection without a user action.

    Nothing is retried. After a failed submit the caller is expected to reload to
    find out which selected seats were taken concurrently.
    """

    def __init__(
        self,
        *,
        api: IBookingApi,
        showtime_id: str,
        room_layout: RoomLayout,
        price_table: PriceTable,
        initial_bookings: Iterable[BookingRecord] = (),
    ) -> None:
        self.api = api
        self.showtime_id = showtime_id
        self.room_layout = room_layout
        self.price_table = price_table
        self._grid = SeatGrid.build(room_layout, initial_bookings)
        self._ledger = SelectionLedger(price_table=price_table)
        self._state = SessionState.IDLE
        self._cancelling: set[str] = set()
        self.tracer = trace.get_tracer(__name__)

    @classmethod
    @Logger.io
    async def load(
        cls,
        *,
        api: IBookingApi,
        room_id: str,
        showtime_id: str,
        price_table: Optional[PriceTable] = None,
    ) -> Self:
        """Fetch the room layout and current bookings, then build the session."""
        room_layout = await api.fetch_room_layout(room_id=room_id)
        bookings = await api.fetch_booked_seats(showtime_id=showtime_id, room_layout=room_layout)
        Logger.base.info(
            f'[SEAT_MAP] Loaded showtime {showtime_id}: '
            f'{room_layout.rows}x{room_layout.columns} room, {len(bookings)} booked seats'
        )
        return cls(
            api=api,
            showtime_id=showtime_id,
            room_layout=room_layout,
            price_table=price_table or PriceTable.default(),
            initial_bookings=bookings,
        )

    @property
    def grid(self) -> SeatGrid:
        return self._grid

    @property
    def ledger(self) -> SelectionLedger:
        return self._ledger

    @property
    def state(self) -> SessionState:
        return self._state

    @property
    def is_submitting(self) -> bool:
        return self._state == SessionState.SUBMITTING

    def is_cancelling(self, booking_id: str) -> bool:
        return booking_id in self._cancelling

    @property
    def is_busy(self) -> bool:
        return self.is_submitting or bool(self._cancelling)

    @property
    def bookings(self) -> tuple[BookingRecord, ...]:
        return self._grid.bookings

    def status_of(self, seat_id: str) -> SeatStatus:
        return self._grid.status_of(seat_id, self._ledger)

    def summary(self) -> dict[SeatStatus, int]:
        return self._grid.summary(self._ledger)

    def seat_map(self) -> List[List[SeatView]]:
        views = []
        for row in self._grid.rows():
            row_views = []
            for seat in row:
                record = self._grid.booking_for(seat.id)
                row_views.append(
                    SeatView(
                        seat_id=seat.id,
                        label=seat.label,
                        row=seat.row,
                        column=seat.column,
                        category=seat.category,
                        status=self.status_of(seat.id),
                        unit_price=(
                            self.price_table.unit_price(seat.category)
                            if seat.is_selectable
                            else None
                        ),
                        booking_id=record.booking_id if record else None,
                    )
                )
            views.append(row_views)
        return views

    @Logger.io
    def toggle_seat(self, seat_id: str) -> SeatStatus:
        """
        Select or deselect one seat. No network call.

        Raises:
            SeatNotFound: Unknown seat id
            SeatNotSelectable: Disabled seat
            SeatUnavailable: Booked seat
        """
        seat = self._grid.seat(seat_id)
        self._ledger = self._ledger.toggle(seat, self._grid)
        return self.status_of(seat_id)

    def quote(self, discount: Optional[Discount] = None) -> PriceQuote:
        return self._ledger.quote(self.price_table, discount)

    def reset(self) -> None:
        self._ledger = self._ledger.clear()

    @staticmethod
    def _validate_submission(customer_info: CustomerInfo, payment_info: PaymentInfo) -> None:
        if not customer_info.name or not customer_info.name.strip():
            raise ValidationError('Customer name is required')
        if not customer_info.phone or not customer_info.phone.strip():
            raise ValidationError('Customer phone is required')

        if payment_info.method != PaymentMethod.CASH and not (
            payment_info.transaction_reference and payment_info.transaction_reference.strip()
        ):
            raise ValidationError(
                f'A transaction reference is required for {payment_info.method} payments'
            )
        if payment_info.method == PaymentMethod.BANK and not (
            payment_info.bank_name and payment_info.bank_name.strip()
        ):
            raise ValidationError('A bank name is required for bank payments')

    @Logger.io
    async def submit_booking(
        self,
        *,
        customer_info: CustomerInfo,
        payment_info: PaymentInfo,
        discount: Optional[Discount] = None,
    ) -> List[BookingRecord]:
        """
        Book every selected seat in one request.

        All local checks run before the request, so a rejected submission never
        reaches the API.

        Returns:
            The BookingRecords created by the API

        Raises:
            SessionBusy: A submission is already in flight
            ValidationError: Empty selection or missing customer/payment details
            InvalidDiscount: Discount rejected by the quote
            BookingFailed: The API rejected the booking or could not be reached
        """
        if self.is_submitting:
            raise SessionBusy('A booking is already being submitted')
        if not self._ledger:
            raise ValidationError('Select at least one seat before booking')
        self._validate_submission(customer_info, payment_info)

        price_quote = self._ledger.quote(self.price_table, discount)
        submitted = self._ledger.seat_ids

        self._state = SessionState.SUBMITTING
        try:
            with self.tracer.start_as_current_span(
                'seat_map.submit_booking',
                attributes={
                    'showtime.id': self.showtime_id,
                    'booking.seat_count': len(submitted),
                    'booking.total': price_quote.total,
                },
            ):
                records = await self.api.create_booking(
                    showtime_id=self.showtime_id,
                    room_layout=self.room_layout,
                    seat_ids=sorted(submitted),
                    customer_info=customer_info,
                    payment_info=payment_info,
                    price_quote=price_quote,
                )
        except BookingApiError as e:
            Logger.base.warning(
                f'[BOOKING] Showtime {self.showtime_id} rejected {len(submitted)} seats '
                f'({e.reason}): {e.message}'
            )
            raise BookingFailed(e.message, reason=e.reason) from e
        finally:
            self._state = SessionState.IDLE

        self._ledger = self._ledger.without(submitted)
        applied = [record for record in records if self._grid.has_seat(record.seat_id)]
        if unknown := sorted(record.seat_id for record in records if record not in applied):
            Logger.base.warning(
                f'[BOOKING] API confirmed bookings for seats {unknown} that are not in this '
                'room; reload to see their current state'
            )
        # A fresh confirmation supersedes whatever the local snapshot had for the seat
        snapshot = {record.seat_id: record for record in [*self._grid.bookings, *applied]}
        self._grid = self._grid.with_bookings_applied(snapshot.values())
        self._drop_booked_from_selection()

        confirmed = {record.seat_id for record in applied}
        if missing := submitted - confirmed:
            Logger.base.warning(
                f'[BOOKING] API confirmed no booking for seats {sorted(missing)}; '
                'reload to see their current state'
            )
        Logger.base.info(
            f'[BOOKING] Booked {len(records)} seats for showtime {self.showtime_id}, '
            f'total {price_quote.total}'
        )
        return records

    @Logger.io
    async def cancel_booking(
        self, *, booking_id: str, cancelled_by: Optional[str] = None
    ) -> BookingRecord:
        """
        Cancel one booking. The seat becomes Available only once the API confirms.

        Raises:
            BookingNotFound: The booking is not in the current snapshot
            SessionBusy: This booking is already being cancelled
            CancellationFailed: The API rejected the cancellation or could not be reached
        """
        record = self._grid.find_booking(booking_id)
        if record is None:
            raise BookingNotFound(booking_id)
        if booking_id in self._cancelling:
            raise SessionBusy(f'Booking {booking_id} is already being cancelled')

        self._cancelling.add(booking_id)
        try:
            with self.tracer.start_as_current_span(
                'seat_map.cancel_booking',
                attributes={'showtime.id': self.showtime_id, 'booking.id': booking_id},
            ):
                await self.api.cancel_booking(
                    booking_id=booking_id,
                    cancelled_by=cancelled_by or settings.DEFAULT_CANCELLED_BY,
                )
        except BookingApiError as e:
            Logger.base.warning(
                f'[CANCEL] Booking {booking_id} (seat {record.seat_id}) not cancelled '
                f'({e.reason}): {e.message}'
            )
            raise CancellationFailed(e.message, booking_id=booking_id, reason=e.reason) from e
        finally:
            self._cancelling.discard(booking_id)

        # The snapshot may have been refreshed while the request was in flight
        self._grid = self._grid.with_bookings_applied(
            [booked for booked in self._grid.bookings if booked.booking_id != booking_id]
        )
        self._drop_booked_from_selection()

        Logger.base.info(f'[CANCEL] Booking {booking_id} cancelled, seat {record.seat_id} freed')
        return record

    async def cancel_seat(
        self, *, seat_id: str, cancelled_by: Optional[str] = None
    ) -> BookingRecord:
        """Cancel whichever booking currently holds `seat_id`."""
        self._grid.seat(seat_id)
        record = self._grid.booking_for(seat_id)
        if record is None:
            raise ValidationError(f'Seat {seat_id} has no booking to cancel')
        return await self.cancel_booking(booking_id=record.booking_id, cancelled_by=cancelled_by)

    def _drop_booked_from_selection(self) -> frozenset[str]:
        taken = self._ledger.seat_ids & self._grid.booked_seat_ids()
        if taken:
            self._ledger = self._ledger.without(taken)
        return taken

    @Logger.io
    def refresh(self, booking_snapshot: Iterable[BookingRecord]) -> frozenset[str]:
        """
        Replace the local snapshot with a fresh one from the API.

        Returns:
            Seat ids that were selected and are now booked (removed from the selection)

        Raises:
            LayoutError: The snapshot references unknown seats; nothing is changed
        """
        self._grid = self._grid.with_bookings_applied(booking_snapshot)
        taken = self._drop_booked_from_selection()
        if taken:
            Logger.base.info(
                f'[RECONCILE] Seats {sorted(taken)} were booked elsewhere, removed from selection'
            )
        return taken

    @Logger.io
    async def reload(self) -> frozenset[str]:
        """Fetch the current bookings for this showtime and refresh."""
        snapshot = await self.api.fetch_booked_seats(
            showtime_id=self.showtime_id, room_layout=self.room_layout
        )
        return self.refresh(snapshot)
