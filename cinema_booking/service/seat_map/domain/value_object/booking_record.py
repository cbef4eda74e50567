import attrs


@attrs.define(frozen=True)
class BookingRecord:
    """
    Server-confirmed reservation of one seat for one showtime.

    Owned by the booking API and only mirrored locally; a changed booking is a
    cancel followed by a new booking, never an in-place update.
    """

    booking_id: str
    seat_id: str
    showtime_id: str
