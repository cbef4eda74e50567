"""Wire schemas of the cinema booking REST API."""

from typing import List, Optional

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel


class _CamelModel(BaseModel):
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)


class RoomSeatSchema(_CamelModel):
    id: Optional[str] = Field(default=None, alias='_id')
    row: int
    column: int
    type: str = 'Normal'  # Normal / VIP / Disabled


class RoomLayoutResponse(_CamelModel):
    id: Optional[str] = Field(default=None, alias='_id')
    rows: int
    columns: int
    seats: List[RoomSeatSchema] = []


class BookedSeatSchema(_CamelModel):
    id: str = Field(alias='_id')
    seat: str


class BookedSeatsResponse(_CamelModel):
    bookings: List[BookedSeatSchema] = []


class CreateBookingRequest(_CamelModel):
    showtime_id: str
    room_id: Optional[str] = None
    seat: List[str]
    customer_name: str
    customer_phone: str
    customer_email: Optional[str] = None
    payment_method: str
    transaction_id: Optional[str] = None
    bank_name: Optional[str] = None
    subtotal: int
    discount: int = 0
    discount_reference: Optional[str] = None
    ticket_price: int  # Total after discount


class CreateBookingResponse(_CamelModel):
    booking_ids: List[str] = []
    bookings: List[BookedSeatSchema] = []


class ErrorResponse(_CamelModel):
    message: Optional[str] = None
    error: Optional[str] = None
    reason: Optional[str] = None
