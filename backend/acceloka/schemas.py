from datetime import datetime
from typing import Optional

from pydantic import BaseModel, ConfigDict, Field

from acceloka.domain import TicketQuantity


class TicketQuantityIn(BaseModel):
    ticket_code: str = Field(..., min_length=1, max_length=255)
    quantity: int

    def to_domain(self) -> TicketQuantity:
        return TicketQuantity(ticket_code=self.ticket_code, quantity=self.quantity)


class OrmOut(BaseModel):
    model_config = ConfigDict(from_attributes=True)


class BookedLineOut(OrmOut):
    booking_id: str
    ticket_code: str
    ticket_name: str
    category_name: str
    price: int
    quantity: int
    total_price: int


class BookingReceiptOut(OrmOut):
    lines: list[BookedLineOut]
    category_totals: dict[str, int]
    grand_total: int


class RevokeResultOut(OrmOut):
    booking_id: str
    ticket_code: str
    ticket_name: Optional[str]
    category_name: Optional[str]
    remaining_quantity: int


class EditLineResultOut(OrmOut):
    ticket_code: str
    ticket_name: str
    category_name: str
    quantity: int
    remaining_quota: int


class EditResultOut(OrmOut):
    booking_id: str
    lines: list[EditLineResultOut]


class EventDateRange(BaseModel):
    minimum: datetime
    maximum: datetime


class BookedTicketOut(BaseModel):
    booking_id: str
    ticket_code: str
    ticket_name: str
    category_name: str
    event_date: EventDateRange
    quantity: int


class AvailableTicketOut(BaseModel):
    category_name: str
    ticket_code: str
    ticket_name: str
    event_date: EventDateRange
    price: int
    available_quota: int


class AvailableTicketPage(BaseModel):
    total_records: int
    page_number: int
    page_size: int
    data: list[AvailableTicketOut]


class TicketAvailabilityOut(BaseModel):
    ticket_code: str
    available_quota: int
    cached: bool


class ProblemDetails(BaseModel):
    type: str = "https://tools.ietf.org/html/rfc7807"
    title: str
    status: int
    detail: str
    instance: Optional[str] = None
