"""Domain models for the ticket catalog and booking ledger.

These are plain dataclasses with no persistence concerns.
ORM tables live in acceloka/models.py.
"""

from dataclasses import dataclass, field
from datetime import datetime, timezone


def as_utc(value: datetime) -> datetime:
    """Return `value` as an aware UTC datetime; naive values are taken as UTC."""
    if value.tzinfo is None:
        return value.replace(tzinfo=timezone.utc)
    return value.astimezone(timezone.utc)


def utcnow() -> datetime:
    return datetime.now(timezone.utc)


@dataclass(frozen=True)
class Ticket:
    """Catalog entry. Booking operations never mutate it."""

    ticket_code: str
    ticket_name: str
    category_name: str
    event_date_minimum: datetime
    event_date_maximum: datetime
    quota: int
    price: int

    def __post_init__(self) -> None:
        if self.quota < 0:
            raise ValueError("Ticket quota cannot be negative")
        if self.price < 0:
            raise ValueError("Ticket price cannot be negative")
        if as_utc(self.event_date_minimum) > as_utc(self.event_date_maximum):
            raise ValueError("Event date minimum must not be after event date maximum")

    def has_started(self, now: datetime) -> bool:
        return as_utc(self.event_date_minimum) <= as_utc(now)


@dataclass
class BookedEntry:
    """Ledger row. `ticket_code` is None once the ticket has been removed."""

    booking_id: str
    ticket_code: str | None
    quantity: int


@dataclass(frozen=True)
class TicketQuantity:
    """One requested line: a ticket code and a quantity."""

    ticket_code: str
    quantity: int


@dataclass(frozen=True)
class BookedLine:
    booking_id: str
    ticket_code: str
    ticket_name: str
    category_name: str
    price: int
    quantity: int
    total_price: int


@dataclass(frozen=True)
class BookingReceipt:
    lines: tuple[BookedLine, ...]
    category_totals: dict[str, int]
    grand_total: int


@dataclass(frozen=True)
class RevokeResult:
    booking_id: str
    ticket_code: str
    ticket_name: str | None
    category_name: str | None
    remaining_quantity: int


@dataclass(frozen=True)
class EditLineResult:
    ticket_code: str
    ticket_name: str
    category_name: str
    quantity: int
    remaining_quota: int


@dataclass(frozen=True)
class EditResult:
    booking_id: str
    lines: tuple[EditLineResult, ...]


@dataclass(frozen=True)
class BookedTicketDetail:
    booking_id: str
    ticket_code: str
    ticket_name: str
    category_name: str
    event_date_minimum: datetime
    event_date_maximum: datetime
    quantity: int


@dataclass(frozen=True)
class TicketAvailability:
    """A catalog entry together with its currently available quota."""

    ticket: Ticket
    available_quota: int


@dataclass(frozen=True)
class TicketQuery:
    """Filters, ordering and paging for the available-ticket listing."""

    category_name: str | None = None
    ticket_code: str | None = None
    ticket_name: str | None = None
    max_price: int | None = None
    event_date_min: datetime | None = None
    event_date_max: datetime | None = None
    order_by: str = "TicketCode"
    order_state: str = "asc"
    page_number: int = 1
    page_size: int = 10


@dataclass(frozen=True)
class TicketPage:
    total_records: int
    page_number: int
    page_size: int
    items: tuple[TicketAvailability, ...] = field(default_factory=tuple)
