# booking.py
import logging
from datetime import datetime
from typing import Sequence
from uuid import uuid4

from acceloka.domain import BookedEntry, BookedLine, BookingReceipt, TicketQuantity
from acceloka.domain.errors import (
    DomainError,
    EventDateInvalidError,
    InsufficientQuotaError,
    InvalidQuantityError,
    TicketNotFoundError,
    TicketUnavailableError,
)
from acceloka.domain.models import utcnow
from acceloka.services.availability import remaining_quota
from acceloka.unit_of_work import AbstractUnitOfWork

logger = logging.getLogger(__name__)


async def book_tickets(uow: AbstractUnitOfWork, requests: Sequence[TicketQuantity],
                       now: datetime | None = None) -> BookingReceipt:
    """
    Book every requested line or none of them.

    Lines are checked in the order given. Each staged entry is flushed before
    the next line is checked, so repeated ticket codes consume the same quota
    cumulatively. The first failing line raises and the unit of work rolls
    back every entry staged so far.
    """
    now = now or utcnow()
    lines: list[BookedLine] = []
    category_totals: dict[str, int] = {}
    grand_total = 0

    async with uow:
        try:
            for request in requests:
                if request.quantity < 1:
                    raise InvalidQuantityError(f"Quantity for ticket {request.ticket_code} must be at least 1.")

                # lock the ticket row: concurrent bookers of this ticket queue here
                ticket = await uow.catalog.get_ticket(request.ticket_code, for_update=True)
                if ticket is None:
                    raise TicketNotFoundError(request.ticket_code)

                available = await remaining_quota(uow.ledger, ticket)
                if available <= 0:
                    raise TicketUnavailableError(ticket.ticket_code)
                if request.quantity > available:
                    raise InsufficientQuotaError(ticket.ticket_code, available)
                if ticket.has_started(now):
                    raise EventDateInvalidError(ticket.ticket_code)

                entry = BookedEntry(booking_id=str(uuid4()), ticket_code=ticket.ticket_code,
                                    quantity=request.quantity)
                await uow.ledger.insert_entry(entry)

                line_total = ticket.price * request.quantity
                lines.append(BookedLine(
                    booking_id=entry.booking_id,
                    ticket_code=ticket.ticket_code,
                    ticket_name=ticket.ticket_name,
                    category_name=ticket.category_name,
                    price=ticket.price,
                    quantity=request.quantity,
                    total_price=line_total,
                ))
                category_totals[ticket.category_name] = category_totals.get(ticket.category_name, 0) + line_total
                grand_total += line_total
        except DomainError as exc:
            logger.info("Booking rejected after %d staged line(s): %s", len(lines), exc)
            raise

        await uow.commit()

    logger.info("Booked %d line(s), grand total %d", len(lines), grand_total)
    return BookingReceipt(lines=tuple(lines), category_totals=category_totals, grand_total=grand_total)
