# mutation.py
import logging
from typing import Sequence

from acceloka.domain import EditLineResult, EditResult, RevokeResult, TicketQuantity
from acceloka.domain.errors import (
    BookingNotFoundError,
    InsufficientQuotaError,
    InvalidQuantityError,
    TicketNotFoundError,
)
from acceloka.services.availability import remaining_quota
from acceloka.unit_of_work import AbstractUnitOfWork

logger = logging.getLogger(__name__)


async def revoke_quantity(uow: AbstractUnitOfWork, booking_id: str, ticket_code: str, qty: int) -> RevokeResult:
    """Give back `qty` units of a booked entry; an entry that reaches zero is deleted."""
    if qty < 1:
        raise InvalidQuantityError("Quantity to revoke must be at least 1.")

    async with uow:
        entry = await uow.ledger.get_entry(booking_id, ticket_code=ticket_code, for_update=True)
        if entry is None:
            raise BookingNotFoundError(booking_id, ticket_code)
        if qty > entry.quantity:
            raise InvalidQuantityError(
                f"The requested quantity exceeds the booked quantity for ticket {ticket_code}."
            )

        entry.quantity -= qty
        if entry.quantity <= 0:
            await uow.ledger.delete_entry(entry.booking_id)
            remaining = 0
        else:
            await uow.ledger.update_entry(entry)
            remaining = entry.quantity

        ticket = await uow.catalog.get_ticket(ticket_code)
        await uow.commit()

    logger.info("Revoked %d from booking %s (%s), %d left", qty, booking_id, ticket_code, remaining)
    return RevokeResult(
        booking_id=booking_id,
        ticket_code=ticket_code,
        ticket_name=ticket.ticket_name if ticket else None,
        category_name=ticket.category_name if ticket else None,
        remaining_quantity=remaining,
    )


async def edit_booking(uow: AbstractUnitOfWork, booking_id: str, updates: Sequence[TicketQuantity]) -> EditResult:
    """
    Replace the booked quantity of one entry, line by line, in one transaction.

    The entry holds a single quantity, so with several valid lines the last
    one wins. The ceiling for a line adds back the entry's own current
    quantity because the new value replaces it rather than stacking on it.
    """
    results: list[EditLineResult] = []

    async with uow:
        entry = await uow.ledger.get_entry(booking_id, for_update=True)
        if entry is None:
            raise BookingNotFoundError(booking_id)

        for update in updates:
            ticket = await uow.catalog.get_ticket(update.ticket_code, for_update=True)
            if ticket is None:
                raise TicketNotFoundError(update.ticket_code)
            if update.quantity < 1:
                raise InvalidQuantityError("Quantity must be at least 1.")
            if entry.ticket_code != ticket.ticket_code:
                # the line must name the ticket this entry is booked against
                raise BookingNotFoundError(booking_id, update.ticket_code)

            total_booked = await uow.ledger.sum_active_quantity(ticket.ticket_code)
            ceiling = ticket.quota - total_booked + entry.quantity
            if update.quantity > ceiling:
                raise InsufficientQuotaError(ticket.ticket_code, ceiling)

            entry.quantity = update.quantity
            await uow.ledger.update_entry(entry)
            results.append(EditLineResult(
                ticket_code=ticket.ticket_code,
                ticket_name=ticket.ticket_name,
                category_name=ticket.category_name,
                quantity=entry.quantity,
                remaining_quota=await remaining_quota(uow.ledger, ticket),
            ))

        await uow.commit()

    logger.info("Edited booking %s over %d line(s)", booking_id, len(results))
    return EditResult(booking_id=booking_id, lines=tuple(results))
