"""Read-side catalog operations: the available-ticket listing and booked-ticket detail."""

from acceloka.domain import BookedTicketDetail, TicketPage, TicketQuery
from acceloka.domain.errors import BookingNotFoundError, InvalidTicketQueryError, TicketNotFoundError
from acceloka.services.availability import available_quota
from acceloka.unit_of_work import AbstractUnitOfWork

VALID_ORDER_COLUMNS = ("TicketCode", "TicketName", "CategoryName", "Price", "EventDateMinimum")


def validate_query(query: TicketQuery) -> None:
    if query.order_by not in VALID_ORDER_COLUMNS:
        raise InvalidTicketQueryError(f"OrderBy must be one of: {', '.join(VALID_ORDER_COLUMNS)}.")
    if query.order_state.lower() not in ("asc", "desc"):
        raise InvalidTicketQueryError("OrderState must be either asc or desc.")
    if query.page_number < 1 or query.page_size < 1:
        raise InvalidTicketQueryError("PageNumber and PageSize must be at least 1.")


async def list_available_tickets(uow: AbstractUnitOfWork, query: TicketQuery) -> TicketPage:
    validate_query(query)
    async with uow:
        return await uow.catalog.search_tickets(query)


async def get_booked_ticket(uow: AbstractUnitOfWork, booking_id: str) -> BookedTicketDetail:
    async with uow:
        entry = await uow.ledger.get_entry(booking_id)
        if entry is None:
            raise BookingNotFoundError(booking_id)
        ticket = await uow.catalog.get_ticket(entry.ticket_code) if entry.ticket_code else None
        if ticket is None:
            # orphaned: the ticket was removed after booking
            raise TicketNotFoundError(entry.ticket_code)

    return BookedTicketDetail(
        booking_id=entry.booking_id,
        ticket_code=ticket.ticket_code,
        ticket_name=ticket.ticket_name,
        category_name=ticket.category_name,
        event_date_minimum=ticket.event_date_minimum,
        event_date_maximum=ticket.event_date_maximum,
        quantity=entry.quantity,
    )


async def ticket_availability(uow: AbstractUnitOfWork, ticket_code: str) -> int:
    async with uow:
        return await available_quota(uow.catalog, uow.ledger, ticket_code)
