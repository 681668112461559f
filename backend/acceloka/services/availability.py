"""Available quota = ticket quota minus every quantity currently booked against it."""

from acceloka.domain import Ticket
from acceloka.domain.errors import TicketNotFoundError
from acceloka.stores import CatalogStore, LedgerStore


async def remaining_quota(ledger: LedgerStore, ticket: Ticket, exclude_booking_id: str | None = None) -> int:
    booked = await ledger.sum_active_quantity(ticket.ticket_code, exclude_booking_id=exclude_booking_id)
    return ticket.quota - booked


async def available_quota(
    catalog: CatalogStore,
    ledger: LedgerStore,
    ticket_code: str,
    exclude_booking_id: str | None = None,
) -> int:
    """
    Return the quota still available for `ticket_code`.
    The entry named by `exclude_booking_id` is left out of the booked sum.
    Raises TicketNotFoundError if the ticket is not in the catalog. Read-only.
    """
    ticket = await catalog.get_ticket(ticket_code)
    if ticket is None:
        raise TicketNotFoundError(ticket_code)
    return await remaining_quota(ledger, ticket, exclude_booking_id)
