"""Store interfaces (repository pattern).

Stores return domain models and operate inside the transaction of the
session they were created with; they never commit.
"""

from abc import ABC, abstractmethod

from acceloka.domain import BookedEntry, Ticket, TicketPage, TicketQuery


class CatalogStore(ABC):
    """Interface for ticket catalog lookups and maintenance."""

    @abstractmethod
    async def get_ticket(self, ticket_code: str, for_update: bool = False) -> Ticket | None:
        """Return a ticket by code, or None if not found.

        With `for_update` the ticket row stays locked until the transaction ends.
        """
        ...

    @abstractmethod
    async def add_ticket(self, ticket: Ticket) -> None:
        ...

    @abstractmethod
    async def remove_ticket(self, ticket_code: str) -> bool:
        """Delete a ticket, orphaning its ledger entries. Returns False if absent."""
        ...

    @abstractmethod
    async def search_tickets(self, query: TicketQuery) -> TicketPage:
        """Return one page of tickets whose available quota is above zero."""
        ...


class LedgerStore(ABC):
    """Interface for booked-quantity ledger operations."""

    @abstractmethod
    async def sum_active_quantity(self, ticket_code: str, exclude_booking_id: str | None = None) -> int:
        """Sum quantities booked against a ticket, optionally skipping one entry."""
        ...

    @abstractmethod
    async def get_entry(
        self, booking_id: str, ticket_code: str | None = None, for_update: bool = False
    ) -> BookedEntry | None:
        ...

    @abstractmethod
    async def insert_entry(self, entry: BookedEntry) -> None:
        ...

    @abstractmethod
    async def update_entry(self, entry: BookedEntry) -> None:
        ...

    @abstractmethod
    async def delete_entry(self, booking_id: str) -> None:
        ...
