"""Async SQLAlchemy implementations of the catalog and ledger stores.

Both stores share the caller's AsyncSession, so everything they stage is
visible to later queries of the same transaction. Writes are flushed
immediately; nothing here commits.
"""

import logging
from contextlib import contextmanager
from typing import Iterator

from sqlalchemy import delete, func, select, update
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession

from acceloka.domain import BookedEntry, Ticket, TicketAvailability, TicketPage, TicketQuery
from acceloka.domain.errors import PersistenceFailureError
from acceloka.domain.models import as_utc
from acceloka.models import BookedTicket as BookedTicketRow
from acceloka.models import Ticket as TicketRow
from acceloka.stores.interfaces import CatalogStore, LedgerStore

logger = logging.getLogger(__name__)

ORDER_COLUMNS = {
    "TicketCode": TicketRow.ticket_code,
    "TicketName": TicketRow.ticket_name,
    "CategoryName": TicketRow.category_name,
    "Price": TicketRow.price,
    "EventDateMinimum": TicketRow.event_date_minimum,
}


@contextmanager
def translate_errors(operation: str) -> Iterator[None]:
    """Re-raise driver and ORM errors as PersistenceFailureError."""
    try:
        yield
    except SQLAlchemyError as exc:
        logger.exception("Store operation %s failed", operation)
        raise PersistenceFailureError(operation, str(exc)) from exc


def _ticket_from_row(row: TicketRow) -> Ticket:
    return Ticket(
        ticket_code=row.ticket_code,
        ticket_name=row.ticket_name,
        category_name=row.category_name,
        event_date_minimum=as_utc(row.event_date_minimum),
        event_date_maximum=as_utc(row.event_date_maximum),
        quota=row.quota,
        price=row.price,
    )


def _entry_from_row(row: BookedTicketRow) -> BookedEntry:
    return BookedEntry(booking_id=row.booking_id, ticket_code=row.ticket_code, quantity=row.quantity)


class SqlAlchemyCatalogStore(CatalogStore):
    def __init__(self, session: AsyncSession) -> None:
        self._session = session

    async def get_ticket(self, ticket_code: str, for_update: bool = False) -> Ticket | None:
        stmt = select(TicketRow).where(TicketRow.ticket_code == ticket_code)
        if for_update:
            stmt = stmt.with_for_update()
        with translate_errors("get_ticket"):
            res = await self._session.execute(stmt)
            row = res.scalars().first()
        return _ticket_from_row(row) if row else None

    async def add_ticket(self, ticket: Ticket) -> None:
        with translate_errors("add_ticket"):
            self._session.add(
                TicketRow(
                    ticket_code=ticket.ticket_code,
                    ticket_name=ticket.ticket_name,
                    category_name=ticket.category_name,
                    event_date_minimum=as_utc(ticket.event_date_minimum),
                    event_date_maximum=as_utc(ticket.event_date_maximum),
                    quota=ticket.quota,
                    price=ticket.price,
                )
            )
            await self._session.flush()

    async def remove_ticket(self, ticket_code: str) -> bool:
        with translate_errors("remove_ticket"):
            chk = await self._session.execute(
                select(TicketRow.ticket_code).where(TicketRow.ticket_code == ticket_code).with_for_update()
            )
            if chk.scalar() is None:
                return False
            # Orphan ledger rows explicitly in case the FK action is not enforced (SQLite).
            await self._session.execute(
                update(BookedTicketRow)
                .where(BookedTicketRow.ticket_code == ticket_code)
                .values(ticket_code=None)
            )
            await self._session.execute(delete(TicketRow).where(TicketRow.ticket_code == ticket_code))
        return True

    async def search_tickets(self, query: TicketQuery) -> TicketPage:
        booked = (
            select(
                BookedTicketRow.ticket_code.label("ticket_code"),
                func.sum(BookedTicketRow.quantity).label("booked"),
            )
            .where(BookedTicketRow.ticket_code.is_not(None))
            .group_by(BookedTicketRow.ticket_code)
            .subquery()
        )
        available = TicketRow.quota - func.coalesce(booked.c.booked, 0)

        stmt = (
            select(TicketRow, available.label("available_quota"))
            .outerjoin(booked, booked.c.ticket_code == TicketRow.ticket_code)
            .where(available > 0)
        )
        if query.category_name:
            stmt = stmt.where(TicketRow.category_name.ilike(f"%{query.category_name}%"))
        if query.ticket_code:
            stmt = stmt.where(TicketRow.ticket_code.ilike(f"%{query.ticket_code}%"))
        if query.ticket_name:
            stmt = stmt.where(TicketRow.ticket_name.ilike(f"%{query.ticket_name}%"))
        if query.max_price is not None:
            stmt = stmt.where(TicketRow.price <= query.max_price)
        if query.event_date_min is not None:
            stmt = stmt.where(TicketRow.event_date_minimum >= as_utc(query.event_date_min))
        if query.event_date_max is not None:
            stmt = stmt.where(TicketRow.event_date_maximum <= as_utc(query.event_date_max))

        column = ORDER_COLUMNS[query.order_by]
        ordering = column.desc() if query.order_state.lower() == "desc" else column.asc()
        page_stmt = (
            stmt.order_by(ordering, TicketRow.ticket_code)
            .offset((query.page_number - 1) * query.page_size)
            .limit(query.page_size)
        )

        with translate_errors("search_tickets"):
            total = await self._session.execute(select(func.count()).select_from(stmt.subquery()))
            total_records = int(total.scalar_one() or 0)
            res = await self._session.execute(page_stmt)
            rows = res.all()

        items = tuple(
            TicketAvailability(ticket=_ticket_from_row(row), available_quota=int(avail))
            for row, avail in rows
        )
        return TicketPage(
            total_records=total_records,
            page_number=query.page_number,
            page_size=query.page_size,
            items=items,
        )


class SqlAlchemyLedgerStore(LedgerStore):
    def __init__(self, session: AsyncSession) -> None:
        self._session = session

    async def sum_active_quantity(self, ticket_code: str, exclude_booking_id: str | None = None) -> int:
        stmt = select(func.coalesce(func.sum(BookedTicketRow.quantity), 0)).where(
            BookedTicketRow.ticket_code == ticket_code
        )
        if exclude_booking_id is not None:
            stmt = stmt.where(BookedTicketRow.booking_id != exclude_booking_id)
        with translate_errors("sum_active_quantity"):
            res = await self._session.execute(stmt)
            return int(res.scalar_one() or 0)

    async def get_entry(
        self, booking_id: str, ticket_code: str | None = None, for_update: bool = False
    ) -> BookedEntry | None:
        stmt = select(BookedTicketRow).where(BookedTicketRow.booking_id == booking_id)
        if ticket_code is not None:
            stmt = stmt.where(BookedTicketRow.ticket_code == ticket_code)
        if for_update:
            stmt = stmt.with_for_update()
        with translate_errors("get_entry"):
            res = await self._session.execute(stmt)
            row = res.scalars().first()
        return _entry_from_row(row) if row else None

    async def insert_entry(self, entry: BookedEntry) -> None:
        with translate_errors("insert_entry"):
            self._session.add(
                BookedTicketRow(
                    booking_id=entry.booking_id,
                    ticket_code=entry.ticket_code,
                    quantity=entry.quantity,
                )
            )
            await self._session.flush()

    async def update_entry(self, entry: BookedEntry) -> None:
        with translate_errors("update_entry"):
            await self._session.execute(
                update(BookedTicketRow)
                .where(BookedTicketRow.booking_id == entry.booking_id)
                .values(quantity=entry.quantity)
            )

    async def delete_entry(self, booking_id: str) -> None:
        with translate_errors("delete_entry"):
            await self._session.execute(
                delete(BookedTicketRow).where(BookedTicketRow.booking_id == booking_id)
            )
