from datetime import datetime
from typing import Optional

from fastapi import APIRouter, Depends

from acceloka.domain import TicketQuery
from acceloka.redis_tools import cache_available_quota, get_cached_available_quota
from acceloka.schemas import AvailableTicketOut, AvailableTicketPage, EventDateRange, TicketAvailabilityOut
from acceloka.services.catalog import list_available_tickets, ticket_availability
from acceloka.unit_of_work import AbstractUnitOfWork, get_unit_of_work


router = APIRouter(prefix="/api/v1", tags=["tickets"])


@router.get("/get-available-ticket", response_model=AvailableTicketPage)
async def get_available_tickets(
    category_name: Optional[str] = None,
    ticket_code: Optional[str] = None,
    ticket_name: Optional[str] = None,
    price: Optional[int] = None,
    event_date_min: Optional[datetime] = None,
    event_date_max: Optional[datetime] = None,
    order_by: str = "TicketCode",
    order_state: str = "asc",
    page_number: int = 1,
    page_size: int = 10,
    uow: AbstractUnitOfWork = Depends(get_unit_of_work),
):
    query = TicketQuery(
        category_name=category_name,
        ticket_code=ticket_code,
        ticket_name=ticket_name,
        max_price=price,
        event_date_min=event_date_min,
        event_date_max=event_date_max,
        order_by=order_by,
        order_state=order_state,
        page_number=page_number,
        page_size=page_size,
    )
    page = await list_available_tickets(uow, query)
    return AvailableTicketPage(
        total_records=page.total_records,
        page_number=page.page_number,
        page_size=page.page_size,
        data=[
            AvailableTicketOut(
                category_name=item.ticket.category_name,
                ticket_code=item.ticket.ticket_code,
                ticket_name=item.ticket.ticket_name,
                event_date=EventDateRange(
                    minimum=item.ticket.event_date_minimum,
                    maximum=item.ticket.event_date_maximum,
                ),
                price=item.ticket.price,
                available_quota=item.available_quota,
            )
            for item in page.items
        ],
    )


@router.get("/tickets/{ticket_code}/availability", response_model=TicketAvailabilityOut)
async def get_ticket_availability(ticket_code: str, uow: AbstractUnitOfWork = Depends(get_unit_of_work)):
    cached = await get_cached_available_quota(ticket_code)
    if cached is not None:
        return TicketAvailabilityOut(ticket_code=ticket_code, available_quota=cached, cached=True)

    available = await ticket_availability(uow, ticket_code)
    await cache_available_quota(ticket_code, available)
    return TicketAvailabilityOut(ticket_code=ticket_code, available_quota=available, cached=False)
