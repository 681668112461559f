from typing import Annotated

from fastapi import APIRouter, Body, Depends

from acceloka.redis_tools import invalidate_available_quota
from acceloka.schemas import (
    BookedTicketOut,
    BookingReceiptOut,
    EditResultOut,
    EventDateRange,
    RevokeResultOut,
    TicketQuantityIn,
)
from acceloka.services.booking import book_tickets
from acceloka.services.catalog import get_booked_ticket
from acceloka.services.mutation import edit_booking, revoke_quantity
from acceloka.unit_of_work import AbstractUnitOfWork, get_unit_of_work


router = APIRouter(prefix="/api/v1", tags=["bookings"])


@router.post("/book-ticket", response_model=BookingReceiptOut)
async def post_book_ticket(
    requests: Annotated[list[TicketQuantityIn], Body(min_length=1)],
    uow: AbstractUnitOfWork = Depends(get_unit_of_work),
):
    receipt = await book_tickets(uow, [req.to_domain() for req in requests])
    await invalidate_available_quota(*{line.ticket_code for line in receipt.lines})
    return BookingReceiptOut.model_validate(receipt)


@router.get("/get-booked-ticket/{booking_id}", response_model=BookedTicketOut)
async def read_booked_ticket(booking_id: str, uow: AbstractUnitOfWork = Depends(get_unit_of_work)):
    detail = await get_booked_ticket(uow, booking_id)
    return BookedTicketOut(
        booking_id=detail.booking_id,
        ticket_code=detail.ticket_code,
        ticket_name=detail.ticket_name,
        category_name=detail.category_name,
        event_date=EventDateRange(minimum=detail.event_date_minimum, maximum=detail.event_date_maximum),
        quantity=detail.quantity,
    )


@router.delete("/revoke-ticket/{booking_id}/{ticket_code}/{qty}", response_model=RevokeResultOut)
async def delete_booked_quantity(
    booking_id: str, ticket_code: str, qty: int, uow: AbstractUnitOfWork = Depends(get_unit_of_work)
):
    result = await revoke_quantity(uow, booking_id, ticket_code, qty)
    await invalidate_available_quota(ticket_code)
    return RevokeResultOut.model_validate(result)


@router.put("/edit-booked-ticket/{booking_id}", response_model=EditResultOut)
async def put_booked_ticket(
    booking_id: str,
    updates: Annotated[list[TicketQuantityIn], Body(min_length=1)],
    uow: AbstractUnitOfWork = Depends(get_unit_of_work),
):
    result = await edit_booking(uow, booking_id, [u.to_domain() for u in updates])
    await invalidate_available_quota(*{line.ticket_code for line in result.lines})
    return EditResultOut.model_validate(result)
