from acceloka.domain.models import (
    BookedEntry,
    BookedLine,
    BookedTicketDetail,
    BookingReceipt,
    EditLineResult,
    EditResult,
    RevokeResult,
    Ticket,
    TicketAvailability,
    TicketPage,
    TicketQuantity,
    TicketQuery,
)

__all__ = [
    "Ticket",
    "BookedEntry",
    "TicketQuantity",
    "BookedLine",
    "BookingReceipt",
    "RevokeResult",
    "EditLineResult",
    "EditResult",
    "BookedTicketDetail",
    "TicketAvailability",
    "TicketQuery",
    "TicketPage",
]
