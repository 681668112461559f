"""Domain error codes for ticket booking.

Every error here is caller-correctable except PersistenceFailureError.
The request layer maps codes to transport status.
"""

from enum import Enum


class ErrorCode(Enum):
    """Domain error codes."""

    TICKET_NOT_FOUND = "TICKET_NOT_FOUND"
    TICKET_UNAVAILABLE = "TICKET_UNAVAILABLE"
    INSUFFICIENT_QUOTA = "INSUFFICIENT_QUOTA"
    EVENT_DATE_INVALID = "EVENT_DATE_INVALID"
    BOOKING_NOT_FOUND = "BOOKING_NOT_FOUND"
    INVALID_QUANTITY = "INVALID_QUANTITY"
    INVALID_TICKET_QUERY = "INVALID_TICKET_QUERY"
    PERSISTENCE_FAILURE = "PERSISTENCE_FAILURE"


class DomainError(Exception):
    """Base domain error with code and user-safe message."""

    title = "Domain Error"

    def __init__(self, code: ErrorCode, message: str) -> None:
        super().__init__(message)
        self.code = code
        self.message = message

    def __str__(self) -> str:
        return f"{self.code.value}: {self.message}"


class TicketNotFoundError(DomainError):
    title = "Ticket Not Found"

    def __init__(self, ticket_code: str | None) -> None:
        super().__init__(
            code=ErrorCode.TICKET_NOT_FOUND,
            message=f"Ticket with code {ticket_code} does not exist.",
        )
        self.ticket_code = ticket_code


class TicketUnavailableError(DomainError):
    title = "Ticket Unavailable"

    def __init__(self, ticket_code: str) -> None:
        super().__init__(
            code=ErrorCode.TICKET_UNAVAILABLE,
            message=f"Ticket {ticket_code} is sold out or unavailable.",
        )
        self.ticket_code = ticket_code


class InsufficientQuotaError(DomainError):
    """Raised when a quantity exceeds what the ticket can still supply."""

    title = "Insufficient Quota"

    def __init__(self, ticket_code: str, available: int) -> None:
        super().__init__(
            code=ErrorCode.INSUFFICIENT_QUOTA,
            message=f"Only {available} tickets available for {ticket_code}.",
        )
        self.ticket_code = ticket_code
        self.available = available


class EventDateInvalidError(DomainError):
    title = "Event Date Invalid"

    def __init__(self, ticket_code: str) -> None:
        super().__init__(
            code=ErrorCode.EVENT_DATE_INVALID,
            message=f"The event for ticket {ticket_code} has already started.",
        )
        self.ticket_code = ticket_code


class BookingNotFoundError(DomainError):
    title = "Booked Ticket Not Found"

    def __init__(self, booking_id: str, ticket_code: str | None = None) -> None:
        if ticket_code is None:
            message = f"Booked Ticket with ID {booking_id} does not exist."
        else:
            message = (
                f"Booked Ticket with ID {booking_id} and Ticket Code "
                f"{ticket_code} does not exist."
            )
        super().__init__(code=ErrorCode.BOOKING_NOT_FOUND, message=message)
        self.booking_id = booking_id
        self.ticket_code = ticket_code


class InvalidQuantityError(DomainError):
    title = "Invalid Quantity"

    def __init__(self, message: str) -> None:
        super().__init__(code=ErrorCode.INVALID_QUANTITY, message=message)


class InvalidTicketQueryError(DomainError):
    title = "Invalid Ticket Query"

    def __init__(self, message: str) -> None:
        super().__init__(code=ErrorCode.INVALID_TICKET_QUERY, message=message)


class PersistenceFailureError(DomainError):
    """Raised when the store fails; the surrounding transaction is discarded."""

    title = "Persistence Failure"

    def __init__(self, operation: str, detail: str) -> None:
        super().__init__(
            code=ErrorCode.PERSISTENCE_FAILURE,
            message=f"Store operation '{operation}' failed",
        )
        self.operation = operation
        self.detail = detail
