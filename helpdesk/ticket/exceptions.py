# helpdesk/ticket/exceptions.py


class TicketError(Exception):
    """Base class for ticket errors surfaced to API clients."""


class TicketNotFoundError(TicketError):
    def __init__(self, ticket_id: int | str):
        super().__init__(f"Ticket {ticket_id} not found")
        self.ticket_id = ticket_id


class TicketValidationError(TicketError):
    def __init__(self, errors: dict[str, str]):
        super().__init__(", ".join(f"{field}: {msg}" for field, msg in errors.items()))
        self.errors = errors
