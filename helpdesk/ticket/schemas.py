# helpdesk/ticket/schemas.py
import enum
from datetime import datetime
from typing import Annotated

from pydantic import BaseModel, StringConstraints

from helpdesk.ticket.models import Priority, Status

CustomerName = Annotated[str, StringConstraints(strip_whitespace=True, min_length=1, max_length=255)]
IssueDescription = Annotated[str, StringConstraints(strip_whitespace=True, min_length=1)]


class TicketBase(BaseModel):
    customer_name: CustomerName
    issue_description: IssueDescription
    priority: Priority


class TicketCreate(TicketBase):
    pass


class TicketUpdate(TicketBase):
    status: Status


class TicketOut(BaseModel):
    id: int
    customer_name: str
    issue_description: str
    priority: Priority
    status: Status
    created_at: datetime
    updated_at: datetime

    model_config = {"from_attributes": True}


class TicketStats(BaseModel):
    total: int
    open: int
    closed: int


class TicketListOut(BaseModel):
    tickets: list[TicketOut]
    stats: TicketStats


class TicketEnvelope(BaseModel):
    ticket: TicketOut


class TicketMessageOut(TicketEnvelope):
    message: str


class MessageOut(BaseModel):
    message: str


class SortField(str, enum.Enum):
    CUSTOMER_NAME = "customer_name"
    PRIORITY = "priority"
    STATUS = "status"
    CREATED_AT = "created_at"
    UPDATED_AT = "updated_at"


class SortDirection(str, enum.Enum):
    ASC = "asc"
    DESC = "desc"


def _parse_choice(enum_cls, value):
    """Return the enum member for ``value``, or None when it is not a known value."""
    try:
        return enum_cls(value)
    except ValueError:
        return None


class TicketQuery(BaseModel):
    """Listing options, already reduced to the supported choices."""

    status: Status | None = None
    search: str | None = None
    sort_by: SortField = SortField.CREATED_AT
    sort_direction: SortDirection = SortDirection.DESC

    model_config = {"frozen": True}

    @classmethod
    def from_params(
        cls,
        status: str | None = None,
        search: str | None = None,
        sort_by: str | None = None,
        sort_direction: str | None = None,
    ) -> "TicketQuery":
        # Unknown status or sort field are dropped; any direction but "asc" is descending
        parsed_status = _parse_choice(Status, status) if status is not None else None
        parsed_sort = _parse_choice(SortField, sort_by) if sort_by is not None else None
        return cls(
            status=parsed_status,
            search=search,
            sort_by=parsed_sort or SortField.CREATED_AT,
            sort_direction=SortDirection.ASC if sort_direction == "asc" else SortDirection.DESC,
        )
