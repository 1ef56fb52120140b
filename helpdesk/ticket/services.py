# helpdesk/ticket/services.py
import logging

from sqlalchemy import func, or_
from sqlalchemy.orm import Session
from helpdesk.ticket.exceptions import TicketNotFoundError
from helpdesk.ticket.models import Status, Ticket, utcnow
from helpdesk.ticket.schemas import (
    SortDirection,
    SortField,
    TicketCreate,
    TicketQuery,
    TicketStats,
    TicketUpdate,
)

logger = logging.getLogger(__name__)

SORT_COLUMNS = {
    SortField.CUSTOMER_NAME: Ticket.customer_name,
    SortField.PRIORITY: Ticket.priority,
    SortField.STATUS: Ticket.status,
    SortField.CREATED_AT: Ticket.created_at,
    SortField.UPDATED_AT: Ticket.updated_at,
}

LIKE_ESCAPE = "\\"


def _like_pattern(text: str) -> str:
    escaped = (
        text.replace(LIKE_ESCAPE, LIKE_ESCAPE * 2)
        .replace("%", LIKE_ESCAPE + "%")
        .replace("_", LIKE_ESCAPE + "_")
    )
    return f"%{escaped}%"


def list_tickets(db: Session, query: TicketQuery) -> tuple[list[Ticket], TicketStats]:
    q = db.query(Ticket)

    if query.status is not None:
        q = q.filter(Ticket.status == query.status)

    # Empty search still applies, and matches every row
    if query.search is not None:
        pattern = _like_pattern(query.search)
        q = q.filter(
            or_(
                Ticket.customer_name.ilike(pattern, escape=LIKE_ESCAPE),
                Ticket.issue_description.ilike(pattern, escape=LIKE_ESCAPE),
            )
        )

    column = SORT_COLUMNS[query.sort_by]
    if query.sort_direction is SortDirection.ASC:
        q = q.order_by(column.asc(), Ticket.id.asc())
    else:
        q = q.order_by(column.desc(), Ticket.id.desc())

    return q.all(), get_stats(db)


def get_stats(db: Session) -> TicketStats:
    """Counts over the whole table, whatever the listing filters are."""
    counts = db.query(func.count(Ticket.id))
    return TicketStats(
        total=counts.scalar() or 0,
        open=counts.filter(Ticket.status == Status.OPEN).scalar() or 0,
        closed=counts.filter(Ticket.status == Status.CLOSED).scalar() or 0,
    )


MAX_TICKET_ID = 2**63 - 1


def parse_ticket_id(value: int | str) -> int | None:
    """Return ``value`` as a storable id, or None when no ticket could have it."""
    if isinstance(value, str):
        if not (value.isascii() and value.isdigit()):
            return None
        value = int(value)
    if not 1 <= value <= MAX_TICKET_ID:
        return None
    return value


def get_ticket(db: Session, ticket_id: int | str) -> Ticket:
    parsed_id = parse_ticket_id(ticket_id)
    db_ticket = None
    if parsed_id is not None:
        db_ticket = db.query(Ticket).filter(Ticket.id == parsed_id).first()
    if db_ticket is None:
        logger.warning("Ticket %s not found", ticket_id)
        raise TicketNotFoundError(ticket_id)
    return db_ticket


def create_ticket(db: Session, payload: TicketCreate) -> Ticket:
    now = utcnow()
    db_ticket = Ticket(
        customer_name=payload.customer_name,
        issue_description=payload.issue_description,
        priority=payload.priority,
        status=Status.OPEN,
        created_at=now,
        updated_at=now,
    )
    db.add(db_ticket)
    db.commit()
    db.refresh(db_ticket)
    logger.info("Created ticket %s (priority=%s)", db_ticket.id, db_ticket.priority.value)
    return db_ticket


def update_ticket(db: Session, ticket_id: int | str, payload: TicketUpdate) -> Ticket:
    db_ticket = get_ticket(db, ticket_id)
    db_ticket.customer_name = payload.customer_name
    db_ticket.issue_description = payload.issue_description
    db_ticket.priority = payload.priority
    db_ticket.status = payload.status
    db_ticket.updated_at = utcnow()
    db.commit()
    db.refresh(db_ticket)
    logger.info(
        "Updated ticket %s (priority=%s, status=%s)",
        db_ticket.id,
        db_ticket.priority.value,
        db_ticket.status.value,
    )
    return db_ticket


def delete_ticket(db: Session, ticket_id: int | str) -> None:
    db_ticket = get_ticket(db, ticket_id)
    db.delete(db_ticket)
    db.commit()
    logger.info("Deleted ticket %s", ticket_id)
