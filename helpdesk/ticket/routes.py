# helpdesk/ticket/routes.py
from typing import Any

from fastapi import APIRouter, Body, Depends, Query
from sqlalchemy.orm import Session
from helpdesk.core.database import get_db
from helpdesk.ticket.schemas import (
    MessageOut,
    TicketEnvelope,
    TicketListOut,
    TicketMessageOut,
    TicketQuery,
)
from helpdesk.ticket import services as ticket_service
from helpdesk.ticket.validation import validate_create, validate_update

router = APIRouter(prefix="/tickets", tags=["Tickets"])


@router.get("", response_model=TicketListOut)
def list_all(
    status: str | None = Query(default=None, description="Filter by status: open or closed"),
    search: str | None = Query(default=None, description="Substring of customer name or issue description"),
    sort_by: str | None = Query(default=None, description="customer_name, priority, status, created_at or updated_at"),
    sort_direction: str | None = Query(default=None, description="asc, anything else sorts descending"),
    db: Session = Depends(get_db),
):
    query = TicketQuery.from_params(
        status=status,
        search=search,
        sort_by=sort_by,
        sort_direction=sort_direction,
    )
    tickets, stats = ticket_service.list_tickets(db, query)
    return {"tickets": tickets, "stats": stats}


@router.post("", response_model=TicketMessageOut, status_code=201)
def create(data: Any = Body(default=None), db: Session = Depends(get_db)):
    ticket = validate_create(data)
    created = ticket_service.create_ticket(db, ticket)
    return {"ticket": created, "message": "Ticket created successfully"}


# Ids stay strings here: one that is not a valid ticket id is just an unknown ticket
@router.get("/{ticket_id}", response_model=TicketEnvelope)
def get(ticket_id: str, db: Session = Depends(get_db)):
    return {"ticket": ticket_service.get_ticket(db, ticket_id)}


@router.put("/{ticket_id}", response_model=TicketMessageOut)
def update(ticket_id: str, data: Any = Body(default=None), db: Session = Depends(get_db)):
    ticket = validate_update(data)
    updated = ticket_service.update_ticket(db, ticket_id, ticket)
    return {"ticket": updated, "message": "Ticket updated successfully"}


@router.delete("/{ticket_id}", response_model=MessageOut)
def delete(ticket_id: str, db: Session = Depends(get_db)):
    ticket_service.delete_ticket(db, ticket_id)
    return {"message": "Ticket deleted successfully"}
