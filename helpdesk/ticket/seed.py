# helpdesk/ticket/seed.py
import logging

from sqlalchemy import func
from sqlalchemy.orm import Session
from helpdesk.ticket.models import Status, Ticket
from helpdesk.ticket import services as ticket_service
from helpdesk.ticket.validation import validate_create, validate_update

logger = logging.getLogger(__name__)

SAMPLE_TICKETS = [
    {
        "customer_name": "John Doe",
        "issue_description": "Payment not processed for order #12345",
        "priority": "high",
        "status": "open",
    },
    {
        "customer_name": "Jane Smith",
        "issue_description": "Wrong item received in shipment",
        "priority": "medium",
        "status": "open",
    },
    {
        "customer_name": "Michael Johnson",
        "issue_description": "Request for refund on damaged product",
        "priority": "low",
        "status": "closed",
    },
]


def seed_tickets(db: Session) -> int:
    """Insert the sample tickets into an empty table. Returns how many were added."""
    existing = db.query(func.count(Ticket.id)).scalar() or 0
    if existing:
        logger.info("Skipping seed, %s tickets already present", existing)
        return 0

    for sample in SAMPLE_TICKETS:
        ticket = ticket_service.create_ticket(db, validate_create(sample))
        # Tickets always start open; close afterwards through a regular update
        if sample["status"] != Status.OPEN.value:
            ticket_service.update_ticket(db, ticket.id, validate_update(sample))

    logger.info("Seeded %s sample tickets", len(SAMPLE_TICKETS))
    return len(SAMPLE_TICKETS)


if __name__ == "__main__":
    from helpdesk.core.config import get_settings
    from helpdesk.core.database import SessionLocal, init_db
    from helpdesk.core.logging_config import configure_logging

    configure_logging(get_settings().LOG_LEVEL)
    init_db()
    with SessionLocal() as session:
        seed_tickets(session)
