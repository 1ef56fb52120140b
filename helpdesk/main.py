# helpdesk/main.py
import logging
from contextlib import asynccontextmanager

import uvicorn
from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from helpdesk.core.config import get_settings
from helpdesk.core.database import SessionLocal, init_db
from helpdesk.core.logging_config import configure_logging
from helpdesk.ticket.exceptions import TicketNotFoundError, TicketValidationError
from helpdesk.ticket.routes import router as ticket_router
from helpdesk.ticket.seed import seed_tickets
from helpdesk.ticket.validation import errors_by_field

settings = get_settings()
configure_logging(settings.LOG_LEVEL)
logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    init_db()
    if settings.SEED_DEMO_DATA:
        with SessionLocal() as db:
            seed_tickets(db)
    yield


app = FastAPI(
    title=settings.APP_NAME,
    description=settings.APP_DESC,
    version=settings.APP_VERSION,
    lifespan=lifespan,
)

app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.cors_origins,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)


@app.exception_handler(RequestValidationError)
async def request_validation_handler(request: Request, exc: RequestValidationError):
    errors = errors_by_field(exc.errors())
    logger.info("Rejected %s %s: %s", request.method, request.url.path, errors)
    return JSONResponse(status_code=422, content={"errors": errors})


@app.exception_handler(TicketValidationError)
async def ticket_validation_handler(request: Request, exc: TicketValidationError):
    logger.info("Rejected %s %s: %s", request.method, request.url.path, exc.errors)
    return JSONResponse(status_code=422, content={"errors": exc.errors})


@app.exception_handler(TicketNotFoundError)
async def ticket_not_found_handler(request: Request, exc: TicketNotFoundError):
    return JSONResponse(status_code=404, content={"detail": "Ticket not found"})


# Routers
app.include_router(ticket_router)
if settings.API_PREFIX:
    # Same routes under the prefix the frontend calls
    app.include_router(ticket_router, prefix=settings.API_PREFIX, include_in_schema=False)


@app.get("/health", tags=["Health"])
def health():
    return {"status": "ok"}


def run() -> None:
    uvicorn.run("helpdesk.main:app", host=settings.HOST, port=settings.PORT)


if __name__ == "__main__":
    run()
