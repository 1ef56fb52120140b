# helpdesk/ticket/validation.py
"""Validation of ticket payloads.

Payloads are checked against the pydantic schemas; failures are reduced to a
single human readable message per field, the shape API clients receive.
"""
from collections.abc import Iterable, Mapping
from typing import Any

from pydantic import BaseModel, ValidationError

from helpdesk.ticket.exceptions import TicketValidationError
from helpdesk.ticket.schemas import TicketCreate, TicketUpdate

FIELD_LABELS = {
    "customer_name": "customer name",
    "issue_description": "issue description",
    "priority": "priority",
    "status": "status",
}

_REQUEST_SOURCES = {"body", "query", "path", "header", "cookie"}


def error_message(field: str, error: Mapping[str, Any]) -> str:
    label = FIELD_LABELS.get(field, field.replace("_", " "))
    kind = error.get("type")

    if kind in ("missing", "string_too_short") or ("input" in error and error["input"] is None):
        return f"The {label} field is required."
    if kind == "string_type":
        return f"The {label} field must be a string."
    if kind == "string_too_long":
        limit = (error.get("ctx") or {}).get("max_length")
        return f"The {label} field must not be greater than {limit} characters."
    if kind == "enum":
        return f"The selected {label} is invalid."
    if kind == "json_invalid":
        return "The request body must be valid JSON."
    return str(error.get("msg", "Invalid value."))


def error_field(error: Mapping[str, Any]) -> str:
    if error.get("type") == "json_invalid":
        return "body"
    loc = tuple(error.get("loc") or ())
    if len(loc) > 1 and loc[0] in _REQUEST_SOURCES:
        loc = loc[1:]
    return str(loc[0]) if loc else "body"


def errors_by_field(errors: Iterable[Mapping[str, Any]]) -> dict[str, str]:
    """Collapse pydantic errors into ``{field: message}``, keeping the first per field."""
    collected: dict[str, str] = {}
    for error in errors:
        field = error_field(error)
        collected.setdefault(field, error_message(field, error))
    return collected


def _validate(schema: type[BaseModel], data: Any):
    try:
        return schema.model_validate(data)
    except ValidationError as exc:
        raise TicketValidationError(errors_by_field(exc.errors())) from exc


def validate_create(data: Any) -> TicketCreate:
    return _validate(TicketCreate, data)


def validate_update(data: Any) -> TicketUpdate:
    return _validate(TicketUpdate, data)
