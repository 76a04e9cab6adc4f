"""
Contacts endpoints. List (newest first) and create.
Error bodies are always {"error": "<message>"}; internal detail is logged, never returned.
"""

import json
import logging
from typing import Any

from fastapi import APIRouter, Depends, Request, status
from fastapi.responses import JSONResponse

from contact_manager.schemas.common import ErrorResponse
from contact_manager.schemas.contact import Contact
from contact_manager.services.contact_store import (
    ContactStore,
    ContactValidationError,
    get_contact_store,
)

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/contacts", tags=["contacts"])

REQUIRED_FIELDS = ("name", "email", "phone")
REQUIRED_FIELDS_MESSAGE = "Name, email, and phone are required"
FETCH_FAILED_MESSAGE = "Failed to fetch contacts"
SERVER_ERROR_MESSAGE = "Server error"
INVALID_JSON_MESSAGE = "Invalid JSON body"


def _is_absent(value: Any) -> bool:
    # Falsy JSON scalars only; empty arrays and objects go on to the store and fail to cast.
    return value is None or (not isinstance(value, (list, dict)) and not value)


def _error(status_code: int, message: str) -> JSONResponse:
    return JSONResponse(status_code=status_code, content={"error": message})


@router.get(
    "",
    response_model=list[Contact],
    response_model_by_alias=True,
    summary="List contacts",
    description="All stored contacts, most recently created first.",
    responses={500: {"model": ErrorResponse}},
)
async def list_contacts(
    store: ContactStore = Depends(get_contact_store),
) -> Any:
    """GET /api/contacts"""
    try:
        contacts = await store.list_contacts()
    except Exception as e:
        logger.exception("List contacts error: %s", e)
        return _error(status.HTTP_500_INTERNAL_SERVER_ERROR, FETCH_FAILED_MESSAGE)
    return contacts


@router.post(
    "",
    status_code=status.HTTP_201_CREATED,
    response_model=Contact,
    response_model_by_alias=True,
    summary="Create contact",
    description="Body: {name, email, phone, message?}. Returns the stored contact.",
    responses={400: {"model": ErrorResponse}, 500: {"model": ErrorResponse}},
)
async def create_contact(
    request: Request,
    store: ContactStore = Depends(get_contact_store),
) -> Any:
    """POST /api/contacts"""
    try:
        body = await request.json()
    except (json.JSONDecodeError, UnicodeDecodeError):
        return _error(status.HTTP_400_BAD_REQUEST, INVALID_JSON_MESSAGE)
    if not isinstance(body, dict):
        body = {}

    if any(_is_absent(body.get(field)) for field in REQUIRED_FIELDS):
        return _error(status.HTTP_400_BAD_REQUEST, REQUIRED_FIELDS_MESSAGE)

    candidate = {field: body.get(field) for field in (*REQUIRED_FIELDS, "message")}
    try:
        contact = await store.create_contact(candidate)
    except ContactValidationError as e:
        logger.info("Rejected contact: %s", e.message)
        return _error(status.HTTP_400_BAD_REQUEST, e.message)
    except Exception as e:
        logger.exception("Create contact error: %s", e)
        return _error(status.HTTP_500_INTERNAL_SERVER_ERROR, SERVER_ERROR_MESSAGE)
    return contact
