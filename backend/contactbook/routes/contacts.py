"""
Contactbook API — Contacts Route Handlers
===========================================

What:  GET /contacts (list), POST /contacts (create), GET /contacts/{id} (detail).
How:   Reads the request, delegates to ContactService with the injected
       store, and encodes the returned envelope with JSONLineResponse.
Who:   Any HTTP client of the contact list.

Errors raised here or in the service are turned into responses by the
global exception handlers in main.py.
"""

import asyncio
import logging

from fastapi import APIRouter, Depends, Request
from starlette.requests import ClientDisconnect
from starlette.responses import Response

from contactbook.config import settings
from contactbook.exceptions import InvalidPayloadError
from contactbook.responses import JSONLineResponse, encode_json
from contactbook.schemas.contact import (
    ContactListResponse,
    ContactResponse,
    ErrorResponse,
)
from contactbook.services.contact_service import contact_service
from contactbook.store import ContactStore, get_contact_store

logger = logging.getLogger(__name__)

# ── Router Configuration ──────────────────────────────────────────────────
router = APIRouter(tags=["Contacts"])


async def read_body(request: Request) -> bytes:
    """
    Read the full request body within the configured read timeout.

    A body that cannot be read in time, or whose sender disconnects, is
    reported the same way as an undecodable one.
    """
    try:
        return await asyncio.wait_for(request.body(), timeout=settings.read_timeout)
    except asyncio.TimeoutError as exc:
        raise InvalidPayloadError(
            context={"reason": "body read timed out", "timeout": settings.read_timeout}
        ) from exc
    except ClientDisconnect as exc:
        raise InvalidPayloadError(context={"reason": "client disconnected"}) from exc


@router.get(
    "/contacts",
    response_class=JSONLineResponse,
    responses={
        200: {"description": "Every contact in insertion order", "model": ContactListResponse},
    },
    summary="List all contacts",
)
async def list_contacts(
    store: ContactStore = Depends(get_contact_store),
) -> Response:
    result = await contact_service.list_contacts(store)
    return encode_json(result)


@router.post(
    "/contacts",
    status_code=201,
    response_class=JSONLineResponse,
    responses={
        201: {"description": "Contact appended", "model": ContactResponse},
        400: {"description": "Undecodable body (strict status mode only)", "model": ErrorResponse},
    },
    summary="Create a contact",
    description=(
        "Appends the decoded contact to the store verbatim. Ids are not checked "
        "for uniqueness and no field is required; absent fields take zero values."
    ),
)
async def create_contact(
    request: Request,
    store: ContactStore = Depends(get_contact_store),
) -> Response:
    """
    Create a contact from the JSON request body.

    Returns 201 with the echoed record. An undecodable body answers
    {"error": "invalid payload"} and leaves the store unchanged.
    """
    body = await read_body(request)
    result = await contact_service.create_contact(store, body)
    return encode_json(result, status_code=201)


@router.get(
    "/contacts/{contact_id}",
    response_class=JSONLineResponse,
    responses={
        200: {"description": "First contact with this id", "model": ContactResponse},
        400: {"description": "Non-integer id (strict status mode only)", "model": ErrorResponse},
        404: {"description": "No contact with this id", "model": ErrorResponse},
    },
    summary="Get a contact by id",
)
async def get_contact(
    contact_id: str,
    store: ContactStore = Depends(get_contact_store),
) -> Response:
    """
    Fetch a single contact.

    Args:
        contact_id: Raw path segment; parsed by the service so that a
                    non-integer value answers {"error": "invalid id"}
                    instead of FastAPI's 422.
    """
    result = await contact_service.get_contact(store, contact_id)
    return encode_json(result)
