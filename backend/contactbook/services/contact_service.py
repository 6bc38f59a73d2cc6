"""
Contactbook API — Contact Service
===================================

What:  Business logic between the HTTP routes and the contact store.
How:   Decodes request bodies into `Contact` records, parses path
       identifiers, and wraps store results in response envelopes.
Who:   Called by route handlers; calls the store passed in by the route.

Decoding rules (stream-decoder semantics):
    - leading JSON whitespace is skipped
    - the FIRST JSON value is decoded; anything after it is ignored
    - `null` decodes to a zero-valued contact
    - any other non-object value, empty input, invalid JSON, NaN/Infinity,
      or a field of the wrong JSON type → InvalidPayloadError

Identifier rules:
    optional sign + ASCII digits, signed 64-bit range, else InvalidIdentifierError
"""

import json
import logging
import re
from typing import Any, NoReturn

from pydantic import ValidationError as PydanticValidationError

from contactbook.exceptions import (
    InvalidIdentifierError,
    InvalidPayloadError,
    NotFoundError,
)
from contactbook.schemas.contact import (
    INT64_MAX,
    INT64_MIN,
    Contact,
    ContactListResponse,
    ContactResponse,
)
from contactbook.store import ContactStore

logger = logging.getLogger(__name__)

_JSON_WHITESPACE = " \t\n\r"
_ID_PATTERN = re.compile(r"[+-]?[0-9]+")


def _reject_constant(name: str) -> NoReturn:
    raise ValueError(f"invalid JSON literal {name!r}")


class ContactService:
    """
    Contact operations used by the /contacts routes.

    Each method takes the store explicitly; the service itself is stateless.
    """

    def __init__(self) -> None:
        self._decoder = json.JSONDecoder(parse_constant=_reject_constant)

    # ── Decoding ──────────────────────────────────────────────────────────

    def decode_contact(self, body: bytes) -> Contact:
        """
        Decode a request body into a Contact.

        Raises:
            InvalidPayloadError: the body does not hold a decodable contact.
        """
        text = body.decode("utf-8", errors="replace").lstrip(_JSON_WHITESPACE)
        if not text:
            raise InvalidPayloadError(context={"reason": "empty body"})

        try:
            document, _ = self._decoder.raw_decode(text)
        except ValueError as exc:
            raise InvalidPayloadError(context={"reason": str(exc)}) from exc

        return self._contact_from_document(document)

    def _contact_from_document(self, document: Any) -> Contact:
        if document is None:
            return Contact()
        if not isinstance(document, dict):
            raise InvalidPayloadError(
                context={"reason": f"expected object, got {type(document).__name__}"}
            )
        try:
            return Contact.model_validate(document)
        except PydanticValidationError as exc:
            fields = [".".join(str(part) for part in err["loc"]) for err in exc.errors()]
            raise InvalidPayloadError(
                context={"reason": "type mismatch", "fields": fields}
            ) from exc

    def parse_contact_id(self, raw_id: str) -> int:
        """
        Parse a path segment into a 64-bit contact id.

        "+7", "-3" and "007" parse; " 7", "7.0", "1_000" and non-ASCII
        digits do not.
        """
        if not _ID_PATTERN.fullmatch(raw_id):
            raise InvalidIdentifierError(raw_id)
        value = int(raw_id)
        if not INT64_MIN <= value <= INT64_MAX:
            raise InvalidIdentifierError(raw_id, context={"reason": "out of range"})
        return value

    # ── Operations ────────────────────────────────────────────────────────

    async def list_contacts(self, store: ContactStore) -> ContactListResponse:
        """All contacts in insertion order."""
        return ContactListResponse(data=await store.list_all())

    async def create_contact(self, store: ContactStore, body: bytes) -> ContactResponse:
        """
        Decode `body` and append the record to the store unchanged.

        Client-supplied ids are kept verbatim; there is no uniqueness check and
        no required field. The store grows by exactly one record on success and
        is untouched on failure.
        """
        contact = self.decode_contact(body)
        created = await store.append(contact)
        return ContactResponse(data=created)

    async def get_contact(self, store: ContactStore, raw_id: str) -> ContactResponse:
        """
        Look up the first contact whose id equals the parsed `raw_id`.

        Raises:
            InvalidIdentifierError: `raw_id` is not an integer.
            NotFoundError: no record carries that id.
        """
        contact_id = self.parse_contact_id(raw_id)
        contact = await store.find_first(contact_id)
        if contact is None:
            logger.debug("Contact %d not found (store size=%d)", contact_id, len(store))
            raise NotFoundError(contact_id)
        return ContactResponse(data=contact)


# Module-level instance shared by the route handlers
contact_service = ContactService()
