"""
Contactbook API — Pydantic Request/Response Schemas
=====================================================

What:  Pydantic models defining the wire contract of the contacts endpoints.
How:   The service layer validates decoded request documents against
       `Contact`; routes serialize the envelopes below into response bodies.

Wire shapes:
    Contact:             {"id": int, "name": str, "phone": str, "email": str}
    ContactResponse:     {"message": "OK", "data": Contact}
    ContactListResponse: {"message": "OK", "data": [Contact, ...]}
    ErrorResponse:       {"error": str}

Field declaration order is the serialized key order.
"""

from typing import Any, List

from pydantic import BaseModel, Field, StrictInt, StrictStr, field_validator, model_validator

# Signed 64-bit bounds for contact identifiers.
INT64_MIN = -(2**63)
INT64_MAX = 2**63 - 1

RESPONSE_OK = "OK"


class Contact(BaseModel):
    """
    What:  A single contact record.

    No business invariants are enforced: duplicate ids, empty strings and
    malformed phone numbers or emails are all accepted. Only JSON types are
    checked (strict mode: "1" is not an int, 1.0 is not an int, true is not
    an int). Absent or null fields take their zero value; unknown keys are
    ignored.
    """
    id: StrictInt = Field(default=0, ge=INT64_MIN, le=INT64_MAX, description="Contact identifier (not unique)")
    name: StrictStr = Field(default="", description="Display name")
    phone: StrictStr = Field(default="", description="Phone number, free-form")
    email: StrictStr = Field(default="", description="Email address, free-form")

    model_config = {"extra": "ignore"}

    @model_validator(mode="before")
    @classmethod
    def drop_null_fields(cls, data: Any) -> Any:
        """JSON null leaves a field at its zero value."""
        if isinstance(data, dict):
            return {key: value for key, value in data.items() if value is not None}
        return data

    @field_validator("name", "phone", "email")
    @classmethod
    def replace_lone_surrogates(cls, v: str) -> str:
        """
        Unpaired \\uD800-\\uDFFF escapes become U+FFFD.

        They are valid JSON but cannot be encoded as UTF-8, so a stored
        record holding one could never be written back out.
        """
        return v.encode("utf-16-le", "surrogatepass").decode("utf-16-le", "replace")


class ContactResponse(BaseModel):
    """
    What:  Envelope for a single contact.
    Who:   Returned by POST /contacts (201) and GET /contacts/{id} (200).
    """
    message: str = Field(default=RESPONSE_OK)
    data: Contact


class ContactListResponse(BaseModel):
    """
    What:  Envelope for the full contact list, in store insertion order.
    Who:   Returned by GET /contacts.
    """
    message: str = Field(default=RESPONSE_OK)
    data: List[Contact]


class ErrorResponse(BaseModel):
    """
    What:  Error body shared by every JSON error response.

    Example:
        {"error": "data not found"}
    """
    error: str = Field(description="Error description")
