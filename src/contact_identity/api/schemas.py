"""Pydantic request/response schemas for the Contact Identity API."""

from __future__ import annotations

from typing import Annotated

from pydantic import BaseModel, BeforeValidator, ConfigDict, Field


def _coerce_to_str(v: object) -> str | None:
    """Coerce numeric identifiers (e.g. ``"phoneNumber": 123456``) to strings."""
    if v is None:
        return None
    if isinstance(v, bool):
        raise ValueError("expected a string or number")
    if isinstance(v, (int, float)):
        return str(v)
    return v


OptIdentifier = Annotated[str | None, BeforeValidator(_coerce_to_str)]


class IdentifyRequest(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    email: OptIdentifier = None
    phone_number: OptIdentifier = Field(default=None, alias="phoneNumber")


class ContactSummary(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    # Published field name; the misspelling is part of the wire contract.
    primary_contact_id: int = Field(alias="primaryContatctId")
    emails: list[str]
    phone_numbers: list[str] = Field(alias="phoneNumbers")
    secondary_contact_ids: list[int] = Field(alias="secondaryContactIds")


class IdentifyResponse(BaseModel):
    contact: ContactSummary


class HealthResponse(BaseModel):
    status: str


class ErrorResponse(BaseModel):
    detail: str
    code: str
