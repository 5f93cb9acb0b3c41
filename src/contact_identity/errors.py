"""Typed errors raised by identity resolution.

Each error carries a stable ``code`` for programmatic handling and a
``status_code`` hint that the HTTP layer uses when rendering it.
"""

from __future__ import annotations

from typing import Any


class IdentityError(Exception):
    """Base error for contact identity resolution."""

    default_code = "identity.error"
    default_message = "Identity resolution failed"
    status_code = 500

    def __init__(
        self,
        message: str | None = None,
        *,
        code: str | None = None,
        meta: dict[str, Any] | None = None,
    ) -> None:
        self.message = message or self.default_message
        self.code = code or self.default_code
        self.meta = dict(meta or {})
        super().__init__(self.message)

    def to_public_dict(self) -> dict[str, Any]:
        payload: dict[str, Any] = {"detail": self.message, "code": self.code}
        if self.meta:
            payload["meta"] = self.meta
        return payload


class ValidationError(IdentityError):
    """Neither email nor phone number was supplied."""

    default_code = "request.validation_error"
    default_message = "Either email or phoneNumber must be provided"
    status_code = 400


class NotFoundInvariantViolation(IdentityError):
    """A cluster has no live primary contact."""

    default_code = "cluster.primary_missing"
    default_message = "Contact cluster has no primary contact"


class LinkIntegrityError(NotFoundInvariantViolation):
    """A write would link a contact to something other than a cluster primary."""

    default_code = "cluster.link_integrity"
    default_message = "Contacts may only link to a primary contact"


class TransactionFailure(IdentityError):
    """The store rejected a statement; the transaction was rolled back."""

    default_code = "store.transaction_failed"
    default_message = "Contact store transaction failed"


class StoreUnavailable(IdentityError):
    """The store could not be reached."""

    default_code = "store.unavailable"
    default_message = "Contact store is unavailable"


class ContactNotFound(IdentityError):
    """No live contact has the requested id."""

    default_code = "contact.not_found"
    default_message = "Contact not found"
    status_code = 404
