"""Shape a resolved cluster into the identify response."""

from __future__ import annotations

from collections.abc import Iterable
from dataclasses import dataclass, field

from contact_identity.models.contact import Contact
from contact_identity.resolution.clusters import oldest_primary, sort_contacts


@dataclass
class IdentifyResult:
    """Consolidated view of one identity cluster.

    Attributes:
        primary_contact_id: Id of the cluster primary.
        emails: Unique emails, primary's first.
        phone_numbers: Unique phone numbers, primary's first.
        secondary_contact_ids: Ids of all non-primary members, oldest first.
    """

    primary_contact_id: int
    emails: list[str] = field(default_factory=list)
    phone_numbers: list[str] = field(default_factory=list)
    secondary_contact_ids: list[int] = field(default_factory=list)

    def to_dict(self) -> dict:
        """Wire format; ``primaryContatctId`` keeps the published spelling."""
        return {
            "contact": {
                "primaryContatctId": self.primary_contact_id,
                "emails": list(self.emails),
                "phoneNumbers": list(self.phone_numbers),
                "secondaryContactIds": list(self.secondary_contact_ids),
            }
        }


def _unique(values: Iterable[str | None]) -> list[str]:
    return list(dict.fromkeys(v for v in values if v))


def build_identify_result(contacts: Iterable[Contact]) -> IdentifyResult:
    """Build the response from the authoritative cluster membership.

    Raises:
        NotFoundInvariantViolation: If the cluster has no primary.
    """
    ordered = sort_contacts(contacts)
    primary = oldest_primary(ordered)
    secondaries = [c for c in ordered if c.id != primary.id]

    return IdentifyResult(
        primary_contact_id=primary.id,
        emails=_unique([primary.email, *(c.email for c in secondaries)]),
        phone_numbers=_unique(
            [primary.phone_number, *(c.phone_number for c in secondaries)]
        ),
        secondary_contact_ids=[c.id for c in secondaries],
    )
