"""Cluster index: contacts grouped under the primary they belong to.

Clusters are persisted explicitly through ``linked_id`` pointers.  Rather
than following pointers ad hoc, resolution builds a ``ClusterIndex`` that
maps each primary id to its ordered members, and every "oldest" decision
goes through ``oldest_key``.
"""

from __future__ import annotations

import datetime as dt
from collections.abc import Iterable
from dataclasses import dataclass, field

from contact_identity.errors import NotFoundInvariantViolation
from contact_identity.models.contact import Contact


def oldest_key(contact: Contact) -> tuple[dt.datetime, int]:
    """Sort key for "oldest first": ``created_at`` ascending, then ``id``."""
    return (contact.created_at, contact.id)


def sort_contacts(contacts: Iterable[Contact]) -> list[Contact]:
    return sorted(contacts, key=oldest_key)


def oldest_primary(contacts: Iterable[Contact]) -> Contact:
    """Return the oldest primary among ``contacts``.

    Raises:
        NotFoundInvariantViolation: If no contact is a primary.
    """
    primaries = [c for c in contacts if c.is_primary]
    if not primaries:
        raise NotFoundInvariantViolation()
    return min(primaries, key=oldest_key)


@dataclass
class ClusterIndex:
    """Contacts grouped by primary id.

    Attributes:
        members: Primary id -> members in cluster order (primary included).
        primaries: Primary id -> the primary contact itself, when loaded.
    """

    members: dict[int, list[Contact]] = field(default_factory=dict)
    primaries: dict[int, Contact] = field(default_factory=dict)

    @classmethod
    def build(cls, contacts: Iterable[Contact]) -> ClusterIndex:
        index = cls()
        for contact in sort_contacts(contacts):
            index.add(contact)
        return index

    def add(self, contact: Contact) -> None:
        group = self.members.setdefault(contact.primary_id, [])
        if any(member.id == contact.id for member in group):
            return
        group.append(contact)
        if contact.is_primary:
            self.primaries[contact.id] = contact

    @property
    def primary_ids(self) -> list[int]:
        return list(self.members)

    def __len__(self) -> int:
        return len(self.members)

    def primary_of(self, primary_id: int) -> Contact:
        try:
            return self.primaries[primary_id]
        except KeyError:
            raise NotFoundInvariantViolation(
                meta={"primary_id": primary_id}
            ) from None

    def ordered_primaries(self) -> list[Contact]:
        """Every group's primary, oldest first."""
        return sorted(
            (self.primary_of(pid) for pid in self.members), key=oldest_key
        )

    def all_contacts(self) -> list[Contact]:
        return sort_contacts(c for group in self.members.values() for c in group)
