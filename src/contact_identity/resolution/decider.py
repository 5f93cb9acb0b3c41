"""Merge decisions: new-secondary check and cluster-bridging check."""

from __future__ import annotations

from collections.abc import Iterable

from contact_identity.models.contact import Contact
from contact_identity.resolution.clusters import ClusterIndex


def needs_new_secondary(
    cluster_contacts: Iterable[Contact],
    email: str | None,
    phone_number: str | None,
) -> bool:
    """True unless some member already holds exactly this (email, phone) pair.

    The pair is compared as a whole, with an absent side matching only NULL,
    so a known email combined with an unseen phone still needs a new row.
    """
    return not any(
        contact.email == email and contact.phone_number == phone_number
        for contact in cluster_contacts
    )


def needs_merge(index: ClusterIndex) -> bool:
    """More than one primary group means the observation bridged clusters."""
    return len(index) > 1


def select_surviving_primary(index: ClusterIndex) -> Contact:
    """Oldest primary across all groups; survives a merge."""
    return index.ordered_primaries()[0]
