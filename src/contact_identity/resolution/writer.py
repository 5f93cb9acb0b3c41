"""Contact writes: create primaries/secondaries and merge clusters.

Every function here must be called within an active ``session.begin()``
context; the caller owns commit and rollback.
"""

from __future__ import annotations

from dataclasses import dataclass, field

import sqlalchemy as sa
import structlog
from sqlalchemy.ext.asyncio import AsyncSession

from contact_identity.errors import LinkIntegrityError
from contact_identity.models.contact import Contact, LinkPrecedence, utcnow
from contact_identity.resolution.clusters import ClusterIndex
from contact_identity.resolution.decider import select_surviving_primary

logger = structlog.get_logger()


@dataclass
class MergeOutcome:
    """Result of merging two or more clusters.

    Attributes:
        surviving_primary_id: Primary that every merged contact now links to.
        demoted_primary_ids: Former primaries turned into secondaries.
        repointed_count: Former dependents re-linked to the survivor.
    """

    surviving_primary_id: int
    demoted_primary_ids: list[int] = field(default_factory=list)
    repointed_count: int = 0


def _require_primary(target: Contact) -> None:
    if not target.is_primary or target.linked_id is not None:
        raise LinkIntegrityError(meta={"target_id": target.id})


async def create_primary_contact(
    session: AsyncSession,
    email: str | None,
    phone_number: str | None,
) -> Contact:
    """Insert a brand-new primary contact."""
    now = utcnow()
    contact = Contact(
        email=email,
        phone_number=phone_number,
        linked_id=None,
        link_precedence=LinkPrecedence.PRIMARY.value,
        created_at=now,
        updated_at=now,
    )
    session.add(contact)
    await session.flush()  # Get auto-generated ID

    logger.info("contact_created", contact_id=contact.id)
    return contact


async def create_secondary_contact(
    session: AsyncSession,
    email: str | None,
    phone_number: str | None,
    primary: Contact,
) -> Contact:
    """Insert a secondary contact linked directly to ``primary``.

    Raises:
        LinkIntegrityError: If ``primary`` is itself a secondary.
    """
    _require_primary(primary)

    now = utcnow()
    contact = Contact(
        email=email,
        phone_number=phone_number,
        linked_id=primary.id,
        link_precedence=LinkPrecedence.SECONDARY.value,
        created_at=now,
        updated_at=now,
    )
    session.add(contact)
    await session.flush()

    logger.info(
        "secondary_contact_created", contact_id=contact.id, primary_id=primary.id
    )
    return contact


async def merge_clusters(session: AsyncSession, index: ClusterIndex) -> MergeOutcome:
    """Fold every cluster in ``index`` into the one with the oldest primary.

    Each other primary is demoted to a secondary of the survivor and its
    dependents are re-pointed straight at the survivor, so no link chains
    remain.  In-memory ``Contact`` objects are not patched; callers re-read
    the cluster afterwards.
    """
    survivor = select_surviving_primary(index)
    _require_primary(survivor)

    outcome = MergeOutcome(surviving_primary_id=survivor.id)
    now = utcnow()

    for primary_id in index.primary_ids:
        if primary_id == survivor.id:
            continue

        # Demote the other primary
        await session.execute(
            sa.update(Contact)
            .where(Contact.id == primary_id)
            .values(
                link_precedence=LinkPrecedence.SECONDARY.value,
                linked_id=survivor.id,
                updated_at=now,
            )
            .execution_options(synchronize_session=False)
        )

        # Re-point its dependents, soft-deleted rows included
        repointed = await session.execute(
            sa.update(Contact)
            .where(Contact.linked_id == primary_id)
            .values(linked_id=survivor.id, updated_at=now)
            .execution_options(synchronize_session=False)
        )

        outcome.demoted_primary_ids.append(primary_id)
        outcome.repointed_count += repointed.rowcount or 0

    logger.info(
        "clusters_merged",
        surviving_primary_id=outcome.surviving_primary_id,
        demoted_primary_ids=outcome.demoted_primary_ids,
        repointed_count=outcome.repointed_count,
    )
    return outcome
