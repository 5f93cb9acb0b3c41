"""Identify: resolve an (email, phone) observation to its contact cluster.

Flow: find direct matches, expand to full clusters, decide whether a new
secondary and/or a merge is needed, write, then shape the response.  The
whole request runs in one transaction on the injected session.
"""

from __future__ import annotations

import sqlalchemy as sa
import structlog
from sqlalchemy.ext.asyncio import AsyncSession

from contact_identity.db.guard import store_errors
from contact_identity.errors import ContactNotFound, IdentityError, ValidationError
from contact_identity.models.contact import Contact
from contact_identity.resolution.clusters import ClusterIndex
from contact_identity.resolution.decider import needs_merge, needs_new_secondary
from contact_identity.resolution.expander import expand_clusters, load_cluster
from contact_identity.resolution.finder import find_existing_contacts
from contact_identity.resolution.response import IdentifyResult, build_identify_result
from contact_identity.resolution.writer import (
    create_primary_contact,
    create_secondary_contact,
    merge_clusters,
)

logger = structlog.get_logger()


async def _resolve(
    session: AsyncSession, email: str | None, phone_number: str | None
) -> IdentifyResult:
    existing = await find_existing_contacts(session, email, phone_number)
    if not existing:
        contact = await create_primary_contact(session, email, phone_number)
        return build_identify_result([contact])

    cluster_contacts = await expand_clusters(session, existing)
    index = ClusterIndex.build(cluster_contacts)

    # Checked against the pre-merge grouping, before any merge.
    if needs_new_secondary(cluster_contacts, email, phone_number):
        primary = index.ordered_primaries()[0]
        secondary = await create_secondary_contact(session, email, phone_number, primary)
        index.add(secondary)

    if needs_merge(index):
        outcome = await merge_clusters(session, index)
        return build_identify_result(
            await load_cluster(session, outcome.surviving_primary_id)
        )

    return build_identify_result(index.all_contacts())


async def identify(
    session: AsyncSession,
    email: str | None = None,
    phone_number: str | None = None,
) -> IdentifyResult:
    """Resolve an observation and return its consolidated cluster.

    Empty strings count as absent.  ``session`` must not hold an open
    transaction: the request runs in its own ``session.begin()`` block, so
    all writes commit together or not at all.

    Raises:
        ValidationError: Neither identifier was supplied (no store access).
        NotFoundInvariantViolation: A touched cluster has no live primary.
        TransactionFailure: A statement failed; nothing was committed.
            Also raised when ``session`` already has a transaction open.
        StoreUnavailable: The store could not be reached.
    """
    email = email or None
    phone_number = phone_number or None
    if email is None and phone_number is None:
        raise ValidationError()

    try:
        with store_errors():
            async with session.begin():
                result = await _resolve(session, email, phone_number)
    except IdentityError as e:
        logger.warning(
            "identify_failed",
            code=e.code,
            has_email=email is not None,
            has_phone=phone_number is not None,
        )
        raise

    logger.info(
        "identify_complete",
        primary_contact_id=result.primary_contact_id,
        secondary_count=len(result.secondary_contact_ids),
    )
    return result


async def get_cluster(session: AsyncSession, contact_id: int) -> IdentifyResult:
    """Read-only view of the cluster containing ``contact_id``.

    Raises:
        ContactNotFound: No live contact has that id.
    """
    with store_errors():
        contact = (
            await session.execute(
                sa.select(Contact)
                .where(Contact.id == contact_id)
                .where(Contact.deleted_at.is_(None))
            )
        ).scalar_one_or_none()
        if contact is None:
            raise ContactNotFound(meta={"contact_id": contact_id})
        members = await load_cluster(session, contact.primary_id)
    return build_identify_result(members)
