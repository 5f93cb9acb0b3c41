"""Expand seed contacts to the full membership of every cluster they touch."""

from __future__ import annotations

from collections.abc import Iterable

import sqlalchemy as sa
from sqlalchemy.ext.asyncio import AsyncSession

from contact_identity.models.contact import Contact


def seed_primary_ids(seeds: Iterable[Contact]) -> list[int]:
    """Primary ids referenced by ``seeds``, in first-seen order."""
    seen: dict[int, None] = {}
    for contact in seeds:
        if contact.primary_id is not None:
            seen.setdefault(contact.primary_id, None)
    return list(seen)


async def _load_members(
    session: AsyncSession, primary_ids: list[int], refresh: bool = False
) -> list[Contact]:
    stmt = (
        sa.select(Contact)
        .where(
            sa.or_(
                Contact.id.in_(primary_ids),
                Contact.linked_id.in_(primary_ids),
            )
        )
        .where(Contact.deleted_at.is_(None))
        .order_by(Contact.created_at.asc(), Contact.id.asc())
    )
    if refresh:
        stmt = stmt.execution_options(populate_existing=True)
    result = await session.execute(stmt)
    return list(result.scalars().all())


async def expand_clusters(
    session: AsyncSession, seeds: Iterable[Contact]
) -> list[Contact]:
    """Return every live member of each cluster a seed belongs to.

    Ordered by ``created_at`` ascending (``id`` breaks ties).
    """
    primary_ids = seed_primary_ids(seeds)
    if not primary_ids:
        return []
    return await _load_members(session, primary_ids)


async def load_cluster(session: AsyncSession, primary_id: int) -> list[Contact]:
    """Re-read one cluster from the store, overwriting any in-memory state."""
    return await _load_members(session, [primary_id], refresh=True)
