"""Locate contacts that directly share an identifier with an observation."""

from __future__ import annotations

import sqlalchemy as sa
from sqlalchemy.ext.asyncio import AsyncSession

from contact_identity.models.contact import Contact


async def find_existing_contacts(
    session: AsyncSession,
    email: str | None = None,
    phone_number: str | None = None,
) -> list[Contact]:
    """Return live contacts whose email or phone number matches exactly.

    Absent identifiers are left out of the predicate.  An empty result means
    the observation is brand new.
    """
    conditions = []
    if email is not None:
        conditions.append(Contact.email == email)
    if phone_number is not None:
        conditions.append(Contact.phone_number == phone_number)
    if not conditions:
        return []

    stmt = (
        sa.select(Contact)
        .where(sa.or_(*conditions))
        .where(Contact.deleted_at.is_(None))
        .order_by(Contact.created_at.asc(), Contact.id.asc())
    )
    result = await session.execute(stmt)
    return list(result.scalars().all())
