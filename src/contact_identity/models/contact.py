"""Contact model -- one observed (email, phone) pair within an identity cluster."""

from __future__ import annotations

import datetime as dt
import enum

import sqlalchemy as sa
from sqlalchemy.orm import Mapped, mapped_column

from contact_identity.models.base import Base


class LinkPrecedence(str, enum.Enum):
    PRIMARY = "primary"
    SECONDARY = "secondary"


def utcnow() -> dt.datetime:
    """Naive UTC timestamp, matching the ``sa.DateTime`` columns."""
    return dt.datetime.now(dt.timezone.utc).replace(tzinfo=None)


class Contact(Base):
    """A single contact record.

    Every cluster has exactly one primary (``linked_id`` is NULL) and any
    number of secondaries whose ``linked_id`` points directly at it.
    Rows with ``deleted_at`` set are invisible to resolution.
    """

    __tablename__ = "contacts"

    id: Mapped[int] = mapped_column(sa.Integer, primary_key=True, autoincrement=True)
    email: Mapped[str | None] = mapped_column(sa.String, nullable=True, index=True)
    phone_number: Mapped[str | None] = mapped_column(sa.String, nullable=True, index=True)
    linked_id: Mapped[int | None] = mapped_column(
        sa.Integer, sa.ForeignKey("contacts.id"), nullable=True, index=True
    )
    link_precedence: Mapped[str] = mapped_column(sa.String, default=LinkPrecedence.PRIMARY.value)

    # Timestamps
    created_at: Mapped[dt.datetime] = mapped_column(
        sa.DateTime, default=utcnow, server_default=sa.text("CURRENT_TIMESTAMP"), index=True
    )
    updated_at: Mapped[dt.datetime] = mapped_column(
        sa.DateTime, default=utcnow, server_default=sa.text("CURRENT_TIMESTAMP")
    )
    deleted_at: Mapped[dt.datetime | None] = mapped_column(sa.DateTime, nullable=True)

    __table_args__ = (
        sa.CheckConstraint(
            "email IS NOT NULL OR phone_number IS NOT NULL",
            name="ck_contacts_identifier_required",
        ),
        sa.CheckConstraint(
            "link_precedence IN ('primary', 'secondary')",
            name="ck_contacts_link_precedence",
        ),
        sa.CheckConstraint(
            "(link_precedence = 'primary' AND linked_id IS NULL) OR "
            "(link_precedence = 'secondary' AND linked_id IS NOT NULL)",
            name="ck_contacts_linked_id_matches_precedence",
        ),
    )

    @property
    def is_primary(self) -> bool:
        return self.link_precedence == LinkPrecedence.PRIMARY.value

    @property
    def primary_id(self) -> int:
        """Id of the cluster primary this contact belongs to."""
        if self.is_primary:
            return self.id
        return self.linked_id

    def __repr__(self) -> str:
        return (
            f"<Contact id={self.id} precedence={self.link_precedence} "
            f"linked_id={self.linked_id}>"
        )
