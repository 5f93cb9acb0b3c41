from contact_identity.models.base import Base
from contact_identity.models.contact import Contact, LinkPrecedence

__all__ = [
    "Base",
    "Contact",
    "LinkPrecedence",
]
