"""
Flashdeck Backend — User Model
================================

What:  ORM model for the `users` table.
How:   Read-only through the API (list and show only); rows are provisioned
       directly through storage.
"""

import uuid
from typing import TYPE_CHECKING, List

from sqlalchemy import String, Uuid
from sqlalchemy.orm import Mapped, mapped_column

from flashdeck.database import Base

if TYPE_CHECKING:
    from flashdeck.models.card_set import CardSet
    from flashdeck.services.storage import StorageBackend


class User(Base):
    """Owner of zero or more card sets."""

    __tablename__ = "users"

    class Keys:
        id = "id"
        name = "name"

    id: Mapped[uuid.UUID] = mapped_column(
        Uuid,
        primary_key=True,
        default=uuid.uuid4,
        comment="Server-assigned identifier",
    )

    name: Mapped[str] = mapped_column(
        String(255),
        nullable=False,
        comment="Display name",
    )

    async def card_sets(self, storage: "StorageBackend") -> List["CardSet"]:
        """Card sets whose user_id is this user's id, freshly queried."""
        from flashdeck.models.card_set import CardSet

        return await storage.find_by_foreign_key(CardSet, CardSet.Keys.user_id, self.id)

    def __repr__(self) -> str:
        return f"<User(id={self.id}, name='{self.name}')>"
