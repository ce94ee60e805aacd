"""
Flashdeck Backend — CardSet Model
===================================

What:  ORM model for the `card_sets` table (a deck of cards owned by a user).
How:   `user_id` is a plain indexed column, not a database foreign key:
       parent existence is not checked and deleting a user does not touch
       its card sets. Relations are resolved by explicit async accessors
       that take a storage handle and query on every call.

Mutability:
    PATCH  → UPDATABLE_KEYS (description)
    PUT    → REPLACEABLE_FIELDS (description, user_id)
"""

import uuid
from typing import TYPE_CHECKING, List, Optional

from sqlalchemy import Text, Uuid
from sqlalchemy.orm import Mapped, mapped_column

from flashdeck.database import Base
from flashdeck.services.updates import UpdatableKey

if TYPE_CHECKING:
    from flashdeck.models.card import Card
    from flashdeck.models.user import User
    from flashdeck.services.storage import StorageBackend


def _set_description(card_set: "CardSet", description: str) -> None:
    card_set.description = description


class CardSet(Base):
    """A named collection of cards belonging to one user."""

    __tablename__ = "card_sets"

    class Keys:
        id = "id"
        description = "description"
        user_id = "user_id"
        cards = "cards"

    id: Mapped[uuid.UUID] = mapped_column(
        Uuid,
        primary_key=True,
        default=uuid.uuid4,
        comment="Server-assigned identifier",
    )

    description: Mapped[str] = mapped_column(
        Text,
        nullable=False,
        comment="Human-readable description of the deck",
    )

    user_id: Mapped[uuid.UUID] = mapped_column(
        Uuid,
        nullable=False,
        index=True,
        comment="Owning user (unchecked reference)",
    )

    UPDATABLE_KEYS = [
        UpdatableKey(Keys.description, str, _set_description),
    ]

    REPLACEABLE_FIELDS = (Keys.description, Keys.user_id)

    async def cards(self, storage: "StorageBackend") -> List["Card"]:
        """Cards whose card_set_id is this set's id, in storage order."""
        from flashdeck.models.card import Card

        return await storage.find_by_foreign_key(Card, Card.Keys.card_set_id, self.id)

    async def user(self, storage: "StorageBackend") -> Optional["User"]:
        from flashdeck.models.user import User

        return await storage.find_by_id(User, self.user_id)

    def replace_with(self, other: "CardSet") -> None:
        """Overwrite every replaceable field with the values from `other`."""
        for field in self.REPLACEABLE_FIELDS:
            setattr(self, field, getattr(other, field))

    def __repr__(self) -> str:
        return f"<CardSet(id={self.id}, user_id={self.user_id})>"
