"""
Flashdeck Backend — Card Model
================================

What:  ORM model for the `cards` table (one front/back flashcard).
How:   `card_set_id` is an indexed, unchecked reference to the owning card
       set. Deleting the card set leaves its cards in place.

Mutability:
    PATCH  → UPDATABLE_KEYS (front, back)
    PUT    → REPLACEABLE_FIELDS (front, back, card_set_id)
"""

import uuid
from typing import TYPE_CHECKING, Optional

from sqlalchemy import Text, Uuid
from sqlalchemy.orm import Mapped, mapped_column

from flashdeck.database import Base
from flashdeck.services.updates import UpdatableKey

if TYPE_CHECKING:
    from flashdeck.models.card_set import CardSet
    from flashdeck.services.storage import StorageBackend


def _set_front(card: "Card", front: str) -> None:
    card.front = front


def _set_back(card: "Card", back: str) -> None:
    card.back = back


class Card(Base):
    """A single flashcard."""

    __tablename__ = "cards"

    class Keys:
        id = "id"
        front = "front"
        back = "back"
        card_set_id = "card_set_id"

    id: Mapped[uuid.UUID] = mapped_column(
        Uuid,
        primary_key=True,
        default=uuid.uuid4,
        comment="Server-assigned identifier",
    )

    front: Mapped[str] = mapped_column(Text, nullable=False, comment="Prompt side")
    back: Mapped[str] = mapped_column(Text, nullable=False, comment="Answer side")

    card_set_id: Mapped[uuid.UUID] = mapped_column(
        Uuid,
        nullable=False,
        index=True,
        comment="Owning card set (unchecked reference)",
    )

    UPDATABLE_KEYS = [
        UpdatableKey(Keys.front, str, _set_front),
        UpdatableKey(Keys.back, str, _set_back),
    ]

    REPLACEABLE_FIELDS = (Keys.front, Keys.back, Keys.card_set_id)

    async def card_set(self, storage: "StorageBackend") -> Optional["CardSet"]:
        """The owning card set, or None when it has been deleted."""
        from flashdeck.models.card_set import CardSet

        return await storage.find_by_id(CardSet, self.card_set_id)

    def replace_with(self, other: "Card") -> None:
        """Overwrite every replaceable field with the values from `other`."""
        for field in self.REPLACEABLE_FIELDS:
            setattr(self, field, getattr(other, field))

    def __repr__(self) -> str:
        return f"<Card(id={self.id}, card_set_id={self.card_set_id})>"
