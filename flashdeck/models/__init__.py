"""
Flashdeck Backend — ORM Models
================================

Importing this package registers every table on `Base.metadata`
(used by `create_tables()` and Alembic autogenerate).
"""

from flashdeck.models.card import Card
from flashdeck.models.card_set import CardSet
from flashdeck.models.user import User

__all__ = ["Card", "CardSet", "User"]
