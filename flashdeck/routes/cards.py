"""
Flashdeck Backend — Card Resource Controller
==============================================

What:  Full CRUD over cards, mounted at /cards.
How:   Each method is one Resource operation; make_resource() binds all
       seven and the module-level router is built from it.

Routes:
    GET    /cards           index
    POST   /cards           create   {front, back, card_set_id}
    GET    /cards/{id}      show
    PATCH  /cards/{id}      update   {front?, back?}
    PUT    /cards/{id}      replace  {front, back, card_set_id}
    DELETE /cards/{id}      destroy
    DELETE /cards           clear
"""

import logging
from typing import Any, Dict, List

from fastapi import APIRouter

from flashdeck.models.card import Card
from flashdeck.routes.resource import Resource, mount_resource
from flashdeck.schemas.card import decode_card, encode_card
from flashdeck.services.storage import StorageBackend
from flashdeck.services.updates import apply_updates

logger = logging.getLogger(__name__)


class CardController:
    """RESTful interactions with the cards table."""

    async def index(self, storage: StorageBackend) -> List[Dict[str, Any]]:
        return [encode_card(card) for card in await storage.find_all(Card)]

    async def create(self, storage: StorageBackend, payload: Dict[str, Any]) -> Dict[str, Any]:
        card = decode_card(payload)
        await storage.insert(card)
        logger.info("Card %s created in card set %s", card.id, card.card_set_id)
        return encode_card(card)

    async def show(self, storage: StorageBackend, card: Card) -> Dict[str, Any]:
        return encode_card(card)

    async def update(
        self, storage: StorageBackend, card: Card, payload: Dict[str, Any]
    ) -> Dict[str, Any]:
        """Merge the provided fields; everything else keeps its stored value."""
        apply_updates(card, payload, Card.UPDATABLE_KEYS)
        await storage.update(card)
        return encode_card(card)

    async def replace(
        self, storage: StorageBackend, card: Card, payload: Dict[str, Any]
    ) -> Dict[str, Any]:
        """
        Decode a complete new card from the body (all fields required), then
        overwrite every non-identifier field of the stored card with it.
        """
        new = decode_card(payload)
        card.replace_with(new)
        await storage.update(card)
        return encode_card(card)

    async def destroy(self, storage: StorageBackend, card: Card) -> None:
        await storage.delete_by_id(Card, card.id)

    async def clear(self, storage: StorageBackend) -> None:
        await storage.delete_all(Card)

    def make_resource(self) -> Resource[Card]:
        return Resource(
            model=Card,
            name="card",
            index=self.index,
            create=self.create,
            show=self.show,
            update=self.update,
            replace=self.replace,
            destroy=self.destroy,
            clear=self.clear,
        )


router = APIRouter()
mount_resource(router, "cards", CardController().make_resource())
