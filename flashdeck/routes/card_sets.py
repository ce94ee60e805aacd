"""
Flashdeck Backend — CardSet Resource Controller
=================================================

What:  Full CRUD over card sets, mounted at /cardsets.
How:   Same shape as the card controller. Every response embeds the set's
       cards, resolved from storage at encode time.

Deleting a card set (one or all) does not delete its cards; they remain
reachable under /cards with a card_set_id that no longer resolves.
"""

import logging
from typing import Any, Dict, List

from fastapi import APIRouter

from flashdeck.models.card_set import CardSet
from flashdeck.routes.resource import Resource, mount_resource
from flashdeck.schemas.card_set import decode_card_set, encode_card_set
from flashdeck.services.storage import StorageBackend
from flashdeck.services.updates import apply_updates

logger = logging.getLogger(__name__)


class CardSetController:
    """RESTful interactions with the card_sets table."""

    async def index(self, storage: StorageBackend) -> List[Dict[str, Any]]:
        card_sets = await storage.find_all(CardSet)
        return [await encode_card_set(card_set, storage) for card_set in card_sets]

    async def create(self, storage: StorageBackend, payload: Dict[str, Any]) -> Dict[str, Any]:
        card_set = decode_card_set(payload)
        await storage.insert(card_set)
        return await encode_card_set(card_set, storage)

    async def show(self, storage: StorageBackend, card_set: CardSet) -> Dict[str, Any]:
        return await encode_card_set(card_set, storage)

    async def update(
        self, storage: StorageBackend, card_set: CardSet, payload: Dict[str, Any]
    ) -> Dict[str, Any]:
        apply_updates(card_set, payload, CardSet.UPDATABLE_KEYS)
        await storage.update(card_set)
        return await encode_card_set(card_set, storage)

    async def replace(
        self, storage: StorageBackend, card_set: CardSet, payload: Dict[str, Any]
    ) -> Dict[str, Any]:
        # Full replace: description and user_id are both required and both written.
        new = decode_card_set(payload)
        card_set.replace_with(new)
        await storage.update(card_set)
        return await encode_card_set(card_set, storage)

    async def destroy(self, storage: StorageBackend, card_set: CardSet) -> None:
        await storage.delete_by_id(CardSet, card_set.id)
        logger.info("Card set %s deleted; its cards are left in place", card_set.id)

    async def clear(self, storage: StorageBackend) -> None:
        await storage.delete_all(CardSet)

    def make_resource(self) -> Resource[CardSet]:
        return Resource(
            model=CardSet,
            name="card set",
            index=self.index,
            create=self.create,
            show=self.show,
            update=self.update,
            replace=self.replace,
            destroy=self.destroy,
            clear=self.clear,
        )


router = APIRouter()
mount_resource(router, "cardsets", CardSetController().make_resource())
