"""
Flashdeck Backend — CardSet Codec
===================================

Wire shape: {"id", "description", "user_id", "cards": [Card, ...]}

Encoding resolves the child cards with one storage read and embeds them
fully encoded. Cards do not embed their parent, so there is no cycle.
"""

import uuid
from typing import Any, Dict, List, Mapping

from pydantic import BaseModel, ConfigDict, Field, StrictStr

from flashdeck.models.card_set import CardSet
from flashdeck.schemas.card import CardResponse
from flashdeck.schemas.common import validate_payload
from flashdeck.services.storage import StorageBackend


class CardSetPayload(BaseModel):
    """Body of POST /cardsets and PUT /cardsets/{id}."""

    model_config = ConfigDict(extra="ignore")

    description: StrictStr
    user_id: uuid.UUID


class CardSetResponse(BaseModel):
    id: uuid.UUID = Field(description="Card set identifier")
    description: str
    user_id: uuid.UUID = Field(description="Owning user")
    cards: List[CardResponse] = Field(
        default_factory=list,
        description="Cards whose card_set_id is this set, in storage order",
    )


def decode_card_set(payload: Mapping[str, Any]) -> CardSet:
    """Build a new, unsaved CardSet from a JSON object."""
    data = validate_payload(CardSetPayload, payload, entity="card set")
    return CardSet(description=data.description, user_id=data.user_id)


async def encode_card_set(card_set: CardSet, storage: StorageBackend) -> Dict[str, Any]:
    cards = await card_set.cards(storage)
    response = CardSetResponse(
        id=card_set.id,
        description=card_set.description,
        user_id=card_set.user_id,
        cards=[CardResponse.model_validate(card) for card in cards],
    )
    return response.model_dump(mode="json")
