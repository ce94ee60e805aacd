"""
Flashdeck Backend — Card Codec
================================

Wire shape: {"id", "front", "back", "card_set_id"}

`id` is never read from input; it is assigned by storage.
"""

import uuid
from typing import Any, Dict, Mapping

from pydantic import BaseModel, ConfigDict, Field, StrictStr

from flashdeck.models.card import Card
from flashdeck.schemas.common import validate_payload


class CardPayload(BaseModel):
    """Body of POST /cards and PUT /cards/{id}. Every field is required."""

    model_config = ConfigDict(extra="ignore")

    front: StrictStr
    back: StrictStr
    card_set_id: uuid.UUID


class CardResponse(BaseModel):
    id: uuid.UUID = Field(description="Card identifier")
    front: str
    back: str
    card_set_id: uuid.UUID = Field(description="Owning card set")

    model_config = {"from_attributes": True}


def decode_card(payload: Mapping[str, Any]) -> Card:
    """Build a new, unsaved Card from a JSON object."""
    data = validate_payload(CardPayload, payload, entity="card")
    return Card(front=data.front, back=data.back, card_set_id=data.card_set_id)


def encode_card(card: Card) -> Dict[str, Any]:
    return CardResponse.model_validate(card).model_dump(mode="json")
