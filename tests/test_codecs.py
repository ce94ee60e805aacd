"""
Flashdeck Backend — JSON Codec Tests
======================================

What we test:
    ✅ decode builds an unsaved entity and never reads `id`
    ✅ Absent / wrongly typed required keys raise MissingFieldError
    ✅ decode(encode(card)) round-trips every scalar and reference field
    ✅ Card set encoding embeds exactly its own cards, in storage order
"""

import uuid

import pytest

from flashdeck.exceptions import MissingFieldError, ValidationError
from flashdeck.models import Card, CardSet, User
from flashdeck.schemas.card import decode_card, encode_card
from flashdeck.schemas.card_set import decode_card_set, encode_card_set
from flashdeck.schemas.user import encode_user


class TestCardCodec:

    def test_decode_valid(self):
        card_set_id = uuid.uuid4()
        card = decode_card({"front": "Mitosis", "back": "Cell division", "card_set_id": str(card_set_id)})

        assert isinstance(card, Card)
        assert card.front == "Mitosis"
        assert card.back == "Cell division"
        assert card.card_set_id == card_set_id
        assert card.id is None

    def test_decode_ignores_id(self):
        card = decode_card({
            "id": str(uuid.uuid4()),
            "front": "a",
            "back": "b",
            "card_set_id": str(uuid.uuid4()),
        })
        assert card.id is None

    def test_decode_missing_field(self):
        with pytest.raises(MissingFieldError) as exc_info:
            decode_card({"front": "a", "card_set_id": str(uuid.uuid4())})

        assert exc_info.value.fields == ["back"]
        assert exc_info.value.field == "back"

    def test_decode_reports_every_missing_field(self):
        with pytest.raises(MissingFieldError) as exc_info:
            decode_card({})
        assert exc_info.value.fields == ["front", "back", "card_set_id"]

    def test_decode_wrong_scalar_type(self):
        with pytest.raises(MissingFieldError, match="front"):
            decode_card({"front": 12, "back": "b", "card_set_id": str(uuid.uuid4())})

    def test_decode_malformed_reference(self):
        with pytest.raises(MissingFieldError, match="card_set_id"):
            decode_card({"front": "a", "back": "b", "card_set_id": "S1"})

    def test_missing_field_is_a_validation_error(self):
        with pytest.raises(ValidationError):
            decode_card({"front": "a"})

    def test_encode_shape(self, sample_card):
        assert encode_card(sample_card) == {
            "id": str(sample_card.id),
            "front": sample_card.front,
            "back": sample_card.back,
            "card_set_id": str(sample_card.card_set_id),
        }

    def test_round_trip(self, sample_card):
        decoded = decode_card(encode_card(sample_card))

        assert decoded.front == sample_card.front
        assert decoded.back == sample_card.back
        assert decoded.card_set_id == sample_card.card_set_id


class TestCardSetCodec:

    def test_decode_valid(self):
        user_id = uuid.uuid4()
        card_set = decode_card_set({"description": "Biology", "user_id": str(user_id)})

        assert isinstance(card_set, CardSet)
        assert card_set.description == "Biology"
        assert card_set.user_id == user_id
        assert card_set.id is None

    def test_decode_requires_user_id(self):
        with pytest.raises(MissingFieldError) as exc_info:
            decode_card_set({"description": "Biology"})
        assert exc_info.value.fields == ["user_id"]

    @pytest.mark.asyncio
    async def test_encode_without_cards(self, storage):
        card_set = CardSet(description="Empty", user_id=uuid.uuid4())
        await storage.insert(card_set)

        assert await encode_card_set(card_set, storage) == {
            "id": str(card_set.id),
            "description": "Empty",
            "user_id": str(card_set.user_id),
            "cards": [],
        }

    @pytest.mark.asyncio
    async def test_encode_embeds_only_own_cards(self, storage):
        biology = CardSet(description="Biology", user_id=uuid.uuid4())
        chemistry = CardSet(description="Chemistry", user_id=uuid.uuid4())
        await storage.insert(biology)
        await storage.insert(chemistry)

        first = Card(front="Mitosis", back="Cell division", card_set_id=biology.id)
        other = Card(front="pH", back="Acidity", card_set_id=chemistry.id)
        second = Card(front="Meiosis", back="Gamete division", card_set_id=biology.id)
        for card in (first, other, second):
            await storage.insert(card)

        encoded = await encode_card_set(biology, storage)
        stored_order = await storage.find_by_foreign_key(Card, "card_set_id", biology.id)

        assert encoded["cards"] == [encode_card(card) for card in stored_order]
        assert {c["id"] for c in encoded["cards"]} == {str(first.id), str(second.id)}
        assert all(c["card_set_id"] == str(biology.id) for c in encoded["cards"])


class TestUserCodec:

    def test_encode(self):
        user = User(id=uuid.uuid4(), name="Ada")
        assert encode_user(user) == {"id": str(user.id), "name": "Ada"}
