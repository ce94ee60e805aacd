"""
Flashdeck Backend — Update-Diff Engine Unit Tests
===================================================

What we test:
    ✅ Only fields present in the payload are set (merge, never null)
    ✅ A wrongly typed value rejects the whole payload with no setter run
    ✅ Keys outside the update table are ignored (card_set_id, id, unknown)
    ✅ Applied fields come back in table order
"""

import uuid

import pytest

from flashdeck.exceptions import TypeMismatchError
from flashdeck.models import Card, CardSet
from flashdeck.services.updates import UpdatableKey, apply_updates


class TestApplyUpdatesMerge:

    def test_updates_only_front(self, sample_card):
        back = sample_card.back
        card_set_id = sample_card.card_set_id

        applied = apply_updates(sample_card, {"front": "Active transport"}, Card.UPDATABLE_KEYS)

        assert applied == ["front"]
        assert sample_card.front == "Active transport"
        assert sample_card.back == back
        assert sample_card.card_set_id == card_set_id

    def test_empty_payload_changes_nothing(self, sample_card):
        before = (sample_card.front, sample_card.back, sample_card.card_set_id)

        assert apply_updates(sample_card, {}, Card.UPDATABLE_KEYS) == []
        assert (sample_card.front, sample_card.back, sample_card.card_set_id) == before

    def test_applied_fields_follow_table_order(self, sample_card):
        applied = apply_updates(
            sample_card, {"back": "B", "front": "F"}, Card.UPDATABLE_KEYS
        )
        assert applied == ["front", "back"]
        assert (sample_card.front, sample_card.back) == ("F", "B")

    def test_keys_outside_table_are_ignored(self, sample_card):
        original_id = sample_card.id
        original_set = sample_card.card_set_id

        applied = apply_updates(
            sample_card,
            {"id": str(uuid.uuid4()), "card_set_id": str(uuid.uuid4()), "colour": "red"},
            Card.UPDATABLE_KEYS,
        )

        assert applied == []
        assert sample_card.id == original_id
        assert sample_card.card_set_id == original_set

    def test_card_set_description(self, sample_card_set):
        user_id = sample_card_set.user_id

        apply_updates(sample_card_set, {"description": "Chemistry"}, CardSet.UPDATABLE_KEYS)

        assert sample_card_set.description == "Chemistry"
        assert sample_card_set.user_id == user_id


class TestApplyUpdatesTypeMismatch:

    def test_wrong_type_raises(self, sample_card):
        with pytest.raises(TypeMismatchError) as exc_info:
            apply_updates(sample_card, {"front": 42}, Card.UPDATABLE_KEYS)

        assert exc_info.value.field == "front"
        assert exc_info.value.expected == "str"

    def test_failure_leaves_earlier_fields_untouched(self, sample_card):
        """front is valid and comes first in the table, but must not be applied."""
        front = sample_card.front

        with pytest.raises(TypeMismatchError, match="back"):
            apply_updates(sample_card, {"front": "New front", "back": ["x"]}, Card.UPDATABLE_KEYS)

        assert sample_card.front == front

    def test_null_is_a_type_mismatch(self, sample_card_set):
        with pytest.raises(TypeMismatchError):
            apply_updates(sample_card_set, {"description": None}, CardSet.UPDATABLE_KEYS)
        assert sample_card_set.description == "Biology"


class TestUpdatableKey:

    def test_custom_table(self):
        class Box:
            size = 0

        def set_size(box, size):
            box.size = size

        box = Box()
        keys = [UpdatableKey("size", int, set_size)]

        assert apply_updates(box, {"size": 3}, keys) == ["size"]
        assert box.size == 3

        with pytest.raises(TypeMismatchError):
            apply_updates(box, {"size": "3"}, keys)
        assert box.size == 3
