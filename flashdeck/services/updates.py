"""
Flashdeck Backend — Update-Diff Engine
========================================

What:  Applies a PATCH body to an entity as a strict merge.
How:   Every mutable entity declares an ordered table of UpdatableKey
       entries (field name, expected type, setter). For each key present in
       the payload the value is coerced in strict mode; only when every
       present key coerces are the setters invoked, in table order.
Who:   Called by the `update` operation of the card and card set controllers.

Rules:
    - Keys absent from the payload are left untouched (never nulled)
    - Keys not in the table are ignored
    - One bad value rejects the whole payload; no setter has run by then
"""

import logging
from dataclasses import dataclass
from functools import lru_cache
from typing import Any, Callable, Generic, List, Mapping, Sequence, Tuple, Type, TypeVar

from pydantic import TypeAdapter
from pydantic import ValidationError as PydanticValidationError

from flashdeck.exceptions import TypeMismatchError

logger = logging.getLogger(__name__)

EntityT = TypeVar("EntityT")


@dataclass(frozen=True)
class UpdatableKey(Generic[EntityT]):
    """One row of an entity's update table."""

    name: str
    expected_type: Type[Any]
    setter: Callable[[EntityT, Any], None]

    def coerce(self, value: Any) -> Any:
        try:
            return _adapter(self.expected_type).validate_python(value, strict=True)
        except PydanticValidationError:
            raise TypeMismatchError(
                field=self.name,
                expected=self.expected_type.__name__,
                context={"received_type": type(value).__name__},
            )


@lru_cache(maxsize=None)
def _adapter(expected_type: Type[Any]) -> TypeAdapter:
    return TypeAdapter(expected_type)


def apply_updates(
    entity: EntityT,
    payload: Mapping[str, Any],
    keys: Sequence[UpdatableKey[EntityT]],
) -> List[str]:
    """
    Merge `payload` into `entity` using the entity's update table.

    Args:
        entity:  The loaded entity to mutate in place.
        payload: Raw JSON object from the request body.
        keys:    The entity type's ordered UpdatableKey table.

    Returns:
        Names of the fields that were set, in table order.

    Raises:
        TypeMismatchError: A provided value has the wrong type. The entity
            is unchanged.
    """
    staged: List[Tuple[UpdatableKey[EntityT], Any]] = [
        (key, key.coerce(payload[key.name]))
        for key in keys
        if key.name in payload
    ]

    for key, value in staged:
        key.setter(entity, value)

    applied = [key.name for key, _ in staged]
    logger.debug("Applied partial update to %r: %s", entity, applied or "no fields")
    return applied
