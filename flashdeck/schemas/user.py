"""
Flashdeck Backend — User Codec
================================

Users are read-only through the API, so only the encode direction exists.
"""

import uuid
from typing import Any, Dict

from pydantic import BaseModel

from flashdeck.models.user import User


class UserResponse(BaseModel):
    id: uuid.UUID
    name: str

    model_config = {"from_attributes": True}


def encode_user(user: User) -> Dict[str, Any]:
    return UserResponse.model_validate(user).model_dump(mode="json")
