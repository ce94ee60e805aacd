"""
Flashdeck Backend — User Resource Controller
==============================================

Read-only: only index and show are bound, so POST/PATCH/PUT/DELETE on
/users answer with the router's 405 rather than an entity-level error.
"""

from typing import Any, Dict, List

from fastapi import APIRouter

from flashdeck.models.user import User
from flashdeck.routes.resource import Resource, mount_resource
from flashdeck.schemas.user import encode_user
from flashdeck.services.storage import StorageBackend


class UserController:
    """Read-only access to the users table."""

    async def index(self, storage: StorageBackend) -> List[Dict[str, Any]]:
        return [encode_user(user) for user in await storage.find_all(User)]

    async def show(self, storage: StorageBackend, user: User) -> Dict[str, Any]:
        return encode_user(user)

    def make_resource(self) -> Resource[User]:
        return Resource(model=User, name="user", index=self.index, show=self.show)


router = APIRouter()
mount_resource(router, "users", UserController().make_resource())
