"""
Flashdeck Backend — Generic Resource Contract
===============================================

What:  Maps the seven REST verbs onto entity operations for any model.
How:   A Resource holds the entity model and up to seven async operation
       callables. mount_resource() walks the dispatch table below and
       registers a FastAPI route only for the operations that are present;
       an absent operation is "unsupported" and its verb falls through to
       the router's own 404/405.

Dispatch Table:
    index    GET     /{collection}         list every entity
    create   POST    /{collection}         decode body → persist (201)
    show     GET     /{collection}/{id}    encode one entity
    update   PATCH   /{collection}/{id}    update-diff merge → persist
    replace  PUT     /{collection}/{id}    decode body → overwrite → persist
    destroy  DELETE  /{collection}/{id}    delete one row (empty 200)
    clear    DELETE  /{collection}         delete every row (empty 200)

Item routes resolve `{id}` to an entity before the operation runs. An
identifier that is not a valid UUID is treated exactly like an unknown one
(404), since identifiers are opaque to clients.
"""

import logging
import uuid
from dataclasses import dataclass
from typing import Any, Callable, Dict, Generic, List, Optional, Type, TypeVar

from fastapi import APIRouter, Depends, Request, Response

from flashdeck.database import Base
from flashdeck.exceptions import NotFoundError, ValidationError
from flashdeck.services.storage import StorageBackend, get_storage

logger = logging.getLogger(__name__)

EntityT = TypeVar("EntityT", bound=Base)

JSONPayload = Dict[str, Any]


@dataclass(frozen=True)
class Route:
    """How one operation is reached: verb, path shape and whether it reads a body."""

    method: str
    item: bool
    body: bool
    status_code: int = 200


OPERATION_ROUTES: Dict[str, Route] = {
    "index": Route("GET", item=False, body=False),
    "create": Route("POST", item=False, body=True, status_code=201),
    "show": Route("GET", item=True, body=False),
    "update": Route("PATCH", item=True, body=True),
    "replace": Route("PUT", item=True, body=True),
    "destroy": Route("DELETE", item=True, body=False),
    "clear": Route("DELETE", item=False, body=False),
}

OPERATION_SUMMARIES = {
    "index": "List every {name}",
    "create": "Create a {name}",
    "show": "Get a {name} by ID",
    "update": "Partially update a {name}",
    "replace": "Replace a {name}",
    "destroy": "Delete a {name}",
    "clear": "Delete every {name}",
}


@dataclass
class Resource(Generic[EntityT]):
    """
    The seven-operation contract for one entity type.

    Operation signatures (all async):
        index(storage)                    → list of encoded entities
        create(storage, payload)          → encoded entity
        show(storage, entity)             → encoded entity
        update(storage, entity, payload)  → encoded entity
        replace(storage, entity, payload) → encoded entity
        destroy(storage, entity)          → None
        clear(storage)                    → None

    Every operation is optional. Controllers build a Resource from the ones
    they support (see CardController.make_resource()).
    """

    model: Type[EntityT]
    name: str
    index: Optional[Callable] = None
    create: Optional[Callable] = None
    show: Optional[Callable] = None
    update: Optional[Callable] = None
    replace: Optional[Callable] = None
    destroy: Optional[Callable] = None
    clear: Optional[Callable] = None

    def supported_operations(self) -> List[str]:
        return [op for op in OPERATION_ROUTES if getattr(self, op) is not None]

    async def lookup(self, storage: StorageBackend, entity_id: str) -> EntityT:
        """Resolve a path identifier to a stored entity or raise NotFoundError."""
        try:
            parsed = uuid.UUID(entity_id)
        except ValueError:
            raise NotFoundError(resource=self.name, resource_id=entity_id)

        entity = await storage.find_by_id(self.model, parsed)
        if entity is None:
            raise NotFoundError(resource=self.name, resource_id=entity_id)
        return entity


# ── Request / Response Helpers ────────────────────────────────────────────
async def json_object_body(request: Request) -> JSONPayload:
    """
    Read the request body as a JSON object.

    Raises:
        ValidationError: body is empty, not JSON, or not a JSON object (→ 400)
    """
    try:
        payload = await request.json()
    except ValueError:
        raise ValidationError(message="Request body must be valid JSON", field="body")
    if not isinstance(payload, dict):
        raise ValidationError(message="Request body must be a JSON object", field="body")
    return payload


def _render(result: Any, response: Response) -> Any:
    # destroy/clear return nothing: answer with an empty 200
    if result is None:
        return Response(status_code=200)
    if isinstance(result, list):
        response.headers["X-Total-Count"] = str(len(result))
    return result


def _build_endpoint(resource: Resource, operation: Callable, route: Route) -> Callable:
    """One FastAPI endpoint per path shape; FastAPI reads the signature."""
    if route.item and route.body:
        async def endpoint(
            entity_id: str,
            response: Response,
            payload: JSONPayload = Depends(json_object_body),
            storage: StorageBackend = Depends(get_storage),
        ):
            entity = await resource.lookup(storage, entity_id)
            return _render(await operation(storage, entity, payload), response)

    elif route.item:
        async def endpoint(
            entity_id: str,
            response: Response,
            storage: StorageBackend = Depends(get_storage),
        ):
            entity = await resource.lookup(storage, entity_id)
            return _render(await operation(storage, entity), response)

    elif route.body:
        async def endpoint(
            response: Response,
            payload: JSONPayload = Depends(json_object_body),
            storage: StorageBackend = Depends(get_storage),
        ):
            return _render(await operation(storage, payload), response)

    else:
        async def endpoint(
            response: Response,
            storage: StorageBackend = Depends(get_storage),
        ):
            return _render(await operation(storage), response)

    return endpoint


# ── Route Registration ────────────────────────────────────────────────────
def mount_resource(router: APIRouter, collection: str, resource: Resource) -> List[str]:
    """
    Register routes for every operation `resource` supports.

    Args:
        router:     Router to add the routes to.
        collection: Path segment, e.g. "cards" → /cards and /cards/{entity_id}.
        resource:   The controller's Resource.

    Returns:
        The operation names that were registered, in dispatch-table order.
    """
    registered = resource.supported_operations()
    for op_name in registered:
        route = OPERATION_ROUTES[op_name]
        path = f"/{collection}/{{entity_id}}" if route.item else f"/{collection}"
        router.add_api_route(
            path,
            _build_endpoint(resource, getattr(resource, op_name), route),
            methods=[route.method],
            status_code=route.status_code,
            tags=[collection],
            name=f"{collection}:{op_name}",
            summary=OPERATION_SUMMARIES[op_name].format(name=resource.name),
        )

    logger.debug("Mounted %s at /%s: %s", resource.name, collection, ", ".join(registered))
    return registered
