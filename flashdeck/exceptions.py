"""
Flashdeck Backend — Exception Hierarchy
=========================================

Every error the resource layer raises on purpose. Each carries a message that
is safe to show to clients and a `context` dict that ends up in the log (and,
for validation errors, in the response `details`).

    FlashdeckError
    ├── ValidationError          400
    │   ├── MissingFieldError    400  decode: required key absent or wrongly typed
    │   └── TypeMismatchError    400  update: provided value has the wrong type
    ├── NotFoundError            404  unknown or malformed identifier
    └── DatabaseError            500  storage failure, generic message to clients

The HTTP mapping lives in main.register_exception_handlers().
"""

from typing import Any, Dict, List, Optional, Sequence

Context = Optional[Dict[str, Any]]


class FlashdeckError(Exception):
    """Base class; `message` is client-facing, `context` is for the log."""

    default_message = "An unexpected error occurred"

    def __init__(self, message: Optional[str] = None, context: Context = None):
        self.message = message or self.default_message
        self.context: Dict[str, Any] = dict(context or {})
        super().__init__(self.message)


class ValidationError(FlashdeckError):
    """The request body cannot be accepted as-is."""

    default_message = "Invalid request body"

    def __init__(
        self,
        message: Optional[str] = None,
        field: Optional[str] = None,
        context: Context = None,
    ):
        super().__init__(message, context)
        self.field = field
        if field:
            self.context["field"] = field


class MissingFieldError(ValidationError):
    """
    Decoding an entity failed: one or more required keys are absent or hold
    a value of the wrong type. Nothing is written.
    """

    def __init__(self, entity: str, fields: Sequence[str], context: Context = None):
        self.entity = entity
        self.fields: List[str] = list(fields)
        super().__init__(
            f"Missing or invalid required field(s) for {entity}: {', '.join(self.fields)}",
            field=self.fields[0] if len(self.fields) == 1 else None,
            context={**(context or {}), "entity": entity, "fields": self.fields},
        )


class TypeMismatchError(ValidationError):
    """A partial update supplied a value that does not match the field's type."""

    def __init__(self, field: str, expected: str, context: Context = None):
        self.expected = expected
        super().__init__(
            f"Field '{field}' must be of type {expected}",
            field=field,
            context={**(context or {}), "expected_type": expected},
        )


class NotFoundError(FlashdeckError):
    """No entity of this kind has the requested identifier."""

    def __init__(self, resource: str, resource_id: Optional[str] = None, context: Context = None):
        ctx = {**(context or {}), "resource": resource}
        if resource_id is None:
            message = f"No such {resource}"
        else:
            ctx["resource_id"] = resource_id
            message = f"No {resource} with id '{resource_id}'"
        super().__init__(message, ctx)


class DatabaseError(FlashdeckError):
    """A storage call failed. Clients only ever see a generic message."""

    default_message = "A database error occurred"
