"""
Flashdeck Backend — Shared Schemas
====================================

What:  Error and health response models, plus the validation helper every
       entity codec uses to turn Pydantic errors into MissingFieldError.
"""

from typing import Any, Mapping, Optional, Type, TypeVar

from pydantic import BaseModel, Field
from pydantic import ValidationError as PydanticValidationError

from flashdeck.exceptions import MissingFieldError

PayloadT = TypeVar("PayloadT", bound=BaseModel)


def validate_payload(
    schema: Type[PayloadT],
    payload: Mapping[str, Any],
    entity: str,
) -> PayloadT:
    """
    Validate a raw JSON object against an entity's payload schema.

    Raises:
        MissingFieldError: naming every required key that is absent or
            holds a value of the wrong type.
    """
    try:
        return schema.model_validate(payload)
    except PydanticValidationError as e:
        fields = []
        for error in e.errors():
            name = str(error["loc"][0]) if error["loc"] else "body"
            if name not in fields:
                fields.append(name)
        raise MissingFieldError(entity=entity, fields=fields)


class ErrorResponse(BaseModel):
    """
    Standardized error body for all API errors.

    Example:
        {
            "error": "validation_error",
            "message": "Missing or invalid required field(s) for card: back",
            "details": {"entity": "card", "fields": ["back"], "field": "back"},
            "request_id": "1f0c2a9b"
        }
    """
    error: str = Field(description="Machine-readable error code")
    message: str = Field(description="Human-readable error description")
    details: Optional[dict] = Field(default=None, description="Additional error context")
    request_id: Optional[str] = Field(default=None, description="Request correlation ID")


class HealthResponse(BaseModel):
    """Returned by GET /health."""
    status: str = Field(description="Overall service status: healthy, unhealthy")
    version: str = Field(description="Application version")
    database: str = Field(description="Database connectivity: connected, disconnected")
    uptime_seconds: float = Field(description="Seconds since service started")
