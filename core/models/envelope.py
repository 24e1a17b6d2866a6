# =============================================================================
# core/models/envelope.py - Response Envelope
# =============================================================================
# Every response body, success or failure, uses the same wrapper:
#
#   {"success": true, "message": "...", "data": ..., "errors": [...]}
#
# Keys whose value is None are omitted from the serialized body.
# =============================================================================

from typing import Any

from pydantic import BaseModel, Field


class FieldError(BaseModel):
    """One rejected field: which one, why, and the value that was sent."""

    field: str
    message: str
    value: Any = None


class Envelope(BaseModel):
    """Uniform response wrapper."""

    success: bool
    message: str
    data: Any = None
    errors: list[FieldError] | None = None
    pagination: dict[str, Any] | None = None

    # Only populated outside production for unexpected failures
    error: str | None = Field(default=None, description="Exception message (non-production)")
    stack: str | None = Field(default=None, description="Traceback (non-production)")

    def to_content(self) -> dict[str, Any]:
        """JSON-ready body with empty keys dropped."""
        content = self.model_dump(mode="json", exclude_none=True, exclude={"data", "errors"})
        if self.data is not None:
            # Nulls inside the payload are part of the resource
            content["data"] = self.model_dump(mode="json", include={"data"})["data"]
        if self.errors is not None:
            # Every record keeps its "value" key, even when null
            content["errors"] = [e.model_dump(mode="json") for e in self.errors]
        return content
