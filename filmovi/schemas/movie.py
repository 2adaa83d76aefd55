"""
Filmovi API — Pydantic Request/Response Schemas
================================================

What:  Pydantic models defining the API contract for the movies resource.
Why:   Input parsing, response serialization and the OpenAPI document all
       come from these models.
Who:   Used by route handlers and by MovieRepository as its return type.

Schemas are separate from the SQLAlchemy model so the API contract can
evolve independently of the table.
"""

from datetime import datetime
from typing import Any, Dict, Optional

from pydantic import BaseModel, Field


# ══════════════════════════════════════════════════════════════════════════
# Request Models: what clients send
# ══════════════════════════════════════════════════════════════════════════


class MovieCreate(BaseModel):
    """
    What:  Body of POST /filmovi.
    Why:   `naslov` is checked here, before any SQL runs; a missing or empty
           title is answered with 422 instead of relying on the column's
           NOT NULL constraint.
    """
    naslov: str = Field(min_length=1, description="Naslov filma", examples=["Inception"])
    godina: Optional[int] = Field(default=None, description="Godina izlaska", examples=[2010])
    zanr: Optional[str] = Field(default=None, description="Žanr", examples=["Sci-Fi"])


class MovieUpdate(BaseModel):
    """
    What:  Body of PUT /filmovi/{id}. Every field is optional.

    Field presence:
        A field becomes a change only when the client sent it AND it is not
        null. `{"godina": null}` and `{}` both leave godina untouched; there
        is no way to clear a column back to NULL through this endpoint.
    """
    naslov: Optional[str] = Field(default=None, min_length=1, description="Naslov filma")
    godina: Optional[int] = Field(default=None, description="Godina izlaska")
    zanr: Optional[str] = Field(default=None, description="Žanr")

    def changes(self) -> Dict[str, Any]:
        """Column values to write: fields that were sent and are not null."""
        return {
            name: getattr(self, name)
            for name in self.model_fields_set
            if getattr(self, name) is not None
        }


# ══════════════════════════════════════════════════════════════════════════
# Response Models: what the API returns
# ══════════════════════════════════════════════════════════════════════════


class MovieResponse(BaseModel):
    """
    What:  Full representation of one row of `filmovi`.
    Who:   Returned by every movie endpoint except DELETE.
    """
    id: int = Field(description="Identifikator filma", examples=[1])
    naslov: str = Field(description="Naslov filma", examples=["Inception"])
    godina: Optional[int] = Field(default=None, description="Godina izlaska", examples=[2010])
    zanr: Optional[str] = Field(default=None, description="Žanr", examples=["Sci-Fi"])
    created_at: datetime = Field(description="Vrijeme unosa")

    model_config = {"from_attributes": True, "title": "Movie"}


class ErrorResponse(BaseModel):
    """
    What:  Standardized error body for all API errors.

    Example:
        {
            "error": "not_found",
            "message": "Film nije pronađen",
            "request_id": "a1b2c3d4"
        }
    """
    error: str = Field(description="Machine-readable error code")
    message: str = Field(description="Human-readable error description")
    details: Optional[dict] = Field(default=None, description="Additional error context")
    request_id: Optional[str] = Field(default=None, description="Request correlation ID")


class HealthResponse(BaseModel):
    """Body of GET /health."""
    status: str = Field(description="Overall service status: healthy, unhealthy")
    version: str = Field(description="Application version")
    database: str = Field(description="Database connectivity: connected, disconnected")
