"""Pydantic models for API requests and responses."""

from datetime import datetime
from typing import Any

from pydantic import BaseModel, ConfigDict, Field

from mythoughts.domain.thought import Thought

# Request models

class CreateThoughtRequest(BaseModel):
    """Request to create a thought.

    Content rules are enforced by the repository so that a missing or
    oversized value is answered the same way on create and update.
    A ``title`` is accepted for older clients and discarded.
    """

    model_config = ConfigDict(extra="ignore")

    content: str | None = None
    title: str | None = None


class UpdateThoughtRequest(BaseModel):
    """Request to replace a thought's content."""

    model_config = ConfigDict(extra="ignore")

    content: str | None = None


class ContactRequest(BaseModel):
    """Contact form submission.

    Fields are taken as sent; only presence is checked, by the route.
    """

    model_config = ConfigDict(extra="ignore")

    name: Any = None
    email: Any = None
    subject: Any = None
    message: Any = None

    def is_complete(self) -> bool:
        """True when every field is present and non-empty."""
        return all([self.name, self.email, self.subject, self.message])


# Response models

class ThoughtResponse(BaseModel):
    """A thought as it appears on the wire."""

    model_config = ConfigDict(populate_by_name=True)

    id: str = Field(alias="_id")
    content: str
    owner_id: str = Field(alias="userId")
    created_at: datetime = Field(alias="createdAt")
    updated_at: datetime = Field(alias="updatedAt")

    @classmethod
    def from_thought(cls, thought: Thought) -> "ThoughtResponse":
        """Convert a Thought domain object to response model."""
        return cls(
            id=thought.id,
            content=thought.content,
            owner_id=thought.owner_id,
            created_at=thought.created_at,
            updated_at=thought.updated_at,
        )


class ThoughtEnvelope(BaseModel):
    """Envelope around a single thought."""

    success: bool = True
    data: ThoughtResponse


class ThoughtListEnvelope(BaseModel):
    """Envelope around a list of thoughts."""

    success: bool = True
    data: list[ThoughtResponse] = Field(default_factory=list)


class ContactResponse(BaseModel):
    """Response after a contact submission."""

    message: str = "Message sent successfully!"


class HealthResponse(BaseModel):
    """Response for the health check."""

    status: str
    storage: str
    backend: str
    version: str = "0.1.0"


class ErrorResponse(BaseModel):
    """Standard error response for thought endpoints."""

    success: bool = False
    message: str
    request_id: str | None = None
