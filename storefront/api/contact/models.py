"""Response models for the contact endpoint."""

from typing import Any

from pydantic import BaseModel, Field


class ContactResponse(BaseModel):
    success: bool = True
    data: dict[str, Any] = Field(default_factory=dict)
