"""API request models."""

from typing import Optional
from pydantic import BaseModel, Field


class ResolveRequest(BaseModel):
    """Request body for a one-off route resolution."""
    start: str = Field(default="", description="Starting location, free text")
    end: str = Field(default="", description="Ending location, free text")


class SessionCreateRequest(BaseModel):
    """Request body for opening a route session."""
    start: Optional[str] = Field(
        default=None,
        description="Optional prefill for the start field (e.g. a reverse-geocoded address)",
    )
    end: Optional[str] = Field(default=None, description="Optional prefill for the end field")


class InputsUpdateRequest(BaseModel):
    """Request body for editing the text fields. Omitted fields are unchanged."""
    start: Optional[str] = Field(default=None, description="New start text")
    end: Optional[str] = Field(default=None, description="New end text")