"""
==============================================================================
Folder Schemas Module
==============================================================================

Request and response schemas for folder management.

==============================================================================
"""

from datetime import datetime
from pydantic import BaseModel, ConfigDict, Field, field_validator


class FolderCreate(BaseModel):
    """Folder creation request."""
    name: str = Field(..., min_length=1, max_length=255)

    @field_validator("name")
    @classmethod
    def strip_name(cls, v: str) -> str:
        v = v.strip()
        if not v:
            raise ValueError("Folder name is required")
        return v


class FolderUpdate(FolderCreate):
    """Folder rename request."""


class FolderResponse(BaseModel):
    """Folder details."""

    model_config = ConfigDict(from_attributes=True)

    id: str
    name: str
    created_at: datetime
    updated_at: datetime
