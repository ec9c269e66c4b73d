"""
==============================================================================
Common Schemas Module
==============================================================================

Shared response schemas used across API endpoints.

==============================================================================
"""

from pydantic import BaseModel


class HealthComponents(BaseModel):
    """Per-component health status."""
    api: str
    database: str
    scan_stream: str


class HealthResponse(BaseModel):
    """Overall health status."""
    status: str
    components: HealthComponents
    subscribers: int
