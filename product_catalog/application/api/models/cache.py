"""
Cache API Models
"""

from pydantic import BaseModel, Field


class CacheProbeResponse(BaseModel):
    """Result of GET /cache/ping."""

    ok: bool = Field(..., description="Whether the backend answered")
    token: str | None = Field(default=None, description="PONG or LocalStore OK")


class CacheStatusResponse(BaseModel):
    status: str = Field(..., description="Human-readable backend status")


class CacheOperationResponse(BaseModel):
    """Result of an administrative eviction."""

    success: bool = Field(..., description="False when the cache could not be reached")
    prefix: str = Field(..., description="Physical prefix the operation covered")
