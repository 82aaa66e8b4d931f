"""Common schemas used across multiple endpoints."""

from pydantic import BaseModel


class ErrorResponse(BaseModel):
    """Response model for errors."""
    success: bool = False
    error: str


class HealthResponse(BaseModel):
    """Response model for the liveness probe."""
    status: str
    service: str
    timestamp: str
