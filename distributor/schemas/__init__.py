"""Pydantic schemas for API responses."""

from distributor.schemas.common import ErrorResponse, HealthResponse
from distributor.schemas.content import ContentListingResponse, ContentNodeResponse

__all__ = [
    "ContentListingResponse",
    "ContentNodeResponse",
    "ErrorResponse",
    "HealthResponse",
]
