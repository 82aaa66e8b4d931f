"""Utility helper functions for the content service."""

import uuid
from datetime import datetime, timezone
from typing import List


def generate_uuid() -> str:
    """
    Generate a new UUID4 string.

    Returns:
        UUID4 string
    """
    return str(uuid.uuid4())


def get_current_timestamp() -> str:
    """
    Get current UTC timestamp in ISO format.

    Returns:
        Current timestamp as ISO format string
    """
    return format_timestamp(datetime.now(timezone.utc))


def format_timestamp(value: datetime) -> str:
    """
    Format a datetime as ISO-8601 UTC with millisecond precision.

    Args:
        value: Naive (assumed UTC) or aware datetime

    Returns:
        String such as "2024-01-31T12:00:00.000Z"
    """
    if value.tzinfo is not None:
        value = value.astimezone(timezone.utc)
    return value.strftime("%Y-%m-%dT%H:%M:%S.") + f"{value.microsecond // 1000:03d}Z"


def parse_cors_origins(origins_str: str) -> List[str]:
    """
    Parse comma-separated CORS origins string into list.

    Args:
        origins_str: Comma-separated origins (e.g., "https://a.com, https://b.com")

    Returns:
        List of trimmed origins, empty entries dropped
    """
    return [origin.strip() for origin in origins_str.split(',') if origin.strip()]
