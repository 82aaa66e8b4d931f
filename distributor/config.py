"""Configuration settings for the content distribution service."""

import os
from dataclasses import dataclass, field
from pathlib import Path
from typing import List

from common.constants import (
    DEFAULT_ARCHIVE_NAME,
    DEFAULT_CONTENT_DIR_NAME,
    DEFAULT_HOST,
    DEFAULT_JWT_SECRET,
    DEFAULT_PORT,
)
from distributor.utils import parse_cors_origins


@dataclass(frozen=True)
class Settings:
    """
    Resolved settings handed to the application factory.
    """
    host: str = DEFAULT_HOST
    port: int = DEFAULT_PORT
    jwt_secret: str = DEFAULT_JWT_SECRET
    cors_origins: List[str] = field(default_factory=list)
    archive_path: Path = Path(DEFAULT_ARCHIVE_NAME)
    content_dir: Path = Path(DEFAULT_CONTENT_DIR_NAME)


def load_settings() -> Settings:
    """
    Build Settings from the current environment.

    Every variable falls back to its documented default when absent.

    Returns:
        Settings instance
    """
    return Settings(
        host=os.environ.get("CDS_HOST", DEFAULT_HOST),
        port=int(os.environ.get("PORT", str(DEFAULT_PORT))),
        jwt_secret=os.environ.get("JWT_SECRET", DEFAULT_JWT_SECRET),
        cors_origins=parse_cors_origins(os.environ.get("CORS_ORIGINS", "")),
        archive_path=Path(os.environ.get("CONTENT_ZIP_PATH", DEFAULT_ARCHIVE_NAME)),
        content_dir=Path(os.environ.get("CONTENT_DIR_PATH", DEFAULT_CONTENT_DIR_NAME)),
    )
