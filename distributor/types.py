"""Content service data type definitions."""

from dataclasses import dataclass
from datetime import datetime
from typing import Any, Optional, Tuple

FILE = "file"
DIRECTORY = "directory"


@dataclass(frozen=True)
class ContentNode:
    """
    One file or directory in the content listing.
    """
    name: str
    path: str
    type: str
    size: int
    modified: datetime

    @property
    def is_file(self) -> bool:
        return self.type == FILE


@dataclass(frozen=True)
class ContentSnapshot:
    """
    Immutable listing of the content root plus its file count.
    """
    content: Tuple[ContentNode, ...]
    total_files: int


@dataclass(frozen=True)
class Credential:
    """
    Identity claims decoded from a verified token.
    """
    id: Optional[Any]
    username: Optional[str]
    active: bool
    role: Optional[str]
