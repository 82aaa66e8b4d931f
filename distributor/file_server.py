"""Resolves client paths inside the content root and reads files from disk."""

from pathlib import Path
from typing import Tuple, Union

from common.constants import DEFAULT_MIME_TYPE, MIME_TYPES
from distributor.exceptions import AccessDeniedError, ContentNotFoundError, PathIsDirectoryError


def guess_mime_type(file_path: Union[str, Path]) -> str:
    """
    Map a file's extension to its Content-Type.

    Args:
        file_path: Path or file name

    Returns:
        MIME type from the fixed table, or application/octet-stream
    """
    return MIME_TYPES.get(Path(file_path).suffix.lower(), DEFAULT_MIME_TYPE)


def resolve_content_path(content_root: Union[str, Path], relative_path: str) -> Path:
    """
    Resolve a client-supplied path against the content root.

    Both paths are fully resolved (symlinks and ".." collapsed) before the
    containment check, and containment is decided per path component.

    Args:
        content_root: Content root directory
        relative_path: Slash-separated path relative to the root

    Returns:
        Resolved absolute path inside the content root

    Raises:
        AccessDeniedError: If the path resolves outside the content root
        ContentNotFoundError: If the path cannot name a file (embedded NUL)
    """
    root = Path(content_root).resolve()
    try:
        resolved = (root / relative_path).resolve()
    except ValueError as e:
        # Embedded NUL bytes cannot name any file on disk.
        raise ContentNotFoundError() from e

    if resolved != root and not resolved.is_relative_to(root):
        raise AccessDeniedError()

    return resolved


def serve_file(content_root: Union[str, Path], relative_path: str) -> Tuple[bytes, str]:
    """
    Read a content file for delivery.

    Args:
        content_root: Content root directory
        relative_path: Slash-separated path relative to the root

    Returns:
        Tuple of (file bytes, MIME type)

    Raises:
        AccessDeniedError: If the path resolves outside the content root
        ContentNotFoundError: If nothing exists at the path
        PathIsDirectoryError: If the path is a directory
        OSError: If the file cannot be read
    """
    resolved = resolve_content_path(content_root, relative_path)

    if not resolved.exists():
        raise ContentNotFoundError()

    if resolved.is_dir():
        raise PathIsDirectoryError()

    return resolved.read_bytes(), guess_mime_type(resolved)
