"""Walks the content root and builds the listing snapshot."""

import os
from datetime import datetime, timezone
from pathlib import Path
from typing import List, Union

from common.logging_config import get_logger
from distributor.types import DIRECTORY, FILE, ContentNode, ContentSnapshot

logger = get_logger(__name__)


def _sorted_entries(dir_path: str) -> List[os.DirEntry]:
    with os.scandir(dir_path) as it:
        return sorted(it, key=lambda entry: entry.name)


def list_content(root: Union[str, Path]) -> List[ContentNode]:
    """
    List every file and directory beneath root in pre-order.

    A directory appears before its children and siblings are ordered by name,
    so identical trees always produce identical listings.

    Args:
        root: Content root directory

    Returns:
        Ordered list of ContentNode

    Raises:
        OSError: If root or any entry beneath it cannot be read
    """
    listing: List[ContentNode] = []

    def walk(dir_path: str, relative_path: str) -> None:
        for entry in _sorted_entries(dir_path):
            entry_relative = f"{relative_path}/{entry.name}" if relative_path else entry.name
            stats = os.stat(entry.path)
            is_dir = entry.is_dir()

            listing.append(ContentNode(
                name=entry.name,
                path=entry_relative,
                type=DIRECTORY if is_dir else FILE,
                size=0 if is_dir else stats.st_size,
                modified=datetime.fromtimestamp(stats.st_mtime, tz=timezone.utc),
            ))

            if is_dir:
                walk(entry.path, entry_relative)

    walk(os.fspath(root), "")
    return listing


def count_files(root: Union[str, Path]) -> int:
    """
    Count non-directory entries beneath root.

    Args:
        root: Content root directory

    Returns:
        Number of files in the tree

    Raises:
        OSError: If root or any directory beneath it cannot be read
    """
    file_count = 0
    pending = [os.fspath(root)]
    while pending:
        with os.scandir(pending.pop()) as it:
            for entry in it:
                if entry.is_dir():
                    pending.append(entry.path)
                else:
                    file_count += 1
    return file_count


def index_tree(root: Union[str, Path]) -> ContentSnapshot:
    """
    Build a snapshot of the tree at root.

    Args:
        root: Content root directory

    Returns:
        ContentSnapshot with the ordered listing and file count

    Raises:
        OSError: If the tree cannot be fully read (no partial snapshot)
    """
    content = tuple(list_content(root))
    total_files = count_files(root)

    listed_files = sum(1 for node in content if node.is_file)
    if listed_files != total_files:
        # The tree changed between the two walks.
        raise OSError(
            f"Content tree changed while indexing {root}: "
            f"listed {listed_files} files, counted {total_files}"
        )

    logger.debug(f"Indexed {len(content)} entries ({total_files} files) under {root}")
    return ContentSnapshot(content=content, total_files=total_files)
