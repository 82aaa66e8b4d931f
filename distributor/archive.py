"""Unpacks the content archive into the content root, replacing it entirely."""

import os
import shutil
import tempfile
import zipfile
import zlib
from pathlib import Path
from typing import Union

from common.constants import COPY_BUFFER_SIZE
from common.logging_config import get_logger
from distributor.exceptions import ArchiveCorruptError, ArchiveNotFoundError

logger = get_logger(__name__)

STAGING_SUFFIX = ".tmp"

# Errors zipfile raises for archives or entries it cannot decode.
CORRUPT_ENTRY_ERRORS = (zipfile.BadZipFile, zlib.error, EOFError, NotImplementedError, RuntimeError)


def is_directory_entry(name: str) -> bool:
    """
    Check whether an archive entry names a directory.

    Args:
        name: Archive-internal entry name

    Returns:
        True if the entry ends with a path separator
    """
    return name.endswith("/")


def resolve_entry_path(dest_root: Path, name: str) -> Path:
    """
    Resolve where an archive entry is written beneath dest_root.

    Args:
        dest_root: Resolved destination directory
        name: Archive-internal entry name (forward-slash separated)

    Returns:
        Absolute path for the entry

    Raises:
        ArchiveCorruptError: If the entry would land outside dest_root
    """
    target = (dest_root / name).resolve()
    if target == dest_root or not target.is_relative_to(dest_root):
        raise ArchiveCorruptError(f"Archive entry escapes destination: {name}")
    return target


def _write_entry(archive: zipfile.ZipFile, info: zipfile.ZipInfo, target: Path) -> None:
    """
    Drain one entry to disk.

    Data lands in a uniquely named temp file beside the target which is
    renamed into place only after both streams are closed, so an interrupted
    run never leaves a truncated file under its final name.
    """
    target.parent.mkdir(parents=True, exist_ok=True)
    fd, staging = tempfile.mkstemp(dir=target.parent, prefix=f".{target.name}.", suffix=STAGING_SUFFIX)
    try:
        with os.fdopen(fd, "wb") as destination, archive.open(info) as source:
            shutil.copyfileobj(source, destination, COPY_BUFFER_SIZE)
        os.replace(staging, target)
    except BaseException:
        Path(staging).unlink(missing_ok=True)
        raise


def unpack_archive(archive_path: Union[str, Path], dest_dir: Union[str, Path]) -> int:
    """
    Replace dest_dir with the decompressed contents of a zip archive.

    Any existing dest_dir is removed first so files from a previous archive
    never survive. Entries are extracted one at a time, in archive order.

    Args:
        archive_path: Path to the source zip archive
        dest_dir: Directory to (re)create with the archive contents

    Returns:
        Number of files written

    Raises:
        ArchiveNotFoundError: If archive_path does not exist
        ArchiveCorruptError: If the archive cannot be read or holds unsafe entries
        OSError: If a filesystem operation fails
    """
    archive_path = Path(archive_path)
    dest_dir = Path(dest_dir)

    if not archive_path.is_file():
        raise ArchiveNotFoundError(f"{archive_path.name} not found at {archive_path}")

    logger.info(f"Extracting {archive_path} into {dest_dir}")

    try:
        archive = zipfile.ZipFile(archive_path)
    except CORRUPT_ENTRY_ERRORS as e:
        raise ArchiveCorruptError(f"Cannot read archive {archive_path}: {e}") from e

    with archive:
        try:
            entries = archive.infolist()
        except CORRUPT_ENTRY_ERRORS as e:
            raise ArchiveCorruptError(f"Cannot read archive {archive_path}: {e}") from e

        if dest_dir.exists():
            logger.debug(f"Removing previous content tree {dest_dir}")
            shutil.rmtree(dest_dir)
        dest_dir.mkdir(parents=True)
        dest_root = dest_dir.resolve()

        written = 0
        for info in entries:
            if is_directory_entry(info.filename):
                logger.debug(f"Skipping directory entry {info.filename}")
                continue

            target = resolve_entry_path(dest_root, info.filename)
            try:
                _write_entry(archive, info, target)
            except CORRUPT_ENTRY_ERRORS as e:
                raise ArchiveCorruptError(f"Corrupt archive entry {info.filename}: {e}") from e
            written += 1

    logger.info(f"Content extracted successfully ({written} files)")
    return written
