"""Holds the single published content listing snapshot."""

import time
from pathlib import Path
from typing import Optional, Union

from common.logging_config import get_logger
from distributor.exceptions import CacheNotLoadedError
from distributor.indexer import index_tree
from distributor.types import ContentSnapshot

logger = get_logger(__name__)


class ContentCache:
    """
    Owns the listing snapshot of one content root.

    The snapshot is built off to the side and published with a single
    reference assignment, so readers see either the old or the new snapshot,
    never a mix.
    """

    def __init__(self, content_root: Union[str, Path]):
        self.content_root = Path(content_root)
        self._snapshot: Optional[ContentSnapshot] = None

    def load_cache(self) -> ContentSnapshot:
        """
        Re-index the content root and publish the new snapshot.

        Returns:
            The newly published snapshot

        Raises:
            OSError: If indexing fails; any previous snapshot stays published
        """
        logger.info(f"Loading content cache from {self.content_root}")
        start_time = time.time()

        try:
            snapshot = index_tree(self.content_root)
        except OSError as e:
            logger.error(f"Error loading content cache: {e}")
            raise

        self._snapshot = snapshot

        duration_ms = (time.time() - start_time) * 1000
        logger.info(f"Content cache loaded successfully in {duration_ms:.0f}ms")
        logger.info(f"Cached {len(snapshot.content)} items and {snapshot.total_files} files")
        return snapshot

    def get_cache(self) -> ContentSnapshot:
        """
        Return the published snapshot.

        Raises:
            CacheNotLoadedError: If load_cache() has not completed successfully
        """
        snapshot = self._snapshot
        if snapshot is None:
            raise CacheNotLoadedError()
        return snapshot

    def is_loaded(self) -> bool:
        return self._snapshot is not None
