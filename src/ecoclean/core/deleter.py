"""
Copyright (c) 2025 initumX (initum.x@gmail.com)
Licensed under the MIT License

core/deleter.py
Batch deletion with exact accounting.

Two phases:
  1. Snapshot the size of every candidate that is currently a regular file.
  2. Remove the snapshotted files one by one. A file only counts once its removal
     succeeded, and it counts with the size captured in phase 1.

Files that vanish in between are skipped silently. Permission or busy errors become
per-file failures and never abort the batch. The batch can be interrupted between
two files (stopped_flag or Ctrl+C); the files already removed stay in the stats.
"""

import os
import stat
import logging
from typing import List, Optional, Callable, Tuple

from ecoclean.core.interfaces import Deleter
from ecoclean.core.models import DeletionResult
from ecoclean.services.file_service import FileService

logger = logging.getLogger(__name__)


class DeleterImpl(Deleter):
    """
    Removes files through an injected removal backend (permanent unlink by default).
    """

    def __init__(self, remover: Optional[Callable[[str], None]] = None):
        self.remover = remover or FileService.delete_permanently

    def delete(
        self,
        paths: List[str],
        stopped_flag: Optional[Callable[[], bool]] = None,
        progress_callback: Optional[Callable[[str, int, object], None]] = None
    ) -> DeletionResult:
        result = DeletionResult()
        snapshot = self._snapshot_sizes(paths, result)
        total = len(snapshot)

        logger.debug(f"Deletion started: {total} files, {len(result.skipped)} skipped before start")

        for index, (path, size) in enumerate(snapshot, start=1):
            if stopped_flag and stopped_flag():
                logger.debug("Deletion interrupted by user")
                result.interrupted = True
                break

            try:
                self._delete_one(path, size, result)
                if progress_callback:
                    progress_callback("Deleting", index, total)
            except KeyboardInterrupt:
                logger.warning("Deletion interrupted by Ctrl+C")
                result.interrupted = True
                break

        logger.debug(
            f"Deletion finished: {result.stats.deleted_count} deleted, "
            f"{result.stats.bytes_freed} bytes freed, {len(result.failures)} failed"
        )
        return result

    def _delete_one(self, path: str, size: int, result: DeletionResult) -> None:
        """Phase 2 for one file. Failures are recorded, never raised."""
        try:
            if not self._is_regular_file(path):
                logger.debug(f"File vanished before deletion: {path}")
                result.skipped.append(path)
                return

            self.remover(path)
        except FileNotFoundError:
            logger.debug(f"File vanished during deletion: {path}")
            result.skipped.append(path)
            return
        except (OSError, RuntimeError) as e:
            logger.warning(f"Failed to delete {path}: {e}")
            result.failures.append((path, str(e)))
            return

        # Counted right after the removal it accounts for
        result.stats.record(size)
        result.deleted_paths.append(path)
        logger.debug(f"Deleted: {path} ({size} bytes)")

    @staticmethod
    def _snapshot_sizes(paths: List[str], result: DeletionResult) -> List[Tuple[str, int]]:
        """Phase 1: sizes of all candidates captured at one point, before any deletion."""
        snapshot = []
        seen = set()
        for path in paths:
            if path in seen:
                continue
            seen.add(path)
            try:
                st = os.lstat(path)
            except OSError:
                logger.debug(f"File missing before deletion: {path}")
                result.skipped.append(path)
                continue
            if not stat.S_ISREG(st.st_mode):
                logger.debug(f"Not a regular file, skipping: {path}")
                result.skipped.append(path)
                continue
            snapshot.append((path, st.st_size))
        return snapshot

    @staticmethod
    def _is_regular_file(path: str) -> bool:
        try:
            return stat.S_ISREG(os.lstat(path).st_mode)
        except FileNotFoundError:
            return False
