"""
Copyright (c) 2025 initumX (initum.x@gmail.com)
Licensed under the MIT License

core/grouper.py
Groups FileRecords by identical content hash.

Hash computation per file is independent and read-only, so it may run on a thread
pool (workers > 1). Grouping itself always happens sequentially in input order:
the first member of every group is the first file seen by the scanner.
"""

import logging
from concurrent.futures import ThreadPoolExecutor
from typing import List, Dict, Optional, Callable, Iterable, Tuple

from ecoclean.core.interfaces import FileGrouper, Hasher
from ecoclean.core.models import FileRecord, HashGroups
from ecoclean.core.hasher import HasherImpl

logger = logging.getLogger(__name__)


class FileGrouperImpl(FileGrouper):
    """
    A concrete implementation of FileGrouper.
    Uses an injected Hasher instance for flexibility and testability.
    """

    def __init__(self, hasher: Hasher = None, workers: int = 1):
        if workers < 1:
            raise ValueError("Number of hashing workers must be at least 1")
        self.hasher = hasher or HasherImpl()
        self.workers = workers

    def group_by_content_hash(
        self,
        records: List[FileRecord],
        stopped_flag: Optional[Callable[[], bool]] = None,
        progress_callback: Optional[Callable[[str, int, object], None]] = None
    ) -> HashGroups:
        """
        Groups records by full content hash, singletons included.
        Args:
            records: Files to group, in scan order
        Returns:
            Dict[hash, List[FileRecord]] with insertion order preserved inside each group.
            Files that could not be hashed appear in no group; a path given twice
            is grouped once. Returns {} when cancelled.
        """
        unique_records = self._unique_by_path(records)
        total = len(unique_records)
        groups: Dict[str, List[FileRecord]] = {}
        skipped_files = 0

        for processed, (record, digest) in enumerate(
                self._hash_all(unique_records, stopped_flag), start=1):
            if stopped_flag and stopped_flag():
                logger.debug("Grouping interrupted by user")
                return {}

            if digest is None:
                skipped_files += 1
            else:
                groups.setdefault(digest, []).append(record)

            if progress_callback:
                progress_callback("Content hash", processed, total)

        if skipped_files > 0:
            logger.debug(f"Excluded {skipped_files} files that could not be hashed")
        logger.debug(f"Grouped {total - skipped_files} files into {len(groups)} hash groups")
        return groups

    def _hash_all(
        self,
        records: List[FileRecord],
        stopped_flag: Optional[Callable[[], bool]] = None
    ) -> Iterable[Tuple[FileRecord, Optional[str]]]:
        if self.workers == 1 or len(records) < 2:
            for record in records:
                if stopped_flag and stopped_flag():
                    return
                yield record, self.hasher.compute_full_hash(record)
            return

        # executor.map yields results in submission order
        with ThreadPoolExecutor(max_workers=self.workers) as executor:
            yield from zip(records, executor.map(self.hasher.compute_full_hash, records))

    @staticmethod
    def _unique_by_path(records: List[FileRecord]) -> List[FileRecord]:
        seen = set()
        unique = []
        for record in records:
            if record.path in seen:
                continue
            seen.add(record.path)
            unique.append(record)
        return unique

    @staticmethod
    def duplicate_groups(groups: HashGroups) -> HashGroups:
        """Only the groups with two or more members."""
        return {key: members for key, members in groups.items() if len(members) >= 2}
