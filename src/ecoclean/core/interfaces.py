"""
Copyright (c) 2025 initumX (initum.x@gmail.com)
Licensed under the MIT License

interfaces.py

Defines core interfaces (Protocols) used throughout the cleanup pipeline.
These protocols enforce structural typing using Python's `typing.Protocol` so that
the CLI, the interactive menu and tests can substitute their own implementations.

Key Components:
---------------
- HashAlgorithm: Factory for incremental hash objects (SHA-256, BLAKE2b, MD5, xxHash128).
- Hasher: Computes the full content hash of a file in fixed-size chunks.
- FileScanner: Walks the configured roots and returns matching files.
- FileGrouper: Groups files by identical content hash.
- DuplicateResolver: Picks one survivor per group.
- Deleter: Removes a batch of files with exact accounting.
- Confirmer / SummaryLogger: Collaborators consumed by the orchestrator.
"""

from typing import Protocol, List, Optional, Callable, Any
from ecoclean.core.models import (
    FileRecord,
    HashGroups,
    Resolution,
    DeletionResult,
)


# ===== Interfaces =====

class HashAlgorithm(Protocol):
    """
    Interface for incremental hash algorithms.

    `new()` returns an object with `update(bytes)` and `hexdigest()`, which both
    hashlib and xxhash objects provide.
    """
    name: str

    @staticmethod
    def new() -> Any:
        ...


class Hasher(Protocol):
    """Interface for hashing the full content of a file."""
    def compute_full_hash(self, record: FileRecord) -> Optional[str]: ...


class FileScanner(Protocol):
    """
    Interface for scanning file systems for cleanup candidates.
    """
    def scan(
        self,
        stopped_flag: Optional[Callable[[], bool]] = None,
        progress_callback: Optional[Callable[[str, int, object], None]] = None
    ) -> List[FileRecord]:
        """
        Scan the configured roots.

        Args:
            stopped_flag: Function that returns True if operation should be canceled.
            progress_callback: Optional callback for reporting progress (stage, current, total).

        Returns:
            Matching files, de-duplicated and sorted by path.
        """
        ...


class FileGrouper(Protocol):
    """Interface for grouping files by content hash."""
    def group_by_content_hash(
        self,
        records: List[FileRecord],
        stopped_flag: Optional[Callable[[], bool]] = None,
        progress_callback: Optional[Callable[[str, int, object], None]] = None
    ) -> HashGroups:
        ...


class DuplicateResolver(Protocol):
    def resolve(self, groups: HashGroups) -> Resolution:
        """Split grouped files into survivors and deletion candidates."""
        ...


class Deleter(Protocol):
    def delete(
        self,
        paths: List[str],
        stopped_flag: Optional[Callable[[], bool]] = None,
        progress_callback: Optional[Callable[[str, int, object], None]] = None
    ) -> DeletionResult:
        """
        Remove the given paths, skipping files that no longer exist.

        Returns:
            DeletionResult whose stats reflect exactly the files removed by this call.
        """
        ...


class Confirmer(Protocol):
    """Asks for explicit approval before a destructive batch."""
    def confirm(self, plan: Any) -> bool: ...


class SummaryLogger(Protocol):
    """Accepts one human-readable summary line per completed batch."""
    def append_summary(self, message: str) -> str: ...
