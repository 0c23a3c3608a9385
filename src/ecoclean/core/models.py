"""
Copyright (c) 2025 initumX (initum.x@gmail.com)
Licensed under the MIT License

core/models.py
Data models for scanning, duplicate resolution and deletion accounting.
"""

from dataclasses import dataclass, field
from typing import List, Dict, Optional, Tuple
import fnmatch
import os
import stat
from enum import Enum


DEFAULT_PATTERNS = ("*.tmp", "*.log", "*.bak")

# Names registered in ecoclean.core.hasher.HASH_ALGORITHMS
HASH_ALGORITHM_NAMES = ("sha256", "blake2b", "sha1", "md5", "xxh128")


# =============================
# Enums
# =============================

class CleanupMode(Enum):
    """What a deletion batch removes."""
    TEMP_FILES = "temp"
    DUPLICATES = "duplicates"

    @property
    def display_name(self) -> str:
        """Human-readable name for console output and log lines."""
        mapping = {
            CleanupMode.TEMP_FILES: "Temporary file cleanup",
            CleanupMode.DUPLICATES: "Duplicate removal",
        }
        return mapping.get(self, self.value)

    def __repr__(self) -> str:
        return self.value


class SurvivorPolicy(Enum):
    """
    Which member of a duplicate group is kept.

    FIRST_SEEN keeps the file the scanner discovered first. A content hash has
    no notion of "original", so treating the earliest path as canonical is a
    policy, not a property of the data.
    """
    FIRST_SEEN = "first-seen"
    SHORTEST_PATH = "shortest-path"
    NEWEST = "newest"
    OLDEST = "oldest"

    @property
    def display_name(self) -> str:
        mapping = {
            SurvivorPolicy.FIRST_SEEN: "first seen",
            SurvivorPolicy.SHORTEST_PATH: "shortest path",
            SurvivorPolicy.NEWEST: "newest",
            SurvivorPolicy.OLDEST: "oldest",
        }
        return mapping.get(self, self.value)


class OperationState(str, Enum):
    IDLE = "idle"
    AWAITING_CONFIRMATION = "awaiting-confirmation"
    EXECUTING = "executing"
    DONE = "done"
    CANCELLED = "cancelled"


# ======================
#  Core Data Models
# ======================

@dataclass(frozen=True)
class ExtensionPattern:
    """
    Case-insensitive glob matched against file basenames (e.g. "*.tmp").
    Bare extensions ("tmp", ".tmp") are normalized to "*.tmp".
    """
    glob: str

    def __post_init__(self):
        value = self.glob.strip()
        if not value:
            raise ValueError("Extension pattern cannot be empty")
        if not any(ch in value for ch in "*?["):
            value = f"*{value}" if value.startswith(".") else f"*.{value}"
        object.__setattr__(self, "glob", value.lower())

    def matches(self, filename: str) -> bool:
        return fnmatch.fnmatchcase(filename.lower(), self.glob)

    def __str__(self) -> str:
        return self.glob


@dataclass
class FileRecord:
    """
    A file found by the scanner.
    Size, modification time and content hash are read lazily and cached;
    existence is always re-checked against the filesystem.
    """
    path: str
    name: Optional[str] = None
    content_hash: Optional[str] = None
    _size: Optional[int] = field(default=None, repr=False)
    _mtime: Optional[float] = field(default=None, repr=False)

    def __post_init__(self):
        if self.name is None:
            self.name = os.path.basename(self.path)

    def is_regular_file(self) -> bool:
        """True if the path currently exists as a regular file (symlinks excluded)."""
        try:
            return stat.S_ISREG(os.lstat(self.path).st_mode)
        except OSError:
            return False

    @property
    def size(self) -> int:
        """Size in bytes, read on first access. Raises OSError if the file is gone."""
        if self._size is None:
            self._size = os.lstat(self.path).st_size
        return self._size

    @property
    def mtime(self) -> float:
        if self._mtime is None:
            self._mtime = os.lstat(self.path).st_mtime
        return self._mtime

    @property
    def path_depth(self) -> int:
        return self.path.rstrip(os.sep).count(os.sep)

    def __repr__(self):
        return f"<FileRecord path={self.path}>"


# content hash -> members in insertion order
HashGroups = Dict[str, List[FileRecord]]


@dataclass
class Resolution:
    """Survivors and deletion candidates of one resolution pass. Disjoint, ordered."""
    survivors: List[FileRecord] = field(default_factory=list)
    to_delete: List[FileRecord] = field(default_factory=list)

    @property
    def survivor_paths(self) -> List[str]:
        return [r.path for r in self.survivors]

    @property
    def delete_paths(self) -> List[str]:
        return [r.path for r in self.to_delete]


@dataclass
class OperationStats:
    """Files actually removed by one deletion batch."""
    deleted_count: int = 0
    bytes_freed: int = 0

    def record(self, size: int) -> None:
        self.deleted_count += 1
        self.bytes_freed += size


@dataclass
class DeletionResult:
    """
    Outcome of one Deleter invocation.
    `stats` counts only files removed during the call; `failures` holds
    (path, reason) for files that could not be removed; `skipped` lists paths
    that were missing or not regular files when their turn came.
    """
    stats: OperationStats = field(default_factory=OperationStats)
    failures: List[Tuple[str, str]] = field(default_factory=list)
    skipped: List[str] = field(default_factory=list)
    deleted_paths: List[str] = field(default_factory=list)
    interrupted: bool = False


"""
DTO for cleanup parameters with built-in validation.
Interface-agnostic — used by the CLI, the interactive menu and tests.
"""

@dataclass
class CleanupParams:
    """Parameters for a cleanup run with validation."""
    directories: List[str]
    patterns: List[str] = field(default_factory=lambda: list(DEFAULT_PATTERNS))
    excluded_paths: List[str] = field(default_factory=list)
    log_file: Optional[str] = None
    algorithm: str = "sha256"
    policy: SurvivorPolicy = SurvivorPolicy.FIRST_SEEN
    use_trash: bool = False
    workers: int = 1

    def __post_init__(self):
        """Validate parameters immediately after creation."""
        directories = [d.strip() for d in self.directories if d and d.strip()]
        if not directories:
            raise ValueError("At least one directory to clean is required")
        self.directories = [os.path.abspath(os.path.expanduser(d)) for d in directories]

        patterns = [p for p in self.patterns if p and p.strip()]
        if not patterns:
            raise ValueError("At least one extension pattern is required")
        # Normalize and de-duplicate, keeping configuration order
        normalized = []
        for pattern in patterns:
            glob = ExtensionPattern(pattern).glob
            if glob not in normalized:
                normalized.append(glob)
        self.patterns = normalized

        self.algorithm = self.algorithm.strip().lower()
        if self.algorithm not in HASH_ALGORITHM_NAMES:
            raise ValueError(
                f"Unknown hash algorithm: '{self.algorithm}'. "
                f"Valid options: {', '.join(HASH_ALGORITHM_NAMES)}"
            )

        if self.workers < 1:
            raise ValueError("Number of hashing workers must be at least 1")

        if self.log_file:
            self.log_file = os.path.abspath(os.path.expanduser(self.log_file))

        excluded = [os.path.abspath(os.path.expanduser(p)) for p in self.excluded_paths if p]
        if self.log_file and self.log_file not in excluded:
            excluded.append(self.log_file)
        self.excluded_paths = excluded

    @property
    def extension_patterns(self) -> List[ExtensionPattern]:
        return [ExtensionPattern(p) for p in self.patterns]


