"""
Copyright (c) 2025 initumX (initum.x@gmail.com)
Licensed under the MIT License

core/scanner.py
Implements file scanning over several root directories.
Features:
- Recursively scans every configured root with os.walk (symlinked directories are not followed)
- Matches basenames case-insensitively against glob patterns such as "*.tmp"
- Keeps regular files only: symlinks, directories and devices are skipped
- Skips missing or unreadable roots instead of failing the whole scan
- Returns a de-duplicated list sorted by path
"""

import os
import stat
from typing import List, Optional, Callable, Set
from pathlib import Path
import time
import logging

logger = logging.getLogger(__name__)

# Local imports
from ecoclean.core.models import FileRecord, ExtensionPattern
from ecoclean.core.interfaces import FileScanner


class FileScannerImpl(FileScanner):
    """
    Scans directories recursively and keeps files whose name matches a pattern.

    Attributes:
        root_dirs: Root directories to scan
        patterns: Case-insensitive glob patterns matched against basenames
        excluded_paths: Files or directory trees that are never returned
    """

    def __init__(
        self,
        root_dirs: List[str],
        patterns: List[str],
        excluded_paths: Optional[List[str]] = None
    ):
        self.root_dirs = [os.path.abspath(os.path.expanduser(d)) for d in root_dirs]
        self.patterns = [ExtensionPattern(p) for p in patterns]
        self.excluded_paths = [os.path.normpath(os.path.abspath(p)) for p in excluded_paths] if excluded_paths else []

    def scan(self,
            stopped_flag: Optional[Callable[[], bool]] = None,
            progress_callback: Optional[Callable[[str, int, object], None]] = None) -> List[FileRecord]:
        """
        Walks every root and returns the matching regular files.
        Returns an empty list when cancelled.
        """
        logger.debug("Starting scan operation")
        logger.debug(f"Roots: {self.root_dirs}")
        logger.debug(f"Patterns: {[str(p) for p in self.patterns]}")

        if stopped_flag and stopped_flag():
            logger.debug("Scan cancelled before start")
            return []

        seen: Set[str] = set()
        found_files: List[FileRecord] = []
        processed_files = 0
        start_time = time.time()

        for root_dir in self.root_dirs:
            if not self._root_is_scannable(root_dir):
                continue

            matches_before = len(found_files)
            for root, dirs, files in os.walk(root_dir, onerror=self._on_walk_error):
                if stopped_flag and stopped_flag():
                    logger.debug("Scan interrupted by user")
                    return []

                # Pre-filter subdirectories BEFORE os.walk enters them
                dirs[:] = sorted(d for d in dirs if not self._is_excluded(os.path.join(root, d)))

                for filename in files:
                    processed_files += 1
                    path = os.path.join(root, filename)
                    if path in seen:
                        continue
                    record = self._process_file(path, filename)
                    if record:
                        seen.add(path)
                        found_files.append(record)

                if progress_callback:
                    progress_callback('scanning', processed_files, None)

            logger.debug(f"{root_dir}: {len(found_files) - matches_before} matches")

        found_files.sort(key=lambda r: r.path)

        elapsed_time = time.time() - start_time
        logger.debug(f"Total scan time: {elapsed_time:.2f} seconds")
        logger.debug(f"Scan completed. Found {len(found_files)} matching files.")
        return found_files

    @staticmethod
    def _root_is_scannable(root_dir: str) -> bool:
        """A root that is missing, not a directory or unreadable yields zero matches."""
        root_path = Path(root_dir)
        try:
            if not root_path.exists():
                logger.warning(f"Directory does not exist, 0 matches: {root_dir}")
                return False
            if not root_path.is_dir():
                logger.warning(f"Not a directory, 0 matches: {root_dir}")
                return False
            if not os.access(root_dir, os.R_OK | os.X_OK):
                logger.warning(f"Directory is not readable, 0 matches: {root_dir}")
                return False
        except OSError as e:
            logger.warning(f"Cannot access {root_dir}, 0 matches: {e}")
            return False
        return True

    @staticmethod
    def _on_walk_error(error: OSError) -> None:
        logger.debug(f"Skipping inaccessible directory: {error.filename} ({error.strerror})")

    def _is_excluded(self, path: str) -> bool:
        """Check if path is an excluded file or lies within an excluded directory."""
        normalized = os.path.normpath(path)
        for excluded in self.excluded_paths:
            if normalized == excluded or normalized.startswith(excluded + os.sep):
                return True
        return False

    def _process_file(self, path: str, filename: str) -> Optional[FileRecord]:
        """
        Return a FileRecord if the file passes every filter.
        Args:
            path: Full path of the file
            filename: Basename used for pattern matching
        Returns:
            Optional[FileRecord]: record if accepted, else None
        """
        if not self._name_matches(filename):
            return None

        if self._is_excluded(path):
            logger.debug(f"Skipping excluded path: {path}")
            return None

        try:
            mode = os.lstat(path).st_mode
        except OSError as e:
            logger.debug(f"Could not stat {path}: {e}")
            return None

        if not stat.S_ISREG(mode):
            logger.debug(f"Skipping non-regular file: {path}")
            return None

        logger.debug(f"Accepted file: {filename}")
        return FileRecord(path=path, name=filename)

    def _name_matches(self, filename: str) -> bool:
        return any(pattern.matches(filename) for pattern in self.patterns)
