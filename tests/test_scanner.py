"""
Unit tests for FileScannerImpl.
Verifies pattern matching, multiple roots, missing roots, symlinks and deterministic order.
"""
import os
import pytest
from pathlib import Path
from ecoclean.core.scanner import FileScannerImpl
from ecoclean.core.models import DEFAULT_PATTERNS


def scan_paths(roots, patterns=DEFAULT_PATTERNS, excluded=None):
    scanner = FileScannerImpl(root_dirs=[str(r) for r in roots], patterns=list(patterns),
                              excluded_paths=excluded)
    return [r.path for r in scanner.scan(stopped_flag=lambda: False)]


class TestFileScannerImpl:
    """Test file discovery with patterns and error handling."""

    def test_finds_all_matching_files_recursively(self, test_files, temp_dir):
        """a.tmp, b.log, c.bak, x.tmp, UPPER.TMP and subdir/nested.tmp match; y.txt does not."""
        paths = scan_paths([temp_dir])

        expected = sorted(str(test_files[k]) for k in ("a", "b", "c", "unique", "upper", "sub_dup"))
        assert paths == expected
        assert str(test_files["other"]) not in paths

    def test_non_matching_extension_excluded(self, temp_dir):
        """x.tmp is returned, y.txt is not."""
        (temp_dir / "x.tmp").write_bytes(b"unique")
        (temp_dir / "y.txt").write_bytes(b"other")

        assert scan_paths([temp_dir]) == [str(temp_dir / "x.tmp")]

    def test_matching_is_case_insensitive(self, temp_dir):
        (temp_dir / "A.TMP").write_bytes(b"1")
        (temp_dir / "b.Log").write_bytes(b"2")

        paths = scan_paths([temp_dir])
        assert len(paths) == 2

    def test_missing_root_returns_empty_without_error(self, temp_dir):
        """A root that does not exist yields zero matches, not an exception."""
        assert scan_paths([temp_dir / "does_not_exist"]) == []

    def test_bad_root_does_not_abort_other_roots(self, temp_dir):
        good = temp_dir / "good"
        good.mkdir()
        (good / "a.tmp").write_bytes(b"a")
        not_a_dir = temp_dir / "file.txt"
        not_a_dir.write_bytes(b"x")

        paths = scan_paths([temp_dir / "missing", not_a_dir, good])
        assert paths == [str(good / "a.tmp")]

    def test_results_are_sorted_and_deterministic(self, test_files, temp_dir):
        first = scan_paths([temp_dir])
        second = scan_paths([temp_dir])

        assert first == sorted(first)
        assert first == second

    def test_results_stay_inside_roots(self, temp_dir):
        inside = temp_dir / "inside"
        outside = temp_dir / "outside"
        inside.mkdir()
        outside.mkdir()
        (inside / "a.tmp").write_bytes(b"a")
        (outside / "b.tmp").write_bytes(b"b")

        paths = scan_paths([inside])
        assert paths == [str(inside / "a.tmp")]
        assert all(p.startswith(str(inside) + os.sep) for p in paths)

    def test_file_matched_by_two_patterns_listed_once(self, temp_dir):
        (temp_dir / "build.tmp").write_bytes(b"x")

        paths = scan_paths([temp_dir], patterns=["*.tmp", "build.*", "*.TMP"])
        assert paths == [str(temp_dir / "build.tmp")]

    def test_overlapping_roots_listed_once(self, temp_dir):
        sub = temp_dir / "sub"
        sub.mkdir()
        (sub / "a.tmp").write_bytes(b"a")

        paths = scan_paths([temp_dir, sub])
        assert paths == [str(sub / "a.tmp")]

    def test_directories_with_matching_names_are_skipped(self, temp_dir):
        (temp_dir / "folder.tmp").mkdir()
        (temp_dir / "folder.tmp" / "inner.tmp").write_bytes(b"x")

        assert scan_paths([temp_dir]) == [str(temp_dir / "folder.tmp" / "inner.tmp")]

    def test_scanner_skips_symlinks(self, temp_dir):
        """Symbolic links must never be returned, only the real file."""
        real_file = temp_dir / "real.tmp"
        real_file.write_bytes(b"content")

        try:
            (temp_dir / "link.tmp").symlink_to(real_file)
        except (OSError, NotImplementedError):
            pytest.skip("Symlinks not supported on this platform")

        assert scan_paths([temp_dir]) == [str(real_file)]

    def test_symlinked_directories_not_followed(self, temp_dir):
        target = temp_dir / "target"
        target.mkdir()
        (target / "a.tmp").write_bytes(b"a")
        root = temp_dir / "root"
        root.mkdir()
        try:
            (root / "linked").symlink_to(target, target_is_directory=True)
        except (OSError, NotImplementedError):
            pytest.skip("Symlinks not supported on this platform")

        assert scan_paths([root]) == []

    def test_excluded_file_never_returned(self, temp_dir):
        """The report log lives under a scanned root but must not be deleted."""
        log_file = temp_dir / "ecoclean.log"
        log_file.write_text("[2024-12-10 10:00:00] previous run\n")
        (temp_dir / "app.log").write_text("app")

        paths = scan_paths([temp_dir], excluded=[str(log_file)])
        assert paths == [str(temp_dir / "app.log")]

    def test_excluded_directory_tree_skipped(self, temp_dir):
        keep = temp_dir / "keep"
        keep.mkdir()
        (keep / "a.tmp").write_bytes(b"a")
        (temp_dir / "b.tmp").write_bytes(b"b")

        assert scan_paths([temp_dir], excluded=[str(keep)]) == [str(temp_dir / "b.tmp")]

    def test_zero_byte_files_are_included(self, temp_dir):
        (temp_dir / "empty.tmp").write_bytes(b"")
        assert scan_paths([temp_dir]) == [str(temp_dir / "empty.tmp")]

    def test_scan_cancelled_before_start(self, test_files, temp_dir):
        scanner = FileScannerImpl(root_dirs=[str(temp_dir)], patterns=["*.tmp"])
        assert scanner.scan(stopped_flag=lambda: True) == []

    def test_progress_callback_reports_scanning(self, test_files, temp_dir):
        events = []
        scanner = FileScannerImpl(root_dirs=[str(temp_dir)], patterns=["*.tmp"])
        scanner.scan(progress_callback=lambda stage, current, total: events.append((stage, current)))

        assert events
        assert all(stage == "scanning" for stage, _ in events)
        # 7 files in total were visited, matching or not
        assert events[-1][1] == 7

    def test_unreadable_subdirectory_skipped(self, temp_dir, monkeypatch):
        """Errors raised while listing a subdirectory do not abort the scan."""
        (temp_dir / "a.tmp").write_bytes(b"a")
        locked = temp_dir / "locked"
        locked.mkdir()
        (locked / "b.tmp").write_bytes(b"b")

        original_scandir = os.scandir

        def mocked_scandir(path="."):
            if os.fspath(path) == str(locked):
                raise PermissionError(13, "Permission denied", str(locked))
            return original_scandir(path)

        monkeypatch.setattr(os, "scandir", mocked_scandir)

        assert scan_paths([temp_dir]) == [str(temp_dir / "a.tmp")]
