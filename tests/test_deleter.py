"""
Unit tests for DeleterImpl.
Verifies exact accounting, concurrent disappearance, per-file failures and interruption.
"""
import os
from unittest import mock
from ecoclean.core.deleter import DeleterImpl


def make_files(directory, sizes):
    paths = []
    for name, size in sizes.items():
        path = directory / name
        path.write_bytes(b"x" * size)
        paths.append(str(path))
    return paths


class TestDeleterImpl:
    """Deletion with two-phase size accounting."""

    def test_counts_deleted_files_and_bytes(self, tmp_path):
        paths = make_files(tmp_path, {"a.tmp": 100, "b.log": 250, "c.bak": 0})

        result = DeleterImpl().delete(paths)

        assert result.stats.deleted_count == 3
        assert result.stats.bytes_freed == 350
        assert result.deleted_paths == paths
        assert not any(os.path.exists(p) for p in paths)
        assert result.failures == []
        assert result.interrupted is False

    def test_missing_file_is_skipped_silently(self, tmp_path):
        paths = make_files(tmp_path, {"a.tmp": 10})
        missing = str(tmp_path / "gone.tmp")

        result = DeleterImpl().delete([missing] + paths)

        assert result.stats.deleted_count == 1
        assert result.stats.bytes_freed == 10
        assert result.skipped == [missing]
        assert result.failures == []

    def test_file_removed_by_someone_else_mid_batch(self, tmp_path):
        """
        Three candidates of 100 bytes; the third vanishes while the first is being deleted.
        Only the two actually removed are counted.
        """
        paths = make_files(tmp_path, {"a.tmp": 100, "b.tmp": 100, "c.tmp": 100})

        def remover(path):
            os.remove(path)
            if path == paths[0]:
                os.remove(paths[2])

        result = DeleterImpl(remover).delete(paths)

        assert result.stats.deleted_count == 2
        assert result.stats.bytes_freed == 200
        assert result.deleted_paths == paths[:2]
        assert result.skipped == [paths[2]]

    def test_remover_reporting_missing_file_is_skipped(self, tmp_path):
        paths = make_files(tmp_path, {"a.tmp": 10, "b.tmp": 20})

        def remover(path):
            if path == paths[0]:
                raise FileNotFoundError(path)
            os.remove(path)

        result = DeleterImpl(remover).delete(paths)

        assert result.stats.deleted_count == 1
        assert result.stats.bytes_freed == 20
        assert result.skipped == [paths[0]]

    def test_permission_error_recorded_and_batch_continues(self, tmp_path):
        paths = make_files(tmp_path, {"a.tmp": 10, "locked.tmp": 20, "c.tmp": 30})

        def remover(path):
            if path == paths[1]:
                raise PermissionError(13, "Permission denied")
            os.remove(path)

        result = DeleterImpl(remover).delete(paths)

        assert result.stats.deleted_count == 2
        assert result.stats.bytes_freed == 40
        assert len(result.failures) == 1
        assert result.failures[0][0] == paths[1]
        assert "Permission denied" in result.failures[0][1]
        assert os.path.exists(paths[1])

    def test_trash_backend_error_recorded(self, tmp_path):
        paths = make_files(tmp_path, {"a.tmp": 10})
        remover = mock.Mock(side_effect=RuntimeError("Failed to move to trash: no trash"))

        result = DeleterImpl(remover).delete(paths)

        assert result.stats.deleted_count == 0
        assert result.failures == [(paths[0], "Failed to move to trash: no trash")]

    def test_sizes_snapshotted_before_deletion(self, tmp_path):
        """A file growing after the snapshot still counts with its snapshot size."""
        paths = make_files(tmp_path, {"a.tmp": 10, "b.tmp": 10})

        def remover(path):
            if path == paths[0]:
                with open(paths[1], "ab") as f:
                    f.write(b"y" * 90)
            os.remove(path)

        result = DeleterImpl(remover).delete(paths)

        assert result.stats.bytes_freed == 20

    def test_stopped_flag_keeps_partial_stats(self, tmp_path):
        paths = make_files(tmp_path, {"a.tmp": 10, "b.tmp": 20, "c.tmp": 30})
        calls = []

        def remover(path):
            calls.append(path)
            os.remove(path)

        result = DeleterImpl(remover).delete(paths, stopped_flag=lambda: len(calls) >= 1)

        assert result.interrupted is True
        assert result.stats.deleted_count == 1
        assert result.stats.bytes_freed == 10
        assert os.path.exists(paths[1]) and os.path.exists(paths[2])

    def test_keyboard_interrupt_keeps_partial_stats(self, tmp_path):
        paths = make_files(tmp_path, {"a.tmp": 10, "b.tmp": 20, "c.tmp": 30})

        def remover(path):
            if path == paths[1]:
                raise KeyboardInterrupt
            os.remove(path)

        result = DeleterImpl(remover).delete(paths)

        assert result.interrupted is True
        assert result.stats.deleted_count == 1
        assert result.stats.bytes_freed == 10
        assert os.path.exists(paths[2])

    def test_directory_and_symlink_never_deleted(self, tmp_path):
        directory = tmp_path / "folder.tmp"
        directory.mkdir()
        target = tmp_path / "target.txt"
        target.write_bytes(b"keep me")
        link = tmp_path / "link.tmp"
        link.symlink_to(target)

        result = DeleterImpl().delete([str(directory), str(link)])

        assert result.stats.deleted_count == 0
        assert result.skipped == [str(directory), str(link)]
        assert directory.exists()
        assert link.is_symlink()

    def test_repeated_path_deleted_once(self, tmp_path):
        paths = make_files(tmp_path, {"a.tmp": 10})

        result = DeleterImpl().delete(paths + paths)

        assert result.stats.deleted_count == 1
        assert result.stats.bytes_freed == 10

    def test_empty_batch(self):
        result = DeleterImpl().delete([])
        assert result.stats.deleted_count == 0
        assert result.stats.bytes_freed == 0

    def test_progress_callback(self, tmp_path):
        paths = make_files(tmp_path, {"a.tmp": 1, "b.tmp": 1})
        events = []

        DeleterImpl().delete(paths, progress_callback=lambda stage, current, total: events.append((stage, current, total)))

        assert events == [("Deleting", 1, 2), ("Deleting", 2, 2)]

    def test_interrupt_in_progress_callback_keeps_partial_stats(self, tmp_path):
        """Ctrl+C landing after a removal still reports that removal."""
        paths = make_files(tmp_path, {"a.tmp": 10, "b.tmp": 20, "c.tmp": 30})

        def progress(stage, current, total):
            if current == 1:
                raise KeyboardInterrupt

        result = DeleterImpl().delete(paths, progress_callback=progress)

        assert result.interrupted is True
        assert result.stats.deleted_count == 1
        assert result.stats.bytes_freed == 10
        assert result.deleted_paths == [paths[0]]
        assert os.path.exists(paths[1]) and os.path.exists(paths[2])
