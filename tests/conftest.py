"""
Shared fixtures for cleanup tests.
Creates isolated temporary directories with controlled test files.
"""
import pytest
import tempfile
from pathlib import Path
from typing import Dict
import sys

# Add src/ to sys.path so 'ecoclean' is importable without installation
project_root = Path(__file__).parent.parent
sys.path.insert(0, str(project_root / "src"))


@pytest.fixture
def temp_dir():
    """Creates isolated temporary directory, auto-cleanup after test."""
    with tempfile.TemporaryDirectory() as tmpdir:
        yield Path(tmpdir)


@pytest.fixture
def test_files(temp_dir) -> Dict[str, Path]:
    """
    Creates controlled test files for cleanup scenarios:
    - 3 temp files with identical content (a.tmp, b.log, c.bak)
    - 1 temp file with unique content (x.tmp)
    - 1 non-matching file (y.txt)
    - 1 upper-case extension (UPPER.TMP)
    - 1 temp file in a subdirectory, same content as a.tmp
    """
    files = {}

    content = b"identical temporary content\n" * 10
    files["a"] = temp_dir / "a.tmp"
    files["b"] = temp_dir / "b.log"
    files["c"] = temp_dir / "c.bak"
    for key in ("a", "b", "c"):
        files[key].write_bytes(content)

    files["unique"] = temp_dir / "x.tmp"
    files["unique"].write_bytes(b"unique content")

    files["other"] = temp_dir / "y.txt"
    files["other"].write_bytes(content)

    files["upper"] = temp_dir / "UPPER.TMP"
    files["upper"].write_bytes(b"upper case extension")

    subdir = temp_dir / "subdir"
    subdir.mkdir()
    files["sub_dup"] = subdir / "nested.tmp"
    files["sub_dup"].write_bytes(content)

    return files


@pytest.fixture
def duplicate_content() -> bytes:
    return b"identical temporary content\n" * 10
