"""
EcoClean — temporary file and duplicate cleaner.

Core features:
- Recursive scan of one or more directories for files matching patterns such as *.tmp, *.log, *.bak
- Duplicate detection by full content hash (SHA-256 by default, MD5/BLAKE2b/SHA-1/xxHash128 available)
- One survivor per duplicate group, chosen by a configurable policy
- Deletion with exact accounting (files and bytes freed) and an append-only report log
- Interactive menu with confirmation before every destructive action
"""

# Get version
try:
    from importlib.metadata import version as _version
    __version__ = _version("ecoclean")
except Exception:
    try:
        import tomllib  # Python 3.11+
    except ImportError:
        import tomli as tomllib  # Python < 3.11: pip install tomli
    from pathlib import Path as _Path

    with open(_Path(__file__).resolve().parents[2] / "pyproject.toml", "rb") as f:
        __version__ = tomllib.load(f)["project"]["version"]

# Public API — only what users should import directly
from ecoclean.commands import CleanupCommand, CleanupPlan, CleanupReport, ScriptedConfirmer
from ecoclean.core import (
    CleanupMode, CleanupParams, DeletionResult, FileRecord, OperationState,
    OperationStats, SurvivorPolicy)
from ecoclean.config import CleanupConfig, load_config
from ecoclean.services import FileService, ReportLogger

__all__ = [
    "CleanupCommand",
    "CleanupPlan",
    "CleanupReport",
    "ScriptedConfirmer",
    "CleanupMode",
    "CleanupParams",
    "DeletionResult",
    "FileRecord",
    "OperationState",
    "OperationStats",
    "SurvivorPolicy",
    "CleanupConfig",
    "load_config",
    "FileService",
    "ReportLogger",
    "__version__",
]
