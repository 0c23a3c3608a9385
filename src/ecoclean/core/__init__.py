"""
Core cleanup engine — scanner, hasher, grouper, resolver and deleter.

This package contains the destructive pipeline of EcoClean:
- FileScannerImpl: recursive traversal of several roots with case-insensitive glob matching
- HasherImpl + algorithm registry: chunked full-content hashing (SHA-256, BLAKE2b, SHA-1, MD5, xxHash128)
- FileGrouperImpl: grouping by content hash, insertion order preserved
- DuplicateResolverImpl: one survivor per group by a deterministic policy
- DeleterImpl: two-phase deletion with exact count and bytes-freed accounting
- Models: FileRecord, OperationStats, DeletionResult and configuration objects

All components are pure Python with no console dependencies — suitable for scripts and tests.
"""

from .scanner import FileScannerImpl
from .grouper import FileGrouperImpl
from .hasher import HasherImpl, HASH_ALGORITHMS, create_algorithm
from .resolver import DuplicateResolverImpl
from .deleter import DeleterImpl
from .models import (
    FileRecord, ExtensionPattern, HashGroups, Resolution, OperationStats, DeletionResult,
    CleanupMode, CleanupParams, SurvivorPolicy, OperationState, DEFAULT_PATTERNS)

__all__ = [
    "FileScannerImpl",
    "FileGrouperImpl",
    "HasherImpl",
    "HASH_ALGORITHMS",
    "create_algorithm",
    "DuplicateResolverImpl",
    "DeleterImpl",
    "FileRecord",
    "ExtensionPattern",
    "HashGroups",
    "Resolution",
    "OperationStats",
    "DeletionResult",
    "CleanupMode",
    "CleanupParams",
    "SurvivorPolicy",
    "OperationState",
    "DEFAULT_PATTERNS",
]
