"""
Copyright (c) 2025 initumX (initum.x@gmail.com)
Licensed under the MIT License

hasher.py
Implements content hashing with pluggable hash algorithms.

HasherImpl reads files in fixed-size chunks so that large files are never held in
memory, and caches the hex digest on the FileRecord. The algorithm is chosen once
at startup through create_algorithm().
"""

import hashlib
import logging
from typing import Dict, Optional, Type

import xxhash

from ecoclean.core.models import FileRecord
from ecoclean.core.interfaces import Hasher, HashAlgorithm

logger = logging.getLogger(__name__)

DEFAULT_CHUNK_SIZE = 64 * 1024


# Use the same way to implement and use any other hashing algorithm
class Sha256AlgorithmImpl(HashAlgorithm):
    name = "sha256"

    @staticmethod
    def new():
        return hashlib.sha256()


class Blake2bAlgorithmImpl(HashAlgorithm):
    name = "blake2b"

    @staticmethod
    def new():
        return hashlib.blake2b()


class Sha1AlgorithmImpl(HashAlgorithm):
    name = "sha1"

    @staticmethod
    def new():
        return hashlib.sha1()


class Md5AlgorithmImpl(HashAlgorithm):
    """Legacy 128-bit digest, matches `md5sum` output of older cleanup scripts."""
    name = "md5"

    @staticmethod
    def new():
        return hashlib.md5()


class XXHash128AlgorithmImpl(HashAlgorithm):
    """Fast non-cryptographic 128-bit hash. Trades collision resistance for speed."""
    name = "xxh128"

    @staticmethod
    def new():
        return xxhash.xxh3_128()


HASH_ALGORITHMS: Dict[str, Type[HashAlgorithm]] = {
    Sha256AlgorithmImpl.name: Sha256AlgorithmImpl,
    Blake2bAlgorithmImpl.name: Blake2bAlgorithmImpl,
    Sha1AlgorithmImpl.name: Sha1AlgorithmImpl,
    Md5AlgorithmImpl.name: Md5AlgorithmImpl,
    XXHash128AlgorithmImpl.name: XXHash128AlgorithmImpl,
}


def create_algorithm(name: str) -> HashAlgorithm:
    """Returns the algorithm registered under `name` (case-insensitive)."""
    try:
        return HASH_ALGORITHMS[name.strip().lower()]()
    except KeyError:
        raise ValueError(
            f"Unknown hash algorithm: '{name}'. Valid options: {', '.join(HASH_ALGORITHMS)}"
        ) from None


class HasherImpl(Hasher):
    """
    A hasher implementation that supports any algorithm via the HashAlgorithm interface.
    Computes and caches the full content hash of a file.
    """

    def __init__(self, algorithm: Optional[HashAlgorithm] = None, chunk_size: int = DEFAULT_CHUNK_SIZE):
        if chunk_size <= 0:
            raise ValueError("Chunk size must be positive")
        self.algorithm = algorithm or Sha256AlgorithmImpl()
        self.chunk_size = chunk_size

    def compute_full_hash(self, record: FileRecord) -> Optional[str]:
        """
        Hashes the whole file in chunks.
        Returns None if the file vanished, is no longer a regular file, or cannot be read.
        """
        if record.content_hash is not None:
            return record.content_hash

        if not record.is_regular_file():
            logger.debug(f"File vanished before hashing: {record.path}")
            return None

        digest = self.algorithm.new()
        try:
            with open(record.path, 'rb') as f:
                while True:
                    chunk = f.read(self.chunk_size)
                    if not chunk:
                        break
                    digest.update(chunk)
        except FileNotFoundError:
            logger.debug(f"File vanished while hashing: {record.path}")
            return None
        except OSError as e:
            logger.warning(f"Error reading content of {record.path}: {e}")
            return None

        record.content_hash = digest.hexdigest()
        return record.content_hash
