"""
Copyright (c) 2025 initumX (initum.x@gmail.com)
Licensed under the MIT License

hasher.py
Implements file hashing utilities using CandidateFile and pluggable hash algorithms.

HasherImpl computes two digests per file:
- partial: over the first PARTIAL_HASH_BYTES bytes (a cheap filter)
- full: over the entire content, streamed in FULL_HASH_BUFFER_SIZE reads

Each call opens, reads and closes the file. Read errors propagate as OSError;
the grouper decides what to do with them.
"""

import hashlib
from typing import Dict, Type

import xxhash

from dupefinder.core.interfaces import HashAlgorithm, Hasher, IncrementalHash
from dupefinder.core.models import CandidateFile, DeduplicationConfig, HashAlgorithmName


# Use the same way to implement and use any other hashing algorithm
class Sha256AlgorithmImpl(HashAlgorithm):
    name = "sha256"

    def new(self) -> IncrementalHash:
        return hashlib.sha256()


class XXHashAlgorithmImpl(HashAlgorithm):
    name = "xxh64"

    def new(self) -> IncrementalHash:
        return xxhash.xxh64()


ALGORITHMS: Dict[HashAlgorithmName, Type[HashAlgorithm]] = {
    HashAlgorithmName.SHA256: Sha256AlgorithmImpl,
    HashAlgorithmName.XXH64: XXHashAlgorithmImpl,
}


def algorithm_for(name: HashAlgorithmName) -> HashAlgorithm:
    """Returns an algorithm instance for the given name."""
    try:
        return ALGORITHMS[name]()
    except KeyError:
        raise ValueError(f"Unsupported hash algorithm: {name!r}")


class HasherImpl(Hasher):
    """
    A hasher implementation that supports any algorithm via the HashAlgorithm interface.

    The full digest always uses `full_algorithm` (SHA-256 by default); it is the
    content address of a duplicate group. The partial digest may use a faster,
    non-cryptographic algorithm because a full digest always confirms it.
    """

    def __init__(
        self,
        partial_algorithm: HashAlgorithm = None,
        full_algorithm: HashAlgorithm = None,
        partial_bytes: int = DeduplicationConfig.PARTIAL_HASH_BYTES,
        buffer_size: int = DeduplicationConfig.FULL_HASH_BUFFER_SIZE,
    ):
        if partial_bytes <= 0 or buffer_size <= 0:
            raise ValueError("partial_bytes and buffer_size must be positive")
        self.partial_algorithm = partial_algorithm or Sha256AlgorithmImpl()
        self.full_algorithm = full_algorithm or Sha256AlgorithmImpl()
        self.partial_bytes = partial_bytes
        self.buffer_size = buffer_size

    def compute_partial_hash(self, file: CandidateFile) -> str:
        """Hash of the first min(size, partial_bytes) bytes of a file."""
        hasher = self.partial_algorithm.new()
        with open(file.path, "rb") as f:
            hasher.update(f.read(self.partial_bytes))
        return hasher.hexdigest()

    def compute_full_hash(self, file: CandidateFile) -> str:
        """Hash of the whole file, read incrementally."""
        hasher = self.full_algorithm.new()
        with open(file.path, "rb") as f:
            for chunk in iter(lambda: f.read(self.buffer_size), b""):
                hasher.update(chunk)
        return hasher.hexdigest()
