"""
Copyright (c) 2025 initumX (initum.x@gmail.com)
Licensed under the MIT License

interfaces.py

Defines core interfaces (Protocols) used throughout the duplicate scan engine.
These protocols enforce structural typing using Python's `typing.Protocol` so
hashing, scanning and grouping stay pluggable and easy to fake in tests.

Key Components:
---------------
- HashAlgorithm: Factory for incremental hash objects (SHA-256, xxHash64, ...).
- Hasher: Computes partial (prefix) and full digests of a file.
- FileScanner: Lazily enumerates candidate files under a root directory.
- FileGrouper: Groups candidates by size or digest.
- Deduplicator: Streams confirmed duplicate groups.
"""

from typing import Any, Callable, Dict, Iterator, List, Optional, Protocol

from dupefinder.core.models import CandidateFile, DuplicateGroup, ScanEntry, ScanParams


StoppedFlag = Optional[Callable[[], bool]]
ProgressCallback = Optional[Callable[[str, int, Optional[int]], None]]


class IncrementalHash(Protocol):
    """The subset of the hashlib object API the engine relies on."""
    def update(self, data: bytes) -> None: ...
    def hexdigest(self) -> str: ...


class HashAlgorithm(Protocol):
    """
    Interface for hash algorithms.

    Allows plugging in different hashing functions like SHA-256 or xxHash
    without affecting the rest of the detection logic.
    """
    name: str

    def new(self) -> IncrementalHash:
        """Returns a fresh incremental hash object."""
        ...


class Hasher(Protocol):
    """Interface for hashing files. Raises OSError when a file cannot be read."""
    def compute_partial_hash(self, file: CandidateFile) -> str: ...
    def compute_full_hash(self, file: CandidateFile) -> str: ...


class FileScanner(Protocol):
    def iter_entries(self, stopped_flag: StoppedFlag = None) -> Iterator[ScanEntry]:
        """
        Lazily enumerate every file under the configured root.

        Args:
            stopped_flag: Function that returns True if enumeration should stop.

        Yields:
            One ScanEntry per file, accepted or skipped.
        """
        ...


class FileGrouper(Protocol):
    """
    Interface for grouping files based on size or content digests.
    Only groups of two or more files are returned.
    """
    def group_by_size(self, files: List[CandidateFile]) -> Dict[int, List[CandidateFile]]: ...

    def group_by_partial_hash(
        self, files: List[CandidateFile], stopped_flag: StoppedFlag = None
    ) -> Dict[Any, List[CandidateFile]]: ...

    def group_by_full_hash(
        self, files: List[CandidateFile], stopped_flag: StoppedFlag = None
    ) -> Dict[Any, List[CandidateFile]]: ...


class Deduplicator(Protocol):
    def scan(
        self,
        params: ScanParams,
        stopped_flag: StoppedFlag = None,
        progress_callback: ProgressCallback = None
    ) -> Iterator[DuplicateGroup]:
        """
        Run the detection pipeline over params.root_dir.

        Returns:
            A lazy iterator yielding each duplicate group as soon as it is confirmed.

        Raises:
            RootNotFoundError: immediately, if the root is not an existing directory.
        """
        ...
