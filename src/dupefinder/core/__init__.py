"""
Core duplicate detection engine — scanner, hasher, grouper, stages and the streaming scan.

This package contains the foundation of dupefinder:
- FileScannerImpl: lazy recursive traversal yielding ScanEntry results
- HasherImpl: SHA-256 (or xxHash64) partial digests, SHA-256 full digests
- FileGrouperImpl: size and digest grouping with per-file error containment
- DeduplicatorImpl / scan(): size → partial hash → full hash, yielding groups as confirmed
- Models: CandidateFile, DuplicateGroup, ScanParams and friends

All components are pure Python with no UI dependencies.
"""

from .errors import (
    DupeFinderError, RootNotFoundError, ScanCancelled,
    DisposalError, DisposalNotFoundError, DisposalFailedError)
from .models import (
    CandidateFile, DuplicateGroup, SizeBucket, ScanEntry, SkipReason, ScanParams,
    DeduplicationConfig, DeduplicationStats, HashAlgorithmName, KeepStrategy, DisposalOutcome)
from .scanner import FileScannerImpl
from .hasher import HasherImpl, Sha256AlgorithmImpl, XXHashAlgorithmImpl
from .grouper import FileGrouperImpl
from .deduplicator import DeduplicatorImpl, scan

__all__ = [
    "DupeFinderError",
    "RootNotFoundError",
    "ScanCancelled",
    "DisposalError",
    "DisposalNotFoundError",
    "DisposalFailedError",
    "CandidateFile",
    "DuplicateGroup",
    "SizeBucket",
    "ScanEntry",
    "SkipReason",
    "ScanParams",
    "DeduplicationConfig",
    "DeduplicationStats",
    "HashAlgorithmName",
    "KeepStrategy",
    "DisposalOutcome",
    "FileScannerImpl",
    "HasherImpl",
    "Sha256AlgorithmImpl",
    "XXHashAlgorithmImpl",
    "FileGrouperImpl",
    "DeduplicatorImpl",
    "scan",
]
