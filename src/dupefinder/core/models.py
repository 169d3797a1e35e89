"""
Copyright (c) 2025 initumX (initum.x@gmail.com)
Licensed under the MIT License

core/models.py
Data models and domain logic for file scanning and duplicate detection.
"""

import logging
import os
from dataclasses import dataclass, field
from enum import Enum
from typing import Callable, Dict, List, Optional, Tuple, Union

from dupefinder.core.errors import RootNotFoundError
from dupefinder.utils.convert_utils import ConvertUtils

logger = logging.getLogger(__name__)


# =============================
# Enums
# =============================

class HashAlgorithmName(Enum):
    """Digest algorithms available for the partial-hash stage."""
    SHA256 = "sha256"
    XXH64 = "xxh64"

    @property
    def display_name(self) -> str:
        mapping = {
            HashAlgorithmName.SHA256: "SHA-256",
            HashAlgorithmName.XXH64: "xxHash64",
        }
        return mapping.get(self, self.value)

    def __repr__(self) -> str:
        return self.value


class Stage(str, Enum):
    SCAN = "Scanning"
    SIZE = "Size grouping"
    PARTIAL = "Partial Hash"
    FULL = "Full Hash"


class SkipReason(Enum):
    """Why an enumerated entry did not become a candidate."""
    INACCESSIBLE = "inaccessible"
    TOO_SMALL = "too-small"
    SYMLINK = "symlink"
    NOT_REGULAR = "not-regular"


class KeepStrategy(Enum):
    """Which member of a duplicate group survives disposal."""
    NEWEST = "newest"
    OLDEST = "oldest"
    SHORTEST_PATH = "shortest-path"

    @property
    def display_name(self) -> str:
        mapping = {
            KeepStrategy.NEWEST: "Newest",
            KeepStrategy.OLDEST: "Oldest",
            KeepStrategy.SHORTEST_PATH: "Shortest Path",
        }
        return mapping.get(self, self.value)


class DisposalOutcome(Enum):
    SUCCESS = "success"
    NOT_FOUND = "not_found"
    FAILED = "failed"


# ======================
#  Core Data Models
# ======================

@dataclass(frozen=True)
class CandidateFile:
    """
    A regular file eligible for duplicate comparison.
    Captured once at enumeration time and never mutated.
    """
    path: str
    size: int  # in bytes
    last_modified: float = 0.0  # POSIX timestamp

    @property
    def name(self) -> str:
        return os.path.basename(self.path)

    @property
    def directory(self) -> str:
        return os.path.dirname(self.path)

    def __repr__(self):
        return f"<CandidateFile path={self.path}, size={self.size}>"


@dataclass(frozen=True)
class ScanEntry:
    """
    Result of enumerating one filesystem entry: either a candidate file
    or the reason it was skipped. Skips are filtered by the caller, not raised.
    """
    path: str
    file: Optional[CandidateFile] = None
    skip_reason: Optional[SkipReason] = None

    def __post_init__(self):
        if (self.file is None) == (self.skip_reason is None):
            raise ValueError("ScanEntry needs exactly one of 'file' or 'skip_reason'")

    @property
    def ok(self) -> bool:
        return self.file is not None

    @classmethod
    def accepted(cls, file: CandidateFile) -> "ScanEntry":
        return cls(path=file.path, file=file)

    @classmethod
    def skipped(cls, path: str, reason: SkipReason) -> "ScanEntry":
        return cls(path=path, skip_reason=reason)


@dataclass
class SizeBucket:
    """Candidates sharing one exact byte length. Intermediate pipeline state."""
    size: int
    files: List[CandidateFile] = field(default_factory=list)

    def add_file(self, file: CandidateFile) -> None:
        if file.size != self.size:
            raise ValueError("Cannot add file with different size to a bucket.")
        self.files.append(file)

    def __repr__(self):
        return f"<SizeBucket size={self.size}, count={len(self.files)}>"


@dataclass(frozen=True)
class DuplicateGroup:
    """
    A confirmed set of byte-identical files.
    All members share the same size and the same full-content digest.
    """
    digest: str
    size: int
    files: Tuple[CandidateFile, ...]

    def __post_init__(self):
        # Accept any sequence but store an immutable tuple
        object.__setattr__(self, "files", tuple(self.files))
        if len(self.files) < 2:
            raise ValueError("A duplicate group needs at least two files")
        if any(f.size != self.size for f in self.files):
            raise ValueError("All files in a duplicate group must have the group size")

    @property
    def count(self) -> int:
        return len(self.files)

    @property
    def wasted_bytes(self) -> int:
        """Space reclaimable by keeping a single copy."""
        return self.size * (self.count - 1)

    @property
    def total_bytes(self) -> int:
        return self.size * self.count

    @property
    def paths(self) -> List[str]:
        return [f.path for f in self.files]

    def __repr__(self):
        return f"<DuplicateGroup size={self.size}, count={self.count}, digest={self.digest[:12]}>"


class DeduplicationStats:
    """
    Statistics collected during one scan.
    """
    def __init__(self):
        self.total_time: float = 0.0
        self.files_scanned: int = 0
        self.skipped_files: int = 0
        self.groups_emitted: int = 0
        self.stage_stats: Dict[str, Dict[str, Union[int, float]]] = {}
        self._listeners: List[Callable[[str, Dict], None]] = []

    def add_listener(self, listener: Callable[[str, Dict], None]):
        """Adds a listener to receive updates when stats are updated."""
        self._listeners.append(listener)

    def update_stage(
            self,
            stage_name: str,
            groups_found: int,
            files_processed: int,
            duration: float
    ) -> None:
        if stage_name not in self.stage_stats:
            self.stage_stats[stage_name] = {
                "groups": 0,
                "files": 0,
                "time": 0.0
            }
        self.stage_stats[stage_name]["groups"] += groups_found
        self.stage_stats[stage_name]["files"] += files_processed
        self.stage_stats[stage_name]["time"] += duration

        for listener in self._listeners:
            try:
                listener(stage_name, self.stage_stats[stage_name])
            except Exception as e:
                logger.warning(f"Error in stats listener: {e}")

    def print_summary(self) -> str:
        labels = {
            Stage.SIZE.value: "Size Groups",
            Stage.PARTIAL.value: "Partial Hash Groups",
            Stage.FULL.value: "Confirmed Duplicate Groups",
        }

        lines = [
            "Deduplication Statistics:",
            f"Total Execution Time: {self.total_time:.3f}s",
            f"Files scanned: {self.files_scanned} (skipped: {self.skipped_files})\n",
            "Stage: GROUPS / FILES / TIME"
        ]

        for stage, data in self.stage_stats.items():
            label = labels.get(stage, stage.title())
            lines.append(f"{label}: {data['groups']} / {data['files']} / {data['time']:.3f}s")

        return "\n".join(lines)


# ======================
#  Config & Parameters
# ======================

class DeduplicationConfig:
    PARTIAL_HASH_BYTES = 4096        # Prefix length hashed by the partial stage
    FULL_HASH_BUFFER_SIZE = 81920    # Read size for incremental full hashing
    DEFAULT_MIN_SIZE_BYTES = 1024    # Smaller files are not worth reclaiming


@dataclass
class ScanParams:
    """Parameters for one scan session with validation."""
    root_dir: str
    min_size_bytes: int = DeduplicationConfig.DEFAULT_MIN_SIZE_BYTES
    partial_hash_algorithm: HashAlgorithmName = HashAlgorithmName.SHA256

    def __post_init__(self):
        """Validate parameters immediately after creation."""
        if not self.root_dir:
            raise RootNotFoundError(self.root_dir)

        if self.min_size_bytes < 0:
            raise ValueError("Minimum size cannot be negative")

        if isinstance(self.partial_hash_algorithm, str):
            self.partial_hash_algorithm = HashAlgorithmName(self.partial_hash_algorithm.lower())

    @staticmethod
    def from_human_readable(
            root_dir: str,
            min_size_str: str = "1KB",
            partial_hash_algorithm: Union[str, HashAlgorithmName] = HashAlgorithmName.SHA256,
    ) -> 'ScanParams':
        """
        Factory method to create params from human-readable inputs.
        Useful for CLI argument parsing.
        """
        return ScanParams(
            root_dir=root_dir,
            min_size_bytes=ConvertUtils.human_to_bytes(min_size_str),
            partial_hash_algorithm=partial_hash_algorithm,
        )
