"""
Copyright (c) 2025 initumX (initum.x@gmail.com)
Licensed under the MIT License

core/grouper.py
Implements file grouping strategies using CandidateFile objects and a Hasher.
"""

import logging
from collections import defaultdict
from typing import Any, Callable, Dict, List, Optional

from dupefinder.core.errors import ScanCancelled
from dupefinder.core.hasher import HasherImpl
from dupefinder.core.interfaces import FileGrouper, Hasher
from dupefinder.core.models import CandidateFile

logger = logging.getLogger(__name__)


class FileGrouperImpl(FileGrouper):
    """
    A concrete implementation of FileGrouper.
    Uses an injected Hasher instance for flexibility and testability.

    Files whose key cannot be computed (OSError while reading) are dropped from
    the result individually and counted in `skipped_files`.
    """

    def __init__(self, hasher: Hasher = None):
        self.hasher = hasher or HasherImpl()
        self.skipped_files = 0

    def group_by_size(self, files: List[CandidateFile]) -> Dict[int, List[CandidateFile]]:
        """Groups files by their size."""
        return self._group_by(files, lambda f: f.size)

    def group_by_partial_hash(
        self, files: List[CandidateFile], stopped_flag: Optional[Callable[[], bool]] = None
    ) -> Dict[str, List[CandidateFile]]:
        """Groups files by the digest of their leading bytes."""
        return self._group_by(files, self.hasher.compute_partial_hash, stopped_flag)

    def group_by_full_hash(
        self, files: List[CandidateFile], stopped_flag: Optional[Callable[[], bool]] = None
    ) -> Dict[str, List[CandidateFile]]:
        """Groups files by full content digest."""
        return self._group_by(files, self.hasher.compute_full_hash, stopped_flag)

    def _group_by(
        self,
        files: List[CandidateFile],
        key_func: Callable[[CandidateFile], Any],
        stopped_flag: Optional[Callable[[], bool]] = None
    ) -> Dict[Any, List[CandidateFile]]:
        """
        Helper method to group files by any computed key.
        Args:
            files: List of files to group
            key_func: Function that computes a hashable key from a CandidateFile
            stopped_flag: Checked before each file; raises ScanCancelled when set
        Returns:
            Dict[key, List[CandidateFile]] holding only keys shared by 2+ files,
            in first-seen order
        """
        groups = defaultdict(list)
        skipped_files = 0
        for file in files:
            if stopped_flag and stopped_flag():
                raise ScanCancelled()
            try:
                key = key_func(file)
            except OSError as e:
                logger.warning(f"Skipping {file.path}: {e}")
                skipped_files += 1
                continue
            groups[key].append(file)

        if skipped_files > 0:
            logger.debug(f"Skipped {skipped_files} files due to read errors")
            self.skipped_files += skipped_files

        return {key: group for key, group in groups.items() if len(group) >= 2}
