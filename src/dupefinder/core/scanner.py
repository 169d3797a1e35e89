"""
Copyright (c) 2025 initumX (initum.x@gmail.com)
Licensed under the MIT License

core/scanner.py
Implements lazy recursive file enumeration.
Features:
- Walks the tree once with os.walk, in sorted order so results are repeatable
- Yields a ScanEntry per file: either a CandidateFile or a SkipReason
- Unreadable directories and files are skipped individually, never abort the walk
- Checks the cancellation flag before every directory and every file
"""

import logging
import os
import stat
import time
from pathlib import Path
from typing import Callable, Iterator, List, Optional

from dupefinder.core.errors import RootNotFoundError, ScanCancelled
from dupefinder.core.interfaces import FileScanner
from dupefinder.core.models import CandidateFile, DeduplicationConfig, ScanEntry, SkipReason

logger = logging.getLogger(__name__)


class FileScannerImpl(FileScanner):
    """
    Scans a directory tree recursively and filters files by minimum size.

    Attributes:
        root_dir: Root directory to scan
        min_size: Minimum file size in bytes; smaller files are skipped
        inaccessible_dirs: Directories that could not be listed during the last walk
    """

    def __init__(self, root_dir: str, min_size: int = DeduplicationConfig.DEFAULT_MIN_SIZE_BYTES):
        self.root_dir = root_dir
        self.min_size = min_size
        self.inaccessible_dirs: List[str] = []

    def validate_root(self) -> Path:
        """Raises RootNotFoundError unless the root is an existing directory."""
        root_path = Path(self.root_dir)
        if not root_path.is_dir():
            logger.error(f"Directory does not exist: {self.root_dir}")
            raise RootNotFoundError(self.root_dir)
        return root_path

    def iter_entries(self, stopped_flag: Optional[Callable[[], bool]] = None) -> Iterator[ScanEntry]:
        """
        Yields one ScanEntry per file found under the root.

        Raises:
            RootNotFoundError: if the root is missing (before anything is yielded)
            ScanCancelled: when stopped_flag returns True
        """
        root_path = self.validate_root()
        self.inaccessible_dirs = []

        logger.debug(f"Scanning directory: {root_path} (min_size={self.min_size})")
        start_time = time.time()

        for root, dirs, files in os.walk(str(root_path), onerror=self._on_walk_error):
            if stopped_flag and stopped_flag():
                logger.debug("Scan interrupted by user")
                raise ScanCancelled()

            # Sorting in place also fixes the order os.walk descends in
            dirs.sort()

            for filename in sorted(files):
                if stopped_flag and stopped_flag():
                    logger.debug("Scan interrupted by user")
                    raise ScanCancelled()
                yield self._process_file(os.path.join(root, filename))

        logger.debug(f"Total scan time: {time.time() - start_time:.2f} seconds")

    def scan(self, stopped_flag: Optional[Callable[[], bool]] = None) -> List[CandidateFile]:
        """Returns all accepted candidate files as a list."""
        return [entry.file for entry in self.iter_entries(stopped_flag) if entry.ok]

    def _on_walk_error(self, error: OSError) -> None:
        path = error.filename or "<unknown>"
        logger.debug(f"Skipping inaccessible directory: {path} ({error.strerror})")
        self.inaccessible_dirs.append(str(path))

    def _process_file(self, path: str) -> ScanEntry:
        """
        Turns a single path into a ScanEntry.
        Args:
            path: Full path of the file as reported by os.walk
        Returns:
            ScanEntry holding either a CandidateFile or the reason it was skipped
        """
        try:
            stat_result = os.lstat(path)
        except OSError as e:
            logger.debug(f"Could not stat {path}: {e}")
            return ScanEntry.skipped(path, SkipReason.INACCESSIBLE)

        if stat.S_ISLNK(stat_result.st_mode):
            logger.debug(f"Skipping symbolic link: {path}")
            return ScanEntry.skipped(path, SkipReason.SYMLINK)

        if not stat.S_ISREG(stat_result.st_mode):
            logger.debug(f"Skipping non-regular file: {path}")
            return ScanEntry.skipped(path, SkipReason.NOT_REGULAR)

        size = stat_result.st_size
        if size < self.min_size:
            return ScanEntry.skipped(path, SkipReason.TOO_SMALL)

        return ScanEntry.accepted(CandidateFile(
            path=path,
            size=size,
            last_modified=stat_result.st_mtime,
        ))
