"""
Copyright (c) 2025 initumX (initum.x@gmail.com)
Licensed under the MIT License

deduplicator.py
Implements the streaming duplicate scan:
    scan → size buckets → partial hash → full hash → yield group

Confirmed groups are yielded as soon as they are resolved, so a caller can act
on the first results while the rest of the tree is still being hashed.
"""
import logging
import threading
import time
from typing import Callable, Iterator, Optional, Union

from dupefinder.core.errors import ScanCancelled
from dupefinder.core.grouper import FileGrouperImpl
from dupefinder.core.hasher import HasherImpl, algorithm_for
from dupefinder.core.interfaces import Deduplicator
from dupefinder.core.models import (
    DeduplicationConfig, DeduplicationStats, DuplicateGroup, ScanParams, SkipReason, Stage)
from dupefinder.core.scanner import FileScannerImpl
from dupefinder.core.stages import FullHashStage, PartialHashStage, SizeStageImpl

logger = logging.getLogger(__name__)

Cancellation = Union[threading.Event, Callable[[], bool], None]


# =============================
# Main Deduplicator Class
# =============================
class DeduplicatorImpl(Deduplicator):
    """
    Implements multi-stage duplicate detection as a lazy pipeline.
    Each call to scan() builds its own scanner, grouper and stats, so
    concurrent scans never share state.

    Attributes:
        stats: statistics of the most recent scan started by this instance
    """
    def __init__(self, grouper_factory: Callable[[ScanParams], FileGrouperImpl] = None):
        self._grouper_factory = grouper_factory or self._default_grouper
        self.stats = DeduplicationStats()

    @staticmethod
    def _default_grouper(params: ScanParams) -> FileGrouperImpl:
        hasher = HasherImpl(partial_algorithm=algorithm_for(params.partial_hash_algorithm))
        return FileGrouperImpl(hasher)

    def scan(
        self,
        params: ScanParams,
        stopped_flag: Optional[Callable[[], bool]] = None,
        progress_callback: Optional[Callable[[str, int, Optional[int]], None]] = None
    ) -> Iterator[DuplicateGroup]:
        """
        Start a scan of params.root_dir.
        Args:
            params: validated scan parameters
            stopped_flag: returns True when the scan should stop
            progress_callback: (stage, current, total) progress reports
        Returns:
            Lazy iterator of confirmed DuplicateGroups
        Raises:
            RootNotFoundError: right away, before any iteration
        """
        scanner = FileScannerImpl(root_dir=params.root_dir, min_size=params.min_size_bytes)
        scanner.validate_root()

        stats = DeduplicationStats()
        self.stats = stats
        grouper = self._grouper_factory(params)
        return self._run(scanner, grouper, stats, stopped_flag, progress_callback)

    def _run(
        self,
        scanner: FileScannerImpl,
        grouper: FileGrouperImpl,
        stats: DeduplicationStats,
        stopped_flag: Optional[Callable[[], bool]],
        progress_callback: Optional[Callable[[str, int, Optional[int]], None]]
    ) -> Iterator[DuplicateGroup]:
        total_start_time = time.time()
        try:
            yield from self._pipeline(scanner, grouper, stats, stopped_flag, progress_callback)
        except ScanCancelled:
            logger.debug("Scan cancelled, discarding in-flight groups")
        finally:
            stats.skipped_files += grouper.skipped_files
            stats.total_time = time.time() - total_start_time

    @staticmethod
    def _pipeline(
        scanner: FileScannerImpl,
        grouper: FileGrouperImpl,
        stats: DeduplicationStats,
        stopped_flag: Optional[Callable[[], bool]],
        progress_callback: Optional[Callable[[str, int, Optional[int]], None]]
    ) -> Iterator[DuplicateGroup]:
        # Stage 1: enumerate and bucket by size
        start_time = time.time()
        candidates = []
        for entry in scanner.iter_entries(stopped_flag):
            stats.files_scanned += 1
            if entry.ok:
                candidates.append(entry.file)
            elif entry.skip_reason is SkipReason.INACCESSIBLE:
                stats.skipped_files += 1
        if progress_callback:
            progress_callback(Stage.SCAN.value, stats.files_scanned, None)

        buckets = SizeStageImpl(grouper).process(candidates)
        stats.update_stage(
            Stage.SIZE.value,
            groups_found=len(buckets),
            files_processed=len(candidates),
            duration=time.time() - start_time
        )
        logger.debug(f"{len(buckets)} size buckets from {len(candidates)} candidates")

        # Stages 2 & 3, one bucket at a time
        partial_stage = PartialHashStage(grouper)
        full_stage = FullHashStage(grouper)
        total_files = sum(len(b.files) for b in buckets)
        processed_files = 0

        for bucket in buckets:
            start_time = time.time()
            partial_groups = partial_stage.process(bucket, stopped_flag=stopped_flag)
            stats.update_stage(
                partial_stage.get_stage_name(),
                groups_found=len(partial_groups),
                files_processed=len(bucket.files),
                duration=time.time() - start_time
            )

            for partial_group in partial_groups:
                start_time = time.time()
                confirmed = list(full_stage.process(partial_group, stopped_flag=stopped_flag))
                stats.update_stage(
                    full_stage.get_stage_name(),
                    groups_found=len(confirmed),
                    files_processed=len(partial_group.files),
                    duration=time.time() - start_time
                )
                for group in confirmed:
                    if stopped_flag and stopped_flag():
                        raise ScanCancelled()
                    stats.groups_emitted += 1
                    yield group

            processed_files += len(bucket.files)
            if progress_callback:
                progress_callback(full_stage.get_stage_name(), processed_files, total_files)


def _as_stopped_flag(cancellation: Cancellation) -> Optional[Callable[[], bool]]:
    if cancellation is None:
        return None
    if hasattr(cancellation, "is_set"):
        return cancellation.is_set
    if callable(cancellation):
        return cancellation
    raise TypeError("cancellation must be a threading.Event, a callable or None")


def scan(
    root_path: str,
    min_size_bytes: int = DeduplicationConfig.DEFAULT_MIN_SIZE_BYTES,
    cancellation: Cancellation = None,
) -> Iterator[DuplicateGroup]:
    """
    Scan root_path and lazily yield every group of byte-identical files.

    The iterator is forward-only; start a new scan to walk the tree again.
    Setting the cancellation event (or having the callable return True) ends
    iteration cleanly at the next file boundary.

    Raises:
        RootNotFoundError: immediately, if root_path is not an existing directory.
    """
    params = ScanParams(root_dir=root_path, min_size_bytes=min_size_bytes)
    return DeduplicatorImpl().scan(params, stopped_flag=_as_stopped_flag(cancellation))
