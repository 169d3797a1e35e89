"""
Copyright (c) 2025 initumX (initum.x@gmail.com)
Licensed under the MIT License

core/stages.py
Pipeline stages of the duplicate detection engine.

CLASS HIERARCHY
---------------
SizeStageImpl     : Buckets candidates by exact byte length
PartialHashStage  : Splits a size bucket by the digest of its first 4 KiB
FullHashStage     : Splits a partial group by full content digest and yields
                    confirmed DuplicateGroups

STAGE CONTRACTS
---------------
  • Every stage only sees what the previous stage forwarded
  • Groups with fewer than two members are dropped at every stage
  • A file that cannot be read is dropped on its own; its siblings carry on
  • Cancellation is checked before each file is opened (ScanCancelled)
  • FullHashStage only yields a group once all its members are hashed
"""

import logging
from typing import Callable, Iterator, List, Optional

from dupefinder.core.grouper import FileGrouperImpl
from dupefinder.core.models import CandidateFile, DuplicateGroup, SizeBucket, Stage

logger = logging.getLogger(__name__)

__all__ = ["SizeStageImpl", "PartialHashStage", "FullHashStage"]


class SizeStageImpl:
    def __init__(self, grouper: FileGrouperImpl):
        self.grouper = grouper

    def process(self, files: List[CandidateFile]) -> List[SizeBucket]:
        """
        Group by file size.
        Returns buckets of 2+ files of the same size, in first-seen order.
        """
        size_groups = self.grouper.group_by_size(files)
        return [SizeBucket(size=size, files=files_list) for size, files_list in size_groups.items()]


class PartialHashStage:
    def __init__(self, grouper: FileGrouperImpl):
        self.grouper = grouper

    def get_stage_name(self) -> str:
        return Stage.PARTIAL.value

    def process(
        self,
        bucket: SizeBucket,
        stopped_flag: Optional[Callable[[], bool]] = None
    ) -> List[SizeBucket]:
        """Returns sub-buckets of files whose leading bytes hash the same."""
        hash_groups = self.grouper.group_by_partial_hash(bucket.files, stopped_flag=stopped_flag)
        return [SizeBucket(size=bucket.size, files=files) for files in hash_groups.values()]


class FullHashStage:
    def __init__(self, grouper: FileGrouperImpl):
        self.grouper = grouper

    def get_stage_name(self) -> str:
        return Stage.FULL.value

    def process(
        self,
        bucket: SizeBucket,
        stopped_flag: Optional[Callable[[], bool]] = None
    ) -> Iterator[DuplicateGroup]:
        """Yields every confirmed duplicate group found in the bucket."""
        # Hash every member before yielding anything: groups are never partial
        hash_groups = self.grouper.group_by_full_hash(bucket.files, stopped_flag=stopped_flag)
        for digest, files in hash_groups.items():
            logger.debug(f"Confirmed {len(files)} duplicates of {bucket.size} bytes ({digest[:12]})")
            yield DuplicateGroup(digest=digest, size=bucket.size, files=files)
