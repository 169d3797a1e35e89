"""
Unit tests for data models: immutability, group invariants and parameter validation.
"""
import dataclasses

import pytest

from dupefinder.core.errors import RootNotFoundError
from dupefinder.core.models import (
    CandidateFile, DeduplicationConfig, DeduplicationStats, DuplicateGroup,
    HashAlgorithmName, ScanEntry, ScanParams, SizeBucket, SkipReason)


class TestCandidateFile:
    def test_is_immutable(self):
        file = CandidateFile(path="/data/a.txt", size=10, last_modified=1.0)
        with pytest.raises(dataclasses.FrozenInstanceError):
            file.size = 20

    def test_name_and_directory(self):
        file = CandidateFile(path="/data/photos/a.jpg", size=10)
        assert file.name == "a.jpg"
        assert file.directory == "/data/photos"


class TestDuplicateGroup:
    def test_requires_two_members(self):
        with pytest.raises(ValueError, match="at least two"):
            DuplicateGroup(digest="ab", size=10, files=[CandidateFile(path="/a", size=10)])

    def test_rejects_mixed_sizes(self):
        with pytest.raises(ValueError):
            DuplicateGroup(digest="ab", size=10, files=[
                CandidateFile(path="/a", size=10),
                CandidateFile(path="/b", size=11),
            ])

    def test_members_stored_as_tuple(self):
        members = [CandidateFile(path="/a", size=10), CandidateFile(path="/b", size=10)]
        group = DuplicateGroup(digest="ab", size=10, files=members)
        members.append(CandidateFile(path="/c", size=10))
        assert isinstance(group.files, tuple)
        assert group.count == 2

    def test_wasted_and_total_bytes(self):
        group = DuplicateGroup(digest="ab", size=5000, files=[
            CandidateFile(path=f"/{n}", size=5000) for n in "abc"
        ])
        assert group.wasted_bytes == 10000
        assert group.total_bytes == 15000
        assert group.paths == ["/a", "/b", "/c"]


class TestSizeBucket:
    def test_add_file_with_other_size_fails(self):
        bucket = SizeBucket(size=10)
        bucket.add_file(CandidateFile(path="/a", size=10))
        with pytest.raises(ValueError):
            bucket.add_file(CandidateFile(path="/b", size=11))
        assert len(bucket.files) == 1


class TestScanEntry:
    def test_accepted_entry(self):
        file = CandidateFile(path="/a", size=10)
        entry = ScanEntry.accepted(file)
        assert entry.ok
        assert entry.path == "/a"
        assert entry.skip_reason is None

    def test_skipped_entry(self):
        entry = ScanEntry.skipped("/a", SkipReason.INACCESSIBLE)
        assert not entry.ok
        assert entry.file is None

    def test_needs_exactly_one_outcome(self):
        with pytest.raises(ValueError):
            ScanEntry(path="/a")
        with pytest.raises(ValueError):
            ScanEntry(path="/a", file=CandidateFile(path="/a", size=1), skip_reason=SkipReason.SYMLINK)


class TestScanParams:
    def test_defaults(self):
        params = ScanParams(root_dir="/data")
        assert params.min_size_bytes == DeduplicationConfig.DEFAULT_MIN_SIZE_BYTES == 1024
        assert params.partial_hash_algorithm == HashAlgorithmName.SHA256

    def test_empty_root_is_not_found(self):
        with pytest.raises(RootNotFoundError, match="Directory not found"):
            ScanParams(root_dir="")

    def test_negative_min_size_rejected(self):
        with pytest.raises(ValueError, match="negative"):
            ScanParams(root_dir="/data", min_size_bytes=-1)

    def test_algorithm_accepts_string(self):
        params = ScanParams(root_dir="/data", partial_hash_algorithm="XXH64")
        assert params.partial_hash_algorithm == HashAlgorithmName.XXH64

    def test_unknown_algorithm_rejected(self):
        with pytest.raises(ValueError):
            ScanParams(root_dir="/data", partial_hash_algorithm="md5")

    def test_from_human_readable(self):
        params = ScanParams.from_human_readable("/data", "2KB", "xxh64")
        assert params.min_size_bytes == 2048
        assert params.partial_hash_algorithm == HashAlgorithmName.XXH64


class TestDeduplicationStats:
    def test_update_stage_accumulates_and_notifies(self):
        stats = DeduplicationStats()
        updates = []
        stats.add_listener(lambda stage, data: updates.append((stage, dict(data))))

        stats.update_stage("Partial Hash", groups_found=2, files_processed=5, duration=0.5)
        stats.update_stage("Partial Hash", groups_found=1, files_processed=3, duration=0.25)

        assert stats.stage_stats["Partial Hash"] == {"groups": 3, "files": 8, "time": 0.75}
        assert len(updates) == 2

    def test_failing_listener_does_not_abort_update(self, caplog):
        stats = DeduplicationStats()
        seen = []

        def broken(stage, data):
            raise RuntimeError("listener exploded")

        stats.add_listener(broken)
        stats.add_listener(lambda stage, data: seen.append(stage))

        with caplog.at_level("WARNING", logger="dupefinder.core.models"):
            stats.update_stage("Full Hash", groups_found=1, files_processed=2, duration=0.1)

        assert stats.stage_stats["Full Hash"]["groups"] == 1
        assert seen == ["Full Hash"]
        assert "listener exploded" in caplog.text

    def test_print_summary_lists_stages(self):
        stats = DeduplicationStats()
        stats.update_stage("Full Hash", groups_found=1, files_processed=2, duration=0.1)
        summary = stats.print_summary()
        assert "Confirmed Duplicate Groups: 1 / 2" in summary
