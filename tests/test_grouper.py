"""
Unit tests for FileGrouperImpl.
Grouping must drop singletons, preserve first-seen order, and contain read
errors to the single file that caused them.
"""
import pytest

from dupefinder.core.errors import ScanCancelled
from dupefinder.core.grouper import FileGrouperImpl
from dupefinder.core.models import CandidateFile

from conftest import BASE_CONTENT, write_file


def candidate(path) -> CandidateFile:
    return CandidateFile(path=str(path), size=path.stat().st_size)


class TestGroupBySize:
    def test_drops_single_files(self):
        files = [
            CandidateFile(path="/a", size=1024),
            CandidateFile(path="/b", size=1024),
            CandidateFile(path="/c", size=2048),
        ]
        groups = FileGrouperImpl().group_by_size(files)
        assert list(groups.keys()) == [1024]
        assert [f.path for f in groups[1024]] == ["/a", "/b"]

    def test_preserves_first_seen_order(self):
        files = [
            CandidateFile(path="/x1", size=3000),
            CandidateFile(path="/y1", size=2000),
            CandidateFile(path="/x2", size=3000),
            CandidateFile(path="/y2", size=2000),
        ]
        assert list(FileGrouperImpl().group_by_size(files).keys()) == [3000, 2000]

    def test_empty_input(self):
        assert FileGrouperImpl().group_by_size([]) == {}


class TestGroupByHash:
    def test_unreadable_file_is_dropped_alone(self, tmp_path):
        a = candidate(write_file(tmp_path / "a.bin", BASE_CONTENT))
        b = candidate(write_file(tmp_path / "b.bin", BASE_CONTENT))
        gone_path = write_file(tmp_path / "gone.bin", BASE_CONTENT)
        gone = candidate(gone_path)
        gone_path.unlink()

        grouper = FileGrouperImpl()
        groups = grouper.group_by_full_hash([a, gone, b])

        assert len(groups) == 1
        assert [f.path for f in next(iter(groups.values()))] == [a.path, b.path]
        assert grouper.skipped_files == 1

    def test_partial_hash_splits_different_prefixes(self, tmp_path):
        a = candidate(write_file(tmp_path / "a.bin", BASE_CONTENT))
        b = candidate(write_file(tmp_path / "b.bin", BASE_CONTENT))
        f = candidate(write_file(tmp_path / "f.bin", b"F" + BASE_CONTENT[1:]))

        groups = FileGrouperImpl().group_by_partial_hash([a, f, b])
        assert [[x.path for x in g] for g in groups.values()] == [[a.path, b.path]]

    def test_cancellation_checked_before_each_file(self, tmp_path):
        files = [candidate(write_file(tmp_path / f"{i}.bin", BASE_CONTENT)) for i in range(3)]
        opened = []

        class SpyHasher:
            def compute_full_hash(self, file):
                opened.append(file.path)
                return "same"

        checks = iter([False, True, True])
        with pytest.raises(ScanCancelled):
            FileGrouperImpl(SpyHasher()).group_by_full_hash(files, stopped_flag=lambda: next(checks))
        assert opened == [files[0].path]
