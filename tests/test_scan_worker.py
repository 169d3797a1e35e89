"""
Tests for ScanWorker — the scan running on a background thread behind a bounded queue.
"""
import pytest

from dupefinder.core.deduplicator import scan
from dupefinder.core.errors import RootNotFoundError
from dupefinder.core.models import ScanParams
from dupefinder.services.scan_worker import ScanWorker

from conftest import write_file


class TestScanWorker:

    def test_yields_same_groups_as_direct_scan(self, scenario_dir, tmp_path):
        worker = ScanWorker(ScanParams(root_dir=str(tmp_path), min_size_bytes=0)).start()
        groups = [g.paths for g in worker]
        worker.join(timeout=5)

        assert groups == [g.paths for g in scan(str(tmp_path), min_size_bytes=0)]
        assert not worker.is_alive()
        assert worker.stats.groups_emitted == len(groups)

    def test_results_starts_worker(self, scenario_dir, tmp_path):
        groups = ScanWorker(ScanParams(root_dir=str(tmp_path))).results()
        assert len(groups) == 2

    def test_finished_worker_iterates_empty_instead_of_blocking(self, scenario_dir, tmp_path):
        worker = ScanWorker(ScanParams(root_dir=str(tmp_path)))
        assert len(worker.results()) == 2
        worker.join(timeout=5)

        assert list(worker) == []
        assert worker.results() == []

    def test_root_error_reraised_in_consumer(self, tmp_path):
        worker = ScanWorker(ScanParams(root_dir=str(tmp_path / "missing"))).start()
        with pytest.raises(RootNotFoundError):
            list(worker)

    def test_stop_ends_iteration_early(self, tmp_path):
        for size in range(2000, 2010):
            write_file(tmp_path / f"{size}_a.bin", b"x" * size)
            write_file(tmp_path / f"{size}_b.bin", b"x" * size)

        worker = ScanWorker(ScanParams(root_dir=str(tmp_path)), max_pending=1).start()
        received = []
        for group in worker:
            received.append(group)
            worker.stop()
        worker.join(timeout=5)

        assert 1 <= len(received) < 10
        assert not worker.is_alive()
        assert worker.is_stopped()

    def test_stop_without_consumer_lets_thread_finish(self, scenario_dir, tmp_path):
        worker = ScanWorker(ScanParams(root_dir=str(tmp_path), min_size_bytes=0), max_pending=1).start()
        worker.stop()
        worker.join(timeout=5)
        assert not worker.is_alive()

    def test_max_pending_validated(self, tmp_path):
        with pytest.raises(ValueError):
            ScanWorker(ScanParams(root_dir=str(tmp_path)), max_pending=0)
