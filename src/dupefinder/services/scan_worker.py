"""
Background scan worker — runs the streaming scan on a thread and hands groups
over through a bounded queue, so a consumer (UI loop, deletion prompt) can
pull results at its own pace.
"""
import logging
import queue
import threading
from typing import Iterator, List, Optional

from dupefinder.core.deduplicator import DeduplicatorImpl
from dupefinder.core.models import DeduplicationStats, DuplicateGroup, ScanParams

logger = logging.getLogger(__name__)

_DONE = object()


class ScanWorker:
    """
    Producer thread feeding confirmed DuplicateGroups into a bounded queue.

    Usage:
        worker = ScanWorker(ScanParams(root_dir="/data"))
        worker.start()
        for group in worker:
            ...
        worker.stop()  # from any thread, at any time

    Errors raised by the scan (e.g. RootNotFoundError) are re-raised in the
    consuming thread when it reaches them.
    """

    def __init__(self, params: ScanParams, max_pending: int = 16):
        if max_pending < 1:
            raise ValueError("max_pending must be at least 1")
        self.params = params
        self._deduplicator = DeduplicatorImpl()
        self._queue: "queue.Queue" = queue.Queue(maxsize=max_pending)
        self._stop_event = threading.Event()
        self._error: Optional[BaseException] = None
        self._finished = False
        self._thread = threading.Thread(target=self.run, name="dupefinder-scan", daemon=True)

    @property
    def stats(self) -> DeduplicationStats:
        return self._deduplicator.stats

    def start(self) -> "ScanWorker":
        self._thread.start()
        return self

    def stop(self) -> None:
        """Sets the stopped flag to signal the worker to terminate gracefully."""
        self._stop_event.set()

    def is_stopped(self) -> bool:
        return self._stop_event.is_set()

    def join(self, timeout: Optional[float] = None) -> None:
        self._thread.join(timeout)

    def is_alive(self) -> bool:
        return self._thread.is_alive()

    def run(self) -> None:
        """Main execution method. Runs in the worker thread."""
        try:
            for group in self._deduplicator.scan(self.params, stopped_flag=self.is_stopped):
                if not self._put(group):
                    return
        except Exception as e:
            logger.debug(f"Scan failed: {type(e).__name__}: {e}")
            self._error = e
        finally:
            self._put(_DONE, force=True)

    def _put(self, item, force: bool = False) -> bool:
        """Blocks while the queue is full; gives up once stopped unless forced."""
        while True:
            if self._stop_event.is_set() and not force:
                return False
            try:
                self._queue.put(item, timeout=0.1)
                return True
            except queue.Full:
                if force and self._stop_event.is_set():
                    # Nobody is draining any more; make room for the sentinel
                    self._drain()

    def _drain(self) -> None:
        try:
            while True:
                self._queue.get_nowait()
        except queue.Empty:
            pass

    def __iter__(self) -> Iterator[DuplicateGroup]:
        # The sentinel is consumed once; later passes end right away
        while not self._finished:
            item = self._queue.get()
            if item is _DONE:
                self._finished = True
                break
            yield item
        if self._error is not None:
            raise self._error

    def results(self) -> List[DuplicateGroup]:
        """Starts the worker if needed and collects every group."""
        if not self._thread.is_alive() and self._thread.ident is None:
            self.start()
        return list(self)
