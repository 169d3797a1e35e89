from .duplicate_service import DuplicateService
from .file_service import FileService
from .scan_worker import ScanWorker

__all__ = ["DuplicateService", "FileService", "ScanWorker"]
