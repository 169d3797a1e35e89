"""
dupefinder — streaming duplicate file finder.

Core features:
- Three-stage detection: size → SHA-256 of the first 4 KiB → full SHA-256
- Groups are yielded as soon as they are confirmed, while the scan continues
- Cooperative cancellation at every file boundary
- Safe deletion to system trash (via send2trash)
- CLI interface for headless usage
"""

from importlib.metadata import PackageNotFoundError, version as _version

try:
    __version__ = _version("dupefinder")
except PackageNotFoundError:
    __version__ = "0.0.0"

# Public API: only what users should import directly
from dupefinder.core import (
    CandidateFile, DuplicateGroup, ScanParams, KeepStrategy, DisposalOutcome,
    RootNotFoundError, DisposalNotFoundError, DisposalFailedError, scan)
from dupefinder.utils.convert_utils import ConvertUtils
from dupefinder.services import DuplicateService, FileService, ScanWorker

dispose_to_trash = FileService.dispose_to_trash

__all__ = [
    "scan",
    "dispose_to_trash",
    "CandidateFile",
    "DuplicateGroup",
    "ScanParams",
    "KeepStrategy",
    "DisposalOutcome",
    "RootNotFoundError",
    "DisposalNotFoundError",
    "DisposalFailedError",
    "ConvertUtils",
    "DuplicateService",
    "FileService",
    "ScanWorker",
    "__version__",
]
