"""
Copyright (c) 2025 initumX (initum.x@gmail.com)
Licensed under the MIT License

core/errors.py
Exceptions raised by the scan engine and the disposal adapter.

Per-file problems (locked files, access denied, files vanishing mid-scan) are
NOT represented here: they are absorbed where they happen and only show up as
files missing from the results.
"""


class DupeFinderError(Exception):
    """Base class for all dupefinder errors."""


class RootNotFoundError(DupeFinderError, FileNotFoundError):
    """The scan root does not exist or is not a directory."""

    def __init__(self, root_dir: str):
        self.root_dir = root_dir
        super().__init__(f"Directory not found: {root_dir}")


class ScanCancelled(DupeFinderError):
    """Raised inside the pipeline when the cancellation flag is set."""


class DisposalError(DupeFinderError):
    """Base class for failures of a move-to-trash request."""

    def __init__(self, path: str, message: str):
        self.path = path
        super().__init__(message)


class DisposalNotFoundError(DisposalError):
    def __init__(self, path: str):
        super().__init__(path, f"File not found: {path}")


class DisposalFailedError(DisposalError):
    def __init__(self, path: str, reason: str):
        self.reason = reason
        super().__init__(path, f"Failed to move to trash: {path}: {reason}")
