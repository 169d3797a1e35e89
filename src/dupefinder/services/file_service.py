"""
Copyright (c) 2025 initumX (initum.x@gmail.com)
Licensed under the MIT License

services/file_service.py
Disposal adapter: moves duplicate files to the platform trash / recycle bin.
Never erases permanently; the underlying call is send2trash.
"""
import logging
from pathlib import Path
from typing import Iterable, List, Tuple

from send2trash import send2trash

from dupefinder.core.errors import DisposalFailedError, DisposalNotFoundError
from dupefinder.core.models import DisposalOutcome

logger = logging.getLogger(__name__)


class FileService:
    """
    Cross-platform recoverable deletion.
    Operates on one path at a time so the caller controls batching.
    """

    @staticmethod
    def move_to_trash(file_path: str) -> None:
        """
        Moves a file to the system trash.

        Raises:
            DisposalNotFoundError: the path no longer exists (nothing is touched)
            DisposalFailedError: send2trash refused or failed
        """
        path = Path(file_path)

        # lexists: a dangling symlink is still something to trash
        if not (path.exists() or path.is_symlink()):
            raise DisposalNotFoundError(str(path))

        try:
            send2trash(str(path))
        except OSError as e:
            raise DisposalFailedError(str(path), str(e)) from e

        logger.debug(f"Moved to trash: {path}")

    @classmethod
    def dispose_to_trash(cls, file_path: str) -> DisposalOutcome:
        """Like move_to_trash, but reports the outcome instead of raising."""
        try:
            cls.move_to_trash(file_path)
        except DisposalNotFoundError:
            logger.warning(f"Cannot trash missing file: {file_path}")
            return DisposalOutcome.NOT_FOUND
        except DisposalFailedError as e:
            logger.warning(str(e))
            return DisposalOutcome.FAILED
        return DisposalOutcome.SUCCESS

    @classmethod
    def dispose_many(cls, file_paths: Iterable[str]) -> List[Tuple[str, DisposalOutcome]]:
        """Trashes each path in turn; one failure never stops the rest."""
        return [(path, cls.dispose_to_trash(path)) for path in file_paths]
