"""File operations for copying and moving FIT files into the archive."""

import logging
import shutil
from pathlib import Path

from ..exceptions import ArchiveError, ArchiveErrorKind

logger = logging.getLogger(__name__)

FIT_EXTENSION = ".fit"


def build_archive_path(base_directory: Path, expanded_template: str) -> Path:
    """Join an expanded template to the archive directory.

    ``/`` separates path components on every platform. The result always
    carries the FIT extension: an existing suffix is replaced, otherwise it
    is appended.
    """
    parts = [part for part in expanded_template.split('/') if part]
    archive_path = base_directory.joinpath(*parts)
    if not archive_path.name or archive_path.name in ('.', '..'):
        return archive_path
    return archive_path.with_suffix(FIT_EXTENSION)


class FileArchiver:
    """Copy or move files to their archive location."""

    def __init__(self, move: bool = False, dry_run: bool = False):
        self.move = move
        self.dry_run = dry_run

    def create_archive_directory(self, archive_path: Path) -> None:
        """Make sure the directory of ``archive_path`` exists.

        In dry-run mode a missing directory is only reported, never created.
        A parent that exists but is not a directory is rejected in both modes.
        """
        parent = archive_path.parent

        if parent.exists():
            if not parent.is_dir():
                raise ArchiveError(
                    f"'{parent}' exists but is not a directory",
                    ArchiveErrorKind.NOT_A_DIRECTORY,
                )
            return

        if self.dry_run:
            logger.debug(f"Would create archive directory {parent}")
            return

        try:
            parent.mkdir(parents=True, exist_ok=True)
        except OSError as e:
            raise ArchiveError(
                f"Unable to create archive directory '{parent}': {e}",
                ArchiveErrorKind.DIRECTORY_CREATE_FAILED,
            )
        logger.debug(f"Created archive directory {parent}")

    def archive_file(self, source_path: Path, archive_path: Path) -> str:
        """Copy or move ``source_path`` to ``archive_path``.

        A move is a copy followed by removing the source. If the removal
        fails the copy stays in place.

        Returns:
            Status line describing what was done.
        """
        msg = f"'{source_path}' -> '{archive_path}' ... "

        if self.dry_run:
            return msg + "dry run"

        if archive_path.is_dir():
            raise ArchiveError(
                f"Unable to create file '{archive_path}': is a directory",
                ArchiveErrorKind.COPY_FAILED,
            )

        try:
            shutil.copy2(source_path, archive_path)
        except OSError as e:
            raise ArchiveError(
                f"Unable to create file '{archive_path}': {e}",
                ArchiveErrorKind.COPY_FAILED,
            )

        if not self.move:
            return msg + "copied"

        try:
            source_path.unlink()
        except OSError as e:
            raise ArchiveError(
                f"Unable to remove file '{source_path}': {e}",
                ArchiveErrorKind.REMOVE_FAILED,
            )
        return msg + "moved"
