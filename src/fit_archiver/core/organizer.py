"""Main orchestration logic for archiving FIT files."""

from dataclasses import dataclass, field
from pathlib import Path
from typing import Iterable, List, Optional, Tuple, Union
import logging

from rich.console import Console

from ..exceptions import ArchiveError, ArchiveErrorKind, FitArchiverError
from ..models.activity import ActivityData
from ..models.config import ArchiveConfig
from .archiver import FileArchiver, build_archive_path
from .extractor import ActivityExtractor
from .template import expand_template

logger = logging.getLogger(__name__)


@dataclass
class ArchiveSummary:
    """Running counters of one archiver run."""
    processed: int = 0
    errors: int = 0
    messages: List[Tuple[Path, str]] = field(default_factory=list)

    def add_error(self, path: Path, message: str) -> None:
        self.errors += 1
        self.messages.append((path, message))

    def summary_line(self) -> str:
        line = f"Processed {self.processed} files"
        if self.errors:
            line += f" with {self.errors} errors."
        return line


class FitArchiver:
    """Extract, expand and archive FIT files one after another."""

    def __init__(self, config: ArchiveConfig,
                 console: Optional[Console] = None,
                 error_console: Optional[Console] = None):
        self.config = config
        self.extractor = ActivityExtractor()
        self.archiver = FileArchiver(move=config.move, dry_run=config.dry_run)
        self.console = console or Console()
        self.error_console = error_console or Console(stderr=True)

    def archive_path_for(self, activity: ActivityData) -> Path:
        """Destination of an activity inside the archive directory."""
        expanded = expand_template(self.config.file_template, activity)
        return build_archive_path(self.config.archive_directory, expanded)

    def process_file(self, source_path: Path) -> str:
        """Archive a single file and return its status line."""
        activity = self.extractor.parse_fit_file(source_path)
        archive_path = self.archive_path_for(activity)
        logger.debug(f"{source_path}: {activity} -> {archive_path}")

        self.archiver.create_archive_directory(archive_path)
        return self.archiver.archive_file(source_path, archive_path)

    def process_files(self, files: Iterable[Union[str, Path]]) -> ArchiveSummary:
        """Archive all files, reporting each one as it is done.

        A failing file is reported and counted, and processing continues
        with the next one. Only a failure to create an archive directory
        aborts the run. A destination parent that exists but is not a
        directory fails just that file.
        """
        summary = ArchiveSummary()

        for file in files:
            source_path = Path(file)
            try:
                msg = self.process_file(source_path)
            except ArchiveError as e:
                if e.kind is ArchiveErrorKind.DIRECTORY_CREATE_FAILED:
                    raise
                self._report_error(summary, source_path, e)
            except FitArchiverError as e:
                self._report_error(summary, source_path, e)
            else:
                self._print(self.console, msg)
                summary.processed += 1

        logger.info(summary.summary_line())
        return summary

    def _report_error(self, summary: ArchiveSummary, source_path: Path, error: Exception) -> None:
        summary.add_error(source_path, str(error))
        self._print(self.error_console, str(error))

    @staticmethod
    def _print(console: Console, text: str) -> None:
        # paths may contain [brackets] or :colons:, print them literally on one line
        console.print(text, markup=False, highlight=False, emoji=False, soft_wrap=True)
