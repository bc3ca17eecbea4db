"""Core fit archiver modules."""

from .extractor import ActivityExtractor
from .template import ArchiveTemplate, expand_template
from .archiver import FileArchiver, build_archive_path
from .organizer import ArchiveSummary, FitArchiver

__all__ = [
    'ActivityExtractor',
    'ArchiveTemplate',
    'expand_template',
    'FileArchiver',
    'build_archive_path',
    'ArchiveSummary',
    'FitArchiver',
]
