"""FIT file archiver

Copy or move FIT activity files into an archive laid out by the activity's
sport, workout and creation time.
"""

__version__ = "0.1.0"

from .core.extractor import ActivityExtractor
from .core.template import expand_template
from .core.archiver import FileArchiver
from .core.organizer import ArchiveSummary, FitArchiver
from .models.activity import ActivityData, FitRecord
from .models.config import ArchiveConfig, load_config

__all__ = [
    # Core components
    "ActivityExtractor",
    "FileArchiver",
    "FitArchiver",
    "ArchiveSummary",

    # Models
    "ActivityData",
    "FitRecord",
    "ArchiveConfig",

    # Utilities
    "expand_template",
    "load_config",
]
