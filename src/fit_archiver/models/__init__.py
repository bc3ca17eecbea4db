"""Data models for fit archiver."""

from .activity import ActivityData, FitRecord
from .config import ArchiveConfig

__all__ = ["ActivityData", "FitRecord", "ArchiveConfig"]
