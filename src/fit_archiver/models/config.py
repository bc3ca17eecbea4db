"""Configuration model for fit archiver."""

from pathlib import Path
from typing import Any, Dict
import json
from dataclasses import dataclass, field, fields, asdict

from ..exceptions import ConfigurationError

DEFAULT_FILE_TEMPLATE = "%Y/%m/%Y-%m-%d-%H%M%S-$s"


@dataclass
class ArchiveConfig:
    """Settings for one archiver run."""
    archive_directory: Path = field(default_factory=lambda: Path("."))
    file_template: str = DEFAULT_FILE_TEMPLATE
    move: bool = False  # copy is the default
    dry_run: bool = False
    strict: bool = False  # non-zero exit status when files failed

    def __post_init__(self):
        if not isinstance(self.archive_directory, Path):
            self.archive_directory = Path(self.archive_directory)
        if not self.file_template:
            raise ConfigurationError("File template must not be empty")

    def merged(self, overrides: Dict[str, Any]) -> "ArchiveConfig":
        """Return a copy with the given non-None values replaced."""
        data = asdict(self)
        data.update({key: value for key, value in overrides.items() if value is not None})
        return _dict_to_config(data)


def _dict_to_config(data: Dict[str, Any]) -> ArchiveConfig:
    known = {f.name for f in fields(ArchiveConfig)}
    unknown = set(data) - known
    if unknown:
        raise ConfigurationError(f"Unknown configuration keys: {', '.join(sorted(unknown))}")
    return ArchiveConfig(**data)


def load_config(config_path: Path) -> ArchiveConfig:
    """Load configuration from JSON file."""
    try:
        with open(config_path, 'r', encoding='utf-8') as f:
            config_data = json.load(f)
    except OSError as e:
        raise ConfigurationError(f"Unable to read configuration '{config_path}': {e}")
    except json.JSONDecodeError as e:
        raise ConfigurationError(f"Invalid JSON in configuration '{config_path}': {e}")

    if not isinstance(config_data, dict):
        raise ConfigurationError(f"Configuration '{config_path}' must contain a JSON object")

    return _dict_to_config(config_data)
