"""Activity data model extracted from FIT files."""

from dataclasses import dataclass, field
from datetime import datetime, timezone
from typing import Any, Dict

DEFAULT_VALUE = "unknown"
EPOCH = datetime(1970, 1, 1, tzinfo=timezone.utc)


@dataclass(frozen=True, slots=True)
class FitRecord:
    """A decoded FIT message: its kind and its named field values."""

    kind: str
    fields: Dict[str, Any] = field(default_factory=dict)

    def get(self, name: str, default: Any = None) -> Any:
        return self.fields.get(name, default)


@dataclass(frozen=True, slots=True)
class ActivityData:
    """Information extracted from a FIT file.

    Every field always holds a usable value so template expansion never
    has to deal with missing data.
    """

    sport: str = DEFAULT_VALUE  # i.e. 'running' or 'multisport_swimming_cycling'
    sport_name: str = DEFAULT_VALUE  # activity name set on the device, i.e. 'trail_run'
    sub_sport: str = DEFAULT_VALUE  # i.e. 'trail'
    workout_name: str = DEFAULT_VALUE  # i.e. 'temporun_8km'
    timestamp: datetime = EPOCH  # UTC creation time of the activity
