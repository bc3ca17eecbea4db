"""Activity data extraction from FIT files using fitdecode."""

from datetime import datetime, timezone
from pathlib import Path
from typing import Dict, Iterable, List, Optional
import logging
import struct

import fitdecode

from ..exceptions import (
    FieldTypeError,
    FileAccessError,
    ParseError,
    ParseErrorKind,
)
from ..models.activity import DEFAULT_VALUE, ActivityData, FitRecord
from ..result import Result, success, failure

logger = logging.getLogger(__name__)

# FIT message kinds carrying the fields we archive by
FILE_ID = "file_id"
SPORT = "sport"
WORKOUT = "workout"

# field name -> ActivityData attribute, for single valued string fields
SPORT_FIELDS = {
    'name': 'sport_name',
    'sub_sport': 'sub_sport',
}
WORKOUT_FIELDS = {
    'wkt_name': 'workout_name',
}


def normalize(value: str) -> str:
    """Trim, lowercase and replace spaces with underscores."""
    return value.strip().lower().replace(' ', '_')


def _has_value(record: FitRecord, name: str) -> bool:
    """Missing fields, invalid (None) values and blank strings count as absent."""
    value = record.get(name)
    if isinstance(value, str):
        return bool(value.strip())
    return value is not None


class ActivityExtractor:
    """Turn decoded FIT records into ActivityData."""

    @staticmethod
    def parse_fit_file(file_path: Path) -> ActivityData:
        """Extract activity data from a FIT file.

        The file is fully read and closed before this returns.
        """
        records = ActivityExtractor.read_records(file_path)
        return ActivityExtractor.extract_activity_data(records, source=str(file_path))

    @staticmethod
    def read_records(file_path: Path) -> List[FitRecord]:
        """Decode all data messages of a FIT file."""
        records: List[FitRecord] = []
        found_header = False

        try:
            with fitdecode.FitReader(str(file_path)) as fit:
                for frame in fit:
                    if isinstance(frame, fitdecode.FitHeader):
                        found_header = True
                    elif isinstance(frame, fitdecode.FitDataMessage):
                        records.append(ActivityExtractor._to_record(frame))
        except fitdecode.FitError as e:
            raise ParseError(f"Unable to parse '{file_path}': {e}", ParseErrorKind.MALFORMED)
        except (ValueError, TypeError, LookupError, ArithmeticError, AssertionError, struct.error) as e:
            # corrupted definitions can trip the decoder outside its own error types
            raise ParseError(
                f"Unable to parse '{file_path}': {type(e).__name__}: {e}",
                ParseErrorKind.MALFORMED,
            )
        except OSError as e:
            raise FileAccessError(f"Unable to open '{file_path}': {e}")

        if not found_header:
            raise ParseError(f"Unable to parse '{file_path}': no FIT data found", ParseErrorKind.MALFORMED)

        logger.debug(f"Decoded {len(records)} data messages from {file_path}")
        return records

    @staticmethod
    def _to_record(frame) -> FitRecord:
        """Convert a fitdecode data message, keeping the first value of repeated fields."""
        fields: Dict[str, object] = {}
        for field_data in frame.fields:
            name = field_data.name
            if name not in fields or fields[name] is None:
                fields[name] = field_data.value
        return FitRecord(kind=frame.name, fields=fields)

    @staticmethod
    def extract_activity_data(records: Iterable[FitRecord], source: Optional[str] = None) -> ActivityData:
        """Scan records once and build the activity data.

        Raises:
            ParseError: If ``time_created`` is not a timestamp.
        """
        values: Dict[str, object] = {}
        sports: List[str] = []

        for record in records:
            if record.kind == FILE_ID:
                # the creation time is the primary archive key, so a bad value is fatal
                if record.get('time_created') is None:
                    continue
                timestamp = ActivityExtractor._read_timestamp(record, 'time_created', source)
                if timestamp.is_failure():
                    raise ParseError(str(timestamp.error()), ParseErrorKind.UNEXPECTED_FIELD_TYPE)
                values['timestamp'] = timestamp.value()

            elif record.kind == SPORT:
                if _has_value(record, 'sport'):
                    sport = ActivityExtractor._read_string(record, 'sport', source)
                    if sport.is_success():
                        sports.append(sport.value())
                    else:
                        ActivityExtractor._warn(sport.error(), 'sport', values)
                ActivityExtractor._assign_strings(record, SPORT_FIELDS, values, source)

            elif record.kind == WORKOUT:
                ActivityExtractor._assign_strings(record, WORKOUT_FIELDS, values, source)

        # single- and multisport activities
        if len(sports) == 1:
            values['sport'] = sports[0]
        elif len(sports) > 1:
            values['sport'] = "multisport_" + "_".join(sports)

        return ActivityData(**values)

    @staticmethod
    def _assign_strings(record: FitRecord, mapping: Dict[str, str],
                        values: Dict[str, object], source: Optional[str]) -> None:
        for field_name, attribute in mapping.items():
            if not _has_value(record, field_name):
                continue
            result = ActivityExtractor._read_string(record, field_name, source)
            if result.is_success():
                values[attribute] = result.value()
            else:
                ActivityExtractor._warn(result.error(), attribute, values)

    @staticmethod
    def _warn(error: FieldTypeError, attribute: str, values: Dict[str, object]) -> None:
        current = values.get(attribute, DEFAULT_VALUE)
        logger.warning(f"{error}. Using '{current}' instead!")

    @staticmethod
    def _read_string(record: FitRecord, name: str,
                     source: Optional[str]) -> Result[str, FieldTypeError]:
        value = record.get(name)
        if isinstance(value, str):
            return success(normalize(value))
        return failure(FieldTypeError(name, value, source))

    @staticmethod
    def _read_timestamp(record: FitRecord, name: str,
                        source: Optional[str]) -> Result[datetime, FieldTypeError]:
        value = record.get(name)
        if isinstance(value, datetime):
            if value.tzinfo is None:
                return success(value.replace(tzinfo=timezone.utc))
            return success(value.astimezone(timezone.utc))
        return failure(FieldTypeError(name, value, source))