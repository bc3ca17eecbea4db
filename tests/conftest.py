"""Shared fixtures: a minimal FIT encoder for building real activity files."""

import struct
from datetime import datetime, timezone
from pathlib import Path
from typing import List, Optional, Sequence, Tuple

import pytest

FIT_EPOCH = datetime(1989, 12, 31, tzinfo=timezone.utc)

CRC_TABLE = [
    0x0000, 0xCC01, 0xD801, 0x1400, 0xF001, 0x3C00, 0x2800, 0xE401,
    0xA001, 0x6C00, 0x7800, 0xB401, 0x5000, 0x9C01, 0x8801, 0x4400,
]

# base types
ENUM = 0x00
UINT32 = 0x86
STRING = 0x07

# global message numbers
FILE_ID = 0
SPORT = 12
WORKOUT = 26

# enum values from the FIT profile
SPORTS = {'generic': 0, 'running': 1, 'cycling': 2, 'swimming': 5}
SUB_SPORTS = {'generic': 0, 'treadmill': 1, 'street': 2, 'trail': 3}

Field = Tuple[int, int, bytes]


def fit_crc(data: bytes, crc: int = 0) -> int:
    for byte in data:
        tmp = CRC_TABLE[crc & 0xF]
        crc = (crc >> 4) & 0x0FFF
        crc = crc ^ tmp ^ CRC_TABLE[byte & 0xF]
        tmp = CRC_TABLE[crc & 0xF]
        crc = (crc >> 4) & 0x0FFF
        crc = crc ^ tmp ^ CRC_TABLE[(byte >> 4) & 0xF]
    return crc


def _string(value: str) -> bytes:
    return value.encode('utf-8') + b'\x00'


def _message(local_type: int, global_num: int, fields: Sequence[Field]) -> bytes:
    """Definition message followed by one data message."""
    definition = struct.pack('<BBBHB', 0x40 | local_type, 0, 0, global_num, len(fields))
    for num, base_type, raw in fields:
        definition += struct.pack('<BBB', num, len(raw), base_type)
    data = struct.pack('<B', local_type) + b''.join(raw for _, _, raw in fields)
    return definition + data


def encode_fit(
    time_created: Optional[datetime] = None,
    sports: Sequence[Tuple[str, str, Optional[str]]] = (),
    workout_name: Optional[str] = None,
) -> bytes:
    """Encode a FIT activity file.

    Args:
        time_created: Creation time stored in the file_id message
        sports: (sport, sub_sport, name) for each sport message
        workout_name: wkt_name of a workout message
    """
    records = b''

    file_id: List[Field] = [(0, ENUM, bytes([4]))]  # type = activity
    if time_created is not None:
        seconds = int((time_created - FIT_EPOCH).total_seconds())
        file_id.append((4, UINT32, struct.pack('<I', seconds)))
    records += _message(0, FILE_ID, file_id)

    for sport, sub_sport, name in sports:
        fields: List[Field] = [
            (0, ENUM, bytes([SPORTS[sport]])),
            (1, ENUM, bytes([SUB_SPORTS[sub_sport]])),
        ]
        if name is not None:
            fields.append((3, STRING, _string(name)))
        records += _message(1, SPORT, fields)

    if workout_name is not None:
        records += _message(2, WORKOUT, [(8, STRING, _string(workout_name))])

    header = struct.pack('<BBHI4s', 14, 0x10, 2132, len(records), b'.FIT')
    header += struct.pack('<H', fit_crc(header))
    body = header + records
    return body + struct.pack('<H', fit_crc(body))


@pytest.fixture
def trail_run_bytes() -> bytes:
    """A single sport trail run with a workout."""
    return encode_fit(
        time_created=datetime(2023, 7, 26, 6, 22, 4, tzinfo=timezone.utc),
        sports=[('running', 'trail', 'Trail Run')],
        workout_name='Test Workout',
    )


@pytest.fixture
def fit_file_factory(tmp_path):
    """Write FIT bytes to a file below tmp_path and return its path."""
    def factory(name: str, content: bytes) -> Path:
        path = tmp_path / "source" / name
        path.parent.mkdir(parents=True, exist_ok=True)
        path.write_bytes(content)
        return path
    return factory
