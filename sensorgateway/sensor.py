"""Sensor measurement records and their binary representation.

A record is stored as the sensor id (unsigned 16 bit), the measured value
(64-bit float) and the UTC timestamp (signed 64 bit), packed back to back in
little-endian order without padding.
"""

from __future__ import annotations

import struct
from dataclasses import dataclass
from typing import BinaryIO, Iterator

_RECORD = struct.Struct("<Hdq")

RECORD_SIZE = _RECORD.size
MAX_SENSOR_ID = 0xFFFF


@dataclass(frozen=True)
class SensorData:
    """One reading taken by a sensor."""

    id: int
    value: float
    ts: int

    def to_bytes(self) -> bytes:
        """Pack the record into its fixed-size binary form."""
        if not 0 <= self.id <= MAX_SENSOR_ID:
            raise ValueError(f"sensor id {self.id} does not fit in 16 bits")
        try:
            return _RECORD.pack(self.id, self.value, self.ts)
        except struct.error as exc:
            raise ValueError(f"cannot pack sensor record: {exc}") from exc

    @classmethod
    def from_bytes(cls, data: bytes) -> "SensorData":
        """Unpack a record from exactly RECORD_SIZE bytes."""
        if len(data) != RECORD_SIZE:
            raise ValueError(
                f"a sensor record is {RECORD_SIZE} bytes, got {len(data)}"
            )
        sensor_id, value, ts = _RECORD.unpack(data)
        return cls(sensor_id, value, ts)


def read_records(stream: BinaryIO) -> Iterator[SensorData]:
    """Yield records from a binary stream until it runs out.

    A trailing incomplete record is ignored.
    """
    while True:
        chunk = stream.read(RECORD_SIZE)
        if len(chunk) < RECORD_SIZE:
            return
        yield SensorData.from_bytes(chunk)


def write_record(stream: BinaryIO, record: SensorData) -> None:
    """Append one record to a binary stream."""
    stream.write(record.to_bytes())