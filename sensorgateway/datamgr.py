"""Sensor data manager: joins the room map with recorded measurements.

The room map is a text file of ``<room id> <sensor id>`` lines. The data
file is a binary stream of sensor records. For every known sensor the
manager keeps the room, the time of the last reading and a running average
over the most recent readings.
"""

from __future__ import annotations

import argparse
import math
import sys
from collections import deque
from dataclasses import dataclass, field
from typing import BinaryIO, Iterable, Optional, Sequence, TextIO

from .dplist import DPList
from .sensor import read_records

RUN_AVG_LENGTH = 5
SET_MAX_TEMP = 50.0
SET_MIN_TEMP = 0.0
MIN_VALID_TEMP = -275.0

DEFAULT_MAP_FILE = "room_sensor.map"
DEFAULT_DATA_FILE = "sensor_data"


class SensorNotFoundError(LookupError):
    """Raised when a sensor id is not present in the room map."""

    def __init__(self, sensor_id: int) -> None:
        super().__init__(f"Sensor with ID {sensor_id} not in list")
        self.sensor_id = sensor_id


@dataclass
class SensorElement:
    """State kept for one sensor: its room, last reading time and recent values."""

    id: int
    room_id: int = 0
    run_avg_length: int = RUN_AVG_LENGTH
    last_modified: int = 0
    readings: deque = field(default_factory=deque, repr=False)

    def __post_init__(self) -> None:
        if self.run_avg_length < 1:
            raise ValueError("run_avg_length must be at least 1")
        self.readings = deque(self.readings, maxlen=self.run_avg_length)

    def add_reading(self, value: float, ts: int) -> None:
        """Record a reading; the oldest one drops out once the window is full."""
        self.last_modified = ts
        self.readings.append(value)

    def average(self) -> float:
        """Average of the valid readings in the window, NaN when there are none."""
        valid = [value for value in self.readings if value > MIN_VALID_TEMP]
        if not valid:
            return math.nan
        return math.fsum(valid) / len(valid)


def _compare_ids(x: SensorElement, y: SensorElement) -> int:
    return (x.id > y.id) - (x.id < y.id)


def _parse_map_line(line: str) -> Optional[tuple[int, int]]:
    parts = line.split()
    if len(parts) < 2:
        return None
    try:
        return int(parts[0]), int(parts[1])
    except ValueError:
        return None


class DataManager:
    """Holds the per-sensor state built from a room map and a data file."""

    def __init__(
        self,
        run_avg_length: int = RUN_AVG_LENGTH,
        max_temp: float = SET_MAX_TEMP,
        min_temp: float = SET_MIN_TEMP,
    ) -> None:
        if run_avg_length < 1:
            raise ValueError("run_avg_length must be at least 1")
        self.run_avg_length = run_avg_length
        self.max_temp = max_temp
        self.min_temp = min_temp
        self._sensors = DPList(element_compare=_compare_ids)

    def _find(self, sensor_id: int) -> SensorElement:
        index = self._sensors.get_index_of_element(SensorElement(sensor_id))
        if index == -1:
            raise SensorNotFoundError(sensor_id)
        return self._sensors.get_element_at_index(index)

    def _load_map(self, lines: Iterable[str]) -> None:
        for position, line in enumerate(lines):
            parsed = _parse_map_line(line)
            if parsed is None:
                continue
            room_id, sensor_id = parsed
            element = SensorElement(
                sensor_id, room_id=room_id, run_avg_length=self.run_avg_length
            )
            self._sensors.insert_at_index(element, position, insert_copy=True)

    def parse_sensor_files(self, map_file: TextIO, data_file: BinaryIO) -> None:
        """Build the sensor list from the map, then apply every data record.

        Records of sensors missing from the map are dropped with a message
        on stderr. A trailing incomplete record is ignored.
        """
        self._sensors = DPList(element_compare=_compare_ids)
        self._load_map(map_file)
        for record in read_records(data_file):
            try:
                element = self._find(record.id)
            except SensorNotFoundError as exc:
                print(exc, file=sys.stderr)
                continue
            element.add_reading(record.value, record.ts)

    def get_room_id(self, sensor_id: int) -> int:
        """Return the room the sensor is placed in."""
        return self._find(sensor_id).room_id

    def get_avg(self, sensor_id: int) -> float:
        """Return the running average of the sensor and report it on stdout."""
        average = self._find(sensor_id).average()
        if math.isnan(average):
            print(f"No valid data for sensor ID {sensor_id}", file=sys.stderr)
        print(f"Temp: {average:f}")
        if average > self.max_temp:
            print("It's too warm")
        elif average < self.min_temp:
            print("It's too cold")
        return average

    def get_last_modified(self, sensor_id: int) -> int:
        """Return the timestamp of the sensor's most recent reading."""
        return self._find(sensor_id).last_modified

    def total_sensors(self) -> int:
        """Return the number of sensors known from the map."""
        return len(self._sensors)

    def clear(self) -> None:
        """Forget every sensor."""
        self._sensors.free(free_element=True)


def main(argv: Optional[Sequence[str]] = None) -> int:
    parser = argparse.ArgumentParser(
        description="Parse a room map and a binary sensor data file."
    )
    parser.add_argument("map_file", nargs="?", default=DEFAULT_MAP_FILE)
    parser.add_argument("data_file", nargs="?", default=DEFAULT_DATA_FILE)
    args = parser.parse_args(argv)

    manager = DataManager()
    try:
        with open(args.map_file, "r", encoding="ascii") as map_file, open(
            args.data_file, "rb"
        ) as data_file:
            manager.parse_sensor_files(map_file, data_file)
    except OSError as exc:
        print(exc, file=sys.stderr)
        return 1
    manager.clear()
    return 0


if __name__ == "__main__":
    sys.exit(main())