"""Generate a room map and a binary file of simulated sensor readings."""

from __future__ import annotations

import argparse
import random
import sys
import time
from contextlib import ExitStack
from pathlib import Path
from typing import Optional, Sequence, Union

from .sensor import SensorData, write_record

NUM_MEASUREMENTS = 100
SLEEP_TIME = 30
TEMP_DEV = 5

ROOM_IDS = (1, 2, 3, 4, 11, 12, 13, 14)
SENSOR_IDS = (15, 21, 37, 49, 112, 129, 132, 142)
START_TEMPERATURES = (15.0, 17.0, 18.0, 19.0, 20.0, 23.0, 24.0, 25.0)

MAP_FILE = "room_sensor.map"
DATA_FILE = "sensor_data"
TEXT_FILE = "sensor_data_text"


def _drift(rng: random.Random) -> float:
    return TEMP_DEV * ((rng.random() - 0.5) / 10)


def generate_files(
    directory: Union[str, Path] = ".",
    measurements: int = NUM_MEASUREMENTS,
    start_time: Optional[int] = None,
    rng: Optional[random.Random] = None,
    debug: bool = False,
) -> list[Path]:
    """Write the room map, the binary data file and, if asked, a text copy.

    Every measurement round writes one record per sensor, all stamped with
    the same time; the time advances by SLEEP_TIME between rounds. Returns
    the paths written.
    """
    if measurements < 0:
        raise ValueError("measurements must not be negative")
    directory = Path(directory)
    rng = rng if rng is not None else random.Random()
    ts = int(time.time()) if start_time is None else start_time

    map_path = directory / MAP_FILE
    map_path.write_text(
        "".join(f"{room} {sensor}\n" for room, sensor in zip(ROOM_IDS, SENSOR_IDS)),
        encoding="ascii",
    )

    data_path = directory / DATA_FILE
    text_path = directory / TEXT_FILE
    temperatures = list(START_TEMPERATURES)
    with ExitStack() as stack:
        data = stack.enter_context(data_path.open("wb"))
        text = (
            stack.enter_context(text_path.open("w", encoding="ascii"))
            if debug
            else None
        )
        for _ in range(measurements):
            for sensor_id, temperature in zip(SENSOR_IDS, temperatures):
                write_record(data, SensorData(sensor_id, temperature, ts))
                if text is not None:
                    text.write(f"{sensor_id} {temperature:g} {ts}\n")
            temperatures = [value + _drift(rng) for value in temperatures]
            ts += SLEEP_TIME

    written = [map_path, data_path]
    if debug:
        written.append(text_path)
    return written


def main(argv: Optional[Sequence[str]] = None) -> int:
    parser = argparse.ArgumentParser(
        description="Create a room map and simulated sensor data."
    )
    parser.add_argument("--directory", default=".")
    parser.add_argument("--measurements", type=int, default=NUM_MEASUREMENTS)
    parser.add_argument(
        "--debug", action="store_true", help="also write the data as text"
    )
    args = parser.parse_args(argv)
    try:
        generate_files(args.directory, args.measurements, debug=args.debug)
    except OSError as exc:
        print(f"Couldn't create output files: {exc}")
        return 1
    return 0


if __name__ == "__main__":
    sys.exit(main())