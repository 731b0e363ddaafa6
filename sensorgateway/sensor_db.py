"""A CSV store of sensor readings that reports its activity to a log writer."""

from __future__ import annotations

import argparse
import sys
import time
from pathlib import Path
from typing import Optional, Sequence, Union

from .logger import DEFAULT_LOG_FILE, LogProcess

DEFAULT_DB_FILE = "sensor_db.csv"


def format_row(sensor_id: int, value: float, ts: int) -> str:
    """Return one stored row, without its line ending."""
    return f"{sensor_id} ,{value:.6f} ,{ts}"


class SensorDatabase:
    """Append-only CSV file of readings, optionally logged."""

    def __init__(
        self,
        filename: Union[str, Path] = DEFAULT_DB_FILE,
        append: bool = True,
        log_path: Optional[Union[str, Path]] = DEFAULT_LOG_FILE,
    ) -> None:
        self._logger = LogProcess(log_path).start() if log_path is not None else None
        try:
            self._file = open(filename, "a" if append else "w", encoding="ascii")
        except OSError:
            self._log("Error: Failed to open database file")
            self._stop_logger()
            raise
        self._log("Data file opened.")

    def _log(self, msg: str) -> None:
        if self._logger is not None:
            self._logger.write(msg)

    def _stop_logger(self) -> None:
        if self._logger is not None:
            self._logger.stop()

    def insert_sensor(self, sensor_id: int, value: float, ts: int) -> None:
        """Append one reading to the file."""
        try:
            self._file.write(format_row(sensor_id, value, ts) + "\n")
        except (OSError, ValueError):
            self._log("Failed to write to file")
            raise
        self._log("Data inserted.")

    def close(self) -> None:
        """Close the file and the log writer; closing twice does nothing."""
        if self._file.closed:
            return
        try:
            self._file.close()
        except OSError:
            self._log("Failed to close file")
            self._stop_logger()
            raise
        self._log("Data file closed.")
        self._stop_logger()

    def __enter__(self) -> "SensorDatabase":
        return self

    def __exit__(self, exc_type, exc, tb) -> None:
        self.close()


def main(argv: Optional[Sequence[str]] = None) -> int:
    parser = argparse.ArgumentParser(description="Store a few sample readings.")
    parser.add_argument("filename", nargs="?", default=DEFAULT_DB_FILE)
    parser.add_argument("--log", default=DEFAULT_LOG_FILE)
    args = parser.parse_args(argv)
    try:
        with SensorDatabase(args.filename, True, args.log) as db:
            time.sleep(1)
            value = 0.0
            ts = 0
            for sensor_id, value in ((1, 0.001), (2, 0.002), (3, 0.003)):
                ts = int(time.time())
                db.insert_sensor(sensor_id, value, ts)
            time.sleep(5)
            db.insert_sensor(4, value, ts)
    except (OSError, ValueError) as exc:
        print(f"Failed to use database file: {exc}", file=sys.stderr)
        return 1
    return 0


if __name__ == "__main__":
    sys.exit(main())