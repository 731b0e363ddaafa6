# sensorgateway

A small toolkit for working with temperature sensor readings stored in files.

- **Sensor records** (`sensorgateway.sensor`): `SensorData` holds a sensor id,
  a value and a timestamp. A record is 18 bytes: the id as an unsigned 16-bit
  integer, the value as a 64-bit float and the timestamp as a signed 64-bit
  integer, little-endian and unpadded. Use `to_bytes` and
  `SensorData.from_bytes` for single records, and `read_records` and
  `write_record` for streams. `read_records` ignores a trailing incomplete
  record.
- **Callback list** (`sensorgateway.dplist`): `DPList` is a positional list
  with copy, free and compare callbacks. Indices are forgiving. An index of 0
  or less means the first node. An index past the end means the last node, or
  the end of the list when inserting.
- **Data manager** (`sensorgateway.datamgr`): `DataManager` reads a room/sensor
  map and a binary sensor data file. For each sensor it keeps the room, the
  time of the last reading and a running average over the most recent
  readings. Records from sensors that are not in the map are dropped, with a
  message on stderr.
- **File generator** (`sensorgateway.file_creator`): `generate_files` writes a
  room/sensor map and simulated readings for eight sensors.
- **Log writer** (`sensorgateway.logger`): `LogProcess` appends numbered,
  timestamped lines (`<n> - <time> - <message>`) to a log file from a
  background thread.
- **Storage** (`sensorgateway.sensor_db`): `SensorDatabase` appends readings to
  a CSV file as `<id> ,<value> ,<timestamp>` rows. It sends a log line for
  each operation.

## Installation

```
pip install .
```

To run the tests:

```
pip install ".[test]"
pytest
```

## Command-line tools

Create a room/sensor map (`room_sensor.map`) and a binary data file
(`sensor_data`) in the current directory:

```
sensorgateway-generate
```

It takes these options:

- `--directory DIR`: write the files somewhere else.
- `--measurements N`: the number of measurement rounds. The default is 100.
- `--debug`: also write a text copy of the data to `sensor_data_text`.

Parse a map and a data file:

```
sensorgateway-datamgr [map_file] [data_file]
```

The files default to `room_sensor.map` and `sensor_data`.

Write a few sample readings to `sensor_db.csv`, with log lines in
`gateway.log`:

```
sensorgateway-db [filename] [--log LOGFILE]
```

This command pauses for a few seconds between writes.

## Library use

```python
from sensorgateway.dplist import DPList

def compare(x, y):
    return (x > y) - (x < y)

items = DPList(lambda e: e, lambda e: None, compare)
items.insert_at_index(3, 0, False)
items.insert_at_index(7, 99, False)   # past the end: appended
items.insert_at_index(5, 1, False)
assert list(items) == [3, 5, 7]
assert items.get_index_of_element(7) == 2
```

```python
from sensorgateway.datamgr import DataManager

manager = DataManager(5, 50.0, 0.0)
with open("room_sensor.map") as map_file, open("sensor_data", "rb") as data_file:
    manager.parse_sensor_files(map_file, data_file)

print(manager.total_sensors())
print(manager.get_room_id(15), manager.get_avg(15), manager.get_last_modified(15))
```

If the sensor id is not in the map, `get_room_id`, `get_avg` and
`get_last_modified` raise `SensorNotFoundError`. `get_avg` also prints the
average. It reports when the average is above the maximum temperature or
below the minimum.

```python
from sensorgateway.sensor_db import SensorDatabase

with SensorDatabase("readings.csv", append=True, log_path="gateway.log") as db:
    db.insert_sensor(1, 21.5, 1700000000)
```

Pass `log_path=None` to store readings without logging.

## What this package does not do

The package works on files only:

- It has no network side. No sensor node sends readings over TCP, and no
  server receives them.
- It has no multi-threaded pipeline that moves readings from a data file
  through a shared buffer to reader threads.

Readings come from files that `generate_files` writes or that you supply, and
results go to the console, to CSV files and to the log file.