import math

import pytest

from sensorgateway.datamgr import (
    RUN_AVG_LENGTH,
    DataManager,
    SensorElement,
    SensorNotFoundError,
    main,
)
from sensorgateway.sensor import SensorData, write_record


def _write_files(tmp_path, mapping, records):
    map_path = tmp_path / "room_sensor.map"
    map_path.write_text("".join(f"{room} {sensor}\n" for room, sensor in mapping))
    data_path = tmp_path / "sensor_data"
    with data_path.open("wb") as fh:
        for record in records:
            write_record(fh, record)
    return map_path, data_path


def _load(tmp_path, mapping, records, **kwargs):
    map_path, data_path = _write_files(tmp_path, mapping, records)
    manager = DataManager(**kwargs)
    with map_path.open() as map_file, data_path.open("rb") as data_file:
        manager.parse_sensor_files(map_file, data_file)
    return manager


MAPPING = [(1, 15), (2, 21), (3, 37)]


def test_room_ids_come_from_map(tmp_path):
    manager = _load(tmp_path, MAPPING, [])
    for room, sensor in MAPPING:
        assert manager.get_room_id(sensor) == room


def test_total_sensors_counts_map_lines(tmp_path):
    manager = _load(tmp_path, MAPPING, [])
    assert manager.total_sensors() == len(MAPPING)


def test_malformed_map_lines_are_skipped(tmp_path):
    map_path = tmp_path / "room_sensor.map"
    map_path.write_text("1 15\ngarbage\n\n2 21\n")
    data_path = tmp_path / "sensor_data"
    data_path.write_bytes(b"")
    manager = DataManager()
    with map_path.open() as m, data_path.open("rb") as d:
        manager.parse_sensor_files(m, d)
    assert manager.total_sensors() == 2
    assert manager.get_room_id(21) == 2


def test_unknown_sensor_raises(tmp_path):
    manager = _load(tmp_path, MAPPING, [])
    with pytest.raises(SensorNotFoundError) as info:
        manager.get_room_id(999)
    assert info.value.sensor_id == 999
    with pytest.raises(SensorNotFoundError):
        manager.get_avg(999)
    with pytest.raises(SensorNotFoundError):
        manager.get_last_modified(999)


def test_last_modified_is_latest_timestamp(tmp_path):
    records = [SensorData(15, 20.0, 1000), SensorData(15, 21.0, 1030)]
    manager = _load(tmp_path, MAPPING, records)
    assert manager.get_last_modified(15) == 1030
    assert manager.get_last_modified(21) == 0


def test_average_of_constant_readings(tmp_path, capsys):
    records = [SensorData(21, 20.0, ts) for ts in range(3)]
    manager = _load(tmp_path, MAPPING, records)
    assert manager.get_avg(21) == pytest.approx(20.0)
    assert "Temp:" in capsys.readouterr().out


def test_old_readings_leave_the_window(tmp_path, capsys):
    records = [SensorData(15, 100.0, ts) for ts in range(RUN_AVG_LENGTH)]
    records += [
        SensorData(15, 20.0, ts) for ts in range(RUN_AVG_LENGTH, 2 * RUN_AVG_LENGTH)
    ]
    manager = _load(tmp_path, MAPPING, records)
    assert manager.get_avg(15) == pytest.approx(20.0)


def test_too_warm_and_too_cold_messages(tmp_path, capsys):
    records = [SensorData(15, 60.0, 1), SensorData(21, -5.0, 1)]
    manager = _load(tmp_path, MAPPING, records)
    manager.get_avg(15)
    assert "It's too warm" in capsys.readouterr().out
    manager.get_avg(21)
    assert "It's too cold" in capsys.readouterr().out


def test_custom_limits(tmp_path, capsys):
    records = [SensorData(15, 30.0, 1)]
    manager = _load(tmp_path, MAPPING, records, max_temp=25.0)
    manager.get_avg(15)
    assert "It's too warm" in capsys.readouterr().out


def test_no_readings_gives_nan(tmp_path, capsys):
    manager = _load(tmp_path, MAPPING, [])
    assert math.isnan(manager.get_avg(37))
    assert "No valid data" in capsys.readouterr().err


def test_unknown_sensor_in_data_is_dropped(tmp_path, capsys):
    records = [SensorData(77, 20.0, 5), SensorData(15, 18.0, 6)]
    manager = _load(tmp_path, MAPPING, records)
    assert "not in list" in capsys.readouterr().err
    assert manager.total_sensors() == len(MAPPING)
    assert manager.get_last_modified(15) == 6


def test_trailing_partial_record_is_ignored(tmp_path):
    map_path, data_path = _write_files(
        tmp_path, MAPPING, [SensorData(15, 18.0, 6)]
    )
    with data_path.open("ab") as fh:
        fh.write(SensorData(15, 99.0, 7).to_bytes()[:5])
    manager = DataManager()
    with map_path.open() as m, data_path.open("rb") as d:
        manager.parse_sensor_files(m, d)
    assert manager.get_last_modified(15) == 6


def test_clear_forgets_sensors(tmp_path):
    manager = _load(tmp_path, MAPPING, [])
    manager.clear()
    assert manager.total_sensors() == 0
    with pytest.raises(SensorNotFoundError):
        manager.get_room_id(15)


def test_element_window_and_invalid_values():
    element = SensorElement(15, room_id=1, run_avg_length=2)
    element.add_reading(-300.0, 1)
    assert math.isnan(element.average())
    element.add_reading(10.0, 2)
    element.add_reading(10.0, 3)
    assert element.average() == pytest.approx(10.0)
    assert len(element.readings) == 2
    assert element.last_modified == 3


def test_element_rejects_empty_window():
    with pytest.raises(ValueError):
        SensorElement(1, run_avg_length=0)
    with pytest.raises(ValueError):
        DataManager(run_avg_length=0)


def test_main_success(tmp_path):
    map_path, data_path = _write_files(
        tmp_path, MAPPING, [SensorData(15, 18.0, 6)]
    )
    assert main([str(map_path), str(data_path)]) == 0


def test_main_missing_file(tmp_path):
    assert main([str(tmp_path / "missing.map"), str(tmp_path / "missing")]) == 1