"""Sensor data toolkit: binary records, a callback list, running averages, a log writer and CSV storage."""

__version__ = "0.1.0"