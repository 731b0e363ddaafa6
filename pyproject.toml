[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "sensorgateway"
version = "0.1.0"
description = "Sensor data toolkit: binary sensor records, a callback-driven list, running averages, a background log writer and CSV storage"
requires-python = ">=3.10"
dependencies = []
keywords = [
    "sensor",
    "monitoring",
    "temperature",
    "running-average",
    "linked-list",
    "logging",
    "csv",
]
classifiers = [
    "Development Status :: 4 - Beta",
    "Intended Audience :: Developers",
    "Intended Audience :: Education",
    "Operating System :: OS Independent",
    "Programming Language :: Python :: 3",
    "Programming Language :: Python :: 3 :: Only",
    "Programming Language :: Python :: 3.10",
    "Programming Language :: Python :: 3.11",
    "Programming Language :: Python :: 3.12",
    "Programming Language :: Python :: 3.13",
    "Topic :: System :: Monitoring",
    "Typing :: Typed",
]

[project.optional-dependencies]
test = ["pytest"]

[project.scripts]
sensorgateway-datamgr = "sensorgateway.datamgr:main"
sensorgateway-generate = "sensorgateway.file_creator:main"
sensorgateway-db = "sensorgateway.sensor_db:main"

[tool.hatch.build.targets.wheel]
packages = ["sensorgateway"]

[tool.pytest.ini_options]
addopts = "-ra"

[tool.ruff]
line-length = 100
target-version = "py310"

[tool.mypy]
python_version = "3.10"
warn_unused_ignores = true
