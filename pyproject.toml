[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "pinlogic"
version = "0.1.0"
description = "Hardware-independent logic for edge detection, time-based buzzer alarms and shift-register seven-segment displays"
requires-python = ">=3.10"
dependencies = []
keywords = ["embedded", "edge-detection", "alarm", "buzzer", "seven-segment", "shift-register"]
classifiers = [
    "Development Status :: 3 - Alpha",
    "Intended Audience :: Developers",
    "Programming Language :: Python :: 3",
    "Programming Language :: Python :: 3 :: Only",
    "Programming Language :: Python :: 3.10",
    "Programming Language :: Python :: 3.11",
    "Programming Language :: Python :: 3.12",
    "Programming Language :: Python :: 3.13",
    "Operating System :: OS Independent",
    "Topic :: Software Development :: Embedded Systems",
]

[project.optional-dependencies]
test = ["pytest"]

[tool.hatch.build.targets.wheel]
packages = ["pinlogic"]

[tool.pytest.ini_options]
addopts = "-ra"
