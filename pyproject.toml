[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "serialcomm"
version = "0.1.0"
description = "Framed serial communication host: STX/ETX/ESC framing with CRC-16 and ACK replies"
requires-python = ">=3.10"
dependencies = []
keywords = ["serial", "uart", "framing", "crc16", "protocol"]
classifiers = [
    "Development Status :: 3 - Alpha",
    "Intended Audience :: Developers",
    "Operating System :: POSIX",
    "Programming Language :: Python :: 3",
    "Programming Language :: Python :: 3 :: Only",
    "Programming Language :: Python :: 3.10",
    "Programming Language :: Python :: 3.11",
    "Programming Language :: Python :: 3.12",
    "Programming Language :: Python :: 3.13",
    "Topic :: Terminals :: Serial",
    "Topic :: Communications",
]

[project.optional-dependencies]
test = ["pytest"]

[project.scripts]
serialcomm-host = "serialcomm.host:main"

[tool.hatch.build.targets.wheel]
packages = ["serialcomm"]

[tool.pytest.ini_options]
addopts = "-ra"
