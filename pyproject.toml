[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "robogenius"
version = "0.1.0"
description = "Command scheduling, timers, PID control and configuration utilities for small mobile robots"
requires-python = ">=3.10"
keywords = ["robotics", "pid", "scheduler", "command", "configuration", "yaml"]
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
    "Topic :: Scientific/Engineering :: Human Machine Interfaces",
]
dependencies = [
    "pyyaml",
]

[project.optional-dependencies]
test = [
    "pytest",
]

[tool.hatch.build.targets.wheel]
packages = ["robogenius"]

[tool.pytest.ini_options]
testpaths = ["tests"]
addopts = "-ra"
