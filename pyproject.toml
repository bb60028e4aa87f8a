[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "trafficlight"
version = "0.1.0"
description = "Traffic light controller with timed phase cycles, activity cycles, defect detection and event callbacks"
requires-python = ">=3.10"
dependencies = []
keywords = ["traffic light", "state machine", "embedded", "simulation", "timing"]
classifiers = [
    "Development Status :: 4 - Beta",
    "Intended Audience :: Developers",
    "Operating System :: OS Independent",
    "Programming Language :: Python :: 3",
    "Programming Language :: Python :: 3 :: Only",
    "Programming Language :: Python :: 3.10",
    "Programming Language :: Python :: 3.11",
    "Programming Language :: Python :: 3.12",
    "Programming Language :: Python :: 3.13",
    "Topic :: Software Development :: Embedded Systems",
]

[project.optional-dependencies]
test = ["pytest"]

[tool.hatch.build.targets.wheel]
packages = ["trafficlight"]

[tool.pytest.ini_options]
testpaths = ["tests"]
addopts = "-ra"
