[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "hisysevent"
version = "0.1.0"
description = "Client-side helpers for system events: rules, parcels, callbacks, event JSON checking and command-line logic"
requires-python = ">=3.10"
dependencies = []
keywords = ["system events", "logging", "event query", "event subscription", "json", "parcel"]
classifiers = [
    "Development Status :: 3 - Alpha",
    "Intended Audience :: Developers",
    "Intended Audience :: System Administrators",
    "Operating System :: OS Independent",
    "Programming Language :: Python :: 3",
    "Programming Language :: Python :: 3 :: Only",
    "Programming Language :: Python :: 3.10",
    "Programming Language :: Python :: 3.11",
    "Programming Language :: Python :: 3.12",
    "Programming Language :: Python :: 3.13",
    "Topic :: System :: Logging",
    "Topic :: System :: Monitoring",
]

[project.optional-dependencies]
test = ["pytest"]

[tool.hatch.build.targets.wheel]
packages = ["hisysevent"]

[tool.hatch.build.targets.sdist]
include = ["hisysevent", "tests"]

[tool.pytest.ini_options]
testpaths = ["tests"]
addopts = "-ra"
