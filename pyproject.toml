[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "attrtool"
version = "0.1.0"
description = "Attribute information database, big-endian value encoding, Cronus target names and dump text formats for device tree attributes"
requires-python = ">=3.10"
dependencies = []
keywords = ["device-tree", "attributes", "firmware", "cronus", "fapi"]
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
packages = ["attrtool"]

[tool.pytest.ini_options]
addopts = "-ra"
