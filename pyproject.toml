[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "fastserial"
version = "0.1.0"
description = "Dataclass-driven JSON encoding and decoding with field renaming, tagged unions and schema hashes"
requires-python = ">=3.10"
dependencies = []
keywords = ["serialization", "json", "dataclasses", "schema", "tagged-union"]
classifiers = [
    "Development Status :: 3 - Alpha",
    "Intended Audience :: Developers",
    "Operating System :: OS Independent",
    "Programming Language :: Python :: 3",
    "Programming Language :: Python :: 3 :: Only",
    "Programming Language :: Python :: 3.10",
    "Programming Language :: Python :: 3.11",
    "Programming Language :: Python :: 3.12",
    "Programming Language :: Python :: 3.13",
    "Topic :: Software Development :: Libraries :: Python Modules",
    "Typing :: Typed",
]

[project.optional-dependencies]
test = ["pytest"]

[tool.hatch.build.targets.wheel]
packages = ["fastserial"]

[tool.pytest.ini_options]
addopts = "-ra"
