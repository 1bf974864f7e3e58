[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "unirecords"
version = "0.1.0"
description = "Terminal front-end for a university records database in SQLite: students, professors, groups, subjects and marks."
requires-python = ">=3.10"
dependencies = []
keywords = ["university", "records", "students", "professors", "marks", "sqlite", "terminal"]
classifiers = [
    "Development Status :: 4 - Beta",
    "Environment :: Console",
    "Intended Audience :: Education",
    "Operating System :: OS Independent",
    "Programming Language :: Python :: 3",
    "Programming Language :: Python :: 3 :: Only",
    "Programming Language :: Python :: 3.10",
    "Programming Language :: Python :: 3.11",
    "Programming Language :: Python :: 3.12",
    "Programming Language :: Python :: 3.13",
    "Topic :: Database :: Front-Ends",
    "Topic :: Education",
]

[project.optional-dependencies]
test = ["pytest"]

[project.scripts]
unirecords = "unirecords.login:main"

[tool.hatch.build.targets.wheel]
packages = ["unirecords"]

[tool.pytest.ini_options]
addopts = "-ra"
