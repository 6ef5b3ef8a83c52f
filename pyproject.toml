[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "txtlogparser"
version = "0.1.0"
description = "Engine for filtering, searching and highlighting lines in plain-text log files"
requires-python = ">=3.10"
dependencies = []
keywords = ["log", "filter", "search", "highlight", "text"]
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
    "Topic :: Internet :: Log Analysis",
    "Topic :: Text Processing :: Filters",
]

[project.optional-dependencies]
test = ["pytest"]

[tool.hatch.build.targets.wheel]
packages = ["txtlogparser"]

[tool.pytest.ini_options]
addopts = "-ra"
