[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "highload"
version = "0.1.0"
description = "A small TCP server and client that exchange a name and a number and report their sum"
requires-python = ">=3.10"
dependencies = []
keywords = ["tcp", "server", "client", "selectors", "thread pool", "networking"]
classifiers = [
    "Development Status :: 4 - Beta",
    "Environment :: Console",
    "Intended Audience :: Developers",
    "Operating System :: POSIX",
    "Programming Language :: Python :: 3",
    "Programming Language :: Python :: 3 :: Only",
    "Programming Language :: Python :: 3.10",
    "Programming Language :: Python :: 3.11",
    "Programming Language :: Python :: 3.12",
    "Programming Language :: Python :: 3.13",
    "Topic :: Internet",
    "Topic :: System :: Networking",
]

[project.optional-dependencies]
test = ["pytest"]

[project.scripts]
highload = "highload.cli:main"

[tool.hatch.build.targets.wheel]
packages = ["highload"]

[tool.pytest.ini_options]
addopts = "-ra"
