[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "slightx"
version = "0.1.0"
description = "Small systems-programming building blocks: number formatting, alignment, bitmaps, timers, allocators, wait queues, path normalisation and undefined-behaviour reports"
requires-python = ">=3.10"
dependencies = []
keywords = [
    "allocator",
    "arena",
    "bitmap",
    "formatter",
    "itoa",
    "waitqueue",
    "mutex",
    "semaphore",
    "vfs",
    "ubsan",
]
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
    "Topic :: Software Development :: Libraries",
]

[project.optional-dependencies]
test = ["pytest"]

[tool.hatch.build.targets.wheel]
packages = ["slightx"]

[tool.pytest.ini_options]
testpaths = ["tests"]
addopts = "-ra"
