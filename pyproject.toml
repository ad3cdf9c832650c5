[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "cuutils"
version = "0.1.0"
description = "Byte, WAV, Opus packet container, image, file, timing and threading utilities for game networking clients"
requires-python = ">=3.10"
dependencies = [
    "pillow",
]
keywords = ["wav", "pcm", "opus", "cityhash", "transforms", "timer", "threading", "utilities"]
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
    "Topic :: Software Development :: Libraries",
    "Topic :: Multimedia :: Sound/Audio :: Conversion",
]

[project.optional-dependencies]
test = [
    "pytest",
]

[tool.hatch.build.targets.wheel]
packages = ["cuutils"]

[tool.pytest.ini_options]
testpaths = ["tests"]
addopts = "-ra"

[tool.ruff]
line-length = 100
target-version = "py310"

[tool.mypy]
python_version = "3.10"
warn_unused_ignores = true
