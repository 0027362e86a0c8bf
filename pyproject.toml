[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "silica"
version = "0.2.1"
description = "Reader for Procreate documents: keyed-archive decoding, layer hierarchy, tile atlases and canvas view geometry."
requires-python = ">=3.10"
keywords = ["procreate", "nskeyedarchiver", "plist", "layers", "tiles", "lzo", "lz4"]
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
    "Topic :: Multimedia :: Graphics :: Graphics Conversion",
]
dependencies = [
    "lz4",
]

[project.optional-dependencies]
test = [
    "pytest",
]

[tool.hatch.build.targets.wheel]
packages = ["silica"]

[tool.pytest.ini_options]
testpaths = ["tests"]
addopts = "-ra"
