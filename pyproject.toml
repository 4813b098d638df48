[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "edgechains"
version = "0.1.0"
description = "Edge-point chains: a bounded chain store with filiation links, chain fusion, angular sampling, segment features and contrast-based segment orientation"
requires-python = ">=3.10"
dependencies = []
keywords = [
    "edge detection",
    "contour chains",
    "polygonal approximation",
    "image processing",
    "segments",
]
classifiers = [
    "Development Status :: 4 - Beta",
    "Intended Audience :: Science/Research",
    "Operating System :: OS Independent",
    "Programming Language :: Python :: 3",
    "Programming Language :: Python :: 3 :: Only",
    "Programming Language :: Python :: 3.10",
    "Programming Language :: Python :: 3.11",
    "Programming Language :: Python :: 3.12",
    "Programming Language :: Python :: 3.13",
    "Topic :: Scientific/Engineering :: Image Processing",
]

[project.optional-dependencies]
test = ["pytest"]

[tool.hatch.build.targets.wheel]
packages = ["edgechains"]

[tool.pytest.ini_options]
testpaths = ["tests"]
addopts = "-ra"

[tool.ruff]
line-length = 100
target-version = "py310"

[tool.mypy]
python_version = "3.10"
warn_unused_ignores = true
