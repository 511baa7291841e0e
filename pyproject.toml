[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "sofiacore"
version = "0.1.0"
description = "Support structures for spectral-line source finding: parameter files, output paths, numeric text tables and an index stack."
requires-python = ">=3.10"
dependencies = []
keywords = ["astronomy", "source finding", "radio", "spectral line", "parameters", "tables"]
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
    "Topic :: Scientific/Engineering :: Astronomy",
]

[project.optional-dependencies]
test = ["pytest"]

[tool.hatch.build.targets.wheel]
packages = ["sofiacore"]

[tool.pytest.ini_options]
testpaths = ["tests"]
addopts = "-ra"

[tool.ruff]
line-length = 100
target-version = "py310"

[tool.mypy]
python_version = "3.10"
