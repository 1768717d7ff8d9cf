[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "edmstats"
version = "0.1.0"
description = "NaN-aware statistics, correlation, AUC and distance helpers for empirical dynamic modelling"
requires-python = ">=3.10"
keywords = ["statistics", "correlation", "auc", "delong", "distance", "nearest-neighbours", "edm"]
classifiers = [
    "Development Status :: 4 - Beta",
    "Intended Audience :: Science/Research",
    "Programming Language :: Python :: 3",
    "Programming Language :: Python :: 3 :: Only",
    "Programming Language :: Python :: 3.10",
    "Programming Language :: Python :: 3.11",
    "Programming Language :: Python :: 3.12",
    "Programming Language :: Python :: 3.13",
    "Operating System :: OS Independent",
    "Topic :: Scientific/Engineering :: Mathematics",
]
dependencies = [
    "numpy",
    "scipy",
]

[project.optional-dependencies]
test = [
    "pytest",
]

[tool.hatch.build.targets.wheel]
packages = ["edmstats"]

[tool.pytest.ini_options]
testpaths = ["tests"]
addopts = "-ra"
