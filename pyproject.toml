[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "edcore"
version = "0.1.0"
description = "Entity world model core: convex hulls, entities, joint relations, map-view state and update/query handling"
requires-python = ">=3.10"
keywords = ["world model", "robotics", "convex hull", "entities", "joint interpolation"]
classifiers = [
    "Development Status :: 3 - Alpha",
    "Intended Audience :: Developers",
    "Intended Audience :: Science/Research",
    "Programming Language :: Python :: 3",
    "Programming Language :: Python :: 3 :: Only",
    "Programming Language :: Python :: 3.10",
    "Programming Language :: Python :: 3.11",
    "Programming Language :: Python :: 3.12",
    "Programming Language :: Python :: 3.13",
    "Operating System :: OS Independent",
    "Topic :: Scientific/Engineering :: Artificial Intelligence",
]
dependencies = [
    "pyyaml",
]

[project.optional-dependencies]
test = [
    "pytest",
]

[tool.hatch.build.targets.wheel]
packages = ["edcore"]

[tool.pytest.ini_options]
addopts = "-ra"
