[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "spinstep"
version = "0.1.0"
description = "Layered spherical node graphs with quaternion orientations and spin-step traversal"
requires-python = ">=3.10"
dependencies = []
keywords = ["quaternion", "orientation", "graph", "fibonacci sphere", "rotation"]
classifiers = [
    "Development Status :: 3 - Alpha",
    "Intended Audience :: Science/Research",
    "Intended Audience :: Developers",
    "Programming Language :: Python :: 3",
    "Programming Language :: Python :: 3 :: Only",
    "Programming Language :: Python :: 3.10",
    "Programming Language :: Python :: 3.11",
    "Programming Language :: Python :: 3.12",
    "Programming Language :: Python :: 3.13",
    "Operating System :: OS Independent",
    "Topic :: Scientific/Engineering :: Mathematics",
]

[project.optional-dependencies]
test = ["pytest"]

[project.scripts]
spinstep-demo = "spinstep.cli:main"

[tool.hatch.build.targets.wheel]
packages = ["spinstep"]

[tool.pytest.ini_options]
testpaths = ["tests"]
addopts = "-ra"
