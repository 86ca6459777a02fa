[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "treerecon"
version = "0.1.0"
description = "Reconstruct integer-weighted trees from leaf distance matrices with neighbor joining"
requires-python = ">=3.10"
dependencies = []
keywords = ["phylogenetics", "neighbor-joining", "tree", "distance-matrix", "reconstruction"]
classifiers = [
    "Development Status :: 4 - Beta",
    "Environment :: Console",
    "Intended Audience :: Science/Research",
    "Operating System :: OS Independent",
    "Programming Language :: Python :: 3",
    "Programming Language :: Python :: 3 :: Only",
    "Programming Language :: Python :: 3.10",
    "Programming Language :: Python :: 3.11",
    "Programming Language :: Python :: 3.12",
    "Programming Language :: Python :: 3.13",
    "Topic :: Scientific/Engineering :: Bio-Informatics",
]

[project.optional-dependencies]
test = ["pytest"]

[project.scripts]
tree-reconstruction = "treerecon.cli:main"

[tool.hatch.build.targets.wheel]
packages = ["treerecon"]

[tool.pytest.ini_options]
testpaths = ["tests"]
addopts = "-ra"
