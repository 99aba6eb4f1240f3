[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "mwameta"
version = "0.1.0"
description = "Metadata helpers for MWA radio telescope observations: timesteps, rf inputs, visibility polarisations and voltage files."
requires-python = ">=3.10"
dependencies = []
keywords = ["mwa", "radio astronomy", "metafits", "voltage capture", "metadata"]
classifiers = [
    "Development Status :: 3 - Alpha",
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
packages = ["mwameta"]

[tool.pytest.ini_options]
addopts = "-ra"
