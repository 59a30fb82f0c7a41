[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "piksy"
version = "1.0.0"
description = "Sprite sheet and animation editing core: frame extraction, colour swapping, project files and viewport logic"
requires-python = ">=3.10"
keywords = ["sprite", "sprite-sheet", "animation", "pixel-art", "frame-extraction"]
classifiers = [
    "Development Status :: 4 - Beta",
    "Intended Audience :: Developers",
    "Programming Language :: Python :: 3",
    "Programming Language :: Python :: 3 :: Only",
    "Programming Language :: Python :: 3.10",
    "Programming Language :: Python :: 3.11",
    "Programming Language :: Python :: 3.12",
    "Programming Language :: Python :: 3.13",
    "Operating System :: OS Independent",
    "Topic :: Multimedia :: Graphics :: Editors :: Raster-Based",
]
dependencies = [
    "numpy",
    "scipy",
    "pillow",
]

[project.optional-dependencies]
test = [
    "pytest",
]

[tool.hatch.build.targets.wheel]
packages = ["piksy"]

[tool.pytest.ini_options]
addopts = "-ra"
