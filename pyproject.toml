[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "visionkit"
version = "0.1.0"
description = "Classic computer-vision algorithms: graph-based segmentation, symmetry detection, fiducial marker helpers and small 3D geometry helpers."
requires-python = ">=3.10"
dependencies = [
    "numpy",
    "pillow",
]
keywords = [
    "computer-vision",
    "image-segmentation",
    "disjoint-set",
    "symmetry-detection",
    "hough-transform",
    "fiducial-markers",
    "arcball",
    "mesh",
]
classifiers = [
    "Development Status :: 4 - Beta",
    "Intended Audience :: Developers",
    "Intended Audience :: Science/Research",
    "Operating System :: OS Independent",
    "Programming Language :: Python :: 3",
    "Programming Language :: Python :: 3 :: Only",
    "Programming Language :: Python :: 3.10",
    "Programming Language :: Python :: 3.11",
    "Programming Language :: Python :: 3.12",
    "Programming Language :: Python :: 3.13",
    "Topic :: Scientific/Engineering :: Image Processing",
    "Typing :: Typed",
]

[project.optional-dependencies]
test = [
    "pytest",
]

[project.scripts]
visionkit-segment = "visionkit.segmentation:main"

[tool.hatch.build.targets.wheel]
packages = ["visionkit"]

[tool.pytest.ini_options]
addopts = "-ra"

[tool.ruff]
line-length = 100
target-version = "py310"

[tool.mypy]
python_version = "3.10"
warn_unused_ignores = true
