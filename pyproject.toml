[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "oglkit"
version = "0.1.0"
description = "Camera, OBJ loading, picking, particle and transform utilities for real-time 3D rendering"
requires-python = ">=3.10"
dependencies = [
    "numpy",
]
keywords = ["opengl", "3d", "camera", "obj", "wavefront", "picking", "particles", "unproject"]
classifiers = [
    "Development Status :: 4 - Beta",
    "Intended Audience :: Developers",
    "Intended Audience :: Education",
    "Programming Language :: Python :: 3",
    "Programming Language :: Python :: 3 :: Only",
    "Programming Language :: Python :: 3.10",
    "Programming Language :: Python :: 3.11",
    "Programming Language :: Python :: 3.12",
    "Programming Language :: Python :: 3.13",
    "Operating System :: OS Independent",
    "Topic :: Multimedia :: Graphics :: 3D Rendering",
]

[project.optional-dependencies]
test = [
    "pytest",
]

[tool.hatch.build.targets.wheel]
packages = ["oglkit"]

[tool.pytest.ini_options]
testpaths = ["tests"]
addopts = "-ra"
