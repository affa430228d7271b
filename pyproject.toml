[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "bunnytrace"
version = "0.1.0"
description = "A small Whitted-style ray tracer with a BVH, OBJ mesh loading and PPM output"
requires-python = ">=3.10"
dependencies = []
keywords = ["ray tracing", "bvh", "obj", "ppm", "rendering", "whitted"]
classifiers = [
    "Development Status :: 4 - Beta",
    "Intended Audience :: Education",
    "Intended Audience :: Developers",
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
test = ["pytest"]

[project.scripts]
bunnytrace = "bunnytrace.renderer:main"

[tool.hatch.build.targets.wheel]
packages = ["bunnytrace"]

[tool.pytest.ini_options]
testpaths = ["tests"]
addopts = "-ra"
