[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "glrenderer"
version = "0.1.0"
description = "A small OpenGL renderer that draws a colour-shaded pyramid with a fly-through camera"
requires-python = ">=3.10"
keywords = ["opengl", "renderer", "camera", "shader", "pyglet", "3d"]
classifiers = [
    "Development Status :: 3 - Alpha",
    "Intended Audience :: Developers",
    "Operating System :: OS Independent",
    "Programming Language :: Python :: 3",
    "Programming Language :: Python :: 3 :: Only",
    "Programming Language :: Python :: 3.10",
    "Programming Language :: Python :: 3.11",
    "Programming Language :: Python :: 3.12",
    "Programming Language :: Python :: 3.13",
    "Topic :: Multimedia :: Graphics :: 3D Rendering",
]
dependencies = [
    "pyglet>=2.0",
    "numpy>=1.23",
]

[project.optional-dependencies]
test = [
    "pytest>=7.0",
]

[project.scripts]
glrenderer = "glrenderer.app:main"

[tool.hatch.build.targets.wheel]
packages = ["glrenderer"]

[tool.pytest.ini_options]
testpaths = ["tests"]
addopts = "-ra"

[tool.ruff]
line-length = 100
target-version = "py310"
