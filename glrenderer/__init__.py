"""OpenGL pyramid renderer with a fly-through camera, shader and buffer wrappers and a logger."""

__version__ = "0.1.0"
__all__ = ["__version__"]