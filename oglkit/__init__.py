"""Camera, OBJ loading, picking, particle and transform utilities for real-time 3D rendering."""

__version__ = "0.1.0"

__all__ = [
    "camera",
    "hierarchy",
    "objloader",
    "orbit",
    "particles",
    "picking",
    "shaders",
    "transforms",
    "unproject",
]