"""An OpenGL viewer for textured Wavefront OBJ models, with matrix and OBJ-loading helpers."""

__version__ = "1.0.0"