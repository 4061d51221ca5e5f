"""C-style sprintf/sscanf, strerror messages and small string helpers."""

__version__ = "0.1.0"
__all__ = ["errors", "printf", "scanf", "sharp"]