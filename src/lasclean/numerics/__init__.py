# src/lasclean/numerics/__init__.py
from __future__ import annotations

from .linalg import invert, multiply, transpose

__all__ = ["invert", "multiply", "transpose"]
