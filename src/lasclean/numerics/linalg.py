# src/lasclean/numerics/linalg.py
from __future__ import annotations

import numpy as np

from lasclean.errors import NumericError

# Pivots smaller than this are treated as zero.
PIVOT_EPS = 1e-12


def _as_matrix(a: object, *, name: str) -> np.ndarray:
    m = np.asarray(a, dtype="float64")
    if m.ndim != 2:
        raise ValueError(f"{name} must be a 2-D matrix (got ndim={m.ndim})")
    return m


def multiply(a: object, b: object) -> np.ndarray:
    """Dense product a @ b. Raises ValueError on inner-dimension mismatch."""
    am = _as_matrix(a, name="a")
    bm = _as_matrix(b, name="b")
    if am.shape[1] != bm.shape[0]:
        raise ValueError(f"Cannot multiply {am.shape} by {bm.shape}")
    return am @ bm


def transpose(a: object) -> np.ndarray:
    return _as_matrix(a, name="a").T.copy()


def invert(a: object, *, eps: float = PIVOT_EPS) -> np.ndarray:
    """
    Inverse of a square matrix by Gauss-Jordan elimination with partial pivoting.

    The row holding the largest |value| in the pivot column is swapped into place
    before each elimination step.

    Raises:
      - ValueError if the matrix is not square
      - NumericError if a pivot magnitude falls below eps (singular / near-singular)
    """
    m = _as_matrix(a, name="a")
    n, k = m.shape
    if n != k:
        raise ValueError(f"Only square matrices can be inverted (got {m.shape})")
    if n == 0:
        return np.zeros((0, 0), dtype="float64")

    aug = np.hstack([m, np.eye(n, dtype="float64")])

    for col in range(n):
        pivot_row = col + int(np.argmax(np.abs(aug[col:, col])))
        pivot = float(aug[pivot_row, col])
        if not np.isfinite(pivot) or abs(pivot) < float(eps):
            raise NumericError(
                f"matrix is singular or near-singular (pivot {pivot:.3e} in column {col})"
            )
        if pivot_row != col:
            aug[[col, pivot_row]] = aug[[pivot_row, col]]

        aug[col] /= pivot
        for r in range(n):
            if r == col:
                continue
            factor = aug[r, col]
            if factor != 0.0:
                aug[r] -= factor * aug[col]

    return aug[:, n:].copy()
