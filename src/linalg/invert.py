"""Dense matrix inversion with singularity detection."""

from __future__ import annotations

import logging
from typing import Any, Optional

import numpy as np

logger = logging.getLogger(__name__)

DEFAULT_TOL: float = float(np.finfo(np.float64).eps)


class ComputeError(ValueError):
    """Raised when a matrix cannot be inverted."""


def _as_square_matrix(matrix: Any) -> np.ndarray:
    try:
        a = np.asarray(matrix, dtype=np.float64)
    except (TypeError, ValueError) as exc:
        raise ComputeError(f"matrix is not numeric: {exc}") from exc

    if a.ndim != 2:
        raise ComputeError(f"expected a 2-D matrix, got {a.ndim}-D input")
    rows, cols = a.shape
    if rows != cols:
        raise ComputeError(f"matrix must be square, got {rows}x{cols}")
    return a


def invert(matrix: Any, tol: Optional[float] = None) -> np.ndarray:
    """
    Return the inverse of a square matrix.

    Args:
        matrix: Square array-like of floats.
        tol: Smallest acceptable reciprocal condition number (1-norm).
            Matrices below it are rejected as computationally singular.

    Raises:
        ComputeError: non-square, non-numeric or singular input.
    """
    a = _as_square_matrix(matrix)
    if a.shape[0] == 0:
        return np.empty((0, 0), dtype=np.float64)

    if tol is None:
        tol = DEFAULT_TOL

    try:
        with np.errstate(all="ignore"):
            cond = np.linalg.cond(a, 1)
    except np.linalg.LinAlgError as exc:
        raise ComputeError(str(exc)) from exc
    if not np.isfinite(cond) or cond == 0:
        raise ComputeError("matrix is exactly singular")

    rcond = 1.0 / cond
    if rcond < tol:
        raise ComputeError(
            f"system is computationally singular: reciprocal condition number = {rcond:.6g}"
        )

    try:
        inverse = np.linalg.inv(a)
    except np.linalg.LinAlgError as exc:
        raise ComputeError(str(exc)) from exc

    logger.debug("Inverted %dx%d matrix (rcond=%.3g)", a.shape[0], a.shape[1], rcond)
    return inverse
