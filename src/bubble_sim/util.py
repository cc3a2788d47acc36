# MIT License (see LICENSE)
"""
Vector helpers for positions, velocities and accelerations.

All vectors are float64 numpy arrays of any dimension; the bubble algebra
never assumes 2D or 3D.
"""
from __future__ import annotations
import numpy as np


def f64(x) -> np.ndarray:
    """Convert any array-like to a float64 numpy array (copying)."""
    return np.array(x, dtype=np.float64)


def norm(v: np.ndarray) -> float:
    """Euclidean length of a vector."""
    return float(np.sqrt(np.dot(v, v)))


def unit(v: np.ndarray, eps: float = 1e-12) -> np.ndarray:
    """
    Return a unit vector in the direction of v.

    Returns the zero vector if |v| < eps to avoid division by zero.
    """
    n = norm(v)
    if n < eps:
        return np.zeros_like(v, dtype=np.float64)
    return v / n
