# MIT License (see LICENSE)
"""
Positions: anything with a similarity metric and a midpoint.

The solver never looks inside a position. It only needs
    - similarity(other): symmetric, non-negative, zero iff identical;
    - midpoint(other): the point equally similar to both, as close as possible.

VectorN is the Euclidean implementation used by the bundled bodies.
"""
from __future__ import annotations
from dataclasses import dataclass
from typing import Protocol, runtime_checkable

import numpy as np

from ..util import f64, norm


@runtime_checkable
class Position(Protocol):
    def similarity(self, other) -> float:
        ...

    def midpoint(self, other):
        ...


@dataclass(frozen=True, eq=False)
class VectorN:
    """
    Immutable point in n-dimensional Euclidean space.

    Attributes:
        values: Coordinates as a read-only float64 array of shape (n,).
    """
    values: np.ndarray

    def __post_init__(self) -> None:
        values = f64(self.values).reshape(-1)
        values.setflags(write=False)
        object.__setattr__(self, "values", values)

    @classmethod
    def zeros(cls, dimension: int) -> VectorN:
        return cls(np.zeros(dimension, dtype=np.float64))

    @property
    def dimension(self) -> int:
        return int(self.values.shape[0])

    @property
    def magnitude(self) -> float:
        return norm(self.values)

    def similarity(self, other: VectorN) -> float:
        """Euclidean distance to other."""
        return norm(self.values - other.values)

    def midpoint(self, other: VectorN) -> VectorN:
        return VectorN(0.5 * (self.values + other.values))

    def as_array(self) -> np.ndarray:
        """Writable copy of the coordinates."""
        return self.values.copy()

    def __getitem__(self, index: int) -> float:
        return float(self.values[index])

    def __len__(self) -> int:
        return self.dimension

    def __add__(self, other: VectorN) -> VectorN:
        return VectorN(self.values + _coords(other))

    def __sub__(self, other: VectorN) -> VectorN:
        return VectorN(self.values - _coords(other))

    def __mul__(self, k: float) -> VectorN:
        return VectorN(self.values * k)

    __rmul__ = __mul__

    def __truediv__(self, k: float) -> VectorN:
        return VectorN(self.values / k)

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, VectorN):
            return NotImplemented
        return bool(np.array_equal(self.values, other.values))

    __hash__ = None

    def __repr__(self) -> str:
        return f"VectorN({self.values.tolist()})"


def _coords(v) -> np.ndarray:
    return v.values if isinstance(v, VectorN) else f64(v)


def as_position(p) -> Position:
    """Return p if it already behaves like a Position, else wrap it in a VectorN."""
    if isinstance(p, Position):
        return p
    return VectorN(p)
