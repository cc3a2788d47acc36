# MIT License (see LICENSE)
"""
Concrete monotonic function kinds with closed-form derivatives and roots.

    Constant(value):     f(x) = value
    Linear(gradient, c): f(x) = gradient * x + c,   gradient > 0
    Quadratic(a, b, c):  f(x) = a x^2 + b x + c,     a != 0

A quadratic is only monotonic on one side of its vertex; its domain is the
increasing side, [vertex, +inf) for a > 0 and (-inf, vertex] for a < 0.
"""
from __future__ import annotations
import math
from dataclasses import dataclass

from ..constants import DEFAULT_EPS
from ..errors import InvalidCoefficient
from ..interval import Interval
from .base import MonotonicFunction


@dataclass(frozen=True)
class Constant(MonotonicFunction):
    """f(x) = value everywhere."""
    value: float

    def __post_init__(self) -> None:
        object.__setattr__(self, "value", float(self.value))

    def at(self, x: float) -> float:
        return self.value

    def derivative_at(self, x: float) -> float:
        return 0.0

    def second_derivative_at(self, x: float) -> float:
        return 0.0

    def translated(self, offset: float) -> Constant:
        return self

    def bound_zero(self, *args, **kwargs) -> Interval | None:
        """The whole domain if the constant is zero, otherwise None."""
        return self.domain() if self.value == 0.0 else None

    def root(self) -> float | None:
        """-inf when identically zero (it is zero "from the start"), else None."""
        return -math.inf if self.value == 0.0 else None


@dataclass(frozen=True)
class Linear(MonotonicFunction):
    """
    f(x) = gradient * x + intercept.

    Attributes:
        gradient: Slope; must be strictly positive.
        intercept: Value at x = 0.

    Raises:
        InvalidCoefficient: If gradient <= 0.
    """
    gradient: float
    intercept: float = 0.0

    def __post_init__(self) -> None:
        if not self.gradient > 0:
            raise InvalidCoefficient(f"linear gradient must be positive, got {self.gradient}")
        object.__setattr__(self, "gradient", float(self.gradient))
        object.__setattr__(self, "intercept", float(self.intercept))

    def at(self, x: float) -> float:
        return self.intercept + self.gradient * x

    def derivative_at(self, x: float) -> float:
        return self.gradient

    def second_derivative_at(self, x: float) -> float:
        return 0.0

    def translated(self, offset: float) -> Linear:
        return Linear(self.gradient, self.intercept + self.gradient * offset)

    def root(self) -> float | None:
        return -self.intercept / self.gradient


@dataclass(frozen=True)
class Quadratic(MonotonicFunction):
    """
    f(x) = a x^2 + b x + c, restricted to the increasing side of its vertex.

    Raises:
        InvalidCoefficient: If a == 0 (use Linear or Constant instead).
    """
    a: float
    b: float = 0.0
    c: float = 0.0

    def __post_init__(self) -> None:
        if self.a == 0:
            raise InvalidCoefficient("quadratic coefficient cannot be 0")
        object.__setattr__(self, "a", float(self.a))
        object.__setattr__(self, "b", float(self.b))
        object.__setattr__(self, "c", float(self.c))

    @property
    def vertex(self) -> float:
        """x-coordinate of the stationary point."""
        return -self.b / (2.0 * self.a)

    @property
    def discriminant(self) -> float:
        return self.b * self.b - 4.0 * self.a * self.c

    def domain(self) -> Interval:
        if self.a > 0:
            return Interval(self.vertex, math.inf)
        return Interval(-math.inf, self.vertex)

    def at(self, x: float) -> float:
        return (self.a * x + self.b) * x + self.c

    def derivative_at(self, x: float) -> float:
        return 2.0 * self.a * x + self.b

    def second_derivative_at(self, x: float) -> float:
        return 2.0 * self.a

    def translated(self, offset: float) -> Quadratic:
        return Quadratic(
            self.a,
            2.0 * self.a * offset + self.b,
            (self.a * offset + self.b) * offset + self.c,
        )

    def root(self) -> float | None:
        """
        The root on the increasing side, or None if the parabola misses zero.

        For a > 0 this is the larger root, for a < 0 the smaller one; both are
        (-b + sqrt(disc)) / 2a. It is evaluated through
        q = -(b + sign(b) sqrt(disc)) / 2, with roots q/a and c/q, so that no
        nearly equal terms are subtracted when |4ac| << b^2.
        """
        disc = self.discriminant
        if disc < 0:
            return None
        s = math.sqrt(disc)
        if self.b >= 0:
            q = -0.5 * (self.b + s)
            if q == 0.0:
                # b == 0 and disc == 0: a double root at the vertex.
                return self.vertex
            return self.c / q
        q = -0.5 * (self.b - s)
        return q / self.a

    def bound_zero(self, *args, **kwargs) -> Interval | None:
        """Closed-form bracket [root - DEFAULT_EPS, root + DEFAULT_EPS]."""
        r = self.root()
        if r is None:
            return None
        return Interval(r - DEFAULT_EPS, r + DEFAULT_EPS)
