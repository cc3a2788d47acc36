# MIT License (see LICENSE)
"""
Abstract monotonic function and the generic root-bounding algorithm.

A monotonic function is one whose derivative does not change sign on its
domain. Every concrete kind in this package is non-decreasing on its domain,
which is what lets bound_zero() pick a direction from the sign of a single
function value and lets bisection keep exactly one half at each step.

Root bounding runs in two phases:
    1. Expansion: grow a finite starting interval (by a multiple of its own
       width) towards the sign change until it brackets a zero, clipping to
       the domain when the growth would leave it.
    2. Contraction: bisect the bracket, keeping the half whose upper bound is
       still non-negative, until the bracket is narrow enough.
"""
from __future__ import annotations
import enum
import math
from abc import ABC, abstractmethod
from typing import Callable

from ..constants import (
    DEFAULT_EPS,
    EXPANSION_FACTOR,
    INITIAL_SEARCH_WIDTH,
    MAX_CONTRACTION_ITERATIONS,
    MAX_EXPANSION_ITERATIONS,
    MAX_INTERVAL_WIDTH,
)
from ..interval import Interval


class FunctionKind(enum.Enum):
    INCREASING = "increasing"
    DECREASING = "decreasing"
    CONSTANT = "constant"


def numerical_derivative(f: Callable[[float], float], x: float, eps: float = DEFAULT_EPS) -> float:
    """Centred difference (f(x+eps) - f(x-eps)) / 2eps."""
    return (f(x + eps) - f(x - eps)) / (2.0 * eps)


def numerical_second_derivative(f: Callable[[float], float], x: float, eps: float = DEFAULT_EPS) -> float:
    """Centred second difference (f(x+eps) - 2f(x) + f(x-eps)) / eps^2."""
    return (f(x + eps) - 2.0 * f(x) + f(x - eps)) / (eps * eps)


class MonotonicFunction(ABC):
    """
    A real function whose derivative keeps one sign over domain().

    Subclasses must implement at() and translated(). Derivatives fall back to
    centred differences with DEFAULT_EPS unless overridden analytically.
    """

    @abstractmethod
    def at(self, x: float) -> float:
        """Exact value of the function at x."""
        ...

    @abstractmethod
    def translated(self, offset: float) -> MonotonicFunction:
        """
        The function g with g(x) = f(x + offset).

        Used when a bubble's time origin is moved back by offset: a radius
        that was f(t) becomes g(t - offset).
        """
        ...

    def derivative_at(self, x: float) -> float:
        return numerical_derivative(self.at, x)

    def second_derivative_at(self, x: float) -> float:
        return numerical_second_derivative(self.at, x)

    def domain(self) -> Interval:
        """Region on which the function is monotonic. Defaults to the real line."""
        return Interval.real_line()

    def determine_kind(self, x: float = 0.0) -> FunctionKind:
        """
        Classify the function by the sign of its derivatives at x.

        The first derivative decides if it is non-zero, then the second;
        if both vanish the function is taken to be constant.
        """
        for derivative in (self.derivative_at, self.second_derivative_at):
            d = derivative(x)
            if d > 0:
                return FunctionKind.INCREASING
            if d < 0:
                return FunctionKind.DECREASING
        return FunctionKind.CONSTANT

    # -------------------------------------------------------------------------
    # Root bounding
    # -------------------------------------------------------------------------

    def initial_search_domain(self) -> Interval:
        """
        Finite interval where the expansion phase starts.

        - Doubly infinite domain: width INITIAL_SEARCH_WIDTH centred on 0.
        - Half-line: width INITIAL_SEARCH_WIDTH anchored at the finite bound.
        - Finite domain: the domain itself.
        """
        domain = self.domain()
        lower_finite = math.isfinite(domain.lower)
        upper_finite = math.isfinite(domain.upper)
        if lower_finite and upper_finite:
            return domain
        if lower_finite:
            return Interval(domain.lower, domain.lower + INITIAL_SEARCH_WIDTH)
        if upper_finite:
            return Interval(domain.upper - INITIAL_SEARCH_WIDTH, domain.upper)
        half = 0.5 * INITIAL_SEARCH_WIDTH
        return Interval(-half, half)

    def brackets_zero(self, interval: Interval) -> bool:
        """True iff f(lower) <= 0 <= f(upper)."""
        return self.at(interval.lower) <= 0.0 <= self.at(interval.upper)

    def bound_zero(
        self,
        max_expansion_iterations: int = MAX_EXPANSION_ITERATIONS,
        expansion_factor: float = EXPANSION_FACTOR,
        max_contraction_iterations: int = MAX_CONTRACTION_ITERATIONS,
        max_width: float = MAX_INTERVAL_WIDTH,
    ) -> Interval | None:
        """
        Find a narrow interval containing the earliest zero of the function.

        Args:
            max_expansion_iterations: Growth steps allowed while bracketing.
            expansion_factor: Each growth step adds this multiple of the width.
            max_contraction_iterations: Bisection steps allowed.
            max_width: Bisection stops once the bracket is this narrow.

        Returns:
            An interval containing a zero, or None when no sign change is
            reachable inside the domain within the expansion budget.
        """
        bracket = self._expand(max_expansion_iterations, expansion_factor)
        if bracket is None:
            return None
        return self._contract(bracket, max_contraction_iterations, max_width)

    def root(self) -> float | None:
        """
        Earliest zero as a single number, or None if there is none.

        The generic version returns the lower end of bound_zero(), which never
        lies after the true root.
        """
        bracket = self.bound_zero()
        if bracket is None:
            return None
        return bracket.lower

    def _expand(self, max_iterations: int, factor: float) -> Interval | None:
        domain = self.domain()
        search = self.initial_search_domain()
        for _ in range(max_iterations):
            if self.brackets_zero(search):
                return search
            if self.at(search.upper) < 0:
                grown = search.extend_upwards_proportional(factor)
                if grown.upper > domain.upper:
                    clipped = Interval(search.lower, domain.upper)
                    return clipped if self.brackets_zero(clipped) else None
            else:
                grown = search.extend_downwards_proportional(factor)
                if grown.lower < domain.lower:
                    clipped = Interval(domain.lower, search.upper)
                    return clipped if self.brackets_zero(clipped) else None
            search = grown
        return search if self.brackets_zero(search) else None

    def _contract(self, bracket: Interval, max_iterations: int, max_width: float) -> Interval:
        for _ in range(max_iterations):
            if bracket.width <= max_width:
                break
            left, right = bracket.split_at(0.5)
            bracket = left if self.at(left.upper) >= 0 else right
        return bracket

    # -------------------------------------------------------------------------
    # Algebra
    # -------------------------------------------------------------------------

    def __add__(self, other: object) -> MonotonicFunction:
        if not isinstance(other, MonotonicFunction):
            return NotImplemented
        # Local import: the adder depends on the concrete kinds, which depend on this module.
        from .adder import DEFAULT_ADDER
        return DEFAULT_ADDER.sum(self, other)
