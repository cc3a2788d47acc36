# MIT License (see LICENSE)
"""
Closed intervals on the real line.

Intervals are the working currency of root bounding: the expansion phase grows
an interval until it brackets a sign change, the contraction phase halves it
until it is narrow enough. Bounds may be infinite (a function's domain is
often a half-line), in which case ratio-based operations such as midpoint()
produce inf or nan and should not be used.
"""
from __future__ import annotations
import math
from dataclasses import dataclass

from .errors import InvalidInterval


@dataclass(frozen=True)
class Interval:
    """
    The set of reals x with lower <= x <= upper.

    Attributes:
        lower: Lower bound (may be -inf).
        upper: Upper bound (may be +inf).

    Raises:
        InvalidInterval: If lower > upper or either bound is NaN.
    """
    lower: float
    upper: float

    def __post_init__(self) -> None:
        lower, upper = float(self.lower), float(self.upper)
        if math.isnan(lower) or math.isnan(upper):
            raise InvalidInterval(f"interval bounds must be numbers, got [{lower}, {upper}]")
        if lower > upper:
            raise InvalidInterval(f"lower bound {lower} is greater than upper bound {upper}")
        object.__setattr__(self, "lower", lower)
        object.__setattr__(self, "upper", upper)

    @classmethod
    def real_line(cls) -> Interval:
        """The whole real line, (-inf, +inf)."""
        return cls(-math.inf, math.inf)

    @property
    def width(self) -> float:
        return self.upper - self.lower

    @property
    def is_finite(self) -> bool:
        return math.isfinite(self.lower) and math.isfinite(self.upper)

    # -------------------------------------------------------------------------
    # Membership
    # -------------------------------------------------------------------------

    def contains(self, x: float) -> bool:
        """True iff x lies in the interval or on one of its bounds."""
        return self.lower <= x <= self.upper

    def strictly_contains(self, x: float) -> bool:
        """True iff x lies strictly between the bounds."""
        return self.lower < x < self.upper

    def above(self, x: float) -> bool:
        """True iff the interval lies above x (x <= lower)."""
        return x <= self.lower

    def strictly_above(self, x: float) -> bool:
        return x < self.lower

    def below(self, x: float) -> bool:
        """True iff the interval lies below x (x >= upper)."""
        return x >= self.upper

    def strictly_below(self, x: float) -> bool:
        return x > self.upper

    def clip(self, x: float) -> float:
        """Return the point of the interval closest to x."""
        if x >= self.upper:
            return self.upper
        if x < self.lower:
            return self.lower
        return x

    # -------------------------------------------------------------------------
    # Subdivision and growth
    # -------------------------------------------------------------------------

    def point_by_ratio(self, ratio: float) -> float:
        """The point ratio * width above the lower bound."""
        return self.lower + ratio * self.width

    def midpoint(self) -> float:
        return self.point_by_ratio(0.5)

    def split_at(self, ratio: float) -> tuple[Interval, Interval]:
        """
        Split the interval at the point a given proportion along its width.

        Returns:
            (left, right) where left = [lower, split] and right = [split, upper].
        """
        split = self.point_by_ratio(ratio)
        return Interval(self.lower, split), Interval(split, self.upper)

    def extend_upwards(self, amount: float) -> Interval:
        return Interval(self.lower, self.upper + amount)

    def extend_downwards(self, amount: float) -> Interval:
        return Interval(self.lower - amount, self.upper)

    def extend_upwards_proportional(self, factor: float) -> Interval:
        """Move the upper bound up by factor * width."""
        return self.extend_upwards(self.width * factor)

    def extend_downwards_proportional(self, factor: float) -> Interval:
        """Move the lower bound down by factor * width."""
        return self.extend_downwards(self.width * factor)

    # -------------------------------------------------------------------------
    # Set operations
    # -------------------------------------------------------------------------

    def intersects(self, other: Interval) -> bool:
        """True iff the two intervals share at least one point."""
        return not (self.upper < other.lower or other.upper < self.lower)

    def intersection(self, other: Interval) -> Interval | None:
        """
        The part of the real line inside both intervals.

        Returns:
            [max(lowers), min(uppers)], or None when the intervals are disjoint.
        """
        if not self.intersects(other):
            return None
        return Interval(max(self.lower, other.lower), min(self.upper, other.upper))

    def __str__(self) -> str:
        return f"[{self.lower}, {self.upper}]"
