# MIT License (see LICENSE)
"""
Generic sum of an arbitrary list of monotonic functions.

Used when no closed-form combination exists. The value and derivatives are
accumulated elementwise; the domain is the intersection of all the summands'
domains, computed on first use.
"""
from __future__ import annotations
from typing import Iterable

from ..errors import EmptyDomain
from ..interval import Interval
from .base import MonotonicFunction


class SummedFunction(MonotonicFunction):
    """
    f(x) = sum(g(x) for g in functions).

    Attributes:
        functions: The summands, in the order they were given.
    """

    def __init__(self, functions: Iterable[MonotonicFunction]) -> None:
        self.functions: tuple[MonotonicFunction, ...] = tuple(functions)
        self._domain: Interval | None = None
        self._domain_known = False

    def domain(self) -> Interval:
        """
        Intersection of the summands' domains.

        Raises:
            EmptyDomain: If the summands' domains have no point in common.
        """
        if not self._domain_known:
            domain: Interval | None = Interval.real_line()
            for f in self.functions:
                domain = domain.intersection(f.domain())
                if domain is None:
                    break
            self._domain = domain
            self._domain_known = True
        if self._domain is None:
            raise EmptyDomain(f"summed function of {len(self.functions)} terms has no common domain")
        return self._domain

    def at(self, x: float) -> float:
        return sum(f.at(x) for f in self.functions)

    def derivative_at(self, x: float) -> float:
        return sum(f.derivative_at(x) for f in self.functions)

    def second_derivative_at(self, x: float) -> float:
        return sum(f.second_derivative_at(x) for f in self.functions)

    def translated(self, offset: float) -> SummedFunction:
        return SummedFunction(f.translated(offset) for f in self.functions)

    def __repr__(self) -> str:
        return f"SummedFunction({list(self.functions)!r})"
