# MIT License (see LICENSE)
"""
Closed-form addition of monotonic functions.

FunctionAdder is a CrossCheck keyed on pairs of function kinds. Every pair of
Constant, Linear and Quadratic has a rule (mixed pairs are registered in both
orders so addition is commutative); anything else falls back to a flattened
SummedFunction.
"""
from __future__ import annotations
from typing import Iterable

from ..dispatch import CrossCheck
from .base import MonotonicFunction
from .kinds import Constant, Linear, Quadratic
from .summed import SummedFunction


def _sum_constant_constant(f: Constant, g: Constant) -> MonotonicFunction:
    return Constant(f.value + g.value)


def _sum_linear_constant(f: Linear, g: Constant) -> MonotonicFunction:
    return Linear(f.gradient, f.intercept + g.value)


def _sum_linear_linear(f: Linear, g: Linear) -> MonotonicFunction:
    # Both gradients are positive, so the sum cannot cancel.
    return Linear(f.gradient + g.gradient, f.intercept + g.intercept)


def _sum_quadratic_constant(f: Quadratic, g: Constant) -> MonotonicFunction:
    return Quadratic(f.a, f.b, f.c + g.value)


def _sum_quadratic_linear(f: Quadratic, g: Linear) -> MonotonicFunction:
    return Quadratic(f.a, f.b + g.gradient, f.c + g.intercept)


def _sum_quadratic_quadratic(f: Quadratic, g: Quadratic) -> MonotonicFunction:
    a = f.a + g.a
    b = f.b + g.b
    c = f.c + g.c
    if a != 0.0:
        return Quadratic(a, b, c)
    # Opposite parabolas: the square terms cancel. Only b > 0 leaves a valid
    # Linear; b <= 0 gives a Constant or an empty-domain sum instead.
    if b > 0.0:
        return Linear(b, c)
    if b == 0.0:
        return Constant(c)
    # A falling line means the two increasing halves never overlap; keep the
    # terms so the empty domain is reported when it is used.
    return SummedFunction((f, g))


def _sum_generic(f: MonotonicFunction, g: MonotonicFunction) -> MonotonicFunction:
    terms: list[MonotonicFunction] = []
    for h in (f, g):
        if isinstance(h, SummedFunction):
            terms.extend(h.functions)
        else:
            terms.append(h)
    return SummedFunction(terms)


class FunctionAdder(CrossCheck[MonotonicFunction]):
    """
    Sums monotonic functions, specialising on the kinds of the operands.

    Example:
        adder = FunctionAdder()
        adder.sum(Linear(1.0, 0.0), Constant(-10.0))   # Linear(1.0, -10.0)
    """

    def __init__(self) -> None:
        super().__init__(fallback=_sum_generic)
        self.add_check(Constant, Constant, _sum_constant_constant)
        self.add_check(Linear, Linear, _sum_linear_linear)
        self.add_check(Quadratic, Quadratic, _sum_quadratic_quadratic)

        self.add_check_with_reverse(Linear, Constant, _sum_linear_constant)
        self.add_check_with_reverse(Quadratic, Constant, _sum_quadratic_constant)
        self.add_check_with_reverse(Quadratic, Linear, _sum_quadratic_linear)

    def sum(self, f: MonotonicFunction, g: MonotonicFunction) -> MonotonicFunction:
        """Return f + g."""
        return self.check(f, g)

    def sum_many(self, functions: Iterable[MonotonicFunction]) -> MonotonicFunction:
        """
        Fold a sequence of functions left to right with sum().

        An empty sequence sums to Constant(0).
        """
        total: MonotonicFunction | None = None
        for f in functions:
            total = f if total is None else self.sum(total, f)
        return Constant(0.0) if total is None else total


DEFAULT_ADDER = FunctionAdder()
