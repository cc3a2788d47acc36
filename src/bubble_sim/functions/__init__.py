# MIT License (see LICENSE)
"""
Monotonic function algebra.

This subpackage provides:
    - MonotonicFunction: abstract base with numerical derivatives and root bounding.
    - Constant, Linear, Quadratic: closed-form kinds.
    - SummedFunction: generic sum with intersected domain.
    - FunctionAdder: kind-specialised addition, closed over the three kinds.

Typical usage:
    from bubble_sim.functions import Linear, Constant

    reach = Linear(2.0, 1.0) + Constant(-5.0)
    reach.root()        # 2.0
    reach.bound_zero()  # narrow Interval around 2.0
"""
from .base import FunctionKind, MonotonicFunction, numerical_derivative, numerical_second_derivative
from .kinds import Constant, Linear, Quadratic
from .summed import SummedFunction
from .adder import DEFAULT_ADDER, FunctionAdder

__all__ = [
    # Base
    "MonotonicFunction",
    "FunctionKind",
    "numerical_derivative",
    "numerical_second_derivative",
    # Kinds
    "Constant",
    "Linear",
    "Quadratic",
    "SummedFunction",
    # Addition
    "FunctionAdder",
    "DEFAULT_ADDER",
]
