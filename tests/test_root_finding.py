import math

import pytest

from bubble_sim.constants import DEFAULT_EPS, MAX_INTERVAL_WIDTH
from bubble_sim.functions import Constant, Linear, MonotonicFunction, Quadratic, SummedFunction
from bubble_sim.interval import Interval


class Cube(MonotonicFunction):
    """(x - shift)^3, found only through the generic expansion and bisection."""

    def __init__(self, shift: float = 0.0) -> None:
        self.shift = shift

    def at(self, x: float) -> float:
        return (x - self.shift) ** 3

    def translated(self, offset: float) -> "Cube":
        return Cube(self.shift - offset)


class BoundedCube(Cube):
    """A cube that only claims to be monotonic on [0, 50]."""

    def domain(self) -> Interval:
        return Interval(0.0, 50.0)


def test_closed_form_roots():
    assert Linear(2.0, -4.0).root() == 2.0
    assert Quadratic(1.0, 0.0, -4.0).root() == pytest.approx(2.0)
    # a < 0: the increasing side is left of the vertex, so the root is -2.
    assert Quadratic(-1.0, 0.0, 4.0).root() == pytest.approx(-2.0)
    assert Quadratic(1.0, 0.0, 1.0).root() is None


def test_constant_roots():
    """A zero constant is zero from the start; any other never crosses."""
    assert Constant(0.0).root() == -math.inf
    assert Constant(0.0).bound_zero() == Interval.real_line()
    assert Constant(3.0).root() is None
    assert Constant(-3.0).bound_zero() is None


def test_quadratic_bracket_is_centred_on_root():
    bracket = Quadratic(1.0, 0.0, -4.0).bound_zero()
    assert bracket.lower == pytest.approx(2.0 - DEFAULT_EPS)
    assert bracket.upper == pytest.approx(2.0 + DEFAULT_EPS)
    assert Quadratic(1.0, 0.0, 1.0).bound_zero() is None


def test_bracket_test_is_inclusive():
    f = Linear(1.0, 0.0)
    assert f.brackets_zero(Interval(0.0, 1.0))
    assert f.brackets_zero(Interval(-1.0, 0.0))
    assert not f.brackets_zero(Interval(0.5, 1.0))


def test_generic_root_inside_initial_search():
    bracket = Cube(3.0).bound_zero()
    assert bracket.contains(3.0)
    assert bracket.width <= MAX_INTERVAL_WIDTH

    root = Cube(3.0).root()
    assert root <= 3.0
    assert root > 3.0 - MAX_INTERVAL_WIDTH


def test_expansion_upwards_and_downwards():
    """Roots outside [-5, 5] are reached by growing the search interval."""
    for shift in (100.0, -100.0):
        bracket = Cube(shift).bound_zero()
        assert bracket is not None
        assert bracket.contains(shift)
        assert bracket.width <= MAX_INTERVAL_WIDTH


def test_expansion_budget():
    assert Cube(1e30).bound_zero() is None
    assert Cube(100.0).bound_zero(max_expansion_iterations=1) is None


def test_contraction_budget():
    """Two halvings of [-5, 5] leave [2.5, 5]."""
    bracket = Cube(3.0).bound_zero(max_contraction_iterations=2)
    assert bracket == Interval(2.5, 5.0)


def test_expansion_is_clipped_to_domain():
    assert BoundedCube(100.0).bound_zero() is None
    bracket = BoundedCube(20.0).bound_zero()
    assert bracket.contains(20.0)


def test_half_line_domain_search_starts_at_finite_bound():
    """x^2 - 400 on [0, inf): the search starts at [0, 10] and grows to [0, 40]."""
    f = SummedFunction([Quadratic(1.0), Constant(-400.0)])
    assert f.initial_search_domain() == Interval(0.0, 10.0)
    bracket = f.bound_zero()
    assert bracket.contains(20.0)
    assert f.root() == pytest.approx(20.0, abs=MAX_INTERVAL_WIDTH)


def test_quadratic_root_with_tiny_leading_coefficient():
    """Nearly linear parabolas keep their root at -c/b instead of drifting late."""
    for a in (1e-17, 1e-15, -1e-17, -1e-15):
        f = Quadratic(a, 1.0, -10.0)
        assert f.root() == pytest.approx(10.0, rel=1e-9)
        assert f.bound_zero().contains(10.0)


def test_quadratic_root_on_increasing_side_for_every_sign():
    """Roots of (x - 1)(x - 3) scaled by +-1 and with the linear term of either sign."""
    assert Quadratic(1.0, -4.0, 3.0).root() == pytest.approx(3.0)
    assert Quadratic(-1.0, 4.0, -3.0).root() == pytest.approx(1.0)
    assert Quadratic(1.0, 4.0, 3.0).root() == pytest.approx(-1.0)
    assert Quadratic(-1.0, -4.0, -3.0).root() == pytest.approx(-3.0)
    # Double root at the vertex.
    assert Quadratic(2.0).root() == 0.0


@pytest.mark.parametrize("gradient, intercept", [
    (1.0, 0.0),
    (1.0, -3.0),
    (2.0, -500.0),
    (0.5, 400.0),
    (1e-3, 0.25),
])
def test_generic_bracketing_of_lines(gradient, intercept):
    """The expansion and bisection phases on a Linear bracket -c/g within max_width."""
    f = Linear(gradient, intercept)
    root = -intercept / gradient
    bracket = MonotonicFunction.bound_zero(f)
    assert bracket is not None
    assert bracket.contains(root)
    assert bracket.width <= MAX_INTERVAL_WIDTH
