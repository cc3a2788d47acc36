import math

import pytest

from bubble_sim.bubbles.bodies import AcceleratingBody, StaticBubble
from bubble_sim.bubbles.composite import (
    CompositeBubble,
    DiscontinuitySource,
    build_tree,
    register_composite_interactions,
)
from bubble_sim.bubbles.position import VectorN
from bubble_sim.functions import Constant, Linear
from bubble_sim.simulation import default_solver
from bubble_sim.solvers.interaction import InteractionSolver


class TickingBubble(StaticBubble):
    """Static bubble with a discontinuity every `period` time units."""

    def __init__(self, position, period, radius=0.0):
        super().__init__(position, radius)
        self.period = period
        self.ticks = 0

    def next_discontinuity(self):
        return (self.ticks + 1) * self.period

    def resolve_next_discontinuity(self):
        self.ticks += 1
        self.remeasure_continuous(self.ticks * self.period)


def scheduled_solver(schedule):
    """
    Solver whose StaticBubble rule fires at a fixed delay per pair.

    schedule maps sorted pairs of integer x-coordinates to delays; pairs
    missing from it never interact.
    """
    solver = InteractionSolver()
    resolved = []

    def next_discontinuity(a, b, t):
        key = tuple(sorted((int(a.position[0]), int(b.position[0]))))
        return t + schedule.get(key, math.inf)

    def resolve(a, b, t):
        resolved.append((a, b, t))

    solver.add_interaction(StaticBubble, StaticBubble, next_discontinuity, resolve)
    register_composite_interactions(solver)
    return solver, resolved


def test_position_and_radius_cover_both_children():
    """Radius 2 children at 0 and 4: midpoint 2, radius 2+2+2+2."""
    c = CompositeBubble(StaticBubble((0.0,), 2.0), StaticBubble((4.0,), 2.0), InteractionSolver())
    assert c.position == VectorN([2.0])
    assert c.left_offset == 2.0
    assert c.right_offset == 2.0
    assert c.boundary_radius == Constant(8.0)
    assert c.boundary_radius.at(0.0) == 8.0
    assert c.boundary_radius.at(1234.5) == 8.0


def test_growing_children_grow_the_composite():
    c = CompositeBubble(
        StaticBubble((0.0, 0.0), Linear(1.0, 0.0)),
        StaticBubble((0.0, 4.0), Linear(2.0, 1.0)),
        InteractionSolver(),
    )
    assert c.boundary_radius == Linear(3.0, 5.0)


def test_recompute_is_idempotent():
    c = CompositeBubble(TickingBubble((0.0,), 1.0, 1.0), TickingBubble((3.0,), 2.0, 1.0), InteractionSolver())
    c.recompute()
    first = (c.position, c.boundary_radius, c.next_discontinuity(), c.next_discontinuity_source)
    c.recompute()
    second = (c.position, c.boundary_radius, c.next_discontinuity(), c.next_discontinuity_source)
    assert first == second
    assert c.is_cached


def test_children_take_turns_on_ties():
    """Equal event times go LEFT, then RIGHT, then PAIR."""
    c = CompositeBubble(TickingBubble((0.0,), 1.0), TickingBubble((100.0,), 1.0), InteractionSolver())
    assert c.next_discontinuity() == 1.0
    assert c.next_discontinuity_source is DiscontinuitySource.LEFT

    c.resolve_next_discontinuity()
    assert c.left.ticks == 1
    assert c.next_discontinuity() == 1.0
    assert c.next_discontinuity_source is DiscontinuitySource.RIGHT

    assert c.resolve_until(2.5) == 3
    assert (c.left.ticks, c.right.ticks) == (2, 2)
    assert c.measured_time == 2.0
    assert c.next_discontinuity() == 3.0


def test_children_win_ties_over_pair():
    solver, resolved = scheduled_solver({(0, 1): 1.0})
    c = CompositeBubble(TickingBubble((0.0,), 1.0, 2.0), TickingBubble((1.0,), 5.0, 2.0), solver)
    assert c.next_discontinuity() == 1.0
    assert c.next_discontinuity_source is DiscontinuitySource.LEFT


def test_pair_event_between_children():
    solver, resolved = scheduled_solver({(0, 1): 0.5})
    a, b = StaticBubble((0.0,), 2.0), StaticBubble((1.0,), 2.0)
    c = CompositeBubble(a, b, solver)
    assert c.next_discontinuity() == 0.5
    assert c.next_discontinuity_source is DiscontinuitySource.PAIR
    c.resolve_next_discontinuity()
    assert resolved == [(a, b, 0.0)]


def test_state_change_invalidates_every_ancestor():
    a = AcceleratingBody(0.1, position=(0.0, 0.0))
    b = AcceleratingBody(0.1, position=(2.0, 0.0))
    c = AcceleratingBody(0.1, position=(10.0, 0.0))
    solver = InteractionSolver()
    inner = CompositeBubble(a, b, solver)
    root = CompositeBubble(inner, c, solver)

    root.recompute()
    assert inner.is_cached and root.is_cached
    assert root.position == VectorN([5.5, 0.0])

    a.set_position(0.0, (4.0, 0.0))
    assert not inner.is_cached
    assert not root.is_cached
    assert inner.position == VectorN([3.0, 0.0])
    assert root.position == VectorN([6.5, 0.0])


def test_composite_against_leaf_considers_cross_pairs():
    """Inner pair at +9, s0/s2 at +8, s1/s2 at +7: the cross pair s1/s2 wins."""
    solver, resolved = scheduled_solver({(0, 1): 9.0, (0, 2): 8.0, (1, 2): 7.0})
    s0, s1, s2 = (StaticBubble((float(x),), 2.0) for x in range(3))
    inner = CompositeBubble(s0, s1, solver)
    outer = CompositeBubble(inner, s2, solver)

    assert inner.next_discontinuity() == 9.0
    assert outer.next_discontinuity() == 7.0
    assert outer.next_discontinuity_source is DiscontinuitySource.PAIR

    outer.resolve_next_discontinuity()
    assert resolved == [(s1, s2, 0.0)]


def test_composite_against_composite_considers_all_cross_pairs():
    schedule = {(0, 1): 9.0, (2, 3): 8.0, (0, 2): 7.0, (0, 3): 6.0, (1, 2): 5.0, (1, 3): 4.0}
    solver, resolved = scheduled_solver(schedule)
    s0, s1, s2, s3 = (StaticBubble((float(x),), 2.0) for x in range(4))
    left = CompositeBubble(s0, s1, solver)
    right = CompositeBubble(s2, s3, solver)
    outer = CompositeBubble(left, right, solver)

    assert outer.next_discontinuity() == 4.0
    outer.resolve_next_discontinuity()
    assert resolved == [(s1, s3, 0.0)]


def test_internal_events_win_ties_over_cross_pairs():
    solver, resolved = scheduled_solver({(0, 1): 4.0, (2, 3): 8.0, (1, 3): 4.0})
    s0, s1, s2, s3 = (StaticBubble((float(x),), 2.0) for x in range(4))
    left = CompositeBubble(s0, s1, solver)
    right = CompositeBubble(s2, s3, solver)

    assert solver.next_discontinuity_after(0.0, left, right) == 4.0
    solver.resolve_next_discontinuity_after(0.0, left, right)
    assert resolved == [(s0, s1, 0.0)]


def test_rebase_preserves_behaviour_in_absolute_time():
    a = AcceleratingBody(0.2, position=(-1.0, 0.0), velocity=(1.0, 0.0))
    b = AcceleratingBody(0.2, position=(1.0, 0.0), velocity=(-1.0, 0.0))
    c = CompositeBubble(a, b, default_solver())

    radius_before = c.boundary_radius.at(0.7)
    assert c.next_discontinuity() == pytest.approx(0.8)

    c.rebase_time(0.5)
    assert c.measured_time == -0.5
    assert c.boundary_radius.at(0.2) == pytest.approx(radius_before)
    assert c.next_discontinuity() == pytest.approx(0.3)
    assert c.position == VectorN([0.0, 0.0])


def test_construction_errors():
    solver = InteractionSolver()
    a, b = StaticBubble((0.0,)), StaticBubble((1.0,))
    with pytest.raises(ValueError):
        CompositeBubble(a, a, solver)
    CompositeBubble(a, b, solver)
    with pytest.raises(ValueError):
        CompositeBubble(a, StaticBubble((2.0,)), solver)


def test_build_tree():
    solver = InteractionSolver()
    bubbles = [StaticBubble((float(x),)) for x in range(5)]
    root = build_tree(bubbles, solver)
    assert isinstance(root, CompositeBubble)
    assert root.parent is None
    assert root.leaves() == bubbles
    assert all(b.parent is not None for b in bubbles)

    single = StaticBubble((0.0,))
    assert build_tree([single], solver) is single
    with pytest.raises(ValueError):
        build_tree([], solver)
