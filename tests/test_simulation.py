import math

import numpy as np
import pytest

from bubble_sim.bubbles.bodies import AcceleratingBody, StaticBubble
from bubble_sim.bubbles.composite import CompositeBubble
from bubble_sim.profiler import Profiler
from bubble_sim.simulation import Simulation


def head_on_pair():
    a = AcceleratingBody(0.2, position=(-1.0, 0.0), velocity=(1.0, 0.0))
    b = AcceleratingBody(0.2, position=(1.0, 0.0), velocity=(-1.0, 0.0))
    return a, b


def test_head_on_collision_swaps_velocities():
    """Equal masses, elastic: the bodies meet at t=0.8 and swap velocities."""
    sim = Simulation()
    a, b = head_on_pair()
    sim.add_bubble(a)
    sim.add_bubble(b)

    assert sim.next_event_time() == pytest.approx(0.8)
    resolved = sim.advance_to(1.0)

    # One broad-phase checkpoint, then the contact itself.
    assert resolved == 2
    assert sim.events == 2
    assert sim.time == 1.0
    assert np.allclose(a.velocity, [-1.0, 0.0])
    assert np.allclose(b.velocity, [1.0, 0.0])
    assert np.allclose(a.displayed_position, [-0.4, 0.0])
    assert np.allclose(b.displayed_position, [0.4, 0.0])
    assert sim.next_event_time() == math.inf


def test_stepping_matches_a_single_advance():
    stepped = Simulation()
    a, b = head_on_pair()
    stepped.add_bubble(a)
    stepped.add_bubble(b)
    for _ in range(10):
        stepped.step(0.1)

    assert stepped.time == pytest.approx(1.0)
    assert np.allclose(a.displayed_position, [-0.4, 0.0])
    assert np.allclose(b.displayed_position, [0.4, 0.0])


def test_cannot_advance_backwards():
    sim = Simulation()
    sim.advance_to(2.0)
    with pytest.raises(ValueError):
        sim.advance_to(1.0)


def test_empty_simulation_only_moves_time():
    sim = Simulation()
    assert sim.root is None
    assert sim.advance_to(3.0) == 0
    assert sim.time == 3.0
    assert sim.next_event_time() == math.inf


def test_automatic_rebase_keeps_absolute_behaviour():
    sim = Simulation(rebase_threshold=5.0)
    body = AcceleratingBody(0.1, position=(0.0, 0.0), velocity=(1.0, 0.0))
    other = AcceleratingBody(0.1, position=(0.0, 10.0), velocity=(-1.0, 0.0))
    sim.add_bubble(body)
    sim.add_bubble(other)

    sim.advance_to(6.0)
    assert sim.time == 0.0
    assert sim.epoch == 6.0
    assert sim.absolute_time == 6.0
    # Re-measured by the broad-phase checkpoint at t=4.9, then shifted back by 6.
    assert body.measured_time == pytest.approx(-1.1)
    assert np.allclose(body.displayed_position, [6.0, 0.0])
    assert np.allclose(body.position_at(0.0), [6.0, 0.0])

    sim.advance_to(1.0)
    assert sim.absolute_time == 7.0
    assert np.allclose(body.displayed_position, [7.0, 0.0])
    assert np.allclose(other.displayed_position, [-7.0, 10.0])


def test_bubbles_added_later_join_the_tree():
    sim = Simulation()
    a, b = head_on_pair()
    sim.add_bubble(a)
    sim.add_bubble(b)
    first_root = sim.root

    wall = StaticBubble((50.0, 0.0), 1.0)
    sim.add_bubble(wall)
    assert isinstance(sim.root, CompositeBubble)
    assert sim.root.left is first_root
    assert sim.root.right is wall
    assert sim.root.leaves() == [a, b, wall]

    with pytest.raises(ValueError):
        sim.add_bubble(a)


def test_profiler_records_sections_and_events():
    profiler = Profiler()
    sim = Simulation(profiler=profiler)
    a, b = head_on_pair()
    sim.add_bubble(a)
    sim.add_bubble(b)
    sim.advance_to(1.0)

    summary = profiler.stats.summary()
    assert summary["events"]["n"] == 1
    assert summary["events"]["total"] == 2
    assert summary["state"]["n"] == 1


def test_immovable_bodies_pass_through_each_other():
    """No impulse can act between two massless bodies, so no contact is scheduled."""
    sim = Simulation()
    a = AcceleratingBody(0.5, position=(-5.0, 0.0), velocity=(1.0, 0.0), mass=0.0)
    b = AcceleratingBody(0.5, position=(5.0, 0.0), velocity=(-1.0, 0.0), mass=0.0)
    sim.add_bubble(a)
    sim.add_bubble(b)

    # Only the broad-phase checkpoint at t=4.5 is resolved.
    assert sim.advance_to(10.0) == 1
    assert sim.next_event_time() == math.inf
    assert np.allclose(a.displayed_position, [5.0, 0.0])
    assert np.allclose(b.displayed_position, [-5.0, 0.0])
