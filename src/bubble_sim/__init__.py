# MIT License (see LICENSE)
"""
bubble_sim - Event-driven interaction scheduling with growing spheres of influence.

Every simulated object is wrapped in a bubble: a position measured at some
time plus a boundary radius, a monotonic function of time bounding how far the
object can have reached since. Two bubbles cannot interact before their radii
sum to the distance between them, so the earliest possible interaction is the
root of a closed-form function and time never has to be stepped in ticks.

Main entry points:
    - Simulation: caller-driven scheduler exposing advance_to(t).
    - InteractionSolver: registry of per-pair interaction rules.
    - CompositeBubble: two bubbles scheduled as one.
    - AcceleratingBody, StaticBubble: ready-made leaf bubbles.
    - Constant, Linear, Quadratic: boundary radius functions.

Submodules:
    - functions: monotonic function algebra and root bounding.
    - bubbles: bubble abstractions, leaves and composites.
    - solvers: interaction solver and body contact.
    - dispatch: type-pair dispatch used by both of the above.

Example:
    from bubble_sim import Simulation, AcceleratingBody

    sim = Simulation()
    sim.add_bubble(AcceleratingBody(0.5, position=(-5, 0), velocity=(1, 0)))
    sim.add_bubble(AcceleratingBody(0.5, position=(5, 0), velocity=(-1, 0)))
    sim.advance_to(10.0)
"""
from .interval import Interval
from .errors import BubbleSimError, EmptyDomain, InvalidCoefficient, InvalidInterval
from .dispatch import CrossCheck
from .functions import Constant, FunctionAdder, Linear, MonotonicFunction, Quadratic, SummedFunction
from .bubbles import (
    AcceleratingBody,
    Bubble,
    CompositeBubble,
    DiscontinuousBubble,
    Position,
    StaticBubble,
    VectorN,
    build_tree,
)
from .solvers import InteractionSolver
from .simulation import Simulation, default_solver
from .profiler import Profiler

__all__ = [
    # Core simulation
    "Simulation",
    "default_solver",
    "InteractionSolver",
    # Bubbles
    "Bubble",
    "DiscontinuousBubble",
    "CompositeBubble",
    "StaticBubble",
    "AcceleratingBody",
    "build_tree",
    "Position",
    "VectorN",
    # Functions
    "MonotonicFunction",
    "Constant",
    "Linear",
    "Quadratic",
    "SummedFunction",
    "FunctionAdder",
    # Primitives
    "Interval",
    "CrossCheck",
    # Errors
    "BubbleSimError",
    "InvalidInterval",
    "InvalidCoefficient",
    "EmptyDomain",
    # Profiling
    "Profiler",
]
