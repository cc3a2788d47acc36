# MIT License (see LICENSE)
"""
The caller-driven scheduler.

The Simulation owns a set of discontinuous bubbles, combines them into a
balanced tree of composite bubbles and advances that tree on request:

    1. Resolve every discontinuity at or before the requested time, earliest
       first. Each resolution re-measures the bubbles involved and refreshes
       the composites above them.
    2. Bring every bubble's displayed state to the requested time.
    3. Once local time has grown past rebase_threshold, move the time origin
       to the present so extrapolation keeps its floating point precision.

There is no fixed timestep: step(dt) is only a convenience for advance_to.

Structure:
    - User creates a Simulation (optionally with their own solver).
    - User adds bubbles via add_bubble().
    - User calls sim.advance_to(t) or sim.step(dt) in a loop.
"""
from __future__ import annotations
import logging
from contextlib import nullcontext
from dataclasses import dataclass, field

from .bubbles.base import DiscontinuousBubble
from .bubbles.composite import CompositeBubble, build_tree, register_composite_interactions
from .constants import DEFAULT_REBASE_THRESHOLD
from .profiler import Profiler
from .solvers.contact import register_contact_interaction
from .solvers.interaction import InteractionSolver

logger = logging.getLogger(__name__)


def default_solver() -> InteractionSolver:
    """
    An InteractionSolver with the bundled rules.

    Body contact is registered before the composite rules so it keeps
    precedence over them.
    """
    solver = InteractionSolver()
    register_contact_interaction(solver)
    register_composite_interactions(solver)
    return solver


@dataclass
class Simulation:
    """
    Event-driven simulation of a set of bubbles.

    Attributes:
        solver: Interaction rules used by every composite in the tree.
        rebase_threshold: advance_to() rebases once local time exceeds this.
                          Use math.inf to never rebase automatically.
        profiler: Optional Profiler instance for timing statistics.
        bubbles: Bubbles in insertion order.
        time: Current local time (relative to epoch).
        epoch: Total offset removed by rebasing; absolute time = epoch + time.
        events: Number of discontinuities resolved so far.
    """
    solver: InteractionSolver = field(default_factory=default_solver)
    rebase_threshold: float = DEFAULT_REBASE_THRESHOLD
    profiler: Profiler | None = None

    # Internal state
    bubbles: list[DiscontinuousBubble] = field(default_factory=list)
    time: float = 0.0
    epoch: float = 0.0
    events: int = 0

    def __post_init__(self) -> None:
        self._root: DiscontinuousBubble | None = None

    def add_bubble(self, bubble: DiscontinuousBubble) -> None:
        """
        Add a bubble to the simulation.

        The bubble is expected to have been measured in this simulation's
        local time. Bubbles added after the tree was built are attached next
        to the existing root.

        Raises:
            ValueError: If the bubble already belongs to a composite.
        """
        if bubble.parent is not None:
            raise ValueError(f"{bubble!r} already belongs to a composite bubble")
        if self._root is not None:
            self._root = CompositeBubble(self._root, bubble, self.solver)
        self.bubbles.append(bubble)

    @property
    def root(self) -> DiscontinuousBubble | None:
        """Top of the bubble tree, built on first use. None while empty."""
        if self._root is None and self.bubbles:
            self._root = build_tree(self.bubbles, self.solver)
        return self._root

    @property
    def absolute_time(self) -> float:
        return self.epoch + self.time

    def next_event_time(self) -> float:
        """Local time of the earliest pending discontinuity (+inf if none)."""
        root = self.root
        if root is None:
            return float("inf")
        return root.next_discontinuity()

    def _section(self, name: str):
        if self.profiler is None:
            return nullcontext()
        return self.profiler.section(name)

    def advance_to(self, t: float) -> int:
        """
        Advance the simulation to local time t.

        Returns:
            Number of discontinuities resolved on the way.

        Raises:
            ValueError: If t lies before the current time.
        """
        t = float(t)
        if t < self.time:
            raise ValueError(f"cannot advance backwards from {self.time} to {t}")

        root = self.root
        resolved = 0
        if root is not None:
            with self._section("events"):
                resolved = root.resolve_until(t)
            with self._section("state"):
                root.set_state_continuous(t)
        self.time = t
        self.events += resolved
        if self.profiler is not None:
            self.profiler.count("events", resolved)

        if self.time > self.rebase_threshold:
            self.rebase(self.time)
        return resolved

    def step(self, dt: float) -> int:
        """Advance the simulation by dt."""
        return self.advance_to(self.time + dt)

    def rebase(self, offset: float) -> None:
        """
        Move the local time origin forward by offset.

        Every bubble is shifted so its behaviour in absolute time is unchanged.
        """
        root = self.root
        if root is not None:
            with self._section("rebase"):
                root.rebase_time(offset)
        self.time -= offset
        self.epoch += offset
        logger.debug("rebased by %s, epoch now %s", offset, self.epoch)
