# MIT License (see LICENSE)
"""
Composite (binary) bubbles.

A CompositeBubble treats two bubbles as one. Its position is the midpoint of
its children's positions and its radius covers both children:

    radius(t) = left.radius(t) + |left - mid| + right.radius(t) + |right - mid|

so by the triangle inequality nothing either child can reach lies outside it.
This lets the solver's broad phase test a whole subtree against another bubble
in one step and descend into the children only when the aggregate bubbles
come close.

The composite's next discontinuity is the earliest of
    LEFT   left.next_discontinuity()
    RIGHT  right.next_discontinuity()
    PAIR   solver.next_discontinuity_after(measured_time, left, right)
with ties going to the first in that order.

Derived fields (position, offsets, radius, next discontinuity and its source)
are cached together, cleared together by invalidate() and recomputed together.
Children report every state change to their parent, which invalidates the
whole chain of composites above them.
"""
from __future__ import annotations
import enum
import logging
import math
from functools import partial
from typing import TYPE_CHECKING, Callable, Iterable, Sequence

from ..functions import DEFAULT_ADDER, Constant, FunctionAdder, MonotonicFunction
from .base import DiscontinuousBubble
from .position import Position

if TYPE_CHECKING:
    from ..solvers.interaction import InteractionSolver

logger = logging.getLogger(__name__)


class DiscontinuitySource(enum.Enum):
    LEFT = "left"
    RIGHT = "right"
    PAIR = "pair"


class CompositeBubble(DiscontinuousBubble):
    """
    Two discontinuous bubbles scheduled as one.

    Args:
        left: First child (may itself be a composite).
        right: Second child.
        solver: Decides and resolves interactions between the children.
        adder: Used to build the combined radius function.

    Raises:
        ValueError: If either child already belongs to another composite.
    """

    def __init__(
        self,
        left: DiscontinuousBubble,
        right: DiscontinuousBubble,
        solver: InteractionSolver,
        adder: FunctionAdder | None = None,
    ) -> None:
        super().__init__()
        for child in (left, right):
            if child.parent is not None:
                raise ValueError(f"{child!r} already belongs to a composite bubble")
        if left is right:
            raise ValueError("a composite bubble needs two distinct children")
        self.left = left
        self.right = right
        self.solver = solver
        self._adder = adder if adder is not None else DEFAULT_ADDER
        left.parent = self
        right.parent = self
        self._clear()

    # -------------------------------------------------------------------------
    # Cache management
    # -------------------------------------------------------------------------

    def _clear(self) -> None:
        self._position: Position | None = None
        self._left_offset: float | None = None
        self._right_offset: float | None = None
        self._boundary_radius: MonotonicFunction | None = None
        self._next_discontinuity: float | None = None
        self._next_source: DiscontinuitySource | None = None

    def invalidate(self) -> None:
        """Drop every derived field here and in all composites above."""
        self._clear()
        self._state_changed()

    def recompute(self) -> None:
        """Repopulate every derived field from the children's current state."""
        self._update_position()
        self._update_boundary_radius()
        self._update_discontinuity()

    def refresh(self) -> None:
        self.invalidate()
        self.recompute()

    @property
    def is_cached(self) -> bool:
        return self._position is not None and self._next_discontinuity is not None

    def _update_position(self) -> None:
        left_position = self.left.position
        right_position = self.right.position
        position = left_position.midpoint(right_position)
        self._left_offset = left_position.similarity(position)
        self._right_offset = right_position.similarity(position)
        self._position = position

    def _update_boundary_radius(self) -> None:
        if self._position is None:
            self._update_position()
        self._boundary_radius = self._adder.sum_many((
            self.left.boundary_radius,
            Constant(self._left_offset),
            self.right.boundary_radius,
            Constant(self._right_offset),
        ))

    def _update_discontinuity(self) -> None:
        candidates = (
            (self.left.next_discontinuity(), DiscontinuitySource.LEFT),
            (self.right.next_discontinuity(), DiscontinuitySource.RIGHT),
            (
                self.solver.next_discontinuity_after(self.measured_time, self.left, self.right),
                DiscontinuitySource.PAIR,
            ),
        )
        # min() keeps the first of equal keys, which gives the LEFT, RIGHT, PAIR tie order.
        self._next_discontinuity, self._next_source = min(candidates, key=lambda c: c[0])

    # -------------------------------------------------------------------------
    # Bubble interface
    # -------------------------------------------------------------------------

    @property
    def measured_time(self) -> float:
        return max(self.left.measured_time, self.right.measured_time)

    @property
    def position(self) -> Position:
        if self._position is None:
            self._update_position()
        return self._position

    @property
    def left_offset(self) -> float:
        if self._position is None:
            self._update_position()
        return self._left_offset

    @property
    def right_offset(self) -> float:
        if self._position is None:
            self._update_position()
        return self._right_offset

    @property
    def boundary_radius(self) -> MonotonicFunction:
        if self._boundary_radius is None:
            self._update_boundary_radius()
        return self._boundary_radius

    def next_discontinuity(self) -> float:
        if self._next_discontinuity is None:
            self._update_discontinuity()
        return self._next_discontinuity

    @property
    def next_discontinuity_source(self) -> DiscontinuitySource:
        if self._next_source is None:
            self._update_discontinuity()
        return self._next_source

    def resolve_next_discontinuity(self) -> None:
        source = self.next_discontinuity_source
        when = self._next_discontinuity
        if source is DiscontinuitySource.LEFT:
            self.left.resolve_next_discontinuity()
        elif source is DiscontinuitySource.RIGHT:
            self.right.resolve_next_discontinuity()
        elif source is DiscontinuitySource.PAIR:
            self.solver.resolve_next_discontinuity_after(self.measured_time, self.left, self.right)
        else:
            raise RuntimeError(f"unknown discontinuity source: {source!r}")
        logger.debug("composite %x resolved %s discontinuity at t=%s", id(self), source.value, when)
        self.refresh()

    def remeasure_continuous(self, t: float) -> None:
        self.left.remeasure_continuous(t)
        self.right.remeasure_continuous(t)
        self.refresh()

    def set_state_continuous(self, t: float) -> None:
        self.left.set_state_continuous(t)
        self.right.set_state_continuous(t)

    def rebase_time(self, offset: float) -> None:
        self.left.rebase_time(offset)
        self.right.rebase_time(offset)
        self.invalidate()

    def leaves(self) -> list[DiscontinuousBubble]:
        """All non-composite bubbles in this subtree, left to right."""
        out: list[DiscontinuousBubble] = []
        for child in (self.left, self.right):
            if isinstance(child, CompositeBubble):
                out.extend(child.leaves())
            else:
                out.append(child)
        return out

    def __repr__(self) -> str:
        return f"CompositeBubble({self.left!r}, {self.right!r})"


# =============================================================================
# Interactions involving composites
# =============================================================================

Candidate = tuple[float, Callable[[], None]]


def _children(bubble: DiscontinuousBubble) -> tuple[DiscontinuousBubble, ...]:
    if isinstance(bubble, CompositeBubble):
        return (bubble.left, bubble.right)
    return (bubble,)


def _pair_candidates(
    solver: InteractionSolver, a: DiscontinuousBubble, b: DiscontinuousBubble, t: float
) -> list[Candidate]:
    """
    Every event that can happen between a and b, in tie-break order.

    Each composite side contributes its own internal event first, then come
    the cross pairs of the two sides' children (a.left/b.left, a.left/b.right,
    a.right/b.left, a.right/b.right for two composites).
    """
    candidates: list[Candidate] = []
    for side in (a, b):
        if isinstance(side, CompositeBubble):
            candidates.append((side.next_discontinuity(), side.resolve_next_discontinuity))
    for x in _children(a):
        for y in _children(b):
            candidates.append((
                solver.next_discontinuity_after(t, x, y),
                partial(solver.resolve_next_discontinuity_after, t, x, y),
            ))
    return candidates


def _earliest(candidates: Sequence[Candidate]) -> Candidate:
    return min(candidates, key=lambda c: c[0])


def composite_next_discontinuity(solver: InteractionSolver) -> Callable[..., float]:
    """Build the timing rule for pairs where at least one side is a composite."""

    def next_discontinuity(a: DiscontinuousBubble, b: DiscontinuousBubble, t: float) -> float:
        return _earliest(_pair_candidates(solver, a, b, t))[0]

    return next_discontinuity


def composite_resolve(solver: InteractionSolver) -> Callable[..., None]:
    """Build the resolution rule for pairs where at least one side is a composite."""

    def resolve(a: DiscontinuousBubble, b: DiscontinuousBubble, t: float) -> None:
        when, action = _earliest(_pair_candidates(solver, a, b, t))
        if math.isinf(when):
            return
        action()
        for side in (a, b):
            if isinstance(side, CompositeBubble):
                side.refresh()

    return resolve


def register_composite_interactions(solver: InteractionSolver) -> None:
    """
    Let composites interact with composites and with any other bubble.

    Registered after more specific pairs so those keep precedence.
    """
    next_discontinuity = composite_next_discontinuity(solver)
    resolve = composite_resolve(solver)
    solver.add_interaction(CompositeBubble, CompositeBubble, next_discontinuity, resolve)
    solver.add_interaction(CompositeBubble, DiscontinuousBubble, next_discontinuity, resolve)
    solver.add_interaction(DiscontinuousBubble, CompositeBubble, next_discontinuity, resolve)


def build_tree(bubbles: Iterable[DiscontinuousBubble], solver: InteractionSolver) -> DiscontinuousBubble:
    """
    Combine bubbles into a balanced tree of composites.

    Neighbours are paired level by level; an odd bubble out is carried up to
    the next level unchanged. A single bubble is returned as is.

    Raises:
        ValueError: If no bubbles are given.
    """
    nodes = list(bubbles)
    if not nodes:
        raise ValueError("cannot build a bubble tree from no bubbles")
    while len(nodes) > 1:
        paired: list[DiscontinuousBubble] = [
            CompositeBubble(nodes[i], nodes[i + 1], solver) for i in range(0, len(nodes) - 1, 2)
        ]
        if len(nodes) % 2:
            paired.append(nodes[-1])
        nodes = paired
    return nodes[0]
