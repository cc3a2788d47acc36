# MIT License (see LICENSE)
"""
Scheduling and resolving interactions between pairs of bubbles.

The solver answers two questions for a pair of discontinuous bubbles:
when is their next discontinuity, and what happens at it. Both are delegated
to rules registered per pair of bubble kinds, behind an analytic broad phase:

    1. Broad phase: the bubbles cannot interact before the sum of their
       boundary radii reaches the similarity between their positions. That
       time is the earliest root of  r_a(t) + r_b(t) - similarity, found with
       the monotonic function algebra. Overlapping regions give -inf.
    2. If the broad-phase time lies more than the pair's cutoff after the
       query time it is trusted as is: the event scheduled there is a
       checkpoint that just re-measures both bubbles, which tightens both
       radii. Otherwise the exact, pair-specific rule decides.

Pairs with no registered rule never interact: their next discontinuity is
+inf and resolving them does nothing.

Rule signatures:
    next_discontinuity(a, b, t) -> float    earliest event time after t
    resolve(a, b, t) -> None                perform that event
    broad_phase_cutoff(a, b) -> float       override of the default cutoff
"""
from __future__ import annotations
import logging
import math
from typing import TYPE_CHECKING, Callable

from ..constants import BROAD_PHASE_CUTOFF
from ..dispatch import CrossCheck
from ..functions import DEFAULT_ADDER, Constant, FunctionAdder

if TYPE_CHECKING:
    from ..bubbles.base import DiscontinuousBubble

logger = logging.getLogger(__name__)

NextDiscontinuityRule = Callable[["DiscontinuousBubble", "DiscontinuousBubble", float], float]
ResolveRule = Callable[["DiscontinuousBubble", "DiscontinuousBubble", float], None]
CutoffRule = Callable[["DiscontinuousBubble", "DiscontinuousBubble"], float]


def _never(a: DiscontinuousBubble, b: DiscontinuousBubble, t: float) -> float:
    return math.inf


def _nothing(a: DiscontinuousBubble, b: DiscontinuousBubble, t: float) -> None:
    return None


class InteractionSolver:
    """
    Registry of pairwise interaction rules with an analytic broad phase.

    Attributes:
        default_cutoff: Broad-phase horizon used for pairs without their own.

    Example:
        solver = InteractionSolver()
        solver.add_interaction(Ship, Mine, mine_trigger_time, detonate)
        solver.next_discontinuity_after(0.0, ship, mine)
    """

    def __init__(self, default_cutoff: float = BROAD_PHASE_CUTOFF, adder: FunctionAdder | None = None) -> None:
        self.default_cutoff = float(default_cutoff)
        self._adder = adder if adder is not None else DEFAULT_ADDER
        self._finders: CrossCheck[float] = CrossCheck(fallback=_never)
        self._resolvers: CrossCheck[None] = CrossCheck(fallback=_nothing)
        self._cutoffs: CrossCheck[float] = CrossCheck(fallback=lambda a, b: self.default_cutoff)

    def add_interaction(
        self,
        kind_a: type,
        kind_b: type,
        next_discontinuity: NextDiscontinuityRule,
        resolve: ResolveRule,
        broad_phase_cutoff: CutoffRule | None = None,
    ) -> None:
        """
        Register how bubbles of kind_a interact with bubbles of kind_b.

        The rule applies to (a, b) with a a kind_a and b a kind_b, in that
        order only; register the reverse pair separately if it can occur.
        Earlier registrations win over later ones that also match.

        Args:
            kind_a: Class of the first bubble.
            kind_b: Class of the second bubble.
            next_discontinuity: Exact time of the next event after t.
            resolve: Remeasure both bubbles at the event, apply its effect.
            broad_phase_cutoff: Per-pair override of default_cutoff.
        """
        self._finders.add_check(kind_a, kind_b, next_discontinuity)
        self._resolvers.add_check(kind_a, kind_b, resolve)
        if broad_phase_cutoff is not None:
            self._cutoffs.add_check(kind_a, kind_b, broad_phase_cutoff)
        logger.debug("registered interaction %s <-> %s", kind_a.__name__, kind_b.__name__)

    def has_interaction(self, a: DiscontinuousBubble, b: DiscontinuousBubble) -> bool:
        return self._finders.handles(a, b)

    def broad_phase_cutoff(self, a: DiscontinuousBubble, b: DiscontinuousBubble) -> float:
        return self._cutoffs.check(a, b)

    def next_possible_interaction_after(
        self, t: float, a: DiscontinuousBubble, b: DiscontinuousBubble
    ) -> float:
        """
        Earliest time the two bubbles' regions of influence can touch.

        Returns:
            -inf if they already overlap at t, +inf if the radii can never
            cover the separation, otherwise the root of the joint reach.
        """
        radius_a = a.boundary_radius
        radius_b = b.boundary_radius
        separation = a.position.similarity(b.position)

        if separation < radius_a.at(t) + radius_b.at(t):
            return -math.inf

        joint = self._adder.sum_many((radius_a, radius_b, Constant(-separation)))
        root = joint.root()
        if root is None:
            return math.inf
        return root

    def next_discontinuity_after(self, t: float, a: DiscontinuousBubble, b: DiscontinuousBubble) -> float:
        """
        Time of the next discontinuity between a and b after t.

        Returns +inf when no discontinuity will occur.
        """
        if not self._finders.handles(a, b):
            return math.inf
        predicted = self.next_possible_interaction_after(t, a, b)
        if predicted - t > self.broad_phase_cutoff(a, b):
            return predicted
        return self._finders.check(a, b, t)

    def resolve_next_discontinuity_after(
        self, t: float, a: DiscontinuousBubble, b: DiscontinuousBubble
    ) -> None:
        """
        Resolve the discontinuity that next_discontinuity_after(t, a, b) reports.

        Calling this for a pair that never interacts is a caller error; it is
        treated as a no-op.
        """
        if not self._resolvers.handles(a, b):
            logger.debug("no interaction registered for %s, %s", type(a).__name__, type(b).__name__)
            return
        predicted = self.next_possible_interaction_after(t, a, b)
        if predicted - t > self.broad_phase_cutoff(a, b):
            if math.isinf(predicted):
                return
            logger.debug("broad-phase checkpoint at t=%s", predicted)
            a.remeasure(predicted)
            b.remeasure(predicted)
            return
        self._resolvers.check(a, b, t)
