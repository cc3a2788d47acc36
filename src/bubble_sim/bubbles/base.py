# MIT License (see LICENSE)
"""
Bubble abstractions.

A bubble wraps a physical system whose state was measured at some time and
can be extrapolated from there. Its boundary radius is a monotonic function of
time bounding how far from the measured position the system can have any
influence; two bubbles cannot interact before the sum of their radii reaches
the similarity between their positions.

A discontinuous bubble's state is an explicit function of time only up to its
next discontinuity. At that time the continuous model is replaced (by
resolve_next_discontinuity), and the state machine picks up from there:

    continuous         t < next_discontinuity()     update directly
    at-discontinuity   t >= next_discontinuity()    resolve, then try again

Every state change must be reported with _state_changed() so any composite
holding the bubble drops its cached position, radius and event data.
"""
from __future__ import annotations
from abc import ABC, abstractmethod
from typing import TYPE_CHECKING

from ..functions import MonotonicFunction
from .position import Position

if TYPE_CHECKING:
    from .composite import CompositeBubble


class Bubble(ABC):
    """
    The capability set every simulated object exposes.

    Attributes:
        parent: Composite bubble this bubble belongs to, if any.
    """

    def __init__(self) -> None:
        self.parent: CompositeBubble | None = None

    @property
    @abstractmethod
    def measured_time(self) -> float:
        """Time at which the system's state was last measured."""
        ...

    @property
    @abstractmethod
    def position(self) -> Position:
        """Position of the system at measured_time."""
        ...

    @property
    @abstractmethod
    def boundary_radius(self) -> MonotonicFunction:
        """Radius of the sphere of influence as a function of absolute time."""
        ...

    @abstractmethod
    def set_state(self, t: float) -> None:
        """Update whatever is displayed to represent the system at time t."""
        ...

    @abstractmethod
    def remeasure(self, t: float) -> None:
        """Measure the system again at time t."""
        ...

    @abstractmethod
    def rebase_time(self, offset: float) -> None:
        """
        Move the time origin so that S'(t - offset) == S(t) for all t.

        Called periodically so floating point error does not grow with the
        magnitude of the simulation clock.
        """
        ...

    def advance_to(self, t: float) -> None:
        """Caller-driven entry point: bring the displayed state to time t."""
        self.set_state(t)

    def _state_changed(self) -> None:
        if self.parent is not None:
            self.parent.invalidate()


class DiscontinuousBubble(Bubble):
    """
    A bubble whose state is continuous only between discontinuities.

    Subclasses provide the continuous updates and the transition across a
    discontinuity; remeasure() and set_state() drive the state machine.
    Resolving a discontinuity must move measured_time up to (at least) its
    time and push next_discontinuity() beyond it, and discontinuities must not
    accumulate in a bounded stretch of time, or the loops below never finish.
    """

    @abstractmethod
    def next_discontinuity(self) -> float:
        """
        Time of the next discontinuity, +inf if none is known.

        Should be memoised by implementations where possible.
        """
        ...

    @abstractmethod
    def resolve_next_discontinuity(self) -> None:
        """Put the system into the state immediately after its next discontinuity."""
        ...

    @abstractmethod
    def remeasure_continuous(self, t: float) -> None:
        """Remeasure at t, which is known to lie before the next discontinuity."""
        ...

    @abstractmethod
    def set_state_continuous(self, t: float) -> None:
        """set_state for a t known to lie before the next discontinuity."""
        ...

    def resolve_until(self, t: float) -> int:
        """
        Resolve every discontinuity at or before t.

        Returns:
            Number of discontinuities resolved.
        """
        resolved = 0
        while t >= self.next_discontinuity():
            self.resolve_next_discontinuity()
            resolved += 1
        return resolved

    def remeasure(self, t: float) -> None:
        self.resolve_until(t)
        self.remeasure_continuous(t)

    def set_state(self, t: float) -> None:
        self.resolve_until(t)
        self.set_state_continuous(t)
