# MIT License (see LICENSE)
"""
Concrete leaf bubbles.

StaticBubble: a fixed position with an arbitrary radius function. Useful as an
obstacle, a sensor region, or a marker whose influence grows on a schedule.

AcceleratingBody: a spherical body of fixed radius moving with constant
acceleration. Kinematics between measurements:
    x(t) = x0 + v0 dt + 1/2 a dt^2
    v(t) = v0 + a dt,                    dt = t - t0

Its boundary radius is the body's reach: the furthest any point of the body
can be from the measured position x0 at time t,
    reach(t) = R + |v0| dt + 1/2 |a| dt^2
which is a Quadratic (or Linear / Constant when |a| or |v0| vanish) in t.
Neither kind has discontinuities of its own; they only change through
interactions or the setters, which re-measure at the given time first.
"""
from __future__ import annotations
import math

import numpy as np

from ..functions import Constant, Linear, MonotonicFunction, Quadratic
from ..util import f64, norm
from .base import DiscontinuousBubble
from .position import Position, VectorN, as_position


class StaticBubble(DiscontinuousBubble):
    """
    A bubble that never moves.

    Args:
        position: Any Position, or an array-like wrapped in a VectorN.
        boundary_radius: Radius function of absolute time, or a number for a
                         constant radius.
        measured_time: Time the bubble was measured.
    """

    def __init__(
        self,
        position,
        boundary_radius: MonotonicFunction | float = 0.0,
        measured_time: float = 0.0,
    ) -> None:
        super().__init__()
        self._position = as_position(position)
        if not isinstance(boundary_radius, MonotonicFunction):
            boundary_radius = Constant(boundary_radius)
        self._radius = boundary_radius
        self._measured_time = float(measured_time)
        self.displayed_time = self._measured_time

    @property
    def measured_time(self) -> float:
        return self._measured_time

    @property
    def position(self) -> Position:
        return self._position

    @property
    def boundary_radius(self) -> MonotonicFunction:
        return self._radius

    def next_discontinuity(self) -> float:
        return math.inf

    def resolve_next_discontinuity(self) -> None:
        # Never scheduled: next_discontinuity() is always +inf.
        return None

    def remeasure_continuous(self, t: float) -> None:
        self._measured_time = float(t)
        self._state_changed()

    def set_state_continuous(self, t: float) -> None:
        self.displayed_time = t

    def rebase_time(self, offset: float) -> None:
        self._measured_time -= offset
        self.displayed_time -= offset
        self._radius = self._radius.translated(offset)
        self._state_changed()


class AcceleratingBody(DiscontinuousBubble):
    """
    A spherical body with constant acceleration.

    Args:
        radius: Radius of the body itself.
        position: Centre at measured_time.
        velocity: Velocity at measured_time (defaults to zero).
        acceleration: Constant acceleration (defaults to zero).
        mass: Mass; use mass <= 0 for an immovable body.
        restitution: Coefficient of restitution used by contact resolution.
        measured_time: Time the state was measured.

    Attributes:
        displayed_position: Centre at the time last passed to set_state().
    """

    def __init__(
        self,
        radius: float,
        position=(0.0, 0.0),
        velocity=None,
        acceleration=None,
        mass: float = 1.0,
        restitution: float = 1.0,
        measured_time: float = 0.0,
    ) -> None:
        super().__init__()
        if radius < 0:
            raise ValueError(f"body radius must be non-negative, got {radius}")
        self.radius = float(radius)
        self.mass = float(mass)
        self.restitution = float(restitution)

        self._position = f64(position).reshape(-1)
        self._velocity = np.zeros_like(self._position) if velocity is None else f64(velocity).reshape(-1)
        self._acceleration = (
            np.zeros_like(self._position) if acceleration is None else f64(acceleration).reshape(-1)
        )
        if not (self._position.shape == self._velocity.shape == self._acceleration.shape):
            raise ValueError("position, velocity and acceleration must have the same dimension")

        self._measured_time = float(measured_time)
        self.displayed_position = self._position.copy()
        self._recalculate_reach()

    # -------------------------------------------------------------------------
    # Measured state
    # -------------------------------------------------------------------------

    @property
    def dimension(self) -> int:
        return int(self._position.shape[0])

    @property
    def measured_time(self) -> float:
        return self._measured_time

    @property
    def position(self) -> VectorN:
        return VectorN(self._position)

    @property
    def velocity(self) -> np.ndarray:
        return self._velocity.copy()

    @property
    def acceleration(self) -> np.ndarray:
        return self._acceleration.copy()

    @property
    def boundary_radius(self) -> MonotonicFunction:
        return self._reach

    @property
    def inv_mass(self) -> float:
        """Inverse mass (1/m). Returns 0 for immovable bodies (mass <= 0)."""
        return 0.0 if self.mass <= 0 else 1.0 / self.mass

    def position_at(self, t: float) -> np.ndarray:
        """Centre at time t, extrapolated from the last measurement."""
        dt = t - self._measured_time
        return self._position + self._velocity * dt + 0.5 * self._acceleration * dt * dt

    def velocity_at(self, t: float) -> np.ndarray:
        dt = t - self._measured_time
        return self._velocity + self._acceleration * dt

    def _recalculate_reach(self) -> None:
        """
        Rebuild reach(t) = R + V (t - t0) + A/2 (t - t0)^2 in powers of t.
        """
        t0 = self._measured_time
        v = norm(self._velocity)
        half_a = 0.5 * norm(self._acceleration)
        if half_a > 0:
            b = v - 2.0 * half_a * t0
            c = self.radius - v * t0 + half_a * t0 * t0
            self._reach: MonotonicFunction = Quadratic(half_a, b, c)
        elif v > 0:
            self._reach = Linear(v, self.radius - v * t0)
        else:
            self._reach = Constant(self.radius)

    # -------------------------------------------------------------------------
    # State machine
    # -------------------------------------------------------------------------

    def next_discontinuity(self) -> float:
        return math.inf

    def resolve_next_discontinuity(self) -> None:
        # A free body has no discontinuities of its own.
        return None

    def remeasure_continuous(self, t: float) -> None:
        # Compute both before touching either; position_at reads the old velocity.
        position = self.position_at(t)
        velocity = self.velocity_at(t)
        self._position = position
        self._velocity = velocity
        self._measured_time = float(t)
        self._recalculate_reach()
        self._state_changed()

    def set_state_continuous(self, t: float) -> None:
        self.displayed_position = self.position_at(t)

    def rebase_time(self, offset: float) -> None:
        self._measured_time -= offset
        self._recalculate_reach()
        self._state_changed()

    # -------------------------------------------------------------------------
    # Mutation entry points
    # -------------------------------------------------------------------------

    def set_position(self, t: float, position) -> None:
        """Remeasure at t, then move the body."""
        self.remeasure(t)
        self._position = f64(position).reshape(-1)
        self._recalculate_reach()
        self._state_changed()

    def set_velocity(self, t: float, velocity) -> None:
        """Remeasure at t, then change the velocity."""
        self.remeasure(t)
        self._velocity = f64(velocity).reshape(-1)
        self._recalculate_reach()
        self._state_changed()

    def set_acceleration(self, t: float, acceleration) -> None:
        """Remeasure at t, then change the acceleration."""
        self.remeasure(t)
        self._acceleration = f64(acceleration).reshape(-1)
        self._recalculate_reach()
        self._state_changed()

    def apply_impulse(self, impulse: np.ndarray) -> None:
        """Change the measured velocity by impulse / mass (no-op for immovable bodies)."""
        if self.inv_mass == 0.0:
            return
        self._velocity = self._velocity + f64(impulse) * self.inv_mass
        self._recalculate_reach()
        self._state_changed()

    def __repr__(self) -> str:
        return (
            f"AcceleratingBody(radius={self.radius}, position={self._position.tolist()}, "
            f"velocity={self._velocity.tolist()}, t0={self._measured_time})"
        )
