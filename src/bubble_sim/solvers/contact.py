# MIT License (see LICENSE)
"""
Exact contact between two accelerating bodies.

Time of impact: with relative position d0, velocity dv and acceleration da
measured at time t, the centres are R = r_a + r_b apart when

    |d0 + dv s + 1/2 da s^2|^2 - R^2 = 0,      s = t' - t

a quartic in s (a quadratic when the accelerations match). The earliest real
root at which the bodies are approaching is the time of impact. Bodies that
already overlap while approaching collide immediately.

Resolution: both bodies are re-measured at the time of impact and an impulse
along the contact normal reverses the approaching component of their relative
velocity, scaled by the smaller of the two restitution coefficients:

    j = -(1 + e) (dv . n) / (1/m_a + 1/m_b)
"""
from __future__ import annotations
import logging
import math

import numpy as np

from ..bubbles.bodies import AcceleratingBody
from ..constants import CONTACT_TOLERANCE
from ..util import norm, unit
from .interaction import InteractionSolver

logger = logging.getLogger(__name__)


def time_of_impact(a: AcceleratingBody, b: AcceleratingBody, after: float) -> float:
    """
    Earliest time >= after at which the two bodies touch while approaching.

    Args:
        a: First body.
        b: Second body.
        after: Search start; both bodies are extrapolated to this time.

    Returns:
        The time of impact, or +inf if the bodies never collide. Two immovable
        bodies (both mass <= 0) pass through each other: no impulse could
        separate them.
    """
    if a.inv_mass + b.inv_mass == 0.0:
        return math.inf

    dp = b.position_at(after) - a.position_at(after)
    dv = b.velocity_at(after) - a.velocity_at(after)
    da = b.acceleration - a.acceleration
    R = a.radius + b.radius

    # Already touching (up to round-off) and closing in
    c0 = float(np.dot(dp, dp)) - R * R
    touching = norm(dp) <= R + CONTACT_TOLERANCE * max(1.0, R)
    if touching and float(np.dot(dp, dv)) < 0.0:
        return after

    coefficients = [
        0.25 * float(np.dot(da, da)),
        float(np.dot(dv, da)),
        float(np.dot(dv, dv)) + float(np.dot(dp, da)),
        2.0 * float(np.dot(dp, dv)),
        c0,
    ]
    if not any(coefficients[:-1]):
        # No relative motion
        return math.inf

    roots = np.roots(coefficients)
    candidates = sorted(
        float(r.real)
        for r in roots
        if abs(r.imag) <= CONTACT_TOLERANCE * max(1.0, abs(r)) and r.real > CONTACT_TOLERANCE
    )
    for s in candidates:
        separation = dp + dv * s + 0.5 * da * s * s
        closing = dv + da * s
        if float(np.dot(separation, closing)) < 0.0:
            return after + s
    return math.inf


def resolve_contact(a: AcceleratingBody, b: AcceleratingBody, after: float) -> None:
    """
    Move both bodies to their time of impact and apply the collision impulse.

    Does nothing when the bodies never collide or are no longer approaching.
    """
    toi = time_of_impact(a, b, after)
    if math.isinf(toi):
        return

    a.remeasure(toi)
    b.remeasure(toi)

    n = unit(b.position.values - a.position.values)
    if not n.any():
        n = unit(a.velocity - b.velocity)
    rel = float(np.dot(b.velocity - a.velocity, n))
    inv_mass = a.inv_mass + b.inv_mass
    if rel >= 0.0 or inv_mass == 0.0:
        return

    e = min(a.restitution, b.restitution)
    j = -(1.0 + e) * rel / inv_mass
    a.apply_impulse(-j * n)
    b.apply_impulse(j * n)
    logger.debug("contact at t=%s, impulse %s", toi, j)


def register_contact_interaction(solver: InteractionSolver) -> None:
    """Make AcceleratingBody pairs bounce off each other."""
    solver.add_interaction(AcceleratingBody, AcceleratingBody, time_of_impact, resolve_contact)
