# MIT License (see LICENSE)
"""
Interaction scheduling and resolution.

This subpackage provides:
    - InteractionSolver: per-pair-kind rule registry behind an analytic broad phase.
    - Contact: exact time of impact and impulse resolution for accelerating bodies.

Composite-bubble rules live with CompositeBubble in bubble_sim.bubbles.composite.

Typical usage:
    from bubble_sim.solvers import InteractionSolver, register_contact_interaction

    solver = InteractionSolver()
    register_contact_interaction(solver)
    solver.next_discontinuity_after(0.0, ball_a, ball_b)
"""
from .interaction import InteractionSolver
from .contact import register_contact_interaction, resolve_contact, time_of_impact

__all__ = [
    # Solver
    "InteractionSolver",
    # Contact
    "time_of_impact",
    "resolve_contact",
    "register_contact_interaction",
]
