# MIT License (see LICENSE)
"""
Numeric defaults shared by the function algebra, the solver and the driver.

All times are in the simulation's own time units and all lengths in the units
of the positions the bubbles report; nothing here assumes SI.
"""
from __future__ import annotations

# Step used for centred-difference derivatives and half-width of the interval
# wrapped around closed-form quadratic roots.
DEFAULT_EPS: float = 1e-4

# Root bounding (MonotonicFunction.bound_zero).
INITIAL_SEARCH_WIDTH: float = 10.0
MAX_EXPANSION_ITERATIONS: int = 20
EXPANSION_FACTOR: float = 3.0
MAX_CONTRACTION_ITERATIONS: int = 20
MAX_INTERVAL_WIDTH: float = 0.01

# How far ahead of the query time a broad-phase prediction must lie before it
# is trusted without running the exact pair rule.
BROAD_PHASE_CUTOFF: float = 0.05

# Slack used when deciding whether two bodies touch or a root lies in the past.
CONTACT_TOLERANCE: float = 1e-9

# Simulation.advance_to rebases the time origin once local time exceeds this.
DEFAULT_REBASE_THRESHOLD: float = 1e4
