# MIT License (see LICENSE)
"""
Exceptions raised for structural mistakes in how intervals and functions are built.

Absent results (no root, no bracket, no registered interaction) are never
errors: they are returned as ``None`` or handled by the solver's fallbacks.
Every exception here also derives from ``ValueError`` so callers that already
guard constructor input with ``except ValueError`` keep working.
"""
from __future__ import annotations


class BubbleSimError(Exception):
    """Base class for all errors raised by bubble_sim."""


class InvalidInterval(BubbleSimError, ValueError):
    """An interval was constructed with its lower bound above its upper bound."""


class InvalidCoefficient(BubbleSimError, ValueError):
    """A function was constructed with coefficients that break monotonicity."""


class EmptyDomain(BubbleSimError, ValueError):
    """The domain of a summed function was queried but the domains do not overlap."""
