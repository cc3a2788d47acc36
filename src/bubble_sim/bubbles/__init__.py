# MIT License (see LICENSE)
"""
Bubbles: systems measured at some time, bounded by a growing radius.

This subpackage provides:
    - Position, VectorN: what bubbles are located by.
    - Bubble, DiscontinuousBubble: the abstract capability set and state machine.
    - StaticBubble, AcceleratingBody: concrete leaves.
    - CompositeBubble, build_tree: binary aggregation for hierarchical scheduling.
"""
from .position import Position, VectorN, as_position
from .base import Bubble, DiscontinuousBubble
from .composite import (
    CompositeBubble,
    DiscontinuitySource,
    build_tree,
    register_composite_interactions,
)
from .bodies import AcceleratingBody, StaticBubble

__all__ = [
    # Positions
    "Position",
    "VectorN",
    "as_position",
    # Abstractions
    "Bubble",
    "DiscontinuousBubble",
    # Leaves
    "StaticBubble",
    "AcceleratingBody",
    # Composites
    "CompositeBubble",
    "DiscontinuitySource",
    "register_composite_interactions",
    "build_tree",
]
