"""
Force Layout

RESPONSIBILITY: Tick-driven force-directed layout of typed graphs
INPUTS: TypedGraph, ParameterStore, optional peer projection
OUTPUTS: Node positions, committed PositionSnapshots

Two engines laid out side by side are coupled only through snapshot
channels committed by the FrameClock at frame boundaries.
"""

from .parameters import LayoutParameters, ParameterStore, Subscription, WIRE_KEYS, resolve_key
from .coupling import NodeSnapshot, PositionSnapshot, SnapshotChannel, MorphismProjection
from .forces import (
    LayoutState, Force, AxisForce, AxisGravity, NodeRepulsion, Collision,
    EdgeAttraction, Centering, MorphismConsistency
)
from .engine import ForceLayoutEngine, couple_engines, ALPHA_MIN, ALPHA_DECAY, ALPHA_RESTART
from .clock import FrameClock

__all__ = [
    'LayoutParameters', 'ParameterStore', 'Subscription', 'WIRE_KEYS', 'resolve_key',
    'NodeSnapshot', 'PositionSnapshot', 'SnapshotChannel', 'MorphismProjection',
    'LayoutState', 'Force', 'AxisForce', 'AxisGravity', 'NodeRepulsion', 'Collision',
    'EdgeAttraction', 'Centering', 'MorphismConsistency',
    'ForceLayoutEngine', 'couple_engines', 'ALPHA_MIN', 'ALPHA_DECAY', 'ALPHA_RESTART',
    'FrameClock',
]
