"""
Force Terms
===========

Pluggable forces of the layout simulation.

Each force reads and updates a shared LayoutState:
- velocity forces add to `velocities` (scaled by alpha where stated)
- the centering force translates `positions` directly

Forces never touch Node objects; the engine copies positions in and out.

NUMERICAL POLICY:
=================
- Coincident points are separated by a tiny random "jiggle" before any
  division by their distance
- The repulsion distance is floored so nearby pairs cannot blow up
"""

from __future__ import annotations
from dataclasses import dataclass
from typing import Dict, Iterable, Optional, Sequence, Tuple

import numpy as np

from graphcore.graph import Edge, Node
from .coupling import MorphismProjection

X, Y = 0, 1

JIGGLE_MAGNITUDE = 1e-6

# Squared distance below which repulsion uses sqrt(d2) as its denominator.
DISTANCE_MIN2 = 1.0

COLLISION_STRENGTH = 1.0


# =============================================================================
# SIMULATION STATE
# =============================================================================

@dataclass
class LayoutState:
    """Vectorised node state of one simulation (row i is node_ids[i])."""
    node_ids: Tuple[str, ...]
    index: Dict[str, int]
    positions: np.ndarray
    velocities: np.ndarray
    radii: np.ndarray
    fixed: np.ndarray
    rng: np.random.Generator

    @classmethod
    def from_nodes(cls, nodes: Sequence[Node], rng: np.random.Generator) -> LayoutState:
        n = len(nodes)
        return cls(
            node_ids=tuple(node.id for node in nodes),
            index={node.id: i for i, node in enumerate(nodes)},
            positions=np.array([[node.x, node.y] for node in nodes], dtype=float).reshape(n, 2),
            velocities=np.zeros((n, 2)),
            radii=np.array([node.type.radius for node in nodes], dtype=float),
            fixed=np.array([node.is_fixed for node in nodes], dtype=bool),
            rng=rng
        )

    @property
    def size(self) -> int:
        return len(self.node_ids)

    def jiggle(self, shape) -> np.ndarray:
        return (self.rng.random(shape) - 0.5) * JIGGLE_MAGNITUDE

    def separate_coincident(self, d: np.ndarray) -> np.ndarray:
        """Replace zero displacement rows with a jiggle."""
        zero = ~d.any(axis=1)
        if zero.any():
            d = d.copy()
            d[zero] = self.jiggle((int(zero.sum()), 2))
        return d


class Force:
    """Base force term."""

    name = "force"

    @property
    def enabled(self) -> bool:
        return True

    def initialize(self, state: LayoutState) -> None:
        """Called once when the engine is built."""

    def apply(self, state: LayoutState, alpha: float) -> None:
        raise NotImplementedError


# =============================================================================
# POSITIONING FORCES (per axis)
# =============================================================================

class AxisForce(Force):
    """Pulls each node's coordinate on one axis toward a target."""

    def __init__(self, axis: int):
        self.axis = axis

    def targets(self, state: LayoutState) -> Tuple[np.ndarray, np.ndarray]:
        """(target coordinate, strength) per node."""
        raise NotImplementedError

    def apply(self, state: LayoutState, alpha: float) -> None:
        target, strength = self.targets(state)
        state.velocities[:, self.axis] += (target - state.positions[:, self.axis]) * strength * alpha


class AxisGravity(AxisForce):
    """Pulls every node toward the viewport center on one axis."""

    def __init__(self, axis: int, center: float, strength: float):
        super().__init__(axis)
        self.name = "gravityX" if axis == X else "gravityY"
        self.center = center
        self.strength = strength

    @property
    def enabled(self) -> bool:
        return self.strength != 0

    def targets(self, state: LayoutState) -> Tuple[np.ndarray, np.ndarray]:
        n = state.size
        return np.full(n, self.center), np.full(n, self.strength)


class MorphismConsistency(AxisForce):
    """
    Pulls each mapped node toward its counterpart in the peer simulation.

    The strength is doubled (capped at 1) when the counterpart is pinned.
    Unmapped nodes, and counterparts missing from the peer snapshot,
    receive no force.
    """

    def __init__(self, axis: int, projection: MorphismProjection, strength: float):
        super().__init__(axis)
        self.name = "morphismX" if axis == X else "morphismY"
        self.projection = projection
        self.strength = strength

    def strength_for(self, pinned: bool) -> float:
        if pinned:
            return min(1.0, 2 * self.strength)
        return self.strength

    def targets(self, state: LayoutState) -> Tuple[np.ndarray, np.ndarray]:
        target = np.zeros(state.size)
        strength = np.zeros(state.size)
        for node_id, peer in self.projection.targets().items():
            i = state.index.get(node_id)
            if i is None:
                continue
            target[i] = peer.x if self.axis == X else peer.y
            strength[i] = self.strength_for(peer.pinned)
        return target, strength


# =============================================================================
# PAIRWISE FORCES
# =============================================================================

class NodeRepulsion(Force):
    """
    Charge force between all node pairs.

    Node i gains `d * strength * alpha / l` from every j, with `d` the
    displacement from i to j and `l` its squared norm. Negative strength
    repels.
    """

    name = "nodeRepulsion"

    def __init__(self, strength: float):
        self.strength = strength

    @property
    def enabled(self) -> bool:
        return self.strength != 0

    def apply(self, state: LayoutState, alpha: float) -> None:
        n = state.size
        if n < 2:
            return

        pos = state.positions
        d = pos[np.newaxis, :, :] - pos[:, np.newaxis, :]
        off_diagonal = ~np.eye(n, dtype=bool)
        coincident = ~d.any(axis=2) & off_diagonal
        if coincident.any():
            d[coincident] = state.jiggle((int(coincident.sum()), 2))

        l = (d ** 2).sum(axis=2)
        near = l < DISTANCE_MIN2
        l = np.where(near, np.sqrt(DISTANCE_MIN2 * l), l)
        np.fill_diagonal(l, 1.0)

        weight = np.where(off_diagonal, self.strength * alpha / l, 0.0)
        state.velocities += (d * weight[:, :, np.newaxis]).sum(axis=1)


class Collision(Force):
    """
    Keeps node circles from overlapping.

    Works on predicted positions (position + velocity). The correction of an
    overlapping pair is split by squared radius, so larger nodes move less.
    Does not depend on alpha.
    """

    name = "collision"

    def __init__(self, strength: float = COLLISION_STRENGTH):
        self.strength = strength

    def apply(self, state: LayoutState, alpha: float) -> None:
        n = state.size
        pos, vel, radii = state.positions, state.velocities, state.radii
        radii2 = radii ** 2

        for i in range(n - 1):
            others = np.arange(i + 1, n)
            d = (pos[i] + vel[i]) - (pos[others] + vel[others])
            r = radii[i] + radii[others]
            overlap = (d ** 2).sum(axis=1) < r ** 2
            if not overlap.any():
                continue

            others, d, r = others[overlap], state.separate_coincident(d[overlap]), r[overlap]
            l = np.sqrt((d ** 2).sum(axis=1))
            d = d * ((r - l) / l * self.strength)[:, np.newaxis]
            share = radii2[others] / (radii2[i] + radii2[others])

            vel[i] += (d * share[:, np.newaxis]).sum(axis=0)
            vel[others] -= d * (1 - share)[:, np.newaxis]


class EdgeAttraction(Force):
    """
    Spring along each edge.

    Rest length is `length + source.radius + target.radius`; stiffness is
    `strength / min(deg(source), deg(target))`, so edges at hubs weigh less.
    The correction is split by degree: the endpoint with the higher degree
    moves less.
    """

    name = "edgeAttraction"

    def __init__(self, edges: Iterable[Edge], degrees: Dict[str, int], length: float, strength: float):
        self._edges = tuple(edges)
        self._degrees = degrees
        self.length = length
        self.strength = strength
        self._sources = np.zeros(0, dtype=int)
        self._targets = np.zeros(0, dtype=int)
        self._radius_sum = np.zeros(0)
        self._min_degree = np.zeros(0)
        self._bias = np.zeros(0)

    def initialize(self, state: LayoutState) -> None:
        self._sources = np.array([state.index[e.source.id] for e in self._edges], dtype=int)
        self._targets = np.array([state.index[e.target.id] for e in self._edges], dtype=int)
        self._radius_sum = np.array(
            [e.source.type.radius + e.target.type.radius for e in self._edges], dtype=float
        )
        source_degree = np.array([self._degrees[e.source.id] for e in self._edges], dtype=float)
        target_degree = np.array([self._degrees[e.target.id] for e in self._edges], dtype=float)
        self._min_degree = np.minimum(source_degree, target_degree)
        self._bias = source_degree / (source_degree + target_degree)

    def distances(self) -> np.ndarray:
        return self.length + self._radius_sum

    def stiffness(self) -> np.ndarray:
        return self.strength / self._min_degree

    def apply(self, state: LayoutState, alpha: float) -> None:
        if not len(self._edges):
            return

        pos, vel = state.positions, state.velocities
        s, t = self._sources, self._targets
        d = state.separate_coincident((pos[t] + vel[t]) - (pos[s] + vel[s]))
        l = np.sqrt((d ** 2).sum(axis=1))
        k = (l - self.distances()) / l * alpha * self.stiffness()
        d = d * k[:, np.newaxis]

        np.add.at(vel, t, -d * self._bias[:, np.newaxis])
        np.add.at(vel, s, d * (1 - self._bias)[:, np.newaxis])


# =============================================================================
# CENTERING
# =============================================================================

class Centering(Force):
    """Translates the free nodes so that their mean lies on the center."""

    name = "centering"

    def __init__(self, cx: float, cy: float, enabled: bool = True):
        self.center = np.array([cx, cy], dtype=float)
        self._enabled = enabled

    @property
    def enabled(self) -> bool:
        return self._enabled

    @enabled.setter
    def enabled(self, value: bool) -> None:
        self._enabled = bool(value)

    def apply(self, state: LayoutState, alpha: float) -> None:
        free = ~state.fixed
        if not free.any():
            return
        shift = state.positions[free].mean(axis=0) - self.center
        state.positions[free] -= shift


def active(forces: Iterable[Force], only: Optional[Iterable[str]] = None) -> Tuple[Force, ...]:
    """Enabled forces, in order, optionally restricted to some names."""
    names = set(only) if only is not None else None
    return tuple(
        f for f in forces if f.enabled and (names is None or f.name in names)
    )
