"""
Force Layout Engine
===================

Tick-driven force simulation of one TypedGraph.

LIFECYCLE:
==========
- Construction: builds the force terms from the current parameters,
  publishes and commits an initial snapshot, starts with alpha = 1
  (running iff the layouter is on)
- step(): one tick; stops by itself once alpha drops below alpha_min
- restart(): reheats to alpha = 0.2 (only while the layouter is on)
- detach(): cancels parameter subscriptions

BOUNDARY ENFORCEMENT:
=====================
- Writes x/y of free nodes only
- Reads pin/drag state, never writes it
- Reads the peer engine only through its committed snapshot
"""

from __future__ import annotations
from typing import Dict, List, Optional, Tuple
import logging

import numpy as np

from graphcore.graph import TypedGraph
from graphcore.morphism import GraphMorphism
from graphcore.observability import AuditEventType, LayoutAuditLog
from .coupling import MorphismProjection, PositionSnapshot, SnapshotChannel
from .forces import (
    X, Y, LayoutState, Force, AxisGravity, NodeRepulsion, Collision,
    EdgeAttraction, Centering, MorphismConsistency, active
)
from .parameters import LayoutParameters, ParameterStore, Subscription

logger = logging.getLogger(__name__)

ALPHA_MIN = 0.001
ALPHA_DECAY = 1 - ALPHA_MIN ** (1 / 300)
ALPHA_RESTART = 0.2
VELOCITY_DECAY = 0.4

# Parameters that change the shape of at least one force.
FORCE_PARAMETERS = (
    "gravity_strength",
    "node_repulsion_strength",
    "edge_length",
    "edge_strength",
    "mapping_consistency",
    "auto_center",
)


class ForceLayoutEngine:
    """
    Force-directed layout of a single graph.

    Forces, in application order: gravityX, gravityY, nodeRepulsion,
    edgeAttraction, morphismX, morphismY, collision, centering.
    """

    def __init__(
        self,
        store: ParameterStore,
        graph: TypedGraph,
        width: float,
        height: float,
        projection: Optional[MorphismProjection] = None,
        *,
        channel: Optional[SnapshotChannel] = None,
        rng: Optional[np.random.Generator] = None,
        audit_log: Optional[LayoutAuditLog] = None,
        name: str = "layout"
    ):
        self.name = name
        self.width = float(width)
        self.height = float(height)

        self.alpha = 1.0
        self.alpha_target = 0.0
        self.alpha_min = ALPHA_MIN
        self.alpha_decay = ALPHA_DECAY
        self.velocity_decay = VELOCITY_DECAY

        self._store = store
        self._graph = graph
        self._nodes = tuple(graph.iter_nodes())
        self._projection = projection
        self._audit_log = audit_log
        self._state = LayoutState.from_nodes(self._nodes, rng or np.random.default_rng())
        self._tick_count = 0
        self._pending: List[str] = []

        params = store.parameters
        self._running = params.layouter_on
        self._forces = self._build_forces(params)
        for force in self._forces:
            force.initialize(self._state)

        self._subscriptions: List[Subscription] = [
            store.on_change(key, self._parameter_listener(key)) for key in FORCE_PARAMETERS
        ]
        self._subscriptions.append(store.on_change("layouter_on", self._on_layouter_toggle))

        self._channel = channel or SnapshotChannel()
        self._channel.publish(self.snapshot())
        self._channel.commit()

        logger.debug("engine %s created for %r", name, graph)
        self._record(AuditEventType.ENGINE_CREATED, nodes=len(self._nodes), running=self._running)

    # =========================================================================
    # FORCES
    # =========================================================================

    def _build_forces(self, params: LayoutParameters) -> Tuple[Force, ...]:
        cx, cy = self.width / 2, self.height / 2
        degrees = self._graph.topology().degrees()

        forces: List[Force] = [
            AxisGravity(X, cx, params.gravity_strength),
            AxisGravity(Y, cy, params.gravity_strength),
            NodeRepulsion(params.node_repulsion_strength),
            EdgeAttraction(self._graph.iter_edges(), degrees, params.edge_length, params.edge_strength),
        ]
        if self._projection is not None:
            forces.append(MorphismConsistency(X, self._projection, params.mapping_consistency))
            forces.append(MorphismConsistency(Y, self._projection, params.mapping_consistency))
        forces.append(Collision())
        forces.append(Centering(cx, cy, enabled=params.auto_center))
        return tuple(forces)

    def _configure(self, name: str, params: LayoutParameters) -> None:
        """Reconfigure the forces shaped by one parameter."""
        for force in self._forces:
            if name == "gravity_strength" and isinstance(force, AxisGravity):
                force.strength = params.gravity_strength
            elif name == "node_repulsion_strength" and isinstance(force, NodeRepulsion):
                force.strength = params.node_repulsion_strength
            elif name == "edge_length" and isinstance(force, EdgeAttraction):
                force.length = params.edge_length
            elif name == "edge_strength" and isinstance(force, EdgeAttraction):
                force.strength = params.edge_strength
            elif name == "mapping_consistency" and isinstance(force, MorphismConsistency):
                force.strength = params.mapping_consistency
            elif name == "auto_center" and isinstance(force, Centering):
                force.enabled = params.auto_center

    def _apply_pending(self) -> None:
        if not self._pending:
            return
        params = self._store.parameters
        for name in self._pending:
            self._configure(name, params)
        self._pending.clear()

    @property
    def pending_parameters(self) -> Tuple[str, ...]:
        """Changed parameters not yet applied to the forces."""
        return tuple(self._pending)

    @property
    def forces(self) -> Tuple[str, ...]:
        """
        Names of the active force terms, in application order.

        Reflects the configuration of the last tick: parameter changes are
        applied at the start of the next `step()` (see `pending_parameters`).
        """
        return tuple(force.name for force in active(self._forces))

    def force(self, name: str) -> Optional[Force]:
        for force in self._forces:
            if force.name == name:
                return force
        return None

    # =========================================================================
    # PARAMETER SUBSCRIPTIONS
    # =========================================================================

    def _parameter_listener(self, name: str):
        def listener(value) -> None:
            if name not in self._pending:
                self._pending.append(name)
            self._record(AuditEventType.PARAMETER_CHANGED, parameter=name, value=value)
            self.restart()
        return listener

    def _on_layouter_toggle(self, on: bool) -> None:
        self._record(AuditEventType.PARAMETER_CHANGED, parameter="layouter_on", value=on)
        if on:
            self.restart()
        else:
            self.stop()

    def detach(self) -> None:
        """Stop listening to the parameter store."""
        for subscription in self._subscriptions:
            subscription.cancel()
        self._subscriptions.clear()

    # =========================================================================
    # LIFECYCLE
    # =========================================================================

    @property
    def graph(self) -> TypedGraph:
        return self._graph

    @property
    def channel(self) -> SnapshotChannel:
        return self._channel

    @property
    def projection(self) -> Optional[MorphismProjection]:
        return self._projection

    @property
    def tick_count(self) -> int:
        return self._tick_count

    @property
    def is_running(self) -> bool:
        return self._running

    def restart(self) -> ForceLayoutEngine:
        """Reheat the simulation, unless the layouter is off."""
        if not self._store.parameters.layouter_on:
            return self
        self.alpha = ALPHA_RESTART
        self._running = True
        logger.debug("engine %s restarted", self.name)
        self._record(AuditEventType.RESTARTED)
        return self

    def stop(self) -> ForceLayoutEngine:
        if self._running:
            self._running = False
            logger.debug("engine %s stopped at alpha=%.4f", self.name, self.alpha)
            self._record(AuditEventType.STOPPED, alpha=round(self.alpha, 6))
        return self

    def step(self) -> bool:
        """Advance the simulation by one tick. Returns False when not running."""
        if not self._running:
            return False

        self._apply_pending()
        self._pull_nodes()

        state = self._state
        start = state.positions.copy()

        self.alpha += (self.alpha_target - self.alpha) * self.alpha_decay
        for force in active(self._forces):
            force.apply(state, self.alpha)

        self._integrate(start)
        self._reset_non_finite(start)
        self._push_nodes()

        self._tick_count += 1
        self._channel.publish(self.snapshot())

        if self.alpha < self.alpha_min:
            self._running = False
            logger.debug("engine %s settled after %d ticks", self.name, self._tick_count)
            self._record(AuditEventType.SETTLED)

        return True

    def snapshot(self) -> PositionSnapshot:
        return PositionSnapshot.capture(self._nodes, self._tick_count)

    def publish(self) -> None:
        """Publish the current node state without stepping, e.g. while settled."""
        self._channel.publish(self.snapshot())

    def commit(self) -> bool:
        """Make the last published snapshot visible to readers."""
        return self._channel.commit()

    def positions(self) -> Dict[str, Tuple[float, float]]:
        return {node.id: (node.x, node.y) for node in self._nodes}

    # =========================================================================
    # INTEGRATION
    # =========================================================================

    def _pull_nodes(self) -> None:
        state = self._state
        for i, node in enumerate(self._nodes):
            state.positions[i] = (node.x, node.y)
            state.fixed[i] = node.is_fixed

    def _push_nodes(self) -> None:
        positions, fixed = self._state.positions, self._state.fixed
        for i, node in enumerate(self._nodes):
            if not fixed[i]:
                node.x, node.y = float(positions[i, 0]), float(positions[i, 1])

    def _integrate(self, start: np.ndarray) -> None:
        state = self._state
        free = ~state.fixed

        state.velocities[free] *= 1 - self.velocity_decay
        state.positions[free] += state.velocities[free]

        state.velocities[state.fixed] = 0.0
        state.positions[state.fixed] = start[state.fixed]

    def _reset_non_finite(self, start: np.ndarray) -> None:
        state = self._state
        bad = ~(np.isfinite(state.positions).all(axis=1) & np.isfinite(state.velocities).all(axis=1))
        if not bad.any():
            return

        fallback = np.where(np.isfinite(start), start, [[self.width / 2, self.height / 2]])
        state.positions[bad] = fallback[bad]
        state.velocities[bad] = 0.0

        node_ids = [state.node_ids[i] for i in np.flatnonzero(bad)]
        logger.warning("engine %s reset non-finite nodes %s at tick %d", self.name, node_ids, self._tick_count)
        self._record(AuditEventType.NON_FINITE_RESET, nodes=",".join(node_ids))

    def _record(self, event_type: AuditEventType, **details) -> None:
        if self._audit_log is not None:
            self._audit_log.record(event_type, self.name, self._tick_count, **details)

    def __repr__(self) -> str:
        status = "running" if self._running else "stopped"
        return f"ForceLayoutEngine({self.name!r}, tick={self._tick_count}, alpha={self.alpha:.4f}, {status})"


def couple_engines(
    store: ParameterStore,
    morphism: GraphMorphism,
    width: float,
    height: float,
    *,
    rng: Optional[np.random.Generator] = None,
    audit_log: Optional[LayoutAuditLog] = None
) -> Tuple[ForceLayoutEngine, ForceLayoutEngine]:
    """
    Build the domain and codomain engines of a morphism view, each pulled
    toward the other's committed positions.
    """
    domain_channel = SnapshotChannel()
    codomain_channel = SnapshotChannel()

    domain = ForceLayoutEngine(
        store, morphism.domain, width, height,
        MorphismProjection.for_domain(morphism, codomain_channel),
        channel=domain_channel, rng=rng, audit_log=audit_log, name="domain"
    )
    codomain = ForceLayoutEngine(
        store, morphism.codomain, width, height,
        MorphismProjection.for_codomain(morphism, domain_channel),
        channel=codomain_channel, rng=rng, audit_log=audit_log, name="codomain"
    )
    return domain, codomain
