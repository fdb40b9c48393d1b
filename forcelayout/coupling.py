"""
Cross-Engine Coupling
=====================

Read-only channel between two independently ticked layout engines.

GUARANTEES:
- An engine publishes its node state into a back buffer at the end of every
  step, or once per frame while idle; readers only ever see the front buffer
- The front buffer changes only on `commit()`, which the frame clock calls
  once every engine has stepped
- Readers never call into, or wait for, the peer engine

Reading the peer therefore yields its positions as of the end of its
previous completed tick (one tick of staleness, whatever the tick order).
"""

from __future__ import annotations
from dataclasses import dataclass, field
from types import MappingProxyType
from typing import TYPE_CHECKING, Dict, Iterable, Mapping, Optional

if TYPE_CHECKING:
    from graphcore.graph import Node
    from graphcore.morphism import GraphMorphism


@dataclass(frozen=True)
class NodeSnapshot:
    x: float
    y: float
    pinned: bool = False


@dataclass(frozen=True)
class PositionSnapshot:
    """Committed positions of all nodes of one engine after a tick."""
    tick: int
    nodes: Mapping[str, NodeSnapshot] = field(default_factory=dict)

    def get(self, node_id: str) -> Optional[NodeSnapshot]:
        return self.nodes.get(node_id)

    @staticmethod
    def capture(nodes: Iterable[Node], tick: int) -> PositionSnapshot:
        return PositionSnapshot(
            tick=tick,
            nodes=MappingProxyType({
                node.id: NodeSnapshot(node.x, node.y, node.is_pinned) for node in nodes
            })
        )


class SnapshotChannel:
    """Double buffer of PositionSnapshots."""

    def __init__(self, initial: Optional[PositionSnapshot] = None):
        self._front = initial or PositionSnapshot(tick=0)
        self._back: Optional[PositionSnapshot] = None

    def publish(self, snapshot: PositionSnapshot) -> None:
        """Write the back buffer. Invisible to readers until `commit`."""
        self._back = snapshot

    def commit(self) -> bool:
        """Promote the back buffer; returns False when nothing was pending."""
        if self._back is None:
            return False
        self._front = self._back
        self._back = None
        return True

    def latest(self) -> PositionSnapshot:
        """Last committed snapshot."""
        return self._front

    @property
    def has_pending(self) -> bool:
        return self._back is not None


class MorphismProjection:
    """
    Maps this engine's node ids to peer node ids, and reads the peer's
    last committed positions through its channel.
    """

    def __init__(self, mapping: Mapping[str, str], channel: SnapshotChannel):
        self._mapping = MappingProxyType(dict(mapping))
        self._channel = channel

    @property
    def mapping(self) -> Mapping[str, str]:
        return self._mapping

    @property
    def channel(self) -> SnapshotChannel:
        return self._channel

    def targets(self) -> Dict[str, NodeSnapshot]:
        """Peer snapshot of every mapped node present in the peer's snapshot."""
        snapshot = self._channel.latest()
        targets = {}
        for node_id, peer_id in self._mapping.items():
            peer = snapshot.get(peer_id)
            if peer is not None:
                targets[node_id] = peer
        return targets

    @classmethod
    def for_domain(cls, morphism: GraphMorphism, codomain_channel: SnapshotChannel) -> MorphismProjection:
        """Projection used by the domain engine (reads the codomain)."""
        return cls(morphism.node_projection(), codomain_channel)

    @classmethod
    def for_codomain(cls, morphism: GraphMorphism, domain_channel: SnapshotChannel) -> MorphismProjection:
        """Projection used by the codomain engine (reads the domain)."""
        return cls(morphism.reverse_node_projection(), domain_channel)
