"""
Graph Visualization Contracts

Responsibility:
Renderable, immutable views of a laid-out typed graph.
A renderer reads these after each frame; it never reads engine state.
"""

from dataclasses import dataclass
from typing import Optional, Tuple


@dataclass(frozen=True)
class GraphNodeView:
    """Renderable graph node."""
    node_id: str
    x: float
    y: float
    radius: float
    icon: Optional[str]
    node_type: str
    color: Optional[str]
    label: str
    is_pinned: bool
    is_dragging: bool


@dataclass(frozen=True)
class GraphEdgeView:
    """Renderable graph edge."""
    edge_id: int
    source_id: str
    target_id: str
    edge_type: str
    path: str
    label: str
    label_x: float
    label_y: float
    color: Optional[str]


@dataclass(frozen=True)
class NetworkGraphView:
    """
    One frame of a laid-out graph.
    Node and edge order follow the graph's input order.
    """
    view_id: str
    nodes: Tuple[GraphNodeView, ...]
    edges: Tuple[GraphEdgeView, ...]

    def node(self, node_id: str) -> Optional[GraphNodeView]:
        for node in self.nodes:
            if node.node_id == node_id:
                return node
        return None

    def edge(self, edge_id: int) -> Optional[GraphEdgeView]:
        for edge in self.edges:
            if edge.edge_id == edge_id:
                return edge
        return None
