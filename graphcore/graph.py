"""
Typed Graph
===========

Instance graphs validated against a TypeSchema.

INVARIANTS:
- Node ids and edge ids are unique within a graph
- Every edge's (source.type, target.type) is one of its type's signatures
- Topology never changes after assembly; only node positions, node
  states and edge label sizes mutate
"""

from __future__ import annotations
from dataclasses import dataclass
from types import MappingProxyType
from typing import TYPE_CHECKING, Dict, Iterable, Iterator, Mapping, Optional, Tuple
import logging

import numpy as np

from .contracts.base import (
    DuplicateDefinitionError, NodeStatus, NodeState, SignatureMismatchError,
    UnknownNodeTypeError, UnknownEdgeTypeError,
    UnknownNodeReferenceError, UnknownEdgeReferenceError
)
from .contracts.specs import NodeSpec, EdgeSpec, NodeLike, EdgeLike, normalize
from .geometry import Point
from .schema import NodeType, EdgeType, TypeSchema

if TYPE_CHECKING:
    from .topology import GraphTopology

logger = logging.getLogger(__name__)

# Nodes without coordinates are placed uniformly in [0, RANDOM_EXTENT).
RANDOM_EXTENT = 500.0


class Node:
    """
    A graph node.

    Position and status are mutable: the layout engine writes x/y of free
    nodes, the interaction layer writes x/y of dragged nodes and changes
    the status.
    """

    __slots__ = ("id", "type", "x", "y", "_status")

    def __init__(self, node_id: str, node_type: NodeType, x: float, y: float):
        self.id = node_id
        self.type = node_type
        self.x = float(x)
        self.y = float(y)
        self._status = NodeStatus()

    @property
    def status(self) -> NodeStatus:
        return self._status

    @property
    def state(self) -> NodeState:
        return self._status.state

    @property
    def is_fixed(self) -> bool:
        return self._status.state.is_fixed

    @property
    def is_pinned(self) -> bool:
        return self._status.is_pinned

    @property
    def is_dragging(self) -> bool:
        return self._status.is_dragging

    @property
    def point(self) -> Point:
        return Point(self.x, self.y)

    @property
    def radius(self) -> float:
        return self.type.radius

    def begin_drag(self) -> None:
        self._status = self._status.begin_drag()

    def end_drag(self) -> None:
        self._status = self._status.end_drag()

    def toggle_pin(self) -> None:
        self._status = self._status.toggle_pin()

    def pin(self) -> None:
        if not self.is_pinned:
            self.toggle_pin()

    def unpin(self) -> None:
        if self.is_pinned:
            self.toggle_pin()

    def __repr__(self) -> str:
        return f"Node({self.id!r}, {self.type.name}, x={self.x:.2f}, y={self.y:.2f}, {self.state.value})"


@dataclass
class LabelSize:
    """Measured size of an edge label, written back by the renderer."""
    width: float = 0.0
    height: float = 0.0


class Edge:
    """A typed edge between two nodes of the same graph."""

    __slots__ = ("id", "type", "source", "target", "label_offset", "label_size")

    def __init__(self, edge_id: int, edge_type: EdgeType, source: Node, target: Node):
        self.id = edge_id
        self.type = edge_type
        self.source = source
        self.target = target
        # 0 puts the label on the source, 1 on the target.
        self.label_offset = 0.5
        self.label_size = LabelSize()

    @property
    def center(self) -> Point:
        return Point.midpoint(self.source.point, self.target.point)

    def __repr__(self) -> str:
        return f"Edge({self.id}, {self.type.name}, {self.source.id} -> {self.target.id})"


class TypedGraph:
    """
    A graph whose nodes and edges are typed by a TypeSchema.

    Nodes and edges are kept in input order.
    """

    def __init__(self, schema: TypeSchema, nodes: Mapping[str, Node], edges: Mapping[int, Edge]):
        self._schema = schema
        self._nodes = MappingProxyType(dict(nodes))
        self._edges = MappingProxyType(dict(edges))
        self._topology: Optional[GraphTopology] = None

    @property
    def schema(self) -> TypeSchema:
        return self._schema

    @property
    def nodes(self) -> Mapping[str, Node]:
        return self._nodes

    @property
    def edges(self) -> Mapping[int, Edge]:
        return self._edges

    @property
    def node_count(self) -> int:
        return len(self._nodes)

    @property
    def edge_count(self) -> int:
        return len(self._edges)

    def node(self, node_id: str) -> Node:
        try:
            return self._nodes[node_id]
        except KeyError:
            raise UnknownNodeReferenceError(f"unknown node '{node_id}'", node=node_id) from None

    def edge(self, edge_id: int) -> Edge:
        try:
            return self._edges[edge_id]
        except KeyError:
            raise UnknownEdgeReferenceError(f"unknown edge '{edge_id}'", edge=edge_id) from None

    def iter_nodes(self) -> Iterator[Node]:
        return iter(self._nodes.values())

    def iter_edges(self) -> Iterator[Edge]:
        return iter(self._edges.values())

    def topology(self) -> GraphTopology:
        """Structural view of this graph (built on first use)."""
        if self._topology is None:
            from .topology import GraphTopology
            self._topology = GraphTopology.from_graph(self)
        return self._topology

    def __repr__(self) -> str:
        return f"TypedGraph(nodes={self.node_count}, edges={self.edge_count})"

    @classmethod
    def assemble(
        cls,
        schema: TypeSchema,
        nodes: Iterable[NodeLike],
        edges: Iterable[EdgeLike],
        *,
        rng: Optional[np.random.Generator] = None
    ) -> TypedGraph:
        """
        Create a graph with the given types, nodes and edges.

        Nodes refer to their types by name. Edges refer to their types,
        sources and targets by name. If any referenced entity is undefined,
        or an edge's endpoints don't respect its type's signatures, an
        error is raised and no graph is returned.
        """
        node_map = _assemble_nodes(schema, normalize(nodes, NodeSpec), rng)
        edge_map = _assemble_edges(schema, node_map, normalize(edges, EdgeSpec))
        graph = cls(schema, node_map, edge_map)
        logger.debug("assembled graph with %d nodes, %d edges", graph.node_count, graph.edge_count)
        return graph


def _assemble_nodes(
    schema: TypeSchema,
    specs: Tuple[NodeSpec, ...],
    rng: Optional[np.random.Generator]
) -> Dict[str, Node]:
    nodes: Dict[str, Node] = {}

    for spec in specs:
        if spec.id in nodes:
            raise DuplicateDefinitionError(f"duplicate node '{spec.id}'", node=spec.id)

        node_type = schema.node_types.get(spec.type)
        if node_type is None:
            raise UnknownNodeTypeError(
                f"unknown node type '{spec.type}' for node '{spec.id}'",
                node=spec.id, type=spec.type
            )

        if spec.has_position:
            x, y = spec.x, spec.y
        else:
            if rng is None:
                rng = np.random.default_rng()
            x, y = rng.uniform(0, RANDOM_EXTENT, size=2)

        nodes[spec.id] = Node(spec.id, node_type, x, y)

    return nodes


def _assemble_edges(
    schema: TypeSchema,
    nodes: Mapping[str, Node],
    specs: Tuple[EdgeSpec, ...]
) -> Dict[int, Edge]:
    edges: Dict[int, Edge] = {}

    for spec in specs:
        if spec.id in edges:
            raise DuplicateDefinitionError(f"duplicate edge '{spec.id}'", edge=spec.id)

        edge_type = schema.edge_types.get(spec.type)
        if edge_type is None:
            raise UnknownEdgeTypeError(
                f"unknown edge type '{spec.type}' for edge '{spec.id}'",
                edge=spec.id, type=spec.type
            )

        source = nodes.get(spec.source)
        if source is None:
            raise UnknownNodeReferenceError(
                f"unknown edge source '{spec.source}' for edge '{spec.id}'",
                edge=spec.id, node=spec.source
            )

        target = nodes.get(spec.target)
        if target is None:
            raise UnknownNodeReferenceError(
                f"unknown edge target '{spec.target}' for edge '{spec.id}'",
                edge=spec.id, node=spec.target
            )

        if not edge_type.allows_signature(source.type, target.type):
            raise SignatureMismatchError(
                f"invalid types ({source.type.name}, {target.type.name}) for source "
                f"and target on edge '{spec.id}' of type '{edge_type.name}'",
                edge=spec.id, source_type=source.type.name, target_type=target.type.name
            )

        edges[spec.id] = Edge(spec.id, edge_type, source, target)

    return edges
