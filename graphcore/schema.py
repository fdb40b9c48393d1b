"""
Type Schema
===========

Registry of node types and edge types.

INVARIANTS:
- Node type and edge type names are unique
- Every edge type signature refers to node types of the same schema
- Signatures hold NodeType references; matching is by identity, not name
- Assembly is all-or-nothing: a failing call returns no schema
"""

from __future__ import annotations
from dataclasses import dataclass, field
from types import MappingProxyType
from typing import Dict, Iterable, Mapping, Optional, Tuple
import logging

from .contracts.base import (
    DuplicateDefinitionError, InvalidDefinitionError, UnknownNodeTypeError,
    UnknownEdgeTypeError
)
from .contracts.specs import (
    NodeTypeSpec, EdgeTypeSpec, NodeTypeLike, EdgeTypeLike, normalize
)

logger = logging.getLogger(__name__)


@dataclass(frozen=True, eq=False)
class NodeType:
    """Immutable node type. Compared by identity."""
    name: str
    radius: float
    icon: Optional[str] = None


@dataclass(frozen=True, eq=False)
class EdgeType:
    """Immutable edge type with its allowed (source, target) signatures."""
    name: str
    signatures: Tuple[Tuple[NodeType, NodeType], ...] = field(default_factory=tuple)

    def allows_signature(self, source_type: NodeType, target_type: NodeType) -> bool:
        for source, target in self.signatures:
            if source is source_type and target is target_type:
                return True
        return False


class TypeSchema:
    """
    Node and edge types of a family of graphs.

    Built once with `assemble` and shared, read-only, by every graph
    typed against it.
    """

    def __init__(self, node_types: Mapping[str, NodeType], edge_types: Mapping[str, EdgeType]):
        self._node_types = MappingProxyType(dict(node_types))
        self._edge_types = MappingProxyType(dict(edge_types))

    @property
    def node_types(self) -> Mapping[str, NodeType]:
        return self._node_types

    @property
    def edge_types(self) -> Mapping[str, EdgeType]:
        return self._edge_types

    def node_type(self, name: str) -> NodeType:
        try:
            return self._node_types[name]
        except KeyError:
            raise UnknownNodeTypeError(f"unknown node type '{name}'", type=name) from None

    def edge_type(self, name: str) -> EdgeType:
        try:
            return self._edge_types[name]
        except KeyError:
            raise UnknownEdgeTypeError(f"unknown edge type '{name}'", type=name) from None

    def __repr__(self) -> str:
        return f"TypeSchema(node_types={list(self._node_types)}, edge_types={list(self._edge_types)})"

    @classmethod
    def assemble(
        cls,
        node_types: Iterable[NodeTypeLike],
        edge_types: Iterable[EdgeTypeLike]
    ) -> TypeSchema:
        """
        Create a schema from node type specs and edge type stubs.

        Edge type stubs refer to node types by name. If any referenced node
        type is undefined, UnknownNodeTypeError is raised.
        """
        nodes = _assemble_node_types(normalize(node_types, NodeTypeSpec))
        edges = _assemble_edge_types(nodes, normalize(edge_types, EdgeTypeSpec))
        schema = cls(nodes, edges)
        logger.debug("assembled schema with %d node types, %d edge types", len(nodes), len(edges))
        return schema


def _assemble_node_types(specs: Tuple[NodeTypeSpec, ...]) -> Dict[str, NodeType]:
    types: Dict[str, NodeType] = {}

    for spec in specs:
        if spec.name in types:
            raise DuplicateDefinitionError(
                f"duplicate node type '{spec.name}'", type=spec.name
            )
        if not spec.radius > 0:
            raise InvalidDefinitionError(
                f"node type '{spec.name}' must have a positive radius, got {spec.radius}",
                type=spec.name
            )
        types[spec.name] = NodeType(name=spec.name, radius=spec.radius, icon=spec.icon)

    return types


def _assemble_edge_types(
    node_types: Mapping[str, NodeType],
    specs: Tuple[EdgeTypeSpec, ...]
) -> Dict[str, EdgeType]:
    types: Dict[str, EdgeType] = {}

    for spec in specs:
        if spec.name in types:
            raise DuplicateDefinitionError(
                f"duplicate edge type '{spec.name}'", type=spec.name
            )

        signatures = []
        for src, tgt in spec.signatures:
            if src not in node_types:
                raise UnknownNodeTypeError(
                    f"unknown source node type '{src}' for edge type '{spec.name}'",
                    edge_type=spec.name, type=src
                )
            if tgt not in node_types:
                raise UnknownNodeTypeError(
                    f"unknown target node type '{tgt}' for edge type '{spec.name}'",
                    edge_type=spec.name, type=tgt
                )
            signatures.append((node_types[src], node_types[tgt]))

        types[spec.name] = EdgeType(name=spec.name, signatures=tuple(signatures))

    return types
