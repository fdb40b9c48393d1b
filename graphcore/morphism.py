"""
Graph Morphism
==============

Pre-computed correspondences between a domain graph and a codomain graph.

INVARIANTS:
- Every mapped id exists in its graph (checked at assembly)
- A domain or codomain element appears in at most one pair
- A mapped pair shares one equivalence class; classes are exactly
  0 .. num_mapped_elements-1, nodes first, in input order
- Unmapped elements have no class

This module REPRESENTS morphisms. It never searches for one.
"""

from __future__ import annotations
from dataclasses import dataclass
from enum import Enum
from types import MappingProxyType
from typing import Dict, Generic, Iterable, List, Mapping, Optional, Tuple, TypeVar
import logging

from .contracts.base import (
    DuplicateMappingError, UnknownNodeReferenceError, UnknownEdgeReferenceError
)
from .graph import Edge, Node, TypedGraph

logger = logging.getLogger(__name__)

N = TypeVar("N")
E = TypeVar("E")


class Side(Enum):
    """Which graph of a morphism an element id belongs to."""
    DOMAIN = "domain"
    CODOMAIN = "codomain"


@dataclass(frozen=True)
class GraphMap(Generic[N, E]):
    """Read-only maps keyed by node id and by edge id."""
    nodes: Mapping[str, N]
    edges: Mapping[int, E]

    @staticmethod
    def freeze(nodes: Dict[str, N], edges: Dict[int, E]) -> GraphMap[N, E]:
        return GraphMap(nodes=MappingProxyType(nodes), edges=MappingProxyType(edges))


class GraphMorphism:
    """
    A mapping between two typed graphs plus its equivalence classes.

    `mapping_from_domain` maps domain ids to codomain elements and
    `mapping_from_codomain` the reverse; `classes_from_domain` /
    `classes_from_codomain` map ids to class indices.
    """

    def __init__(
        self,
        domain: TypedGraph,
        codomain: TypedGraph,
        mapping_from_domain: GraphMap[Node, Edge],
        mapping_from_codomain: GraphMap[Node, Edge],
        classes_from_domain: GraphMap[int, int],
        classes_from_codomain: GraphMap[int, int],
        num_mapped_elements: int
    ):
        self.domain = domain
        self.codomain = codomain
        self.mapping_from_domain = mapping_from_domain
        self.mapping_from_codomain = mapping_from_codomain
        self.classes_from_domain = classes_from_domain
        self.classes_from_codomain = classes_from_codomain
        self.num_mapped_elements = num_mapped_elements

    # =========================================================================
    # MAPS
    # =========================================================================

    @property
    def node_map(self) -> Mapping[str, Node]:
        return self.mapping_from_domain.nodes

    @property
    def edge_map(self) -> Mapping[int, Edge]:
        return self.mapping_from_domain.edges

    @property
    def reverse_node_map(self) -> Mapping[str, Node]:
        return self.mapping_from_codomain.nodes

    @property
    def reverse_edge_map(self) -> Mapping[int, Edge]:
        return self.mapping_from_codomain.edges

    def node_projection(self) -> Dict[str, str]:
        """Domain node id -> codomain node id."""
        return {node_id: image.id for node_id, image in self.node_map.items()}

    def reverse_node_projection(self) -> Dict[str, str]:
        """Codomain node id -> domain node id."""
        return {node_id: image.id for node_id, image in self.reverse_node_map.items()}

    # =========================================================================
    # EQUIVALENCE CLASSES
    # =========================================================================

    def classes(self, side: Side) -> GraphMap[int, int]:
        if side is Side.DOMAIN:
            return self.classes_from_domain
        return self.classes_from_codomain

    def node_class(self, node_id: str, side: Side = Side.DOMAIN) -> Optional[int]:
        """Class index of a node, or None when it is unmapped."""
        return self.classes(side).nodes.get(node_id)

    def edge_class(self, edge_id: int, side: Side = Side.DOMAIN) -> Optional[int]:
        return self.classes(side).edges.get(edge_id)

    # =========================================================================
    # STRUCTURE
    # =========================================================================

    def structural_violations(self) -> List[int]:
        """
        Domain edges whose image does not connect the images of their ends.

        An edge counts as a violation when both endpoints are mapped and the
        edge is mapped, but the image edge's source/target differ from the
        images of the endpoints. Returned in domain order.
        """
        violations = []

        for edge_id, image in self.edge_map.items():
            edge = self.domain.edges[edge_id]
            source_image = self.node_map.get(edge.source.id)
            target_image = self.node_map.get(edge.target.id)
            if source_image is None or target_image is None:
                continue
            if image.source is not source_image or image.target is not target_image:
                violations.append(edge_id)

        return violations

    def __repr__(self) -> str:
        return (
            f"GraphMorphism(nodes={len(self.node_map)}, edges={len(self.edge_map)}, "
            f"classes={self.num_mapped_elements})"
        )

    @classmethod
    def assemble(
        cls,
        domain: TypedGraph,
        codomain: TypedGraph,
        node_mapping: Iterable[Tuple[str, str]],
        edge_mapping: Iterable[Tuple[int, int]]
    ) -> GraphMorphism:
        """
        Create a morphism from (domain id, codomain id) pairs.

        Node pairs are processed before edge pairs, each in input order; every
        pair takes the next class index. Referencing a missing element, or
        mapping an element twice, raises and returns no morphism.
        """
        nodes_from_domain: Dict[str, Node] = {}
        nodes_from_codomain: Dict[str, Node] = {}
        edges_from_domain: Dict[int, Edge] = {}
        edges_from_codomain: Dict[int, Edge] = {}
        node_classes_domain: Dict[str, int] = {}
        node_classes_codomain: Dict[str, int] = {}
        edge_classes_domain: Dict[int, int] = {}
        edge_classes_codomain: Dict[int, int] = {}

        num_classes = 0

        for n1, n2 in node_mapping:
            source = _lookup(domain.nodes, n1, UnknownNodeReferenceError, "domain node")
            image = _lookup(codomain.nodes, n2, UnknownNodeReferenceError, "codomain node")
            _check_unmapped(nodes_from_domain, n1, "domain node")
            _check_unmapped(nodes_from_codomain, n2, "codomain node")

            nodes_from_domain[n1] = image
            nodes_from_codomain[n2] = source
            node_classes_domain[n1] = num_classes
            node_classes_codomain[n2] = num_classes
            num_classes += 1

        for e1, e2 in edge_mapping:
            source = _lookup(domain.edges, e1, UnknownEdgeReferenceError, "domain edge")
            image = _lookup(codomain.edges, e2, UnknownEdgeReferenceError, "codomain edge")
            _check_unmapped(edges_from_domain, e1, "domain edge")
            _check_unmapped(edges_from_codomain, e2, "codomain edge")

            edges_from_domain[e1] = image
            edges_from_codomain[e2] = source
            edge_classes_domain[e1] = num_classes
            edge_classes_codomain[e2] = num_classes
            num_classes += 1

        morphism = cls(
            domain=domain,
            codomain=codomain,
            mapping_from_domain=GraphMap.freeze(nodes_from_domain, edges_from_domain),
            mapping_from_codomain=GraphMap.freeze(nodes_from_codomain, edges_from_codomain),
            classes_from_domain=GraphMap.freeze(node_classes_domain, edge_classes_domain),
            classes_from_codomain=GraphMap.freeze(node_classes_codomain, edge_classes_codomain),
            num_mapped_elements=num_classes
        )
        logger.debug("assembled %r", morphism)
        return morphism


def _lookup(elements: Mapping, key, error_type, what: str):
    element = elements.get(key)
    if element is None:
        raise error_type(f"unknown {what} '{key}' in morphism", element=key)
    return element


def _check_unmapped(mapping: Mapping, key, what: str) -> None:
    if key in mapping:
        raise DuplicateMappingError(f"{what} '{key}' is mapped twice", element=key)
