"""
Graph Topology
==============

Structural view of a TypedGraph backed by NetworkX.

Answers the degree questions of the spring force. Morphisms are given,
never searched for, so no matching lives here.
"""

from __future__ import annotations
from typing import TYPE_CHECKING, Dict

import networkx as nx

if TYPE_CHECKING:
    from .graph import TypedGraph


class GraphTopology:
    """
    Read-only structural view of one TypedGraph.

    Wraps a directed multigraph: parallel edges and self loops of the typed
    graph are kept, so degrees count every edge endpoint.
    """

    def __init__(self, graph: nx.MultiDiGraph):
        self._graph = graph

    @classmethod
    def from_graph(cls, graph: TypedGraph) -> GraphTopology:
        g = nx.MultiDiGraph()

        for node in graph.iter_nodes():
            g.add_node(node.id, node_type=node.type.name)

        for edge in graph.iter_edges():
            g.add_edge(edge.source.id, edge.target.id, key=edge.id, edge_type=edge.type.name)

        return cls(g)

    @property
    def graph(self) -> nx.MultiDiGraph:
        return self._graph

    def degree(self, node_id: str) -> int:
        """Number of edge endpoints at the node (self loops count twice)."""
        return int(self._graph.degree(node_id))

    def degrees(self) -> Dict[str, int]:
        return {node_id: int(d) for node_id, d in self._graph.degree()}
