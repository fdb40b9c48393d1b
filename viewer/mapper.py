"""
Graph to View Mapper

Turns the current positions of a TypedGraph into a NetworkGraphView frame.

A renderer draws frames; it never holds Node or Edge objects, so pin and
drag state reach it only as the `is_pinned` and `is_dragging` flags.

Colors and category prefixes come from the morphism class of an element:
- `category_colors` off, or no class: no color
- `category_labels` on and class k: nodes read "k:", edges "k: <edge type>"
- Otherwise edges are labelled by their type name alone

Frames list nodes and edges in the order the graph was assembled.
"""

from __future__ import annotations
from typing import Optional, Sequence

from forcelayout.parameters import LayoutParameters
from graphcore.graph import Edge, Node, TypedGraph
from graphcore.morphism import GraphMap
from .geometry import Arrowhead, edge_path, label_position
from .visualization import GraphEdgeView, GraphNodeView, NetworkGraphView

# Category10 palette
CATEGORY10 = (
    "#1f77b4", "#ff7f0e", "#2ca02c", "#d62728", "#9467bd",
    "#8c564b", "#e377c2", "#7f7f7f", "#bcbd22", "#17becf",
)


class GraphViewMapper:
    """
    Maps graphs to view DTOs.

    `categories` are the equivalence classes of the graph's side of a
    morphism; elements without a class get no color and no category label.
    """

    def __init__(self, parameters: Optional[LayoutParameters] = None, palette: Sequence[str] = CATEGORY10):
        self.parameters = parameters or LayoutParameters()
        self.palette = tuple(palette)

    def color(self, category: Optional[int]) -> Optional[str]:
        if category is None or not self.parameters.category_colors or not self.palette:
            return None
        return self.palette[category % len(self.palette)]

    # =========================================================================
    # LABELS
    # =========================================================================

    def node_label(self, category: Optional[int]) -> str:
        if self.parameters.category_labels and category is not None:
            return f"{category}:"
        return ""

    def edge_label(self, edge: Edge, category: Optional[int]) -> str:
        if self.parameters.category_labels and category is not None:
            return f"{category}: {edge.type.name}"
        return edge.type.name

    # =========================================================================
    # GRAPH MAPPING
    # =========================================================================

    def map_node(self, node: Node, category: Optional[int]) -> GraphNodeView:
        return GraphNodeView(
            node_id=node.id,
            x=node.x,
            y=node.y,
            radius=node.radius,
            icon=node.type.icon,
            node_type=node.type.name,
            color=self.color(category),
            label=self.node_label(category),
            is_pinned=node.is_pinned,
            is_dragging=node.is_dragging
        )

    def map_edge(self, edge: Edge, category: Optional[int], arrowhead: Arrowhead) -> GraphEdgeView:
        anchor = label_position(edge)
        return GraphEdgeView(
            edge_id=edge.id,
            source_id=edge.source.id,
            target_id=edge.target.id,
            edge_type=edge.type.name,
            path=edge_path(edge, arrowhead).to_svg(),
            label=self.edge_label(edge, category),
            label_x=anchor.x,
            label_y=anchor.y,
            color=self.color(category)
        )

    def map_graph(
        self,
        graph: TypedGraph,
        categories: Optional[GraphMap[int, int]] = None,
        arrowhead: Optional[Arrowhead] = None,
        view_id: str = "graph"
    ) -> NetworkGraphView:
        """Map the current state of a graph to a frame."""
        arrowhead = arrowhead or Arrowhead()
        node_classes = categories.nodes if categories is not None else {}
        edge_classes = categories.edges if categories is not None else {}

        return NetworkGraphView(
            view_id=view_id,
            nodes=tuple(
                self.map_node(node, node_classes.get(node.id)) for node in graph.iter_nodes()
            ),
            edges=tuple(
                self.map_edge(edge, edge_classes.get(edge.id), arrowhead) for edge in graph.iter_edges()
            )
        )
