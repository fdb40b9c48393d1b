"""
Edge Geometry

Responsibility:
Where a renderer draws an edge's line, arrowhead and label, given the
current node positions. Pure functions of the graph state.
"""

from __future__ import annotations
from dataclasses import dataclass

from graphcore.geometry import EPSILON, Point, Vector
from graphcore.graph import Edge

# Fraction of the arrowhead that overlaps the line end.
MARKER_REFX_MULT = 0.6

# Node outline width.
BORDER_WIDTH = 3.0


@dataclass(frozen=True)
class Arrowhead:
    """Size of the arrowhead marker drawn at each edge target."""
    width: float = 8.0
    height: float = 8.0

    @property
    def edge_padding(self) -> float:
        return self.width * (1 - MARKER_REFX_MULT)


@dataclass(frozen=True)
class EdgePath:
    """Straight segment drawn for an edge."""
    start: Point
    end: Point

    def to_svg(self) -> str:
        return f"M{self.start.x},{self.start.y} L{self.end.x},{self.end.y}"


def edge_center(edge: Edge) -> Point:
    return edge.center


def edge_path(edge: Edge, arrowhead: Arrowhead) -> EdgePath:
    """
    Segment between the two node outlines.

    Shortened at the source by the source radius plus the border, and at
    the target by the target radius, the arrowhead overlap and the border.
    A zero-length edge collapses to its source point.
    """
    source, target = edge.source.point, edge.target.point
    delta = target.distance_from(source)
    if delta.norm < EPSILON:
        return EdgePath(source, source)

    direction = delta.unit()
    source_padding = edge.source.radius + BORDER_WIDTH
    target_padding = edge.target.radius + MARKER_REFX_MULT * arrowhead.edge_padding + BORDER_WIDTH

    return EdgePath(
        start=source.add(direction.scale_by(source_padding)),
        end=target.sub(direction.scale_by(target_padding))
    )


def label_position(edge: Edge) -> Point:
    """
    Anchor of the edge label.

    Placed at `label_offset` along the edge, then shifted by half the
    measured label size so that the label sits beside the line rather
    than on it.
    """
    source = edge.source.point
    delta = edge.target.point.distance_from(source)
    if delta.norm < EPSILON:
        return source

    displacement = delta.scale_by(edge.label_offset)
    half_width = edge.label_size.width / 2
    half_height = edge.label_size.height / 2

    dx, dy = displacement.dx, displacement.dy
    if dx * dy >= 0:
        dx += half_width
        dy -= half_height + BORDER_WIDTH
    else:
        dx += half_width
        dy += half_height
    dy += half_height

    return source.add(Vector(dx, dy))
