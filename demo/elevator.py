"""
Elevator Example
================

Typed graphs of a small elevator controller: rewrite rules as
left-hand/right-hand side graphs, and the morphisms between them.

Every function builds fresh objects; nothing here is module state.
"""

from __future__ import annotations
from typing import Dict, Optional

from graphcore.graph import TypedGraph
from graphcore.morphism import GraphMorphism
from graphcore.schema import TypeSchema

NODE_RADIUS = 20


def img(width: int, height: int, link: str) -> str:
    """SVG image element centered on the node."""
    return (
        f'<image xlink:href="{link}" width="{width}" height="{height}" '
        f'x="-{width / 2:g}" y="-{height / 2:g}"/>'
    )


def elevator_schema() -> TypeSchema:
    return TypeSchema.assemble(
        [
            {"name": "up", "radius": NODE_RADIUS,
             "icon": img(40, 40, "https://upload.wikimedia.org/wikipedia/commons/d/d5/Human-go-up.svg")},
            {"name": "down", "radius": NODE_RADIUS,
             "icon": img(40, 40, "https://upload.wikimedia.org/wikipedia/commons/0/08/Human-go-down.svg")},
            {"name": "request", "radius": NODE_RADIUS,
             "icon": img(40, 40, "https://upload.wikimedia.org/wikipedia/commons/2/29/Fxemoji_u2757.svg")},
            {"name": "elevator", "radius": NODE_RADIUS,
             "icon": img(40, 40, "http://vignette3.wikia.nocookie.net/elevation/images/6/65/AIGA_Elevator.svg")},
            {"name": "floor", "radius": NODE_RADIUS,
             "icon": '<text transform="translate(0,12)" text-anchor="middle" style="font-size: 2em">F</text>'},
        ],
        [
            {"name": "on", "signatures": [["elevator", "floor"]]},
            {"name": "call", "signatures": [["request", "request"]]},
            {"name": "stop", "signatures": [["request", "request"]]},
            {"name": "holds", "signatures": [["floor", "request"]]},
            {"name": "next_up", "signatures": [["floor", "floor"]]},
            {"name": "higher_than", "signatures": [["floor", "floor"]]},
        ]
    )


# =============================================================================
# GRAPHS
# =============================================================================

def elevator_graphs(schema: Optional[TypeSchema] = None) -> Dict[str, TypedGraph]:
    schema = schema or elevator_schema()
    graphs: Dict[str, TypedGraph] = {}

    graphs["callRequest_LHS"] = TypedGraph.assemble(
        schema,
        [{"id": "floor", "type": "floor", "x": 0, "y": 0}],
        []
    )
    graphs["callRequest_RHS"] = TypedGraph.assemble(
        schema,
        [
            {"id": "floor", "type": "floor", "x": 0, "y": 0},
            {"id": "r", "type": "request", "x": 50, "y": 0},
        ],
        [{"id": 0, "type": "holds", "source": "floor", "target": "r"}]
    )

    move_down_nodes = [
        {"id": "el", "type": "elevator", "x": 350, "y": 74},
        {"id": "f2", "type": "floor", "x": 273, "y": 69},
        {"id": "d", "type": "down", "x": 81, "y": 156},
        {"id": "f1", "type": "floor", "x": 310, "y": 163},
        {"id": "f0", "type": "floor", "x": 90, "y": 249},
        {"id": "r", "type": "request", "x": 278, "y": 256},
    ]
    graphs["moveDown_LHS"] = TypedGraph.assemble(
        schema,
        move_down_nodes,
        [
            {"id": 105, "source": "el", "target": "f2", "type": "on"},
            {"id": 106, "source": "f1", "target": "f2", "type": "next_up"},
            {"id": 107, "source": "f2", "target": "f0", "type": "higher_than"},
            {"id": 108, "source": "f0", "target": "r", "type": "holds"},
        ]
    )
    graphs["moveDown_RHS"] = TypedGraph.assemble(
        schema,
        move_down_nodes,
        [
            {"id": 105, "source": "el", "target": "f1", "type": "on"},
            {"id": 106, "source": "f1", "target": "f2", "type": "next_up"},
            {"id": 107, "source": "f2", "target": "f0", "type": "higher_than"},
            {"id": 108, "source": "f0", "target": "r", "type": "holds"},
        ]
    )

    direction_edges = [
        {"id": 105, "source": "el", "target": "f2", "type": "on"},
        {"id": 107, "source": "f2", "target": "f1", "type": "higher_than"},
        {"id": 108, "source": "f1", "target": "r", "type": "holds"},
    ]
    request = {"id": "r", "type": "request", "x": 278, "y": 256}
    graphs["setDirectionDown_LHS"] = TypedGraph.assemble(
        schema,
        [
            {"id": "el", "type": "elevator", "x": 350, "y": 74},
            {"id": "f2", "type": "floor", "x": 273, "y": 69},
            {"id": "f1", "type": "floor", "x": 310, "y": 163},
            {"id": "u", "type": "up", "x": 81, "y": 156},
            request,
        ],
        direction_edges
    )
    graphs["setDirectionDown_RHS"] = TypedGraph.assemble(
        schema,
        [
            {"id": "el", "type": "elevator", "x": 350, "y": 74},
            {"id": "f2", "type": "floor", "x": 273, "y": 69},
            {"id": "f1", "type": "floor", "x": 310, "y": 163},
            {"id": "d", "type": "down", "x": 81, "y": 156},
            request,
        ],
        direction_edges
    )
    graphs["setDirectionDown_NAC_noHigherRequest"] = TypedGraph.assemble(
        schema,
        [
            {"id": "el", "type": "elevator", "x": 350, "y": 74},
            {"id": "f2", "type": "floor", "x": 273, "y": 69},
            {"id": "f1", "type": "floor", "x": 310, "y": 163},
            {"id": "u", "type": "up", "x": 81, "y": 156},
            request,
            {"id": "f3", "type": "floor", "x": 273, "y": 0},
            {"id": "r2", "type": "request", "x": 278, "y": 0},
        ],
        direction_edges + [
            {"id": 109, "source": "f3", "target": "f2", "type": "higher_than"},
            {"id": 110, "source": "f3", "target": "r2", "type": "holds"},
        ]
    )

    return graphs


# =============================================================================
# MORPHISMS
# =============================================================================

def elevator_morphisms(graphs: Optional[Dict[str, TypedGraph]] = None) -> Dict[str, GraphMorphism]:
    graphs = graphs or elevator_graphs()

    return {
        "callRequest": GraphMorphism.assemble(
            graphs["callRequest_LHS"], graphs["callRequest_RHS"],
            [("floor", "floor")],
            []
        ),
        "moveDown": GraphMorphism.assemble(
            graphs["moveDown_LHS"], graphs["moveDown_RHS"],
            [("el", "el"), ("f0", "f0"), ("f1", "f1"), ("f2", "f2"), ("d", "d"), ("r", "r")],
            [(106, 106), (107, 107), (108, 108)]
        ),
        "setDirectionDown": GraphMorphism.assemble(
            graphs["setDirectionDown_LHS"], graphs["setDirectionDown_RHS"],
            [("el", "el"), ("f1", "f1"), ("f2", "f2"), ("r", "r")],
            [(105, 105), (107, 107), (108, 108)]
        ),
        "noHigherRequest": GraphMorphism.assemble(
            graphs["setDirectionDown_LHS"], graphs["setDirectionDown_NAC_noHigherRequest"],
            [("el", "el"), ("f1", "f1"), ("f2", "f2"), ("u", "u"), ("r", "r")],
            [(105, 105), (107, 107), (108, 108)]
        ),
    }


def elevator_morphism(name: str) -> GraphMorphism:
    """Build one morphism (with fresh graphs) by name; KeyError when unknown."""
    return elevator_morphisms()[name]


MORPHISM_NAMES = ("callRequest", "moveDown", "setDirectionDown", "noHigherRequest")
