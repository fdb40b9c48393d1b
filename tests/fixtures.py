"""
Test Fixtures
=============

Explicit factories for schemas, graphs, stores and engines.
No randomness without a seed.
"""

from typing import Iterable, Optional, Tuple

import numpy as np

from forcelayout import ForceLayoutEngine, LayoutParameters, ParameterStore
from graphcore import LayoutAuditLog, TypedGraph, TypeSchema

WIDTH = 500.0
HEIGHT = 500.0
SEED = 7

# Forces other than the one under test switched off.
QUIET = dict(
    gravity_strength=0.0,
    node_repulsion_strength=0.0,
    auto_center=False,
)


def basic_schema() -> TypeSchema:
    """Types `a`, `b` (radius 10) and `big` (radius 20); `link` between any of them."""
    names = ("a", "b", "big")
    return TypeSchema.assemble(
        [
            {"name": "a", "radius": 10},
            {"name": "b", "radius": 10},
            {"name": "big", "radius": 20},
        ],
        [
            {"name": "link", "signatures": [[s, t] for s in names for t in names]},
            {"name": "a_to_b", "signatures": [["a", "b"]]},
        ]
    )


def make_graph(
    nodes: Iterable[Tuple[str, str, float, float]],
    edges: Iterable[Tuple[int, str, str, str]] = (),
    schema: Optional[TypeSchema] = None
) -> TypedGraph:
    """Nodes as (id, type, x, y); edges as (id, type, source, target)."""
    return TypedGraph.assemble(
        schema or basic_schema(),
        [{"id": i, "type": t, "x": x, "y": y} for i, t, x, y in nodes],
        [{"id": i, "type": t, "source": s, "target": d} for i, t, s, d in edges]
    )


def pair_graph(distance: float = 100.0) -> TypedGraph:
    """Two `a` nodes on a horizontal line joined by one `link`."""
    return make_graph(
        [("n1", "a", 200.0, 250.0), ("n2", "a", 200.0 + distance, 250.0)],
        [(1, "link", "n1", "n2")]
    )


def make_store(**overrides) -> ParameterStore:
    return ParameterStore(LayoutParameters(**overrides))


def make_engine(
    graph: TypedGraph,
    store: Optional[ParameterStore] = None,
    audit_log: Optional[LayoutAuditLog] = None,
    **kwargs
) -> ForceLayoutEngine:
    return ForceLayoutEngine(
        store or make_store(), graph, WIDTH, HEIGHT,
        rng=np.random.default_rng(SEED), audit_log=audit_log, **kwargs
    )


def run_to_rest(engine: ForceLayoutEngine, max_steps: int = 2000) -> int:
    steps = 0
    while engine.step() and steps < max_steps:
        steps += 1
    return steps
