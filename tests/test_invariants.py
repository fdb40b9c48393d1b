"""
Property Tests for Graph and Layout Invariants
"""

import math

import numpy as np
import pytest
from hypothesis import given, settings, strategies as st
from hypothesis.strategies import composite

from forcelayout import ForceLayoutEngine, LayoutParameters, ParameterStore
from graphcore import (
    GraphMorphism, NodeState, NodeStatus, SignatureMismatchError, Side, TypedGraph, TypeSchema
)

# =============================================================================
# STRATEGIES (Generators)
# =============================================================================

NODE_TYPES = ("red", "green", "blue")


def schema():
    return TypeSchema.assemble(
        [{"name": name, "radius": 5 + 5 * i} for i, name in enumerate(NODE_TYPES)],
        [
            {"name": "warm", "signatures": [["red", "green"], ["red", "red"]]},
            {"name": "cool", "signatures": [["blue", "green"], ["green", "blue"]]},
        ]
    )


@composite
def node_stubs(draw, min_size=1, max_size=8):
    """Nodes with unique ids, random types and coordinates."""
    n = draw(st.integers(min_value=min_size, max_value=max_size))
    coords = st.floats(min_value=0, max_value=500, allow_nan=False)
    return [
        {"id": f"n{i}", "type": draw(st.sampled_from(NODE_TYPES)), "x": draw(coords), "y": draw(coords)}
        for i in range(n)
    ]


@composite
def typed_graph_specs(draw):
    """Nodes plus edges that respect the signatures of `schema()`."""
    nodes = draw(node_stubs())
    allowed = {("red", "green"): "warm", ("red", "red"): "warm",
               ("blue", "green"): "cool", ("green", "blue"): "cool"}
    candidates = [
        (s["id"], t["id"], allowed[(s["type"], t["type"])])
        for s in nodes for t in nodes if (s["type"], t["type"]) in allowed
    ]
    chosen = draw(st.lists(st.sampled_from(candidates), max_size=10)) if candidates else []
    edges = [
        {"id": i, "type": edge_type, "source": source, "target": target}
        for i, (source, target, edge_type) in enumerate(chosen)
    ]
    return nodes, edges


@composite
def partial_injections(draw, keys):
    """A random injective partial map from `keys` onto a shuffle of themselves."""
    keys = list(keys)
    images = draw(st.permutations(keys))
    mask = draw(st.lists(st.booleans(), min_size=len(keys), max_size=len(keys)))
    return [(k, v) for k, v, keep in zip(keys, images, mask) if keep]


# =============================================================================
# GRAPH INVARIANTS
# =============================================================================

@given(typed_graph_specs())
def test_assembled_edges_respect_signatures(spec):
    nodes, edges = spec
    graph = TypedGraph.assemble(schema(), nodes, edges)

    for edge in graph.iter_edges():
        assert (edge.source.type, edge.target.type) in edge.type.signatures


@given(node_stubs(min_size=2))
def test_signature_violation_rejected(nodes):
    s = schema()
    nodes[0]["type"], nodes[1]["type"] = "blue", "red"
    before = TypedGraph.assemble(s, nodes, [])

    with pytest.raises(SignatureMismatchError):
        TypedGraph.assemble(s, nodes, [{"id": 0, "type": "warm", "source": "n0", "target": "n1"}])

    assert before.edge_count == 0


@given(st.data())
def test_morphism_classes_are_a_bijection(data):
    nodes, edges = data.draw(typed_graph_specs())
    s = schema()
    domain = TypedGraph.assemble(s, nodes, edges)
    codomain = TypedGraph.assemble(s, nodes, edges)

    node_pairs = data.draw(partial_injections([n["id"] for n in nodes]))
    edge_pairs = data.draw(partial_injections([e["id"] for e in edges]))
    m = GraphMorphism.assemble(domain, codomain, node_pairs, edge_pairs)

    assert m.num_mapped_elements == len(m.node_map) + len(m.edge_map)
    for d, image in m.node_map.items():
        assert m.node_class(d) == m.node_class(image.id, Side.CODOMAIN)
    for d, image in m.edge_map.items():
        assert m.edge_class(d) == m.edge_class(image.id, Side.CODOMAIN)

    classes = list(m.classes_from_domain.nodes.values()) + list(m.classes_from_domain.edges.values())
    assert sorted(classes) == list(range(m.num_mapped_elements))


# =============================================================================
# NODE STATE INVARIANTS
# =============================================================================

TRANSITIONS = {
    "begin_drag": NodeStatus.begin_drag,
    "end_drag": NodeStatus.end_drag,
    "toggle_pin": NodeStatus.toggle_pin,
}


@given(st.lists(st.sampled_from(sorted(TRANSITIONS)), max_size=30))
def test_node_status_transitions(ops):
    status = NodeStatus()
    for op in ops:
        status = TRANSITIONS[op](status)
        assert status.state.is_fixed == (status.state is not NodeState.FREE)
        assert status.resume is not NodeState.DRAGGING

    released = status.end_drag()
    assert not released.is_dragging
    assert released.is_pinned == status.is_pinned


# =============================================================================
# LAYOUT INVARIANTS
# =============================================================================

@settings(max_examples=25, deadline=None)
@given(typed_graph_specs(), st.integers(min_value=0, max_value=2 ** 16))
def test_layout_stays_finite_and_respects_pins(spec, seed):
    nodes, edges = spec
    graph = TypedGraph.assemble(schema(), nodes, edges)
    first = next(graph.iter_nodes())
    first.pin()
    pinned_at = (first.x, first.y)

    engine = ForceLayoutEngine(
        ParameterStore(LayoutParameters()), graph, 500, 500, rng=np.random.default_rng(seed)
    )
    for _ in range(30):
        engine.step()

    assert (first.x, first.y) == pinned_at
    for node in graph.iter_nodes():
        assert math.isfinite(node.x) and math.isfinite(node.y)
