"""
Type Schema Tests
=================

Assembly of node and edge types from declarative stubs.
"""

import pytest

from graphcore import (
    DuplicateDefinitionError, EdgeTypeSpec, ErrorCode, InvalidDefinitionError,
    NodeTypeSpec, TypeSchema, UnknownEdgeTypeError, UnknownNodeTypeError
)


class TestTypeSchemaAssembly:

    def test_assembles_types_and_signatures(self):
        schema = TypeSchema.assemble(
            [{"name": "elevator", "radius": 20}, {"name": "floor", "radius": 20, "icon": "<text/>"}],
            [{"name": "on", "signatures": [["elevator", "floor"]]}]
        )

        elevator = schema.node_type("elevator")
        floor = schema.node_type("floor")
        on = schema.edge_type("on")

        assert floor.icon == "<text/>"
        assert elevator.icon is None
        assert on.signatures == ((elevator, floor),)
        assert on.allows_signature(elevator, floor)
        assert not on.allows_signature(floor, elevator)

    def test_accepts_spec_objects(self):
        schema = TypeSchema.assemble(
            [NodeTypeSpec("x", 5.0)],
            [EdgeTypeSpec("self", (("x", "x"),))]
        )
        x = schema.node_type("x")
        assert schema.edge_type("self").allows_signature(x, x)

    def test_signatures_match_by_identity(self):
        """Same-named types of two schemas are different types."""
        spec = ([{"name": "t", "radius": 1}], [{"name": "e", "signatures": [["t", "t"]]}])
        first = TypeSchema.assemble(*spec)
        second = TypeSchema.assemble(*spec)

        other = second.node_type("t")
        assert not first.edge_type("e").allows_signature(other, other)

    def test_unknown_signature_type_rejected(self):
        with pytest.raises(UnknownNodeTypeError) as exc:
            TypeSchema.assemble(
                [{"name": "floor", "radius": 20}],
                [{"name": "on", "signatures": [["elevator", "floor"]]}]
            )
        assert exc.value.error.code == ErrorCode.UNKNOWN_NODE_TYPE

    def test_duplicate_node_type_rejected(self):
        with pytest.raises(DuplicateDefinitionError):
            TypeSchema.assemble([{"name": "a", "radius": 1}, {"name": "a", "radius": 2}], [])

    def test_duplicate_edge_type_rejected(self):
        with pytest.raises(DuplicateDefinitionError) as exc:
            TypeSchema.assemble(
                [{"name": "a", "radius": 1}],
                [{"name": "e", "signatures": []}, {"name": "e", "signatures": []}]
            )
        assert exc.value.error.context_value("type") == "e"

    @pytest.mark.parametrize("radius", [0, -3])
    def test_non_positive_radius_rejected(self, radius):
        with pytest.raises(InvalidDefinitionError):
            TypeSchema.assemble([{"name": "a", "radius": radius}], [])

    @pytest.mark.parametrize("node_type", [
        {"radius": 5},
        {"name": "a", "radius": "wide"},
        {"name": "a", "radius": None},
    ])
    def test_malformed_node_type_rejected(self, node_type):
        with pytest.raises(InvalidDefinitionError):
            TypeSchema.assemble([node_type], [])

    @pytest.mark.parametrize("edge_type", [
        {"signatures": [["a", "a"]]},
        {"name": "e", "signatures": [["a"]]},
        {"name": "e", "signatures": [3]},
    ])
    def test_malformed_edge_type_rejected(self, edge_type):
        with pytest.raises(InvalidDefinitionError) as exc:
            TypeSchema.assemble([{"name": "a", "radius": 1}], [edge_type])
        assert exc.value.error.code == ErrorCode.INVALID_DEFINITION

    def test_lookup_of_unknown_names(self):
        schema = TypeSchema.assemble([{"name": "a", "radius": 1}], [])

        with pytest.raises(UnknownNodeTypeError):
            schema.node_type("zzz")
        with pytest.raises(UnknownEdgeTypeError):
            schema.edge_type("zzz")

    def test_type_maps_are_read_only(self):
        schema = TypeSchema.assemble([{"name": "a", "radius": 1}], [])
        with pytest.raises(TypeError):
            schema.node_types["b"] = schema.node_type("a")
