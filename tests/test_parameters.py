"""
Parameter Store Tests
=====================

Typed snapshots, wire keys and change subscriptions.
"""

import pytest

from forcelayout import LayoutParameters, ParameterStore, WIRE_KEYS, resolve_key
from graphcore import InvalidDefinitionError


class TestLayoutParameters:

    def test_defaults(self):
        p = LayoutParameters()
        assert p.gravity_strength == 1e-2
        assert p.node_repulsion_strength == -120.0
        assert p.edge_length == 100.0
        assert p.edge_strength == 0.2
        assert p.mapping_consistency == 0.3
        assert p.layouter_on is True
        assert p.auto_center is True
        assert p.category_colors is True
        assert p.category_labels is False

    def test_from_mapping_accepts_both_key_styles(self):
        p = LayoutParameters.from_mapping({"edgeLength": 80, "gravity_strength": "0.5", "layouterOn": 0})
        assert p.edge_length == 80.0
        assert p.gravity_strength == 0.5
        assert p.layouter_on is False

    @pytest.mark.parametrize("value,expected", [
        ("false", False), ("False", False), ("off", False), ("true", True), (1, True), (0.0, False),
    ])
    def test_boolean_words(self, value, expected):
        assert LayoutParameters.from_mapping({"layouterOn": value}).layouter_on is expected

    @pytest.mark.parametrize("data", [
        {"layouterOn": "maybe"},
        {"autoCenter": 2},
        {"edgeLength": "long"},
        {"edgeStrength": None},
    ])
    def test_malformed_values_rejected(self, data):
        with pytest.raises(InvalidDefinitionError):
            LayoutParameters.from_mapping(data)

    def test_from_mapping_rejects_unknown_keys(self):
        with pytest.raises(KeyError):
            LayoutParameters.from_mapping({"edgeWidth": 3})

    def test_wire_round_trip(self):
        p = LayoutParameters(edge_strength=0.7, category_labels=True)
        assert LayoutParameters.from_mapping(p.to_wire()) == p
        assert set(p.to_wire()) == set(WIRE_KEYS)

    def test_resolve_key(self):
        assert resolve_key("mappingConsistency") == "mapping_consistency"
        assert resolve_key("auto_center") == "auto_center"
        with pytest.raises(KeyError):
            resolve_key("alpha")


class TestParameterStore:

    def test_get_and_set(self):
        store = ParameterStore()
        store.set("edgeLength", 150)
        assert store.get("edge_length") == 150.0
        assert store.parameters.edge_length == 150.0

    def test_snapshots_are_immutable(self):
        store = ParameterStore()
        before = store.parameters
        store.set("edgeStrength", 0.9)
        assert before.edge_strength == 0.2

    def test_subscribers_called_on_change_only(self):
        store = ParameterStore()
        seen = []
        store.on_change("gravityStrength", seen.append)

        store.set("gravityStrength", 0.5)
        store.set("gravity_strength", 0.5)
        store.set("edgeLength", 10)

        assert seen == [0.5]

    def test_subscription_order(self):
        store = ParameterStore()
        calls = []
        store.on_change("autoCenter", lambda v: calls.append(("first", v)))
        store.on_change("auto_center", lambda v: calls.append(("second", v)))

        store.set("autoCenter", False)
        assert calls == [("first", False), ("second", False)]

    def test_update_notifies_each_changed_field(self):
        store = ParameterStore()
        seen = {}
        store.on_change("edgeLength", lambda v: seen.setdefault("length", v))
        store.on_change("edgeStrength", lambda v: seen.setdefault("strength", v))

        store.update(edgeLength=50, edge_strength=0.2)
        assert seen == {"length": 50.0}

    def test_cancelled_subscription_not_called(self):
        store = ParameterStore()
        seen = []
        sub = store.on_change("layouterOn", seen.append)
        assert store.subscriber_count("layouterOn") == 1

        sub.cancel()
        sub.cancel()
        store.set("layouterOn", False)

        assert seen == []
        assert store.subscriber_count("layouter_on") == 0

    def test_wire_boolean_string_and_bad_value(self):
        store = ParameterStore()
        seen = []
        store.on_change("layouterOn", seen.append)

        store.set("layouterOn", "false")
        assert store.get("layouterOn") is False
        assert seen == [False]

        with pytest.raises(InvalidDefinitionError):
            store.update(edgeLength=50, layouterOn="sometimes")
        assert store.get("edge_length") == 100.0
        assert seen == [False]

    def test_unknown_keys_rejected(self):
        store = ParameterStore()
        with pytest.raises(KeyError):
            store.set("speed", 1)
        with pytest.raises(KeyError):
            store.on_change("speed", print)
        with pytest.raises(KeyError):
            store.get("speed")
