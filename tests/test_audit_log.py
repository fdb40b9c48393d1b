"""
Audit Log Tests
===============
"""

import dataclasses

import pytest

from graphcore import AuditEventType, LayoutAuditLog


class TestLayoutAuditLog:

    def test_sequence_is_monotonic_across_sources(self):
        log = LayoutAuditLog()
        a = log.record(AuditEventType.ENGINE_CREATED, "domain")
        b = log.record(AuditEventType.ENGINE_CREATED, "codomain")
        c = log.record(AuditEventType.RESTARTED, "domain", tick=4)

        assert [e.sequence for e in (a, b, c)] == [1, 2, 3]
        assert c.tick == 4
        assert log.entry_count == 3

    def test_filters(self):
        log = LayoutAuditLog()
        log.record(AuditEventType.ENGINE_CREATED, "domain")
        log.record(AuditEventType.RESTARTED, "domain")
        log.record(AuditEventType.RESTARTED, "codomain")

        assert len(log.get_entries(source="domain")) == 2
        assert len(log.get_entries(event_type=AuditEventType.RESTARTED)) == 2
        assert len(log.get_entries(source="codomain", event_type=AuditEventType.ENGINE_CREATED)) == 0
        assert log.count_by_type() == {AuditEventType.ENGINE_CREATED: 1, AuditEventType.RESTARTED: 2}

    def test_details_are_strings(self):
        log = LayoutAuditLog()
        entry = log.record(AuditEventType.PARAMETER_CHANGED, "x", parameter="edge_length", value=120.0)

        assert entry.detail("parameter") == "edge_length"
        assert entry.detail("value") == "120.0"
        assert entry.detail("missing") is None

    def test_entries_are_frozen(self):
        entry = LayoutAuditLog().record(AuditEventType.STOPPED, "x")
        with pytest.raises(dataclasses.FrozenInstanceError):
            entry.tick = 3

    def test_returned_list_is_a_copy(self):
        log = LayoutAuditLog()
        log.record(AuditEventType.STOPPED, "x")
        log.get_entries().clear()
        assert log.entry_count == 1
