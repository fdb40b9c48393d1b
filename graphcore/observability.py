"""
Observability & Audit Layer

RESPONSIBILITY: Recording layout lifecycle events
ALLOWED INPUTS: Events emitted by layout engines and the parameter store
OUTPUTS: Append-only, filterable audit entries

WHAT THIS LAYER MUST NOT DO:
============================
- Modify simulation behavior
- Filter or interpret events on the way in (only record them)
- Block the tick that emits an event

Free-form diagnostics go through the standard `logging` module (one logger
per module); this log keeps the structured events tests and tools query.
"""

from __future__ import annotations
from dataclasses import dataclass, field
from enum import Enum
from typing import Dict, List, Optional, Tuple


class AuditEventType(Enum):
    """Layout lifecycle events."""
    ENGINE_CREATED = "engine_created"
    RESTARTED = "restarted"
    STOPPED = "stopped"
    SETTLED = "settled"
    PARAMETER_CHANGED = "parameter_changed"
    NON_FINITE_RESET = "non_finite_reset"


@dataclass(frozen=True)
class AuditEntry:
    """Immutable record of one event."""
    sequence: int
    event_type: AuditEventType
    source: str
    tick: int
    details: Tuple[Tuple[str, str], ...] = field(default_factory=tuple)

    def detail(self, key: str) -> Optional[str]:
        for k, v in self.details:
            if k == key:
                return v
        return None


class LayoutAuditLog:
    """
    Append-only audit log shared by any number of engines.

    Sequence numbers are monotonic across all sources.
    """

    def __init__(self):
        self._entries: List[AuditEntry] = []
        self._sequence: int = 0

    def record(
        self,
        event_type: AuditEventType,
        source: str,
        tick: int = 0,
        **details: object
    ) -> AuditEntry:
        """Append an entry (the only write operation)."""
        self._sequence += 1
        entry = AuditEntry(
            sequence=self._sequence,
            event_type=event_type,
            source=source,
            tick=tick,
            details=tuple((key, str(value)) for key, value in sorted(details.items()))
        )
        self._entries.append(entry)
        return entry

    def get_entries(
        self,
        source: Optional[str] = None,
        event_type: Optional[AuditEventType] = None
    ) -> List[AuditEntry]:
        """Get entries, optionally filtered."""
        entries = self._entries

        if source:
            entries = [e for e in entries if e.source == source]

        if event_type:
            entries = [e for e in entries if e.event_type == event_type]

        return list(entries)

    def count_by_type(self, source: Optional[str] = None) -> Dict[AuditEventType, int]:
        counts: Dict[AuditEventType, int] = {}
        for entry in self.get_entries(source=source):
            counts[entry.event_type] = counts.get(entry.event_type, 0) + 1
        return counts

    @property
    def entry_count(self) -> int:
        return len(self._entries)
