"""
Layout Parameters
=================

Typed, observable configuration for layout engines.

`LayoutParameters` is an immutable snapshot; `ParameterStore` holds the
current snapshot and notifies explicit subscribers when a field changes.
Keys may be given as field names (`edge_length`) or as wire keys
(`edgeLength`); any other key is rejected with KeyError. A value of the wrong
kind is rejected with InvalidDefinitionError.
"""

from __future__ import annotations
import dataclasses
from dataclasses import dataclass
from typing import Any, Callable, Dict, List, Mapping, Optional
import logging

from graphcore.contracts import InvalidDefinitionError

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class LayoutParameters:
    """Configuration shared by the engines of one view."""
    gravity_strength: float = 1e-2
    node_repulsion_strength: float = -120.0
    edge_length: float = 100.0
    edge_strength: float = 0.2
    mapping_consistency: float = 0.3

    layouter_on: bool = True
    auto_center: bool = True

    # Presentation hints, read by the view mapper only.
    category_colors: bool = True
    category_labels: bool = False

    @classmethod
    def from_mapping(cls, data: Mapping[str, Any]) -> LayoutParameters:
        """Build parameters from a mapping of field names or wire keys."""
        values = {resolve_key(key): _coerce(resolve_key(key), value) for key, value in data.items()}
        return cls(**values)

    def to_wire(self) -> Dict[str, Any]:
        return {wire: getattr(self, name) for wire, name in WIRE_KEYS.items()}


WIRE_KEYS: Dict[str, str] = {
    "gravityStrength": "gravity_strength",
    "nodeRepulsionStrength": "node_repulsion_strength",
    "edgeLength": "edge_length",
    "edgeStrength": "edge_strength",
    "mappingConsistency": "mapping_consistency",
    "layouterOn": "layouter_on",
    "autoCenter": "auto_center",
    "categoryColors": "category_colors",
    "categoryLabels": "category_labels",
}

_FIELDS = {f.name: f for f in dataclasses.fields(LayoutParameters)}


def resolve_key(key: str) -> str:
    """Field name for a field name or wire key."""
    if key in _FIELDS:
        return key
    if key in WIRE_KEYS:
        return WIRE_KEYS[key]
    raise KeyError(f"unknown layout parameter '{key}'")


_BOOLEAN_WORDS = {"true": True, "false": False, "on": True, "off": False, "1": True, "0": False}


def _coerce(name: str, value: Any) -> Any:
    if _FIELDS[name].type in ("bool", bool):
        return _boolean(name, value)
    try:
        return float(value)
    except (TypeError, ValueError):
        raise InvalidDefinitionError(
            f"layout parameter '{name}' must be a number, got {value!r}", parameter=name
        ) from None


def _boolean(name: str, value: Any) -> bool:
    if isinstance(value, bool):
        return value
    if isinstance(value, (int, float)) and value in (0, 1):
        return bool(value)
    if isinstance(value, str) and value.strip().lower() in _BOOLEAN_WORDS:
        return _BOOLEAN_WORDS[value.strip().lower()]
    raise InvalidDefinitionError(
        f"layout parameter '{name}' must be a boolean, got {value!r}", parameter=name
    )


Callback = Callable[[Any], None]


class Subscription:
    """Handle returned by `ParameterStore.on_change`."""

    def __init__(self, store: ParameterStore, name: str, callback: Callback):
        self._store = store
        self.name = name
        self.callback = callback
        self.active = True

    def cancel(self) -> None:
        if self.active:
            self._store._unsubscribe(self)
            self.active = False


class ParameterStore:
    """
    Current layout parameters plus change subscriptions.

    Mutated by UI collaborators between ticks; read by engines at the start
    of each tick. Subscribers of a field are called, in subscription order,
    with the new value whenever the field actually changes.
    """

    def __init__(self, parameters: Optional[LayoutParameters] = None):
        self._parameters = parameters or LayoutParameters()
        self._subscribers: Dict[str, List[Subscription]] = {}

    @property
    def parameters(self) -> LayoutParameters:
        return self._parameters

    def get(self, key: str) -> Any:
        return getattr(self._parameters, resolve_key(key))

    def set(self, key: str, value: Any) -> None:
        self.update(**{key: value})

    def update(self, **changes: Any) -> None:
        """Apply several changes, then notify each changed field once."""
        resolved = {resolve_key(key): value for key, value in changes.items()}
        changed = {
            name: _coerce(name, value) for name, value in resolved.items()
            if getattr(self._parameters, name) != _coerce(name, value)
        }
        if not changed:
            return

        self._parameters = dataclasses.replace(self._parameters, **changed)
        logger.debug("layout parameters changed: %s", changed)

        for name, value in changed.items():
            for subscription in list(self._subscribers.get(name, ())):
                subscription.callback(value)

    def on_change(self, key: str, callback: Callback) -> Subscription:
        name = resolve_key(key)
        subscription = Subscription(self, name, callback)
        self._subscribers.setdefault(name, []).append(subscription)
        return subscription

    def subscriber_count(self, key: str) -> int:
        return len(self._subscribers.get(resolve_key(key), ()))

    def _unsubscribe(self, subscription: Subscription) -> None:
        subscribers = self._subscribers.get(subscription.name, [])
        if subscription in subscribers:
            subscribers.remove(subscription)
