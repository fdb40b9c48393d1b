"""
Declarative Specifications

Stubs that describe schemas, graphs and morphisms by NAME. Assembly resolves
the names into references; the stubs themselves never hold references.

Every stub can be built from a plain mapping (as produced by a JSON/YAML
document) with `from_mapping`, or passed through unchanged. A mapping with a
missing field or a value of the wrong kind raises InvalidDefinitionError.
"""

from __future__ import annotations
from dataclasses import dataclass, field
from typing import Any, Callable, Iterable, Mapping, Optional, Tuple, Union

from .base import InvalidDefinitionError


@dataclass(frozen=True)
class NodeTypeSpec:
    """{name, radius, icon}"""
    name: str
    radius: float
    icon: Optional[str] = None

    @staticmethod
    def from_mapping(data: Union[NodeTypeSpec, Mapping[str, Any]]) -> NodeTypeSpec:
        if isinstance(data, NodeTypeSpec):
            return data
        return NodeTypeSpec(
            name=str(_first(data, "name")),
            radius=_convert(float, _first(data, "radius"), "radius"),
            icon=data.get("icon")
        )


@dataclass(frozen=True)
class EdgeTypeSpec:
    """{name, signatures: [[sourceTypeName, targetTypeName], ...]}"""
    name: str
    signatures: Tuple[Tuple[str, str], ...] = field(default_factory=tuple)

    @staticmethod
    def from_mapping(data: Union[EdgeTypeSpec, Mapping[str, Any]]) -> EdgeTypeSpec:
        if isinstance(data, EdgeTypeSpec):
            return data
        return EdgeTypeSpec(
            name=str(_first(data, "name")),
            signatures=tuple(_signature(pair) for pair in data.get("signatures", ()))
        )


@dataclass(frozen=True)
class NodeSpec:
    """
    {id, type, x, y}

    Coordinates are optional; a node without them is placed at random
    when the graph is assembled.
    """
    id: str
    type: str
    x: Optional[float] = None
    y: Optional[float] = None

    @property
    def has_position(self) -> bool:
        return self.x is not None and self.y is not None

    @staticmethod
    def from_mapping(data: Union[NodeSpec, Mapping[str, Any]]) -> NodeSpec:
        if isinstance(data, NodeSpec):
            return data
        x = data.get("x")
        y = data.get("y")
        return NodeSpec(
            id=str(_first(data, "id")),
            type=str(_first(data, "type", "typeName")),
            x=None if x is None else _convert(float, x, "x"),
            y=None if y is None else _convert(float, y, "y")
        )


@dataclass(frozen=True)
class EdgeSpec:
    """{id, type, source, target}"""
    id: int
    type: str
    source: str
    target: str

    @staticmethod
    def from_mapping(data: Union[EdgeSpec, Mapping[str, Any]]) -> EdgeSpec:
        if isinstance(data, EdgeSpec):
            return data
        return EdgeSpec(
            id=_convert(_integer, _first(data, "id"), "id"),
            type=str(_first(data, "type", "typeName")),
            source=str(_first(data, "source", "sourceId")),
            target=str(_first(data, "target", "targetId"))
        )


NodeTypeLike = Union[NodeTypeSpec, Mapping[str, Any]]
EdgeTypeLike = Union[EdgeTypeSpec, Mapping[str, Any]]
NodeLike = Union[NodeSpec, Mapping[str, Any]]
EdgeLike = Union[EdgeSpec, Mapping[str, Any]]


def _first(data: Mapping[str, Any], *keys: str) -> Any:
    for key in keys:
        if key in data:
            return data[key]
    raise InvalidDefinitionError(f"missing field '{keys[0]}'", field=keys[0])


def _convert(convert: Callable[[Any], Any], value: Any, name: str) -> Any:
    try:
        return convert(value)
    except (TypeError, ValueError, OverflowError):
        raise InvalidDefinitionError(f"invalid value {value!r} for '{name}'", field=name) from None


def _integer(value: Any) -> int:
    if isinstance(value, bool):
        raise TypeError(value)
    if isinstance(value, int):
        return value
    number = float(value)
    if not number.is_integer():
        raise ValueError(value)
    return int(number)


def _signature(pair: Any) -> Tuple[str, str]:
    try:
        src, tgt = pair
    except (TypeError, ValueError):
        raise InvalidDefinitionError(
            f"signature must be a [source, target] pair, got {pair!r}", field="signatures"
        ) from None
    return str(src), str(tgt)


def normalize(specs: Iterable[Any], factory) -> Tuple[Any, ...]:
    """Convert an iterable of stubs/mappings with `factory.from_mapping`."""
    return tuple(factory.from_mapping(spec) for spec in specs)
