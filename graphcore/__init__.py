"""
Typed Graph Core

RESPONSIBILITY: Typed graph data model
OUTPUTS: TypeSchema, TypedGraph, GraphMorphism, GraphTopology

Schemas, graphs and morphisms are assembled once from declarative
specifications and are immutable in topology afterwards. There is no
process-wide registry: every object is created and passed explicitly.
"""

from .contracts import (
    ErrorCode, Error, GraphAssemblyError,
    UnknownNodeTypeError, UnknownEdgeTypeError,
    UnknownReferenceError, UnknownNodeReferenceError, UnknownEdgeReferenceError,
    SignatureMismatchError, DuplicateDefinitionError, DuplicateMappingError,
    InvalidDefinitionError, NodeState, NodeStatus,
    NodeTypeSpec, EdgeTypeSpec, NodeSpec, EdgeSpec
)
from .geometry import Point, Vector
from .schema import NodeType, EdgeType, TypeSchema
from .graph import Node, Edge, LabelSize, TypedGraph
from .morphism import GraphMap, GraphMorphism, Side
from .topology import GraphTopology
from .observability import AuditEventType, AuditEntry, LayoutAuditLog

__all__ = [
    'ErrorCode', 'Error', 'GraphAssemblyError',
    'UnknownNodeTypeError', 'UnknownEdgeTypeError',
    'UnknownReferenceError', 'UnknownNodeReferenceError', 'UnknownEdgeReferenceError',
    'SignatureMismatchError', 'DuplicateDefinitionError', 'DuplicateMappingError',
    'InvalidDefinitionError', 'NodeState', 'NodeStatus',
    'NodeTypeSpec', 'EdgeTypeSpec', 'NodeSpec', 'EdgeSpec',
    'Point', 'Vector',
    'NodeType', 'EdgeType', 'TypeSchema',
    'Node', 'Edge', 'LabelSize', 'TypedGraph',
    'GraphMap', 'GraphMorphism', 'Side',
    'GraphTopology',
    'AuditEventType', 'AuditEntry', 'LayoutAuditLog',
]
