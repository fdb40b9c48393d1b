"""
Contracts

Immutable types shared by every layer: error taxonomy, node states and the
declarative specifications consumed by assembly.
"""

from .base import (
    ErrorCode, Error, GraphAssemblyError,
    UnknownNodeTypeError, UnknownEdgeTypeError,
    UnknownReferenceError, UnknownNodeReferenceError, UnknownEdgeReferenceError,
    SignatureMismatchError, DuplicateDefinitionError, DuplicateMappingError,
    InvalidDefinitionError, NodeState, NodeStatus
)
from .specs import NodeTypeSpec, EdgeTypeSpec, NodeSpec, EdgeSpec

__all__ = [
    'ErrorCode', 'Error', 'GraphAssemblyError',
    'UnknownNodeTypeError', 'UnknownEdgeTypeError',
    'UnknownReferenceError', 'UnknownNodeReferenceError', 'UnknownEdgeReferenceError',
    'SignatureMismatchError', 'DuplicateDefinitionError', 'DuplicateMappingError',
    'InvalidDefinitionError', 'NodeState', 'NodeStatus',
    'NodeTypeSpec', 'EdgeTypeSpec', 'NodeSpec', 'EdgeSpec',
]
