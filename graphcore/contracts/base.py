"""
Base Contracts and Shared Types

Foundational types shared by the schema, graph, morphism and layout layers.
Everything here is IMMUTABLE pure data, except the exception classes, which
carry an immutable Error record.

BOUNDARY ENFORCEMENT:
=====================
- This module has no dependencies on other graphcore modules
- Errors are enumerated, never ad-hoc strings
- Node fixed/free status is an explicit state, not a pair of booleans
"""

from __future__ import annotations
from dataclasses import dataclass, field
from enum import Enum, auto
from typing import Tuple


# =============================================================================
# ERROR STATES (Explicit, never silent)
# =============================================================================

class ErrorCode(Enum):
    """
    Explicit error codes for assembly failures.
    Every way a declarative specification can be rejected is enumerated.
    """
    # Reference errors
    UNKNOWN_NODE_TYPE = auto()
    UNKNOWN_EDGE_TYPE = auto()
    UNKNOWN_NODE_REFERENCE = auto()
    UNKNOWN_EDGE_REFERENCE = auto()

    # Typing errors
    SIGNATURE_MISMATCH = auto()

    # Definition errors
    DUPLICATE_DEFINITION = auto()
    DUPLICATE_MAPPING = auto()
    INVALID_DEFINITION = auto()


@dataclass(frozen=True)
class Error:
    """
    Immutable error representation with full context.
    Attached to every GraphAssemblyError so failures can be inspected as data.
    """
    code: ErrorCode
    message: str
    context: Tuple[Tuple[str, str], ...] = field(default_factory=tuple)

    def with_context(self, key: str, value: str) -> Error:
        """Return new Error with additional context (immutable)."""
        return Error(
            code=self.code,
            message=self.message,
            context=self.context + ((key, value),)
        )

    def context_value(self, key: str) -> str | None:
        for k, v in self.context:
            if k == key:
                return v
        return None


class GraphAssemblyError(Exception):
    """
    Raised when a schema, graph or morphism specification is rejected.

    Assembly is all-or-nothing: when this is raised no partially built
    object has been returned or retained.
    """
    code: ErrorCode = ErrorCode.INVALID_DEFINITION

    def __init__(self, message: str, **context: object):
        super().__init__(message)
        self.error = Error(
            code=self.code,
            message=message,
            context=tuple((key, str(value)) for key, value in context.items())
        )


class UnknownNodeTypeError(GraphAssemblyError):
    code = ErrorCode.UNKNOWN_NODE_TYPE


class UnknownEdgeTypeError(GraphAssemblyError):
    code = ErrorCode.UNKNOWN_EDGE_TYPE


class UnknownReferenceError(GraphAssemblyError):
    """A specification refers to an element id that does not exist."""


class UnknownNodeReferenceError(UnknownReferenceError):
    code = ErrorCode.UNKNOWN_NODE_REFERENCE


class UnknownEdgeReferenceError(UnknownReferenceError):
    code = ErrorCode.UNKNOWN_EDGE_REFERENCE


class SignatureMismatchError(GraphAssemblyError):
    code = ErrorCode.SIGNATURE_MISMATCH


class DuplicateDefinitionError(GraphAssemblyError):
    code = ErrorCode.DUPLICATE_DEFINITION


class DuplicateMappingError(GraphAssemblyError):
    code = ErrorCode.DUPLICATE_MAPPING


class InvalidDefinitionError(GraphAssemblyError):
    code = ErrorCode.INVALID_DEFINITION


# =============================================================================
# NODE STATES (Explicit, no implicit transitions)
# =============================================================================

class NodeState(Enum):
    """
    Fixed/free status of a node.

    Only FREE nodes are moved by the layout engine. DRAGGING overrides
    PINNED: a pinned node being dragged follows the pointer, and returns to
    PINNED when released.
    """
    FREE = "free"
    PINNED = "pinned"
    DRAGGING = "dragging"

    @property
    def is_fixed(self) -> bool:
        return self is not NodeState.FREE


@dataclass(frozen=True)
class NodeStatus:
    """
    A NodeState plus the state to resume when a drag ends.

    TRANSITIONS:
    ============
    FREE     --begin_drag--> DRAGGING (resume FREE)
    PINNED   --begin_drag--> DRAGGING (resume PINNED)
    DRAGGING --end_drag----> resume state
    FREE    <--toggle_pin--> PINNED
    DRAGGING --toggle_pin--> DRAGGING with the resume state flipped
    """
    state: NodeState = NodeState.FREE
    resume: NodeState = NodeState.FREE

    @property
    def is_pinned(self) -> bool:
        if self.state is NodeState.DRAGGING:
            return self.resume is NodeState.PINNED
        return self.state is NodeState.PINNED

    @property
    def is_dragging(self) -> bool:
        return self.state is NodeState.DRAGGING

    def begin_drag(self) -> NodeStatus:
        if self.state is NodeState.DRAGGING:
            return self
        return NodeStatus(state=NodeState.DRAGGING, resume=self.state)

    def end_drag(self) -> NodeStatus:
        if self.state is NodeState.DRAGGING:
            return NodeStatus(state=self.resume, resume=self.resume)
        return self

    def toggle_pin(self) -> NodeStatus:
        if self.state is NodeState.DRAGGING:
            flipped = NodeState.FREE if self.resume is NodeState.PINNED else NodeState.PINNED
            return NodeStatus(state=NodeState.DRAGGING, resume=flipped)
        if self.state is NodeState.PINNED:
            return NodeStatus(state=NodeState.FREE, resume=NodeState.FREE)
        return NodeStatus(state=NodeState.PINNED, resume=NodeState.PINNED)
