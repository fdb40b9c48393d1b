"""
Interaction Contracts

Responsibility:
Define the pointer actions on graph nodes and apply them.
The only writer of node pin/drag state.
"""

from __future__ import annotations
from dataclasses import dataclass
from enum import Enum
from typing import TYPE_CHECKING, Callable, Optional, Set
import logging

from graphcore.graph import Node, TypedGraph

if TYPE_CHECKING:
    from forcelayout.engine import ForceLayoutEngine

logger = logging.getLogger(__name__)

# Keeps the simulation warm while a node is dragged.
DRAG_ALPHA_TARGET = 0.3


class ActionType(Enum):
    """Types of user interaction."""
    DRAG_START = "drag_start"
    DRAG_MOVE = "drag_move"
    DRAG_END = "drag_end"
    TOGGLE_PIN = "toggle_pin"


@dataclass(frozen=True)
class InteractionRequest:
    """A specific user intent on one node."""
    action: ActionType
    node_id: str
    x: Optional[float] = None
    y: Optional[float] = None

    @classmethod
    def drag_start(cls, node_id: str) -> InteractionRequest:
        return cls(ActionType.DRAG_START, node_id)

    @classmethod
    def drag_move(cls, node_id: str, x: float, y: float) -> InteractionRequest:
        return cls(ActionType.DRAG_MOVE, node_id, x, y)

    @classmethod
    def drag_end(cls, node_id: str) -> InteractionRequest:
        return cls(ActionType.DRAG_END, node_id)

    @classmethod
    def toggle_pin(cls, node_id: str) -> InteractionRequest:
        return cls(ActionType.TOGGLE_PIN, node_id)


class InteractionHandler:
    """
    Applies interaction requests to one graph and its engine.

    The first active drag reheats the engine and raises its alpha target;
    the last one to end lowers it back to 0. `on_drag` is called after
    every move.
    """

    def __init__(
        self,
        graph: TypedGraph,
        engine: ForceLayoutEngine,
        on_drag: Optional[Callable[[Node], None]] = None
    ):
        self.graph = graph
        self.engine = engine
        self.on_drag = on_drag
        self._active: Set[str] = set()

    @property
    def active_drags(self) -> int:
        return len(self._active)

    def apply(self, request: InteractionRequest) -> Node:
        node = self.graph.node(request.node_id)

        if request.action is ActionType.DRAG_START:
            self._start(node)
        elif request.action is ActionType.DRAG_MOVE:
            self._move(node, request)
        elif request.action is ActionType.DRAG_END:
            self._end(node)
        elif request.action is ActionType.TOGGLE_PIN:
            node.toggle_pin()
            logger.debug("node %s pinned=%s", node.id, node.is_pinned)

        return node

    def _start(self, node: Node) -> None:
        if not self._active:
            self.engine.restart()
            self.engine.alpha_target = DRAG_ALPHA_TARGET
        self._active.add(node.id)
        node.begin_drag()

    def _move(self, node: Node, request: InteractionRequest) -> None:
        if request.x is not None:
            node.x = float(request.x)
        if request.y is not None:
            node.y = float(request.y)
        if self.on_drag is not None:
            self.on_drag(node)

    def _end(self, node: Node) -> None:
        self._active.discard(node.id)
        if not self._active:
            self.engine.alpha_target = 0.0
        node.end_drag()
