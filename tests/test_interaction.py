"""
Interaction Tests
=================

Drag and pin requests and their effect on the engine.
"""

import pytest

from graphcore import AuditEventType, LayoutAuditLog, NodeState, UnknownNodeReferenceError
from viewer import ActionType, DRAG_ALPHA_TARGET, InteractionHandler, InteractionRequest
from tests.fixtures import make_engine, make_graph, pair_graph, run_to_rest


@pytest.fixture
def setup():
    graph = pair_graph()
    audit = LayoutAuditLog()
    engine = make_engine(graph, audit_log=audit)
    run_to_rest(engine)
    return graph, engine, audit


class TestInteractionRequest:

    def test_constructors(self):
        assert InteractionRequest.drag_start("n").action is ActionType.DRAG_START
        move = InteractionRequest.drag_move("n", 1.0, 2.0)
        assert (move.action, move.x, move.y) == (ActionType.DRAG_MOVE, 1.0, 2.0)
        assert InteractionRequest.drag_end("n").action is ActionType.DRAG_END
        assert InteractionRequest.toggle_pin("n").node_id == "n"


class TestInteractionHandler:

    def test_drag_start_reheats(self, setup):
        graph, engine, _ = setup
        handler = InteractionHandler(graph, engine)

        node = handler.apply(InteractionRequest.drag_start("n1"))

        assert node.state is NodeState.DRAGGING
        assert engine.is_running
        assert engine.alpha == 0.2
        assert engine.alpha_target == DRAG_ALPHA_TARGET

    def test_only_first_drag_restarts(self, setup):
        graph, engine, audit = setup
        handler = InteractionHandler(graph, engine)

        handler.apply(InteractionRequest.drag_start("n1"))
        handler.apply(InteractionRequest.drag_start("n2"))
        assert handler.active_drags == 2
        assert len(audit.get_entries(event_type=AuditEventType.RESTARTED)) == 1

        handler.apply(InteractionRequest.drag_end("n1"))
        assert engine.alpha_target == DRAG_ALPHA_TARGET

        handler.apply(InteractionRequest.drag_end("n2"))
        assert engine.alpha_target == 0.0
        assert handler.active_drags == 0

    def test_dragged_node_follows_pointer_only(self, setup):
        graph, engine, _ = setup
        moved = []
        handler = InteractionHandler(graph, engine, on_drag=moved.append)

        handler.apply(InteractionRequest.drag_start("n1"))
        handler.apply(InteractionRequest.drag_move("n1", 50.0, 60.0))
        for _ in range(10):
            engine.step()

        node = graph.node("n1")
        assert (node.x, node.y) == (50.0, 60.0)
        assert moved == [node]

    def test_drag_keeps_simulation_warm(self, setup):
        graph, engine, _ = setup
        handler = InteractionHandler(graph, engine)

        handler.apply(InteractionRequest.drag_start("n1"))
        for _ in range(500):
            engine.step()
        assert engine.is_running

        handler.apply(InteractionRequest.drag_end("n1"))
        run_to_rest(engine)
        assert not engine.is_running

    def test_toggle_pin(self, setup):
        graph, engine, _ = setup
        handler = InteractionHandler(graph, engine)

        assert handler.apply(InteractionRequest.toggle_pin("n2")).is_pinned
        assert not handler.apply(InteractionRequest.toggle_pin("n2")).is_pinned

    def test_pinned_node_dragged_stays_pinned(self, setup):
        graph, engine, _ = setup
        handler = InteractionHandler(graph, engine)

        handler.apply(InteractionRequest.toggle_pin("n1"))
        handler.apply(InteractionRequest.drag_start("n1"))
        handler.apply(InteractionRequest.drag_move("n1", 10.0, 10.0))
        node = handler.apply(InteractionRequest.drag_end("n1"))

        assert node.state is NodeState.PINNED
        engine.step()
        assert (node.x, node.y) == (10.0, 10.0)

    def test_released_node_is_free_again(self, setup):
        graph, engine, _ = setup
        handler = InteractionHandler(graph, engine)

        handler.apply(InteractionRequest.drag_start("n2"))
        handler.apply(InteractionRequest.drag_move("n2", 0.0, 0.0))
        handler.apply(InteractionRequest.drag_end("n2"))
        engine.step()

        assert graph.node("n2").point.x != 0.0

    def test_unknown_node(self):
        graph = make_graph([("n1", "a", 0.0, 0.0)])
        handler = InteractionHandler(graph, make_engine(graph))
        with pytest.raises(UnknownNodeReferenceError):
            handler.apply(InteractionRequest.toggle_pin("ghost"))
