"""
Viewer Layer

RESPONSIBILITY: Render-collaborator contracts
INPUTS: Laid-out TypedGraphs, morphism classes, pointer actions
OUTPUTS: NetworkGraphView frames, node pin/drag state changes

No drawing happens here; a renderer consumes the views.
"""

from .geometry import Arrowhead, EdgePath, edge_center, edge_path, label_position
from .visualization import GraphNodeView, GraphEdgeView, NetworkGraphView
from .mapper import CATEGORY10, GraphViewMapper
from .interaction import ActionType, InteractionRequest, InteractionHandler, DRAG_ALPHA_TARGET

__all__ = [
    'Arrowhead', 'EdgePath', 'edge_center', 'edge_path', 'label_position',
    'GraphNodeView', 'GraphEdgeView', 'NetworkGraphView',
    'CATEGORY10', 'GraphViewMapper',
    'ActionType', 'InteractionRequest', 'InteractionHandler', 'DRAG_ALPHA_TARGET',
]
