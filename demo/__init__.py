"""Example graphs and a headless layout runner."""

from .elevator import (
    MORPHISM_NAMES, elevator_schema, elevator_graphs, elevator_morphisms, elevator_morphism, img
)

__all__ = [
    'MORPHISM_NAMES', 'elevator_schema', 'elevator_graphs', 'elevator_morphisms',
    'elevator_morphism', 'img',
]
