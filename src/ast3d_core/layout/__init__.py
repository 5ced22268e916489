# src/ast3d_core/layout/__init__.py
# Importing the layout modules registers them in LAYOUT_REGISTRY.
from . import circular, force_directed, grid, hierarchical
from .circular import circle_positions, circle_radius, circular_layout
from .force_directed import force_directed_layout
from .grid import grid_layout
from .hierarchical import assign_layers, hierarchical_layout
from .registry import LAYOUT_REGISTRY, LayoutContext, apply_layout, register_layout

__all__ = [
    "LAYOUT_REGISTRY",
    "LayoutContext",
    "apply_layout",
    "register_layout",
    "assign_layers",
    "circle_positions",
    "circle_radius",
    "circular_layout",
    "force_directed_layout",
    "grid_layout",
    "hierarchical_layout",
]
