# src/ast3d_core/constants.py
import logging
import math

logger = logging.getLogger(__name__)

# --- Layout Constants ---

#: Lower bound applied to the configured node spacing by the hierarchical and grid layouts.
MIN_LAYOUT_SPACING: float = 30.0

#: The force-directed layout always runs exactly this many rounds.
FORCE_ITERATIONS: int = 50

#: Pairwise repulsion: force = REPULSION_STRENGTH / distance**2
REPULSION_STRENGTH: float = 1.0

#: Attraction along a connection: force = ATTRACTION_STRENGTH * distance * ATTRACTION_SCALE
ATTRACTION_STRENGTH: float = 0.1
ATTRACTION_SCALE: float = 0.1

#: Multiplicative damping applied to every un-pinned position after each round.
DAMPING_FACTOR: float = 0.9

#: Distance substituted for coincident nodes so the force direction stays finite.
MIN_FORCE_DISTANCE: float = 0.1

TWO_PI: float = 2.0 * math.pi

# --- Geometry Constants ---

#: Number of faces generated for the many-faced solid.
MANY_FACED_FACE_COUNT: int = 12

# --- Visual Defaults ---

NEUTRAL_GRAY: str = "#808080"
DEFAULT_NODE_OPACITY: float = 0.9
DEFAULT_CONNECTION_OPACITY: float = 0.8
DEFAULT_LABEL_SIZE: int = 12
DEFAULT_LABEL_COLOR: str = "#FFFFFF"

#: Per-type node colours used when a declaration does not set one.
DEFAULT_NODE_COLORS = {
    "function": "#4CAF50",
    "component": "#2196F3",
    "datapath": "#FF9800",
    "module": "#9C27B0",
    "class": "#F44336",
    "interface": "#00BCD4",
    "variable": "#FFEB3B",
    "constant": "#795548",
}

DEFAULT_CONNECTION_COLORS = {
    "dataflow": "#4CAF50",
    "controlflow": "#F44336",
    "inheritance": "#2196F3",
    "composition": "#FF9800",
    "dependency": "#9C27B0",
    "association": "#607D8B",
}

logger.debug("Defined layout constants: MIN_LAYOUT_SPACING=%s, FORCE_ITERATIONS=%s", MIN_LAYOUT_SPACING, FORCE_ITERATIONS)
