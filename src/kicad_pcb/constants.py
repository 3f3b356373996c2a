"""Global constants for kicad_pcb."""

# Layer names with special meaning for geometry
EDGE_CUTS_LAYER = "Edge.Cuts"
"""Board-level graphics on this layer define the physical outline."""

FRONT_FAB_LAYER = "F.Fab"
"""Footprint graphics on this layer are left out of the placement envelope."""

# Text placeholder metrics (mm), used until real font metrics exist
TEXT_PLACEHOLDER_WIDTH = 10.0
TEXT_PLACEHOLDER_HEIGHT = 5.0

# Largest value a hex literal may hold
MAX_HEX_VALUE = 2**64 - 1

# Canonical layer names accepted in strict layer mode
COPPER_LAYERS = ("F.Cu", *(f"In{i}.Cu" for i in range(1, 31)), "B.Cu")

TECHNICAL_LAYERS = (
    "B.Adhes",
    "F.Adhes",
    "B.Paste",
    "F.Paste",
    "B.SilkS",
    "F.SilkS",
    "B.Mask",
    "F.Mask",
)

USER_LAYERS = ("Dwgs.User", "Cmts.User", "Eco1.User", "Eco2.User")

SPECIAL_LAYERS = ("Edge.Cuts", "Margin", "F.CrtYd", "B.CrtYd", "F.Fab", "B.Fab")

USER_DEFINABLE_LAYERS = tuple(f"User.{i}" for i in range(1, 10))

# Wildcards used in pad layer sets, e.g. (layers "*.Cu" "*.Mask")
WILDCARD_LAYERS = ("*.Cu", "*.Mask", "*.Paste", "*.SilkS", "*.Adhes", "F&B.Cu", "*.In.Cu")

CANONICAL_LAYERS = frozenset(
    COPPER_LAYERS
    + TECHNICAL_LAYERS
    + USER_LAYERS
    + SPECIAL_LAYERS
    + USER_DEFINABLE_LAYERS
    + WILDCARD_LAYERS
)
