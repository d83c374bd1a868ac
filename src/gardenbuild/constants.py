"""
Real-world building constants.

All values are millimetres. They describe the physical product and are
shared by the configuration, drawing and interaction layers.
"""

# =============================================================================
# ROOF / FASCIA ZONE (measured down from the top of the building)
# =============================================================================

TOP_TRIM_HEIGHT = 75
FASCIA_HEIGHT = 300
ROOF_ZONE = TOP_TRIM_HEIGHT + FASCIA_HEIGHT  # 375mm, gutter hangs below this
GUTTER_HEIGHT = 30
FASCIA_OVERHANG = 25  # fascia projects past each corner

DOWNPIPE_WIDTH = 18
DOWNPIPE_INSET = 20
DOWNPIPE_HEIGHT_RATIO = 0.12  # downpipe length as a fraction of wall height


# =============================================================================
# STRUCTURE
# =============================================================================

WALL_THICKNESS = 150
PARTITION_THICKNESS = 150
PARTITION_DOOR_WIDTH = 720
BASE_TRIM_HEIGHT = 100
DECKING_HEIGHT = 100
CORNER_POST_WIDTH = 180  # signature corner strips


# =============================================================================
# CANOPY (signature tier only)
# =============================================================================

CANOPY_DEPTH = 400
CANOPY_TRIM_WIDTH = 50  # trim strip at the building edge of an open canopy
CANOPY_POST_WIDTH = 180  # post at the outer end of a closed side screen
SPOTLIGHT_SPACING = 1000  # one soffit spotlight per whole metre of width


# =============================================================================
# INTERACTION
# =============================================================================

SNAP_GRID = 50
AC_EXTERNAL_MARGIN = 1000  # external AC units may sit this far outside the footprint
SLOT_WINDOW_TOP_GAP = 100  # default gap between fascia and a slot window head
