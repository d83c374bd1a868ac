"""
Drawing generator constants.

Sheet layout spacing (real-world mm on the composite sheet) and SVG styling.
"""

# =============================================================================
# CANVAS AND SCALE
# =============================================================================

# Bounded canvas the composite sheet is scaled into (drawing units)
CANVAS_WIDTH = 1400
CANVAS_HEIGHT = 1000
MAX_SCALE = 0.12  # drawing units per mm


# =============================================================================
# SHEET LAYOUT (mm on the composite sheet)
# =============================================================================

SHEET_MARGIN = 700
DIM_SPACE = 600      # room reserved beside a view for its dimensions
LABEL_SPACE = 350    # room reserved above a view for its title
VIEW_GAP = 600       # gap between neighbouring views

BOUNDARY_SIDE_PAD = 300
BOUNDARY_REAR_PAD = 200

ELEVATION_REAR_EXTENSION = 50   # fascia overhang plus clearance at the rear
ELEVATION_FRONT_EXTENSION = 50  # same at the front when there is no canopy

PLAN_SIDE_SPACE = 700     # plan depth dimension, left of the footprint
PLAN_RIGHT_SPACE = 150
PLAN_FOOTER_SPACE = 1150  # width dimension and caption below the plan

TITLE_BLOCK_MIN_WIDTH = 4000
TITLE_BLOCK_MIN_HEIGHT = 2800
NOTES_GAP = 120
NOTES_FONT_SIZE = 120
NOTES_LINE_HEIGHT = 150
NOTES_CHAR_WIDTH_RATIO = 0.5


# =============================================================================
# ANNOTATION SIZES (mm)
# =============================================================================

VIEW_TITLE_FONT_SIZE = 180
VIEW_TITLE_OFFSET = 160

DIMENSION_FONT_SIZE = 170
DIMENSION_OFFSET = 250          # horizontal dimensions below the measured edge
DIMENSION_SIDE_OFFSET = -450    # vertical dimensions left of the measured edge
DIMENSION_EXTENSION_GAP = 15
DIMENSION_EXTENSION_OVERSHOOT = 12
DIMENSION_CHEVRON_MAX = 100
DIMENSION_LABEL_ABOVE = 55
DIMENSION_LABEL_BELOW = 140

ROOM_LABEL_FONT_SIZE = 160
CAPTION_FONT_SIZE = 120
BOUNDARY_FONT_SIZE = 120
BOUNDARY_TICK = 80


# =============================================================================
# SVG STYLING
# =============================================================================

FONT_FAMILY = "Arial, sans-serif"

VISIBLE_STROKE_WIDTH = 3
THIN_LINE_WIDTH = 1.5
BORDER_WIDTH = 4

VISIBLE_COLOR = "#111111"
HIDDEN_COLOR = "#888888"
BORDER_COLOR = "#333333"
DIMENSION_COLOR = "#111111"
EXTENSION_COLOR = "#444444"
LABEL_COLOR = "#CC0000"

# Material colours
ANTHRACITE = "#383E42"
ANTHRACITE_LIGHT = "#4A5054"
ANTHRACITE_DARK = "#2C3134"
FRAME_COLOR = "#2A2E32"
FRAME_HIGHLIGHT = "#3D4347"
FRAME_SHADOW = "#1E2226"
GLASS_COLOR = "#6B9AAD"
GLASS_REFLECT = "#B0D0DD"
HANDLE_COLOR = "#C0C0C0"
DECKING_COLOR = "#606365"
DECKING_LINE = "#505355"
SOFFIT_COLOR = "#E8E4DF"
WALL_FILL = "#F4F4F4"
PAPER_COLOR = "#FAFAFA"
