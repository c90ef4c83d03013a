"""
Default tolerances and numeric constants for markgeom.

Every operation that compares coordinates takes its tolerance as an
explicit keyword argument; the values below are only the defaults.

Copyright (c) 2024 markgeom contributors
All rights reserved (MIT License)
"""

import sys

# smallest positive step used for degenerate area/perimeter placeholders
EPSILON = sys.float_info.epsilon

# two path endpoints closer than this are coincident
CLOSURE_TOLERANCE = 1e-4

# snapping and inside/outside classification in boolean operations
BOOLEAN_TOLERANCE = 1e-4

# point-on-segment resolution for line/line intersection
LINE_RESOLUTION = 1e-3

# polygonal approximation of arcs and circles
DEFAULT_VERTEX_COUNT = 32
MIN_VERTEX_COUNT = 8

# smallest accepted tile edge, in drawing units
MIN_TILE_SIZE = 3.0

# clip rectangles are grown by this much on every side when keeping
# path fragments, so boundary-tangent fragments survive rounding
CLIP_MARGIN = 1.0

# angular tolerance (degrees) used when merging collinear lines
ANGLE_TOLERANCE = 1e-3
