"""Application-wide constants.

All lengths are in mm, angles in degrees, canvas values in pixels.
"""

APP_NAME = "Lens Sketch"
APP_VERSION = "0.1.0"
APP_ORGANIZATION = "LensSketch"

# Window constraints
MIN_WINDOW_WIDTH = 1100
MIN_WINDOW_HEIGHT = 700

# Canvas defaults
DEFAULT_PX_PER_MM = 4.0
MIN_PX_PER_MM = 0.5
MAX_PX_PER_MM = 40.0
ZOOM_STEP = 1.15

# View parameter defaults (full-frame sensor, PL mount)
DEFAULT_SENSOR_WIDTH_MM = 36.0
DEFAULT_SENSOR_HEIGHT_MM = 24.0
DEFAULT_FLANGE_MM = 52.0
DEFAULT_FIELD_ANGLE_DEG = 10.0
DEFAULT_RAY_COUNT = 31
MIN_RAY_COUNT = 3
MAX_RAY_COUNT = 101

# Editable ranges of the numeric view parameters (min, max)
VIEW_PARAMETER_LIMITS = {
    "sensor_width": (1.0, 200.0),
    "sensor_height": (1.0, 200.0),
    "flange_distance": (0.0, 300.0),
    "field_angle": (0.0, 90.0),
}

# New surface defaults ("Add surface")
NEW_SURFACE_RADIUS = 0.0
NEW_SURFACE_THICKNESS = 3.0
NEW_SURFACE_APERTURE = 14.0
DEFAULT_GLASS = "AIR"

# Fallbacks for unparsable numeric input
RADIUS_FALLBACK = 0.0
THICKNESS_FALLBACK = 0.0
APERTURE_FALLBACK = 10.0

# Schematic layout
MOUNT_CLEARANCE_MM = 10.0
RULER_LENGTH_MM = 60
RULER_MAJOR_STEP_MM = 10
RULER_MINOR_STEP_MM = 1
RULER_BASELINE_MM = -30.0
RULER_MAJOR_TICK_PX = 8
RULER_MINOR_TICK_PX = 4
MOUNT_HALF_HEIGHT_MM = 27.0  # PL throat diameter 54 mm
MOUNT_DEPTH_MM = 8.0
MOUNT_INSET_MM = 3.0
AXIS_EXTENT_MM = 400.0

# Curvature "bulge" heuristic (cosmetic)
BULGE_RADIUS_DIVISOR = 80.0
BULGE_MIN_FACTOR = 0.6
BULGE_MAX_FACTOR = 2.6
BULGE_PX = 18.0
CURVE_SAMPLES = 24

# Metrics placeholder formula
EFL_THICKNESS_FACTOR = 0.85
EFL_NOT_STOP_AWARE_FACTOR = 0.9
EFL_OFFSET_MM = 25.0
EFL_MIN_MM = 10.0
EFL_MAX_MM = 300.0
BFL_FLANGE_OFFSET_MM = 19.0
BFL_THICKNESS_FACTOR = 0.03
BFL_MIN_MM = -200.0
BFL_MAX_MM = 200.0
VIGNETTING_APERTURE_MM = 5.0

# Exchange document
DOCUMENT_TOOL = "lens-sketch"
DOCUMENT_VERSION = 1

# Undo history
MAX_UNDO_LEVELS = 20
