"""Color palette constants for the dark theme and the schematic canvas."""

# Base theme colors
BACKGROUND = "#0F172A"
PANEL_BG = "#1E293B"
SURFACE = "#334155"
BORDER = "#475569"

# Canvas background
CANVAS_BG = "#0B1220"

# Accent colors
ACCENT = "#3B82F6"
ACCENT_HOVER = "#60A5FA"

# Semantic colors
WARNING = "#F59E0B"
ERROR = "#EF4444"
SUCCESS = "#10B981"

# Text colors
TEXT_PRIMARY = "#F8FAFC"
TEXT_SECONDARY = "#B0BEC5"
TEXT_DISABLED = "#64748B"

# Schematic primitive roles -> stroke color
SCHEMATIC_COLORS = {
    "background": CANVAS_BG,
    "axis": "#475569",
    "sensor": "#F43F5E",
    "ruler": "#94A3B8",
    "ruler_text": "#94A3B8",
    "mount": "#FBBF24",
    "mount_text": "#FBBF24",
    "aperture": "#64748B",
    "body": "#7DD3FC",
    "outline": "#7DD3FC",
    "label": TEXT_SECONDARY,
}

# Glass fill colors (drawn translucent)
GLASS_COLORS = {
    "AIR": "#1E293B",       # barely visible
    "BK7": "#38BDF8",       # crown — light blue
    "F2": "#818CF8",        # flint — indigo
    "SF10": "#C084FC",      # dense flint — purple
    "LASF35": "#34D399",    # lanthanum — green
    "LASFN31": "#2DD4BF",   # lanthanum — teal
    "LF5": "#A5B4FC",       # light flint — pale indigo
}

GLASS_FILL_ALPHA = 90
AIR_FILL_ALPHA = 25
