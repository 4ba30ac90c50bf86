# constants.py
"""
Application-level constants.

These values are static and do not change between runs. They cover the
particle background's motion ranges and tick rate, the window defaults,
and the colour scheme shared by every screen.
"""
import math

# Window settings (portrait, phone-like by default)
WINDOW_WIDTH = 390
WINDOW_HEIGHT = 844
FULLSCREEN = False
FPS = 60

# --- Particle Background ---
DEFAULT_PARTICLE_COUNT = 30
# Period of the simulation clock in seconds (20 ticks per second).
TICK_INTERVAL = 0.05
TICK_INTERVAL_MS = int(TICK_INTERVAL * 1000)

PARTICLE_SIZE_RANGE = (2.0, 5.0)
PARTICLE_OPACITY_RANGE = (0.1, 0.3)
PARTICLE_SPEED_RANGE = (0.1, 0.5)
PARTICLE_DIRECTION_RANGE = (0.0, 2.0 * math.pi)

# Chance per particle per tick that its heading drifts, and the drift bound.
DIRECTION_CHANGE_PROBABILITY = 0.05
DIRECTION_CHANGE_MAX = 0.2

# A viewport change larger than this (either axis) re-seeds the field.
RESIZE_REPOPULATE_THRESHOLD = 50

# Fixed members of the particle palette, after the current accent.
PARTICLE_PALETTE_CONSTANTS = [
    (255, 255, 255),  # White
    (91, 155, 213),   # Soft Blue
    (142, 124, 195),  # Lavender
]

# --- Colour Scheme ---
BACKGROUND_COLOR = (26, 26, 29)            # #1A1A1D
BACKGROUND_SECONDARY_COLOR = (24, 25, 27)  # #18191B
CARD_BACKGROUND_COLOR = (30, 34, 33)       # #1E2221
TEXT_PRIMARY = (255, 255, 255)
TEXT_SECONDARY = (179, 179, 179)
TEXT_TERTIARY = (128, 128, 128)

# Accent colour options as (name, hex). The first entry is the default.
ACCENT_COLORS = [
    ("Teal", "#3B8D85"),
    ("Purple", "#8E7CC3"),
    ("Blue", "#5B9BD5"),
    ("Orange", "#E36C09"),
    ("Green", "#70AD47"),
    ("Red", "#C00000"),
]
DEFAULT_ACCENT_HEX = ACCENT_COLORS[0][1]

# Priority dot colours for goal cards (Low, Medium, High).
PRIORITY_COLORS = {
    1: (51, 102, 204),
    2: (204, 204, 51),
    3: (204, 51, 51),
}

# --- Persistence ---
DEFAULT_SETTINGS_FILE = "data/settings.json"
DEFAULT_EXPORT_DIR = "exports"
EXPORT_FILE_NAME = "LifePortalData.json"
APP_VERSION = "1.0"
