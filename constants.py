# constants.py
"""
Application-level constants.

These values are static and do not change between simulation runs.
They are fundamental to the application's framework, such as rendering
properties, default window sizes, or the fixed shape of the snowflake
physics that is not part of the experimental configuration.
"""
import math

# Visualization settings
# Set to True to run in borderless fullscreen mode.
# Set to False to run in a resizable window of DEFAULT_WINDOW_SIZE.
FULLSCREEN = False
DEFAULT_WINDOW_SIZE = (1280, 720)
FPS = 60
BACKGROUND_COLOR = (10, 14, 28) # Night Blue
WINDOW_TITLE = "Snowfall"

# --- Field ---
DEFAULT_PARTICLE_COUNT = 300

# --- Snowflake Shape ---
SNOWFLAKE_COLOR = (255, 255, 255)
SNOWFLAKE_ALPHA = 0.8
SNOWFLAKE_LINE_WIDTH = 1
SNOWFLAKE_BRANCHES = 6
BRANCH_LENGTH = 5.0         # Main branch length, in multiples of size.
SIDE_BRANCH_ROOT = 3.0      # Where the side branches leave the main branch.
SIDE_BRANCH_TIP = 2.5       # Where the side branches end along the main axis.
BRANCH_ROTATION = 2 * math.pi / SNOWFLAKE_BRANCHES

# --- Particle Lifecycle ---
SIZE_MIN = 2.0
SIZE_MAX = 4.0
SPIN_MAX = 0.25             # Intrinsic spin is drawn from [-SPIN_MAX, SPIN_MAX).
RESPAWN_Y = -10.0           # Recycled flakes enter just above the top edge.
HORIZONTAL_MARGIN = 50.0    # Dead zone beyond the left/right edges.
BOTTOM_MARGIN = 10.0        # Dead zone below the bottom edge.

# --- Orientation ---
ALIGNMENT_RATE = 2.0        # How fast a flake turns towards its velocity (1/s).

# --- Quantum Variant ---
QUANTUM_SCALE = 5.0
TUNNEL_BAND = 20.0          # Height of the band above the bottom edge.
TUNNEL_PROBABILITY = 0.01

# --- Default Tunables ---
DEFAULT_GRAVITY = 30.0
DEFAULT_WIND_STRENGTH = 10.0
DEFAULT_QUANTUM_FACTOR = 0.5
DEFAULT_DRAG = 0.05
DEFAULT_TURBULENCE = 2.0

# --- Frame Scheduling ---
# Largest time step fed to the physics, in seconds. Frames that arrive later
# (window dragged, machine suspended) are clamped to this.
DEFAULT_MAX_DELTA_TIME = 0.1

# --- UI Panel ---
UI_PANEL_WIDTH = 260
UI_PANEL_MARGIN = 16
UI_BACKGROUND_ALPHA = 100
