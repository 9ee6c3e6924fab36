# Simulation Configuration

# Canvas Settings
CANVAS_WIDTH = 900.0
CANVAS_HEIGHT = 600.0
INTERSECTION_HALF_SIZE = 45.0  # Distance from intersection center to stop line
LANE_OFFSET = 28.0             # Lane center distance from the road axis
SPAWN_OFFSET = 140.0           # Off-canvas distance for entry and exit points

# Signal Timings
BASE_GREEN_MIN = 5.0
YELLOW_DURATION = 2.0

# Fixed-time policy
FIXED_PHASE_DURATION = 8.0

# Green-wave policy
GREEN_WAVE_BASE_DURATION = 8.0
GREEN_WAVE_EXTENSION = 4.0
GREEN_WAVE_MIN_DURATION = 5.0
GREEN_WAVE_BUSY_QUEUE = 3

# Max-pressure policy
MAX_PRESSURE_MIN_HOLD = 3.0
MAX_PRESSURE_MAX_HOLD = 12.0
MAX_PRESSURE_THRESHOLD = 2

# Vehicle Physics
CAR_SPEED = 90.0          # units/s, constant
CAR_LENGTH = 26.0
CAR_WIDTH = 16.0
MIN_GAP = 6.0             # Minimum gap between vehicles

# Spawning
SPAWN_INTERVAL_MIN = 1.0
SPAWN_INTERVAL_MAX = 5.0
WAVE_SIZE_MIN = 1
WAVE_SIZE_MAX = 3
WAVE_GAP_MIN = 50.0
WAVE_GAP_MAX = 200.0
CAR_PALETTE = (
    "dodgerblue", "orange", "crimson",
    "seagreen", "goldenrod", "mediumpurple",
)

# Statistics
SAMPLE_INTERVAL = 1.0     # Simulated seconds between chart samples

# Runtime
TICK_RATE = 20            # Served loop frequency (Hz)
DEFAULT_SEED = 42
