# --- Window ---
WIDTH, HEIGHT = 900, 600
FPS = 60
TITLE = "Magnet Simulation"

# --- Attraction rule ---
PULL_RADIUS = 200.0  # an active magnet only acts on particles closer than this
STEP_SIZE = 2.0      # distance a pulled particle moves per tick

# --- Interaction ---
DRAG_THRESHOLD = 4.0  # pointer travel that turns a press into a drag

# --- Entities ---
NORTH = 'north'
SOUTH = 'south'
MAGNET_RADIUS = 35
METAL_RADIUS = 20

INITIAL_MAGNETS = (
    {'id': 1, 'x': 100, 'y': 100, 'polarity': NORTH, 'rotation': 0.0, 'active': False},
    {'id': 2, 'x': 300, 'y': 200, 'polarity': SOUTH, 'rotation': 0.0, 'active': False},
)
INITIAL_PARTICLES = (
    {'id': 1, 'x': 400, 'y': 400},
    {'id': 2, 'x': 600, 'y': 150},
)

# --- Colors ---
WHITE = (255, 255, 255)
BLACK = (0, 0, 0)
BACKGROUND = (242, 242, 242)
TEXT_COLOR = (51, 51, 51)
INFO_COLOR = (85, 85, 85)
NORTH_COLOR = (255, 45, 85)
SOUTH_COLOR = (0, 122, 255)
METAL_COLOR = (176, 176, 176)
ACTIVE_RING = (255, 204, 0)
SHADOW = (210, 210, 210)

# --- Logging ---
LOG_THROTTLE_TICKS = 300
DEFAULT_CONFIG_PATH = 'config.json'
