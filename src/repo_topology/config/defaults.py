"""Default configuration values for repo-topology."""

# Node id conventions
PATH_SEPARATOR = "/"
ROOT_GROUP = "(root)"  # Group/directory of ids without a separator
PROJECT_ROOT_LABEL = "(project)"  # Synthetic super-root of the forest

# Colour palette for directory groups (d3.schemeTableau10)
TABLEAU10 = [
    "#4e79a7",
    "#f28e2c",
    "#e15759",
    "#76b7b2",
    "#59a14f",
    "#edc949",
    "#af7aa1",
    "#ff9da7",
    "#9c755f",
    "#bab0ab",
]

# Force view
NODE_RADIUS_RANGE = (4.0, 16.0)  # px, sqrt-scaled over [0, max degree]
COLLISION_PADDING = 8.0  # px added to the node radius for collision
LINK_DISTANCE = 120.0  # px target link length
CHARGE_STRENGTH = -400.0  # Many-body repulsion (negative = repel)
ALPHA_START = 1.0
ALPHA_MIN = 0.001
ALPHA_DECAY = 1 - ALPHA_MIN ** (1 / 300)  # ~300 ticks to settle
DRAG_ALPHA_TARGET = 0.3
TICK_INTERVAL = 1 / 60  # seconds between simulation ticks

# Tree view
TREE_ROW_HEIGHT = 22.0  # Minimum vertical px per leaf
TREE_VERTICAL_MARGIN = 40.0
TREE_HORIZONTAL_MARGIN = 200.0
TREE_TRANSLATE = (40.0, 20.0)
TREE_NODE_RADIUS = 4.0
TREE_INTERNAL_COLOR = "#6366f1"
TREE_LEAF_COLOR = "#22c55e"

# Search highlighting
MATCHED_OPACITY = 1.0
UNMATCHED_OPACITY = 0.15
DIMMED_EDGE_OPACITY = 0.08

# View controller
FULLSCREEN_SETTLE_DELAY = 0.05  # seconds to wait for the new container size
DEFAULT_CONTAINER_SIZE = (960, 640)
ESCAPE_KEY = "Escape"

# Session server
DEFAULT_PORT_RANGE = (8080, 8099)
DEFAULT_HOST = "127.0.0.1"
