# Board dimension bounds (inclusive) and defaults used when command line input is missing.
MIN_DIMENSION = 5
MAX_DIMENSION = 16
MIN_COLORS = 2
MAX_COLORS = 8

DEFAULT_ROWS = 10
DEFAULT_COLS = 10
DEFAULT_NUM_COLORS = 4

# A run qualifies for removal at this length.
MIN_RUN_LENGTH = 3

# Seconds between cascade steps while a cascade is running.
CASCADE_TICK_INTERVAL = 0.5

# Canonical jewel palette in spawn order; a board with N colors uses the first N entries.
JEWEL_COLORS = {
    'red':       (255, 0, 0),
    'green':     (0, 255, 0),
    'blue':      (0, 0, 255),
    'gray':      (128, 128, 128),
    'magenta':   (255, 0, 255),
    'cyan':      (0, 255, 255),
    'dark_gray': (64, 64, 64),
    'pink':      (255, 175, 175),
}
PALETTE = list(JEWEL_COLORS.keys())

# ============================================================================
# WINDOW & LAYOUT
# ============================================================================
TILE_SIZE = 50
# Height of the bar under the board holding the New Game button and the move counter.
BOTTOM_MARGIN = 50
MIN_TILE_SIZE = 20
# Inset of the jewel diamond from the tile edge.
JEWEL_INSET = 10
# Inset of the tile background when the tile is selected.
SELECTED_INSET = 4

WINDOW_TITLE = "Jewels"
NEW_GAME_LABEL = "New Game"
NEW_GAME_BUTTON_WIDTH = 140
NEW_GAME_BUTTON_HEIGHT = 34

TILE_COLOR = (255, 255, 255)
CLEARED_TILE_COLOR = (255, 255, 0)
SELECTED_BACKGROUND = (192, 192, 192)
JEWEL_OUTLINE_COLOR = (0, 0, 0)
