"""Core game constants.

These defaults are shared across headless and interactive runs.
"""

BOARD_WIDTH = 360             # Window width in pixels
BOARD_HEIGHT = 640            # Window height in pixels

BIRD_X = BOARD_WIDTH // 8     # Fixed horizontal position of the bird
BIRD_Y = BOARD_WIDTH // 2     # Starting height of the bird
BIRD_WIDTH = 34
BIRD_HEIGHT = 24

PIPE_WIDTH = 64
PIPE_HEIGHT = 512

SCROLL_VELOCITY = -4          # Horizontal pipe speed (pixels/tick)
GRAVITY = 1                   # Downward acceleration (pixels/tick^2)
IMPULSE_VELOCITY = -9         # Vertical velocity set by a flap (pixels/tick)

TICK_RATE = 60                # Fixed simulation ticks per second
SPAWN_INTERVAL_MS = 1500      # Pipe pair spawn period
BATCH_MAX_TICKS = 60 * TICK_RATE  # Tick cap per batch run (one minute of game time)

IMAGES_DIR = "images"
FONT_SIZE = 32
