import logging

# Screen settings
SCREEN_WIDTH = 1280
SCREEN_HEIGHT = 800
FPS = 60
WINDOW_TITLE = "A* Pathfinding Visualizer"

# Grid settings
# Fixed number of rows; the cell size follows from the grid height
GRID_ROWS = 40
# Height of the grid area in pixels
GRID_HEIGHT_PX = 800
# Minimum number of columns regardless of window width
MIN_COLS = 10
# Relative position of the default start and goal cells on each axis
START_FRACTION = 0.1
GOAL_FRACTION = 0.9

# Search settings
# Safety bound on expansions per run (not an algorithmic termination condition)
MAX_ITERATIONS = 5000
# Pause between visualized expansion steps (milliseconds)
STEP_DELAY_MS = 4.0
# Whether the pause between steps is applied at start-up
DELAY_ENABLED = True
# Upper bound on expansions performed in a single frame
MAX_STEPS_PER_TICK = 64

# Rendering settings
# Scores are only drawn on cells larger than this (pixels)
SCORE_TEXT_MIN_CELL = 15
# Font size for score text, relative to the cell size
SCORE_TEXT_SCALE = 0.4

# Colors
BACKGROUND_COLOR = (50, 50, 50)
GRID_LINE_COLOR = (0, 0, 0)
START_COLOR = (0, 255, 0)
GOAL_COLOR = (255, 0, 0)
PATH_COLOR = (0, 128, 0)
CLOSED_COLOR = (255, 150, 150)
OPEN_COLOR = (255, 255, 0)
OBSTACLE_COLOR = (100, 100, 100)
FREE_COLOR = (255, 255, 255)
SCORE_TEXT_COLOR = (0, 0, 0)

# Logging level used by main.py
LOG_LEVEL = logging.INFO
