"""
config.py — Shared constants for the entire application.
No logic, no imports from internal modules.
"""

import os
from dataclasses import dataclass

# ── Window & Grid ─────────────────────────────────────────────────
CELL            = 24
BOARD_ROWS      = 20
BOARD_COLS      = 20
PANEL_H         = 64
FOOTER_H        = 56
GAME_W, GAME_H  = BOARD_COLS * CELL, BOARD_ROWS * CELL
OFFSET_X        = 12
OFFSET_Y        = PANEL_H + 8
WIDTH           = GAME_W + OFFSET_X * 2
HEIGHT          = OFFSET_Y + GAME_H + FOOTER_H
FPS             = 60

# ── Colors ────────────────────────────────────────────────────────
BG          = (14,  18,  14)
BOARD_BG    = (24,  34,  24)
GRID_COL    = (36,  50,  36)
UI_COL      = (150, 170, 140)
TEXT_COL    = (245, 245, 220)
ACCENT_COL  = (255, 214, 90)
BLACK       = (0,   0,   0)
PANEL_BG    = (18,  24,  18)
BORDER_COL  = (60,  84,  60)

# ── Herbs (food) ──────────────────────────────────────────────────
RED, GREEN, BLUE = "red", "green", "blue"
CHANNELS = (RED, GREEN, BLUE)
CHANNEL_COLORS = {
    RED:   (230, 40,  40),
    GREEN: (40,  200, 60),
    BLUE:  (50,  90,  240),
}

FOOD_LIFETIME    = 12.0      # seconds a herb stays on the board
FOOD_FLASH_WINDOW = 3.0      # final seconds during which it flickers
FOOD_FLASH_HZ    = 3.0
FOOD_MIN, FOOD_MAX = 1, 3

COLOR_INCREMENT  = 0.05
COUNTDOWN_SECONDS = 5
INITIAL_LENGTH   = 3


# ── Difficulty ────────────────────────────────────────────────────
@dataclass(frozen=True)
class DifficultyProfile:
    key: str
    label: str
    description: str
    rows: int
    cols: int
    initial_tick: float
    accel_every: int
    accel_step: float
    min_tick: float
    end_message: str
    start_color: tuple
    polarity: int            # +1 eating a channel raises it, -1 lowers it
    music: str


NORMAL = DifficultyProfile(
    key="normal",
    label="NORMAL - HERB HARVEST",
    description="Gather herbs. Each one tints the snake toward its colour.",
    rows=BOARD_ROWS,
    cols=BOARD_COLS,
    initial_tick=0.30,
    accel_every=5,
    accel_step=0.005,
    min_tick=0.06,
    end_message="A full harvest today! Hiss~",
    start_color=(0.5, 0.8, 0.7),
    polarity=+1,
    music="music2",
)

ADVANCED = DifficultyProfile(
    key="advanced",
    label="ADVANCED - BLACK VENOM CURE",
    description="The snake starts poisoned black. Herbs draw the venom out.",
    rows=BOARD_ROWS,
    cols=BOARD_COLS,
    initial_tick=0.25,
    accel_every=5,
    accel_step=0.005,
    min_tick=0.05,
    end_message="Hiss~ feeling a little better",
    start_color=(0.15, 0.2, 0.18),
    polarity=-1,
    music="music3",
)

DIFFICULTIES = {
    NORMAL.key:   NORMAL,
    ADVANCED.key: ADVANCED,
}

# ── Game Phases ───────────────────────────────────────────────────
PHASE_COUNTDOWN = "countdown"
PHASE_RUNNING   = "running"
PHASE_PAUSED    = "paused"
PHASE_OVER      = "over"

# ── Screens (controller navigation) ───────────────────────────────
SCREEN_MENU    = "menu"
SCREEN_HISTORY = "history"
SCREEN_INTRO   = "intro"
SCREEN_GAME    = "game"

# ── Intro text (heading, paragraphs) ──────────────────────────────
INTRO_TAGLINE = (
    "The snake serves a travelling physician. "
    "Help it gather as many herbs as it can!"
)
INTRO_SECTIONS = (
    ("FEATURE", (
        "Every herb adds a little of its pigment to the snake. "
        "Try different mixes of red, green and blue herbs and watch the colour shift.",
    )),
    ("HOW TO PLAY", (
        "NORMAL - HERB HARVEST: guide the snake to as many herbs as you can. "
        "The more it gathers, the richer its colour becomes.",
        "ADVANCED - BLACK VENOM CURE: the snake has been poisoned and starts "
        "out black. Every herb brings its natural colour back a little.",
    )),
    ("WATCH OUT", (
        "The game ends as soon as the head hits a wall or the snake's own body.",
    )),
)

# ── Audio ─────────────────────────────────────────────────────────
MUSIC_DIR        = os.path.join(os.path.dirname(__file__), "music")
MUSIC_EXT        = ".mp3"
MENU_MUSIC       = "music1"
MUSIC_FADE_IN    = 5.0
MUSIC_VOLUME     = 1.0

# ── Persistence ───────────────────────────────────────────────────
SCORES_PATH = os.environ.get(
    "HERBSNAKE_SCORES",
    os.path.join(os.path.expanduser("~"), ".herbsnake_scores.json"),
)
