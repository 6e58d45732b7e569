"""Central configuration for the grid snake game."""

from __future__ import annotations

import logging
import sys

# Logging
DEFAULT_LOG_FORMAT = "%(asctime)s - %(name)-12s - %(levelname)-8s - %(message)s"


def configure_logging(level: int = logging.INFO) -> None:
    """Configure root logging if the host application has not done so already.

    This keeps the package library-friendly (it will not override an existing logging setup),
    while preserving CLI ergonomics.
    """
    root = logging.getLogger()
    if root.handlers:
        return
    logging.basicConfig(level=level, format=DEFAULT_LOG_FORMAT, stream=sys.stdout)


configure_logging()

logger = logging.getLogger("gridsnake")


class ConfigError(ValueError):
    """Raised when a game is constructed from invalid settings."""


# ----------------------------
# Board & treats
# ----------------------------
GRID_SIZE = 10
SPAWN_CHANCE = 0.10
# Rejection sampling gives up after this many draws and skips the spawn for the tick.
MAX_SPAWN_ATTEMPTS = 256

# Coordinates are (row, col); head first.
INITIAL_BODY = ((5, 5), (6, 5))
INITIAL_TREATS = ((3, 4),)
INITIAL_DIRECTION = "UP"

# Markers
MARKER_EMPTY = "."
MARKER_TREAT = "*"
MARKER_SNAKE = "X"

# ----------------------------
# Shell / rendering
# ----------------------------
CELL_PIXELS = 40
FPS = 6

# Safety cap for unattended runs
MAX_STEPS_PER_GAME = 2000
PROGRESS_LOG_INTERVAL = 200


def validate_config() -> None:
    """Basic sanity checks."""
    ok = True
    if GRID_SIZE < 2:
        logger.error("GRID_SIZE must be >= 2")
        ok = False
    if not 0.0 <= SPAWN_CHANCE <= 1.0:
        logger.error("SPAWN_CHANCE must be within [0, 1]")
        ok = False
    if MAX_SPAWN_ATTEMPTS < 1:
        logger.error("MAX_SPAWN_ATTEMPTS must be >= 1")
        ok = False
    if len(INITIAL_BODY) < 2:
        logger.error("INITIAL_BODY must hold at least two cells")
        ok = False
    if MAX_STEPS_PER_GAME < 1:
        logger.error("MAX_STEPS_PER_GAME must be >= 1")
        ok = False
    if FPS <= 0:
        logger.error("FPS must be > 0")
        ok = False
    if not ok:
        raise SystemExit(1)
