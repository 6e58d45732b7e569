"""Probabilistic treat placement by rejection sampling."""

from __future__ import annotations

import logging
import random
from typing import Optional, Sequence, Set

from . import config
from .rules import Cell

logger = logging.getLogger(__name__)


def maybe_spawn(
    treats: Set[Cell],
    body: Sequence[Cell],
    grid_size: int,
    spawn_chance: float = config.SPAWN_CHANCE,
    rng: Optional[random.Random] = None,
    max_attempts: int = config.MAX_SPAWN_ATTEMPTS,
) -> Optional[Cell]:
    """Possibly add one treat on a cell the body does not occupy.

    One uniform draw in [0, 1) decides whether to spawn. If it does, random
    cells are drawn until one is free of the body, or until ``max_attempts``
    draws have been rejected, in which case the spawn is skipped for this tick.
    The chosen cell may already be a treat; inserting it again is a no-op.

    Returns the inserted cell, or None when nothing was inserted.
    """
    rng = rng or random.Random()
    if rng.random() >= spawn_chance:
        return None

    occupied = set(body)
    if len(occupied) >= grid_size * grid_size:
        logger.debug("Board saturated (%d cells); skipping treat spawn", len(occupied))
        return None

    for _ in range(max_attempts):
        cell = (rng.randrange(grid_size), rng.randrange(grid_size))
        if cell not in occupied:
            treats.add(cell)
            return cell

    logger.debug("No free cell after %d attempts; skipping treat spawn", max_attempts)
    return None
