"""Game state and the per-tick orchestrator."""

from __future__ import annotations

import logging
import random
from collections import deque
from dataclasses import dataclass
from typing import Any, Deque, Iterable, Optional, Set, Union

from . import config
from .config import ConfigError
from .grid import Grid, render
from .rules import (
    Candidate,
    Cell,
    Direction,
    Turn,
    apply_update,
    collision_reason,
    compute_candidate,
    in_bounds,
    resolve,
    turn_to_direction,
)
from .spawner import maybe_spawn

logger = logging.getLogger(__name__)


@dataclass
class GameState:
    body: Deque[Cell]
    treats: Set[Cell]
    direction: Direction
    grid_size: int
    spawn_chance: float = config.SPAWN_CHANCE
    max_spawn_attempts: int = config.MAX_SPAWN_ATTEMPTS
    game_over: bool = False
    # "wall" or "self" once game_over is set.
    terminal_reason: Optional[str] = None
    score: int = 0
    steps: int = 0


@dataclass(frozen=True)
class TickOutcome:
    candidate: Optional[Candidate]
    game_over: bool
    ate: bool = False
    spawned: Optional[Cell] = None
    reason: Optional[str] = None


def _coerce_direction(direction: Union[Direction, str]) -> Direction:
    if isinstance(direction, Direction):
        return direction
    try:
        return Direction.from_name(direction)
    except ValueError as e:
        raise ConfigError(str(e)) from e


def new_game(
    grid_size: Optional[int] = None,
    body: Optional[Iterable[Cell]] = None,
    treats: Optional[Iterable[Cell]] = None,
    direction: Union[Direction, str, None] = None,
    spawn_chance: Optional[float] = None,
    max_spawn_attempts: Optional[int] = None,
) -> GameState:
    """Build a validated GameState, filling unset values from config."""
    grid_size = config.GRID_SIZE if grid_size is None else int(grid_size)
    spawn_chance = config.SPAWN_CHANCE if spawn_chance is None else float(spawn_chance)
    max_spawn_attempts = config.MAX_SPAWN_ATTEMPTS if max_spawn_attempts is None else int(max_spawn_attempts)
    cells = [tuple(c) for c in (config.INITIAL_BODY if body is None else body)]
    treat_cells = [tuple(c) for c in (config.INITIAL_TREATS if treats is None else treats)]
    heading = _coerce_direction(config.INITIAL_DIRECTION if direction is None else direction)

    if grid_size < 2:
        raise ConfigError(f"grid size must be >= 2, got {grid_size}")
    if not 0.0 <= spawn_chance <= 1.0:
        raise ConfigError(f"spawn chance must be within [0, 1], got {spawn_chance}")
    if max_spawn_attempts < 1:
        raise ConfigError(f"max spawn attempts must be >= 1, got {max_spawn_attempts}")

    if len(cells) < 2:
        raise ConfigError("initial body must hold at least two cells")
    if len(set(cells)) != len(cells):
        raise ConfigError("initial body cells must be unique")
    for cell in cells:
        if not in_bounds(cell, grid_size):
            raise ConfigError(f"body cell {cell!r} is outside the grid")
    for prev, nxt in zip(cells, cells[1:]):
        if abs(prev[0] - nxt[0]) + abs(prev[1] - nxt[1]) != 1:
            raise ConfigError(f"body cells {prev!r} and {nxt!r} are not adjacent")

    for cell in treat_cells:
        if not in_bounds(cell, grid_size):
            raise ConfigError(f"treat {cell!r} is outside the grid")
        if cell in cells:
            raise ConfigError(f"treat {cell!r} overlaps the body")

    if compute_candidate(cells, heading) == cells[1]:
        raise ConfigError(f"initial direction {heading.name} points back into the body")

    return GameState(
        body=deque(cells),
        treats=set(treat_cells),
        direction=heading,
        grid_size=grid_size,
        spawn_chance=spawn_chance,
        max_spawn_attempts=max_spawn_attempts,
    )


class SnakeGame:
    """Owns one GameState and advances it exactly once per tick."""

    def __init__(
        self,
        grid_size: Optional[int] = None,
        body: Optional[Iterable[Cell]] = None,
        treats: Optional[Iterable[Cell]] = None,
        direction: Union[Direction, str, None] = None,
        spawn_chance: Optional[float] = None,
        max_spawn_attempts: Optional[int] = None,
        seed: Optional[int] = None,
        rng: Optional[random.Random] = None,
    ) -> None:
        self.seed = seed
        self.rng = rng if rng is not None else random.Random(seed)
        self._settings = dict(
            grid_size=grid_size,
            body=None if body is None else list(body),
            treats=None if treats is None else list(treats),
            direction=direction,
            spawn_chance=spawn_chance,
            max_spawn_attempts=max_spawn_attempts,
        )
        self.reset()

    def reset(self) -> None:
        self.state = new_game(**self._settings)

    @property
    def game_over(self) -> bool:
        return self.state.game_over

    def frame(self) -> Grid:
        return render(self.state.body, self.state.treats, self.state.grid_size)

    def tick(self, request: Any = None) -> TickOutcome:
        """Run one step: turn, candidate, termination check, update, spawn.

        ``request`` may be a Direction, a Turn, or anything else (treated as no change).
        """
        state = self.state
        if state.game_over:
            return TickOutcome(candidate=None, game_over=True, reason=state.terminal_reason)

        if isinstance(request, Turn):
            request = turn_to_direction(state.direction, request)
        state.direction = resolve(state.direction, request)

        candidate = compute_candidate(state.body, state.direction)
        growing = candidate in state.treats
        reason = collision_reason(candidate, state.body, state.grid_size, growing=growing)
        if reason is not None:
            state.game_over = True
            state.terminal_reason = reason
            logger.info(
                "Game over (%s) at %r: score=%d length=%d steps=%d",
                reason,
                candidate,
                state.score,
                len(state.body),
                state.steps,
            )
            return TickOutcome(candidate=candidate, game_over=True, reason=reason)

        ate = apply_update(state.body, state.treats, candidate)
        if ate:
            state.score += 1
        state.steps += 1

        spawned = maybe_spawn(
            state.treats,
            state.body,
            state.grid_size,
            spawn_chance=state.spawn_chance,
            rng=self.rng,
            max_attempts=state.max_spawn_attempts,
        )
        return TickOutcome(candidate=candidate, game_over=False, ate=ate, spawned=spawned)
