"""Command-line interface and run loop."""

from __future__ import annotations

import argparse
import json
import logging
import os
import random
import time
from pathlib import Path
from typing import Callable, Optional

from . import config
from .config import ConfigError
from .game import SnakeGame
from .render import TerminalRenderer, WindowRenderer, describe
from .rules import Axis, Turn, collision_reason, compute_candidate, parse_key, resolve, turn_to_direction

logger = logging.getLogger(__name__)

MODES = ("terminal", "window", "auto")


def _open_jsonl(path: Optional[str]):
    if not path:
        return None
    p = Path(path)
    p.parent.mkdir(parents=True, exist_ok=True)
    return p.open("a", encoding="utf-8")


def _layout_for(grid_size: Optional[int]) -> dict:
    """Starting body and treats for a board, centered when the size is overridden."""
    if grid_size is None or grid_size == config.GRID_SIZE:
        return {}
    mid = (grid_size - 1) // 2
    return {"body": [(mid, mid), (mid + 1, mid)], "treats": []}


def _auto_turn(game: SnakeGame, rng: random.Random) -> Turn:
    """Pick a random turn, preferring one that does not end the game."""
    options = [Turn.NONE, Turn.FIRST, Turn.SECOND]
    rng.shuffle(options)
    state = game.state
    for turn in options:
        heading = resolve(state.direction, turn_to_direction(state.direction, turn))
        candidate = compute_candidate(state.body, heading)
        growing = candidate in state.treats
        if collision_reason(candidate, state.body, state.grid_size, growing=growing) is None:
            return turn
    return options[0]


def _prompt_for(game: SnakeGame) -> str:
    if game.state.direction.axis is Axis.VERTICAL:
        return "Enter A or D to change direction."
    return "Enter W or S to change direction."


def run(
    num_games: int,
    mode: str = "auto",
    seed: Optional[int] = None,
    max_steps: Optional[int] = None,
    log_jsonl: Optional[str] = None,
    grid_size: Optional[int] = None,
    spawn_chance: Optional[float] = None,
    reader: Callable[[], str] = input,
) -> int:
    if mode not in MODES:
        raise ValueError(f"unknown mode {mode!r}; expected one of {MODES}")

    config_snapshot = {
        "MAX_STEPS_PER_GAME": config.MAX_STEPS_PER_GAME,
    }
    if max_steps is not None:
        config.MAX_STEPS_PER_GAME = int(max_steps)

    jsonl_f = None
    window = None
    try:
        config.validate_config()

        try:
            game = SnakeGame(grid_size=grid_size, spawn_chance=spawn_chance, seed=seed, **_layout_for(grid_size))
        except ConfigError as exc:
            logger.error("Invalid game settings: %s", exc)
            return 1
        turn_rng = random.Random(None if seed is None else seed + 1)
        terminal = TerminalRenderer() if mode == "terminal" else None
        if mode == "window":
            window = WindowRenderer(game.state.grid_size)

        jsonl_f = _open_jsonl(log_jsonl)
        scores: list[int] = []
        t0 = time.time()

        for i in range(num_games):
            if i > 0:
                game.reset()
            start_game_time = time.time()

            while not game.game_over:
                if game.state.steps >= config.MAX_STEPS_PER_GAME:
                    logger.info(
                        "Reached per-game step cap (%d); ending game",
                        config.MAX_STEPS_PER_GAME,
                    )
                    break

                if terminal is not None:
                    terminal.draw(game.frame(), describe(game.state))
                    request = parse_key(terminal.ask(_prompt_for(game), reader))
                elif window is not None:
                    window.draw(game.frame())
                    request = window.poll()
                else:
                    request = _auto_turn(game, turn_rng)

                game.tick(request)

                if mode == "auto" and not game.game_over and game.state.steps % config.PROGRESS_LOG_INTERVAL == 0:
                    logger.info(
                        "Game %d | Step %d | Score %d | Length %d",
                        i + 1,
                        game.state.steps,
                        game.state.score,
                        len(game.state.body),
                    )

            if window is not None:
                window.draw(game.frame())
            if terminal is not None:
                terminal.draw(game.frame(), describe(game.state))

            state = game.state
            scores.append(state.score)
            elapsed_game = time.time() - start_game_time
            logger.info(
                "Game %d/%d: Score=%d Steps=%d Length=%d Reason=%s (%.2fs)",
                i + 1,
                num_games,
                state.score,
                state.steps,
                len(state.body),
                state.terminal_reason or "step_cap",
                elapsed_game,
            )
            if jsonl_f is not None:
                row = {
                    "ts": time.time(),
                    "episode": i + 1,
                    "score": state.score,
                    "steps": state.steps,
                    "length": len(state.body),
                    "reason": state.terminal_reason,
                    "seed": seed,
                    "mode": mode,
                    "board": int(state.grid_size),
                }
                jsonl_f.write(json.dumps(row) + "\n")
                jsonl_f.flush()

        if scores:
            logger.info(
                "Session: avg=%.2f max=%d games=%d (%.2fs)",
                sum(scores) / len(scores),
                max(scores),
                len(scores),
                time.time() - t0,
            )
        return 0
    except KeyboardInterrupt:
        logger.info("Interrupted; exiting")
        return 130
    except EOFError:
        logger.info("Input closed; exiting")
        return 130
    finally:
        if jsonl_f is not None:
            jsonl_f.close()
        if window is not None:
            window.close()
        for attr, value in config_snapshot.items():
            setattr(config, attr, value)


def main(argv: Optional[list[str]] = None) -> int:
    # Ensure pygame banner stays hidden even when importing via `gridsnake.cli`.
    os.environ.setdefault("PYGAME_HIDE_SUPPORT_PROMPT", "1")

    parser = argparse.ArgumentParser(description="Grid Snake")
    parser.add_argument(
        "--mode",
        choices=MODES,
        default="terminal",
        help="terminal: prompt for W/A/S/D each tick; window: pygame window; auto: headless random play",
    )
    parser.add_argument("--num-games", "--games", type=int, default=1, help="Number of games to run")
    parser.add_argument("--seed", type=int, default=None, help="Random seed for reproducibility")
    parser.add_argument("--max-steps", type=int, default=None, help="Per-game step cap (safety)")
    parser.add_argument("--grid-size", type=int, default=None, help="Board side length (default: config.GRID_SIZE)")
    parser.add_argument(
        "--spawn-chance",
        type=float,
        default=None,
        help="Per-tick treat spawn probability (default: config.SPAWN_CHANCE)",
    )
    parser.add_argument(
        "--log-jsonl",
        type=str,
        default=None,
        help="Append per-game results to a JSONL file (e.g. runs/session.jsonl)",
    )
    parser.add_argument("--debug", action="store_true", help="Enable DEBUG logging")

    args = parser.parse_args(argv)
    if args.debug:
        logging.getLogger().setLevel(logging.DEBUG)

    return run(
        num_games=args.num_games,
        mode=args.mode,
        seed=args.seed,
        max_steps=args.max_steps,
        log_jsonl=args.log_jsonl,
        grid_size=args.grid_size,
        spawn_chance=args.spawn_chance,
    )


if __name__ == "__main__":
    raise SystemExit(main())
