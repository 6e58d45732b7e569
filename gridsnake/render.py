"""Terminal and pygame front-ends for the marker grid."""

from __future__ import annotations

import sys
from typing import Any, Callable, Optional, TextIO

from . import config
from .grid import Grid, Marker, format_grid
from .rules import Direction


def _import_pygame():
    import os
    os.environ.setdefault("PYGAME_HIDE_SUPPORT_PROMPT", "1")
    import pygame  # type: ignore
    return pygame


class TerminalRenderer:
    """Redraws the grid in place using ANSI cursor movement."""

    def __init__(self, stream: Optional[TextIO] = None) -> None:
        self.stream = stream or sys.stdout
        self._drawn_lines = 0

    def draw(self, grid: Grid, status: str = "") -> None:
        if self._drawn_lines:
            self.stream.write(f"\x1b[{self._drawn_lines}A")
        text = format_grid(grid)
        lines = text.count("\n") + 1
        if status:
            text += "\n\x1b[2K" + status
            lines += 1
        self.stream.write(text + "\n")
        self.stream.flush()
        self._drawn_lines = lines

    def ask(self, prompt: str, reader: Callable[[], str] = input) -> str:
        """Print a prompt under the grid and read one line of input."""
        self.stream.write("\x1b[2K" + prompt + "\n")
        self.stream.flush()
        answer = reader()
        # Prompt line plus the echoed input line.
        self._drawn_lines += 2
        return answer


class WindowRenderer:
    """Minimal pygame window: one filled square per occupied cell."""

    COLORS = {
        Marker.EMPTY: (20, 20, 30),
        Marker.TREAT: (255, 80, 80),
        Marker.SNAKE: (0, 200, 120),
    }

    KEYS = {
        "K_UP": Direction.UP,
        "K_w": Direction.UP,
        "K_DOWN": Direction.DOWN,
        "K_s": Direction.DOWN,
        "K_LEFT": Direction.LEFT,
        "K_a": Direction.LEFT,
        "K_RIGHT": Direction.RIGHT,
        "K_d": Direction.RIGHT,
    }

    def __init__(self, grid_size: int, cell_pixels: int = config.CELL_PIXELS, fps: int = config.FPS) -> None:
        self.pygame = _import_pygame()
        self.pygame.init()
        self.cell_pixels = int(cell_pixels)
        self.fps = int(fps)
        side = grid_size * self.cell_pixels
        self.screen = self.pygame.display.set_mode((side, side))
        self.pygame.display.set_caption("Snake")
        self.clock = self.pygame.time.Clock()
        self._keymap = {getattr(self.pygame, name): direction for name, direction in self.KEYS.items()}

    def poll(self) -> Optional[Direction]:
        """Drain pending events; return the last direction key pressed.

        Raises KeyboardInterrupt when the window is closed or ESC is pressed.
        """
        pg = self.pygame
        requested: Optional[Direction] = None
        for event in pg.event.get():
            if event.type == pg.QUIT:
                raise KeyboardInterrupt
            if event.type == pg.KEYDOWN:
                if event.key == pg.K_ESCAPE:
                    raise KeyboardInterrupt
                requested = self._keymap.get(event.key, requested)
        return requested

    def draw(self, grid: Grid) -> None:
        pg = self.pygame
        self.screen.fill(self.COLORS[Marker.EMPTY])
        size = self.cell_pixels
        for r, row in enumerate(grid):
            for c, marker in enumerate(row):
                if marker is Marker.EMPTY:
                    continue
                rect = pg.Rect(c * size, r * size, size, size)
                pg.draw.rect(self.screen, self.COLORS[marker], rect)
        pg.display.flip()
        self.clock.tick(self.fps)

    def close(self) -> None:
        self.pygame.quit()


def describe(state: Any) -> str:
    return f"Score: {state.score}  Length: {len(state.body)}  Heading: {state.direction.name}"
