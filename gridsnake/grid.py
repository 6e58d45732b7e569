from __future__ import annotations

from enum import Enum
from typing import Iterable, List

from . import config
from .rules import Cell, CoordinateRangeError, in_bounds


class Marker(str, Enum):
    EMPTY = config.MARKER_EMPTY
    TREAT = config.MARKER_TREAT
    SNAKE = config.MARKER_SNAKE


Grid = List[List[Marker]]


def _place(grid: Grid, cell: Cell, marker: Marker, grid_size: int) -> None:
    if not in_bounds(cell, grid_size):
        raise CoordinateRangeError(f"cell {cell!r} is outside a {grid_size}x{grid_size} grid")
    row, col = cell
    grid[row][col] = marker


def render(body: Iterable[Cell], treats: Iterable[Cell], grid_size: int) -> Grid:
    """Project body and treats onto a fresh grid of markers.

    Treats are drawn first and the body on top of them.
    """
    grid: Grid = [[Marker.EMPTY] * grid_size for _ in range(grid_size)]
    for cell in treats:
        _place(grid, cell, Marker.TREAT, grid_size)
    for cell in body:
        _place(grid, cell, Marker.SNAKE, grid_size)
    return grid


def format_grid(grid: Grid) -> str:
    return "\n".join(" ".join(marker.value for marker in row) for row in grid)
