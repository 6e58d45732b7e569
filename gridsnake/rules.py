from __future__ import annotations

from enum import Enum
from typing import Any, Deque, Optional, Sequence, Set, Tuple

Cell = Tuple[int, int]
# Same shape as Cell, but components may be negative or >= grid size.
Candidate = Tuple[int, int]


class InvariantViolation(RuntimeError):
    """The body was empty where a head or tail is required. Indicates a defect."""


class CoordinateRangeError(ValueError):
    """A coordinate could not be represented as an in-grid cell."""


class Axis(Enum):
    VERTICAL = "vertical"
    HORIZONTAL = "horizontal"


class Direction(Enum):
    UP = (-1, 0)
    DOWN = (1, 0)
    LEFT = (0, -1)
    RIGHT = (0, 1)

    @property
    def axis(self) -> Axis:
        return Axis.VERTICAL if self in (Direction.UP, Direction.DOWN) else Axis.HORIZONTAL

    @classmethod
    def from_name(cls, raw: str) -> "Direction":
        try:
            return cls[str(raw).strip().upper()]
        except KeyError as e:
            raise ValueError(f"invalid direction: {raw!r}") from e


class Turn(Enum):
    FIRST = "first"
    SECOND = "second"
    NONE = "none"


# Perpendicular choices per axis, in (FIRST, SECOND) order.
PERPENDICULAR = {
    Axis.VERTICAL: (Direction.LEFT, Direction.RIGHT),
    Axis.HORIZONTAL: (Direction.UP, Direction.DOWN),
}

KEYMAP = {
    "W": Direction.UP,
    "A": Direction.LEFT,
    "S": Direction.DOWN,
    "D": Direction.RIGHT,
}


def resolve(current: Direction, requested: Any) -> Direction:
    """Return the direction of travel after a turn request.

    Only perpendicular turns are honored. Absent, unrecognized and same-axis
    requests (reversals included) leave ``current`` unchanged.
    """
    if not isinstance(requested, Direction):
        return current
    if requested.axis is current.axis:
        return current
    return requested


def turn_to_direction(current: Direction, turn: Any) -> Optional[Direction]:
    if turn is Turn.FIRST:
        return PERPENDICULAR[current.axis][0]
    if turn is Turn.SECOND:
        return PERPENDICULAR[current.axis][1]
    return None


def parse_key(raw: Any) -> Optional[Direction]:
    if not isinstance(raw, str):
        return None
    return KEYMAP.get(raw.strip().upper())


def head(body: Sequence[Cell]) -> Cell:
    if not body:
        raise InvariantViolation("snake body is empty")
    return body[0]


def tail(body: Sequence[Cell]) -> Cell:
    if not body:
        raise InvariantViolation("snake body is empty")
    return body[-1]


def to_cell(candidate: Candidate) -> Cell:
    """Reinterpret a signed candidate as an unsigned cell."""
    row, col = candidate
    if row < 0 or col < 0:
        raise CoordinateRangeError(f"candidate {candidate!r} has a negative component")
    return (int(row), int(col))


def in_bounds(candidate: Candidate, grid_size: int) -> bool:
    row, col = candidate
    return 0 <= row < grid_size and 0 <= col < grid_size


def compute_candidate(body: Sequence[Cell], direction: Direction) -> Candidate:
    """Return the head offset one cell in ``direction``. No bounds validation."""
    row, col = head(body)
    d_row, d_col = direction.value
    return (row + d_row, col + d_col)


def collision_reason(
    candidate: Candidate,
    body: Sequence[Cell],
    grid_size: int,
    *,
    growing: bool = False,
) -> Optional[str]:
    """Return "wall", "self" or None for a candidate head.

    The current tail is exempt from the self check because it vacates its cell
    during the same update. With ``growing=True`` the tail stays put, so it is
    no longer exempt.
    """
    if not in_bounds(candidate, grid_size):
        return "wall"

    cell = to_cell(candidate)
    if cell not in body:
        return None
    if not growing and cell == tail(body):
        return None
    return "self"


def is_terminal(
    candidate: Candidate,
    body: Sequence[Cell],
    grid_size: int,
    *,
    growing: bool = False,
) -> bool:
    return collision_reason(candidate, body, grid_size, growing=growing) is not None


def apply_update(body: Deque[Cell], treats: Set[Cell], candidate: Candidate) -> bool:
    """Advance the body onto ``candidate``, consuming a treat if one is there.

    Returns True when a treat was eaten (the body grew by one).
    """
    cell = to_cell(candidate)
    if not body:
        raise InvariantViolation("snake body is empty")

    body.appendleft(cell)
    if cell in treats:
        treats.discard(cell)
        return True
    body.pop()
    return False
