from __future__ import annotations

from typing import Dict, List, Tuple

import numpy as np

from .types import InvalidCoordinateError, PieceState, Point, Position

BOARD_W: int = 7
BOARD_H: int = 7
CELLS: int = BOARD_W * BOARD_H

# Win/loss thresholds
STALL_TARGET: int = 9
MIN_CHICKENS: int = 9
MIN_FOXES: int = 1

# -----------------------------
# Board indexing and utilities
# -----------------------------
VALID_CELLS: List[Position] = []  # row-major: y outer, x inner
VALID_MASK: np.ndarray = np.zeros(CELLS, dtype=np.bool_)


def idx(x: int, y: int) -> int:
    return y * BOARD_W + x


def xy(i: int) -> Position:
    return i % BOARD_W, i // BOARD_W


def is_valid_cell(x: int, y: int) -> bool:
    """A cell is valid unless it lies in one of the four 2x2 corner blocks."""
    if x < 0 or x >= BOARD_W or y < 0 or y >= BOARD_H:
        return False
    return not ((x <= 1 or x >= 5) and (y <= 1 or y >= 5))


def _build_mappings() -> None:
    for y in range(BOARD_H):
        for x in range(BOARD_W):
            if is_valid_cell(x, y):
                VALID_CELLS.append((x, y))
                VALID_MASK[idx(x, y)] = True
    VALID_MASK.setflags(write=False)


_build_mappings()


def require_valid(point: Point) -> Point:
    if not is_valid_cell(point.x, point.y):
        raise InvalidCoordinateError(point.x, point.y)
    return point


def connected_cells(x: int, y: int, orthogonal_only: bool) -> List[Position]:
    """Valid neighbours of (x, y) in the fixed adjacency order.

    Chickens (``orthogonal_only``) never get the backward cell or diagonals.
    Diagonal lines only run through cells where x + y is even.
    """
    pts: List[Position] = [(x - 1, y), (x + 1, y), (x, y - 1)]
    if not orthogonal_only:
        pts.append((x, y + 1))
        if (x + y) % 2 == 0:
            pts.extend([(x + 1, y + 1), (x - 1, y + 1), (x + 1, y - 1), (x - 1, y - 1)])
    return [p for p in pts if is_valid_cell(*p)]


# Adjacency is fixed, so both variants are precomputed per flat index.
_NEIGHBORS: Dict[bool, Tuple[Tuple[int, ...], ...]] = {
    flag: tuple(
        tuple(idx(nx, ny) for nx, ny in connected_cells(*xy(i), flag)) if VALID_MASK[i] else ()
        for i in range(CELLS)
    )
    for flag in (True, False)
}


def neighbor_indices(i: int, orthogonal_only: bool) -> Tuple[int, ...]:
    return _NEIGHBORS[orthogonal_only][i]


def is_stall_cell(x: int, y: int) -> bool:
    """The stall is the two top rows plus the three central cells of the third."""
    return y <= 1 or (y == 2 and 2 <= x <= 4)


STALL_CELLS: Tuple[Position, ...] = tuple(p for p in VALID_CELLS if is_stall_cell(*p))
STALL_INDICES: np.ndarray = np.array([idx(x, y) for x, y in STALL_CELLS], dtype=np.intp)

FOX_START: Tuple[Position, ...] = ((2, 2), (4, 2))


def start_state_for(x: int, y: int) -> PieceState:
    """Initial position: chickens fill rows 3..6, foxes sit at (2,2) and (4,2)."""
    if y >= 3:
        return PieceState.CHICKEN
    if (x, y) in FOX_START:
        return PieceState.FOX
    return PieceState.EMPTY
