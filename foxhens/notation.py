from __future__ import annotations

from typing import List, Optional

from .geometry import BOARD_H, BOARD_W, is_valid_cell
from .types import Move, PieceState, Point

PIECE_CHARS = {
    PieceState.FOX: "F",
    PieceState.CHICKEN: "c",
    PieceState.EMPTY: ".",
}


def parse_point(s: str) -> Optional[Point]:
    """Parse ``"x-y"`` (or ``"x,y"``) into a Point; None when malformed or off the board."""
    parts: List[str] = [p for p in s.strip().replace(",", "-").split("-") if p]
    if len(parts) != 2:
        return None
    try:
        x, y = int(parts[0]), int(parts[1])
    except ValueError:
        return None
    if not is_valid_cell(x, y):
        return None
    return Point(x, y)


def parse_move_str(s: str) -> Optional[Move]:
    """Parse ``"x-y x-y"`` into a Move."""
    parts = s.split()
    if len(parts) != 2:
        return None
    frm, to = parse_point(parts[0]), parse_point(parts[1])
    if frm is None or to is None:
        return None
    return Move(frm, to)


def move_to_str(move: Move) -> str:
    return f"{move.frm} {move.to}"


def board_to_str(board) -> str:
    """Plain text dump of a Board, one row per line, with x/y indices."""
    lines = ["  " + " ".join(str(x) for x in range(BOARD_W))]
    for y in range(BOARD_H):
        row = []
        for x in range(BOARD_W):
            if is_valid_cell(x, y):
                row.append(PIECE_CHARS[board.state_at(Point(x, y))])
            else:
                row.append(" ")
        lines.append(f"{y} " + " ".join(row))
    return "\n".join(lines)
