"""Fox and Hens package: rule engine, snapshot search and game session.

Usage examples:
    from foxhens import Board, Point, Side
    from foxhens import SearchEngine, choose_move
    from foxhens import GameSession
"""
from __future__ import annotations

from .types import (
    AttemptOutcome,
    AttemptResult,
    GameOutcome,
    InvalidCoordinateError,
    JumpKind,
    JumpOption,
    Move,
    PieceState,
    Point,
    Side,
)
from .geometry import connected_cells, is_stall_cell, is_valid_cell
from .board import Board
from .snapshot import Snapshot
from .eval import Evaluator, HeuristicEvaluator, evaluate, get_evaluator
from .search import SearchEngine, SearchStrategy, choose_move, get_engine
from .session import GameSession, Selection
from .notation import board_to_str, parse_move_str, parse_point

__all__ = [
    "AttemptOutcome",
    "AttemptResult",
    "Board",
    "Evaluator",
    "GameOutcome",
    "GameSession",
    "HeuristicEvaluator",
    "InvalidCoordinateError",
    "JumpKind",
    "JumpOption",
    "Move",
    "PieceState",
    "Point",
    "SearchEngine",
    "SearchStrategy",
    "Selection",
    "Side",
    "Snapshot",
    "board_to_str",
    "choose_move",
    "connected_cells",
    "evaluate",
    "get_engine",
    "get_evaluator",
    "is_stall_cell",
    "is_valid_cell",
    "parse_move_str",
    "parse_point",
]
