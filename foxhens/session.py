"""
Game session: owns one Board and drives human, AI and remote turns.
"""
from __future__ import annotations

import logging
import threading
import time
from dataclasses import dataclass, field
from typing import Callable, List, Optional

from config import get_engine_settings, get_session_settings

from .board import FOX_STALEMATE, Board
from .search import get_engine
from .snapshot import Snapshot
from .types import (
    AttemptOutcome,
    AttemptResult,
    Fingerprint,
    GameOutcome,
    JumpOption,
    Move,
    Point,
    SearchEngineProtocol,
    Side,
)

logger = logging.getLogger(__name__)

ONE_PLAYER = "one-player"
TWO_PLAYERS = "two-players"
ONLINE = "online"

AiCallback = Callable[[Optional[Move], float], None]


@dataclass
class Selection:
    """Options shown for the piece a human picked."""

    point: Point
    moves: List[Point] = field(default_factory=list)
    jumps: List[JumpOption] = field(default_factory=list)
    all_jumps: List[JumpOption] = field(default_factory=list)
    all_moves: List[Move] = field(default_factory=list)

    def destinations(self) -> List[Point]:
        return self.moves + [j.landing for j in self.jumps if j.is_terminal]


class GameSession:
    """Manages one match: the board, whose input counts, and the AI side."""

    def __init__(self, mode: Optional[str] = None, human_side: Optional[Side] = None,
                 depth: Optional[int] = None, board: Optional[Board] = None,
                 engine: Optional[SearchEngineProtocol] = None,
                 history_size: Optional[int] = None) -> None:
        session_settings = get_session_settings()
        engine_settings = get_engine_settings()
        self.mode: str = mode or session_settings.mode
        self.human_side: Side = human_side or Side(session_settings.human_plays_as)
        self.depth: int = depth if depth is not None else engine_settings.default_depth
        self.history_size: int = history_size if history_size is not None else engine_settings.history_size
        self.board: Board = board if board is not None else Board()
        self.engine: SearchEngineProtocol = engine or get_engine()
        self.chicken_history: List[Fingerprint] = []
        self.selection: Optional[Selection] = None
        self.is_thinking: bool = False
        self._generation: int = 0

    # ----------------------------
    # Turn ownership
    # ----------------------------
    @property
    def ai_side(self) -> Optional[Side]:
        if self.mode != ONE_PLAYER:
            return None
        return self.human_side.opponent()

    def is_human_turn(self) -> bool:
        if self.mode != ONE_PLAYER:
            return True
        return self.board.side_to_move is self.human_side

    def is_ai_turn(self) -> bool:
        return self.ai_side is not None and self.board.side_to_move is self.ai_side

    @property
    def generation(self) -> int:
        """Bumped on every applied action and reset; stale AI results compare against it."""
        return self._generation

    def reset(self) -> None:
        """Reset the game to the initial state."""
        self.board.reset()
        self.chicken_history.clear()
        self.selection = None
        self._generation += 1

    def fingerprint(self) -> Fingerprint:
        return Snapshot.from_board(self.board).fingerprint()

    def probe_stalemate(self) -> bool:
        """Declare a chicken win when the foxes are to move and cannot."""
        if self.board.is_over or not self.board.fox_is_stalemated():
            return False
        self.board.declare_outcome(GameOutcome(Side.CHICKEN, FOX_STALEMATE))
        return True

    def _after_action(self, result: AttemptResult) -> AttemptResult:
        if result.changed_state:
            self.selection = None
            self._generation += 1
            self.probe_stalemate()
        if result.message:
            logger.info(result.message)
        return result

    # ----------------------------
    # Human input
    # ----------------------------
    def select(self, point: Point) -> Optional[Selection]:
        """Pick a piece and compute its options. Returns None when input is not accepted."""
        if not self.is_human_turn() or self.board.is_over:
            return None
        if self.board.state_at(point) is not self.board.side_to_move.piece:
            self.selection = None
            return None
        self.selection = Selection(
            point=point,
            moves=self.board.legal_moves(point),
            jumps=self.board.jump_options(point),
            all_jumps=self.board.all_legal_jumps_for_side(),
            all_moves=self.board.all_legal_moves_for_side(),
        )
        self.probe_stalemate()
        return self.selection

    def click(self, destination: Point) -> AttemptResult:
        """Try to move the selected piece to ``destination``."""
        if not self.is_human_turn() or self.board.is_over or self.selection is None:
            return AttemptResult(AttemptOutcome.IGNORED)
        sel = self.selection
        result = self.board.attempt_move(sel.point, destination, sel.moves, sel.jumps, sel.all_jumps)
        return self._after_action(result)

    def apply_remote_move(self, frm: Point, to: Point) -> AttemptResult:
        """Feed an action received from the peer link, exactly like local input."""
        if self.board.is_over:
            return AttemptResult(AttemptOutcome.IGNORED)
        return self._after_action(self.board.attempt(frm, to))

    # ----------------------------
    # AI turns
    # ----------------------------
    def _recent_for(self, side: Side) -> List[Fingerprint]:
        return list(self.chicken_history) if side is Side.CHICKEN else []

    def apply_ai_move(self, move: Move) -> AttemptResult:
        """Apply a searched move through the same rule path as a human click."""
        side = self.board.side_to_move
        frm = move.frm
        result = self.board.attempt_move(
            frm,
            move.to,
            self.board.legal_moves(frm),
            self.board.legal_jumps(frm),
            self.board.all_legal_jumps_for_side(),
        )
        if side is Side.CHICKEN and result.changed_state and self.history_size > 0:
            self.chicken_history = ([self.fingerprint()] + self.chicken_history)[: self.history_size]
        return self._after_action(result)

    def play_ai_turn(self, side: Optional[Side] = None) -> Optional[AttemptResult]:
        """Search and play one move for ``side`` (default: the AI side, when it is to move)."""
        if self.board.is_over:
            return None
        side = side or self.ai_side
        if side is None or self.board.side_to_move is not side:
            return None
        move = self.engine.choose_move(self.board, self.depth, side, self._recent_for(side))
        if move is None:
            self.probe_stalemate()
            return None
        return self.apply_ai_move(move)

    def request_ai_move_async(self, callback: AiCallback,
                              side: Optional[Side] = None) -> Optional[threading.Thread]:
        """Run the search on a background thread.

        The search works on a snapshot taken now. ``callback(move, elapsed)`` is
        invoked from the worker thread only if no action or reset happened in
        the meantime; stale results are dropped.
        """
        side = side or self.board.side_to_move
        if self.is_thinking or self.board.is_over:
            return None

        self.is_thinking = True
        snap = Snapshot.from_board(self.board)
        recent = self._recent_for(side)
        generation = self._generation
        depth = self.depth

        def worker() -> None:
            try:
                start_time = time.time()
                move = self.engine.choose_move(snap, depth, side, recent)
                elapsed_time = time.time() - start_time
            finally:
                self.is_thinking = False
            if generation != self._generation:
                logger.debug("Discarding stale AI result %s", move)
                return
            callback(move, elapsed_time)

        thread = threading.Thread(target=worker, daemon=True)
        thread.start()
        return thread
