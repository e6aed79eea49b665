"""
Game-of-record board: rule queries, mutations and the combined click handler.

One Board belongs to one game session. It is mutated in place; search works
on Snapshot copies and never touches it.
"""
from __future__ import annotations

import logging
from typing import Dict, List, Optional, Sequence

from .geometry import (
    MIN_CHICKENS,
    MIN_FOXES,
    STALL_TARGET,
    VALID_CELLS,
    is_stall_cell,
    require_valid,
    start_state_for,
)
from .moves import MoveGenerator
from .types import (
    AttemptOutcome,
    AttemptResult,
    GameOutcome,
    JumpKind,
    JumpOption,
    Move,
    PieceState,
    Point,
    Position,
    Side,
)

logger = logging.getLogger(__name__)

MSG_JUMP_MANDATORY = "Fox did not jump, but jumping is mandatory! The fox is removed."
MSG_KEEP_JUMPING = "Fox stopped too early, it must keep jumping! The fox is removed."

STALL_FULL = "All chickens are in the stall! Chickens win!"
TOO_FEW_CHICKENS = "Not enough chickens left! Foxes win!"
NO_FOXES = "No foxes left! Chickens win!"
FOX_STALEMATE = "No moves for foxes! Chickens win!"


class Board:
    """Mutable game-of-record with explicit getters and setters."""

    def __init__(self) -> None:
        self._grid: Dict[Position, PieceState] = {}
        self.side_to_move: Side = Side.CHICKEN
        self._outcome: Optional[GameOutcome] = None
        self._gen = MoveGenerator(self._grid)
        self.reset()

    # ----------------------------
    # State access
    # ----------------------------
    def state_at(self, point: Point) -> PieceState:
        require_valid(point)
        return self._grid[(point.x, point.y)]

    def set_state(self, point: Point, state: PieceState) -> None:
        require_valid(point)
        self._grid[(point.x, point.y)] = PieceState(state)

    def clear(self) -> None:
        """Empty every cell. Turn and outcome are left alone."""
        for pos in VALID_CELLS:
            self._grid[pos] = PieceState.EMPTY

    def cells(self) -> List[Point]:
        return [Point(x, y) for x, y in VALID_CELLS]

    def count(self, state: PieceState) -> int:
        return sum(1 for v in self._grid.values() if v is state)

    def piece_count(self) -> int:
        return len(VALID_CELLS) - self.count(PieceState.EMPTY)

    def chickens_in_stall(self) -> int:
        return sum(1 for (x, y), v in self._grid.items()
                   if v is PieceState.CHICKEN and is_stall_cell(x, y))

    def layout(self) -> Dict[Position, PieceState]:
        """A copy of the grid, keyed by (x, y)."""
        return dict(self._grid)

    def win_reason(self) -> Optional[GameOutcome]:
        return self._outcome

    @property
    def is_over(self) -> bool:
        return self._outcome is not None

    # ----------------------------
    # Queries
    # ----------------------------
    def legal_moves(self, point: Point) -> List[Point]:
        """Empty neighbours the piece at ``point`` may step to."""
        require_valid(point)
        return self._gen.step_targets(point)

    def legal_jumps(self, point: Point) -> List[JumpOption]:
        """Complete capture chains for the fox at ``point``."""
        require_valid(point)
        return self._gen.jumps(point)

    def jump_options(self, point: Point) -> List[JumpOption]:
        """Complete chains plus every intermediate landing tagged CONTINUABLE."""
        require_valid(point)
        return self._gen.jumps(point, include_partial=True)

    def all_legal_jumps_for_side(self) -> List[JumpOption]:
        return self._gen.all_jumps(self.side_to_move)

    def all_legal_moves_for_side(self) -> List[Move]:
        return [Move(frm, to) for frm, to in self._gen.all_steps(self.side_to_move)]

    def fox_is_stalemated(self) -> bool:
        """True when the foxes are to move and have neither a step nor a jump.

        This is a probe only; callers decide whether to declare the outcome.
        """
        if self.side_to_move is not Side.FOX:
            return False
        return not self.all_legal_moves_for_side() and not self.all_legal_jumps_for_side()

    # ----------------------------
    # Mutations
    # ----------------------------
    def _switch_turn(self) -> None:
        self.side_to_move = self.side_to_move.opponent()

    def _finish(self, winner: Side, reason: str) -> None:
        self._outcome = GameOutcome(winner, reason)
        logger.info("Game over: %s", reason)

    def apply_move(self, frm: Point, to: Point) -> None:
        require_valid(frm)
        require_valid(to)
        piece = self._grid[(frm.x, frm.y)]
        self._grid[(frm.x, frm.y)] = PieceState.EMPTY
        self._grid[(to.x, to.y)] = piece
        self._switch_turn()
        if self.chickens_in_stall() >= STALL_TARGET:
            self._finish(Side.CHICKEN, STALL_FULL)

    def apply_jump(self, option: JumpOption) -> None:
        require_valid(option.origin)
        require_valid(option.landing)
        for p in option.captured:
            self.set_state(p, PieceState.EMPTY)
        self._grid[(option.origin.x, option.origin.y)] = PieceState.EMPTY
        self._grid[(option.landing.x, option.landing.y)] = PieceState.FOX
        self._switch_turn()
        if self.count(PieceState.CHICKEN) < MIN_CHICKENS:
            self._finish(Side.FOX, TOO_FEW_CHICKENS)

    def apply_punishment(self, point: Point) -> None:
        require_valid(point)
        logger.info("Removing punished piece at %s", point)
        self._grid[(point.x, point.y)] = PieceState.EMPTY
        self._switch_turn()
        if self.count(PieceState.FOX) < MIN_FOXES:
            self._finish(Side.CHICKEN, NO_FOXES)

    def declare_outcome(self, outcome: GameOutcome) -> None:
        """Record an outcome detected by the caller, such as a fox stalemate."""
        self._outcome = outcome
        logger.info("Game over: %s", outcome.reason)

    def reset(self) -> None:
        for x, y in VALID_CELLS:
            self._grid[(x, y)] = start_state_for(x, y)
        self.side_to_move = Side.CHICKEN
        self._outcome = None

    # ----------------------------
    # Combined decision
    # ----------------------------
    def attempt_move(
        self,
        selected: Optional[Point],
        destination: Point,
        legal_moves_for_selected: Sequence[Point],
        legal_jumps_for_selected: Sequence[JumpOption],
        all_jumps_for_side: Sequence[JumpOption],
    ) -> AttemptResult:
        """Resolve a click on ``destination`` after ``selected`` was picked.

        Rule violations never raise: a plain step while any capture exists
        removes a fox that could have jumped, stopping mid-chain removes the
        jumping fox, anything unrecognised is ignored.
        """
        if selected is None:
            return AttemptResult(AttemptOutcome.IGNORED)

        if destination in legal_moves_for_selected:
            if not all_jumps_for_side:
                self.apply_move(selected, destination)
                return AttemptResult(AttemptOutcome.MOVED)
            self.apply_punishment(all_jumps_for_side[0].origin)
            return AttemptResult(AttemptOutcome.PUNISHED, MSG_JUMP_MANDATORY)

        landing = [j for j in legal_jumps_for_selected if j.landing == destination]
        terminal = next((j for j in landing if j.kind is JumpKind.TERMINAL), None)
        if terminal is not None:
            self.apply_jump(terminal)
            return AttemptResult(AttemptOutcome.JUMPED)
        if landing:
            self.apply_punishment(selected)
            return AttemptResult(AttemptOutcome.PUNISHED, MSG_KEEP_JUMPING)

        return AttemptResult(AttemptOutcome.IGNORED)

    def attempt(self, frm: Point, to: Point) -> AttemptResult:
        """``attempt_move`` with the option lists computed from the current state.

        Selecting a piece that does not belong to the side to move is ignored.
        """
        require_valid(to)
        if self.state_at(frm) is not self.side_to_move.piece:
            return AttemptResult(AttemptOutcome.IGNORED)
        return self.attempt_move(
            frm,
            to,
            self.legal_moves(frm),
            self.jump_options(frm),
            self.all_legal_jumps_for_side(),
        )
