"""
Fixed-size immutable board representation used by the search.

The 7x7 index space is flattened row-major into 49 uint8 slots holding
PieceState values; cut-out corners are always EMPTY and masked out by the
shared VALID_MASK. Every change produces a new Snapshot from a full array
copy, which is the only form of undo the search needs.
"""
from __future__ import annotations

from typing import Dict, List, NamedTuple, Optional, Tuple

import numpy as np

from .geometry import (
    BOARD_H,
    BOARD_W,
    CELLS,
    STALL_INDICES,
    VALID_MASK,
    idx,
    neighbor_indices,
    require_valid,
    xy,
)
from .types import JumpKind, JumpOption, PieceState, Point, Position

FOX = int(PieceState.FOX)
CHICKEN = int(PieceState.CHICKEN)
EMPTY = int(PieceState.EMPTY)

Step = Tuple[int, int]  # (from index, to index)


class IndexJump(NamedTuple):
    """A terminal capture chain in flat indices."""

    origin: int
    landing: int
    captured: Tuple[int, ...]

    def to_option(self) -> JumpOption:
        return JumpOption(
            origin=Point(*xy(self.origin)),
            landing=Point(*xy(self.landing)),
            captured=tuple(Point(*xy(i)) for i in self.captured),
            kind=JumpKind.TERMINAL,
        )


def _landing(frm: int, mid: int) -> Optional[int]:
    fx, fy = xy(frm)
    mx, my = xy(mid)
    lx, ly = 2 * mx - fx, 2 * my - fy
    if lx < 0 or lx >= BOARD_W or ly < 0 or ly >= BOARD_H:
        return None
    i = idx(lx, ly)
    return i if VALID_MASK[i] else None


def _fox_jumps(states: np.ndarray, at: int, captured: Tuple[int, ...], origin: int) -> List[IndexJump]:
    terminal: List[IndexJump] = []
    for mid in neighbor_indices(at, False):
        if states[mid] != CHICKEN:
            continue
        land = _landing(at, mid)
        if land is None or states[land] != EMPTY:
            continue
        child = states.copy()
        child[mid] = EMPTY
        taken = captured + (mid,)
        chain = _fox_jumps(child, land, taken, origin)
        if chain:
            terminal.extend(chain)
        else:
            terminal.append(IndexJump(origin, land, taken))
    return terminal


class Snapshot:
    """Immutable 49-slot copy of a board."""

    __slots__ = ("states",)

    def __init__(self, states: np.ndarray) -> None:
        states = np.asarray(states, dtype=np.uint8)
        if states.shape != (CELLS,):
            raise ValueError(f"Snapshot needs {CELLS} slots, got shape {states.shape}")
        states.setflags(write=False)
        self.states = states

    # ----------------------------
    # Construction
    # ----------------------------
    @classmethod
    def empty(cls) -> "Snapshot":
        return cls(np.full(CELLS, EMPTY, dtype=np.uint8))

    @classmethod
    def from_layout(cls, layout: Dict[Position, PieceState]) -> "Snapshot":
        states = np.full(CELLS, EMPTY, dtype=np.uint8)
        for (x, y), state in layout.items():
            require_valid(Point(x, y))
            states[idx(x, y)] = int(state)
        return cls(states)

    @classmethod
    def from_board(cls, board) -> "Snapshot":
        """Copy the cell contents of a Board; turn and outcome are not captured."""
        return cls.from_layout(board.layout())

    # ----------------------------
    # Access
    # ----------------------------
    def state(self, x: int, y: int) -> PieceState:
        require_valid(Point(x, y))
        return PieceState(int(self.states[idx(x, y)]))

    def fingerprint(self) -> str:
        """Comma-joined slot values; equal placements give equal fingerprints."""
        return ",".join(str(v) for v in self.states.tolist())

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Snapshot):
            return NotImplemented
        return bool(np.array_equal(self.states, other.states))

    def __hash__(self) -> int:
        return hash(self.states.tobytes())

    def __repr__(self) -> str:
        return f"Snapshot({self.fingerprint()})"

    def count_chickens(self) -> int:
        return int(np.count_nonzero(self.states[VALID_MASK] == CHICKEN))

    def count_foxes(self) -> int:
        return int(np.count_nonzero(self.states[VALID_MASK] == FOX))

    def count_in_stall(self) -> int:
        return int(np.count_nonzero(self.states[STALL_INDICES] == CHICKEN))

    def _pieces(self, piece: int) -> List[int]:
        # flatnonzero keeps row-major order
        return [int(i) for i in np.flatnonzero((self.states == piece) & VALID_MASK)]

    # ----------------------------
    # Move generation
    # ----------------------------
    def moves_for_chicken(self, i: int) -> List[int]:
        if not VALID_MASK[i] or self.states[i] != CHICKEN:
            return []
        return [n for n in neighbor_indices(i, True) if self.states[n] == EMPTY]

    def moves_for_fox(self, i: int) -> Tuple[List[int], List[IndexJump]]:
        if not VALID_MASK[i] or self.states[i] != FOX:
            return [], []
        moves = [n for n in neighbor_indices(i, False) if self.states[n] == EMPTY]
        return moves, _fox_jumps(self.states, i, (), i)

    def fox_moves(self) -> Tuple[List[Step], List[IndexJump]]:
        steps: List[Step] = []
        jumps: List[IndexJump] = []
        for i in self._pieces(FOX):
            moves, found = self.moves_for_fox(i)
            steps.extend((i, to) for to in moves)
            jumps.extend(found)
        return steps, jumps

    def fox_jumps(self) -> List[IndexJump]:
        jumps: List[IndexJump] = []
        for i in self._pieces(FOX):
            jumps.extend(_fox_jumps(self.states, i, (), i))
        return jumps

    def chicken_moves(self) -> List[Step]:
        steps: List[Step] = []
        for i in self._pieces(CHICKEN):
            steps.extend((i, to) for to in self.moves_for_chicken(i))
        return steps

    # ----------------------------
    # Successors
    # ----------------------------
    def apply_step(self, frm: int, to: int) -> "Snapshot":
        nxt = self.states.copy()
        nxt[to] = nxt[frm]
        nxt[frm] = EMPTY
        return Snapshot(nxt)

    def apply_jump(self, jump: IndexJump) -> "Snapshot":
        nxt = self.states.copy()
        nxt[jump.origin] = EMPTY
        for i in jump.captured:
            nxt[i] = EMPTY
        nxt[jump.landing] = FOX
        return Snapshot(nxt)
