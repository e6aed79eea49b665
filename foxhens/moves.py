from __future__ import annotations

from typing import FrozenSet, List, Mapping, Tuple

from .geometry import VALID_CELLS, connected_cells, is_valid_cell
from .types import JumpKind, JumpOption, PieceState, Point, Position, Side

Grid = Mapping[Position, PieceState]


class MoveGenerator:
    """Generates legal steps and capture chains for the game-of-record grid.

    The grid is only read. Capture recursion tracks the chickens already jumped
    in a frozen set instead of copying the grid.
    """

    def __init__(self, grid: Grid) -> None:
        self.grid = grid

    def _state(self, pos: Position, removed: FrozenSet[Position] = frozenset()) -> PieceState:
        if pos in removed:
            return PieceState.EMPTY
        return self.grid[pos]

    def step_targets(self, point: Point) -> List[Point]:
        piece = self.grid[(point.x, point.y)]
        if piece is PieceState.EMPTY:
            return []
        orthogonal_only = piece is PieceState.CHICKEN
        return [Point(nx, ny) for nx, ny in connected_cells(point.x, point.y, orthogonal_only)
                if self.grid[(nx, ny)] is PieceState.EMPTY]

    def _chains(self, pos: Position, origin: Point, captured: Tuple[Point, ...],
                removed: FrozenSet[Position], include_partial: bool) -> List[JumpOption]:
        x, y = pos
        options: List[JumpOption] = []
        for mx, my in connected_cells(x, y, False):
            if self._state((mx, my), removed) is not PieceState.CHICKEN:
                continue
            lx, ly = 2 * mx - x, 2 * my - y
            if not is_valid_cell(lx, ly) or self._state((lx, ly), removed) is not PieceState.EMPTY:
                continue
            taken = captured + (Point(mx, my),)
            chain = self._chains((lx, ly), origin, taken, removed | {(mx, my)}, include_partial)
            if chain:
                if include_partial:
                    options.append(JumpOption(origin, Point(lx, ly), taken, JumpKind.CONTINUABLE))
                options.extend(chain)
            else:
                options.append(JumpOption(origin, Point(lx, ly), taken, JumpKind.TERMINAL))
        return options

    def jumps(self, point: Point, include_partial: bool = False) -> List[JumpOption]:
        """Capture chains for the fox at ``point``.

        Only TERMINAL options are returned unless ``include_partial`` is set, in
        which case every intermediate landing appears as a CONTINUABLE option too.
        """
        if self.grid[(point.x, point.y)] is not PieceState.FOX:
            return []
        return self._chains((point.x, point.y), point, (), frozenset(), include_partial)

    def side_pieces(self, side: Side) -> List[Point]:
        piece = side.piece
        return [Point(x, y) for x, y in VALID_CELLS if self.grid[(x, y)] is piece]

    def all_jumps(self, side: Side) -> List[JumpOption]:
        if side is Side.CHICKEN:
            return []
        out: List[JumpOption] = []
        for p in self.side_pieces(side):
            out.extend(self.jumps(p))
        return out

    def all_steps(self, side: Side) -> List[Tuple[Point, Point]]:
        out: List[Tuple[Point, Point]] = []
        for p in self.side_pieces(side):
            out.extend((p, to) for to in self.step_targets(p))
        return out
