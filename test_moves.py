import pytest

from foxhens.board import Board
from foxhens.geometry import VALID_CELLS, STALL_CELLS, connected_cells, is_valid_cell
from foxhens.types import InvalidCoordinateError, JumpKind, PieceState, Point, Side

# Helpers

def make_board(pieces, side=Side.FOX):
    board = Board()
    board.clear()
    for (x, y), state in pieces.items():
        board.set_state(Point(x, y), state)
    board.side_to_move = side
    return board


def test_cross_has_33_cells():
    assert len(VALID_CELLS) == 33
    assert not is_valid_cell(0, 0)
    assert not is_valid_cell(6, 6)
    assert not is_valid_cell(1, 5)
    assert is_valid_cell(3, 3)
    assert is_valid_cell(0, 2)
    assert not is_valid_cell(7, 3)
    assert not is_valid_cell(3, -1)


def test_stall_is_nine_cells():
    assert len(STALL_CELLS) == 9
    assert (3, 2) in STALL_CELLS
    assert (1, 2) not in STALL_CELLS


def test_adjacency_order_and_parity():
    assert connected_cells(3, 3, True) == [(2, 3), (4, 3), (3, 2)]
    assert connected_cells(3, 3, False) == [
        (2, 3), (4, 3), (3, 2), (3, 4), (4, 4), (2, 4), (4, 2), (2, 2),
    ]
    # odd parity cells have no diagonal lines
    assert connected_cells(2, 3, False) == [(1, 3), (3, 3), (2, 2), (2, 4)]
    # filtered to valid cells
    assert connected_cells(2, 0, False) == [(3, 0), (2, 1), (3, 1)]


def test_chicken_moves_exclude_down_and_diagonals():
    board = make_board({(3, 3): PieceState.CHICKEN}, side=Side.CHICKEN)
    moves = board.legal_moves(Point(3, 3))
    assert moves == [Point(2, 3), Point(4, 3), Point(3, 2)]


def test_fox_moves_use_full_adjacency():
    board = make_board({(3, 3): PieceState.FOX})
    moves = board.legal_moves(Point(3, 3))
    assert len(moves) == 8
    assert Point(3, 4) in moves
    assert Point(2, 2) in moves


def test_empty_cell_has_no_moves():
    board = make_board({})
    assert board.legal_moves(Point(3, 3)) == []
    assert board.legal_jumps(Point(3, 3)) == []


def test_initial_position_moves():
    board = Board()
    assert board.legal_moves(Point(3, 3)) == [Point(3, 2)]
    assert board.legal_moves(Point(2, 3)) == []
    assert board.all_legal_jumps_for_side() == []
    sources = [m.frm for m in board.all_legal_moves_for_side()]
    assert sources == [Point(0, 3), Point(1, 3), Point(3, 3), Point(5, 3), Point(6, 3)]


def test_single_capture_is_one_terminal_option():
    board = make_board({(3, 3): PieceState.FOX, (3, 2): PieceState.CHICKEN})
    jumps = board.legal_jumps(Point(3, 3))
    assert len(jumps) == 1
    jump = jumps[0]
    assert jump.kind is JumpKind.TERMINAL
    assert jump.origin == Point(3, 3)
    assert jump.landing == Point(3, 1)
    assert jump.captured == (Point(3, 2),)


def test_blocked_landing_means_no_capture():
    board = make_board({
        (3, 3): PieceState.FOX,
        (3, 2): PieceState.CHICKEN,
        (3, 1): PieceState.CHICKEN,
    })
    assert board.legal_jumps(Point(3, 3)) == []


def test_chain_only_returns_complete_sequence():
    board = make_board({
        (3, 5): PieceState.FOX,
        (3, 4): PieceState.CHICKEN,
        (3, 2): PieceState.CHICKEN,
    })
    jumps = board.legal_jumps(Point(3, 5))
    assert len(jumps) == 1
    assert jumps[0].landing == Point(3, 1)
    assert jumps[0].captured == (Point(3, 4), Point(3, 2))
    assert jumps[0].is_terminal


def test_jump_options_include_continuable_prefix():
    board = make_board({
        (3, 5): PieceState.FOX,
        (3, 4): PieceState.CHICKEN,
        (3, 2): PieceState.CHICKEN,
    })
    options = board.jump_options(Point(3, 5))
    kinds = {(o.landing, o.kind) for o in options}
    assert kinds == {
        (Point(3, 3), JumpKind.CONTINUABLE),
        (Point(3, 1), JumpKind.TERMINAL),
    }


def test_branching_chain_yields_each_leaf():
    # From (3,3) the fox can take (3,2) or (2,3); both end immediately.
    board = make_board({
        (3, 3): PieceState.FOX,
        (3, 2): PieceState.CHICKEN,
        (2, 3): PieceState.CHICKEN,
    })
    landings = sorted(j.landing for j in board.legal_jumps(Point(3, 3)))
    assert landings == [Point(1, 3), Point(3, 1)]


def test_chickens_never_jump():
    board = make_board({(3, 3): PieceState.CHICKEN, (3, 2): PieceState.FOX}, side=Side.CHICKEN)
    assert board.legal_jumps(Point(3, 3)) == []
    assert board.all_legal_jumps_for_side() == []


def test_invalid_coordinates_fail_fast():
    board = Board()
    with pytest.raises(InvalidCoordinateError):
        board.legal_moves(Point(0, 0))
    with pytest.raises(InvalidCoordinateError):
        board.state_at(Point(7, 3))
    with pytest.raises(ValueError):
        board.apply_punishment(Point(6, 6))
