import math

import pytest

from foxhens.board import Board
from foxhens.eval import Evaluator, HeuristicEvaluator, evaluate
from foxhens.geometry import idx
from foxhens.search import SearchEngine, candidates, choose_move, get_engine
from foxhens.snapshot import Snapshot
from foxhens.types import Move, PieceState, Point, Side

SAFE_CHICKENS = [(0, 2), (0, 3), (0, 4), (6, 2), (6, 3), (6, 4), (2, 0), (4, 0)]


class ChickenCountEvaluator(Evaluator):
    """Rewards the fox for leaving chickens alive, so only the capture rule forces a jump."""

    def evaluate(self, snapshot):
        return -snapshot.count_chickens()


def plain_minimax(snap, depth, side):
    if depth <= 0:
        return evaluate(snap)
    values = [plain_minimax(child, depth - 1, side.opponent()) for _, child in candidates(snap, side)]
    if not values:
        return evaluate(snap)
    return min(values) if side is Side.FOX else max(values)


def stall_race():
    pieces = {(0, 2): PieceState.FOX}
    for p in [(3, 3), (2, 4), (4, 4), (2, 5), (3, 5), (4, 5), (2, 6), (3, 6), (4, 6)]:
        pieces[p] = PieceState.CHICKEN
    return Snapshot.from_layout(pieces)


def test_fox_must_capture_even_when_scoring_prefers_not_to():
    pieces = {(3, 3): PieceState.FOX, (3, 2): PieceState.CHICKEN}
    pieces.update({p: PieceState.CHICKEN for p in SAFE_CHICKENS})
    snap = Snapshot.from_layout(pieces)

    engine = SearchEngine(ChickenCountEvaluator())
    score, move = engine.search(snap, Side.FOX, 1)
    assert move == Move(Point(3, 3), Point(3, 1))
    assert score == -8


def test_chicken_walks_into_stall():
    engine = SearchEngine(HeuristicEvaluator())
    score, move = engine.search(stall_race(), Side.CHICKEN, 1)
    assert move == Move(Point(3, 3), Point(3, 2))
    assert score == pytest.approx(21.5)


def test_recent_positions_are_avoided():
    snap = stall_race()
    engine = SearchEngine(HeuristicEvaluator())
    into_stall = snap.apply_step(idx(3, 3), idx(3, 2))

    _, move = engine.search(snap, Side.CHICKEN, 1, [into_stall.fingerprint()])
    assert move == Move(Point(3, 3), Point(2, 3))

    # when every move repeats a recent position the filter is dropped
    everything = [child.fingerprint() for _, child in candidates(snap, Side.CHICKEN)]
    _, move = engine.search(snap, Side.CHICKEN, 1, everything)
    assert move == Move(Point(3, 3), Point(3, 2))


def test_history_does_not_restrict_foxes():
    snap = stall_race()
    engine = SearchEngine(HeuristicEvaluator())
    _, expected = engine.search(snap, Side.FOX, 1)
    everything_but_one = [child.fingerprint() for _, child in candidates(snap, Side.FOX)][1:]
    _, move = engine.search(snap, Side.FOX, 1, everything_but_one)
    assert move == expected


def test_chicken_prefers_safe_stall_square():
    pieces = {(3, 3): PieceState.FOX}
    for p in [(2, 2), (2, 4), (4, 4), (3, 4), (2, 5), (3, 5), (4, 5), (2, 6), (3, 6), (4, 6)]:
        pieces[p] = PieceState.CHICKEN
    snap = Snapshot.from_layout(pieces)

    score, move = SearchEngine(HeuristicEvaluator()).search(snap, Side.CHICKEN, 1)
    # (3,2) would also be in the stall but hands the fox a capture
    assert move == Move(Point(2, 2), Point(2, 1))
    assert score == pytest.approx(23.5)


def test_no_pieces_means_no_move():
    snap = Snapshot.from_layout({(3, 3): PieceState.CHICKEN})
    score, move = get_engine().search(snap, Side.FOX, 2)
    assert move is None
    assert score == pytest.approx(evaluate(snap))


def test_depth_zero_still_picks_a_move():
    score, move = get_engine().search(Board(), Side.CHICKEN, 0)
    assert move is not None
    assert math.isfinite(score)


def test_alpha_beta_matches_plain_minimax():
    snap = Snapshot.from_board(Board())
    engine = SearchEngine(HeuristicEvaluator())
    for depth in (1, 2, 3):
        score, _ = engine.search(snap, Side.CHICKEN, depth)
        assert score == pytest.approx(plain_minimax(snap, depth, Side.CHICKEN))


def test_search_leaves_live_board_untouched():
    board = Board()
    before = board.layout()
    move = choose_move(board, 2, Side.CHICKEN)
    assert move is not None
    assert board.layout() == before
    assert board.side_to_move is Side.CHICKEN
    assert Snapshot.from_board(board).fingerprint() == Snapshot.from_layout(before).fingerprint()


def test_board_and_snapshot_inputs_agree():
    board = Board()
    engine = get_engine()
    assert engine.search(board, Side.CHICKEN, 2) == engine.search(Snapshot.from_board(board), Side.CHICKEN, 2)


def test_fox_candidates_are_only_jumps_when_any_exist():
    board = Board()
    board.set_state(Point(4, 4), PieceState.EMPTY)
    snap = Snapshot.from_board(board)
    found = list(candidates(snap, Side.FOX))
    assert [m for m, _ in found] == [
        Move(Point(2, 2), Point(6, 2)),
        Move(Point(4, 2), Point(6, 2)),
    ]
    for _, child in found:
        assert child.count_chickens() == 17
