"""
Minimax search with alpha-beta pruning over Snapshot copies.
"""
from __future__ import annotations

import logging
import math
from abc import ABC, abstractmethod
from typing import Iterator, List, Optional, Sequence, Tuple, Union

from .eval import Evaluator, get_evaluator
from .geometry import xy
from .snapshot import Snapshot
from .types import Fingerprint, Move, Point, Side

logger = logging.getLogger(__name__)

GameResult = Tuple[float, Optional[Move]]
Candidate = Tuple[Move, Snapshot]


def _point(i: int) -> Point:
    return Point(*xy(i))


def candidates(snap: Snapshot, side: Side) -> Iterator[Candidate]:
    """Successors of ``snap`` for ``side`` in deterministic order.

    Foxes must capture when any complete capture exists; chickens only step.
    """
    if side is Side.FOX:
        steps, jumps = snap.fox_moves()
        if jumps:
            for j in jumps:
                yield Move(_point(j.origin), _point(j.landing)), snap.apply_jump(j)
            return
    else:
        steps = snap.chicken_moves()
    for frm, to in steps:
        yield Move(_point(frm), _point(to)), snap.apply_step(frm, to)


class SearchStrategy(ABC):
    """Abstract interface for search strategies."""

    @abstractmethod
    def search(self, board, side: Side, depth: int,
               recent_fingerprints: Sequence[Fingerprint] = ()) -> GameResult:  # pragma: no cover
        raise NotImplementedError

    def choose_move(self, board, depth: int, side: Side,
                    recent_fingerprints: Sequence[Fingerprint] = ()) -> Optional[Move]:
        return self.search(board, side, depth, recent_fingerprints)[1]


class SearchEngine(SearchStrategy):
    """Alpha-beta search engine scoring positions for the chickens."""

    def __init__(self, evaluator: Optional[Evaluator] = None) -> None:
        self.evaluator: Evaluator = evaluator or get_evaluator()
        self.nodes: int = 0

    def _eval(self, snap: Snapshot) -> float:
        self.nodes += 1
        return self.evaluator.evaluate(snap)

    def minimax(self, snap: Snapshot, depth: int, side: Side, alpha: float, beta: float) -> float:
        """Value of ``snap`` with ``side`` to move, searched ``depth`` plies deep."""
        if depth <= 0:
            return self._eval(snap)

        if side is Side.FOX:
            # Fox minimizes chicken score.
            value = math.inf
            searched = False
            for _, child in candidates(snap, side):
                searched = True
                value = min(value, self.minimax(child, depth - 1, Side.CHICKEN, alpha, beta))
                beta = min(beta, value)
                if beta <= alpha:
                    break
            return value if searched else self._eval(snap)

        # Chicken maximizes chicken score.
        value = -math.inf
        searched = False
        for _, child in candidates(snap, side):
            searched = True
            value = max(value, self.minimax(child, depth - 1, Side.FOX, alpha, beta))
            alpha = max(alpha, value)
            if beta <= alpha:
                break
        return value if searched else self._eval(snap)

    def _root_candidates(self, snap: Snapshot, side: Side,
                         recent_fingerprints: Sequence[Fingerprint]) -> List[Candidate]:
        found = list(candidates(snap, side))
        if side is Side.CHICKEN and recent_fingerprints:
            recent = set(recent_fingerprints)
            fresh = [(m, c) for m, c in found if c.fingerprint() not in recent]
            if fresh:
                return fresh
            logger.debug("Every chicken move repeats a recent position; ignoring history")
        return found

    def search(self, board: Union[Snapshot, object], side: Side, depth: int,
               recent_fingerprints: Sequence[Fingerprint] = ()) -> GameResult:
        """Perform alpha-beta search to find the best move for ``side``.

        ``board`` may be a live Board (copied once into a Snapshot) or a
        Snapshot. Returns ``(score, move)``; move is None only when ``side``
        has nothing to play.
        """
        snap = board if isinstance(board, Snapshot) else Snapshot.from_board(board)
        self.nodes = 0

        roots = self._root_candidates(snap, side, recent_fingerprints)
        if not roots:
            return self._eval(snap), None

        child_depth = max(0, depth - 1)
        alpha: float = -math.inf
        beta: float = math.inf
        best_move: Optional[Move] = None

        if side is Side.FOX:
            best_score = math.inf
            for move, child in roots:
                sc = self.minimax(child, child_depth, Side.CHICKEN, alpha, beta)
                if best_move is None or sc < best_score:
                    best_score = sc
                    best_move = move
                beta = min(beta, best_score)
        else:
            best_score = -math.inf
            for move, child in roots:
                sc = self.minimax(child, child_depth, Side.FOX, alpha, beta)
                if best_move is None or sc > best_score:
                    best_score = sc
                    best_move = move
                alpha = max(alpha, best_score)

        logger.debug("%s plays %s (score %.2f, depth %d, %d leaves)",
                     side.value, best_move, best_score, depth, self.nodes)
        return best_score, best_move


def get_engine(evaluator: Optional[Evaluator] = None) -> SearchEngine:
    """Get a new search engine instance."""
    return SearchEngine(evaluator)


def choose_move(board, depth: int, side: Side,
                recent_fingerprints: Sequence[Fingerprint] = ()) -> Optional[Move]:
    """Pick a move for ``side`` with a fresh engine."""
    return get_engine().choose_move(board, depth, side, recent_fingerprints)
