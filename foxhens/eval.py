"""
Evaluation interfaces and the hand-tuned heuristic.

Scores are always from the chickens' point of view: chickens maximise, foxes
minimise the same number.
"""
from __future__ import annotations

from abc import ABC, abstractmethod
from typing import Optional, Sequence

import numpy as np

from config import EvaluationSettings, get_evaluation_settings

from .geometry import MIN_CHICKENS, STALL_TARGET
from .snapshot import Snapshot


class Evaluator(ABC):
    """Abstract evaluator interface for position scoring."""

    @abstractmethod
    def evaluate(self, snapshot: Snapshot) -> float:  # pragma: no cover
        """Score a single position for the chickens."""
        raise NotImplementedError

    def __call__(self, snapshot: Snapshot) -> float:
        return self.evaluate(snapshot)

    def batch_evaluate(self, snapshots: Sequence[Snapshot]) -> np.ndarray:
        """Score several positions. Default falls back to per-position calls."""
        out = np.zeros(len(snapshots), dtype=np.float64)
        for i, snap in enumerate(snapshots):
            out[i] = float(self.evaluate(snap))
        return out


class HeuristicEvaluator(Evaluator):
    """Alive chickens, stall occupancy and the fox's immediate capture threat."""

    def __init__(self, settings: Optional[EvaluationSettings] = None) -> None:
        self.settings: EvaluationSettings = settings or get_evaluation_settings()

    def base_score(self, snapshot: Snapshot) -> float:
        s = self.settings
        alive = snapshot.count_chickens()
        if alive < MIN_CHICKENS:
            return s.loss_score
        in_stall = snapshot.count_in_stall()
        if in_stall == STALL_TARGET:
            return s.win_score
        return alive * s.alive_weight + in_stall * s.stall_weight

    def evaluate(self, snapshot: Snapshot) -> float:
        s = self.settings
        score = self.base_score(snapshot)
        # The loss sentinel still gets the stall and danger terms.
        score += snapshot.count_in_stall() * s.stall_bonus
        danger = len(snapshot.fox_jumps())
        if danger > 0:
            score -= s.danger_penalty
            score -= min(danger, s.danger_cap)
        return score


def get_evaluator() -> Evaluator:
    return HeuristicEvaluator()


def evaluate(snapshot: Snapshot) -> float:
    """Score a position with the configured heuristic."""
    return HeuristicEvaluator().evaluate(snapshot)
