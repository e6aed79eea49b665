"""
Type definitions and protocols for the Fox and Hens engine.

This module provides:
- Enums for cell contents, sides and jump kinds
- Frozen dataclasses for points, jump options, moves and outcomes
- A protocol for search engines
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum, IntEnum
from typing import Any, Optional, Protocol, Sequence, Tuple

Fingerprint = str
Position = Tuple[int, int]  # (x, y) coordinates


class InvalidCoordinateError(ValueError):
    """Raised when a query or mutation names a cell outside the cross."""

    def __init__(self, x: int, y: int) -> None:
        super().__init__(f"({x}, {y}) is not a cell of the board")
        self.x = x
        self.y = y


class PieceState(IntEnum):
    """Contents of a cell. Values are the snapshot encoding."""

    FOX = 0
    CHICKEN = 1
    EMPTY = 2


class Side(Enum):
    """Players. Chickens move first."""

    CHICKEN = "chicken"
    FOX = "fox"

    def opponent(self) -> "Side":
        return Side.FOX if self is Side.CHICKEN else Side.CHICKEN

    @property
    def piece(self) -> PieceState:
        return PieceState.CHICKEN if self is Side.CHICKEN else PieceState.FOX


class JumpKind(Enum):
    """Whether a capture chain may end here or has to continue."""

    CONTINUABLE = "continuable"
    TERMINAL = "terminal"


class AttemptOutcome(str, Enum):
    MOVED = "moved"
    JUMPED = "jumped"
    PUNISHED = "punished"
    IGNORED = "ignored"


@dataclass(frozen=True, order=True)
class Point:
    """A cell position; x grows to the right, y grows towards the chickens' start rows."""

    x: int
    y: int

    def __str__(self) -> str:
        return f"{self.x}-{self.y}"


@dataclass(frozen=True)
class JumpOption:
    """One capture sequence of a fox.

    ``captured`` lists the chickens in the order they are jumped, starting from
    ``origin``. Only TERMINAL options end a turn legally.
    """

    origin: Point
    landing: Point
    captured: Tuple[Point, ...]
    kind: JumpKind = JumpKind.TERMINAL

    def __post_init__(self) -> None:
        if not self.captured:
            raise ValueError("A jump must capture at least one chicken")

    @property
    def is_terminal(self) -> bool:
        return self.kind is JumpKind.TERMINAL


@dataclass(frozen=True)
class Move:
    """A chosen action: a step, or the origin and final landing of a jump."""

    frm: Point
    to: Point

    def __str__(self) -> str:
        return f"{self.frm} {self.to}"


@dataclass(frozen=True)
class AttemptResult:
    outcome: AttemptOutcome
    message: Optional[str] = None

    @property
    def changed_state(self) -> bool:
        return self.outcome is not AttemptOutcome.IGNORED


@dataclass(frozen=True)
class GameOutcome:
    """A recorded end of the game."""

    winner: Side
    reason: str

    def __str__(self) -> str:
        return self.reason


class SearchEngineProtocol(Protocol):
    """Protocol for search engine implementations."""

    def choose_move(self, board: Any, depth: int, side: Side,
                    recent_fingerprints: Sequence[Fingerprint] = ()) -> Optional[Move]:
        """Select a move for ``side``."""
        ...

