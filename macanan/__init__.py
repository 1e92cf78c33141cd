"""Macanan rules engine, minimax AI and AI service."""

from macanan.game_engine import GameEngine
from macanan.models import (
    AIConfig,
    AIType,
    BoardState,
    Cell,
    GamePhase,
    GameState,
    GameStatus,
    Move,
    MoveType,
    PieceKind,
    Position,
)

__all__ = [
    "AIConfig",
    "AIType",
    "BoardState",
    "Cell",
    "GameEngine",
    "GamePhase",
    "GameState",
    "GameStatus",
    "Move",
    "MoveType",
    "PieceKind",
    "Position",
]

__version__ = "1.0.0"
