"""Rules engine interface consumed by the AI and the game engine."""

from __future__ import annotations

from typing import Protocol

from ..models import BoardState, GameState, Move, MoveType, PieceKind, Position


class RulesEngine(Protocol):
    """Movement, capture and legality queries over a board snapshot."""

    def is_valid_step(
        self, board: BoardState, from_pos: Position, to: Position
    ) -> bool:
        ...

    def legal_neighbor_moves(
        self, board: BoardState, position: Position
    ) -> list[Position]:
        ...

    def legal_moves(
        self, board: BoardState, position: Position, kind: PieceKind
    ) -> list[Move]:
        ...

    def can_capture(
        self, board: BoardState, from_pos: Position, to: Position
    ) -> bool:
        ...

    def apply_capture(
        self, board: BoardState, from_pos: Position, to: Position
    ) -> None:
        ...

    def is_capture(
        self, board: BoardState, from_pos: Position, to: Position
    ) -> bool:
        ...

    def capture_moves(
        self, board: BoardState, position: Position
    ) -> list[Position]:
        ...

    def has_any_legal_move(self, board: BoardState) -> bool:
        ...

    def has_any_step(self, board: BoardState, side: PieceKind) -> bool:
        ...

    def action_kind(self, game_state: GameState) -> MoveType:
        ...

    def get_valid_moves(self, game_state: GameState) -> list[Move]:
        ...

    def check_move(self, game_state: GameState, move: Move) -> None:
        ...

    def validate_move(self, game_state: GameState, move: Move) -> bool:
        ...
