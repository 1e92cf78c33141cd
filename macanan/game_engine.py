"""Game engine for Macanan.

:class:`GameEngine` is the single entry point a controller (the browser UI,
the HTTP service, the self-play tool) needs:

- rules queries over a bare :class:`BoardState` (step legality, captures,
  legal moves, the tiger mobility check),
- best-placement / best-move queries backed by :class:`MinimaxAI`,
- turn handling over a full :class:`GameState`: placement order, phase
  transitions, capture application and victory detection.

Turn order: tiger and man alternate, tiger first. Each side places while it
still has pieces in hand, then steps. Tigers therefore start stepping as
soon as both are down, while men are still being placed.

Victory: the tigers win once fewer than three men remain (on the board plus
still in hand); a side that has to step but cannot loses.

Every method returns new objects except :meth:`GameEngine.apply_capture`,
which edits the caller's board in place.
"""

from __future__ import annotations

import logging
from typing import Optional

from .ai.minimax_ai import MinimaxAI
from .board_manager import BoardManager
from .config import MAN_COUNT, MIN_MEN_FOR_PLAY, TIGER_COUNT
from .models import (
    AIConfig,
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
from .rules.factory import get_rules_engine

logger = logging.getLogger(__name__)


def _side_for(ai_is_tiger: bool) -> PieceKind:
    return PieceKind.TIGER if ai_is_tiger else PieceKind.MAN


def _search_config(depth: Optional[int]) -> AIConfig:
    return AIConfig() if depth is None else AIConfig(depth=depth)


class GameEngine:
    """Stateless Macanan engine; all methods are static."""

    # ------------------------------------------------------------------
    # Board-level rules API
    # ------------------------------------------------------------------

    @staticmethod
    def is_legal_step(board: BoardState, from_pos: Position, to: Position) -> bool:
        return get_rules_engine().is_valid_step(board, from_pos, to)

    @staticmethod
    def can_capture(board: BoardState, from_pos: Position, to: Position) -> bool:
        return get_rules_engine().can_capture(board, from_pos, to)

    @staticmethod
    def apply_capture(board: BoardState, from_pos: Position, to: Position) -> None:
        """Clear the two men jumped by ``from_pos`` -> ``to`` on ``board``."""
        get_rules_engine().apply_capture(board, from_pos, to)

    @staticmethod
    def legal_moves(
        board: BoardState, position: Position, kind: PieceKind
    ) -> list[Move]:
        return get_rules_engine().legal_moves(board, position, kind)

    @staticmethod
    def has_any_legal_move(board: BoardState) -> bool:
        return get_rules_engine().has_any_legal_move(board)

    @staticmethod
    def best_placement(
        board: BoardState, ai_is_tiger: bool, depth: Optional[int] = None
    ) -> Optional[Position]:
        """Best cell for the AI side to place on, ``None`` if none is free."""
        ai = MinimaxAI(_side_for(ai_is_tiger), _search_config(depth))
        return ai.best_placement(board)

    @staticmethod
    def best_move(
        board: BoardState, ai_is_tiger: bool, depth: Optional[int] = None
    ) -> Optional[Move]:
        """Best step for the AI side, ``None`` if it cannot move at all."""
        ai = MinimaxAI(_side_for(ai_is_tiger), _search_config(depth))
        return ai.best_move(board)

    # ------------------------------------------------------------------
    # Game-state API
    # ------------------------------------------------------------------

    @staticmethod
    def create_initial_state(game_id: Optional[str] = None) -> GameState:
        """Empty board, tiger to place first."""
        if game_id is None:
            return GameState(board=BoardState.empty())
        return GameState(id=game_id, board=BoardState.empty())

    @staticmethod
    def get_phase(game_state: GameState) -> GamePhase:
        if game_state.game_status == GameStatus.FINISHED:
            return GamePhase.TERMINAL
        if (
            game_state.tigers_placed < TIGER_COUNT
            or game_state.men_placed < MAN_COUNT
        ):
            return GamePhase.PLACEMENT
        return GamePhase.MOVEMENT

    @staticmethod
    def get_action_kind(game_state: GameState) -> MoveType:
        """Whether the side to move has to place or step."""
        return get_rules_engine().action_kind(game_state)

    @staticmethod
    def get_valid_moves(game_state: GameState) -> list[Move]:
        return get_rules_engine().get_valid_moves(game_state)

    @staticmethod
    def apply_move(game_state: GameState, move: Move) -> GameState:
        """Apply ``move`` and return the resulting state.

        Raises:
            InvalidMoveError: If ``move`` is not legal in ``game_state``.
        """
        rules = get_rules_engine()
        rules.check_move(game_state, move)

        board = BoardManager.clone(game_state.board)
        tigers_placed = game_state.tigers_placed
        men_placed = game_state.men_placed

        if move.type == MoveType.PLACE:
            BoardManager.place_piece(board, move.to, move.side)
            if move.side == PieceKind.TIGER:
                tigers_placed += 1
            else:
                men_placed += 1
        else:
            if rules.is_capture(game_state.board, move.from_pos, move.to):
                rules.apply_capture(board, move.from_pos, move.to)
                logger.debug(
                    "Tiger %s -> %s captures",
                    move.from_pos.to_key(),
                    move.to.to_key(),
                )
            BoardManager.move_piece(board, move.from_pos, move.to)

        next_state = game_state.model_copy(
            update={
                "board": board,
                "current_side": move.side.opponent,
                "tigers_placed": tigers_placed,
                "men_placed": men_placed,
                "move_history": [*game_state.move_history, move],
            }
        )
        return GameEngine._update_victory(next_state)

    @staticmethod
    def men_remaining(game_state: GameState) -> int:
        """Men on the board plus men still to be placed."""
        on_board = BoardManager.count(game_state.board, Cell.MAN)
        return on_board + (MAN_COUNT - game_state.men_placed)

    @staticmethod
    def _update_victory(game_state: GameState) -> GameState:
        winner: Optional[PieceKind] = None
        rules = get_rules_engine()

        if GameEngine.men_remaining(game_state) < MIN_MEN_FOR_PLAY:
            winner = PieceKind.TIGER
        elif rules.action_kind(game_state) == MoveType.STEP and not (
            rules.has_any_step(game_state.board, game_state.current_side)
        ):
            winner = game_state.current_side.opponent

        if winner is None:
            return game_state

        logger.info(
            "Game %s finished after %d moves: %s wins",
            game_state.id,
            len(game_state.move_history),
            winner.value,
        )
        return game_state.model_copy(
            update={"game_status": GameStatus.FINISHED, "winner": winner}
        )
