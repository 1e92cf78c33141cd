"""
Heuristic AI implementation for Macanan.

Holds the two static evaluators shared by every search-based AI:

- :meth:`HeuristicAI.evaluate_placement` scores the opening. For the tiger
  side it rewards tigers close to the centre and penalises tigers on
  restricted (orthogonal-only) cells; for the man side it rewards men
  standing orthogonally next to a tiger.
- :meth:`HeuristicAI.evaluate_movement` scores the movement phase from the
  tiger's point of view: fewer than three men left is a tiger win, a tiger
  side without a legal step is a man win, otherwise captured men count for
  the tiger and tigers stuck on restricted cells count against it.

The placement heuristic looks at no capture geometry at all; it is a
clustering proxy only.

As an AI in its own right, :class:`HeuristicAI` plays one ply deep: it picks
the move whose resulting position evaluates best for its side.
"""

from __future__ import annotations

import logging
from typing import Optional

from ..board_manager import BoardManager
from ..models import (
    AIConfig,
    BoardState,
    Cell,
    GamePhase,
    GameState,
    GameStatus,
    Move,
    MoveType,
    PieceKind,
)
from ..config import MAN_COUNT, MIN_MEN_FOR_PLAY
from .base import BaseAI
from .heuristic_weights import HeuristicWeights, get_weights

logger = logging.getLogger(__name__)

_CENTER = 2


class HeuristicAI(BaseAI):
    """AI that evaluates a flat set of legal moves with static heuristics."""

    WEIGHT_CENTER_PROXIMITY: float
    WEIGHT_TIGER_RESTRICTED_PLACEMENT: float
    WEIGHT_MAN_TIGER_ADJACENCY: float
    WEIGHT_CAPTURED_MAN: float
    WEIGHT_TIGER_RESTRICTED_MOVEMENT: float
    SCORE_TIGER_WIN: float
    SCORE_MAN_WIN: float

    def __init__(
        self,
        side: PieceKind,
        config: AIConfig,
        weights: HeuristicWeights | None = None,
    ) -> None:
        super().__init__(side, config)
        for name, value in get_weights(weights).items():
            setattr(self, name, value)

    # ------------------------------------------------------------------
    # Static evaluators
    # ------------------------------------------------------------------

    def evaluate_placement(
        self, board: BoardState, maximizing_is_tiger: bool
    ) -> float:
        """Score a placement-phase board for the side that is searching.

        Args:
            board: Board to score.
            maximizing_is_tiger: True when the searching side plays the
                tigers, which selects the tiger-side heuristic.
        """
        if maximizing_is_tiger:
            return self._center_score(board) + self._restricted_tiger_penalty(
                board, self.WEIGHT_TIGER_RESTRICTED_PLACEMENT
            )
        return self._adjacency_score(board)

    def evaluate_movement(self, board: BoardState) -> float:
        """Score a movement-phase board, positive favouring the tigers."""
        men = BoardManager.count(board, Cell.MAN)
        if men < MIN_MEN_FOR_PLAY:
            return self.SCORE_TIGER_WIN
        if not self.rules_engine.has_any_legal_move(board):
            return self.SCORE_MAN_WIN

        score = (MAN_COUNT - men) * self.WEIGHT_CAPTURED_MAN
        return score + self._restricted_tiger_penalty(
            board, self.WEIGHT_TIGER_RESTRICTED_MOVEMENT
        )

    def _center_score(self, board: BoardState) -> float:
        total = 0.0
        for pos in board.tiger_positions:
            closeness = (2 - abs(pos.row - _CENTER)) + (2 - abs(pos.col - _CENTER))
            total += closeness * self.WEIGHT_CENTER_PROXIMITY
        return total

    def _restricted_tiger_penalty(
        self, board: BoardState, weight: float
    ) -> float:
        return weight * sum(
            1 for pos in board.tiger_positions if BoardManager.is_restricted(pos)
        )

    def _adjacency_score(self, board: BoardState) -> float:
        adjacent = 0
        for man in BoardManager.positions_of(board, PieceKind.MAN):
            for tiger in board.tiger_positions:
                if abs(man.row - tiger.row) + abs(man.col - tiger.col) == 1:
                    adjacent += 1
        return adjacent * self.WEIGHT_MAN_TIGER_ADJACENCY

    # ------------------------------------------------------------------
    # BaseAI interface
    # ------------------------------------------------------------------

    def perspective(self) -> float:
        """+1 when this AI plays the tigers, -1 for the men."""
        return 1.0 if self.is_tiger else -1.0

    def evaluate_position(self, game_state: GameState) -> float:
        """Evaluate ``game_state`` from this AI's perspective."""
        if game_state.game_status == GameStatus.FINISHED:
            if game_state.winner == self.side:
                return self.SCORE_TIGER_WIN
            if game_state.winner is not None:
                return -self.SCORE_TIGER_WIN
            return 0.0

        action = self.rules_engine.action_kind(game_state)
        if action == MoveType.PLACE:
            return self.evaluate_placement(game_state.board, self.is_tiger)
        return self.evaluate_movement(game_state.board) * self.perspective()

    def get_evaluation_breakdown(
        self, game_state: GameState
    ) -> dict[str, float]:
        board = game_state.board
        breakdown = {"total": self.evaluate_position(game_state)}
        if self.rules_engine.action_kind(game_state) == MoveType.PLACE:
            phase = GamePhase.PLACEMENT
        else:
            phase = GamePhase.MOVEMENT
        breakdown.update(self.evaluation_components(board, phase))
        return breakdown

    def evaluation_components(
        self, board: BoardState, phase: GamePhase
    ) -> dict[str, float]:
        """Per-feature contributions used by the evaluators."""
        if phase == GamePhase.PLACEMENT:
            return {
                "center_proximity": self._center_score(board),
                "restricted_tigers": self._restricted_tiger_penalty(
                    board, self.WEIGHT_TIGER_RESTRICTED_PLACEMENT
                ),
                "man_tiger_adjacency": self._adjacency_score(board),
            }
        men = BoardManager.count(board, Cell.MAN)
        return {
            "men_remaining": float(men),
            "captured_men": (MAN_COUNT - men) * self.WEIGHT_CAPTURED_MAN,
            "restricted_tigers": self._restricted_tiger_penalty(
                board, self.WEIGHT_TIGER_RESTRICTED_MOVEMENT
            ),
            "tiger_mobility": (
                1.0 if self.rules_engine.has_any_legal_move(board) else 0.0
            ),
        }

    def select_move(self, game_state: GameState) -> Optional[Move]:
        """Pick the legal move whose resulting board scores best.

        Ties keep the first move in enumeration order.
        """
        valid_moves = self.get_valid_moves(game_state)
        if not valid_moves:
            return None

        placing = valid_moves[0].type == MoveType.PLACE
        best_move: Optional[Move] = None
        best_score = float("-inf")
        for move in valid_moves:
            child = BoardManager.clone(game_state.board)
            if placing:
                BoardManager.place_piece(child, move.to, move.side)
                score = self.evaluate_placement(child, self.is_tiger)
            else:
                if self.rules_engine.is_capture(
                    game_state.board, move.from_pos, move.to
                ):
                    self.rules_engine.apply_capture(child, move.from_pos, move.to)
                BoardManager.move_piece(child, move.from_pos, move.to)
                score = self.evaluate_movement(child) * self.perspective()
            if score > best_score:
                best_score = score
                best_move = move

        self.move_count += 1
        logger.debug(
            "HeuristicAI(side=%s): %d candidates, best=%.1f",
            self.side.value,
            len(valid_moves),
            best_score,
        )
        return best_move
