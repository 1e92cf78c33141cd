"""Minimax AI implementation for Macanan.

This agent runs a depth-limited minimax search with alpha-beta pruning. The
same search drives both halves of the game:

- **placement**: every empty cell (row-major) is a candidate; the side on
  move places its own piece kind. Leaves are scored with
  :meth:`HeuristicAI.evaluate_placement` for the searching side.
- **movement**: every legal step of every piece of the side on move
  (tigers in ``tiger_positions`` order, men row-major). A tiger jump that
  captures on the parent board removes the two jumped men from the child.
  Leaves are scored with :meth:`HeuristicAI.evaluate_movement`, negated when
  the AI plays the men so the maximizer always maximizes its own outcome.

The root is always a maximizing node for the AI's own side; sides alternate
every ply. Every child is searched on its own clone of the grid and tiger
list, so sibling branches never share mutable state.

Pruning never changes the result: with ``config.use_alpha_beta`` disabled
the search visits the full tree and returns the same score and move. Moves
are not reordered; ties keep the first move found.
"""

from __future__ import annotations

import logging
from collections.abc import Iterator
from dataclasses import dataclass
from typing import Optional

from ..board_manager import BoardManager
from ..errors import AIError
from ..models import (
    BoardState,
    GamePhase,
    GameState,
    GameStatus,
    Move,
    MoveType,
    PieceKind,
    Position,
)
from .heuristic_ai import HeuristicAI

logger = logging.getLogger(__name__)

_Child = tuple[Move, BoardState]


@dataclass
class SearchResult:
    """Outcome of one root search."""
    score: float
    move: Optional[Move]
    depth: int
    nodes_visited: int


class MinimaxAI(HeuristicAI):
    """AI that uses minimax with alpha-beta pruning.

    Search depth comes from :attr:`AIConfig.depth` (default 3). Depth 0
    evaluates the root immediately and returns no move.
    """

    def __init__(self, *args, **kwargs) -> None:
        super().__init__(*args, **kwargs)
        self.nodes_visited: int = 0
        self.last_result: Optional[SearchResult] = None

    # ------------------------------------------------------------------
    # Public entry points
    # ------------------------------------------------------------------

    def select_move(self, game_state: GameState) -> Optional[Move]:
        """Select the best move for the side to move in ``game_state``.

        Returns:
            The selected :class:`Move`, or ``None`` if the game is over or
            the side has no legal move.
        """
        if game_state.game_status != GameStatus.ACTIVE:
            return None
        if game_state.current_side != self.side:
            raise AIError(
                "asked to move out of turn",
                context={
                    "ai_side": self.side.value,
                    "current_side": game_state.current_side.value,
                },
            )

        if self.rules_engine.action_kind(game_state) == MoveType.PLACE:
            result = self.search(game_state.board, GamePhase.PLACEMENT)
        else:
            result = self.search(game_state.board, GamePhase.MOVEMENT)

        self.move_count += 1
        return result.move

    def best_placement(
        self, board: BoardState, depth: Optional[int] = None
    ) -> Optional[Position]:
        """Best cell for this AI's next placement, or ``None`` if the board
        is full."""
        result = self.search(board, GamePhase.PLACEMENT, depth)
        return result.move.to if result.move is not None else None

    def best_move(
        self, board: BoardState, depth: Optional[int] = None
    ) -> Optional[Move]:
        """Best step for this AI's pieces, or ``None`` if none can move."""
        return self.search(board, GamePhase.MOVEMENT, depth).move

    def search(
        self,
        board: BoardState,
        phase: GamePhase,
        depth: Optional[int] = None,
    ) -> SearchResult:
        """Run one root search on a snapshot of ``board``.

        ``board`` itself is never modified.
        """
        if phase == GamePhase.TERMINAL:
            raise AIError("cannot search a terminal position")

        depth = self.config.depth if depth is None else depth
        self.nodes_visited = 0
        score, move = self._minimax(
            board,
            depth,
            float("-inf"),
            float("inf"),
            True,
            phase,
        )
        result = SearchResult(
            score=score,
            move=move,
            depth=depth,
            nodes_visited=self.nodes_visited,
        )
        self.last_result = result
        logger.debug(
            "MinimaxAI(side=%s): phase=%s depth=%d nodes=%d score=%.1f move=%s",
            self.side.value,
            phase.value,
            depth,
            self.nodes_visited,
            score,
            move,
        )
        return result

    # ------------------------------------------------------------------
    # Search
    # ------------------------------------------------------------------

    def _minimax(
        self,
        board: BoardState,
        depth: int,
        alpha: float,
        beta: float,
        maximizing: bool,
        phase: GamePhase,
    ) -> tuple[float, Optional[Move]]:
        self.nodes_visited += 1
        if depth == 0:
            return self._evaluate_leaf(board, phase), None

        side = self.side if maximizing else self.side.opponent
        best_score = float("-inf") if maximizing else float("inf")
        best_move: Optional[Move] = None

        for move, child in self._children(board, side, phase):
            score, _ = self._minimax(
                child, depth - 1, alpha, beta, not maximizing, phase
            )
            if maximizing:
                if score > best_score:
                    best_score = score
                    best_move = move
                alpha = max(alpha, best_score)
            else:
                if score < best_score:
                    best_score = score
                    best_move = move
                beta = min(beta, best_score)

            if self.config.use_alpha_beta and beta <= alpha:
                break

        if best_move is None:
            # Side on move has nothing to play: score the position as is.
            return self._evaluate_leaf(board, phase), None
        return best_score, best_move

    def _evaluate_leaf(self, board: BoardState, phase: GamePhase) -> float:
        if phase == GamePhase.PLACEMENT:
            return self.evaluate_placement(board, self.is_tiger)
        return self.evaluate_movement(board) * self.perspective()

    def _children(
        self, board: BoardState, side: PieceKind, phase: GamePhase
    ) -> Iterator[_Child]:
        if phase == GamePhase.PLACEMENT:
            return self._placement_children(board, side)
        return self._movement_children(board, side)

    def _placement_children(
        self, board: BoardState, side: PieceKind
    ) -> Iterator[_Child]:
        for position in BoardManager.empty_positions(board):
            child = BoardManager.clone(board)
            BoardManager.place_piece(child, position, side)
            yield Move.place(side, position), child

    def _movement_children(
        self, board: BoardState, side: PieceKind
    ) -> Iterator[_Child]:
        for position in BoardManager.positions_of(board, side):
            for move in self.rules_engine.legal_moves(board, position, side):
                child = BoardManager.clone(board)
                if side == PieceKind.TIGER and self.rules_engine.can_capture(
                    board, move.from_pos, move.to
                ):
                    self.rules_engine.apply_capture(child, move.from_pos, move.to)
                BoardManager.move_piece(child, move.from_pos, move.to)
                yield move, child
