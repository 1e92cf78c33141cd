"""Random AI implementation for Macanan.

This agent selects uniformly random legal moves using the per-instance RNG on
the :class:`BaseAI`. It is intended as a self-play baseline, not for
competitive play.
"""

from __future__ import annotations

from ..models import GameState, Move
from .base import BaseAI


class RandomAI(BaseAI):
    """AI that selects random valid moves."""

    def select_move(self, game_state: GameState) -> Move | None:
        """Select a random valid move for ``game_state``.

        Returns:
            A random valid :class:`Move` or ``None`` if no legal moves exist.
        """
        valid_moves = self.get_valid_moves(game_state)

        if not valid_moves:
            return None

        selected = self.get_random_element(valid_moves)

        self.move_count += 1
        return selected

    def evaluate_position(self, game_state: GameState) -> float:
        """Return a small random evaluation for ``game_state``.

        RandomAI does not evaluate positions meaningfully; the value only
        adds variance for tooling that inspects scalar evaluations.
        """
        _ = game_state  # unused in this implementation
        return self.rng.uniform(-0.1, 0.1)
