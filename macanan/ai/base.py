"""
Base AI Player class for Macanan
Abstract base class that all AI implementations inherit from
"""

from abc import ABC, abstractmethod
from typing import Optional, List, Dict, Any
import random

from ..models import GameState, Move, AIConfig, PieceKind
from ..rules.factory import get_rules_engine
from ..rules.interfaces import RulesEngine


def derive_seed(config: AIConfig, side: PieceKind) -> int:
    """
    Derive a deterministic RNG seed when ``AIConfig.rng_seed`` is unset.

    Mixes the search depth and the side into a 32-bit value so two AIs with
    the same config but opposite sides do not share a random stream.
    """
    side_index = 1 if side == PieceKind.TIGER else 2
    base = (config.depth * 1_000_003) ^ (side_index * 97_911)
    return int(base & 0xFFFFFFFF)


class BaseAI(ABC):
    """Abstract base class for all AI implementations"""

    def __init__(self, side: PieceKind, config: AIConfig):
        """
        Initialize AI player

        Args:
            side: The piece kind this AI controls
            config: AI configuration settings
        """
        self.side = side
        self.config = config
        self.move_count = 0
        self.rules_engine: RulesEngine = get_rules_engine()

        if self.config.rng_seed is not None:
            self.rng_seed: int = int(self.config.rng_seed)
        else:
            self.rng_seed = derive_seed(self.config, self.side)
        self.rng: random.Random = random.Random(self.rng_seed)

    @property
    def is_tiger(self) -> bool:
        return self.side == PieceKind.TIGER

    @abstractmethod
    def select_move(self, game_state: GameState) -> Optional[Move]:
        """
        Select the best move for the current game state

        Args:
            game_state: Current game state (``current_side`` must be this
                AI's side)

        Returns:
            Selected move or None if no valid moves
        """
        pass

    @abstractmethod
    def evaluate_position(self, game_state: GameState) -> float:
        """
        Evaluate the current position from this AI's perspective

        Args:
            game_state: Current game state

        Returns:
            Evaluation score (positive = good for this AI, negative = bad)
        """
        pass

    def get_evaluation_breakdown(
        self, game_state: GameState
    ) -> Dict[str, float]:
        """
        Get detailed breakdown of position evaluation

        Args:
            game_state: Current game state

        Returns:
            Dictionary with evaluation components
        """
        return {
            "total": self.evaluate_position(game_state)
        }

    def get_valid_moves(self, game_state: GameState) -> List[Move]:
        """
        Get all valid moves for the current position using the rules engine.

        Args:
            game_state: Current game state

        Returns:
            List of valid Move instances
        """
        return self.rules_engine.get_valid_moves(game_state)

    def get_random_element(self, items: List[Any]) -> Optional[Any]:
        """
        Get random element from list using the per-instance RNG.

        Args:
            items: List of items

        Returns:
            Random item or None if list is empty
        """
        if not items:
            return None
        return self.rng.choice(items)

    def __repr__(self) -> str:
        """String representation of AI"""
        return (
            f"{self.__class__.__name__}"
            f"(side={self.side.value}, "
            f"depth={self.config.depth})"
        )
