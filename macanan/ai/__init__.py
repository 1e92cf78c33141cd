"""AI implementations for Macanan.

    from macanan.ai import create_ai

Architecture:
- base.py: BaseAI abstract base class
- factory.py: create_ai for building AI instances by type
- heuristic_ai.py: placement/movement evaluators, one-ply play
- minimax_ai.py: minimax with alpha-beta pruning
- random_ai.py: uniform random baseline
"""

from macanan.ai.base import BaseAI
from macanan.ai.factory import create_ai
from macanan.ai.heuristic_ai import HeuristicAI
from macanan.ai.minimax_ai import MinimaxAI, SearchResult
from macanan.ai.random_ai import RandomAI

__all__ = [
    "BaseAI",
    "HeuristicAI",
    "MinimaxAI",
    "RandomAI",
    "SearchResult",
    "create_ai",
]
