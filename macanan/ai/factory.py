"""AI factory for Macanan.

    from macanan.ai.factory import create_ai
    from macanan.models import AIType, PieceKind

    ai = create_ai(AIType.MINIMAX, PieceKind.TIGER)
    move = ai.select_move(game_state)
"""

from __future__ import annotations

import logging

from ..errors import AIError
from ..models import AIConfig, AIType, PieceKind
from .base import BaseAI
from .heuristic_ai import HeuristicAI
from .minimax_ai import MinimaxAI
from .random_ai import RandomAI

logger = logging.getLogger(__name__)

_AI_CLASSES: dict[AIType, type[BaseAI]] = {
    AIType.RANDOM: RandomAI,
    AIType.HEURISTIC: HeuristicAI,
    AIType.MINIMAX: MinimaxAI,
}


def create_ai(
    ai_type: AIType,
    side: PieceKind,
    config: AIConfig | None = None,
) -> BaseAI:
    """Create an AI of ``ai_type`` playing ``side``.

    Args:
        ai_type: Which engine to build.
        side: Piece kind the AI controls.
        config: AI configuration; defaults to ``AIConfig()``.

    Raises:
        AIError: If ``ai_type`` has no registered implementation.
    """
    try:
        ai_class = _AI_CLASSES[AIType(ai_type)]
    except (KeyError, ValueError) as e:
        raise AIError(
            f"Unknown AI type: {ai_type}", context={"ai_type": str(ai_type)}
        ) from e

    ai = ai_class(side, config or AIConfig())
    logger.debug("Created %r", ai)
    return ai
