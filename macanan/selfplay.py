#!/usr/bin/env python3
"""
Run AI-vs-AI Macanan games.

Usage:
    macanan-selfplay --games 10 --tiger-ai minimax --man-ai random --depth 3
    python -m macanan.selfplay --games 1 --seed 7 --verbose
"""

from __future__ import annotations

import argparse
import logging
import time
from dataclasses import dataclass
from typing import Optional

from .ai.factory import create_ai
from .board_manager import BoardManager
from .config import MAX_SEARCH_DEPTH, SEARCH_DEPTH
from .errors import AIError
from .game_engine import GameEngine
from .metrics import record_game_outcome
from .models import AIConfig, AIType, GameState, GameStatus, PieceKind

logger = logging.getLogger(__name__)

DEFAULT_MAX_MOVES = 200


@dataclass
class GameResult:
    """Outcome of one self-play game."""
    game_id: str
    winner: Optional[PieceKind]
    moves: int
    duration_seconds: float
    final_state: GameState


def play_game(
    tiger_ai_type: AIType = AIType.MINIMAX,
    man_ai_type: AIType = AIType.MINIMAX,
    depth: int = SEARCH_DEPTH,
    seed: Optional[int] = None,
    max_moves: int = DEFAULT_MAX_MOVES,
    game_id: Optional[str] = None,
) -> GameResult:
    """Play one game between two AIs.

    A game that reaches ``max_moves`` without a winner ends with
    ``winner=None``.
    """
    start = time.time()
    state = GameEngine.create_initial_state(game_id)
    players = {
        PieceKind.TIGER: create_ai(
            tiger_ai_type,
            PieceKind.TIGER,
            AIConfig(depth=depth, rngSeed=seed),
        ),
        PieceKind.MAN: create_ai(
            man_ai_type,
            PieceKind.MAN,
            AIConfig(depth=depth, rngSeed=None if seed is None else seed + 1),
        ),
    }

    while (
        state.game_status == GameStatus.ACTIVE
        and len(state.move_history) < max_moves
    ):
        ai = players[state.current_side]
        move = ai.select_move(state)
        if move is None:
            # The engine ends the game before a side runs out of moves.
            raise AIError(
                "AI returned no move in an active game",
                context={"side": state.current_side.value, "game_id": state.id},
            )
        state = GameEngine.apply_move(state, move)
        logger.debug("%s played %s", move.side.value, move)

    result = GameResult(
        game_id=state.id,
        winner=state.winner,
        moves=len(state.move_history),
        duration_seconds=time.time() - start,
        final_state=state,
    )
    record_game_outcome(
        result.winner.value if result.winner is not None else None,
        result.moves,
    )
    return result


def create_argument_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        description="Play AI-vs-AI Macanan games and report the outcomes."
    )
    ai_choices = [t.value for t in AIType]
    parser.add_argument("--games", type=int, default=1, help="Number of games")
    parser.add_argument(
        "--tiger-ai", choices=ai_choices, default=AIType.MINIMAX.value
    )
    parser.add_argument(
        "--man-ai", choices=ai_choices, default=AIType.MINIMAX.value
    )
    parser.add_argument(
        "--depth",
        type=int,
        default=SEARCH_DEPTH,
        choices=range(1, MAX_SEARCH_DEPTH + 1),
        metavar=f"[1-{MAX_SEARCH_DEPTH}]",
        help="Minimax search depth",
    )
    parser.add_argument("--seed", type=int, default=None, help="Base RNG seed")
    parser.add_argument(
        "--max-moves",
        type=int,
        default=DEFAULT_MAX_MOVES,
        help="Stop a game without a winner after this many moves",
    )
    parser.add_argument(
        "--verbose", action="store_true", help="Log every move"
    )
    return parser


def main(argv: Optional[list[str]] = None) -> int:
    args = create_argument_parser().parse_args(argv)
    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.INFO,
        format='%(asctime)s - %(name)s - %(levelname)s - %(message)s',
    )

    tally = {PieceKind.TIGER: 0, PieceKind.MAN: 0, None: 0}
    for index in range(args.games):
        seed = None if args.seed is None else args.seed + 2 * index
        result = play_game(
            tiger_ai_type=AIType(args.tiger_ai),
            man_ai_type=AIType(args.man_ai),
            depth=args.depth,
            seed=seed,
            max_moves=args.max_moves,
        )
        tally[result.winner] += 1
        logger.info(
            "Game %d/%d (%s): winner=%s moves=%d time=%.2fs",
            index + 1,
            args.games,
            result.game_id,
            result.winner.value if result.winner else "none",
            result.moves,
            result.duration_seconds,
        )
        if args.verbose:
            logger.debug("Final board:\n%s", BoardManager.render(result.final_state.board))

    logger.info(
        "Summary: tiger=%d man=%d unfinished=%d",
        tally[PieceKind.TIGER],
        tally[PieceKind.MAN],
        tally[None],
    )
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
