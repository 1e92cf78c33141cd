"""
Shared pytest fixtures for macanan tests.

Board and game-state fixtures are function-scoped so tests can mutate what
they get without leaking into each other.
"""

from pathlib import Path
import sys
from typing import Callable, Iterable, Optional, Tuple

import pytest

# Ensure the project root is on sys.path so `import macanan` works when
# running pytest without installing the package.
PROJECT_ROOT = Path(__file__).resolve().parents[1]
if str(PROJECT_ROOT) not in sys.path:
    sys.path.insert(0, str(PROJECT_ROOT))

from macanan.models import (  # noqa: E402
    BoardState,
    Cell,
    GameState,
    PieceKind,
    Position,
)

Coord = Tuple[int, int]


def pos(row: int, col: int) -> Position:
    return Position(row=row, col=col)


def make_board(
    tigers: Iterable[Coord] = (),
    men: Iterable[Coord] = (),
) -> BoardState:
    """Build a validated board with tigers (in the given order) and men."""
    grid = [[Cell.EMPTY] * 5 for _ in range(5)]
    tiger_positions = []
    for r, c in tigers:
        grid[r][c] = Cell.TIGER
        tiger_positions.append(pos(r, c))
    for r, c in men:
        grid[r][c] = Cell.MAN
    return BoardState(grid=grid, tiger_positions=tiger_positions)


@pytest.fixture
def board_factory() -> Callable[..., BoardState]:
    """Factory for BoardState instances from coordinate lists."""
    return make_board


@pytest.fixture
def state_factory() -> Callable[..., GameState]:
    """Factory for GameState instances with customizable counters."""

    def _create_state(
        tigers: Iterable[Coord] = (),
        men: Iterable[Coord] = (),
        current_side: PieceKind = PieceKind.TIGER,
        men_placed: Optional[int] = None,
    ) -> GameState:
        tigers = list(tigers)
        men = list(men)
        return GameState(
            id="test-game",
            board=make_board(tigers, men),
            current_side=current_side,
            tigers_placed=len(tigers),
            men_placed=len(men) if men_placed is None else men_placed,
        )

    return _create_state


@pytest.fixture
def movement_state(state_factory) -> GameState:
    """All pieces placed, tiger to move.

    T . M . .
    . . M . .
    M M T M .
    . . M . .
    M . . . M
    """
    return state_factory(
        tigers=[(0, 0), (2, 2)],
        men=[(0, 2), (1, 2), (2, 0), (2, 1), (2, 3), (3, 2), (4, 0), (4, 4)],
    )
