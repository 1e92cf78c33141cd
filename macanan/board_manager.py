"""Board-level helpers for the Macanan AI service.

The 5x5 Macanan board is an alquerque-style lattice: every cell is joined to
its orthogonal neighbours, and only the cells with an even ``row + col`` carry
the two diagonal lines. Pieces standing on one of the other twelve cells (the
*restricted* set) may therefore only step orthogonally.
"""
from __future__ import annotations

import hashlib

from .config import BOARD_SIZE
from .models import BoardState, Cell, PieceKind, Position

__all__ = [
    "ALL_DIRECTIONS",
    "BoardManager",
    "ORTHOGONAL_DIRECTIONS",
    "RESTRICTED_POSITIONS",
]

# E, S, W, N
ORTHOGONAL_DIRECTIONS: tuple[tuple[int, int], ...] = (
    (0, 1), (1, 0), (0, -1), (-1, 0),
)
# E, SE, S, SW, W, NW, N, NE
ALL_DIRECTIONS: tuple[tuple[int, int], ...] = (
    (0, 1), (1, 1), (1, 0), (1, -1),
    (0, -1), (-1, -1), (-1, 0), (-1, 1),
)

# One shared instance per cell, row-major.
_POSITIONS: tuple[tuple[Position, ...], ...] = tuple(
    tuple(Position(row=r, col=c) for c in range(BOARD_SIZE))
    for r in range(BOARD_SIZE)
)

RESTRICTED_POSITIONS: frozenset[Position] = frozenset(
    _POSITIONS[r][c]
    for r in range(BOARD_SIZE)
    for c in range(BOARD_SIZE)
    if (r + c) % 2 == 1
)


class BoardManager:
    """Helper for board-level operations.

    Provides cell queries, piece counting, cloning and the low-level
    placement/step primitives that keep ``tiger_positions`` consistent with
    the grid. Rules legality lives in :mod:`macanan.rules`; nothing here
    decides whether a move is allowed.
    """

    @staticmethod
    def is_on_board(row: int, col: int) -> bool:
        return 0 <= row < BOARD_SIZE and 0 <= col < BOARD_SIZE

    @staticmethod
    def position(row: int, col: int) -> Position | None:
        """Return the shared ``Position`` for ``(row, col)`` or ``None``
        when the coordinates fall off the board."""
        if not BoardManager.is_on_board(row, col):
            return None
        return _POSITIONS[row][col]

    @staticmethod
    def all_positions() -> list[Position]:
        return [p for row in _POSITIONS for p in row]

    @staticmethod
    def is_restricted(position: Position) -> bool:
        return position in RESTRICTED_POSITIONS

    @staticmethod
    def directions_for(position: Position) -> tuple[tuple[int, int], ...]:
        if position in RESTRICTED_POSITIONS:
            return ORTHOGONAL_DIRECTIONS
        return ALL_DIRECTIONS

    @staticmethod
    def get_cell(board: BoardState, position: Position) -> Cell:
        return board.grid[position.row][position.col]

    @staticmethod
    def is_empty(board: BoardState, position: Position) -> bool:
        return board.grid[position.row][position.col] == Cell.EMPTY

    @staticmethod
    def positions_of(board: BoardState, kind: PieceKind) -> list[Position]:
        """Positions holding ``kind``.

        Tigers come back in ``tiger_positions`` order, men in row-major
        order.
        """
        if kind == PieceKind.TIGER:
            return list(board.tiger_positions)
        return [
            _POSITIONS[r][c]
            for r, row in enumerate(board.grid)
            for c, cell in enumerate(row)
            if cell == Cell.MAN
        ]

    @staticmethod
    def empty_positions(board: BoardState) -> list[Position]:
        """Empty cells in row-major order."""
        return [
            _POSITIONS[r][c]
            for r, row in enumerate(board.grid)
            for c, cell in enumerate(row)
            if cell == Cell.EMPTY
        ]

    @staticmethod
    def count(board: BoardState, cell: Cell) -> int:
        return sum(row.count(cell) for row in board.grid)

    @staticmethod
    def clone(board: BoardState) -> BoardState:
        """Independent copy of grid and tiger list.

        Skips validation: the source board is already consistent.
        """
        return BoardState.model_construct(
            grid=[list(row) for row in board.grid],
            tiger_positions=list(board.tiger_positions),
        )

    @staticmethod
    def place_piece(
        board: BoardState, position: Position, kind: PieceKind
    ) -> None:
        """Put ``kind`` on the empty cell ``position`` (in place)."""
        board.grid[position.row][position.col] = kind.cell
        if kind == PieceKind.TIGER:
            board.tiger_positions.append(position)

    @staticmethod
    def move_piece(
        board: BoardState, from_pos: Position, to: Position
    ) -> None:
        """Move whatever stands on ``from_pos`` to ``to`` (in place).

        A moving tiger is removed from ``tiger_positions`` and the new
        position appended at the end.
        """
        cell = board.grid[from_pos.row][from_pos.col]
        board.grid[from_pos.row][from_pos.col] = Cell.EMPTY
        board.grid[to.row][to.col] = cell
        if cell == Cell.TIGER:
            board.tiger_positions.remove(from_pos)
            board.tiger_positions.append(to)

    @staticmethod
    def hash_board(board: BoardState) -> str:
        """Stable short fingerprint of the board used in logs."""
        symbols = {Cell.EMPTY: ".", Cell.TIGER: "T", Cell.MAN: "M"}
        text = "/".join(
            "".join(symbols[cell] for cell in row) for row in board.grid
        )
        return hashlib.sha256(text.encode("ascii")).hexdigest()[:16]

    @staticmethod
    def render(board: BoardState) -> str:
        """Plain-text picture of the board, one row per line."""
        symbols = {Cell.EMPTY: ".", Cell.TIGER: "T", Cell.MAN: "M"}
        return "\n".join(
            " ".join(symbols[cell] for cell in row) for row in board.grid
        )
