"""Default Macanan rules engine.

Movement
    A piece steps to an adjacent empty cell along a board line. Cells in
    :data:`~macanan.board_manager.RESTRICTED_POSITIONS` have no diagonal
    lines, so pieces standing there step orthogonally only.

Capture
    A tiger captures by jumping three cells along a row, column or diagonal
    onto an empty cell, provided both cells it jumps over hold men. A tiger
    anywhere on the path blocks the jump. Both men are removed.

All board arguments are treated as read-only except in
:meth:`DefaultRulesEngine.apply_capture`, which clears the jumped cells of
the board it is given.
"""

from __future__ import annotations

import logging

from ..board_manager import BoardManager
from ..config import MAN_COUNT, TIGER_COUNT
from ..errors import InvalidMoveError, RulesViolationError
from ..models import (
    BoardState,
    Cell,
    GameState,
    GameStatus,
    Move,
    MoveType,
    PieceKind,
    Position,
)

logger = logging.getLogger(__name__)

CAPTURE_DISTANCE = 3

# Horizontal, vertical, then diagonal jump offsets.
_CAPTURE_OFFSETS: tuple[tuple[int, int], ...] = (
    (0, -CAPTURE_DISTANCE), (0, CAPTURE_DISTANCE),
    (-CAPTURE_DISTANCE, 0), (CAPTURE_DISTANCE, 0),
    (-CAPTURE_DISTANCE, -CAPTURE_DISTANCE), (-CAPTURE_DISTANCE, CAPTURE_DISTANCE),
    (CAPTURE_DISTANCE, -CAPTURE_DISTANCE), (CAPTURE_DISTANCE, CAPTURE_DISTANCE),
)


def _sign(value: int) -> int:
    return (value > 0) - (value < 0)


class DefaultRulesEngine:
    """Stateless rules engine over :class:`BoardState` snapshots."""

    # ------------------------------------------------------------------
    # Movement
    # ------------------------------------------------------------------

    def is_valid_step(
        self, board: BoardState, from_pos: Position, to: Position
    ) -> bool:
        """Return True if a piece on ``from_pos`` may step to ``to``.

        ``from_pos`` and ``to`` must differ; a zero-length step is not
        rejected here.
        """
        if not BoardManager.is_empty(board, to):
            return False

        row_diff = abs(to.row - from_pos.row)
        col_diff = abs(to.col - from_pos.col)

        if BoardManager.is_restricted(from_pos):
            return (row_diff == 1 and col_diff == 0) or (
                row_diff == 0 and col_diff == 1
            )

        return row_diff <= 1 and col_diff <= 1

    def legal_neighbor_moves(
        self, board: BoardState, position: Position
    ) -> list[Position]:
        """Empty adjacent cells reachable from ``position`` in one step."""
        destinations: list[Position] = []
        for dr, dc in BoardManager.directions_for(position):
            target = BoardManager.position(position.row + dr, position.col + dc)
            if target is not None and BoardManager.is_empty(board, target):
                destinations.append(target)
        return destinations

    def legal_moves(
        self, board: BoardState, position: Position, kind: PieceKind
    ) -> list[Move]:
        """Every step available to the ``kind`` piece on ``position``.

        Neighbor steps come first, then (tigers only) capture jumps.
        """
        moves = [
            Move.step(kind, position, target)
            for target in self.legal_neighbor_moves(board, position)
        ]
        if kind == PieceKind.TIGER:
            moves.extend(
                Move.step(kind, position, target)
                for target in self.capture_moves(board, position)
            )
        return moves

    def has_any_legal_move(self, board: BoardState) -> bool:
        """True if at least one tiger can step or capture."""
        return self.has_any_step(board, PieceKind.TIGER)

    def has_any_step(self, board: BoardState, side: PieceKind) -> bool:
        for position in BoardManager.positions_of(board, side):
            if self.legal_neighbor_moves(board, position):
                return True
            if side == PieceKind.TIGER and self.capture_moves(board, position):
                return True
        return False

    # ------------------------------------------------------------------
    # Captures
    # ------------------------------------------------------------------

    def capture_moves(
        self, board: BoardState, position: Position
    ) -> list[Position]:
        """Landing cells of every capture available from ``position``."""
        landings: list[Position] = []
        for dr, dc in _CAPTURE_OFFSETS:
            target = BoardManager.position(position.row + dr, position.col + dc)
            if target is not None and self.can_capture(board, position, target):
                landings.append(target)
        return landings

    @staticmethod
    def jumped_positions(
        from_pos: Position, to: Position
    ) -> list[Position] | None:
        """The two cells between ``from_pos`` and ``to``.

        Returns ``None`` unless the two positions lie on a straight line
        (row, column or diagonal) exactly three cells apart.
        """
        row_delta = to.row - from_pos.row
        col_delta = to.col - from_pos.col
        if max(abs(row_delta), abs(col_delta)) != CAPTURE_DISTANCE:
            return None
        if row_delta != 0 and col_delta != 0 and abs(row_delta) != abs(col_delta):
            return None

        row_step = _sign(row_delta)
        col_step = _sign(col_delta)
        return [
            BoardManager.position(
                from_pos.row + row_step * i, from_pos.col + col_step * i
            )
            for i in range(1, CAPTURE_DISTANCE)
        ]

    def can_capture(
        self, board: BoardState, from_pos: Position, to: Position
    ) -> bool:
        """Return True if a tiger on ``from_pos`` can capture by landing on
        ``to``."""
        if not BoardManager.is_empty(board, to):
            return False

        path = self.jumped_positions(from_pos, to)
        if path is None:
            return False

        men = 0
        for position in path:
            cell = BoardManager.get_cell(board, position)
            if cell == Cell.TIGER:
                return False
            if cell == Cell.MAN:
                men += 1
        return men == 2

    def is_capture(
        self, board: BoardState, from_pos: Position, to: Position
    ) -> bool:
        """Whether stepping ``from_pos`` -> ``to`` on ``board`` captures."""
        return (
            BoardManager.get_cell(board, from_pos) == Cell.TIGER
            and self.can_capture(board, from_pos, to)
        )

    def apply_capture(
        self, board: BoardState, from_pos: Position, to: Position
    ) -> None:
        """Clear the two jumped cells of ``board`` in place.

        The capturing tiger itself is not moved.
        """
        path = self.jumped_positions(from_pos, to)
        if path is None:
            raise RulesViolationError(
                "capture must jump along a straight line of length 3",
                rule="capture_geometry",
                context={"from": from_pos.to_key(), "to": to.to_key()},
            )
        for position in path:
            if BoardManager.get_cell(board, position) == Cell.TIGER:
                raise RulesViolationError(
                    "a capture cannot remove a tiger",
                    rule="capture_blocked",
                    context={"at": position.to_key()},
                )
        for position in path:
            board.grid[position.row][position.col] = Cell.EMPTY

    # ------------------------------------------------------------------
    # Game-state level legality
    # ------------------------------------------------------------------

    @staticmethod
    def action_kind(game_state: GameState) -> MoveType:
        """Whether the side to move has to place a piece or step one.

        Tigers step as soon as both are on the board, even while men are
        still being placed.
        """
        if game_state.current_side == PieceKind.TIGER:
            placed, total = game_state.tigers_placed, TIGER_COUNT
        else:
            placed, total = game_state.men_placed, MAN_COUNT
        return MoveType.PLACE if placed < total else MoveType.STEP

    def get_valid_moves(self, game_state: GameState) -> list[Move]:
        """Every legal move for the side to move, in enumeration order."""
        if game_state.game_status != GameStatus.ACTIVE:
            return []

        side = game_state.current_side
        board = game_state.board
        if self.action_kind(game_state) == MoveType.PLACE:
            return [
                Move.place(side, position)
                for position in BoardManager.empty_positions(board)
            ]

        moves: list[Move] = []
        for position in BoardManager.positions_of(board, side):
            moves.extend(self.legal_moves(board, position, side))
        return moves

    def check_move(self, game_state: GameState, move: Move) -> None:
        """Raise :class:`InvalidMoveError` if ``move`` is not legal."""
        context = {"move": move.model_dump(mode="json", by_alias=True)}

        if game_state.game_status != GameStatus.ACTIVE:
            raise InvalidMoveError(
                "game is already finished", rule="game_over", context=context
            )
        if move.side != game_state.current_side:
            raise InvalidMoveError(
                f"it is {game_state.current_side.value}'s turn",
                rule="wrong_side",
                context=context,
            )
        expected = self.action_kind(game_state)
        if move.type != expected:
            raise InvalidMoveError(
                f"{move.side.value} must {expected.value} this turn",
                rule="wrong_action",
                context=context,
            )

        board = game_state.board
        if not BoardManager.is_empty(board, move.to):
            raise InvalidMoveError(
                "destination is occupied",
                rule="occupied_destination",
                context=context,
            )
        if move.type == MoveType.PLACE:
            return

        if BoardManager.get_cell(board, move.from_pos) != move.side.cell:
            raise InvalidMoveError(
                f"no {move.side.value} on {move.from_pos.to_key()}",
                rule="missing_piece",
                context=context,
            )
        if move.from_pos == move.to:
            raise InvalidMoveError(
                "a step must change position", rule="null_step", context=context
            )
        if self.is_valid_step(board, move.from_pos, move.to):
            return
        if move.side == PieceKind.TIGER and self.can_capture(
            board, move.from_pos, move.to
        ):
            return
        rule = (
            "restricted_orthogonal"
            if BoardManager.is_restricted(move.from_pos)
            else "not_adjacent"
        )
        raise InvalidMoveError(
            "destination is not reachable from the source cell",
            rule=rule,
            context=context,
        )

    def validate_move(self, game_state: GameState, move: Move) -> bool:
        """Boolean form of :meth:`check_move`."""
        try:
            self.check_move(game_state, move)
        except InvalidMoveError as e:
            logger.debug("Rejected move: %s", e)
            return False
        return True
