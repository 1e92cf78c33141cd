"""Tests for DefaultRulesEngine movement, capture and move checking."""

import pytest

from macanan.board_manager import RESTRICTED_POSITIONS, BoardManager
from macanan.errors import InvalidMoveError, RulesViolationError
from macanan.models import Cell, GameStatus, Move, MoveType, PieceKind, Position
from macanan.rules import DefaultRulesEngine, get_rules_engine


def P(row: int, col: int) -> Position:
    return Position(row=row, col=col)


@pytest.fixture
def engine() -> DefaultRulesEngine:
    return DefaultRulesEngine()


class TestSteps:
    """Adjacency along board lines."""

    def test_restricted_cells_never_step_diagonally(
        self, engine, board_factory
    ) -> None:
        board = board_factory()
        for position in RESTRICTED_POSITIONS:
            for target in engine.legal_neighbor_moves(board, position):
                dr = abs(target.row - position.row)
                dc = abs(target.col - position.col)
                assert dr + dc == 1, (position, target)

    def test_restricted_diagonal_step_rejected(
        self, engine, board_factory
    ) -> None:
        board = board_factory()
        assert not engine.is_valid_step(board, P(1, 2), P(2, 3))
        assert engine.is_valid_step(board, P(1, 2), P(2, 2))

    def test_center_has_eight_neighbors(self, engine, board_factory) -> None:
        board = board_factory(tigers=[(2, 2)])
        assert len(engine.legal_neighbor_moves(board, P(2, 2))) == 8

    def test_corner_has_three_neighbors(self, engine, board_factory) -> None:
        board = board_factory()
        assert set(engine.legal_neighbor_moves(board, P(0, 0))) == {
            P(0, 1), P(1, 0), P(1, 1),
        }

    def test_restricted_edge_cell(self, engine, board_factory) -> None:
        board = board_factory()
        assert set(engine.legal_neighbor_moves(board, P(0, 1))) == {
            P(0, 0), P(0, 2), P(1, 1),
        }

    def test_occupied_destination_excluded(
        self, engine, board_factory
    ) -> None:
        board = board_factory(tigers=[(2, 2)], men=[(2, 3), (1, 1)])
        neighbors = engine.legal_neighbor_moves(board, P(2, 2))
        assert P(2, 3) not in neighbors
        assert P(1, 1) not in neighbors
        assert len(neighbors) == 6
        assert not engine.is_valid_step(board, P(2, 2), P(2, 3))

    def test_two_cells_away_is_not_a_step(self, engine, board_factory) -> None:
        board = board_factory()
        assert not engine.is_valid_step(board, P(0, 0), P(0, 2))
        assert not engine.is_valid_step(board, P(0, 0), P(2, 2))


class TestCaptures:
    """Three-cell jumps over exactly two men."""

    def test_horizontal_capture(self, engine, board_factory) -> None:
        board = board_factory(tigers=[(0, 0)], men=[(0, 1), (0, 2)])
        assert engine.can_capture(board, P(0, 0), P(0, 3))

    def test_tiger_on_path_blocks(self, engine, board_factory) -> None:
        board = board_factory(tigers=[(0, 0), (0, 2)], men=[(0, 1)])
        assert not engine.can_capture(board, P(0, 0), P(0, 3))

    def test_diagonal_capture(self, engine, board_factory) -> None:
        board = board_factory(tigers=[(0, 0)], men=[(1, 1), (2, 2)])
        assert engine.can_capture(board, P(0, 0), P(3, 3))

    def test_vertical_capture_from_restricted_cell(
        self, engine, board_factory
    ) -> None:
        board = board_factory(tigers=[(0, 1)], men=[(1, 1), (2, 1)])
        assert engine.can_capture(board, P(0, 1), P(3, 1))

    @pytest.mark.parametrize("men", [[], [(0, 1)], [(0, 2)]])
    def test_needs_two_men(self, engine, board_factory, men) -> None:
        board = board_factory(tigers=[(0, 0)], men=men)
        assert not engine.can_capture(board, P(0, 0), P(0, 3))

    @pytest.mark.parametrize("target", [(0, 2), (0, 4), (3, 1), (2, 3)])
    def test_wrong_geometry(self, engine, board_factory, target) -> None:
        board = board_factory(
            tigers=[(0, 0)], men=[(0, 1), (0, 2), (0, 3), (1, 1), (2, 2)]
        )
        assert not engine.can_capture(board, P(0, 0), P(*target))

    def test_occupied_landing(self, engine, board_factory) -> None:
        board = board_factory(tigers=[(0, 0)], men=[(0, 1), (0, 2), (0, 3)])
        assert not engine.can_capture(board, P(0, 0), P(0, 3))

    def test_apply_capture_clears_exactly_two(
        self, engine, board_factory
    ) -> None:
        board = board_factory(
            tigers=[(0, 0)], men=[(0, 1), (0, 2), (0, 4), (1, 1)]
        )
        engine.apply_capture(board, P(0, 0), P(0, 3))

        assert board.grid[0][1] == Cell.EMPTY
        assert board.grid[0][2] == Cell.EMPTY
        assert BoardManager.count(board, Cell.MAN) == 2
        # The tiger itself is left for the caller to move.
        assert board.grid[0][0] == Cell.TIGER
        assert board.grid[0][3] == Cell.EMPTY

    def test_apply_capture_rejects_bad_geometry(
        self, engine, board_factory
    ) -> None:
        board = board_factory(tigers=[(0, 0)], men=[(0, 1)])
        with pytest.raises(RulesViolationError) as excinfo:
            engine.apply_capture(board, P(0, 0), P(0, 2))
        assert excinfo.value.rule == "capture_geometry"

    def test_apply_capture_never_removes_tiger(
        self, engine, board_factory
    ) -> None:
        board = board_factory(tigers=[(0, 0), (0, 1)], men=[(0, 2)])
        with pytest.raises(RulesViolationError):
            engine.apply_capture(board, P(0, 0), P(0, 3))
        assert board.grid[0][2] == Cell.MAN

    def test_jumped_positions(self) -> None:
        assert DefaultRulesEngine.jumped_positions(P(4, 4), P(1, 1)) == [
            P(3, 3), P(2, 2),
        ]
        assert DefaultRulesEngine.jumped_positions(P(0, 0), P(3, 1)) is None


class TestLegalMoves:
    def test_tiger_moves_list_steps_then_captures(
        self, engine, board_factory
    ) -> None:
        board = board_factory(tigers=[(0, 0)], men=[(0, 1), (0, 2)])
        moves = engine.legal_moves(board, P(0, 0), PieceKind.TIGER)
        assert [m.to for m in moves] == [P(1, 1), P(1, 0), P(0, 3)]
        assert all(m.type == MoveType.STEP for m in moves)
        assert all(m.from_pos == P(0, 0) for m in moves)

    def test_men_never_capture(self, engine, board_factory) -> None:
        board = board_factory(men=[(0, 0), (0, 1), (0, 2)])
        moves = engine.legal_moves(board, P(0, 0), PieceKind.MAN)
        assert P(0, 3) not in [m.to for m in moves]

    def test_surrounded_tiger_is_blocked(self, engine, board_factory) -> None:
        board = board_factory(tigers=[(0, 0)], men=[(0, 1), (1, 0), (1, 1)])
        assert engine.legal_moves(board, P(0, 0), PieceKind.TIGER) == []
        assert not engine.has_any_legal_move(board)

    def test_capture_counts_as_mobility(self, engine, board_factory) -> None:
        board = board_factory(
            tigers=[(0, 0)], men=[(0, 1), (1, 0), (1, 1), (0, 2)]
        )
        assert engine.has_any_legal_move(board)

    def test_has_any_step_for_men(self, engine, board_factory) -> None:
        board = board_factory(tigers=[(0, 1), (1, 0)], men=[(0, 0)])
        # (0, 0) can still reach (1, 1) diagonally.
        assert engine.has_any_step(board, PieceKind.MAN)

    def test_full_board_leaves_men_no_step(
        self, engine, board_factory
    ) -> None:
        tigers = [(0, 1), (1, 0)]
        men = [
            (r, c) for r in range(5) for c in range(5) if (r, c) not in tigers
        ]
        board = board_factory(tigers=tigers, men=men)
        assert not engine.has_any_step(board, PieceKind.MAN)
        assert not engine.has_any_step(board, PieceKind.TIGER)


class TestCheckMove:
    """Game-state level move validation."""

    def test_wrong_side(self, engine, state_factory) -> None:
        state = state_factory()
        with pytest.raises(InvalidMoveError) as excinfo:
            engine.check_move(state, Move.place(PieceKind.MAN, P(0, 0)))
        assert excinfo.value.rule == "wrong_side"

    def test_wrong_action(self, engine, state_factory) -> None:
        state = state_factory(tigers=[(0, 0), (4, 4)], men_placed=2)
        with pytest.raises(InvalidMoveError) as excinfo:
            engine.check_move(state, Move.place(PieceKind.TIGER, P(2, 2)))
        assert excinfo.value.rule == "wrong_action"

    def test_occupied_destination(self, engine, state_factory) -> None:
        state = state_factory(tigers=[(2, 2)], current_side=PieceKind.MAN)
        with pytest.raises(InvalidMoveError) as excinfo:
            engine.check_move(state, Move.place(PieceKind.MAN, P(2, 2)))
        assert excinfo.value.rule == "occupied_destination"

    def test_missing_piece(self, engine, movement_state) -> None:
        move = Move.step(PieceKind.TIGER, P(0, 2), P(0, 3))
        with pytest.raises(InvalidMoveError) as excinfo:
            engine.check_move(movement_state, move)
        assert excinfo.value.rule == "missing_piece"

    def test_restricted_diagonal(self, engine, state_factory) -> None:
        state = state_factory(
            tigers=[(1, 2), (4, 4)], men=[(0, 0)], men_placed=8
        )
        move = Move.step(PieceKind.TIGER, P(1, 2), P(2, 3))
        with pytest.raises(InvalidMoveError) as excinfo:
            engine.check_move(state, move)
        assert excinfo.value.rule == "restricted_orthogonal"
        assert not engine.validate_move(state, move)

    def test_capture_is_accepted(self, engine, state_factory) -> None:
        state = state_factory(
            tigers=[(0, 0), (4, 4)],
            men=[(0, 1), (0, 2), (3, 1)],
            men_placed=8,
        )
        assert engine.validate_move(
            state, Move.step(PieceKind.TIGER, P(0, 0), P(0, 3))
        )

    def test_finished_game(self, engine, state_factory) -> None:
        state = state_factory().model_copy(
            update={"game_status": GameStatus.FINISHED}
        )
        with pytest.raises(InvalidMoveError) as excinfo:
            engine.check_move(state, Move.place(PieceKind.TIGER, P(0, 0)))
        assert excinfo.value.rule == "game_over"

    def test_get_valid_moves_placement(self, engine, state_factory) -> None:
        state = state_factory(tigers=[(2, 2)], current_side=PieceKind.MAN)
        moves = engine.get_valid_moves(state)
        assert len(moves) == 24
        assert all(m.type == MoveType.PLACE for m in moves)
        assert all(m.side == PieceKind.MAN for m in moves)

    def test_factory_returns_singleton(self) -> None:
        assert get_rules_engine() is get_rules_engine()
