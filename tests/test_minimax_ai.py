"""Tests for the minimax search used for placement and movement."""

import pytest

from macanan.ai.minimax_ai import MinimaxAI
from macanan.board_manager import BoardManager
from macanan.errors import AIError
from macanan.models import (
    AIConfig,
    GamePhase,
    GameStatus,
    Move,
    MoveType,
    PieceKind,
    Position,
)


def P(row: int, col: int) -> Position:
    return Position(row=row, col=col)


def make_ai(side: PieceKind, depth: int, use_alpha_beta: bool = True) -> MinimaxAI:
    return MinimaxAI(side, AIConfig(depth=depth, use_alpha_beta=use_alpha_beta))


CAPTURE_BOARD = {
    "tigers": [(0, 0), (4, 0)],
    "men": [(0, 1), (0, 2), (4, 4), (4, 3), (3, 4)],
}

THREAT_BOARD = {
    "tigers": [(0, 0), (4, 4)],
    "men": [(0, 1), (0, 2), (3, 1), (3, 2), (2, 4)],
}


class TestPruningEquivalence:
    """Alpha-beta must return what the full tree returns."""

    @pytest.mark.timeout(120)
    @pytest.mark.parametrize(
        "side,phase,tigers,men,depth",
        [
            (PieceKind.TIGER, GamePhase.PLACEMENT, [(2, 2)], [], 2),
            (PieceKind.MAN, GamePhase.PLACEMENT, [(2, 2), (0, 0)], [(1, 2)], 2),
            (PieceKind.TIGER, GamePhase.MOVEMENT, [(0, 0), (2, 2)], None, 3),
            (PieceKind.MAN, GamePhase.MOVEMENT, [(0, 0), (2, 2)], None, 3),
            (
                PieceKind.TIGER,
                GamePhase.MOVEMENT,
                CAPTURE_BOARD["tigers"],
                CAPTURE_BOARD["men"],
                3,
            ),
            (
                PieceKind.MAN,
                GamePhase.MOVEMENT,
                THREAT_BOARD["tigers"],
                THREAT_BOARD["men"],
                3,
            ),
        ],
    )
    def test_same_score_and_move(
        self, board_factory, movement_state, side, phase, tigers, men, depth
    ) -> None:
        if men is None:
            board = movement_state.board
        else:
            board = board_factory(tigers=tigers, men=men)

        pruned = make_ai(side, depth).search(board, phase)
        full = make_ai(side, depth, use_alpha_beta=False).search(board, phase)

        assert pruned.score == full.score
        assert pruned.move == full.move
        assert pruned.nodes_visited <= full.nodes_visited


class TestPlacementSearch:
    @pytest.mark.timeout(120)
    def test_second_tiger_prefers_central_unrestricted_cell(
        self, board_factory
    ) -> None:
        board = board_factory(tigers=[(2, 2)])
        ai = make_ai(PieceKind.TIGER, 3)

        best = ai.best_placement(board)

        assert best is not None
        assert not BoardManager.is_restricted(best)
        # Row-major tie-break among the cells two steps from the centre.
        assert best == P(0, 2)
        assert ai.last_result.score == 8

    def test_depth_one_placement_beats_restricted(self, board_factory) -> None:
        board = board_factory(tigers=[(2, 2)])
        best = make_ai(PieceKind.TIGER, 1).best_placement(board)
        assert best not in (P(1, 2), P(2, 1), P(2, 3), P(3, 2))

    def test_full_board_has_no_placement(self, board_factory) -> None:
        tigers = [(0, 0), (4, 4)]
        men = [(r, c) for r in range(5) for c in range(5) if (r, c) not in tigers]
        board = board_factory(tigers=tigers, men=men)
        assert make_ai(PieceKind.MAN, 2).best_placement(board) is None


class TestMovementSearch:
    def test_tiger_takes_capture(self, board_factory) -> None:
        board = board_factory(**CAPTURE_BOARD)
        move = make_ai(PieceKind.TIGER, 1).best_move(board)
        assert move == Move.step(PieceKind.TIGER, P(0, 0), P(0, 3))

    @pytest.mark.timeout(60)
    def test_man_defends_against_capture(self, board_factory) -> None:
        board = board_factory(**THREAT_BOARD)
        ai = make_ai(PieceKind.MAN, 2)

        move = ai.best_move(board)

        assert move is not None
        assert move.side == PieceKind.MAN
        after = BoardManager.clone(board)
        BoardManager.move_piece(after, move.from_pos, move.to)
        for tiger in after.tiger_positions:
            assert ai.rules_engine.capture_moves(after, tiger) == []

    def test_blocked_side_returns_none(self, board_factory) -> None:
        board = board_factory(
            tigers=[(0, 0), (0, 4)],
            men=[(0, 1), (1, 0), (1, 1), (0, 3), (1, 4), (1, 3)],
        )
        ai = make_ai(PieceKind.TIGER, 3)
        assert ai.best_move(board) is None
        assert ai.last_result.score == -1000

    def test_depth_zero_only_evaluates(self, movement_state) -> None:
        ai = make_ai(PieceKind.TIGER, 0)
        result = ai.search(movement_state.board, GamePhase.MOVEMENT)
        assert result.move is None
        assert result.nodes_visited == 1
        assert result.score == ai.evaluate_movement(movement_state.board)

    @pytest.mark.timeout(60)
    def test_search_does_not_mutate_input(self, movement_state) -> None:
        board = movement_state.board
        before = board.model_dump()
        make_ai(PieceKind.TIGER, 3).best_move(board)
        make_ai(PieceKind.MAN, 3).best_move(board)
        assert board.model_dump() == before

    def test_terminal_phase_rejected(self, movement_state) -> None:
        with pytest.raises(AIError):
            make_ai(PieceKind.TIGER, 1).search(
                movement_state.board, GamePhase.TERMINAL
            )


class TestSelectMove:
    def test_initial_state_places(self, state_factory) -> None:
        move = make_ai(PieceKind.TIGER, 1).select_move(state_factory())
        assert move is not None
        assert move.type == MoveType.PLACE
        assert move.to == P(2, 2)

    def test_tiger_steps_while_men_place(self, state_factory) -> None:
        state = state_factory(tigers=[(2, 2), (0, 0)], men=[(1, 1)])
        move = make_ai(PieceKind.TIGER, 2).select_move(state)
        assert move is not None
        assert move.type == MoveType.STEP

    def test_out_of_turn(self, state_factory) -> None:
        with pytest.raises(AIError):
            make_ai(PieceKind.MAN, 1).select_move(state_factory())

    def test_finished_game(self, movement_state) -> None:
        finished = movement_state.model_copy(
            update={"game_status": GameStatus.FINISHED}
        )
        assert make_ai(PieceKind.TIGER, 1).select_move(finished) is None
