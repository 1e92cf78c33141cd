"""
Pydantic Models for Macanan Game State
Field aliases follow the camelCase shape used by the browser client.
"""

from pydantic import BaseModel, Field, model_validator
from typing import Optional, List
from enum import Enum
import uuid

from .config import BOARD_SIZE, MAN_COUNT, MAX_SEARCH_DEPTH, SEARCH_DEPTH, TIGER_COUNT


class Cell(str, Enum):
    """Content of a single board cell"""
    EMPTY = "empty"
    TIGER = "tiger"
    MAN = "man"


class PieceKind(str, Enum):
    """Side / piece kind enumeration"""
    TIGER = "tiger"
    MAN = "man"

    @property
    def cell(self) -> Cell:
        return Cell.TIGER if self is PieceKind.TIGER else Cell.MAN

    @property
    def opponent(self) -> "PieceKind":
        return PieceKind.MAN if self is PieceKind.TIGER else PieceKind.TIGER


class MoveType(str, Enum):
    """Move kind: placement during the opening, step afterwards"""
    PLACE = "place"
    STEP = "step"


class GamePhase(str, Enum):
    """Game phase enumeration"""
    PLACEMENT = "placement"
    MOVEMENT = "movement"
    TERMINAL = "terminal"


class GameStatus(str, Enum):
    """Game status enumeration"""
    ACTIVE = "active"
    FINISHED = "finished"


class AIType(str, Enum):
    """AI type enumeration"""
    RANDOM = "random"
    HEURISTIC = "heuristic"
    MINIMAX = "minimax"


class Position(BaseModel):
    """Board position (row, col), both in [0, 5)"""
    row: int = Field(ge=0, lt=BOARD_SIZE)
    col: int = Field(ge=0, lt=BOARD_SIZE)

    class Config:
        frozen = True

    def to_key(self) -> str:
        """Convert position to string key"""
        return f"{self.row},{self.col}"

    def __repr__(self) -> str:
        return f"Position({self.row}, {self.col})"


class Move(BaseModel):
    """Move representation.

    - ``place`` moves only carry ``to``.
    - ``step`` moves carry ``from`` and ``to``. Whether a step is a capture
      is derived from the board (see ``DefaultRulesEngine.is_capture``).
    """

    type: MoveType
    side: PieceKind
    from_pos: Optional[Position] = Field(None, alias="from")
    to: Position

    class Config:
        populate_by_name = True
        frozen = True

    @model_validator(mode="after")
    def _check_shape(self) -> "Move":
        if self.type == MoveType.PLACE and self.from_pos is not None:
            raise ValueError("place moves must not carry a 'from' position")
        if self.type == MoveType.STEP and self.from_pos is None:
            raise ValueError("step moves require a 'from' position")
        return self

    @classmethod
    def place(cls, side: PieceKind, to: Position) -> "Move":
        return cls(type=MoveType.PLACE, side=side, to=to)

    @classmethod
    def step(cls, side: PieceKind, from_pos: Position, to: Position) -> "Move":
        return cls(type=MoveType.STEP, side=side, from_pos=from_pos, to=to)


class BoardState(BaseModel):
    """5x5 grid plus the ordered list of tiger positions.

    A position is in ``tiger_positions`` iff its cell is ``Cell.TIGER``.
    """
    grid: List[List[Cell]]
    tiger_positions: List[Position] = Field(
        default_factory=list, alias="tigerPositions"
    )

    class Config:
        populate_by_name = True

    @model_validator(mode="after")
    def _check_consistency(self) -> "BoardState":
        if len(self.grid) != BOARD_SIZE or any(
            len(row) != BOARD_SIZE for row in self.grid
        ):
            raise ValueError(f"grid must be {BOARD_SIZE}x{BOARD_SIZE}")
        if len(set(self.tiger_positions)) != len(self.tiger_positions):
            raise ValueError("duplicate tiger position")
        if len(self.tiger_positions) > TIGER_COUNT:
            raise ValueError(f"at most {TIGER_COUNT} tigers allowed")
        on_grid = {
            (r, c)
            for r, row in enumerate(self.grid)
            for c, cell in enumerate(row)
            if cell == Cell.TIGER
        }
        listed = {(p.row, p.col) for p in self.tiger_positions}
        if on_grid != listed:
            raise ValueError(
                "tiger_positions is inconsistent with the grid: "
                f"grid={sorted(on_grid)}, list={sorted(listed)}"
            )
        return self

    @classmethod
    def empty(cls) -> "BoardState":
        return cls(
            grid=[[Cell.EMPTY] * BOARD_SIZE for _ in range(BOARD_SIZE)],
            tiger_positions=[],
        )


class GameState(BaseModel):
    """Complete game state"""
    id: str = Field(default_factory=lambda: uuid.uuid4().hex)
    board: BoardState
    current_side: PieceKind = Field(PieceKind.TIGER, alias="currentSide")
    tigers_placed: int = Field(0, ge=0, le=TIGER_COUNT, alias="tigersPlaced")
    men_placed: int = Field(0, ge=0, le=MAN_COUNT, alias="menPlaced")
    game_status: GameStatus = Field(GameStatus.ACTIVE, alias="gameStatus")
    winner: Optional[PieceKind] = None
    move_history: List[Move] = Field(default_factory=list, alias="moveHistory")

    class Config:
        populate_by_name = True

    @model_validator(mode="after")
    def _check_counters(self) -> "GameState":
        if len(self.board.tiger_positions) != self.tigers_placed:
            raise ValueError(
                "tigers_placed does not match the tigers on the board"
            )
        men = sum(row.count(Cell.MAN) for row in self.board.grid)
        if men > self.men_placed:
            raise ValueError("more men on the board than have been placed")
        return self


class AIConfig(BaseModel):
    """AI configuration"""
    depth: int = Field(SEARCH_DEPTH, ge=0, le=MAX_SEARCH_DEPTH)
    rng_seed: Optional[int] = Field(None, alias="rngSeed")
    use_alpha_beta: bool = Field(True, alias="useAlphaBeta")

    class Config:
        populate_by_name = True
