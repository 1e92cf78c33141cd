"""
Macanan AI Service - FastAPI Application
Provides AI move selection, position evaluation and rules endpoints.

The service is stateless: every request carries the board or game state it
is about, and responses never reference server-side state.
"""

import logging
import time
from typing import Optional, Dict, List

from fastapi import FastAPI, HTTPException, Response
from fastapi.middleware.cors import CORSMiddleware
from pydantic import BaseModel, Field
from prometheus_client import CONTENT_TYPE_LATEST, generate_latest

from .ai.factory import create_ai
from .ai.heuristic_ai import HeuristicAI
from .ai.minimax_ai import MinimaxAI
from .board_manager import BoardManager
from .config import CORS_ORIGINS, LOG_LEVEL, MAX_SEARCH_DEPTH, SEARCH_DEPTH, SERVICE_PORT
from .errors import InvalidMoveError, MacananError
from .game_engine import GameEngine
from .metrics import (
    AI_MOVE_LATENCY,
    AI_MOVE_REQUESTS,
    RULES_MOVE_VALIDATIONS,
    SEARCH_NODES_VISITED,
    observe_ai_move_start,
)
from .models import (
    AIConfig,
    AIType,
    BoardState,
    Cell,
    GamePhase,
    GameState,
    GameStatus,
    Move,
    MoveType,
    PieceKind,
    Position,
)

# Configure logging
logging.basicConfig(
    level=LOG_LEVEL,
    format='%(asctime)s - %(name)s - %(levelname)s - %(message)s'
)
logger = logging.getLogger(__name__)

# Create FastAPI app
app = FastAPI(
    title="Macanan AI Service",
    description="AI move selection and rules service for Macanan",
    version="1.0.0"
)

app.add_middleware(
    CORSMiddleware,
    allow_origins=CORS_ORIGINS,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)


class MoveRequest(BaseModel):
    """Request model for AI move selection"""
    game_state: GameState
    depth: Optional[int] = Field(None, ge=0, le=MAX_SEARCH_DEPTH)
    ai_type: AIType = AIType.MINIMAX
    seed: Optional[int] = Field(
        None,
        ge=0,
        le=0x7FFFFFFF,
        description="Optional RNG seed for deterministic AI behavior"
    )


class MoveResponse(BaseModel):
    """Response model for AI move selection"""
    move: Optional[Move]
    evaluation: float
    thinking_time_ms: int
    ai_type: str
    depth: int
    nodes_visited: Optional[int] = None


class EvaluationRequest(BaseModel):
    """Request model for position evaluation"""
    board: BoardState
    side: PieceKind
    phase: GamePhase = GamePhase.MOVEMENT


class EvaluationResponse(BaseModel):
    """Response model for position evaluation"""
    score: float
    breakdown: Dict[str, float]


class LegalMovesRequest(BaseModel):
    """Request model for the legal moves of a single piece"""
    board: BoardState
    position: Position


class LegalMovesResponse(BaseModel):
    """Response model for the legal moves of a single piece"""
    piece: Cell
    moves: List[Move]


class RulesEvalRequest(BaseModel):
    """Request model for move validation and application"""
    game_state: GameState
    move: Move


class RulesEvalResponse(BaseModel):
    """Response model for move validation and application"""
    valid: bool
    validation_error: Optional[str] = None
    next_state: Optional[GameState] = None
    game_status: Optional[GameStatus] = None
    winner: Optional[PieceKind] = None


@app.get("/")
async def root():
    """Health check endpoint"""
    return {
        "service": "Macanan AI Service",
        "status": "running",
        "version": "1.0.0"
    }


@app.get("/health")
async def health_check():
    """Health check for container orchestration"""
    return {"status": "healthy"}


@app.get("/metrics")
async def metrics():
    """Prometheus metrics endpoint."""
    data = generate_latest()
    return Response(content=data, media_type=CONTENT_TYPE_LATEST)


@app.get("/game/initial", response_model=GameState)
async def initial_state():
    """Fresh game: empty board, tiger to place first."""
    return GameEngine.create_initial_state()


@app.post("/ai/move", response_model=MoveResponse)
async def get_ai_move(request: MoveRequest):
    """
    Get the AI-selected move for the side to move.

    Args:
        request: MoveRequest containing game state and AI configuration.

    Returns:
        MoveResponse with selected move (placement or step, as the state
        requires) and the evaluation of the current position. ``move`` is
        null when the side to move has no options.
    """
    start_time = time.time()
    state = request.game_state
    side = state.current_side
    depth = SEARCH_DEPTH if request.depth is None else request.depth
    labels_ai_type, labels_side = observe_ai_move_start(
        request.ai_type.value,
        side.value,
    )

    try:
        config = AIConfig(depth=depth, rngSeed=request.seed)
        ai = create_ai(request.ai_type, side, config)

        move = ai.select_move(state)
        evaluation = ai.evaluate_position(state)

        nodes_visited: Optional[int] = None
        if isinstance(ai, MinimaxAI) and ai.last_result is not None:
            nodes_visited = ai.last_result.nodes_visited
            phase = (
                GamePhase.PLACEMENT
                if GameEngine.get_action_kind(state) == MoveType.PLACE
                else GamePhase.MOVEMENT
            )
            SEARCH_NODES_VISITED.labels(phase.value, str(depth)).observe(
                nodes_visited
            )

        thinking_time = int((time.time() - start_time) * 1000)

        duration_seconds = time.time() - start_time
        AI_MOVE_REQUESTS.labels(labels_ai_type, labels_side, "success").inc()
        AI_MOVE_LATENCY.labels(labels_ai_type, str(depth)).observe(
            duration_seconds
        )

        logger.info(
            "AI move: type=%s, side=%s, depth=%d, time=%dms, eval=%.2f, move=%s",
            request.ai_type.value,
            side.value,
            depth,
            thinking_time,
            evaluation,
            move,
        )

        return MoveResponse(
            move=move,
            evaluation=evaluation,
            thinking_time_ms=thinking_time,
            ai_type=request.ai_type.value,
            depth=depth,
            nodes_visited=nodes_visited,
        )

    except Exception as e:
        duration_seconds = time.time() - start_time
        AI_MOVE_REQUESTS.labels(labels_ai_type, labels_side, "error").inc()
        AI_MOVE_LATENCY.labels(labels_ai_type, str(depth)).observe(
            duration_seconds
        )
        logger.error("Error generating AI move: %s", str(e), exc_info=True)
        raise HTTPException(status_code=500, detail=str(e))


@app.post("/ai/evaluate", response_model=EvaluationResponse)
async def evaluate_position(request: EvaluationRequest):
    """
    Evaluate a board from one side's perspective.

    Placement boards use the placement heuristic of ``side``; movement
    boards use the movement heuristic, negated for the man side.
    """
    if request.phase == GamePhase.TERMINAL:
        raise HTTPException(
            status_code=400,
            detail="terminal positions have no heuristic evaluation",
        )
    try:
        ai = HeuristicAI(request.side, AIConfig())
        if request.phase == GamePhase.PLACEMENT:
            score = ai.evaluate_placement(request.board, ai.is_tiger)
        else:
            score = ai.evaluate_movement(request.board) * ai.perspective()

        breakdown = {"total": score}
        breakdown.update(ai.evaluation_components(request.board, request.phase))
        return EvaluationResponse(score=score, breakdown=breakdown)

    except Exception as e:
        logger.error(f"Error evaluating position: {str(e)}", exc_info=True)
        raise HTTPException(status_code=500, detail=str(e))


@app.post("/rules/legal_moves", response_model=LegalMovesResponse)
async def legal_moves(request: LegalMovesRequest):
    """Legal steps (and tiger captures) for the piece on ``position``."""
    piece = BoardManager.get_cell(request.board, request.position)
    if piece == Cell.EMPTY:
        return LegalMovesResponse(piece=piece, moves=[])

    kind = PieceKind.TIGER if piece == Cell.TIGER else PieceKind.MAN
    moves = GameEngine.legal_moves(request.board, request.position, kind)
    return LegalMovesResponse(piece=piece, moves=moves)


@app.post("/rules/evaluate_move", response_model=RulesEvalResponse)
async def evaluate_move(request: RulesEvalRequest):
    """Validate ``move`` against ``game_state`` and apply it if legal.

    Illegal moves are not an HTTP error: they come back with
    ``valid=False`` and the rejection reason.
    """
    try:
        next_state = GameEngine.apply_move(request.game_state, request.move)
    except InvalidMoveError as e:
        RULES_MOVE_VALIDATIONS.labels("invalid").inc()
        return RulesEvalResponse(valid=False, validation_error=e.message)
    except MacananError as e:
        logger.error("Error in /rules/evaluate_move: %s", str(e), exc_info=True)
        raise HTTPException(status_code=500, detail=e.to_dict())

    RULES_MOVE_VALIDATIONS.labels("valid").inc()
    return RulesEvalResponse(
        valid=True,
        next_state=next_state,
        game_status=next_state.game_status,
        winner=next_state.winner,
    )


if __name__ == "__main__":
    import uvicorn

    uvicorn.run(app, host="0.0.0.0", port=SERVICE_PORT)
