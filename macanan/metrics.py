"""Prometheus metrics for the Macanan AI service.

This module centralises counters and histograms so that /ai/move, the rules
endpoints and the self-play tool can record lightweight telemetry without
each caller managing its own metric instances.
"""

from __future__ import annotations

from typing import Final

from prometheus_client import Counter, Histogram


AI_MOVE_REQUESTS: Final[Counter] = Counter(
    "macanan_ai_move_requests_total",
    (
        "Total number of /ai/move requests, labeled by ai_type, side "
        "and outcome."
    ),
    labelnames=("ai_type", "side", "outcome"),
)

AI_MOVE_LATENCY: Final[Histogram] = Histogram(
    "macanan_ai_move_latency_seconds",
    "Latency of /ai/move requests in seconds, labeled by ai_type and depth.",
    labelnames=("ai_type", "depth"),
    buckets=(
        0.01,
        0.05,
        0.1,
        0.25,
        0.5,
        1.0,
        2.0,
        5.0,
    ),
)

SEARCH_NODES_VISITED: Final[Histogram] = Histogram(
    "macanan_search_nodes_visited",
    "Nodes visited per minimax root search, labeled by phase and depth.",
    labelnames=("phase", "depth"),
    buckets=(10, 100, 1_000, 5_000, 20_000, 100_000, 500_000),
)

RULES_MOVE_VALIDATIONS: Final[Counter] = Counter(
    "macanan_rules_move_validations_total",
    "Moves checked by /rules/evaluate_move, labeled by result.",
    labelnames=("result",),
)

GAME_OUTCOMES: Final[Counter] = Counter(
    "macanan_game_outcomes_total",
    "Self-play game outcomes, labeled by winner ('tiger', 'man', 'none').",
    labelnames=("winner",),
)

GAME_MOVES: Final[Histogram] = Histogram(
    "macanan_game_moves",
    "Number of moves played per self-play game.",
    buckets=(10, 20, 40, 80, 160, 320),
)


def observe_ai_move_start(ai_type: str, side: str) -> tuple[str, str]:
    """Prepare metric label values for a new /ai/move request.

    Keeps the label-shape logic in one place; callers pass the returned
    labels into the counters as needed.
    """

    return ai_type, side


def record_game_outcome(winner: str | None, move_count: int) -> None:
    """Record metrics for a completed self-play game."""
    GAME_OUTCOMES.labels(winner or "none").inc()
    GAME_MOVES.observe(move_count)
