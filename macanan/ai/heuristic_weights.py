"""Heuristic weights for Macanan position evaluation.

This module centralises the scalar weights used by :class:`HeuristicAI` so
the evaluator carries no bare literals. The keys mirror the attribute names
on :class:`HeuristicAI`, which copies them onto the instance at construction
time; a custom mapping can be passed to the constructor to override any of
them.
"""

from __future__ import annotations

HeuristicWeights = dict[str, float]


BASE_WEIGHTS: HeuristicWeights = {
    # Placement, tiger side
    "WEIGHT_CENTER_PROXIMITY": 1.0,
    "WEIGHT_TIGER_RESTRICTED_PLACEMENT": -3.0,
    # Placement, man side: per (man, tiger) orthogonally adjacent pair
    "WEIGHT_MAN_TIGER_ADJACENCY": 2.0,
    # Movement
    "WEIGHT_CAPTURED_MAN": 10.0,
    "WEIGHT_TIGER_RESTRICTED_MOVEMENT": -5.0,
    "SCORE_TIGER_WIN": 1000.0,
    "SCORE_MAN_WIN": -1000.0,
}


def get_weights(overrides: HeuristicWeights | None = None) -> HeuristicWeights:
    """Return a copy of :data:`BASE_WEIGHTS` with ``overrides`` applied.

    Unknown keys raise ``KeyError`` so typos do not pass silently.
    """
    weights = dict(BASE_WEIGHTS)
    for key, value in (overrides or {}).items():
        if key not in weights:
            raise KeyError(f"Unknown heuristic weight: {key}")
        weights[key] = float(value)
    return weights
