"""Accessor for the process-wide rules engine instance."""

from __future__ import annotations

from .default_engine import DefaultRulesEngine
from .interfaces import RulesEngine

_engine: RulesEngine | None = None


def get_rules_engine() -> RulesEngine:
    """Return the shared :class:`DefaultRulesEngine`.

    The engine is stateless, so a single instance serves every AI and
    request.
    """
    global _engine
    if _engine is None:
        _engine = DefaultRulesEngine()
    return _engine
