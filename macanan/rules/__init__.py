"""Movement and capture rules."""

from .default_engine import CAPTURE_DISTANCE, DefaultRulesEngine
from .factory import get_rules_engine
from .interfaces import RulesEngine

__all__ = [
    "CAPTURE_DISTANCE",
    "DefaultRulesEngine",
    "RulesEngine",
    "get_rules_engine",
]
