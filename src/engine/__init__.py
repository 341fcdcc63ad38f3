"""Rule evaluation engine."""

from engine.runner import RuleEngine, evaluate_rule
from graph import detect_cycles
from rules.violations import should_fail

__all__ = ["RuleEngine", "detect_cycles", "evaluate_rule", "should_fail"]
