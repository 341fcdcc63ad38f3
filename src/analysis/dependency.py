"""Forbidden dependency analysis."""

from __future__ import annotations

from typing import TYPE_CHECKING

from analysis.relation import has_dependency
from match import matches
from rules.violations import Location, Violation

if TYPE_CHECKING:
    from model.structural import StructuralModel
    from rules.models import ForbiddenDependencyRule


def analyze_forbidden_dependency(
    rule: ForbiddenDependencyRule, model: StructuralModel
) -> list[Violation]:
    """Report every ``from`` class that depends on a ``to`` class.

    One violation per ordered pair, in FQN order. A class selected by both
    patterns is also paired with itself.
    """
    sources = [c for c in model if matches(rule.from_pattern, c.fqn)]
    targets = [c for c in model if matches(rule.to_pattern, c.fqn)]

    violations: list[Violation] = []
    for source in sources:
        for target in targets:
            if not has_dependency(model, source, target):
                continue
            violations.append(
                Violation(
                    rule_id=rule.id,
                    message=(
                        f"Forbidden dependency: {source.fqn} depends on "
                        f"{target.fqn}. {rule.message}"
                    ),
                    severity=rule.severity,
                    location=Location(
                        file=source.source_file, line=1, symbol=source.fqn
                    ),
                )
            )
    return violations


__all__ = ["analyze_forbidden_dependency"]
