"""Visibility constraint analysis."""

from __future__ import annotations

from typing import TYPE_CHECKING

from match import matches
from rules.models import Target
from rules.violations import Location, Violation

if TYPE_CHECKING:
    from collections.abc import Iterator

    from model.structural import StructuralModel
    from model.units import ClassUnit, Visibility
    from rules.models import VisibilityRule


def _elements(unit: ClassUnit, target: Target) -> Iterator[tuple[str, Visibility]]:
    """Yield ``(symbol, visibility)`` for each element of ``unit`` under ``target``."""
    if target is Target.CLASS:
        yield unit.fqn, unit.visibility
    elif target is Target.METHOD:
        for method in unit.methods:
            yield f"{unit.fqn}#{method.name}", method.visibility
    elif target is Target.FIELD:
        for field in unit.fields:
            yield f"{unit.fqn}.{field.name}", field.visibility


def analyze_visibility(rule: VisibilityRule, model: StructuralModel) -> list[Violation]:
    """Report every selected element whose visibility differs from ``mustBe``."""
    required = rule.required_visibility
    violations: list[Violation] = []

    for unit in model:
        if not matches(rule.package_pattern, unit.fqn):
            continue
        for symbol, actual in _elements(unit, rule.target):
            if actual is required:
                continue
            violations.append(
                Violation(
                    rule_id=rule.id,
                    message=(
                        f"Visibility violation: {symbol} must be {required.value}, "
                        f"but is {actual.value}. {rule.message}"
                    ),
                    severity=rule.severity,
                    location=Location(file=unit.source_file, line=1, symbol=symbol),
                    suggestion=f"Declare {symbol} as {required.value}",
                )
            )

    return violations


__all__ = ["analyze_visibility"]
