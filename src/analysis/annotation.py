"""Required annotation analysis."""

from __future__ import annotations

from typing import TYPE_CHECKING

from match import matches
from rules.models import Target
from rules.violations import Location, Violation
from utils import simple_name

if TYPE_CHECKING:
    from collections.abc import Iterable

    from model.structural import StructuralModel
    from model.units import ClassUnit
    from rules.models import RequireAnnotationRule


def _strip_at(name: str) -> str:
    return name[1:] if name.startswith("@") else name


def has_annotation(annotations: Iterable[str], required: str) -> bool:
    """Lenient annotation lookup.

    An annotation satisfies ``required`` when it is equal to it, equal modulo
    a leading ``@``, or has the same simple name (``Transactional`` satisfies
    ``org.springframework.transaction.annotation.Transactional``).
    """
    wanted = _strip_at(required)
    wanted_simple = simple_name(wanted)
    for annotation in annotations:
        present = _strip_at(annotation)
        if present == wanted or simple_name(present) == wanted_simple:
            return True
    return False


def _violation(
    rule: RequireAnnotationRule, unit: ClassUnit, symbol: str, element: str
) -> Violation:
    annotation = simple_name(_strip_at(rule.annotation))
    return Violation(
        rule_id=rule.id,
        message=(
            f"Missing required annotation @{annotation} on {element} {symbol}. "
            f"{rule.message}"
        ),
        severity=rule.severity,
        location=Location(file=unit.source_file, line=1, symbol=symbol),
        suggestion=f"Annotate {symbol} with @{annotation}",
    )


def analyze_require_annotation(
    rule: RequireAnnotationRule, model: StructuralModel
) -> list[Violation]:
    """Report every selected element that lacks the required annotation."""
    violations: list[Violation] = []

    for unit in model:
        if not matches(rule.package_pattern, unit.fqn):
            continue

        if rule.target is Target.CLASS:
            if not has_annotation(unit.annotations, rule.annotation):
                violations.append(_violation(rule, unit, unit.fqn, "class"))
        elif rule.target is Target.METHOD:
            for method in unit.methods:
                if not has_annotation(method.annotations, rule.annotation):
                    symbol = f"{unit.fqn}#{method.name}"
                    violations.append(_violation(rule, unit, symbol, "method"))
        elif rule.target is Target.FIELD:
            for field in unit.fields:
                if not has_annotation(field.annotations, rule.annotation):
                    symbol = f"{unit.fqn}.{field.name}"
                    violations.append(_violation(rule, unit, symbol, "field"))

    return violations


__all__ = ["analyze_require_annotation", "has_annotation"]
