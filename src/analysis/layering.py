"""Layering analysis."""

from __future__ import annotations

from typing import TYPE_CHECKING

from analysis.relation import has_dependency
from rules.layers import (
    build_allowed_deps,
    build_layer_map,
    classify_layer,
    find_layer_cycle,
    is_violation,
)
from rules.violations import Location, Violation

if TYPE_CHECKING:
    from model.structural import StructuralModel
    from model.units import ClassUnit
    from rules.models import LayeringRule


def _allowed_targets(layer: str, allowed_deps: dict[str, set[str]]) -> str:
    targets = sorted(allowed_deps.get(layer, set()))
    if not targets:
        return f"{layer} may not depend on any other layer"
    return f"{layer} may depend on: {', '.join(targets)}"


def analyze_layering(rule: LayeringRule, model: StructuralModel) -> list[Violation]:
    """Check every dependency between classifiable classes against the rule.

    Classes that match no layer pattern take no part in the check. The
    pairwise scan is quadratic in the number of classified classes.
    """
    layer_map = build_layer_map(rule)
    allowed_deps = build_allowed_deps(rule)

    classified: list[tuple[ClassUnit, str]] = []
    for unit in model:
        layer = classify_layer(unit.fqn, layer_map)
        if layer is not None:
            classified.append((unit, layer))

    violations: list[Violation] = []
    for source, from_layer in classified:
        for target, to_layer in classified:
            if source.fqn == target.fqn:
                continue
            if not is_violation(from_layer, to_layer, allowed_deps):
                continue
            if not has_dependency(model, source, target):
                continue
            violations.append(
                Violation(
                    rule_id=rule.id,
                    message=(
                        f"Layering violation: {source.fqn} ({from_layer}) depends on "
                        f"{target.fqn} ({to_layer}). {rule.message}"
                    ),
                    severity=rule.severity,
                    location=Location(
                        file=source.source_file,
                        line=1,
                        symbol=f"{source.fqn} -> {target.fqn}",
                    ),
                    suggestion=_allowed_targets(from_layer, allowed_deps),
                )
            )

    if rule.forbid_cycles:
        cycle = find_layer_cycle(allowed_deps)
        if cycle is not None:
            path = " -> ".join(cycle)
            violations.append(
                Violation(
                    rule_id=rule.id,
                    message=(
                        f"Cycle in allowed layer dependencies: {path}. {rule.message}"
                    ),
                    severity=rule.severity,
                    location=Location(file=None, line=0, symbol=path),
                    suggestion="Remove one of the allowed dependencies that close the cycle",
                )
            )

    return violations


__all__ = ["analyze_layering"]
