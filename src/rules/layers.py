"""Layer classification and allowed-edge lookup for layering rules."""

from __future__ import annotations

from typing import TYPE_CHECKING

from match import matches

if TYPE_CHECKING:
    from rules.models import LayeringRule


def build_layer_map(rule: LayeringRule) -> dict[str, str]:
    """Map each declared package pattern to its layer name.

    When several layers declare the same pattern, the first registration
    wins. Precedence between different overlapping patterns is unspecified
    beyond declaration order.
    """
    layer_map: dict[str, str] = {}
    for layer in rule.layers:
        for pattern in layer.packages:
            layer_map.setdefault(pattern, layer.name)
    return layer_map


def classify_layer(fqn: str, layer_map: dict[str, str]) -> str | None:
    """Return the layer of the first pattern that matches ``fqn``."""
    for pattern, layer in layer_map.items():
        if matches(pattern, fqn):
            return layer
    return None


def build_allowed_deps(rule: LayeringRule) -> dict[str, set[str]]:
    """Build a mapping of layer -> set of layers it may depend on."""
    allowed: dict[str, set[str]] = {layer.name: set() for layer in rule.layers}
    for dep in rule.allowed_dependencies:
        allowed.setdefault(dep.from_layer, set()).add(dep.to_layer)
    return allowed


def is_violation(
    from_layer: str | None,
    to_layer: str | None,
    allowed_deps: dict[str, set[str]],
) -> bool:
    """Check if a dependency from one layer to another is a violation.

    Unclassified classes never violate. A dependency inside one layer needs
    an explicit self edge like any other.
    """
    if from_layer is None or to_layer is None:
        return False

    return to_layer not in allowed_deps.get(from_layer, set())


def find_layer_cycle(allowed_deps: dict[str, set[str]]) -> list[str] | None:
    """Return one cycle in the allowed-dependency graph, or None.

    Depth-first search with visited / in-progress sets; the first back edge
    found is reported as ``[a, b, ..., a]``. Self edges only permit
    dependencies inside a layer and are skipped.
    """
    visited: set[str] = set()
    in_progress: set[str] = set()
    path: list[str] = []

    def visit(layer: str) -> list[str] | None:
        visited.add(layer)
        in_progress.add(layer)
        path.append(layer)
        for target in sorted(allowed_deps.get(layer, set())):
            if target == layer:
                continue
            if target in in_progress:
                return [*path[path.index(target) :], target]
            if target not in visited:
                cycle = visit(target)
                if cycle is not None:
                    return cycle
        in_progress.discard(layer)
        path.pop()
        return None

    for layer in allowed_deps:
        if layer not in visited:
            cycle = visit(layer)
            if cycle is not None:
                return cycle
    return None
