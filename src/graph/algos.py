"""Graph algorithms for dependency analysis."""

from __future__ import annotations

from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from collections.abc import Iterator

    from model.structural import StructuralModel


def build_class_graph(model: StructuralModel) -> dict[str, set[str]]:
    """Build the class dependency graph of a structural model.

    Args:
        model: Frozen structural model

    Returns:
        Dictionary mapping each class FQN to the FQNs of the model classes it
        references through its package imports, field types and method
        return / parameter types. Names that resolve to no model class are
        dropped, as are self references.
    """
    graph: dict[str, set[str]] = {}

    for unit in model:
        references = set(model.imports_of(unit))
        references.update(unit.referenced_types())

        targets: set[str] = set()
        for name in references:
            target = model.resolve(name)
            if target is not None and target.fqn != unit.fqn:
                targets.add(target.fqn)
        graph[unit.fqn] = targets

    return graph


class _TarjanState:
    """Mutable state container for Tarjan's SCC algorithm."""

    def __init__(self) -> None:
        self.index = 0
        self.indices: dict[str, int] = {}
        self.low_link: dict[str, int] = {}
        self.on_stack: set[str] = set()
        self.stack: list[str] = []
        self.sccs: list[list[str]] = []


def _extract_scc(state: _TarjanState, root: str) -> list[str]:
    """Extract a strongly connected component from the stack.

    The component is returned in discovery order, starting at ``root``.
    """
    scc: list[str] = []
    while state.stack:
        w = state.stack.pop()
        state.on_stack.remove(w)
        scc.append(w)
        if w == root:
            break
    if root not in scc:
        msg = (
            f"Tarjan algorithm invariant violated: root node {root!r} "
            "not found in stack during SCC extraction."
        )
        raise RuntimeError(msg)
    scc.reverse()
    return scc


def _visit(node: str, graph: dict[str, set[str]], state: _TarjanState) -> Iterator[str]:
    """Number ``node``, push it and return an iterator over its neighbours."""
    state.indices[node] = state.index
    state.low_link[node] = state.index
    state.index += 1
    state.stack.append(node)
    state.on_stack.add(node)
    return iter(sorted(graph.get(node, set())))


def _strongconnect(root: str, graph: dict[str, set[str]], state: _TarjanState) -> None:
    """Process every node reachable from ``root`` in Tarjan's algorithm.

    Uses an explicit work stack of ``(node, neighbour iterator)`` frames, so
    the depth of the graph is not bounded by the interpreter's recursion
    limit.
    """
    work: list[tuple[str, Iterator[str]]] = [(root, _visit(root, graph, state))]

    while work:
        node, neighbors = work[-1]
        descended = False
        for neighbor in neighbors:
            if neighbor not in graph:
                continue
            if neighbor not in state.indices:
                work.append((neighbor, _visit(neighbor, graph, state)))
                descended = True
                break
            if neighbor in state.on_stack:
                state.low_link[node] = min(state.low_link[node], state.indices[neighbor])
        if descended:
            continue

        work.pop()
        if work:
            parent = work[-1][0]
            state.low_link[parent] = min(state.low_link[parent], state.low_link[node])

        if state.low_link[node] == state.indices[node]:
            scc = _extract_scc(state, node)
            if len(scc) > 1:
                state.sccs.append(scc)


def find_cycles(graph: dict[str, set[str]]) -> list[list[str]]:
    """Find cycles in a directed graph using Tarjan's algorithm.

    Nodes are visited in sorted order, so the result is deterministic.

    Args:
        graph: Dictionary representing the graph

    Returns:
        List of strongly connected components with more than one member,
        each in discovery order
    """
    state = _TarjanState()

    for node in sorted(graph):
        if node not in state.indices:
            _strongconnect(node, graph, state)

    return state.sccs


def format_cycle(members: list[str]) -> str:
    """Render a cycle as ``A -> B -> C -> A``."""
    return " -> ".join([*members, members[0]])


def detect_cycles(model: StructuralModel) -> list[str]:
    """Return every class dependency cycle in ``model``, rendered as text."""
    return [format_cycle(scc) for scc in find_cycles(build_class_graph(model))]


__all__ = [
    "_TarjanState",
    "_extract_scc",
    "_strongconnect",
    "build_class_graph",
    "detect_cycles",
    "find_cycles",
    "format_cycle",
]
