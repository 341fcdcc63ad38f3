from __future__ import annotations

from graph import build_class_graph, detect_cycles, find_cycles, format_cycle
from graph.algos import _extract_scc, _TarjanState
from model import ClassKind, ClassUnit, FieldUnit, ModelBuilder, StructuralModel, Visibility


def _class(fqn: str, *references: str) -> ClassUnit:
    package, _, name = fqn.rpartition(".")
    return ClassUnit(
        name=name,
        fqn=fqn,
        package=package,
        visibility=Visibility.PUBLIC,
        kind=ClassKind.CLASS,
        source_file=f"{name}.java",
        fields=tuple(
            FieldUnit(f"f{i}", ref, Visibility.PRIVATE) for i, ref in enumerate(references)
        ),
    )


def _model(*units: ClassUnit) -> StructuralModel:
    builder = ModelBuilder()
    for unit in units:
        builder.add_class(unit)
    return builder.freeze()


def test_three_class_cycle_is_reported_once() -> None:
    model = _model(
        _class("com.app.A", "com.app.B"),
        _class("com.app.B", "com.app.C"),
        _class("com.app.C", "com.app.A"),
    )

    cycles = detect_cycles(model)

    assert cycles == ["com.app.A -> com.app.B -> com.app.C -> com.app.A"]


def test_acyclic_chain_has_no_cycles() -> None:
    model = _model(
        _class("com.app.A", "com.app.B"),
        _class("com.app.B", "com.app.C"),
        _class("com.app.C"),
    )

    assert detect_cycles(model) == []


def test_disjoint_cycles_are_all_reported() -> None:
    model = _model(
        _class("com.app.A", "com.app.B"),
        _class("com.app.B", "com.app.A"),
        _class("com.app.X", "com.app.Y"),
        _class("com.app.Y", "com.app.X"),
        _class("com.app.Z", "com.app.A"),
    )

    assert detect_cycles(model) == [
        "com.app.A -> com.app.B -> com.app.A",
        "com.app.X -> com.app.Y -> com.app.X",
    ]


def test_self_reference_is_not_a_cycle() -> None:
    model = _model(_class("com.app.Node", "com.app.Node"))

    assert detect_cycles(model) == []


def test_class_graph_drops_unknown_and_resolves_nested_names() -> None:
    model = _model(
        _class("com.app.A", "com.app.B.Inner", "java.util.List", "int"),
        _class("com.app.B"),
    )

    assert build_class_graph(model) == {"com.app.A": {"com.app.B"}, "com.app.B": set()}


def test_class_graph_includes_package_imports() -> None:
    builder = ModelBuilder()
    builder.add_imports("com.app.web", ["com.app.data.Repo"])
    builder.add_class(_class("com.app.web.Page"))
    builder.add_class(_class("com.app.data.Repo", "com.app.web.Page"))
    model = builder.freeze()

    assert detect_cycles(model) == [
        "com.app.data.Repo -> com.app.web.Page -> com.app.data.Repo"
    ]


def test_find_cycles_ignores_edges_to_missing_nodes() -> None:
    graph = {"a": {"b", "ghost"}, "b": {"a"}}

    assert find_cycles(graph) == [["a", "b"]]


def test_format_cycle_closes_back_to_first_member() -> None:
    assert format_cycle(["a", "b", "c"]) == "a -> b -> c -> a"


def test_extract_scc_returns_members_in_discovery_order() -> None:
    state = _TarjanState()
    state.stack = ["x", "a", "b", "c"]
    state.on_stack = {"x", "a", "b", "c"}

    assert _extract_scc(state, "a") == ["a", "b", "c"]
    assert state.stack == ["x"]
    assert state.on_stack == {"x"}


def test_long_dependency_chain_does_not_exhaust_stack() -> None:
    names = [f"com.app.C{i:05d}" for i in range(5000)]
    units = [_class(name, nxt) for name, nxt in zip(names, names[1:])]
    units.append(_class(names[-1]))

    assert detect_cycles(_model(*units)) == []


def test_long_ring_is_one_cycle() -> None:
    names = [f"com.app.C{i:05d}" for i in range(5000)]
    units = [_class(name, nxt) for name, nxt in zip(names, [*names[1:], names[0]])]

    cycles = find_cycles(build_class_graph(_model(*units)))

    assert len(cycles) == 1
    assert cycles[0] == names
