from __future__ import annotations

from analysis import has_dependency
from model import (
    ClassKind,
    ClassUnit,
    FieldUnit,
    MethodUnit,
    ModelBuilder,
    ParameterUnit,
    Visibility,
)


def _class(fqn: str, **kwargs: object) -> ClassUnit:
    package, _, name = fqn.rpartition(".")
    defaults: dict[str, object] = {
        "name": name,
        "fqn": fqn,
        "package": package,
        "visibility": Visibility.PUBLIC,
        "kind": ClassKind.CLASS,
        "source_file": f"{name}.java",
    }
    defaults.update(kwargs)
    return ClassUnit(**defaults)  # type: ignore[arg-type]


def _method(name: str, return_type: str = "void", *params: str) -> MethodUnit:
    return MethodUnit(
        name=name,
        return_type=return_type,
        visibility=Visibility.PUBLIC,
        parameters=tuple(ParameterUnit(f"p{i}", t) for i, t in enumerate(params)),
    )


def test_package_import_creates_dependency_for_every_class_in_package() -> None:
    builder = ModelBuilder()
    builder.add_imports("com.app.web", ["com.app.data.Repo"])
    first = _class("com.app.web.First")
    second = _class("com.app.web.Second")
    repo = _class("com.app.data.Repo")
    for unit in (first, second, repo):
        builder.add_class(unit)
    model = builder.freeze()

    assert has_dependency(model, first, repo)
    assert has_dependency(model, second, repo)
    assert not has_dependency(model, repo, first)


def test_field_type_creates_dependency() -> None:
    repo = _class("com.app.data.Repo")
    service = _class(
        "com.app.svc.Service",
        fields=(FieldUnit("repo", "com.app.data.Repo", Visibility.PRIVATE),),
    )
    builder = ModelBuilder()
    builder.add_class(repo)
    builder.add_class(service)
    model = builder.freeze()

    assert has_dependency(model, service, repo)


def test_method_return_and_parameter_types_create_dependency() -> None:
    user = _class("com.app.domain.User")
    order = _class("com.app.domain.Order")
    service = _class(
        "com.app.svc.Service",
        methods=(
            _method("load", "com.app.domain.User"),
            _method("place", "void", "int", "com.app.domain.Order"),
        ),
    )
    builder = ModelBuilder()
    for unit in (user, order, service):
        builder.add_class(unit)
    model = builder.freeze()

    assert has_dependency(model, service, user)
    assert has_dependency(model, service, order)


def test_nested_type_reference_counts_as_dependency_on_enclosing_class() -> None:
    outer = _class("com.app.domain.User")
    service = _class(
        "com.app.svc.Service",
        fields=(FieldUnit("state", "com.app.domain.User.State", Visibility.PRIVATE),),
    )
    builder = ModelBuilder()
    builder.add_class(outer)
    builder.add_class(service)
    model = builder.freeze()

    assert has_dependency(model, service, outer)


def test_shared_name_prefix_is_not_a_dependency() -> None:
    user = _class("com.app.domain.User")
    service = _class(
        "com.app.svc.Service",
        fields=(FieldUnit("u", "com.app.domain.UserDto", Visibility.PRIVATE),),
    )
    builder = ModelBuilder()
    builder.add_class(user)
    builder.add_class(service)
    model = builder.freeze()

    assert not has_dependency(model, service, user)
