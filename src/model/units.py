"""Structural units extracted from Java sources.

These records are immutable. They are produced by the importer and only read
by analyzers.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum


class Visibility(str, Enum):
    """Java access level of a type or member."""

    PUBLIC = "public"
    PROTECTED = "protected"
    PACKAGE_PRIVATE = "package-private"
    PRIVATE = "private"


class ClassKind(str, Enum):
    """Kind of type declaration."""

    CLASS = "class"
    INTERFACE = "interface"
    ENUM = "enum"
    ANNOTATION = "annotation"


@dataclass(frozen=True)
class ParameterUnit:
    name: str
    type_name: str


@dataclass(frozen=True)
class FieldUnit:
    name: str
    type_name: str
    visibility: Visibility
    annotations: tuple[str, ...] = ()


@dataclass(frozen=True)
class MethodUnit:
    name: str
    return_type: str
    visibility: Visibility
    parameters: tuple[ParameterUnit, ...] = ()
    annotations: tuple[str, ...] = ()

    @property
    def signature(self) -> str:
        """Name plus parameter types, e.g. ``save(com.app.User, int)``."""
        params = ", ".join(p.type_name for p in self.parameters)
        return f"{self.name}({params})"

    def referenced_types(self) -> tuple[str, ...]:
        return (self.return_type, *(p.type_name for p in self.parameters))


@dataclass(frozen=True)
class ClassUnit:
    """A top-level or nested type declaration."""

    name: str
    fqn: str
    package: str
    visibility: Visibility
    kind: ClassKind
    source_file: str
    annotations: tuple[str, ...] = ()
    methods: tuple[MethodUnit, ...] = ()
    fields: tuple[FieldUnit, ...] = ()
    enclosing_class: str | None = None

    @property
    def is_nested(self) -> bool:
        return self.enclosing_class is not None

    def referenced_types(self) -> list[str]:
        """Field, return and parameter type names, in declaration order."""
        types = [f.type_name for f in self.fields]
        for method in self.methods:
            types.extend(method.referenced_types())
        return types


@dataclass(frozen=True)
class PackageUnit:
    name: str
    imports: frozenset[str] = field(default_factory=frozenset)
    classes: tuple[str, ...] = ()


__all__ = [
    "ClassKind",
    "ClassUnit",
    "FieldUnit",
    "MethodUnit",
    "PackageUnit",
    "ParameterUnit",
    "Visibility",
]
