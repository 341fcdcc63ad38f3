"""The structural model: packages, classes and their members.

The importer fills a :class:`ModelBuilder`. Calling :meth:`ModelBuilder.freeze`
hands ownership over to a read-only :class:`StructuralModel`; the builder
rejects further changes from then on, so analyzers (possibly running on
several threads) never observe a model that is still being built.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from types import MappingProxyType
from typing import TYPE_CHECKING

from model.units import ClassUnit, PackageUnit

if TYPE_CHECKING:
    from collections.abc import Iterable, Iterator, Mapping


@dataclass
class _PackageAccumulator:
    name: str
    imports: set[str] = field(default_factory=set)
    classes: list[str] = field(default_factory=list)


class ModelBuilder:
    """Mutable accumulator used while sources are being imported."""

    def __init__(self) -> None:
        self._packages: dict[str, _PackageAccumulator] = {}
        self._classes: dict[str, ClassUnit] = {}
        self._frozen = False

    def _check_open(self) -> None:
        if self._frozen:
            msg = "ModelBuilder has already been frozen"
            raise RuntimeError(msg)

    def _package(self, name: str) -> _PackageAccumulator:
        package = self._packages.get(name)
        if package is None:
            package = _PackageAccumulator(name)
            self._packages[name] = package
        return package

    def add_imports(self, package: str, imports: Iterable[str]) -> None:
        """Merge import names into the package-wide import set."""
        self._check_open()
        self._package(package).imports.update(imports)

    def add_class(self, unit: ClassUnit) -> None:
        """Register a class under its FQN; an existing entry is replaced."""
        self._check_open()
        package = self._package(unit.package)
        if unit.fqn not in self._classes:
            package.classes.append(unit.fqn)
        self._classes[unit.fqn] = unit

    def freeze(self) -> StructuralModel:
        """Return the read-only model and close the builder."""
        self._check_open()
        self._frozen = True
        packages = {
            name: PackageUnit(
                name=name,
                imports=frozenset(acc.imports),
                classes=tuple(sorted(acc.classes)),
            )
            for name, acc in sorted(self._packages.items())
        }
        classes = {fqn: self._classes[fqn] for fqn in sorted(self._classes)}
        return StructuralModel(packages, classes)


class StructuralModel:
    """Read-only view over imported packages and classes.

    Classes and packages iterate in sorted name order.
    """

    def __init__(
        self,
        packages: Mapping[str, PackageUnit],
        classes: Mapping[str, ClassUnit],
    ) -> None:
        self._packages = MappingProxyType(dict(packages))
        self._classes = MappingProxyType(dict(classes))

    @property
    def packages(self) -> Mapping[str, PackageUnit]:
        return self._packages

    @property
    def classes(self) -> Mapping[str, ClassUnit]:
        return self._classes

    def __iter__(self) -> Iterator[ClassUnit]:
        return iter(self._classes.values())

    def __len__(self) -> int:
        return len(self._classes)

    def get_class(self, fqn: str) -> ClassUnit | None:
        return self._classes.get(fqn)

    def get_package(self, name: str) -> PackageUnit | None:
        return self._packages.get(name)

    def imports_of(self, unit: ClassUnit) -> frozenset[str]:
        """Import names of the package that declares ``unit``."""
        package = self._packages.get(unit.package)
        if package is None:
            return frozenset()
        return package.imports

    def resolve(self, type_name: str) -> ClassUnit | None:
        """Find the model class named by ``type_name``.

        An exact FQN wins; otherwise the longest class FQN that ``type_name``
        is dot-nested in (``com.app.Util.CONSTANT`` resolves to
        ``com.app.Util``).
        """
        unit = self._classes.get(type_name)
        if unit is not None:
            return unit
        name = type_name
        while "." in name:
            name = name.rsplit(".", 1)[0]
            unit = self._classes.get(name)
            if unit is not None:
                return unit
        return None


__all__ = ["ModelBuilder", "StructuralModel"]
