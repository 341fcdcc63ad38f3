"""The structural dependency relation between two classes."""

from __future__ import annotations

from typing import TYPE_CHECKING

from utils import is_same_or_nested

if TYPE_CHECKING:
    from model.structural import StructuralModel
    from model.units import ClassUnit


def has_dependency(model: StructuralModel, source: ClassUnit, target: ClassUnit) -> bool:
    """Return True when ``source`` structurally depends on ``target``.

    A dependency exists when the package of ``source`` imports ``target``,
    or when a field type, method return type or parameter type of ``source``
    is ``target`` or a type nested in it. Imports are tracked per package,
    not per file, so every class of a package shares its imports. Wildcard
    imports, generics and inherited members are not considered.
    """
    if target.fqn in model.imports_of(source):
        return True

    return any(
        is_same_or_nested(type_name, target.fqn)
        for type_name in source.referenced_types()
    )


__all__ = ["has_dependency"]
