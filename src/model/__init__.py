"""Structural model of a Java code base."""

from model.structural import ModelBuilder, StructuralModel
from model.units import (
    ClassKind,
    ClassUnit,
    FieldUnit,
    MethodUnit,
    PackageUnit,
    ParameterUnit,
    Visibility,
)

__all__ = [
    "ClassKind",
    "ClassUnit",
    "FieldUnit",
    "MethodUnit",
    "ModelBuilder",
    "PackageUnit",
    "ParameterUnit",
    "StructuralModel",
    "Visibility",
]
