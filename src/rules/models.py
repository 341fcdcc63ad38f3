"""Architecture rule definitions.

Rules form a closed tagged union keyed on ``type``. Each variant is a plain
pydantic model; the engine dispatches on the concrete class.
"""

from __future__ import annotations

from enum import Enum
from typing import Annotated, Any, Literal

from pydantic import BaseModel, ConfigDict, Field, field_validator, model_validator

from model.units import Visibility
from rules.violations import Severity


class Target(str, Enum):
    """Program element a rule applies to."""

    CLASS = "class"
    METHOD = "method"
    FIELD = "field"


def _lower(value: Any) -> Any:
    if isinstance(value, str):
        return value.strip().lower()
    return value


class _RuleBase(BaseModel):
    model_config = ConfigDict(extra="forbid", populate_by_name=True)

    id: str = Field(min_length=1, description="Unique rule identifier")
    severity: Severity = Field(default=Severity.ERROR)
    message: str = Field(default="", description="Explanation shown with violations")

    @field_validator("severity", mode="before")
    @classmethod
    def _normalize_severity(cls, v: Any) -> Any:
        return _lower(v)

    @model_validator(mode="after")
    def _default_message(self) -> _RuleBase:
        if not self.message:
            self.message = self.describe()
        return self

    def describe(self) -> str:
        return self.id


class ForbiddenDependencyRule(_RuleBase):
    """Classes matching ``from`` must not depend on classes matching ``to``."""

    type: Literal["forbiddenDependency"] = "forbiddenDependency"
    from_pattern: str = Field(alias="from", min_length=1)
    to_pattern: str = Field(alias="to", min_length=1)

    def describe(self) -> str:
        return f"{self.from_pattern} must not depend on {self.to_pattern}"


class RequireAnnotationRule(_RuleBase):
    """Elements in ``in`` must carry ``annotation``."""

    type: Literal["requireAnnotation"] = "requireAnnotation"
    package_pattern: str = Field(alias="in", min_length=1)
    target: Target = Field(default=Target.METHOD)
    annotation: str = Field(min_length=1)

    @field_validator("target", mode="before")
    @classmethod
    def _normalize_target(cls, v: Any) -> Any:
        return _lower(v)

    def describe(self) -> str:
        return (
            f"{self.target.value} in {self.package_pattern} "
            f"must be annotated with {self.annotation}"
        )


class LayerDef(BaseModel):
    """A named group of package patterns."""

    model_config = ConfigDict(extra="forbid")

    name: str = Field(min_length=1, description="Layer name (e.g. 'service')")
    packages: list[str] = Field(
        min_length=1, description="Package patterns belonging to this layer"
    )


class AllowedDependency(BaseModel):
    """One permitted edge between two layers."""

    model_config = ConfigDict(extra="forbid", populate_by_name=True)

    from_layer: str = Field(alias="from", description="Depending layer")
    to_layer: str = Field(alias="to", description="Layer depended upon")


class LayeringRule(_RuleBase):
    """Dependencies between layers must follow ``allowedDependencies``."""

    type: Literal["layering"] = "layering"
    layers: list[LayerDef] = Field(min_length=1)
    allowed_dependencies: list[AllowedDependency] = Field(
        default_factory=list, alias="allowedDependencies"
    )
    forbid_cycles: bool = Field(default=True, alias="forbidCycles")

    @model_validator(mode="after")
    def _check_layer_names(self) -> LayeringRule:
        declared = {layer.name for layer in self.layers}
        unknown = sorted(
            {
                name
                for dep in self.allowed_dependencies
                for name in (dep.from_layer, dep.to_layer)
                if name not in declared
            }
        )
        if unknown:
            msg = f"allowedDependencies reference undeclared layers: {', '.join(unknown)}"
            raise ValueError(msg)
        return self

    def describe(self) -> str:
        return (
            f"Layering rule with {len(self.layers)} layers and "
            f"{len(self.allowed_dependencies)} allowed dependencies"
        )


class VisibilityRule(_RuleBase):
    """Elements in ``in`` must have visibility ``mustBe``."""

    type: Literal["visibility"] = "visibility"
    package_pattern: str = Field(alias="in", min_length=1)
    target: Target = Field(default=Target.CLASS)
    required_visibility: Visibility = Field(alias="mustBe")

    @field_validator("target", "required_visibility", mode="before")
    @classmethod
    def _normalize_enums(cls, v: Any) -> Any:
        return _lower(v)

    def describe(self) -> str:
        return (
            f"{self.target.value} in {self.package_pattern} "
            f"must be {self.required_visibility.value}"
        )


Rule = Annotated[
    ForbiddenDependencyRule | RequireAnnotationRule | LayeringRule | VisibilityRule,
    Field(discriminator="type"),
]

RULE_TYPES: dict[str, type[_RuleBase]] = {
    "forbiddenDependency": ForbiddenDependencyRule,
    "requireAnnotation": RequireAnnotationRule,
    "layering": LayeringRule,
    "visibility": VisibilityRule,
}


__all__ = [
    "RULE_TYPES",
    "AllowedDependency",
    "ForbiddenDependencyRule",
    "LayerDef",
    "LayeringRule",
    "RequireAnnotationRule",
    "Rule",
    "Target",
    "VisibilityRule",
]
