from __future__ import annotations

import tomllib
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any

from pydantic import BaseModel, ConfigDict, Field, ValidationError, field_validator

from rules.models import RULE_TYPES, Rule
from rules.violations import Severity

CONFIG_FILENAME = "layerguard.toml"

DEFAULT_SOURCES = ("src/main/java",)


class ConfigError(Exception):
    """Raised when a configuration file is missing, unreadable or invalid.

    ``errors`` lists every problem found, so that all of them can be reported
    at once.
    """

    def __init__(self, message: str, errors: list[str] | None = None) -> None:
        super().__init__(message)
        self.message = message
        self.errors = errors or []

    def __str__(self) -> str:
        if not self.errors:
            return self.message
        details = "\n".join(f"  - {error}" for error in self.errors)
        return f"{self.message}\n{details}"


class FailOn(BaseModel):
    """Severity threshold at which a run counts as failed."""

    model_config = ConfigDict(extra="forbid")

    severity: Severity = Field(default=Severity.ERROR)

    @field_validator("severity", mode="before")
    @classmethod
    def _normalize_severity(cls, v: Any) -> Any:
        if isinstance(v, str):
            return v.strip().lower()
        return v


class ArchConfig(BaseModel):
    """Configuration for a layerguard run."""

    model_config = ConfigDict(extra="forbid", populate_by_name=True)

    version: str = Field(default="1")
    base_package: str = Field(
        default="",
        alias="basePackage",
        description="Root package of the project (informational only)",
    )
    fail_on: FailOn = Field(default_factory=FailOn, alias="failOn")
    sources: list[str] = Field(
        default_factory=lambda: list(DEFAULT_SOURCES),
        description="Source directories, relative to the project root",
    )
    include: list[str] = Field(
        default_factory=list,
        description="Glob patterns for files to include (empty = all Java files)",
    )
    exclude: list[str] = Field(
        default_factory=list,
        description="Glob patterns for files to exclude",
    )
    nested_gitignore: bool = Field(
        default=False,
        alias="nestedGitignore",
        description="Honour .gitignore files below the source root",
    )
    rules: list[Rule] = Field(default_factory=list)

    @field_validator("version", mode="before")
    @classmethod
    def _coerce_version(cls, v: Any) -> Any:
        if isinstance(v, int) and not isinstance(v, bool):
            return str(v)
        return v


@dataclass
class RuleParseResult:
    rules: list[Rule] = field(default_factory=list)
    errors: list[str] = field(default_factory=list)

    @property
    def ok(self) -> bool:
        return not self.errors


def _format_validation_error(prefix: str, exc: ValidationError) -> list[str]:
    messages: list[str] = []
    for error in exc.errors():
        loc = ".".join(str(part) for part in error["loc"])
        where = f"{prefix}: {loc}" if loc else prefix
        messages.append(f"{where}: {error['msg']}")
    return messages


def _rule_label(index: int, raw: dict[str, Any]) -> str:
    rule_id = raw.get("id")
    rule_type = raw.get("type")
    label = f"rules[{index}]"
    if rule_id:
        label += f" '{rule_id}'"
    if rule_type:
        label += f" ({rule_type})"
    return label


def parse_rules(raw_rules: Any) -> RuleParseResult:
    """Build rule objects from raw config data, collecting every error."""
    result = RuleParseResult()

    if raw_rules is None:
        return result

    if not isinstance(raw_rules, list):
        result.errors.append("rules must be a list of tables")
        return result

    seen_ids: set[str] = set()
    for index, raw in enumerate(raw_rules):
        if not isinstance(raw, dict):
            result.errors.append(f"rules[{index}]: rule must be a table")
            continue

        label = _rule_label(index, raw)
        rule_type = raw.get("type")
        if rule_type is None:
            result.errors.append(f"{label}: missing rule type")
            continue

        model = RULE_TYPES.get(rule_type) if isinstance(rule_type, str) else None
        if model is None:
            valid = ", ".join(sorted(RULE_TYPES))
            result.errors.append(
                f"{label}: unknown rule type '{rule_type}'. Valid types: {valid}"
            )
            continue

        try:
            rule = model.model_validate(raw)
        except ValidationError as exc:
            result.errors.extend(_format_validation_error(label, exc))
            continue

        if rule.id in seen_ids:
            result.errors.append(f"{label}: duplicate rule id '{rule.id}'")
            continue
        seen_ids.add(rule.id)
        result.rules.append(rule)  # type: ignore[arg-type]

    return result


def parse_config(data: dict[str, Any], *, source: str = "<config>") -> ArchConfig:
    """Validate raw configuration data.

    Raises:
        ConfigError: listing every problem found in ``data``.
    """
    data = dict(data)
    raw_rules = data.pop("rules", None)

    errors: list[str] = []
    config: ArchConfig | None = None
    try:
        config = ArchConfig.model_validate(data)
    except ValidationError as exc:
        errors.extend(_format_validation_error(source, exc))

    parsed = parse_rules(raw_rules)
    errors.extend(parsed.errors)

    if errors or config is None:
        msg = f"Invalid config in {source}"
        raise ConfigError(msg, errors)

    return config.model_copy(update={"rules": parsed.rules})


def resolve_config_path(path: Path) -> Path:
    """Return ``path`` itself, or the config file inside it for a directory."""
    if path.is_dir():
        return path / CONFIG_FILENAME
    return path


def load_config(path: Path) -> ArchConfig:
    """Load configuration from a TOML file (or a directory containing one)."""
    config_path = resolve_config_path(Path(path))

    if not config_path.is_file():
        msg = f"Config file not found: {config_path}"
        raise ConfigError(msg)

    try:
        with config_path.open("rb") as f:
            data = tomllib.load(f)
    except tomllib.TOMLDecodeError as e:
        msg = f"Invalid TOML in {config_path}: {e}"
        raise ConfigError(msg) from e
    except OSError as e:
        msg = f"Cannot read config file {config_path}: {e}"
        raise ConfigError(msg) from e

    return parse_config(data, source=str(config_path))


STARTER_CONFIG = """\
version = "1"
basePackage = "com.myapp"
sources = ["src/main/java"]

[failOn]
severity = "error"

# Controllers must not access repositories directly.
[[rules]]
id = "no-controller-to-repository"
type = "forbiddenDependency"
from = "com.myapp.controller..*"
to = "com.myapp.repository..*"
severity = "error"
message = "Controllers must not access repositories directly. Use the service layer instead."

# Service methods must be transactional.
[[rules]]
id = "service-methods-transactional"
type = "requireAnnotation"
in = "com.myapp.service..*"
target = "method"
annotation = "org.springframework.transaction.annotation.Transactional"
severity = "warning"
message = "Service methods should be annotated with @Transactional."

# Domain classes should be package-private.
[[rules]]
id = "domain-classes-package-private"
type = "visibility"
in = "com.myapp.domain..*"
target = "class"
mustBe = "package-private"
severity = "warning"
message = "Domain classes should be package-private to enforce encapsulation."

# Controllers -> services -> repositories -> domain.
[[rules]]
id = "layering"
type = "layering"
forbidCycles = true
severity = "error"
message = "Controllers -> Services -> Repositories -> Domain."

[[rules.layers]]
name = "controller"
packages = ["com.myapp.controller..*"]

[[rules.layers]]
name = "service"
packages = ["com.myapp.service..*"]

[[rules.layers]]
name = "repository"
packages = ["com.myapp.repository..*"]

[[rules.layers]]
name = "domain"
packages = ["com.myapp.domain..*"]

[[rules.allowedDependencies]]
from = "controller"
to = "service"

[[rules.allowedDependencies]]
from = "service"
to = "repository"

[[rules.allowedDependencies]]
from = "service"
to = "domain"

[[rules.allowedDependencies]]
from = "repository"
to = "domain"
"""


def write_starter_config(path: Path, *, force: bool = False) -> Path:
    """Write :data:`STARTER_CONFIG` to ``path`` (or into it, for a directory)."""
    config_path = resolve_config_path(Path(path))
    if config_path.exists() and not force:
        msg = f"Config file already exists: {config_path}"
        raise ConfigError(msg)
    config_path.parent.mkdir(parents=True, exist_ok=True)
    config_path.write_text(STARTER_CONFIG, encoding="utf-8")
    return config_path
