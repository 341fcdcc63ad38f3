"""Rule definitions and configuration for layerguard."""

from rules.config import (
    CONFIG_FILENAME,
    ArchConfig,
    ConfigError,
    FailOn,
    RuleParseResult,
    load_config,
    parse_config,
    parse_rules,
)
from rules.models import (
    AllowedDependency,
    ForbiddenDependencyRule,
    LayerDef,
    LayeringRule,
    RequireAnnotationRule,
    Rule,
    Target,
    VisibilityRule,
)
from rules.violations import Location, Severity, Violation, should_fail

__all__ = [
    "CONFIG_FILENAME",
    "AllowedDependency",
    "ArchConfig",
    "ConfigError",
    "FailOn",
    "ForbiddenDependencyRule",
    "LayerDef",
    "LayeringRule",
    "Location",
    "RequireAnnotationRule",
    "Rule",
    "RuleParseResult",
    "Severity",
    "Target",
    "Violation",
    "VisibilityRule",
    "load_config",
    "parse_config",
    "parse_rules",
    "should_fail",
]
