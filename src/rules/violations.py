"""Violation records produced by rule analyzers."""

from __future__ import annotations

from enum import Enum
from typing import TYPE_CHECKING

from pydantic import BaseModel, ConfigDict, Field

if TYPE_CHECKING:
    from collections.abc import Iterable


class Severity(str, Enum):
    """Severity of a violation, most severe first."""

    ERROR = "error"
    WARNING = "warning"
    INFO = "info"

    @property
    def ordinal(self) -> int:
        return _SEVERITY_ORDER.index(self)

    def is_at_least(self, threshold: Severity) -> bool:
        """Return True when this severity is as severe as ``threshold`` or more."""
        return self.ordinal <= threshold.ordinal

    @classmethod
    def parse(cls, value: str) -> Severity:
        """Parse a severity name case-insensitively.

        Raises:
            ValueError: if ``value`` names no severity.
        """
        try:
            return cls(value.strip().lower())
        except (AttributeError, ValueError):
            valid = ", ".join(s.value for s in cls)
            msg = f"Unknown severity '{value}'. Valid severities: {valid}"
            raise ValueError(msg) from None


_SEVERITY_ORDER = tuple(Severity)


class Location(BaseModel):
    """Where a violation was found."""

    model_config = ConfigDict(frozen=True)

    file: str | None = None
    line: int = 1
    column: int | None = None
    symbol: str = ""

    def __str__(self) -> str:
        file = self.file if self.file is not None else "<rule>"
        if self.column is not None and self.column > 0:
            return f"{file}:{self.line}:{self.column} ({self.symbol})"
        return f"{file}:{self.line} ({self.symbol})"


class Violation(BaseModel):
    """A single rule violation."""

    model_config = ConfigDict(frozen=True)

    rule_id: str
    message: str
    severity: Severity
    location: Location
    suggestion: str | None = Field(
        default=None, description="Optional hint on how to fix the violation"
    )

    def __str__(self) -> str:
        return (
            f"[{self.severity.value.upper()}] {self.rule_id}: "
            f"{self.message} at {self.location}"
        )


def should_fail(violations: Iterable[Violation], threshold: Severity) -> bool:
    """Return True when any violation is at least as severe as ``threshold``."""
    return any(v.severity.is_at_least(threshold) for v in violations)


__all__ = ["Location", "Severity", "Violation", "should_fail"]
