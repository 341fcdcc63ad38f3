"""Rule engine: import once, evaluate every rule, collect violations."""

from __future__ import annotations

import logging
from concurrent.futures import Future, ThreadPoolExecutor
from functools import partial
from typing import TYPE_CHECKING

from analysis import (
    analyze_forbidden_dependency,
    analyze_layering,
    analyze_require_annotation,
    analyze_visibility,
)
from parse.importer import import_sources
from rules.config import ConfigError
from rules.models import (
    ForbiddenDependencyRule,
    LayeringRule,
    RequireAnnotationRule,
    VisibilityRule,
)

if TYPE_CHECKING:
    from collections.abc import Iterable, Sequence
    from pathlib import Path

    from model.structural import StructuralModel
    from rules.config import ArchConfig
    from rules.models import Rule
    from rules.violations import Violation

logger = logging.getLogger(__name__)


def evaluate_rule(rule: Rule, model: StructuralModel) -> list[Violation]:
    """Dispatch one rule to its analyzer.

    Raises:
        ConfigError: if ``rule`` is not a known rule variant.
    """
    if isinstance(rule, ForbiddenDependencyRule):
        violations = analyze_forbidden_dependency(rule, model)
    elif isinstance(rule, RequireAnnotationRule):
        violations = analyze_require_annotation(rule, model)
    elif isinstance(rule, LayeringRule):
        violations = analyze_layering(rule, model)
    elif isinstance(rule, VisibilityRule):
        violations = analyze_visibility(rule, model)
    else:
        rule_id = getattr(rule, "id", None)
        rule_type = getattr(rule, "type", type(rule).__name__)
        msg = f"Unknown rule type '{rule_type}' (rule id: {rule_id!r})"
        raise ConfigError(msg)

    logger.debug(f"Rule {rule.id} ({rule.type}): {len(violations)} violations")
    return violations


class RuleEngine:
    """Runs configured rules against a set of Java sources.

    With ``workers`` greater than one, independent rules are evaluated on a
    thread pool. Results are always concatenated in rule declaration order,
    so the output is the same either way.
    """

    def __init__(self, workers: int = 1) -> None:
        if workers < 1:
            msg = "workers must be at least 1"
            raise ValueError(msg)
        self.workers = workers

    def evaluate(
        self, rules: Sequence[Rule], model: StructuralModel
    ) -> list[Violation]:
        """Evaluate ``rules`` against an already imported model."""
        if self.workers == 1 or len(rules) < 2:
            per_rule = [evaluate_rule(rule, model) for rule in rules]
        else:
            with ThreadPoolExecutor(
                max_workers=min(self.workers, len(rules)),
                thread_name_prefix="layerguard-rule",
            ) as executor:
                per_rule = list(executor.map(partial(evaluate_rule, model=model), rules))

        violations: list[Violation] = []
        for rule_violations in per_rule:
            violations.extend(rule_violations)
        return violations

    def run(
        self, config: ArchConfig, source_paths: Iterable[Path | str]
    ) -> list[Violation]:
        """Import ``source_paths`` once and evaluate every configured rule."""
        model = import_sources(source_paths)
        logger.debug(f"Evaluating {len(config.rules)} rules against {len(model)} classes")
        return self.evaluate(config.rules, model)

    def run_async(
        self, config: ArchConfig, source_paths: Iterable[Path | str]
    ) -> Future[list[Violation]]:
        """Run the whole pipeline on a background thread.

        The executor is shut down right after submission; its thread exits
        once the returned future completes.
        """
        paths = list(source_paths)
        executor = ThreadPoolExecutor(max_workers=1, thread_name_prefix="layerguard")
        try:
            return executor.submit(self.run, config, paths)
        finally:
            executor.shutdown(wait=False)


__all__ = ["RuleEngine", "evaluate_rule"]
